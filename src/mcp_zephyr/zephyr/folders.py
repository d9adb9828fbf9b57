"""Folder mixin for Zephyr Scale API interactions."""

import logging
from typing import Any

from ..utils.decorators import handle_zephyr_api_errors
from .client import ZephyrClient
from .constants import FOLDER_TYPES

logger = logging.getLogger(__name__)


def build_folder_path(name: str, parent_folder_path: str | None = None) -> str:
    """Turn a folder name into the absolute path Zephyr expects.

    A name that already starts with "/" is used as is; otherwise it is
    placed under the parent path, or at the root.
    """
    if name.startswith("/"):
        return name
    if parent_folder_path:
        parent = parent_folder_path.rstrip("/")
        if not parent.startswith("/"):
            parent = f"/{parent}"
        return f"{parent}/{name}"
    return f"/{name}"


class FoldersMixin(ZephyrClient):
    """Mixin for Zephyr folder operations."""

    @handle_zephyr_api_errors("create folder")
    def create_folder(
        self,
        project_key: str,
        name: str,
        parent_folder_path: str | None = None,
        folder_type: str = "TEST_CASE",
    ) -> dict[str, Any]:
        """
        Create a folder.

        Args:
            project_key: Project key
            name: Folder name or absolute path
            parent_folder_path: Optional parent folder path
            folder_type: One of TEST_CASE, TEST_PLAN, TEST_RUN

        Returns:
            The created folder as returned by the API

        Raises:
            ValueError: If the folder type is not supported
        """
        if folder_type not in FOLDER_TYPES:
            msg = f"Unsupported folder type {folder_type!r}; expected one of {', '.join(FOLDER_TYPES)}"
            raise ValueError(msg)

        payload = {
            "projectKey": project_key,
            "name": build_folder_path(name, parent_folder_path),
            "type": folder_type,
        }
        response = self.zephyr.post(self._path("folder"), data=payload) or {}
        logger.info(f"Created folder {payload['name']} in project {project_key}")
        return response
