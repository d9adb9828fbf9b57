"""Test case mixin for Zephyr Scale API interactions."""

import logging
from typing import Any

from ..utils.decorators import handle_zephyr_api_errors
from ..utils.gherkin import convert_to_gherkin
from .client import ZephyrClient
from .constants import DEFAULT_SEARCH_MAX_RESULTS, SCRIPT_TYPES

logger = logging.getLogger(__name__)


def _build_steps(steps: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Keep only the populated fields of each step."""
    fields = ("description", "testData", "expectedResult", "testCaseKey")
    return [{name: step[name] for name in fields if step.get(name)} for step in steps]


def build_test_script(
    script_type: str,
    steps: list[dict[str, Any]] | None = None,
    text: str | None = None,
) -> dict[str, Any]:
    """Build the ``testScript`` payload for a test case.

    BDD text is converted to Gherkin; when nothing converts, the raw text is
    sent unchanged.

    Raises:
        ValueError: If the script type is not supported.
    """
    if script_type not in SCRIPT_TYPES:
        msg = f"Unsupported test script type {script_type!r}; expected one of {', '.join(SCRIPT_TYPES)}"
        raise ValueError(msg)

    script: dict[str, Any] = {"type": script_type}
    if script_type == "STEP_BY_STEP":
        if steps:
            script["steps"] = _build_steps(steps)
    elif text:
        if script_type == "BDD":
            script["text"] = convert_to_gherkin(text) or text
        else:
            script["text"] = text
    return script


class TestCasesMixin(ZephyrClient):
    """Mixin for Zephyr test case operations."""

    __test__ = False

    @handle_zephyr_api_errors(
        "get test case", not_found="Test case {test_case_key} not found"
    )
    def get_test_case(self, test_case_key: str) -> dict[str, Any]:
        """
        Get a test case by key.

        Args:
            test_case_key: Test case key (e.g. PROJ-T123)

        Returns:
            The test case as returned by the API
        """
        return self.zephyr.get(self._path("testcase_item", key=test_case_key))

    @handle_zephyr_api_errors("create test case")
    def create_test_case(
        self,
        project_key: str,
        name: str,
        *,
        script_type: str | None = None,
        steps: list[dict[str, Any]] | None = None,
        text: str | None = None,
        folder: str | None = None,
        status: str | None = None,
        priority: str | None = None,
        precondition: str | None = None,
        objective: str | None = None,
        component: str | None = None,
        owner: str | None = None,
        estimated_time: int | None = None,
        labels: list[str] | None = None,
        issue_links: list[str] | None = None,
        custom_fields: dict[str, Any] | None = None,
        parameters: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Create a test case.

        Only the optional fields that are supplied end up in the payload.

        Returns:
            Summary with the created key and script details
        """
        payload: dict[str, Any] = {"projectKey": project_key, "name": name}
        optional_fields = {
            "folder": folder,
            "status": status,
            "priority": priority,
            "precondition": precondition,
            "objective": objective,
            "component": component,
            "owner": owner,
            "estimatedTime": estimated_time,
            "labels": labels,
            "issueLinks": issue_links,
            "customFields": custom_fields,
            "parameters": parameters,
        }
        payload.update({k: v for k, v in optional_fields.items() if v})

        if script_type:
            payload["testScript"] = build_test_script(script_type, steps, text)

        response = self.zephyr.post(self._path("testcase"), data=payload) or {}
        test_case_key = response.get("key", "Unknown")
        logger.info(f"Created test case {test_case_key} in project {project_key}")

        summary: dict[str, Any] = {"key": test_case_key, "type": script_type or "none"}
        if script_type == "STEP_BY_STEP":
            summary["steps"] = len(payload["testScript"].get("steps", []))
        elif script_type:
            summary["hasText"] = "text" in payload["testScript"]
        return summary

    def create_bdd_test_case(
        self,
        project_key: str,
        name: str,
        bdd_content: str,
        folder: str | None = None,
        priority: str | None = None,
    ) -> dict[str, Any]:
        """Create a test case whose script is BDD content."""
        return self.create_test_case(
            project_key,
            name,
            script_type="BDD",
            text=bdd_content,
            folder=folder,
            priority=priority,
        )

    @handle_zephyr_api_errors(
        "update test case BDD", not_found="Test case {test_case_key} not found"
    )
    def update_test_case_bdd(self, test_case_key: str, bdd_content: str) -> str:
        """
        Replace the script of an existing test case with BDD content.

        Returns:
            The Gherkin text that was stored
        """
        # Fails with 404 before anything is written when the key is wrong
        self.zephyr.get(self._path("testcase_item", key=test_case_key))

        gherkin = convert_to_gherkin(bdd_content)
        payload = {"testScript": {"type": "BDD", "text": gherkin}}
        self.zephyr.put(self._path("testcase_item", key=test_case_key), data=payload)
        logger.info(f"Updated {test_case_key} with BDD content")
        return gherkin

    @handle_zephyr_api_errors(
        "delete test case", not_found="Test case {test_case_key} not found"
    )
    def delete_test_case(self, test_case_key: str) -> None:
        self.zephyr.delete(self._path("testcase_item", key=test_case_key))
        logger.info(f"Deleted test case {test_case_key}")

    @handle_zephyr_api_errors(
        "search test cases by folder",
        not_found='Folder "{folder_path}" not found or no test cases found',
    )
    def search_test_cases_by_folder(
        self,
        project_key: str,
        folder_path: str,
        max_results: int = DEFAULT_SEARCH_MAX_RESULTS,
    ) -> list[str]:
        """
        Find the keys of the test cases stored in a folder.

        Args:
            project_key: Project key
            folder_path: Folder path (e.g. /Releases/2025)
            max_results: Maximum number of results to return

        Returns:
            List of test case keys
        """
        params = {
            "query": f'projectKey = "{project_key}" AND folder = "{folder_path}"',
            "maxResults": max_results,
        }
        response = self.zephyr.get(self._path("testcase_search"), params=params)

        if isinstance(response, list):
            test_cases = response
        elif isinstance(response, dict):
            test_cases = response.get("values", [])
        else:
            test_cases = []
        return [tc["key"] for tc in test_cases if isinstance(tc, dict) and "key" in tc]
