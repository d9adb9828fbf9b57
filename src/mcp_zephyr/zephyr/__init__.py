"""Zephyr Scale module for MCP Zephyr integration."""

from .client import ZephyrClient
from .config import ZephyrConfig
from .folders import FoldersMixin
from .profile import (
    BackendProfile,
    DeploymentType,
    build_profile,
    detect_deployment_type,
)
from .testcases import TestCasesMixin
from .testruns import TestRunsMixin


class ZephyrFetcher(
    TestCasesMixin,
    TestRunsMixin,
    FoldersMixin,
):
    """
    The main Zephyr Scale client class providing access to all operations.

    This class inherits from multiple mixins that provide specific functionality:
    - TestCasesMixin: Test case CRUD, BDD scripts and folder search
    - TestRunsMixin: Test runs, their cases and executions
    - FoldersMixin: Folder creation
    """

    pass


__all__ = [
    "BackendProfile",
    "DeploymentType",
    "FoldersMixin",
    "TestCasesMixin",
    "TestRunsMixin",
    "ZephyrClient",
    "ZephyrConfig",
    "ZephyrFetcher",
    "build_profile",
    "detect_deployment_type",
]
