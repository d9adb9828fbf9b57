"""Test run mixin for Zephyr Scale API interactions."""

import logging
from typing import Any

from requests.exceptions import HTTPError, RequestException

from ..exceptions import ZephyrApiError
from ..utils.decorators import handle_zephyr_api_errors
from .client import ZephyrClient
from .constants import TEST_RUN_READ_ONLY_FIELDS

logger = logging.getLogger(__name__)


class TestRunsMixin(ZephyrClient):
    """Mixin for Zephyr test run operations."""

    __test__ = False

    @handle_zephyr_api_errors(
        "get test run", not_found="Test run {test_run_key} not found"
    )
    def get_test_run(self, test_run_key: str) -> dict[str, Any]:
        """
        Get a test run by key.

        Args:
            test_run_key: Test run key (e.g. PROJ-C123)

        Returns:
            The test run as returned by the API
        """
        return self.zephyr.get(self._path("testrun_item", key=test_run_key)) or {}

    @handle_zephyr_api_errors(
        "get test run cases", not_found="Test run {test_run_key} not found"
    )
    def get_test_run_cases(self, test_run_key: str) -> dict[str, list[Any]]:
        """
        List the test cases scheduled in a test run.

        Returns:
            Dictionary with parallel lists of test case keys, statuses and item ids
        """
        test_run = self.zephyr.get(self._path("testrun_item", key=test_run_key)) or {}
        items = test_run.get("items") or []
        return {
            "testCaseKeys": [item.get("testCaseKey") for item in items],
            "statuses": [item.get("status") for item in items],
            "runIds": [item.get("id") for item in items],
        }

    @handle_zephyr_api_errors("create test run")
    def create_test_run(
        self,
        project_key: str,
        name: str,
        *,
        test_case_keys: list[str] | None = None,
        test_plan_key: str | None = None,
        folder: str | None = None,
        planned_start_date: str | None = None,
        planned_end_date: str | None = None,
        description: str | None = None,
        owner: str | None = None,
        environment: str | None = None,
        custom_fields: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Create a test run, optionally pre-populated with test cases.

        Returns:
            Summary with the created key
        """
        payload: dict[str, Any] = {"projectKey": project_key, "name": name}
        if test_case_keys:
            payload["items"] = [{"testCaseKey": key} for key in test_case_keys]
        optional_fields = {
            "folder": folder,
            "plannedStartDate": planned_start_date,
            "plannedEndDate": planned_end_date,
            "description": description,
            "owner": owner,
            "environment": environment,
            "customFields": custom_fields,
            "testPlanKey": test_plan_key,
        }
        payload.update({k: v for k, v in optional_fields.items() if v})

        response = self.zephyr.post(self._path("testrun"), data=payload) or {}
        test_run_key = response.get("key", "Unknown")
        logger.info(f"Created test run {test_run_key} in project {project_key}")
        return {
            "key": test_run_key,
            "name": name,
            "testCaseCount": len(test_case_keys or []),
            "environment": environment or "Not specified",
        }

    def get_test_execution(
        self, execution_id: str, test_run_keys: list[str]
    ) -> dict[str, Any]:
        """
        Find a test execution (test result) by id among the given test runs.

        Runs that fail to load are recorded and skipped.

        Args:
            execution_id: Test execution id (e.g. 5805255)
            test_run_keys: Test runs to search

        Returns:
            Dictionary with the matching run key and execution

        Raises:
            ValueError: If no test run keys are given
            ZephyrApiError: If the execution is not found in any run
        """
        if not test_run_keys:
            raise ValueError(
                "test_run_keys is required. Provide the test run keys to search in "
                '(e.g. ["PROJ-C152", "PROJ-C161"]). Use get_test_run_cases to find test runs.'
            )

        searched: list[dict[str, Any]] = []
        for test_run_key in test_run_keys:
            try:
                response = self.zephyr.get(
                    self._path("testrun_results", key=test_run_key)
                )
            except (HTTPError, RequestException) as e:
                logger.warning(f"Could not load results of test run {test_run_key}: {e}")
                searched.append({"testRunKey": test_run_key, "error": str(e)})
                continue

            if not response:
                searched.append({"testRunKey": test_run_key, "executionCount": 0})
                continue

            results = response if isinstance(response, list) else [response]
            for result in results:
                if (
                    isinstance(result, dict)
                    and result.get("id") is not None
                    and str(result["id"]) == str(execution_id)
                ):
                    return {"testRunKey": test_run_key, "execution": result}

            searched.append(
                {
                    "testRunKey": test_run_key,
                    "executionCount": len(results),
                    "executionIds": [
                        r.get("id") for r in results if isinstance(r, dict)
                    ][:5],
                }
            )

        msg = (
            f"Failed to get test execution: Test execution {execution_id} not found "
            f"in any of the {len(test_run_keys)} test runs searched. "
            f"Search results: {searched}"
        )
        raise ZephyrApiError(msg, status_code=404)

    @handle_zephyr_api_errors(
        "add test cases to run", not_found="Test run {test_run_key} not found"
    )
    def add_test_cases_to_run(
        self, test_run_key: str, test_case_keys: list[str]
    ) -> dict[str, Any]:
        """
        Add test cases to an existing test run, skipping those already in it.

        The run is updated with a minimal PUT first. When the backend rejects
        it, the cases are POSTed to the run's test case endpoint, and finally
        the full run is PUT back without its read-only fields.

        Returns:
            Summary including the update method that succeeded
        """
        run_path = self._path("testrun_item", key=test_run_key)
        current_run = self.zephyr.get(run_path) or {}

        existing_items = current_run.get("items") or []
        existing_keys = {item.get("testCaseKey") for item in existing_items}
        new_items = []
        for key in test_case_keys:
            if key not in existing_keys:
                new_items.append({"testCaseKey": key})
                existing_keys.add(key)
        updated_items = existing_items + new_items

        minimal_payload = {
            "name": current_run.get("name"),
            "projectKey": current_run.get("projectKey"),
            "items": updated_items,
        }
        try:
            self.zephyr.put(run_path, data=minimal_payload)
            method = "PUT-minimal"
        except (HTTPError, RequestException) as put_error:
            logger.warning(
                f"Minimal PUT of test run {test_run_key} failed ({put_error}), "
                "trying POST to test cases endpoint"
            )
            try:
                self.zephyr.post(
                    self._path("testrun_testcases", key=test_run_key),
                    data=[{"testCaseKey": key} for key in test_case_keys],
                )
                method = "POST-testcases"
            except (HTTPError, RequestException) as post_error:
                logger.warning(
                    f"POST of test cases to {test_run_key} failed ({post_error}), "
                    "trying full PUT"
                )
                full_payload = {
                    k: v
                    for k, v in current_run.items()
                    if k not in TEST_RUN_READ_ONLY_FIELDS
                }
                full_payload["items"] = updated_items
                self.zephyr.put(run_path, data=full_payload)
                method = "PUT-full"

        logger.info(
            f"Added {len(new_items)} test cases to {test_run_key} using {method}"
        )
        return {
            "testRunKey": test_run_key,
            "addedTestCases": test_case_keys,
            "uniqueNewCases": len(new_items),
            "totalTestCases": len(updated_items),
            "method": method,
        }
