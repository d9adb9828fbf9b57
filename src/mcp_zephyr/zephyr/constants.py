"""Zephyr Scale API constants and default values."""

# Zephyr Scale Cloud always lives on SmartBear's API host, whatever Jira site is configured
CLOUD_API_BASE = "https://api.zephyrscale.smartbear.com/v2"

# Zephyr Scale Server/Data Center REST namespace on the Jira instance
DATA_CENTER_API_ROOT = "rest/atm/1.0"

DATA_CENTER_ENDPOINTS = {
    "testcase": f"{DATA_CENTER_API_ROOT}/testcase",
    "testcase_item": f"{DATA_CENTER_API_ROOT}/testcase/{{key}}",
    "testcase_search": f"{DATA_CENTER_API_ROOT}/testcase/search",
    "testrun": f"{DATA_CENTER_API_ROOT}/testrun",
    "testrun_item": f"{DATA_CENTER_API_ROOT}/testrun/{{key}}",
    "testrun_results": f"{DATA_CENTER_API_ROOT}/testrun/{{key}}/testresults",
    "testrun_testcases": f"{DATA_CENTER_API_ROOT}/testrun/{{key}}/testcases",
    "folder": f"{DATA_CENTER_API_ROOT}/folder",
}

CLOUD_ENDPOINTS = {
    "testcase": "testcases",
    "testcase_item": "testcases/{key}",
    "testcase_search": "testcases/search",
    "testrun": "testruns",
    "testrun_item": "testruns/{key}",
    "testrun_results": "testruns/{key}/testresults",
    "testrun_testcases": "testruns/{key}/testcases",
    "folder": "folders",
}

# Test script types accepted by the testScript field
SCRIPT_TYPES = ("STEP_BY_STEP", "PLAIN_TEXT", "BDD")

FOLDER_TYPES = ("TEST_CASE", "TEST_PLAN", "TEST_RUN")

DEFAULT_SEARCH_MAX_RESULTS = 100

DEFAULT_TIMEOUT_SECONDS = 75

# Fields the test run PUT endpoint rejects when echoed back
TEST_RUN_READ_ONLY_FIELDS = (
    "key",
    "createdOn",
    "createdBy",
    "executionTime",
    "estimatedTime",
    "testCaseCount",
    "issueCount",
    "executionSummary",
    "status",
)
