"""Mock data for Zephyr Scale API responses used in unit tests."""

MOCK_ZEPHYR_TEST_CASE_RESPONSE = {
    "key": "PROJ-T123",
    "name": "User Login Test",
    "projectKey": "PROJ",
    "status": "Draft",
    "priority": "High",
    "folder": "/Authentication",
    "labels": ["smoke"],
    "testScript": {
        "type": "STEP_BY_STEP",
        "steps": [
            {
                "index": 0,
                "description": "Navigate to login page",
                "testData": "URL: https://example.com/login",
                "expectedResult": "Login page is displayed",
            },
            {
                "index": 1,
                "description": "Click login button",
                "expectedResult": "User is redirected to the dashboard",
            },
        ],
    },
}

MOCK_ZEPHYR_BDD_TEST_CASE_RESPONSE = {
    "key": "PROJ-T124",
    "name": "User Authentication",
    "projectKey": "PROJ",
    "testScript": {
        "type": "BDD",
        "text": "    Given a user with valid credentials\n    When the user logs in",
    },
}

MOCK_ZEPHYR_CREATE_TEST_CASE_RESPONSE = {"key": "PROJ-T200"}

MOCK_ZEPHYR_SEARCH_RESPONSE = [
    {"key": "PROJ-T1", "name": "First"},
    {"key": "PROJ-T2", "name": "Second"},
    {"name": "Missing key"},
]

MOCK_ZEPHYR_SEARCH_PAGED_RESPONSE = {
    "startAt": 0,
    "maxResults": 100,
    "values": [{"key": "PROJ-T7"}, {"key": "PROJ-T8"}],
}

MOCK_ZEPHYR_FOLDER_RESPONSE = {"id": 501}

MOCK_ZEPHYR_CREATE_TEST_RUN_RESPONSE = {"key": "PROJ-C300"}

MOCK_ZEPHYR_TEST_RUN_RESPONSE = {
    "key": "PROJ-C161",
    "name": "Regression 2025.1",
    "projectKey": "PROJ",
    "status": "In Progress",
    "createdOn": "2025-01-10T09:00:00.000Z",
    "createdBy": "jdoe",
    "testCaseCount": 2,
    "issueCount": 0,
    "executionSummary": {"Pass": 1, "Not Executed": 1},
    "folder": "/Regression",
    "items": [
        {"id": 9001, "testCaseKey": "PROJ-T1", "status": "Pass"},
        {"id": 9002, "testCaseKey": "PROJ-T2", "status": "Not Executed"},
    ],
}

MOCK_ZEPHYR_TEST_RESULTS_RESPONSE = [
    {
        "id": 5805255,
        "testCaseKey": "PROJ-T1",
        "status": "Pass",
        "executedBy": "jdoe",
        "executionTime": 120000,
    },
    {
        "id": 5805256,
        "testCaseKey": "PROJ-T2",
        "status": "Not Executed",
    },
]
