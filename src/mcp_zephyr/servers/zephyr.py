"""Zephyr Scale FastMCP server instance, tool and resource definitions."""

import json
import logging
from datetime import datetime, timezone
from typing import Annotated, Any, Literal

from fastmcp import Context, FastMCP
from pydantic import Field

from mcp_zephyr.models import ZephyrTestStep
from mcp_zephyr.servers.dependencies import get_zephyr_fetcher
from mcp_zephyr.utils.decorators import check_write_access
from mcp_zephyr.utils.gherkin import convert_to_gherkin

logger = logging.getLogger(__name__)

zephyr_mcp = FastMCP(
    name="Zephyr Scale MCP Service",
    instructions="Provides tools for managing Zephyr Scale test cases, test runs and folders.",
)


# Test Case Tools


@zephyr_mcp.tool(tags={"zephyr", "read"})
async def get_test_case(
    ctx: Context,
    test_case_key: Annotated[
        str, Field(description="Test case key (e.g., 'PROJ-T123')")
    ],
) -> str:
    """
    Get detailed information about a specific test case.

    Args:
        ctx: The FastMCP context.
        test_case_key: The test case key.

    Returns:
        JSON string representing the test case.

    Raises:
        ValueError: If the Zephyr client is not configured or available.
    """
    zephyr = await get_zephyr_fetcher(ctx)
    try:
        result = zephyr.get_test_case(test_case_key)
        return json.dumps(result, indent=2, default=str)
    except Exception as e:
        logger.error(f"Error retrieving test case {test_case_key}: {e}")
        raise


@zephyr_mcp.tool(tags={"zephyr", "write"})
@check_write_access
async def create_test_case(
    ctx: Context,
    project_key: Annotated[str, Field(description="Project key (e.g., 'PROJ')")],
    name: Annotated[str, Field(description="Test case name")],
    test_script_type: Annotated[
        Literal["STEP_BY_STEP", "PLAIN_TEXT", "BDD"] | None,
        Field(
            description=(
                "Type of test script. STEP_BY_STEP uses 'steps'; PLAIN_TEXT and BDD use "
                "'test_script_text'. BDD text in markdown (**Given** ...) is converted to Gherkin."
            )
        ),
    ] = None,
    steps: Annotated[
        list[ZephyrTestStep] | None,
        Field(
            description="Steps for STEP_BY_STEP (objects with description, testData, expectedResult, testCaseKey)"
        ),
    ] = None,
    test_script_text: Annotated[
        str | None,
        Field(description="Script text for PLAIN_TEXT or BDD test scripts"),
    ] = None,
    folder: Annotated[
        str | None, Field(description="Folder path (e.g., '/Releases/2025')")
    ] = None,
    status: Annotated[
        Literal["Draft", "Approved", "Deprecated"] | None,
        Field(description="Test case status"),
    ] = None,
    priority: Annotated[
        Literal["High", "Medium", "Low"] | None,
        Field(description="Test case priority"),
    ] = None,
    precondition: Annotated[str | None, Field(description="Test precondition")] = None,
    objective: Annotated[str | None, Field(description="Test objective")] = None,
    component: Annotated[str | None, Field(description="Component name")] = None,
    owner: Annotated[str | None, Field(description="Test case owner")] = None,
    estimated_time: Annotated[
        int | None, Field(description="Estimated time in milliseconds", ge=0)
    ] = None,
    labels: Annotated[list[str] | None, Field(description="Labels")] = None,
    issue_links: Annotated[
        list[str] | None, Field(description="Issue keys to link (e.g., ['PROJ-123'])")
    ] = None,
    custom_fields: Annotated[
        dict[str, Any] | None, Field(description="Custom fields object")
    ] = None,
    parameters: Annotated[
        dict[str, Any] | None,
        Field(description="Test data parameters (variables and entries)"),
    ] = None,
) -> str:
    """
    Create a new test case with STEP_BY_STEP, PLAIN_TEXT or BDD content.

    Returns:
        JSON string with the created test case key and script summary.

    Raises:
        ValueError: If in read-only mode or Zephyr client unavailable.
    """
    zephyr = await get_zephyr_fetcher(ctx)
    try:
        result = zephyr.create_test_case(
            project_key,
            name,
            script_type=test_script_type,
            steps=[step.to_api_dict() for step in steps] if steps else None,
            text=test_script_text,
            folder=folder,
            status=status,
            priority=priority,
            precondition=precondition,
            objective=objective,
            component=component,
            owner=owner,
            estimated_time=estimated_time,
            labels=labels,
            issue_links=issue_links,
            custom_fields=custom_fields,
            parameters=parameters,
        )
        return json.dumps(
            {"success": True, "message": f"Test case created: {result['key']}", **result},
            indent=2,
            default=str,
        )
    except Exception as e:
        logger.error(f"Error creating test case in project {project_key}: {e}")
        raise


@zephyr_mcp.tool(tags={"zephyr", "write"})
@check_write_access
async def create_test_case_with_bdd(
    ctx: Context,
    project_key: Annotated[str, Field(description="Project key (e.g., 'PROJ')")],
    name: Annotated[str, Field(description="Test case name")],
    bdd_content: Annotated[
        str, Field(description="BDD content in markdown format (**Given** ...)")
    ],
    folder: Annotated[str | None, Field(description="Folder path")] = None,
    priority: Annotated[
        Literal["High", "Medium", "Low"] | None,
        Field(description="Test case priority"),
    ] = None,
) -> str:
    """
    Create a new test case whose script is BDD content converted to Gherkin.

    Returns:
        JSON string with the created test case key.

    Raises:
        ValueError: If in read-only mode or Zephyr client unavailable.
    """
    zephyr = await get_zephyr_fetcher(ctx)
    try:
        result = zephyr.create_bdd_test_case(
            project_key, name, bdd_content, folder=folder, priority=priority
        )
        return json.dumps(
            {"success": True, "message": f"Test case created: {result['key']}", **result},
            indent=2,
            default=str,
        )
    except Exception as e:
        logger.error(f"Error creating BDD test case in project {project_key}: {e}")
        raise


@zephyr_mcp.tool(tags={"zephyr", "write"})
@check_write_access
async def update_test_case_bdd(
    ctx: Context,
    test_case_key: Annotated[str, Field(description="Test case key to update")],
    bdd_content: Annotated[
        str, Field(description="BDD content in markdown format (**Given** ...)")
    ],
) -> str:
    """
    Replace the script of an existing test case with BDD content.

    Returns:
        JSON string with the stored Gherkin text.

    Raises:
        ValueError: If in read-only mode or Zephyr client unavailable.
    """
    zephyr = await get_zephyr_fetcher(ctx)
    try:
        gherkin = zephyr.update_test_case_bdd(test_case_key, bdd_content)
        return json.dumps(
            {
                "success": True,
                "message": f"Updated {test_case_key} with BDD content",
                "testScript": {"type": "BDD", "text": gherkin},
            },
            indent=2,
            default=str,
        )
    except Exception as e:
        logger.error(f"Error updating BDD content of {test_case_key}: {e}")
        raise


@zephyr_mcp.tool(tags={"zephyr", "write"})
@check_write_access
async def delete_test_case(
    ctx: Context,
    test_case_key: Annotated[
        str, Field(description="Test case key to delete (e.g., 'PROJ-T123')")
    ],
) -> str:
    """
    Delete a specific test case.

    Returns:
        JSON string indicating success.

    Raises:
        ValueError: If in read-only mode or Zephyr client unavailable.
    """
    zephyr = await get_zephyr_fetcher(ctx)
    try:
        zephyr.delete_test_case(test_case_key)
        return json.dumps(
            {"success": True, "message": f"Test case {test_case_key} deleted"},
            indent=2,
        )
    except Exception as e:
        logger.error(f"Error deleting test case {test_case_key}: {e}")
        raise


@zephyr_mcp.tool(tags={"zephyr", "read"})
async def search_test_cases_by_folder(
    ctx: Context,
    project_key: Annotated[str, Field(description="Project key (e.g., 'PROJ')")],
    folder_path: Annotated[
        str, Field(description="Folder path to search in (e.g., '/2025 Releases/CRM')")
    ],
    max_results: Annotated[
        int, Field(description="Maximum number of results to return", ge=1)
    ] = 100,
) -> str:
    """
    Search for test cases in a specific folder.

    Returns:
        JSON string with the folder and the test case keys found.
    """
    zephyr = await get_zephyr_fetcher(ctx)
    try:
        keys = zephyr.search_test_cases_by_folder(project_key, folder_path, max_results)
        return json.dumps(
            {"folder": folder_path, "testCaseKeys": keys, "totalCount": len(keys)},
            indent=2,
        )
    except Exception as e:
        logger.error(f"Error searching test cases in folder {folder_path}: {e}")
        raise


# Folder Tools


@zephyr_mcp.tool(tags={"zephyr", "write"})
@check_write_access
async def create_folder(
    ctx: Context,
    project_key: Annotated[str, Field(description="Project key (e.g., 'PROJ')")],
    name: Annotated[str, Field(description="Folder name or absolute folder path")],
    parent_folder_path: Annotated[
        str | None, Field(description="Parent folder path")
    ] = None,
    folder_type: Annotated[
        Literal["TEST_CASE", "TEST_PLAN", "TEST_RUN"],
        Field(description="Type of folder"),
    ] = "TEST_CASE",
) -> str:
    """
    Create a new folder in Zephyr Scale.

    Returns:
        JSON string representing the created folder.

    Raises:
        ValueError: If in read-only mode or Zephyr client unavailable.
    """
    zephyr = await get_zephyr_fetcher(ctx)
    try:
        result = zephyr.create_folder(
            project_key, name, parent_folder_path, folder_type
        )
        return json.dumps({"success": True, "folder": result}, indent=2, default=str)
    except Exception as e:
        logger.error(f"Error creating folder {name} in project {project_key}: {e}")
        raise


# Test Run Tools


@zephyr_mcp.tool(tags={"zephyr", "write"})
@check_write_access
async def create_test_run(
    ctx: Context,
    project_key: Annotated[str, Field(description="Project key (e.g., 'PROJ')")],
    name: Annotated[str, Field(description="Test run name")],
    test_case_keys: Annotated[
        list[str] | None,
        Field(description="Test case keys to include in the test run"),
    ] = None,
    test_plan_key: Annotated[
        str | None, Field(description="Test plan key to link this test run to")
    ] = None,
    folder: Annotated[str | None, Field(description="Folder path")] = None,
    planned_start_date: Annotated[
        str | None, Field(description="Planned start date in ISO format")
    ] = None,
    planned_end_date: Annotated[
        str | None, Field(description="Planned end date in ISO format")
    ] = None,
    description: Annotated[str | None, Field(description="Test run description")] = None,
    owner: Annotated[str | None, Field(description="Test run owner")] = None,
    environment: Annotated[str | None, Field(description="Test environment")] = None,
    custom_fields: Annotated[
        dict[str, Any] | None, Field(description="Custom fields object")
    ] = None,
) -> str:
    """
    Create a new test run.

    Returns:
        JSON string with the created test run key.

    Raises:
        ValueError: If in read-only mode or Zephyr client unavailable.
    """
    zephyr = await get_zephyr_fetcher(ctx)
    try:
        result = zephyr.create_test_run(
            project_key,
            name,
            test_case_keys=test_case_keys,
            test_plan_key=test_plan_key,
            folder=folder,
            planned_start_date=planned_start_date,
            planned_end_date=planned_end_date,
            description=description,
            owner=owner,
            environment=environment,
            custom_fields=custom_fields,
        )
        return json.dumps(
            {"success": True, "message": f"Test run created: {result['key']}", **result},
            indent=2,
            default=str,
        )
    except Exception as e:
        logger.error(f"Error creating test run in project {project_key}: {e}")
        raise


@zephyr_mcp.tool(tags={"zephyr", "read"})
async def get_test_run(
    ctx: Context,
    test_run_key: Annotated[str, Field(description="Test run key (e.g., 'PROJ-C123')")],
) -> str:
    """
    Get detailed information about a specific test run.

    Returns:
        JSON string representing the test run.
    """
    zephyr = await get_zephyr_fetcher(ctx)
    try:
        result = zephyr.get_test_run(test_run_key)
        return json.dumps(result, indent=2, default=str)
    except Exception as e:
        logger.error(f"Error retrieving test run {test_run_key}: {e}")
        raise


@zephyr_mcp.tool(tags={"zephyr", "read"})
async def get_test_run_cases(
    ctx: Context,
    test_run_key: Annotated[str, Field(description="Test run key (e.g., 'PROJ-C123')")],
) -> str:
    """
    Get the test case keys, statuses and item ids of a test run.

    Returns:
        JSON string with parallel lists of keys, statuses and run ids.
    """
    zephyr = await get_zephyr_fetcher(ctx)
    try:
        result = zephyr.get_test_run_cases(test_run_key)
        return json.dumps({"testRunKey": test_run_key, **result}, indent=2, default=str)
    except Exception as e:
        logger.error(f"Error retrieving test cases of run {test_run_key}: {e}")
        raise


@zephyr_mcp.tool(tags={"zephyr", "read"})
async def get_test_execution(
    ctx: Context,
    execution_id: Annotated[
        str, Field(description="Test execution ID (e.g., '5805255')")
    ],
    test_run_keys: Annotated[
        list[str],
        Field(
            description="Test run keys to search in (e.g., ['PROJ-C152', 'PROJ-C161'])",
            min_length=1,
        ),
    ],
) -> str:
    """
    Find a test execution by id among the given test runs.

    Returns:
        JSON string with the matching test run key and execution.
    """
    zephyr = await get_zephyr_fetcher(ctx)
    try:
        result = zephyr.get_test_execution(execution_id, test_run_keys)
        return json.dumps(result, indent=2, default=str)
    except Exception as e:
        logger.error(f"Error retrieving test execution {execution_id}: {e}")
        raise


@zephyr_mcp.tool(tags={"zephyr", "write"})
@check_write_access
async def add_test_cases_to_run(
    ctx: Context,
    test_run_key: Annotated[str, Field(description="Test run key (e.g., 'PROJ-C161')")],
    test_case_keys: Annotated[
        list[str], Field(description="Test case keys to add to the test run")
    ],
) -> str:
    """
    Add test cases to an existing test run.

    Returns:
        JSON string summarizing the update.

    Raises:
        ValueError: If in read-only mode or Zephyr client unavailable.
    """
    zephyr = await get_zephyr_fetcher(ctx)
    try:
        result = zephyr.add_test_cases_to_run(test_run_key, test_case_keys)
        return json.dumps({"success": True, **result}, indent=2, default=str)
    except Exception as e:
        logger.error(f"Error adding test cases to run {test_run_key}: {e}")
        raise


# Resources

GHERKIN_EXAMPLE_INPUT = """**Given** a user with valid credentials
**When** the user attempts to log in
**Then** the user should be authenticated successfully"""


@zephyr_mcp.resource(
    "zephyr://testcase/{test_case_key}",
    name="Live Test Case Data",
    description="Fetch real test case data from Zephyr Scale (e.g., zephyr://testcase/PROJ-T123)",
    mime_type="application/json",
)
async def live_test_case(test_case_key: str, ctx: Context) -> str:
    zephyr = await get_zephyr_fetcher(ctx)
    try:
        data = zephyr.get_test_case(test_case_key)
    except Exception as e:
        logger.error(f"Error reading test case resource {test_case_key}: {e}")
        raise
    return json.dumps(
        {
            "description": f"Live test case data for {test_case_key} retrieved from Zephyr Scale",
            "testCaseKey": test_case_key,
            "retrievedAt": datetime.now(timezone.utc).isoformat(),
            "data": data,
        },
        indent=2,
        default=str,
    )


@zephyr_mcp.resource(
    "zephyr://examples/step-by-step-payload",
    name="Step-by-Step Test Case - Request Payload Example",
    description="Example payload for creating a step-by-step test case",
    mime_type="application/json",
)
def step_by_step_payload_example() -> str:
    return json.dumps(
        {
            "description": "Example payload for creating a step-by-step test case",
            "payload": {
                "projectKey": "PROJ",
                "name": "User Login Test",
                "status": "Draft",
                "priority": "High",
                "folder": "/ProjectName/Authentication",
                "testScript": {
                    "type": "STEP_BY_STEP",
                    "steps": [
                        {
                            "description": "Navigate to login page",
                            "testData": "URL: https://example.com/login",
                            "expectedResult": "Login page is displayed",
                        },
                        {
                            "description": "Enter valid credentials",
                            "testData": "Username: testuser@example.com",
                            "expectedResult": "Credentials are accepted",
                        },
                        {
                            "description": "Click login button",
                            "expectedResult": "User is redirected to the dashboard",
                        },
                    ],
                },
            },
        },
        indent=2,
    )


@zephyr_mcp.resource(
    "zephyr://examples/bdd-test-case-payload",
    name="BDD Test Case - Request Payload Example",
    description="Example payload sent to Zephyr Scale for BDD test case creation",
    mime_type="application/json",
)
def bdd_payload_example() -> str:
    return json.dumps(
        {
            "description": "Example payload sent to Zephyr Scale for BDD test case creation",
            "payload": {
                "projectKey": "PROJ",
                "name": "User Authentication",
                "status": "Draft",
                "priority": "High",
                "folder": "/ProjectName/Authentication",
                "issueLinks": ["PROJ-123"],
                "testScript": {
                    "type": "BDD",
                    "text": convert_to_gherkin(GHERKIN_EXAMPLE_INPUT),
                },
            },
        },
        indent=2,
    )


@zephyr_mcp.resource(
    "zephyr://examples/gherkin-conversion",
    name="BDD Content Conversion Example",
    description="Shows how BDD content is converted from markdown to Gherkin format",
    mime_type="text/plain",
)
def gherkin_conversion_example() -> str:
    return (
        "BDD Content Conversion Example\n\n"
        "INPUT (Markdown style):\n"
        f"{GHERKIN_EXAMPLE_INPUT}\n\n"
        "OUTPUT (Gherkin format with indentation):\n"
        f"{convert_to_gherkin(GHERKIN_EXAMPLE_INPUT)}\n\n"
        "SUPPORTED KEYWORDS: Given, When, Then, And (bold or bare)\n\n"
        "The converter removes the bold markers, keeps bare keyword lines, "
        "indents every step with four spaces and drops blank lines, '---' "
        "separators and any line that does not start with a keyword."
    )
