# =============================================================================
# tools/mcp_server.py  -  FastMCP Tool Server (registration of ALL tools)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Binds every adapter in tools/ to an MCP tool: a stable NAME the host
#   calls, a one-line DESCRIPTION the LLM reads, and an input SCHEMA that
#   FastMCP derives from the typed parameters below.  Registration happens
#   once, at import time, via the @mcp.tool decorators.
#
# HOW A CALL FLOWS:
#   1. The host calls a tool by name (e.g. "listTestCases")
#   2. FastMCP validates the arguments against the schema
#   3. The function below records a usage event (fire-and-forget)
#   4. It builds the typed args dataclass and awaits the adapter
#   5. The adapter's ToolResult is converted to MCP content:
#        success → list of TextContent blocks
#        error   → ToolError, which FastMCP reports with isError: true
#
# TOOL NAMES ARE PART OF THE CONTRACT:
#   Hosts and saved prompts refer to tools by name, so the camelCase names
#   below must not change.
# =============================================================================

import json
import logging
import sys
from typing import Annotated, Any, Optional

from fastmcp import Context, FastMCP
from fastmcp.exceptions import ToolError
from mcp.types import TextContent
from pydantic import Field

from core.instrumentation import track_mcp_event
from core.models import (
    CreateProjectOrFolderArgs,
    CreateTestCaseArgs,
    CreateTestRunArgs,
    IssueTracker,
    ListTestCasesArgs,
    TestCaseStep,
    ToolResult,
)
from tools.automate import get_network_failures
from tools.testmanagement import (
    create_project_or_folder_tool,
    create_test_case_tool,
    create_test_run_tool,
    list_test_cases_tool,
)

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR.  STDOUT carries the JSON-RPC stream of the stdio
# transport, and anything printed there would corrupt it.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for successful responses
#     - RED for error responses
#     - YELLOW for intermediate status messages
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Successful responses
_RED = "\033[31m"      # Error responses
_YELLOW = "\033[33m"   # Status/progress messages
_RESET = "\033[0m"     # Reset to default terminal color

logger = logging.getLogger("browserstack_mcp")


def configure_logging(level: str = "INFO") -> None:
    """Send all log output to stderr, never stdout."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [MCP] %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info("%s%s called with: %s%s", _CYAN, tool_name, param_str, _RESET)


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info("%s  → %s%s", _YELLOW, message, _RESET)


def _log_response(tool_name: str, result: ToolResult) -> ToolResult:
    """Log the envelope as compact JSON (GREEN or RED), then return it."""
    color = _RED if result.is_error else _GREEN
    logger.info(
        "%s  ← %s response: %s%s",
        color, tool_name, json.dumps(result.to_dict(), separators=(",", ":")), _RESET,
    )
    return result


# =============================================================================
# Envelope conversion & telemetry
# =============================================================================
def _to_content(tool_name: str, result: ToolResult) -> list[TextContent]:
    """Turn an adapter envelope into what FastMCP sends to the host."""
    _log_response(tool_name, result)
    if result.is_error:
        raise ToolError(result.text)
    return [TextContent(type="text", text=block.text) for block in result.content]


def _track(tool_name: str, ctx: Optional[Context]) -> None:
    """Record the invocation together with the connected client's identity."""
    client_info = None
    if ctx is not None:
        try:
            params = getattr(ctx.session, "client_params", None)
            client_info = getattr(params, "clientInfo", None)
        except Exception as exc:  # no active request context
            logger.debug("No client info for %s: %s", tool_name, exc)
    track_mcp_event(tool_name, client_info)


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
mcp = FastMCP("browserstack-mcp-server")


# =============================================================================
# TOOL 1: getNetworkFailures  (Automate)
# =============================================================================
@mcp.tool(
    name="getNetworkFailures",
    description="Use this tool to fetch failed network requests from a "
                "BrowserStack Automate session.",
)
async def get_network_failures_handler(
    sessionId: Annotated[str, Field(min_length=1, description="The Automate session ID.")],
    ctx: Context = None,
):
    """Fetch the failed network requests captured during an Automate session.

    WHEN TO CALL THIS: When a BrowserStack Automate test failed and the user
    wants to know whether a backend call, asset or third-party request broke.

    Args:
        sessionId: The hashed session ID shown on the Automate dashboard.

    Returns:
        One text block with the failure count and the failed requests as
        JSON (method, URL, status, error, server IP, timing).  Unknown
        session IDs and API errors come back as tool errors.
    """
    _log_request("getNetworkFailures", sessionId=sessionId)
    _track("getNetworkFailures", ctx)
    return _to_content("getNetworkFailures", await get_network_failures(sessionId))


# =============================================================================
# TOOL 2: createProjectOrFolder  (Test Management)
# =============================================================================
# Creates a project, a folder, or both in one call.
# =============================================================================
@mcp.tool(
    name="createProjectOrFolder",
    description="Create a project and/or folder in BrowserStack Test Management.",
)
async def create_project_or_folder_handler(
    project_name: Annotated[Optional[str], Field(
        description="Name of the project to create. Omit to add a folder to an "
                    "existing project.")] = None,
    project_description: Annotated[Optional[str], Field(
        description="Description of the new project.")] = None,
    project_identifier: Annotated[Optional[str], Field(
        description="Identifier of an existing project (e.g. PR-12) to create "
                    "the folder in.")] = None,
    folder_name: Annotated[Optional[str], Field(
        description="Name of the folder to create.")] = None,
    folder_description: Annotated[Optional[str], Field(
        description="Description of the new folder.")] = None,
    parent_id: Annotated[Optional[int], Field(
        description="ID of the parent folder, for nested folders.")] = None,
    ctx: Context = None,
):
    """Create a Test Management project, a folder, or a project plus folder.

    WHEN TO CALL THIS: Before createTestCase, when the user has no project
    or folder to put test cases in yet.  Pass project_name for a new
    project, or project_identifier to add a folder to an existing one.

    Returns:
        The new project's identifier, or the new folder's ID and name.
        The folder ID is what createTestCase expects as folder_id.
    """
    args = CreateProjectOrFolderArgs(
        project_name=project_name,
        project_description=project_description,
        project_identifier=project_identifier,
        folder_name=folder_name,
        folder_description=folder_description,
        parent_id=parent_id,
    )
    _log_request("createProjectOrFolder", **vars(args))
    _track("createProjectOrFolder", ctx)
    return _to_content("createProjectOrFolder", await create_project_or_folder_tool(args))


# =============================================================================
# TOOL 3: createTestCase  (Test Management)
# =============================================================================
@mcp.tool(
    name="createTestCase",
    description="Use this tool to create a test case in BrowserStack Test Management.",
)
async def create_test_case_handler(
    project_identifier: Annotated[str, Field(
        min_length=1, description="Identifier of the project (e.g. PR-12).")],
    folder_id: Annotated[str, Field(
        min_length=1, description="ID of the folder the test case goes into.")],
    name: Annotated[str, Field(min_length=1, description="Title of the test case.")],
    description: Annotated[Optional[str], Field(
        description="Brief description of the test case.")] = None,
    owner: Annotated[Optional[str], Field(
        description="Email of the test case owner.")] = None,
    preconditions: Annotated[Optional[str], Field(
        description="Conditions that must hold before running the test.")] = None,
    test_case_steps: Annotated[Optional[list[TestCaseStep]], Field(
        description="Ordered steps, each with an action and expected result.")] = None,
    issues: Annotated[Optional[list[str]], Field(
        description="Linked issue keys, e.g. ['JIRA-1'].")] = None,
    issue_tracker: Annotated[Optional[IssueTracker], Field(
        description="Tracker the linked issues belong to.")] = None,
    tags: Annotated[Optional[list[str]], Field(
        description="Tags for filtering, e.g. ['smoke'].")] = None,
    custom_fields: Annotated[Optional[dict[str, Any]], Field(
        description="Custom field values keyed by field name.")] = None,
    ctx: Context = None,
):
    """Create one test case inside a Test Management folder.

    WHEN TO CALL THIS: When the user describes a scenario to record as a
    manual test case.  Blank optional fields are dropped before sending.

    Args:
        project_identifier: Project the test case belongs to (e.g. "PR-12").
        folder_id: Folder ID returned by createProjectOrFolder.
        name: Test case title.
        test_case_steps: Ordered {step, result} pairs.

    Returns:
        A confirmation line with the new test case ID, followed by the
        created test case as JSON.
    """
    args = CreateTestCaseArgs(
        project_identifier=project_identifier,
        folder_id=folder_id,
        name=name,
        description=description,
        owner=owner,
        preconditions=preconditions,
        test_case_steps=list(test_case_steps or []),
        issues=issues,
        issue_tracker=issue_tracker,
        tags=tags,
        custom_fields=custom_fields,
    )
    _log_request("createTestCase", project_identifier=project_identifier,
                 folder_id=folder_id, name=name)
    _track("createTestCase", ctx)
    return _to_content("createTestCase", await create_test_case_tool(args))


# =============================================================================
# TOOL 4: listTestCases  (Test Management)
# =============================================================================
@mcp.tool(
    name="listTestCases",
    description="List test cases in a project with optional filters "
                "(status, priority, custom fields, etc.)",
)
async def list_test_cases_handler(
    project_identifier: Annotated[str, Field(
        min_length=1, description="Identifier of the project (e.g. PR-12).")],
    case_type: Annotated[Optional[str], Field(
        description="Comma-separated case types, e.g. 'functional,regression'.")] = None,
    priority: Annotated[Optional[str], Field(
        description="Comma-separated priorities, e.g. 'high,medium'.")] = None,
    status: Annotated[Optional[str], Field(
        description="Test case status, e.g. 'active'.")] = None,
    tags: Annotated[Optional[str], Field(
        description="Comma-separated tags.")] = None,
    custom_fields: Annotated[Optional[dict[str, str]], Field(
        description="Custom field filters keyed by field name.")] = None,
    p: Annotated[Optional[int], Field(ge=1, description="Page number.")] = None,
    ctx: Context = None,
):
    """List the test cases of a project, optionally filtered.

    WHEN TO CALL THIS: To find existing test cases, for example to pick
    the identifiers that go into createTestRun.

    Returns:
        "Found N test case(s):" with one line per case
        (identifier, title, type, status, priority), then the raw list as
        JSON.  Results are paginated; pass p for later pages.
    """
    args = ListTestCasesArgs(
        project_identifier=project_identifier,
        case_type=case_type,
        priority=priority,
        status=status,
        tags=tags,
        custom_fields=custom_fields,
        p=p,
    )
    _log_request("listTestCases", **vars(args))
    _track("listTestCases", ctx)
    return _to_content("listTestCases", await list_test_cases_tool(args))


# =============================================================================
# TOOL 5: createTestRun  (Test Management)
# =============================================================================
@mcp.tool(
    name="createTestRun",
    description="Create a test run in BrowserStack Test Management.",
)
async def create_test_run_handler(
    project_identifier: Annotated[str, Field(
        min_length=1, description="Identifier of the project (e.g. PR-12).")],
    run_name: Annotated[str, Field(min_length=1, description="Name of the test run.")],
    test_cases: Annotated[Optional[list[str]], Field(
        description="Identifiers of the test cases to include, e.g. ['TC-001'].")] = None,
    description: Annotated[Optional[str], Field(
        description="Description of the test run.")] = None,
    environment: Annotated[Optional[str], Field(
        description="Environment the run targets, e.g. 'chrome'.")] = None,
    metadata: Annotated[Optional[dict[str, Any]], Field(
        description="Free-form key/value metadata for the run.")] = None,
    ctx: Context = None,
):
    """Create a test run from existing test cases.

    Args:
        project_identifier: Project the run belongs to (e.g. "PR-12").
        run_name: Display name of the run.
        test_cases: Test case identifiers to include, e.g. ["TC-001"].

    Returns:
        A confirmation line with the new run's ID and name, followed by
        the created run as JSON.
    """
    args = CreateTestRunArgs(
        project_identifier=project_identifier,
        run_name=run_name,
        test_cases=list(test_cases or []),
        description=description,
        environment=environment,
        metadata=metadata,
    )
    _log_request("createTestRun", **vars(args))
    _track("createTestRun", ctx)
    _log_status(f"{len(args.test_cases)} test case(s) in run")
    return _to_content("createTestRun", await create_test_run_tool(args))


# =============================================================================
# Server entry point
# =============================================================================
# When run directly (python -m tools.mcp_server), start the MCP server.
# The host connects to this server via stdio transport.
# =============================================================================
if __name__ == "__main__":
    configure_logging()
    mcp.run()
