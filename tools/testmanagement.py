# =============================================================================
# tools/testmanagement.py  -  Adapters for BrowserStack Test Management
# =============================================================================
#
# Four adapters, one shape:
#
#   1. (createTestCase only) sanitize the arguments
#   2. await exactly one core/testmanagement.py collaborator
#   3. success → return the collaborator's envelope untouched
#      failure → "<prefix><message>. Please open an issue on GitHub if the
#                 problem persists", flagged isError
#
# <message> is the exception's message, or "Unknown error" when it has none.
# The rule lives in _failure() so all four adapters apply it identically.
# =============================================================================

import logging

from core.models import (
    CreateProjectOrFolderArgs,
    CreateTestCaseArgs,
    CreateTestRunArgs,
    ListTestCasesArgs,
    ToolResult,
)
from core.results import error_message, error_result
from core.testmanagement import (
    create_project_or_folder,
    create_test_case,
    create_test_run,
    list_test_cases,
    sanitize_args,
)

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "Unknown error"
ISSUE_HINT = ". Please open an issue on GitHub if the problem persists"


def _failure(prefix: str, exc: BaseException) -> ToolResult:
    message = error_message(exc, UNKNOWN_ERROR)
    logger.error("%s%s", prefix, message)
    return error_result(f"{prefix}{message}{ISSUE_HINT}")


async def create_project_or_folder_tool(args: CreateProjectOrFolderArgs) -> ToolResult:
    """Create a project and/or folder in BrowserStack Test Management."""
    try:
        return await create_project_or_folder(args)
    except Exception as exc:
        return _failure("Failed to create project/folder: ", exc)


async def create_test_case_tool(args: CreateTestCaseArgs) -> ToolResult:
    """Create a test case in BrowserStack Test Management."""
    cleaned_args = sanitize_args(args)
    try:
        return await create_test_case(cleaned_args)
    except Exception as exc:
        return _failure("Failed to create test case: ", exc)


async def list_test_cases_tool(args: ListTestCasesArgs) -> ToolResult:
    """List test cases in a project with optional filters."""
    try:
        return await list_test_cases(args)
    except Exception as exc:
        return _failure("Failed to list test cases: ", exc)


async def create_test_run_tool(args: CreateTestRunArgs) -> ToolResult:
    """Create a test run in BrowserStack Test Management."""
    try:
        return await create_test_run(args)
    except Exception as exc:
        return _failure("Failed to create test run: ", exc)
