# =============================================================================
# core/testmanagement.py  -  BrowserStack Test Management API calls
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   One async function per Test Management operation.  Each one:
#     1. Builds the request payload from a typed args dataclass
#     2. Calls the v2 REST API (BROWSERSTACK_TEST_MANAGEMENT_API_URL)
#     3. Checks the {"success": ...} wrapper the API puts on every body
#     4. Returns a ready-to-send ToolResult (text summary + raw JSON block)
#
# FAILURES RAISE.
#   HTTP errors, "success": false bodies and missing required arguments all
#   raise BrowserStackAPIError.  Turning those into error envelopes is the
#   job of tools/testmanagement.py, which also adds the "Failed to ..."
#   prefix; messages raised here never carry it.
#
# sanitize_args() IS THE EXCEPTION:
#   It is pure and never fails.  It normalizes free-text input from the LLM
#   (stray whitespace, empty strings, half-filled issue trackers) so the API
#   doesn't reject otherwise valid test cases.
# =============================================================================

from dataclasses import asdict, replace
import logging
from typing import Any, Optional

from core.config import get_settings
from core.errors import BrowserStackAPIError
from core.http import browserstack_client, ensure_success, read_json
from core.models import (
    CreateProjectOrFolderArgs,
    CreateTestCaseArgs,
    CreateTestRunArgs,
    IssueTracker,
    ListTestCasesArgs,
    TestCaseStep,
    ToolResult,
)
from core.results import pretty_json, text_result

logger = logging.getLogger(__name__)


def _drop_none(payload: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None}


# =============================================================================
# Projects & folders
# =============================================================================
async def create_project_or_folder(args: CreateProjectOrFolderArgs) -> ToolResult:
    """Create a project, a folder, or a project and a folder inside it.

    - project_name given        → a new project is created first
    - folder_name given         → a folder is created in that new project,
                                  or in project_identifier if no new project
    - neither project argument  → error
    """
    if not args.project_name and not args.project_identifier:
        raise BrowserStackAPIError(
            "Either project_name (to create new) or project_identifier "
            "(to add folder) is required"
        )

    base_url = get_settings().test_management_api_url
    project_id = args.project_identifier

    async with browserstack_client() as client:
        if args.project_name:
            response = await client.post(
                f"{base_url}/projects",
                json={"project": _drop_none({
                    "name": args.project_name,
                    "description": args.project_description,
                })},
            )
            data = ensure_success(read_json(response, "create project"), "create project")
            project_id = (data.get("project") or {}).get("identifier")
            if not project_id:
                raise BrowserStackAPIError(
                    "project was created but no identifier was returned",
                    payload=data,
                )
            logger.info("Created project %s", project_id)

        if not args.folder_name:
            return text_result(f"Project created with identifier={project_id}")

        if not project_id:
            raise BrowserStackAPIError("Cannot create folder without project_identifier.")

        response = await client.post(
            f"{base_url}/projects/{project_id}/folders",
            json={"folder": _drop_none({
                "name": args.folder_name,
                "description": args.folder_description,
                "parent_id": args.parent_id,
            })},
        )

    data = ensure_success(read_json(response, "create folder"), "create folder")
    folder = data.get("folder") or {}
    logger.info("Created folder %s in project %s", folder.get("id"), project_id)
    return text_result(
        f'Folder created: ID={folder.get("id")}, name="{folder.get("name")}" '
        f"in project with identifier {project_id}"
    )


# =============================================================================
# Test cases
# =============================================================================
def _clean_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _clean_list(values: Optional[list[str]]) -> Optional[list[str]]:
    if not values:
        return None
    cleaned = [value.strip() for value in values if value and value.strip()]
    return cleaned or None


def sanitize_args(args: CreateTestCaseArgs) -> CreateTestCaseArgs:
    """Normalize free-text fields of a test case before submitting it.

    Pure and idempotent: sanitize_args(sanitize_args(a)) == sanitize_args(a).
    Required fields are stripped but never dropped.
    """
    steps = []
    for step in args.test_case_steps or []:
        text, result = step.step.strip(), step.result.strip()
        if text or result:
            steps.append(TestCaseStep(step=text, result=result))

    tracker = args.issue_tracker
    if tracker is not None:
        name, host = (tracker.name or "").strip(), (tracker.host or "").strip()
        tracker = IssueTracker(name=name, host=host) if name and host else None

    return replace(
        args,
        project_identifier=args.project_identifier.strip(),
        folder_id=str(args.folder_id).strip(),
        name=args.name.strip(),
        description=_clean_text(args.description),
        owner=_clean_text(args.owner),
        preconditions=_clean_text(args.preconditions),
        test_case_steps=steps,
        issues=_clean_list(args.issues),
        issue_tracker=tracker,
        tags=_clean_list(args.tags),
        custom_fields=args.custom_fields or None,
    )


def build_test_case_payload(args: CreateTestCaseArgs) -> dict[str, Any]:
    """The ``{"test_case": {...}}`` body for the create endpoint."""
    fields = asdict(args)
    fields.pop("project_identifier")
    fields.pop("folder_id")
    return {"test_case": _drop_none(fields)}


async def create_test_case(args: CreateTestCaseArgs) -> ToolResult:
    """Create a test case in ``args.folder_id`` of ``args.project_identifier``."""
    base_url = get_settings().test_management_api_url
    url = (
        f"{base_url}/projects/{args.project_identifier}"
        f"/folders/{args.folder_id}/test-cases"
    )

    async with browserstack_client() as client:
        response = await client.post(url, json=build_test_case_payload(args))

    data = ensure_success(read_json(response, "create test case"), "create test case")
    test_case = (data.get("data") or {}).get("test_case") or data.get("test_case") or {}
    identifier = test_case.get("identifier")
    logger.info("Created test case %s in project %s", identifier, args.project_identifier)
    return text_result(
        f"Successfully created test case {identifier}: {test_case.get('title', args.name)}",
        pretty_json(test_case),
    )


def build_list_query(args: ListTestCasesArgs) -> dict[str, Any]:
    """Query-string parameters for the list endpoint, unset filters omitted."""
    params: dict[str, Any] = _drop_none({
        "case_type": args.case_type,
        "priority": args.priority,
        "status": args.status,
        "tags": args.tags,
        "p": args.p,
    })
    for name, value in (args.custom_fields or {}).items():
        params[f"custom_fields[{name}]"] = value
    return params


def format_test_case_line(test_case: dict[str, Any]) -> str:
    """``• TC-1: Login works [functional | active | high]``"""
    return (
        f"• {test_case.get('identifier')}: {test_case.get('title')} "
        f"[{test_case.get('case_type')} | {test_case.get('status')} | "
        f"{test_case.get('priority')}]"
    )


async def list_test_cases(args: ListTestCasesArgs) -> ToolResult:
    """List one page of a project's test cases, filtered.

    Returns two blocks: a one-line-per-case summary headed by the total
    count, and the raw ``test_cases`` array as pretty-printed JSON.
    """
    base_url = get_settings().test_management_api_url
    url = f"{base_url}/projects/{args.project_identifier}/test-cases"

    async with browserstack_client() as client:
        response = await client.get(url, params=build_list_query(args))

    data = ensure_success(read_json(response, "list test cases"), "list test cases")
    test_cases = data.get("test_cases") or []
    count = (data.get("info") or {}).get("count")
    if count is None:
        count = len(test_cases)

    summary = "\n".join(format_test_case_line(test_case) for test_case in test_cases)
    return text_result(
        f"Found {count} test case(s):\n\n{summary}",
        pretty_json(test_cases),
    )


# =============================================================================
# Test runs
# =============================================================================
def build_test_run_payload(args: CreateTestRunArgs) -> dict[str, Any]:
    """The ``{"test_run": {...}}`` body for the create endpoint."""
    return {"test_run": _drop_none({
        "name": args.run_name,
        "description": args.description,
        "test_cases": list(args.test_cases),
        "environment": args.environment,
        "metadata": args.metadata,
    })}


async def create_test_run(args: CreateTestRunArgs) -> ToolResult:
    """Create a test run containing ``args.test_cases``."""
    base_url = get_settings().test_management_api_url
    url = f"{base_url}/projects/{args.project_identifier}/test-runs"

    async with browserstack_client() as client:
        response = await client.post(url, json=build_test_run_payload(args))

    data = ensure_success(read_json(response, "create test run"), "create test run")
    test_run = data.get("test_run") or {}
    identifier = test_run.get("identifier") or test_run.get("id")
    logger.info("Created test run %s in project %s", identifier, args.project_identifier)
    return text_result(
        f"Successfully created test run {identifier}: {test_run.get('name', args.run_name)}",
        pretty_json(test_run),
    )
