"""Tests for the four Test Management adapters (collaborators mocked)."""

from unittest.mock import AsyncMock, patch

import pytest

from core.errors import BrowserStackAPIError
from core.models import (
    CreateProjectOrFolderArgs,
    CreateTestCaseArgs,
    CreateTestRunArgs,
    IssueTracker,
    ListTestCasesArgs,
    TestCaseStep,
)
from core.results import text_result
from tools.testmanagement import (
    create_project_or_folder_tool,
    create_test_case_tool,
    create_test_run_tool,
    list_test_cases_tool,
)

ISSUE_HINT = ". Please open an issue on GitHub if the problem persists"

VALID_TEST_CASE = CreateTestCaseArgs(
    project_identifier="proj-123",
    folder_id="fold-456",
    name="Sample Test Case",
    description="Test case description",
    owner="user@example.com",
    preconditions="Some precondition",
    test_case_steps=[
        TestCaseStep(step="Step 1", result="Result 1"),
        TestCaseStep(step="Step 2", result="Result 2"),
    ],
    issues=["JIRA-1"],
    issue_tracker=IssueTracker(name="jira", host="https://jira.example.com"),
    tags=["smoke"],
    custom_fields={"priority": "high"},
)

VALID_PROJECT = CreateProjectOrFolderArgs(
    project_name="My New Project",
    project_description="This is a test project",
)

VALID_FOLDER = CreateProjectOrFolderArgs(
    project_identifier="proj-123",
    folder_name="My Test Folder",
    folder_description="This is a folder under project",
)

VALID_LIST = ListTestCasesArgs(project_identifier="PR-1", status="active")

VALID_RUN = CreateTestRunArgs(
    project_identifier="proj-123",
    run_name="Nightly Regression",
    test_cases=["TC-001", "TC-002"],
    environment="chrome",
    metadata={"os": "macOS"},
)

# (adapter, collaborator patched in tools.testmanagement, args, error prefix)
ADAPTERS = [
    pytest.param(create_project_or_folder_tool, "create_project_or_folder",
                 VALID_PROJECT, "Failed to create project/folder: ", id="project-folder"),
    pytest.param(create_test_case_tool, "create_test_case",
                 VALID_TEST_CASE, "Failed to create test case: ", id="test-case"),
    pytest.param(list_test_cases_tool, "list_test_cases",
                 VALID_LIST, "Failed to list test cases: ", id="list-test-cases"),
    pytest.param(create_test_run_tool, "create_test_run",
                 VALID_RUN, "Failed to create test run: ", id="test-run"),
]


class TestErrorClassification:
    """The failure-wrapping rule, applied identically by every adapter."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("adapter, collaborator, args, prefix", ADAPTERS)
    async def test_error_with_message(self, adapter, collaborator, args, prefix):
        with patch(f"tools.testmanagement.{collaborator}", new_callable=AsyncMock,
                   side_effect=BrowserStackAPIError("API Error")):
            result = await adapter(args)

        assert result.is_error is True
        assert result.content[0].is_error is True
        assert result.content[0].text == f"{prefix}API Error{ISSUE_HINT}"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("adapter, collaborator, args, prefix", ADAPTERS)
    async def test_error_without_message(self, adapter, collaborator, args, prefix):
        with patch(f"tools.testmanagement.{collaborator}", new_callable=AsyncMock,
                   side_effect=RuntimeError()):
            result = await adapter(args)

        assert result.is_error is True
        assert result.content[0].text == f"{prefix}Unknown error{ISSUE_HINT}"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("adapter, collaborator, args, prefix", ADAPTERS)
    async def test_success_passes_envelope_through(self, adapter, collaborator, args, prefix):
        envelope = text_result("done")
        with patch(f"tools.testmanagement.{collaborator}", new_callable=AsyncMock,
                   return_value=envelope):
            result = await adapter(args)

        assert result is envelope


class TestCreateProjectOrFolderTool:

    @pytest.mark.asyncio
    async def test_creates_project(self):
        response = text_result("Project created with identifier=proj-123")
        with patch("tools.testmanagement.create_project_or_folder",
                   new_callable=AsyncMock, return_value=response) as create:
            result = await create_project_or_folder_tool(VALID_PROJECT)

        create.assert_awaited_once_with(VALID_PROJECT)
        assert "Project created with identifier=proj-123" in result.content[0].text

    @pytest.mark.asyncio
    async def test_creates_folder(self):
        response = text_result(
            'Folder created: ID=fold-123, name="My Folder" in project with identifier proj-123'
        )
        with patch("tools.testmanagement.create_project_or_folder",
                   new_callable=AsyncMock, return_value=response) as create:
            result = await create_project_or_folder_tool(VALID_FOLDER)

        create.assert_awaited_once_with(VALID_FOLDER)
        assert "Folder created: ID=fold-123" in result.content[0].text

    @pytest.mark.asyncio
    async def test_wraps_failure_message(self):
        with patch("tools.testmanagement.create_project_or_folder", new_callable=AsyncMock,
                   side_effect=BrowserStackAPIError("HTTP 422 Name taken")):
            result = await create_project_or_folder_tool(VALID_PROJECT)

        assert result.is_error is True
        assert result.content[0].text == (
            "Failed to create project/folder: HTTP 422 Name taken. "
            "Please open an issue on GitHub if the problem persists"
        )


class TestCreateTestCaseTool:

    @pytest.mark.asyncio
    async def test_sanitizes_before_creating(self):
        cleaned = CreateTestCaseArgs(project_identifier="proj-123", folder_id="fold-456",
                                     name="Sample Test Case")
        envelope = text_result("Successfully created test case TC-001: Sample Test Case")
        order = []

        def sanitize(args):
            order.append("sanitize")
            return cleaned

        async def create(args):
            order.append("create")
            return envelope

        with patch("tools.testmanagement.sanitize_args", side_effect=sanitize) as sanitize_mock, \
                patch("tools.testmanagement.create_test_case", side_effect=create) as create_mock:
            result = await create_test_case_tool(VALID_TEST_CASE)

        sanitize_mock.assert_called_once_with(VALID_TEST_CASE)
        create_mock.assert_called_once_with(cleaned)
        assert order == ["sanitize", "create"]
        assert result is envelope

    @pytest.mark.asyncio
    async def test_sanitizes_even_when_creation_fails(self):
        with patch("tools.testmanagement.sanitize_args",
                   side_effect=lambda args: args) as sanitize_mock, \
                patch("tools.testmanagement.create_test_case", new_callable=AsyncMock,
                      side_effect=RuntimeError()):
            result = await create_test_case_tool(VALID_TEST_CASE)

        sanitize_mock.assert_called_once_with(VALID_TEST_CASE)
        assert result.is_error is True
        assert "Unknown error" in result.content[0].text

    @pytest.mark.asyncio
    async def test_other_adapters_do_not_sanitize(self):
        with patch("tools.testmanagement.sanitize_args") as sanitize_mock, \
                patch("tools.testmanagement.create_test_run", new_callable=AsyncMock,
                      return_value=text_result("ok")), \
                patch("tools.testmanagement.list_test_cases", new_callable=AsyncMock,
                      return_value=text_result("ok")):
            await create_test_run_tool(VALID_RUN)
            await list_test_cases_tool(VALID_LIST)

        sanitize_mock.assert_not_called()


class TestCreateTestRunTool:

    @pytest.mark.asyncio
    async def test_forwards_run_arguments(self):
        envelope = text_result("Successfully created test run: Run-001")
        with patch("tools.testmanagement.create_test_run",
                   new_callable=AsyncMock, return_value=envelope) as create:
            result = await create_test_run_tool(VALID_RUN)

        create.assert_awaited_once_with(VALID_RUN)
        assert result is envelope
