# =============================================================================
# core/models.py  -  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the *shape* of every piece of information that flows
# through the system.  They carry almost no behavior - they're structured bags
# of data that the tools layer fills from validated MCP arguments and the core
# layer turns into BrowserStack API requests.
#
# THREE FAMILIES OF MODELS:
#   1. Tool arguments   - one dataclass per tool (CreateTestCaseArgs, ...).
#                         Optional fields default to None, so "not given"
#                         is always distinguishable from "given but empty".
#   2. Remote results   - NetworkFailureReport for the Automate API.  The
#                         Test Management payloads stay plain dicts: their
#                         structure is opaque to us and passed through.
#   3. Result envelope  - ToolResult / TextContent, the success/error shape
#                         every tool hands back to the MCP host.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Optional


# -----------------------------------------------------------------------------
# TextContent / ToolResult - the envelope every adapter returns
# -----------------------------------------------------------------------------
# Mirrors MCP's CallToolResult: an ordered list of content blocks plus a
# top-level error flag.  Blocks are always "text" here.  A fresh ToolResult
# is built for every invocation; nothing caches or reuses them.
# -----------------------------------------------------------------------------
@dataclass
class TextContent:
    """One text block of a tool result."""

    text: str
    type: str = "text"
    is_error: Optional[bool] = None    # Per-block flag, set on failures only

    def to_dict(self) -> dict[str, Any]:
        block: dict[str, Any] = {"type": self.type, "text": self.text}
        if self.is_error is not None:
            block["isError"] = self.is_error
        return block


@dataclass
class ToolResult:
    """The envelope returned to the invoking host."""

    content: list[TextContent] = field(default_factory=list)
    is_error: bool = False

    @property
    def text(self) -> str:
        """All block texts joined by blank lines."""
        return "\n\n".join(block.text for block in self.content)

    def to_dict(self) -> dict[str, Any]:
        """Render the MCP wire shape (camelCase ``isError``)."""
        result: dict[str, Any] = {
            "content": [block.to_dict() for block in self.content],
        }
        if self.is_error:
            result["isError"] = True
        return result


# -----------------------------------------------------------------------------
# NetworkFailureReport - what the Automate network-log lookup produces
# -----------------------------------------------------------------------------
# Each failure is a trimmed HAR entry:
#   {startedDateTime, request{method,url,queryString},
#    response{status,statusText,_error}, serverIPAddress, time}
# Entries stay plain dicts; the tool embeds them verbatim as JSON.
# -----------------------------------------------------------------------------
@dataclass
class NetworkFailureReport:
    """Failed network requests captured for one Automate session."""

    total_failures: int
    failures: list[dict[str, Any]] = field(default_factory=list)


# -----------------------------------------------------------------------------
# createProjectOrFolder arguments
# -----------------------------------------------------------------------------
# Either project_name (create a new project) or project_identifier (use an
# existing one) must be present.  folder_name is optional: without it only
# the project is created.
# -----------------------------------------------------------------------------
@dataclass
class CreateProjectOrFolderArgs:
    """Arguments for creating a project and/or a folder."""

    project_name: Optional[str] = None
    project_description: Optional[str] = None
    project_identifier: Optional[str] = None   # e.g. "PR-12"
    folder_name: Optional[str] = None
    folder_description: Optional[str] = None
    parent_id: Optional[int] = None            # Nest the folder under another


# -----------------------------------------------------------------------------
# createTestCase arguments
# -----------------------------------------------------------------------------
@dataclass
class TestCaseStep:
    """One step of a test case: the action and its expected result."""

    __test__ = False                   # Not a pytest class, despite the name

    step: str
    result: str


@dataclass
class IssueTracker:
    """Issue tracker the linked issues live in (e.g. Jira)."""

    name: str                          # "jira", "azure", ...
    host: str                          # "https://jira.example.com"


@dataclass
class CreateTestCaseArgs:
    """Arguments for creating one test case inside a folder."""

    project_identifier: str
    folder_id: str
    name: str
    description: Optional[str] = None
    owner: Optional[str] = None        # Owner's email address
    preconditions: Optional[str] = None
    test_case_steps: list[TestCaseStep] = field(default_factory=list)
    issues: Optional[list[str]] = None  # e.g. ["JIRA-1"]
    issue_tracker: Optional[IssueTracker] = None
    tags: Optional[list[str]] = None
    custom_fields: Optional[dict[str, Any]] = None


# -----------------------------------------------------------------------------
# listTestCases arguments
# -----------------------------------------------------------------------------
@dataclass
class ListTestCasesArgs:
    """Filters for listing the test cases of a project."""

    project_identifier: str
    case_type: Optional[str] = None    # Comma-separated, e.g. "functional,regression"
    priority: Optional[str] = None     # Comma-separated, e.g. "high,medium"
    status: Optional[str] = None       # e.g. "active"
    tags: Optional[str] = None
    custom_fields: Optional[dict[str, str]] = None
    p: Optional[int] = None            # Page number (API is paginated)


# -----------------------------------------------------------------------------
# createTestRun arguments
# -----------------------------------------------------------------------------
@dataclass
class CreateTestRunArgs:
    """Arguments for creating a test run from existing test cases."""

    project_identifier: str
    run_name: str
    test_cases: list[str] = field(default_factory=list)   # ["TC-001", ...]
    description: Optional[str] = None
    environment: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None
