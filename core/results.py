# =============================================================================
# core/results.py  -  Building result envelopes & classifying failures
# =============================================================================
#
# Every tool answers with a ToolResult.  These helpers keep the envelope
# shape and the error classification rule in ONE place, so the five tools
# can't drift apart:
#
#   ERROR CLASSIFICATION RULE:
#     If the failure carries a message, use it verbatim.
#     Otherwise use the caller's fallback literal ("Unknown error",
#     "An unknown error occurred", ...).  Never inspect the failure further.
# =============================================================================

import json
from typing import Any, Optional

from core.models import TextContent, ToolResult


def error_message(error: Optional[BaseException], fallback: str) -> str:
    """Return the failure's message, or ``fallback`` when it has none."""
    if error is None:
        return fallback
    return str(error) or fallback


def pretty_json(payload: Any) -> str:
    """2-space indented JSON, non-ASCII kept as-is."""
    return json.dumps(payload, indent=2, ensure_ascii=False)


def text_result(*texts: str) -> ToolResult:
    """A successful result with one text block per argument."""
    return ToolResult(content=[TextContent(text=text) for text in texts])


def error_result(text: str) -> ToolResult:
    """A failed result: a single text block, flagged at both levels."""
    return ToolResult(
        content=[TextContent(text=text, is_error=True)],
        is_error=True,
    )
