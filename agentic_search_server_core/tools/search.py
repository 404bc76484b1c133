"""Agentic Search MCP tool and the state machine behind one tool call."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Callable, List, Optional, Tuple

from mcp.server.fastmcp.exceptions import ToolError  # type: ignore[import]
from pydantic import Field  # type: ignore[import]

from ..errors import AgenticSearchError, ArgumentValidationError
from ..formatting import ContentPart, TextPart, normalize, to_mcp_content
from ..schemas import RecencyFilter, parse_search_arguments

TOOL_NAME = "search"
TOOL_DESCRIPTION = (
    "Performs an intelligent web search using the configured Agentic Search API. Returns the answer text "
    "followed by embedded resources with the structured results, citations, media and the raw API response."
)


class ToolCallState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    CALLING = "calling"
    NORMALIZING = "normalizing"
    RESPONDING = "responding"
    FAILED = "failed"


_TRANSITIONS = {
    ToolCallState.IDLE: {ToolCallState.VALIDATING},
    ToolCallState.VALIDATING: {ToolCallState.CALLING, ToolCallState.FAILED},
    ToolCallState.CALLING: {ToolCallState.NORMALIZING, ToolCallState.FAILED},
    ToolCallState.NORMALIZING: {ToolCallState.RESPONDING},
    ToolCallState.RESPONDING: set(),
    ToolCallState.FAILED: set(),
}


@dataclass(frozen=True)
class ToolCallOutcome:
    """Terminal result of one search tool call."""

    state: ToolCallState
    parts: Tuple[ContentPart, ...]

    @property
    def is_error(self) -> bool:
        return self.state is ToolCallState.FAILED

    @property
    def message(self) -> Optional[str]:
        """Error text for failed calls."""

        if self.is_error and self.parts and isinstance(self.parts[0], TextPart):
            return self.parts[0].body
        return None


class SearchToolCall:
    """Drive one search invocation from ``idle`` to ``responding`` or ``failed``.

    There is no retry edge: any validation or upstream failure moves straight to
    ``failed`` and yields a single text part describing it.
    """

    def __init__(self, search_client):
        self.search_client = search_client
        self.state = ToolCallState.IDLE
        self.history: List[ToolCallState] = [self.state]

    def _advance(self, state: ToolCallState) -> None:
        if state not in _TRANSITIONS[self.state]:
            raise RuntimeError(f"Illegal tool call transition {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)

    def _fail(self, message: str) -> ToolCallOutcome:
        self._advance(ToolCallState.FAILED)
        print(f"Search tool call failed: {message}", file=sys.stderr)
        return ToolCallOutcome(ToolCallState.FAILED, (TextPart(message),))

    async def run(self, arguments: Any) -> ToolCallOutcome:
        self._advance(ToolCallState.VALIDATING)
        try:
            query = parse_search_arguments(arguments)
        except ArgumentValidationError as exc:
            return self._fail(str(exc))

        self._advance(ToolCallState.CALLING)
        try:
            raw = await self.search_client.execute(query)
        except AgenticSearchError as exc:
            return self._fail(str(exc))

        self._advance(ToolCallState.NORMALIZING)
        parts = normalize(raw)

        self._advance(ToolCallState.RESPONDING)
        print(f"Tool call successful, returning {len(parts)} parts", file=sys.stderr)
        return ToolCallOutcome(ToolCallState.RESPONDING, parts)


def register_search_tool(mcp, get_search_client) -> Callable:
    """Register the search tool on the provided MCP instance."""

    @mcp.tool(name=TOOL_NAME, description=TOOL_DESCRIPTION)
    async def search(
        query: Annotated[
            str,
            Field(description="Search query, question, or URL."),
        ],
        search_recency_filter: Annotated[
            Optional[RecencyFilter],
            Field(
                default=None,
                description="Only return results published within the last hour, day, week or month.",
                examples=["day", "week"],
            ),
        ] = None,
    ):
        print(f"Tool called: {TOOL_NAME}(recency={search_recency_filter})", file=sys.stderr)

        search_client = get_search_client()
        if search_client is None:
            raise ToolError("Agentic Search client is not initialized. Check server logs for details.")

        arguments = {"query": query, "search_recency_filter": search_recency_filter}
        try:
            outcome = await SearchToolCall(search_client).run(arguments)
        except Exception as exc:  # pragma: no cover - unexpected failure
            error_msg = f"Error executing search: {exc}"
            print(error_msg, file=sys.stderr)
            raise ToolError(error_msg) from exc

        if outcome.is_error:
            raise ToolError(outcome.message or "Search failed.")
        return to_mcp_content(outcome.parts)

    return search


__all__ = [
    "SearchToolCall",
    "TOOL_DESCRIPTION",
    "TOOL_NAME",
    "ToolCallOutcome",
    "ToolCallState",
    "register_search_tool",
]
