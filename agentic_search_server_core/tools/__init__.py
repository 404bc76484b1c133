"""Tool and prompt registration helpers for the Agentic Search MCP server."""

from .prompt import register_search_prompt
from .search import SearchToolCall, ToolCallOutcome, ToolCallState, register_search_tool

__all__ = [
    "SearchToolCall",
    "ToolCallOutcome",
    "ToolCallState",
    "register_search_prompt",
    "register_search_tool",
]
