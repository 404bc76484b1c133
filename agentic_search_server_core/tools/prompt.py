"""Prompt template pointing clients at the search tool."""

from __future__ import annotations

import sys
from typing import Callable

from .search import TOOL_NAME

PROMPT_NAME = "agentic_search"


def register_search_prompt(mcp) -> Callable:
    """Register the ``agentic_search`` prompt on the provided MCP instance."""

    @mcp.prompt(name=PROMPT_NAME, description="Perform a search using the Agentic Search API")
    def agentic_search(query: str) -> str:
        print(f"Handling get_prompt for '{PROMPT_NAME}'", file=sys.stderr)
        if not query or not query.strip():
            raise ValueError("Missing 'query' argument for prompt.")
        return f"Use '{TOOL_NAME}' tool for: {query.strip()}"

    return agentic_search


__all__ = ["PROMPT_NAME", "register_search_prompt"]
