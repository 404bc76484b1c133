"""Agentic Search MCP Server public entrypoint.

The bulk of the implementation lives under ``agentic_search_server_core``.
This module wires the runtime together at import time and re-exports the
public API that the tests and external tooling rely on.
"""

from __future__ import annotations

from agentic_search_server_core import (
    AgenticSearchClient,
    initialize_runtime,
    normalize,
    register_search_prompt,
    register_search_tool,
    run_server,
    to_mcp_content,
)


mcp, search_client = initialize_runtime()


def _get_search_client():
    return globals().get("search_client")


search = register_search_tool(mcp, _get_search_client)
agentic_search = register_search_prompt(mcp)


def main() -> None:
    """Entry point used when running the module as a script."""

    run_server(mcp)


__all__ = [
    "AgenticSearchClient",
    "agentic_search",
    "main",
    "mcp",
    "normalize",
    "search",
    "search_client",
    "to_mcp_content",
]


if __name__ == "__main__":  # pragma: no cover - entrypoint behaviour
    main()
