"""Runtime bootstrap for the Agentic Search MCP server."""

from __future__ import annotations

import os
import sys
from typing import Tuple

from dotenv import load_dotenv  # type: ignore[import]
from mcp.server.fastmcp import FastMCP  # type: ignore[import]

from .client import AgenticSearchClient
from .config import load_settings
from .errors import ConfigurationError

SERVER_NAME = "agentic-search"
VERSION = "1.0.0"


def create_mcp() -> FastMCP:
    """Create the FastMCP instance that hosts the search tool."""

    return FastMCP(
        SERVER_NAME,
        instructions=(
            "Use the `search` tool for web questions. The first content part is the answer text; "
            "embedded resources carry structured results, citations, media and the raw API response."
        ),
    )


def initialize_runtime() -> Tuple[FastMCP, AgenticSearchClient]:
    """Load environment variables, create the MCP instance, and initialize the client.

    Configuration problems are fatal: a critical message is written to stderr
    and the process exits with status 1 before any request is accepted.
    """

    print(f"Starting Agentic Search MCP Server v{VERSION}...", file=sys.stderr)
    print(f"Python version: {sys.version.split()[0]}", file=sys.stderr)
    print(f"Current working directory: {os.getcwd()}", file=sys.stderr)
    load_dotenv()
    print("Environment variables loaded", file=sys.stderr)

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        print(f"CRITICAL: STARTUP FAILURE: {exc}", file=sys.stderr)
        sys.exit(1)

    mcp = create_mcp()
    print("MCP server instance created", file=sys.stderr)

    search_client = AgenticSearchClient(settings)
    print("Search client initialized successfully", file=sys.stderr)

    return mcp, search_client


def run_server(mcp: FastMCP) -> None:
    """Run the MCP server using either stdio or SSE transport."""

    print("Starting MCP server run...", file=sys.stderr)
    transport = os.getenv("MCP_TRANSPORT", "stdio")
    if transport == "sse":
        host = os.getenv("MCP_HOST", "0.0.0.0")
        port = int(os.getenv("MCP_PORT", "8080"))
        mcp.settings.host = host
        mcp.settings.port = port
        print(f"Running MCP server over SSE on {host}:{port}", file=sys.stderr)
        mcp.run(transport="sse")
    else:
        print("Running MCP server over stdio", file=sys.stderr)
        mcp.run()


__all__ = ["SERVER_NAME", "VERSION", "create_mcp", "initialize_runtime", "run_server"]
