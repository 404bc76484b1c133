"""Core implementation for the Agentic Search MCP server.

This package houses the supporting modules that the public
`agentic_search_server` wrapper re-exports, keeping the entrypoint
lightweight.
"""

from . import runtime
from .client import AgenticSearchClient
from .config import SearchSettings, load_settings
from .errors import (
    AgenticSearchError,
    ArgumentValidationError,
    ConfigurationError,
    MalformedResponseError,
    UpstreamConnectionError,
    UpstreamHttpError,
    UpstreamTimeoutError,
)
from .formatting import ResourcePart, TextPart, normalize, to_mcp_content
from .runtime import create_mcp, initialize_runtime, run_server
from .schemas import SearchQuery, parse_search_arguments
from .tools import (
    SearchToolCall,
    ToolCallOutcome,
    ToolCallState,
    register_search_prompt,
    register_search_tool,
)

__all__ = [
    "AgenticSearchClient",
    "AgenticSearchError",
    "ArgumentValidationError",
    "ConfigurationError",
    "MalformedResponseError",
    "ResourcePart",
    "SearchQuery",
    "SearchSettings",
    "SearchToolCall",
    "TextPart",
    "ToolCallOutcome",
    "ToolCallState",
    "UpstreamConnectionError",
    "UpstreamHttpError",
    "UpstreamTimeoutError",
    "create_mcp",
    "initialize_runtime",
    "load_settings",
    "normalize",
    "parse_search_arguments",
    "register_search_prompt",
    "register_search_tool",
    "run_server",
    "runtime",
    "to_mcp_content",
]
