"""Utility to execute search payloads using the Agentic Search MCP server core."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict

import anyio
from dotenv import load_dotenv  # type: ignore[import]

from ..client import AgenticSearchClient
from ..config import load_settings
from ..errors import ConfigurationError
from ..formatting import parts_to_json
from .search import SearchToolCall


def _read_arguments(payload_path: Path | None) -> Dict[str, Any]:
    """Return the tool arguments from ``--payload`` or piped stdin."""

    if payload_path is not None:
        text = payload_path.read_text(encoding="utf-8")
    elif sys.stdin.isatty():
        text = ""
    else:
        text = sys.stdin.read()

    if not text.strip():
        raise SystemExit('No search arguments given. Pass --payload FILE or pipe {"query": "..."} on stdin.')

    try:
        arguments = json.loads(text)
    except json.JSONDecodeError as exc:  # pragma: no cover - CLI parsing
        raise SystemExit(f"Search arguments are not valid JSON: {exc}") from exc

    if not isinstance(arguments, dict):
        raise SystemExit(f"Search arguments must be a JSON object, got {type(arguments).__name__}.")
    return arguments


def _print_result(result: Dict[str, Any], *, pretty: bool) -> None:
    print(json.dumps(result, indent=2 if pretty else None, ensure_ascii=False))


def main(argv: list[str] | None = None, *, client: AgenticSearchClient | None = None) -> int:
    """Run the query runner CLI."""

    parser = argparse.ArgumentParser(
        description=(
            "Execute a search payload using the agentic_search_server search tool. "
            'The payload should match the arguments of the `search` MCP tool, e.g. {"query": "..."}.'
        )
    )
    parser.add_argument(
        "--payload",
        type=Path,
        help="Path to a JSON file containing the search payload. If omitted, stdin is used.",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty-print the JSON response.",
    )

    args = parser.parse_args(argv)

    payload = _read_arguments(args.payload)

    if client is None:
        load_dotenv()
        try:
            client = AgenticSearchClient(load_settings())
        except ConfigurationError as exc:
            raise SystemExit(f"Failed to initialize search client: {exc}") from exc

    outcome = anyio.run(SearchToolCall(client).run, payload)
    _print_result(parts_to_json(outcome.parts, is_error=outcome.is_error), pretty=args.pretty)
    return 1 if outcome.is_error else 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
