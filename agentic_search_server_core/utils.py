"""Utility helpers shared across the Agentic Search MCP server modules."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional
from urllib.parse import urlsplit

COMPLETIONS_PATH = "/v1/chat/completions"


def _as_list(value: Any) -> Optional[List[Any]]:
    """Return ``value`` when it is a JSON array, otherwise ``None``."""

    if isinstance(value, list):
        return value
    return None


def _as_mapping(value: Any) -> Optional[Mapping[str, Any]]:
    """Return ``value`` when it is a JSON object, otherwise ``None``."""

    if isinstance(value, Mapping):
        return value
    return None


def _is_renderable_media(value: Any) -> bool:
    """True for non-empty arrays, strings and objects.

    ``None``, numbers and booleans are never rendered on their own.
    """

    if isinstance(value, (list, str, Mapping)):
        return len(value) > 0
    return False


def _text_or_placeholder(value: Any, placeholder: str = "N/A") -> str:
    """Render a field for the markdown listing; any falsy value (None, "", 0, False) becomes ``placeholder``."""

    if not value:
        return placeholder
    return str(value)


def _title_from_key(key: str) -> str:
    """Upper-case only the first character, keeping the rest of the key as sent."""

    return key[:1].upper() + key[1:]


def _preview(text: str, limit: int = 50) -> str:
    """Shorten ``text`` for log lines."""

    if len(text) <= limit:
        return text
    return f"{text[:limit]}..."


def _normalize_api_url(value: Optional[str], default: str) -> str:
    """Resolve the completions endpoint from a base URL or a full endpoint URL.

    Trailing slashes are stripped and the completions path is appended unless
    the URL already carries it. Raises ``ValueError`` for anything that is not
    an absolute http(s) URL.
    """

    candidate = (value or "").strip() or default
    candidate = candidate.rstrip("/")
    if COMPLETIONS_PATH not in candidate:
        candidate = candidate + COMPLETIONS_PATH

    parts = urlsplit(candidate)
    if parts.scheme not in {"http", "https"} or not parts.netloc:
        raise ValueError(f"'{candidate}' is not an absolute http(s) URL")
    return candidate


__all__ = [
    "COMPLETIONS_PATH",
    "_as_list",
    "_as_mapping",
    "_is_renderable_media",
    "_normalize_api_url",
    "_preview",
    "_text_or_placeholder",
    "_title_from_key",
]
