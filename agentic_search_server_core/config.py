"""Process-wide settings for the Agentic Search MCP server."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigurationError
from .utils import _normalize_api_url

API_KEY_ENV = "AGENTIC_SEARCH_API_KEY"
API_URL_ENV = "AGENTIC_SEARCH_API_URL"
DEFAULT_API_BASE_URL = "https://agentic-search-engines-n3n7u.ondigitalocean.app"
DEFAULT_TIMEOUT_SECONDS = 90.0


@dataclass(frozen=True)
class SearchSettings:
    """Immutable configuration handed to the upstream client."""

    api_key: str
    api_url: str
    timeout: float = DEFAULT_TIMEOUT_SECONDS


def load_settings(environ: Optional[Mapping[str, str]] = None) -> SearchSettings:
    """Read settings from the environment once, at startup.

    Raises ``ConfigurationError`` when the API key is missing or the API URL
    is not a well-formed http(s) URL.
    """

    env = os.environ if environ is None else environ

    api_key = (env.get(API_KEY_ENV) or "").strip()
    raw_url = env.get(API_URL_ENV)

    print(f"Config check: {API_KEY_ENV} set: {bool(api_key)}", file=sys.stderr)
    print(f"Config check: {API_URL_ENV} set: {bool(raw_url)}", file=sys.stderr)

    if not api_key:
        raise ConfigurationError(f"{API_KEY_ENV} environment variable is not set. Server cannot function.")

    try:
        api_url = _normalize_api_url(raw_url, DEFAULT_API_BASE_URL)
    except ValueError as exc:
        raise ConfigurationError(f"{API_URL_ENV} ('{raw_url}') looks invalid: {exc}") from exc

    print(f"Using Agentic Search endpoint: {api_url}", file=sys.stderr)
    return SearchSettings(api_key=api_key, api_url=api_url)


__all__ = [
    "API_KEY_ENV",
    "API_URL_ENV",
    "DEFAULT_API_BASE_URL",
    "DEFAULT_TIMEOUT_SECONDS",
    "SearchSettings",
    "load_settings",
]
