"""Agentic Search API client used by the MCP tools."""

from __future__ import annotations

import sys
from typing import Any, Callable, Dict, Optional

import anyio
import httpx  # type: ignore[import]

from .config import SearchSettings
from .errors import (
    MalformedResponseError,
    UpstreamConnectionError,
    UpstreamHttpError,
    UpstreamTimeoutError,
)
from .schemas import SearchQuery
from .utils import _preview

MODEL_NAME = "agentic-search"


class AgenticSearchClient:
    """Client for the Agentic Search chat-completions endpoint.

    Every call opens its own ``httpx.AsyncClient`` and closes it before
    returning, so concurrent invocations share nothing but the settings.
    """

    def __init__(
        self,
        settings: SearchSettings,
        *,
        client_factory: Optional[Callable[..., httpx.AsyncClient]] = None,
    ):
        print("Initializing Agentic Search client...", file=sys.stderr)
        self.settings = settings
        self.client_factory = client_factory or httpx.AsyncClient

    def build_payload(self, query: SearchQuery) -> Dict[str, Any]:
        """Return the JSON body for one search request."""

        payload: Dict[str, Any] = {
            "model": MODEL_NAME,
            "messages": [{"role": "user", "content": query.query}],
        }
        if query.search_recency_filter:
            payload["options"] = {"recency_filter": query.search_recency_filter}
        return payload

    def build_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def execute(self, query: SearchQuery) -> Dict[str, Any]:
        """Perform exactly one search request and return the decoded payload.

        Raises one of ``UpstreamTimeoutError``, ``UpstreamHttpError``,
        ``MalformedResponseError`` or ``UpstreamConnectionError``.
        """

        url = self.settings.api_url
        timeout = self.settings.timeout
        payload = self.build_payload(query)

        print(f"Performing agentic search for: {_preview(query.query)}", file=sys.stderr)
        print(f"Making POST request to {url}", file=sys.stderr)

        try:
            with anyio.fail_after(timeout):
                async with self.client_factory(timeout=httpx.Timeout(timeout)) as client:
                    response = await client.post(url, json=payload, headers=self.build_headers())
                    body_text = response.text
        except (TimeoutError, httpx.TimeoutException) as exc:
            print(f"API request timed out after {timeout:g}s", file=sys.stderr)
            raise UpstreamTimeoutError(timeout) from exc
        except httpx.TransportError as exc:
            print(f"API connection error ({type(exc).__name__}): {exc}", file=sys.stderr)
            raise UpstreamConnectionError(f"API connection error ({type(exc).__name__}).") from exc
        except httpx.DecodingError as exc:
            print(f"Error decoding API response body: {exc}", file=sys.stderr)
            raise MalformedResponseError("Error parsing API response: body could not be decoded.") from exc
        except httpx.RequestError as exc:
            print(f"API request error ({type(exc).__name__}): {exc}", file=sys.stderr)
            raise UpstreamConnectionError(f"API request error ({type(exc).__name__}).") from exc

        print(f"API response status: {response.status_code}", file=sys.stderr)

        if not response.is_success:
            print(f"API error ({response.status_code}): {body_text}", file=sys.stderr)
            raise UpstreamHttpError(response.status_code, body_text)

        try:
            data = response.json()
        except ValueError as exc:
            print(f"Error parsing API response: {exc}", file=sys.stderr)
            raise MalformedResponseError("Error parsing API response: body is not valid JSON.") from exc

        if not isinstance(data, dict):
            print(f"Unexpected API response type: {type(data).__name__}", file=sys.stderr)
            raise MalformedResponseError("Error parsing API response: expected a JSON object.")

        print("Successfully parsed API response", file=sys.stderr)
        return data


__all__ = ["AgenticSearchClient", "MODEL_NAME"]
