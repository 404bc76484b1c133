"""Normalization of Agentic Search payloads into MCP content parts.

``normalize`` is the single place that decides which parts a search result
produces and in what order. MCP clients rely on that order:

1. primary answer text (with a sources section or an item listing fallback)
2. ``search/complete_results`` aggregate resource
3. ``search/results`` items resource
4. ``search/citations`` resource
5. ``search/news`` resource
6. one resource per remaining media key (``scraped/html`` or ``media/<key>``)
7. ``search/raw_response`` resource carrying the untouched payload

Missing or oddly typed fields only ever remove parts; nothing here raises.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Sequence, Tuple, Union
from urllib.parse import quote

from mcp.types import EmbeddedResource, TextContent, TextResourceContents  # type: ignore[import]

from .utils import (
    _as_list,
    _as_mapping,
    _is_renderable_media,
    _text_or_placeholder,
    _title_from_key,
)

NO_RESULTS_MESSAGE = "Agentic Search completed but returned no usable results."
RESOURCE_SCHEME = "mcp"


@dataclass(frozen=True)
class TextPart:
    body: str


@dataclass(frozen=True)
class ResourcePart:
    uri: str
    title: str
    payload: Any


ContentPart = Union[TextPart, ResourcePart]


def _extract_answer(raw: Mapping[str, Any]) -> str:
    """Return ``choices[0].message.content`` or an empty string."""

    choices = _as_list(raw.get("choices")) or []
    if not choices:
        return ""
    first = _as_mapping(choices[0]) or {}
    message = _as_mapping(first.get("message")) or {}
    content = message.get("content")
    return content if isinstance(content, str) else ""


def _format_sources(answer: str, citations: Sequence[Any]) -> str:
    """Build the sources section, or ``""`` when every URL already appears in the answer."""

    urls = [url for url in citations if isinstance(url, str) and url]
    if not urls or all(url in answer for url in urls):
        return ""
    return "\n\n**Sources:**\n" + "\n".join(f"- <{url}>" for url in urls)


def _format_items(items: Sequence[Any]) -> str:
    lines = []
    for item in items:
        entry = _as_mapping(item) or {}
        title = _text_or_placeholder(entry.get("title"))
        snippet = _text_or_placeholder(entry.get("snippet"))
        url = _text_or_placeholder(entry.get("url"))
        lines.append(f"- **{title}**: {snippet}\n  <{url}>\n")
    return ("**Search Results:**\n" + "\n".join(lines)).strip()


def build_primary_text(raw: Mapping[str, Any]) -> str:
    """Compose the answer text shown to the model."""

    text = _extract_answer(raw)
    citations = _as_list(raw.get("citations"))
    items = _as_list(raw.get("items"))

    if text.strip() and citations:
        text += _format_sources(text, citations)

    if not text.strip() and items:
        text = _format_items(items)

    return text.strip()


def build_metadata(raw: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "id": raw.get("id"),
        "model": raw.get("model"),
        "created": raw.get("created"),
        "usage": raw.get("usage"),
    }


def normalize(
    raw: Any,
    *,
    include_aggregate: bool = True,
    include_raw: bool = True,
) -> Tuple[ContentPart, ...]:
    """Convert an upstream payload into the ordered content parts."""

    data: Mapping[str, Any] = _as_mapping(raw) or {}
    parts: List[ContentPart] = []

    text = build_primary_text(data)
    if text:
        parts.append(TextPart(text))

    items = _as_list(data.get("items"))
    citations = _as_list(data.get("citations"))
    media = _as_mapping(data.get("media"))
    news = media.get("news") if media is not None else None

    if include_aggregate:
        parts.append(
            ResourcePart(
                uri="search/complete_results",
                title="Complete Search Results",
                payload={
                    "metadata": build_metadata(data),
                    "results": items if items is not None else [],
                    "citations": citations if citations is not None else [],
                    "news": news if isinstance(news, list) else [],
                },
            )
        )

    if items:
        parts.append(ResourcePart(uri="search/results", title="Search Results", payload={"results": items}))

    if citations:
        parts.append(ResourcePart(uri="search/citations", title="Citations", payload={"citations": citations}))

    if _is_renderable_media(news):
        parts.append(ResourcePart(uri="search/news", title="News Results", payload={"news": news}))

    if media is not None:
        for media_type, media_data in media.items():
            if media_type == "news" or not _is_renderable_media(media_data):
                continue
            key = str(media_type)
            if key == "html":
                uri, title = "scraped/html", "Scraped HTML"
            else:
                uri, title = f"media/{quote(key, safe='')}", f"{_title_from_key(key)} Results"
            parts.append(ResourcePart(uri=uri, title=title, payload={key: media_data}))

    if include_raw:
        parts.append(ResourcePart(uri="search/raw_response", title="Raw API Response", payload=raw))

    if not parts:
        parts.append(TextPart(NO_RESULTS_MESSAGE))

    return tuple(parts)


def to_mcp_content(parts: Sequence[ContentPart]) -> List[Union[TextContent, EmbeddedResource]]:
    """Serialize content parts into MCP content blocks."""

    content: List[Union[TextContent, EmbeddedResource]] = []
    for part in parts:
        if isinstance(part, TextPart):
            content.append(TextContent(type="text", text=part.body))
            continue
        content.append(
            EmbeddedResource(
                type="resource",
                resource=TextResourceContents(
                    uri=f"{RESOURCE_SCHEME}://{part.uri}",
                    mimeType="application/json",
                    text=json.dumps({"title": part.title, "data": part.payload}, ensure_ascii=False),
                ),
            )
        )
    return content


def parts_to_json(parts: Sequence[ContentPart], *, is_error: bool = False) -> Dict[str, Any]:
    """Return a JSON-friendly view of a tool result (used by the query runner)."""

    rendered: List[Dict[str, Any]] = []
    for part in parts:
        if isinstance(part, TextPart):
            rendered.append({"type": "text", "text": part.body})
        else:
            rendered.append(
                {"type": "resource", "uri": part.uri, "title": part.title, "data": part.payload}
            )
    return {"isError": is_error, "content": rendered}


__all__ = [
    "ContentPart",
    "NO_RESULTS_MESSAGE",
    "ResourcePart",
    "TextPart",
    "build_metadata",
    "build_primary_text",
    "normalize",
    "parts_to_json",
    "to_mcp_content",
]
