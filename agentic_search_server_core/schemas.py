"""Pydantic schemas for the search tool arguments."""

from __future__ import annotations

from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ArgumentValidationError

RecencyFilter = Literal["hour", "day", "week", "month"]
RECENCY_FILTERS = ("hour", "day", "week", "month")


class SearchQuery(BaseModel):
    """One validated search request, consumed by a single upstream call."""

    model_config = ConfigDict(frozen=True)

    query: str = Field(description="Search query, question, or URL")
    search_recency_filter: Optional[RecencyFilter] = Field(
        default=None,
        description="Restrict results to the last hour, day, week or month.",
    )

    @field_validator("query")
    @classmethod
    def _strip_query(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("query must be a non-empty string")
        return stripped


def parse_search_arguments(arguments: Any) -> SearchQuery:
    """Validate raw tool arguments, raising ``ArgumentValidationError`` on failure."""

    if not isinstance(arguments, Mapping):
        raise ArgumentValidationError("Missing or invalid 'query' argument: arguments must be an object.")

    query = arguments.get("query")
    if not isinstance(query, str) or not query.strip():
        raise ArgumentValidationError("Missing or invalid 'query' argument.")

    recency = arguments.get("search_recency_filter")
    if recency is not None and recency not in RECENCY_FILTERS:
        raise ArgumentValidationError(
            f"Invalid 'search_recency_filter' argument: {recency!r}. "
            f"Expected one of: {', '.join(RECENCY_FILTERS)}."
        )

    try:
        return SearchQuery(query=query, search_recency_filter=recency)
    except ValidationError as exc:
        raise ArgumentValidationError(f"Invalid search arguments: {exc}") from exc


__all__ = ["RECENCY_FILTERS", "RecencyFilter", "SearchQuery", "parse_search_arguments"]
