"""Pydantic response schemas for callers of the search core."""

from multisearch.schemas.search import (
    RelevanceExplanationResponse,
    ScopedSearchResponse,
    SearchAnalyticsResponse,
    SearchHistoryEntryResponse,
    SearchResultPageResponse,
)

__all__ = [
    "RelevanceExplanationResponse",
    "ScopedSearchResponse",
    "SearchAnalyticsResponse",
    "SearchHistoryEntryResponse",
    "SearchResultPageResponse",
]
