"""Search response schemas (serializable, camelCase on dump).

Dump with model_dump(by_alias=True) or model_dump_json(by_alias=True)
to get the caller-facing shapes.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from multisearch.application.dtos.history import SearchAnalytics, SearchHistoryEntry
from multisearch.application.dtos.search import (
    RelevanceExplanation,
    ScopedSearchResult,
    SearchResultPage,
)


class CamelModel(BaseModel):
    """Base for responses: snake_case attributes, camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SearchResultPageResponse(CamelModel):
    """Global search page across all entity types."""

    query: str
    total_results: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)
    results: list[dict[str, Any]] = Field(
        default_factory=list,
        description="{entityType, relevanceScore, ...record fields}",
    )
    facets: dict[str, dict[str, int]] = Field(default_factory=dict)
    suggestions: list[str] = Field(default_factory=list, max_length=10)

    @classmethod
    def from_page(cls, page: SearchResultPage) -> SearchResultPageResponse:
        return cls(
            query=page.query,
            total_results=page.total_results,
            page=page.page,
            limit=page.limit,
            total_pages=page.total_pages,
            results=[candidate.to_dict() for candidate in page.results],
            facets=page.facets,
            suggestions=page.suggestions,
        )


class ScopedSearchResponse(CamelModel):
    """Single-entity search page with that entity's facets."""

    entity_type: str
    total: int = Field(..., ge=0)
    results: list[dict[str, Any]] = Field(default_factory=list)
    facets: dict[str, dict[str, int]] = Field(default_factory=dict)

    @classmethod
    def from_result(cls, result: ScopedSearchResult) -> ScopedSearchResponse:
        return cls(
            entity_type=result.entity_type.value,
            total=result.total,
            results=[candidate.to_dict() for candidate in result.results],
            facets=result.facets,
        )


class RuleContributionResponse(CamelModel):
    rule: str
    points: int


class RelevanceExplanationResponse(CamelModel):
    """Score breakdown for one record."""

    entity_type: str
    record_id: str
    relevance_score: int = Field(..., ge=0)
    contributions: list[RuleContributionResponse]

    @classmethod
    def from_explanation(
        cls, explanation: RelevanceExplanation
    ) -> RelevanceExplanationResponse:
        return cls(
            entity_type=explanation.entity_type.value,
            record_id=explanation.record_id,
            relevance_score=explanation.relevance_score,
            contributions=[
                RuleContributionResponse(rule=c.rule, points=c.points)
                for c in explanation.contributions
            ],
        )


class SearchHistoryEntryResponse(CamelModel):
    """One logged search."""

    timestamp: datetime
    term: str
    search_type: str
    result_count: int
    user_id: str

    @classmethod
    def from_entry(cls, entry: SearchHistoryEntry) -> SearchHistoryEntryResponse:
        return cls(
            timestamp=entry.timestamp,
            term=entry.term,
            search_type=entry.search_type,
            result_count=entry.result_count,
            user_id=entry.user_id,
        )


class TermCountResponse(CamelModel):
    term: str
    count: int


class SearchAnalyticsResponse(CamelModel):
    """Approximate analytics over in-memory history (lost on restart)."""

    start_date: datetime
    end_date: datetime
    total_searches: int
    unique_users: int
    average_results_per_search: int
    top_searches: list[TermCountResponse] = Field(default_factory=list)
    search_type_distribution: dict[str, int] = Field(default_factory=dict)

    @classmethod
    def from_analytics(cls, analytics: SearchAnalytics) -> SearchAnalyticsResponse:
        return cls(
            start_date=analytics.start_date,
            end_date=analytics.end_date,
            total_searches=analytics.total_searches,
            unique_users=analytics.unique_users,
            average_results_per_search=analytics.average_results_per_search,
            top_searches=[
                TermCountResponse(term=t.term, count=t.count)
                for t in analytics.top_searches
            ],
            search_type_distribution=analytics.search_type_distribution,
        )
