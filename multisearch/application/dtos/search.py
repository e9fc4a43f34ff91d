"""DTOs for search requests and results (no dependency on transport or storage)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from multisearch.domain.entities import EntityRecord
from multisearch.domain.enums import EntityType, SortBy
from multisearch.domain.exceptions import EntitySearchFailure
from multisearch.domain.value_objects import SearchTerm

Facets = dict[str, dict[str, int]]


def _as_positive_int(value: Any) -> int | None:
    """Parse an int-like option (int or numeric string); None unless >= 1."""
    if isinstance(value, bool):
        return None
    try:
        number = int(str(value).strip()) if isinstance(value, str) else int(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if number >= 1 else None


@dataclass(frozen=True, kw_only=True)
class SearchQuery:
    """Validated search request shared by every entity branch."""

    term: SearchTerm
    filters: dict[str, Any] = field(default_factory=dict)
    sort_by: SortBy = SortBy.RELEVANCE
    page: int = 1
    limit: int = 20
    include_inactive: bool = False
    requesting_user_id: str | None = None

    @classmethod
    def build(
        cls,
        term: str | None,
        *,
        filters: dict[str, Any] | None = None,
        sort_by: str | SortBy | None = None,
        page: int | str = 1,
        limit: int | str | None = None,
        include_inactive: bool = False,
        user_id: str | None = None,
        min_term_length: int = 2,
        default_limit: int = 20,
        max_limit: int = 100,
    ) -> SearchQuery:
        """Validate the term and coerce the remaining options into a query.

        page below 1 becomes 1; a missing, invalid or non-positive limit
        becomes default_limit, and limit is clamped to max_limit.

        Raises:
            InvalidQueryException: Term missing or shorter than min_term_length after trim.
        """
        search_term = SearchTerm(term, min_length=min_term_length)
        page = _as_positive_int(page) or 1
        limit = _as_positive_int(limit) or default_limit
        return cls(
            term=search_term,
            filters=dict(filters or {}),
            sort_by=SortBy.coerce(sort_by),
            page=page,
            limit=min(limit, max_limit),
            include_inactive=include_inactive,
            requesting_user_id=user_id,
        )


@dataclass(frozen=True)
class ScoredCandidate:
    """One record with its entity-local relevance score."""

    entity_type: EntityType
    record: EntityRecord
    relevance_score: int

    def to_dict(self) -> dict[str, Any]:
        """Flatten to {entityType, relevanceScore, ...record fields}."""
        return {
            "entityType": self.entity_type.value,
            "relevanceScore": self.relevance_score,
            **self.record.to_dict(),
        }


@dataclass
class EntitySearchOutcome:
    """Result of one entity branch: the full ranked list, or a recorded failure."""

    entity_type: EntityType
    ranked: list[ScoredCandidate] = field(default_factory=list)
    failure: EntitySearchFailure | None = None

    @property
    def failed(self) -> bool:
        return self.failure is not None

    @property
    def total(self) -> int:
        return len(self.ranked)


@dataclass
class ScopedSearchResult:
    """Single-entity search page with that entity's own facets."""

    entity_type: EntityType
    total: int
    results: list[ScoredCandidate]
    facets: Facets


@dataclass
class SearchResultPage:
    """Global search page. Facets describe the whole sorted set, not just the page."""

    query: str
    total_results: int
    page: int
    limit: int
    total_pages: int
    results: list[ScoredCandidate]
    facets: Facets
    suggestions: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RuleContribution:
    """Points one scoring rule added to a record's score."""

    rule: str
    points: int


@dataclass
class RelevanceExplanation:
    """Score of one record with the per-rule breakdown."""

    entity_type: EntityType
    record_id: str
    relevance_score: int
    contributions: list[RuleContribution]
