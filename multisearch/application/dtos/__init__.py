"""Application DTOs (no transport or storage dependency)."""

from multisearch.application.dtos.history import (
    SearchAnalytics,
    SearchHistoryEntry,
    TermCount,
)
from multisearch.application.dtos.search import (
    EntitySearchOutcome,
    Facets,
    RelevanceExplanation,
    RuleContribution,
    ScopedSearchResult,
    ScoredCandidate,
    SearchQuery,
    SearchResultPage,
)

__all__ = [
    "EntitySearchOutcome",
    "Facets",
    "RelevanceExplanation",
    "RuleContribution",
    "ScopedSearchResult",
    "ScoredCandidate",
    "SearchAnalytics",
    "SearchHistoryEntry",
    "SearchQuery",
    "SearchResultPage",
    "TermCount",
]
