"""Global and scoped search use cases.

SearchOrchestrator fans a query out to one EntitySearcher per entity type,
waits for every branch (settle-all: a failing branch contributes nothing
and never aborts its siblings), merges and globally sorts the results,
computes facets over the whole sorted set and only then takes the page.
"""

from __future__ import annotations

import asyncio
import csv
import io
from collections.abc import Mapping
from datetime import datetime
from typing import TYPE_CHECKING, Any

from multisearch.application.dtos.search import (
    EntitySearchOutcome,
    Facets,
    RelevanceExplanation,
    ScopedSearchResult,
    ScoredCandidate,
    SearchQuery,
    SearchResultPage,
)
from multisearch.application.services.facet_aggregator import FacetAggregator
from multisearch.application.services.result_merger import ResultMerger
from multisearch.application.services.suggestion_engine import SuggestionEngine
from multisearch.domain.entities import EntityRecord, record_from_mapping
from multisearch.domain.enums import EntityType, SearchType, SortBy
from multisearch.domain.exceptions import (
    EntitySearchFailure,
    InvalidQueryException,
    UnknownEntityTypeException,
    ValidationException,
)
from multisearch.shared.telemetry.logging import get_logger
from multisearch.shared.telemetry.tracing import (
    TracedOperation,
    add_span_attributes,
    set_span_error,
    traced,
)

if TYPE_CHECKING:
    from multisearch.application.dtos.history import (
        SearchAnalytics,
        SearchHistoryEntry,
    )
    from multisearch.application.interfaces.services import ISearchHistoryStore
    from multisearch.application.use_cases.entity_search import EntitySearcher

logger = get_logger(__name__)

EXPORT_FORMATS = ("json", "csv")
_CSV_COLUMNS = ("entityType", "id", "displayName", "relevanceScore", "createdAt")


class SearchOrchestrator:
    """Entry point for searching across all entity types."""

    def __init__(
        self,
        searchers: Mapping[EntityType, "EntitySearcher"],
        history_store: "ISearchHistoryStore",
        merger: ResultMerger | None = None,
        facets: FacetAggregator | None = None,
        suggestions: SuggestionEngine | None = None,
        min_term_length: int = 2,
        default_limit: int = 20,
        max_limit: int = 100,
        history_default_limit: int = 20,
    ) -> None:
        self.searchers = dict(searchers)
        self.history_store = history_store
        self.merger = merger or ResultMerger()
        self.facets = facets or FacetAggregator()
        self.suggestions = suggestions or SuggestionEngine()
        self.min_term_length = min_term_length
        self.default_limit = default_limit
        self.max_limit = max_limit
        self.history_default_limit = history_default_limit

    def _build_query(self, term: str | None, **options: Any) -> SearchQuery:
        return SearchQuery.build(
            term,
            **options,
            min_term_length=self.min_term_length,
            default_limit=self.default_limit,
            max_limit=self.max_limit,
        )

    def _searcher_for(self, entity_type: str | EntityType) -> "EntitySearcher":
        try:
            resolved = EntityType.parse(entity_type)
        except ValueError:
            raise UnknownEntityTypeException(str(entity_type)) from None
        searcher = self.searchers.get(resolved)
        if searcher is None:
            raise UnknownEntityTypeException(resolved.value)
        return searcher

    async def _run_branch(
        self, searcher: "EntitySearcher", query: SearchQuery
    ) -> EntitySearchOutcome:
        async with TracedOperation(
            f"search.branch.{searcher.entity_type.value}",
            {"entity_type": searcher.entity_type.value},
        ):
            outcome = await searcher.search_all(query)
            add_span_attributes(
                **{"search.failed": outcome.failed, "search.matches": outcome.total}
            )
            if outcome.failure is not None:
                set_span_error(outcome.failure)
            return outcome

    async def _fan_out(self, query: SearchQuery) -> list[EntitySearchOutcome]:
        """Run every entity branch concurrently and wait for all of them."""
        searchers = [self.searchers[t] for t in EntityType if t in self.searchers]
        settled = await asyncio.gather(
            *(self._run_branch(s, query) for s in searchers),
            return_exceptions=True,
        )
        outcomes: list[EntitySearchOutcome] = []
        for searcher, result in zip(searchers, settled):
            if isinstance(result, BaseException):
                failure = EntitySearchFailure(searcher.entity_type.value, result)
                logger.warning("%s", failure.message, exc_info=result)
                result = EntitySearchOutcome(
                    entity_type=searcher.entity_type, failure=failure
                )
            outcomes.append(result)
        failed = [o.entity_type.value for o in outcomes if o.failed]
        if failed:
            logger.warning(
                "Search for %r returned partial results; failed sources: %s",
                query.term.value,
                ", ".join(failed),
            )
        return outcomes

    async def _rank_globally(self, query: SearchQuery) -> list[ScoredCandidate]:
        outcomes = await self._fan_out(query)
        return self.merger.sort(self.merger.combine(outcomes), query.sort_by)

    def _suggest_safely(self, term: str) -> list[str]:
        try:
            return self.suggestions.suggest(term)
        except Exception:
            logger.exception("Error generating search suggestions for %r", term)
            return []

    def _log_history(
        self, user_id: str | None, term: str, search_type: SearchType, result_count: int
    ) -> None:
        if not user_id:
            return
        try:
            self.history_store.log(user_id, term, search_type.value, result_count)
        except Exception:
            logger.exception("Error logging search activity for user %s", user_id)

    @traced("search.global")
    async def global_search(
        self,
        term: str | None,
        *,
        filters: dict[str, Any] | None = None,
        sort_by: str | SortBy | None = None,
        page: int | str = 1,
        limit: int | str | None = None,
        include_inactive: bool = False,
        user_id: str | None = None,
    ) -> SearchResultPage:
        """Search all entity types and return one globally ranked page.

        Out-of-range or malformed page and limit are coerced, never rejected.

        Raises:
            InvalidQueryException: Term missing or too short (no repository call is made).
        """
        query = self._build_query(
            term,
            filters=filters,
            sort_by=sort_by,
            page=page,
            limit=limit,
            include_inactive=include_inactive,
            user_id=user_id,
        )
        ranked = await self._rank_globally(query)
        total = len(ranked)
        result = SearchResultPage(
            query=query.term.value,
            total_results=total,
            page=query.page,
            limit=query.limit,
            total_pages=self.merger.total_pages(total, query.limit),
            results=self.merger.paginate(ranked, query.page, query.limit),
            facets=self.facets.compute_global(ranked),
            suggestions=self._suggest_safely(query.term.value),
        )
        self._log_history(
            query.requesting_user_id, query.term.value, SearchType.GLOBAL, total
        )
        return result

    @traced("search.scoped")
    async def search_scoped(
        self,
        entity_type: str | EntityType,
        term: str | None,
        *,
        filters: dict[str, Any] | None = None,
        sort_by: str | SortBy | None = None,
        page: int | str = 1,
        limit: int | str | None = None,
        include_inactive: bool = False,
        user_id: str | None = None,
    ) -> ScopedSearchResult:
        """Search a single entity type; facets use that entity's own dimensions.

        Raises:
            UnknownEntityTypeException: entity_type names no registered searcher.
            InvalidQueryException: Term missing or too short.
        """
        searcher = self._searcher_for(entity_type)
        query = self._build_query(
            term,
            filters=filters,
            sort_by=sort_by,
            page=page,
            limit=limit,
            include_inactive=include_inactive,
            user_id=user_id,
        )
        result = await searcher.search(query)
        self._log_history(
            query.requesting_user_id,
            query.term.value,
            SearchType.for_entity(searcher.entity_type),
            result.total,
        )
        return result

    def suggest(self, term: str | None, limit: int | None = None) -> list[str]:
        """Autocomplete suggestions for a non-blank term."""
        if not term or not term.strip():
            raise InvalidQueryException(min_length=1)
        return self.suggestions.suggest(term, limit)

    def popular_searches(self, limit: int = 20) -> list[str]:
        return self.suggestions.popular(limit)

    def trending_searches(self, limit: int = 20) -> list[str]:
        return self.suggestions.trending(limit)

    async def search_facets(
        self,
        term: str | None,
        entity_type: str | EntityType | None = None,
        **options: Any,
    ) -> Facets:
        """Facets for the full result set, without results (global or scoped dimensions)."""
        if entity_type is not None:
            searcher = self._searcher_for(entity_type)
            outcome = await searcher.search_all(self._build_query(term, **options))
            return self.facets.compute_for_entity(searcher.entity_type, outcome.ranked)
        ranked = await self._rank_globally(self._build_query(term, **options))
        return self.facets.compute_global(ranked)

    async def export_results(
        self,
        term: str | None,
        entity_type: str | EntityType | None = None,
        fmt: str = "json",
        **options: Any,
    ) -> list[dict[str, Any]] | str:
        """Every sorted result (no pagination) as a list of dicts or CSV text.

        Raises:
            ValidationException: fmt is not json or csv.
        """
        if fmt not in EXPORT_FORMATS:
            raise ValidationException(
                f"Unsupported export format {fmt!r}; use one of {', '.join(EXPORT_FORMATS)}",
                field="fmt",
            )
        query = self._build_query(term, **options)
        if entity_type is not None:
            outcome = await self._searcher_for(entity_type).search_all(query)
            ranked = outcome.ranked
        else:
            ranked = await self._rank_globally(query)
        rows = [candidate.to_dict() for candidate in ranked]
        if fmt == "json":
            return rows
        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=_CSV_COLUMNS, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(rows)
        return buffer.getvalue()

    def explain_relevance(
        self,
        entity_type: str | EntityType,
        record: Mapping[str, Any] | EntityRecord,
        term: str | None,
        filters: Mapping[str, Any] | None = None,
    ) -> RelevanceExplanation:
        """Score one record for term and show which rules contributed."""
        searcher = self._searcher_for(entity_type)
        query = self._build_query(term, filters=dict(filters or {}))
        typed = record_from_mapping(searcher.entity_type, record)
        contributions = searcher.scorer.explain(typed, query.term, query.filters)
        return RelevanceExplanation(
            entity_type=searcher.entity_type,
            record_id=typed.id,
            relevance_score=sum(c.points for c in contributions),
            contributions=contributions,
        )

    def history(
        self,
        user_id: str,
        limit: int | str | None = None,
        search_type: str | None = None,
    ) -> list["SearchHistoryEntry"]:
        return self.history_store.history(
            user_id, limit or self.history_default_limit, search_type
        )

    def analytics(
        self, start_date: datetime | None = None, end_date: datetime | None = None
    ) -> "SearchAnalytics":
        return self.history_store.analytics(start_date, end_date)

    def clear_history(self, user_id: str, search_type: str | None = None) -> int:
        return self.history_store.clear(user_id, search_type)

    def clear_all_history(self) -> None:
        self.history_store.clear_all()
