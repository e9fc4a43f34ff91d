"""Single-entity search: repository call, scoring, sorting, local pagination."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from multisearch.application.dtos.search import (
    EntitySearchOutcome,
    ScopedSearchResult,
    ScoredCandidate,
    SearchQuery,
)
from multisearch.application.services.facet_aggregator import FacetAggregator
from multisearch.application.services.result_merger import ResultMerger
from multisearch.domain.entities import record_from_mapping
from multisearch.domain.enums import EntityType
from multisearch.domain.exceptions import EntitySearchFailure
from multisearch.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from multisearch.application.interfaces.repositories import IEntityRepository
    from multisearch.application.services.relevance_scorer import RelevanceScorer

logger = get_logger(__name__)


class EntitySearcher:
    """Searches one entity type. Repository failures become an empty, failed outcome."""

    def __init__(
        self,
        repository: "IEntityRepository",
        scorer: "RelevanceScorer",
        merger: ResultMerger | None = None,
        facets: FacetAggregator | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        self.repository = repository
        self.scorer = scorer
        self.merger = merger or ResultMerger()
        self.facets = facets or FacetAggregator()
        self.timeout_seconds = timeout_seconds

    @property
    def entity_type(self) -> EntityType:
        return self.scorer.entity_type

    async def search_all(self, query: SearchQuery) -> EntitySearchOutcome:
        """Return every matching record, scored and sorted by query.sort_by (no paging).

        A repository error or a timeout (when timeout_seconds is set) yields
        an outcome with failed=True and no candidates.
        """
        try:
            return await asyncio.wait_for(self._search_all(query), self.timeout_seconds)
        except Exception as e:
            failure = EntitySearchFailure(self.entity_type.value, e)
            logger.warning("%s", failure.message, exc_info=e)
            return EntitySearchOutcome(entity_type=self.entity_type, failure=failure)

    async def _search_all(self, query: SearchQuery) -> EntitySearchOutcome:
        # only people search hides the caller's own record
        exclude_user_id = (
            query.requesting_user_id if self.entity_type is EntityType.USER else None
        )
        rows = await self.repository.search(
            term=query.term.value,
            filters=query.filters,
            include_inactive=query.include_inactive,
            exclude_user_id=exclude_user_id,
        )
        scored = []
        for row in rows:
            record = record_from_mapping(self.entity_type, row)
            scored.append(
                ScoredCandidate(
                    entity_type=self.entity_type,
                    record=record,
                    relevance_score=self.scorer.score(record, query.term, query.filters),
                )
            )
        ranked = self.merger.sort(scored, query.sort_by)
        logger.debug(
            "%s search for %r matched %d records",
            self.entity_type.value,
            query.term.value,
            len(ranked),
        )
        return EntitySearchOutcome(entity_type=self.entity_type, ranked=ranked)

    async def search(self, query: SearchQuery) -> ScopedSearchResult:
        """Return the requested page plus total and this entity's facets."""
        outcome = await self.search_all(query)
        return ScopedSearchResult(
            entity_type=self.entity_type,
            total=outcome.total,
            results=self.merger.paginate(outcome.ranked, query.page, query.limit),
            facets=self.facets.compute_for_entity(self.entity_type, outcome.ranked),
        )
