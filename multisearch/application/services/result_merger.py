"""Merging, sorting and pagination of scored results.

All sorts are stable: on equal keys the prior order is kept, which for a
merged list is the entity enumeration order (user, job, event, service,
investor, project).
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from typing import Any

from multisearch.application.dtos.search import EntitySearchOutcome, ScoredCandidate
from multisearch.domain.enums import EntityType, SortBy
from multisearch.shared.utils.datetime import EPOCH_MIN

_SORT_KEYS: dict[SortBy, tuple[Callable[[ScoredCandidate], Any], bool]] = {
    SortBy.RELEVANCE: (lambda c: c.relevance_score, True),
    SortBy.DATE: (lambda c: c.record.created_at or EPOCH_MIN, True),
    SortBy.NAME: (lambda c: c.record.display_name.casefold(), False),
    SortBy.POPULARITY: (lambda c: c.record.views or 0, True),
}


class ResultMerger:
    """Combines per-entity outcomes into one globally ordered list."""

    def combine(self, outcomes: Iterable[EntitySearchOutcome]) -> list[ScoredCandidate]:
        """Concatenate successful outcomes in entity enumeration order.

        Failed outcomes contribute nothing. Input order does not matter.
        """
        by_type = {o.entity_type: o for o in outcomes if not o.failed}
        combined: list[ScoredCandidate] = []
        for entity_type in EntityType:
            outcome = by_type.get(entity_type)
            if outcome is not None:
                combined.extend(outcome.ranked)
        return combined

    def sort(
        self, results: Iterable[ScoredCandidate], sort_by: SortBy
    ) -> list[ScoredCandidate]:
        """Return a new list stably sorted by sort_by."""
        key, descending = _SORT_KEYS[SortBy.coerce(sort_by)]
        return sorted(results, key=key, reverse=descending)

    @staticmethod
    def paginate(
        results: list[ScoredCandidate], page: int, limit: int
    ) -> list[ScoredCandidate]:
        """Return results[(page-1)*limit : page*limit]; out of range gives []."""
        start = (page - 1) * limit
        return results[start : start + limit]

    @staticmethod
    def total_pages(total: int, limit: int) -> int:
        return math.ceil(total / limit) if limit else 0
