"""DTOs for the in-process search history log."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True, kw_only=True)
class SearchHistoryEntry:
    """One logged search for a user."""

    timestamp: datetime
    term: str
    search_type: str
    result_count: int
    user_id: str


@dataclass(frozen=True)
class TermCount:
    """A search term and how many times it was searched in the window."""

    term: str
    count: int


@dataclass
class SearchAnalytics:
    """Aggregates over in-memory history within a time window (approximate, volatile)."""

    start_date: datetime
    end_date: datetime
    total_searches: int = 0
    unique_users: int = 0
    average_results_per_search: int = 0
    top_searches: list[TermCount] = field(default_factory=list)
    search_type_distribution: dict[str, int] = field(default_factory=dict)
