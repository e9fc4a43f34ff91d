"""Service interfaces (ports) for the application layer."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from multisearch.application.dtos.history import (
        SearchAnalytics,
        SearchHistoryEntry,
    )


class ISearchHistoryStore(Protocol):
    """Protocol for the per-user bounded search log (DIP)."""

    def log(
        self, user_id: str, term: str, search_type: str, result_count: int
    ) -> None:
        """Append an entry, evicting the oldest past capacity. Never raises."""

    def history(
        self, user_id: str, limit: int = 20, search_type: str | None = None
    ) -> list[SearchHistoryEntry]:
        """Return up to limit entries, most recent first."""

    def analytics(
        self, start_date: datetime | None = None, end_date: datetime | None = None
    ) -> SearchAnalytics:
        """Aggregate all in-memory history within the window."""

    def clear(self, user_id: str, search_type: str | None = None) -> int:
        """Drop a user's history (or only one search type); return entries removed."""

    def clear_all(self) -> None:
        """Drop all history."""
