"""In-memory, per-user search history.

Owned by the composition root: created at startup, discarded at
shutdown, never persisted. Analytics computed from it are approximate
and are lost on restart.
"""

from __future__ import annotations

import math
import threading
from collections import Counter, deque
from collections.abc import Callable
from datetime import datetime, timedelta

from multisearch.application.dtos.history import (
    SearchAnalytics,
    SearchHistoryEntry,
    TermCount,
)
from multisearch.shared.telemetry.logging import get_logger
from multisearch.shared.utils.datetime import ensure_utc, utc_now

logger = get_logger(__name__)


class SearchHistoryStore:
    """Bounded FIFO log of searches per user (oldest evicted past capacity).

    Appends for one user are serialized by that user's lock; creating a
    user's bucket is serialized by the store lock. Safe to share between
    threads and between interleaved coroutines.
    """

    def __init__(
        self,
        capacity: int = 100,
        analytics_window_days: int = 30,
        top_searches_limit: int = 10,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be a positive integer")
        self.capacity = capacity
        self.analytics_window_days = analytics_window_days
        self.top_searches_limit = top_searches_limit
        self._clock = clock
        self._entries: dict[str, deque[SearchHistoryEntry]] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._store_lock = threading.Lock()

    def _bucket(
        self, user_id: str, create: bool = False
    ) -> tuple[threading.Lock, deque[SearchHistoryEntry]] | None:
        with self._store_lock:
            if user_id not in self._entries:
                if not create:
                    return None
                self._entries[user_id] = deque(maxlen=self.capacity)
                self._locks[user_id] = threading.Lock()
            return self._locks[user_id], self._entries[user_id]

    def _snapshot(self) -> list[SearchHistoryEntry]:
        with self._store_lock:
            buckets = [(self._locks[u], self._entries[u]) for u in self._entries]
        entries: list[SearchHistoryEntry] = []
        for lock, bucket in buckets:
            with lock:
                entries.extend(bucket)
        return entries

    def log(
        self, user_id: str, term: str, search_type: str, result_count: int
    ) -> None:
        """Append one entry for user_id. Never raises; failures are logged."""
        try:
            entry = SearchHistoryEntry(
                timestamp=self._clock(),
                term=term,
                search_type=str(search_type),
                result_count=int(result_count),
                user_id=str(user_id),
            )
            lock, bucket = self._bucket(entry.user_id, create=True)
            with lock:
                bucket.append(entry)
            logger.info(
                "Search logged: %s search by user %s for %r returned %d results",
                entry.search_type,
                entry.user_id,
                term,
                entry.result_count,
            )
        except Exception:
            logger.exception("Error logging search activity for user %s", user_id)

    def history(
        self, user_id: str, limit: int = 20, search_type: str | None = None
    ) -> list[SearchHistoryEntry]:
        """Return up to limit entries for user_id, most recent first."""
        found = self._bucket(str(user_id))
        if found is None or limit < 1:
            return []
        lock, bucket = found
        with lock:
            entries = list(bucket)
        entries.reverse()
        if search_type is not None:
            entries = [e for e in entries if e.search_type == str(search_type)]
        return entries[:limit]

    def analytics(
        self, start_date: datetime | None = None, end_date: datetime | None = None
    ) -> SearchAnalytics:
        """Aggregate every user's history within [start_date, end_date].

        Defaults to the last analytics_window_days days. Users count as
        unique only if they searched inside the window.
        """
        end = ensure_utc(end_date) or self._clock()
        start = ensure_utc(start_date) or end - timedelta(days=self.analytics_window_days)
        in_window = [e for e in self._snapshot() if start <= e.timestamp <= end]

        analytics = SearchAnalytics(start_date=start, end_date=end)
        if not in_window:
            return analytics
        analytics.total_searches = len(in_window)
        analytics.unique_users = len({e.user_id for e in in_window})
        total_results = sum(e.result_count for e in in_window)
        # half-up rounding
        analytics.average_results_per_search = math.floor(
            total_results / analytics.total_searches + 0.5
        )
        term_counts = Counter(e.term for e in in_window)
        analytics.top_searches = [
            TermCount(term, count)
            for term, count in term_counts.most_common(self.top_searches_limit)
        ]
        analytics.search_type_distribution = dict(
            Counter(e.search_type for e in in_window)
        )
        return analytics

    def clear(self, user_id: str, search_type: str | None = None) -> int:
        """Remove a user's entries (all, or only one search type); return how many."""
        found = self._bucket(str(user_id))
        if found is None:
            return 0
        lock, bucket = found
        with lock:
            before = len(bucket)
            if search_type is None:
                bucket.clear()
            else:
                kept = [e for e in bucket if e.search_type != str(search_type)]
                bucket.clear()
                bucket.extend(kept)
            removed = before - len(bucket)
        logger.info("Search history cleared for user %s (%d entries)", user_id, removed)
        return removed

    def clear_all(self) -> None:
        """Remove every user's history."""
        with self._store_lock:
            buckets = [(self._locks[u], self._entries[u]) for u in self._entries]
        for lock, bucket in buckets:
            with lock:
                bucket.clear()
        logger.info("All search history cleared")
