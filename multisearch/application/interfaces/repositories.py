"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
The search core never issues SQL; it only calls these contracts.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from multisearch.domain.entities import EntityRecord


class IEntityRepository(Protocol):
    """Protocol for one entity type's record store (users, jobs, events, ...)."""

    async def search(
        self,
        term: str,
        filters: Mapping[str, Any],
        include_inactive: bool,
        exclude_user_id: str | None = None,
    ) -> Sequence[Mapping[str, Any] | EntityRecord]:
        """Return candidate records whose text fields contain term (case-insensitive).

        Structured filters (location, category, ...) are applied by the
        repository. Inactive records are skipped unless include_inactive.
        exclude_user_id removes the caller's own record from people search.
        """
