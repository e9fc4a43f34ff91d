"""In-memory entity repository: substring search over a list of raw rows.

Reference implementation of IEntityRepository for local runs, demos and
tests. A SQL-backed repository implements the same contract with LIKE
clauses over the same columns.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from pydantic.alias_generators import to_snake

from multisearch.domain.entities import RECORD_TYPES
from multisearch.domain.enums import EntityType
from multisearch.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

# Columns matched against the term, per entity type.
SEARCH_COLUMNS: dict[EntityType, tuple[str, ...]] = {
    EntityType.USER: ("name", "title", "company", "location", "skills"),
    EntityType.JOB: ("title", "company", "description", "required_skills", "location"),
    EntityType.EVENT: ("title", "description", "organizer", "location", "event_type"),
    EntityType.SERVICE: (
        "service_name",
        "description",
        "category",
        "provider_name",
        "skills",
    ),
    EntityType.INVESTOR: (
        "name",
        "company",
        "description",
        "location",
        "investment_focus",
    ),
    EntityType.PROJECT: (
        "project_name",
        "description",
        "category",
        "technologies",
        "project_url",
    ),
}


def _normalize(row: Mapping[str, Any]) -> dict[str, Any]:
    return {to_snake(key): value for key, value in row.items()}


def _contains(value: Any, needle: str) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return needle in value.lower()
    if isinstance(value, Iterable):
        return any(_contains(item, needle) for item in value)
    return needle in str(value).lower()


def _matches_filter(value: Any, expected: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (list, tuple, set)):
        return any(_matches_filter(item, expected) for item in value)
    if isinstance(value, str) and isinstance(expected, str):
        return value.lower() == expected.lower()
    return value == expected


class InMemoryEntityRepository:
    """Holds raw rows for one entity type and answers IEntityRepository.search.

    Rows are plain mappings (snake_case or camelCase keys). A row is
    inactive when is_active is False. Filters apply only to keys that are
    fields of the entity type; other filter keys are ignored.
    """

    def __init__(
        self,
        entity_type: EntityType,
        rows: Iterable[Mapping[str, Any]] = (),
        search_columns: Sequence[str] | None = None,
    ) -> None:
        self.entity_type = entity_type
        self._rows: list[Mapping[str, Any]] = list(rows)
        self.search_columns = tuple(search_columns or SEARCH_COLUMNS[entity_type])
        self._filterable = RECORD_TYPES[entity_type].field_names()

    def add(self, row: Mapping[str, Any]) -> None:
        self._rows.append(row)

    def __len__(self) -> int:
        return len(self._rows)

    async def search(
        self,
        term: str,
        filters: Mapping[str, Any],
        include_inactive: bool,
        exclude_user_id: str | None = None,
    ) -> list[Mapping[str, Any]]:
        needle = term.lower()
        active_filters = {
            to_snake(key): value
            for key, value in (filters or {}).items()
            if to_snake(key) in self._filterable and value not in (None, "")
        }
        matches: list[Mapping[str, Any]] = []
        for row in self._rows:
            fields = _normalize(row)
            if not include_inactive and fields.get("is_active") is False:
                continue
            if exclude_user_id is not None and str(fields.get("id")) == str(exclude_user_id):
                continue
            if not any(_contains(fields.get(col), needle) for col in self.search_columns):
                continue
            if all(
                _matches_filter(fields.get(key), expected)
                for key, expected in active_filters.items()
            ):
                matches.append(row)
        logger.debug(
            "In-memory %s search for %r matched %d of %d rows",
            self.entity_type.value,
            term,
            len(matches),
            len(self._rows),
        )
        return matches
