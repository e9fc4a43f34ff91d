"""Domain enumerations for multisearch.

Enums represent fixed sets of domain values (entity types, sort keys,
history search types).
"""

from enum import Enum


class EntityType(str, Enum):
    """Searchable record category.

    Declaration order is the merge order: results from different entity
    types are concatenated in this order before the global sort, and the
    stable sort keeps it on ties.
    """

    USER = "user"
    JOB = "job"
    EVENT = "event"
    SERVICE = "service"
    INVESTOR = "investor"
    PROJECT = "project"

    @classmethod
    def values(cls) -> list[str]:
        """Return all entity type values in enumeration order."""
        return [entity_type.value for entity_type in cls]

    @classmethod
    def parse(cls, value: "str | EntityType") -> "EntityType":
        """Resolve a value, accepting the plural form used by scoped routes (e.g. 'jobs').

        Raises:
            ValueError: When the value names no entity type.
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        if normalized.endswith("s") and normalized[:-1] in cls.values():
            normalized = normalized[:-1]
        return cls(normalized)


class SortBy(str, Enum):
    """Sort key for result lists."""

    RELEVANCE = "relevance"
    DATE = "date"
    NAME = "name"
    POPULARITY = "popularity"

    @classmethod
    def values(cls) -> list[str]:
        """Return all sort key values."""
        return [sort_by.value for sort_by in cls]

    @classmethod
    def coerce(cls, value: "str | SortBy | None") -> "SortBy":
        """Return the matching sort key; unknown or empty values fall back to relevance."""
        if isinstance(value, cls):
            return value
        if value and str(value).lower() in cls.values():
            return cls(str(value).lower())
        return cls.RELEVANCE


class SearchType(str, Enum):
    """Kind of search recorded in the history log."""

    GLOBAL = "global"
    USER = "user"
    JOB = "job"
    EVENT = "event"
    SERVICE = "service"
    INVESTOR = "investor"
    PROJECT = "project"

    @classmethod
    def for_entity(cls, entity_type: EntityType) -> "SearchType":
        """Return the scoped search type for an entity type."""
        return cls(entity_type.value)
