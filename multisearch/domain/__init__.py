"""Domain layer: entity records, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from multisearch.domain.entities import EntityRecord, record_from_mapping
from multisearch.domain.enums import EntityType, SearchType, SortBy
from multisearch.domain.exceptions import (
    EntitySearchFailure,
    InvalidQueryException,
    MultiSearchException,
    UnknownEntityTypeException,
    ValidationException,
)
from multisearch.domain.value_objects import SearchTerm

__all__ = [
    "EntityRecord",
    "EntitySearchFailure",
    "EntityType",
    "InvalidQueryException",
    "MultiSearchException",
    "SearchTerm",
    "SearchType",
    "SortBy",
    "UnknownEntityTypeException",
    "ValidationException",
    "record_from_mapping",
]
