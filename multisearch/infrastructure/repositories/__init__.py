"""Entity repositories. Re-exports for dependency injection."""

from multisearch.infrastructure.repositories.in_memory_repo import (
    SEARCH_COLUMNS,
    InMemoryEntityRepository,
)

__all__ = ["SEARCH_COLUMNS", "InMemoryEntityRepository"]
