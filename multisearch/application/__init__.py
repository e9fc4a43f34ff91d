"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the repository interfaces.
"""

from multisearch.application.interfaces import IEntityRepository, ISearchHistoryStore
from multisearch.application.use_cases import EntitySearcher, SearchOrchestrator

__all__ = [
    "EntitySearcher",
    "IEntityRepository",
    "ISearchHistoryStore",
    "SearchOrchestrator",
]
