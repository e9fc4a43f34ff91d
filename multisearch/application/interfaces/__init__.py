"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from multisearch.infrastructure.
"""

from multisearch.application.interfaces.repositories import IEntityRepository
from multisearch.application.interfaces.services import ISearchHistoryStore

__all__ = ["IEntityRepository", "ISearchHistoryStore"]
