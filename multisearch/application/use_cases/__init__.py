"""Application use cases: one entry point per workflow."""

from multisearch.application.use_cases.entity_search import EntitySearcher
from multisearch.application.use_cases.search import SearchOrchestrator

__all__ = ["EntitySearcher", "SearchOrchestrator"]
