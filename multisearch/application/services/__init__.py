"""Application services: scoring, merging, facets, suggestions."""

from multisearch.application.services.facet_aggregator import (
    ENTITY_DIMENSIONS,
    GLOBAL_DIMENSIONS,
    FacetAggregator,
    FacetDimension,
)
from multisearch.application.services.relevance_scorer import (
    PROFILES,
    BonusRule,
    FieldRule,
    RelevanceScorer,
    ScoringProfile,
)
from multisearch.application.services.result_merger import ResultMerger
from multisearch.application.services.suggestion_engine import SuggestionEngine

__all__ = [
    "ENTITY_DIMENSIONS",
    "GLOBAL_DIMENSIONS",
    "PROFILES",
    "BonusRule",
    "FacetAggregator",
    "FacetDimension",
    "FieldRule",
    "RelevanceScorer",
    "ResultMerger",
    "ScoringProfile",
    "SuggestionEngine",
]
