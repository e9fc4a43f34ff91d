"""Tests for FacetAggregator."""

from datetime import datetime, timezone

import pytest

from multisearch.application.dtos.search import ScoredCandidate
from multisearch.application.services.facet_aggregator import (
    ENTITY_DIMENSIONS,
    FacetAggregator,
)
from multisearch.domain.entities import record_from_mapping
from multisearch.domain.enums import EntityType


def candidate(entity_type: EntityType, record_id: str, **fields) -> ScoredCandidate:
    record = record_from_mapping(entity_type, {"id": record_id, **fields})
    return ScoredCandidate(entity_type, record, 0)


@pytest.fixture
def aggregator() -> FacetAggregator:
    return FacetAggregator()


def test_global_facets_count_entity_types(aggregator: FacetAggregator) -> None:
    results = [
        candidate(EntityType.USER, "u1"),
        candidate(EntityType.USER, "u2"),
        candidate(EntityType.JOB, "j1"),
    ]
    facets = aggregator.compute_global(results)
    assert facets["entityTypes"] == {"user": 2, "job": 1}
    assert sum(facets["entityTypes"].values()) == len(results)


def test_global_facets_have_all_dimensions_even_when_empty(
    aggregator: FacetAggregator,
) -> None:
    facets = aggregator.compute_global([])
    assert facets == {
        "entityTypes": {},
        "locations": {},
        "categories": {},
        "skills": {},
        "companies": {},
    }


def test_missing_and_empty_values_are_not_counted(aggregator: FacetAggregator) -> None:
    results = [
        candidate(EntityType.USER, "u1", location="Berlin"),
        candidate(EntityType.USER, "u2", location=""),
        candidate(EntityType.USER, "u3"),
    ]
    facets = aggregator.compute_global(results)
    assert facets["locations"] == {"Berlin": 1}
    assert sum(facets["locations"].values()) <= len(results)


def test_list_dimension_counts_each_element_once_per_record(
    aggregator: FacetAggregator,
) -> None:
    results = [
        candidate(EntityType.USER, "u1", skills=["Python", "Go", "Python"]),
        candidate(EntityType.SERVICE, "s1", skills=["Python"]),
    ]
    facets = aggregator.compute_global(results)
    assert facets["skills"] == {"Python": 2, "Go": 1}


def test_event_dates_bucket_by_month(aggregator: FacetAggregator) -> None:
    results = [
        candidate(EntityType.EVENT, "e1", startDate=datetime(2026, 4, 2, tzinfo=timezone.utc)),
        candidate(EntityType.EVENT, "e2", startDate="2026-04-20T09:00:00Z"),
        candidate(EntityType.EVENT, "e3"),
    ]
    facets = aggregator.compute_for_entity(EntityType.EVENT, results)
    assert facets["dates"] == {"April 2026": 2}


def test_service_ratings_floor_and_skip_zero(aggregator: FacetAggregator) -> None:
    results = [
        candidate(EntityType.SERVICE, "s1", averageRating=4.7),
        candidate(EntityType.SERVICE, "s2", averageRating=4.1),
        candidate(EntityType.SERVICE, "s3", averageRating=0),
        candidate(EntityType.SERVICE, "s4"),
    ]
    facets = aggregator.compute_for_entity(EntityType.SERVICE, results)
    assert facets["ratings"] == {"4": 2}


def test_project_years(aggregator: FacetAggregator) -> None:
    results = [candidate(EntityType.PROJECT, "p1", startDate="2025-06-01")]
    facets = aggregator.compute_for_entity(EntityType.PROJECT, results)
    assert facets["years"] == {"2025": 1}


@pytest.mark.parametrize("entity_type", list(EntityType))
def test_scoped_facets_use_entity_dimensions(
    aggregator: FacetAggregator, entity_type: EntityType
) -> None:
    facets = aggregator.compute_for_entity(entity_type, [])
    assert list(facets) == [d.name for d in ENTITY_DIMENSIONS[entity_type]]


def test_global_skills_ignore_job_and_project_skill_lists(
    aggregator: FacetAggregator,
) -> None:
    results = [
        candidate(EntityType.USER, "u1", skills=["Python"]),
        candidate(EntityType.JOB, "j1", requiredSkills=["Python", "SQL"]),
        candidate(EntityType.PROJECT, "p1", technologies=["Python"]),
    ]
    facets = aggregator.compute_global(results)
    assert facets["skills"] == {"Python": 1}
