"""Pytest configuration and fixtures for multisearch.

Repositories are either AsyncMock ports (unit tests) or
InMemoryEntityRepository instances holding the sample rows below. All
scoring uses a fixed clock so recency bonuses are deterministic.
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from multisearch.application.services.relevance_scorer import RelevanceScorer
from multisearch.application.use_cases.entity_search import EntitySearcher
from multisearch.application.use_cases.search import SearchOrchestrator
from multisearch.core.search_history_store import SearchHistoryStore
from multisearch.domain.enums import EntityType
from multisearch.infrastructure.repositories import InMemoryEntityRepository

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)


def fixed_clock() -> datetime:
    return NOW


def days_ago(days: int) -> str:
    return (NOW - timedelta(days=days)).isoformat()


SAMPLE_ROWS: dict[EntityType, list[dict]] = {
    EntityType.USER: [
        {
            "id": "u1",
            "name": "Ada Python",
            "title": "Staff Engineer",
            "company": "Analytical Engines",
            "location": "London",
            "skills": ["Python", "Go"],
            "profileCompletion": 95,
            "connectionCount": 250,
            "created_at": days_ago(400),
            "views": 40,
        },
        {
            "id": "u2",
            "name": "Grace Hopper",
            "title": "Python Developer",
            "company": "Navy",
            "location": "Arlington",
            "skills": "COBOL",
            "created_at": days_ago(10),
            "views": 5,
        },
    ],
    EntityType.JOB: [
        {
            "id": "j1",
            "title": "Python Engineer",
            "company": "Acme",
            "description": "Build Python services",
            "requiredSkills": ["Python", "SQL"],
            "location": "London",
            "salaryRange": "100k-120k",
            "created_at": days_ago(3),
            "views": 120,
        },
        {
            "id": "j2",
            "title": "Data Analyst",
            "company": "Python Labs",
            "description": "Dashboards",
            "requiredSkills": [],
            "location": "Remote",
            "created_at": days_ago(20),
            "views": 12,
            "is_active": False,
        },
    ],
    EntityType.EVENT: [
        {
            "id": "e1",
            "title": "PyCon Python Summit",
            "description": "All things Python",
            "organizer": "PSF",
            "location": "Pittsburgh",
            "eventType": "conference",
            "eventMode": "in-person",
            "startDate": "2026-05-14T09:00:00+00:00",
            "created_at": days_ago(60),
            "views": 300,
        },
    ],
    EntityType.SERVICE: [
        {
            "id": "s1",
            "serviceName": "Python Code Review",
            "description": "Reviews for Python codebases",
            "category": "Consulting",
            "providerName": "Review Co",
            "location": "Berlin",
            "skills": ["Python"],
            "averageRating": 4.6,
            "priceRange": "$$",
            "created_at": days_ago(5),
        },
    ],
    EntityType.INVESTOR: [
        {
            "id": "i1",
            "name": "Seed Capital",
            "company": "Seed Partners",
            "investmentFocus": ["Python tooling", "DevTools"],
            "description": "Backs developer tools",
            "location": "London",
            "fundSize": "large",
            "investmentStage": "seed",
            "created_at": days_ago(90),
        },
    ],
    EntityType.PROJECT: [
        {
            "id": "p1",
            "projectName": "pytest-python-plugin",
            "description": "A plugin",
            "technologies": ["Python", "pytest"],
            "category": "Open Source",
            "projectUrl": "https://example.org/python",
            "status": "completed",
            "ownerName": "Ada Python",
            "startDate": "2024-02-01",
            "created_at": days_ago(700),
        },
    ],
}


def make_orchestrator(
    repositories: dict[EntityType, object],
    history_store: SearchHistoryStore | None = None,
    timeout_seconds: float | None = None,
) -> SearchOrchestrator:
    """Wire an orchestrator over the given repositories with the fixed clock."""
    searchers = {
        entity_type: EntitySearcher(
            repository,
            RelevanceScorer.for_entity(entity_type, clock=fixed_clock),
            timeout_seconds=timeout_seconds,
        )
        for entity_type, repository in repositories.items()
    }
    return SearchOrchestrator(
        searchers, history_store or SearchHistoryStore(clock=fixed_clock)
    )


def mock_repository(rows: list[dict] | None = None) -> AsyncMock:
    """AsyncMock implementing IEntityRepository.search with fixed rows."""
    repo = AsyncMock()
    repo.search = AsyncMock(return_value=list(rows or []))
    return repo


@pytest.fixture
def history_store() -> SearchHistoryStore:
    return SearchHistoryStore(clock=fixed_clock)


@pytest.fixture
def in_memory_repositories() -> dict[EntityType, InMemoryEntityRepository]:
    return {
        entity_type: InMemoryEntityRepository(entity_type, rows)
        for entity_type, rows in SAMPLE_ROWS.items()
    }


@pytest.fixture
def empty_repositories() -> dict[EntityType, AsyncMock]:
    return {entity_type: mock_repository() for entity_type in EntityType}


@pytest.fixture
def orchestrator(in_memory_repositories, history_store) -> SearchOrchestrator:
    return make_orchestrator(in_memory_repositories, history_store)
