"""Tests for EntitySearcher: repository call, scoring, failure isolation."""

import asyncio

import pytest

from multisearch.application.dtos.search import SearchQuery
from multisearch.application.services.relevance_scorer import RelevanceScorer
from multisearch.application.use_cases.entity_search import EntitySearcher
from multisearch.domain.entities import record_from_mapping
from multisearch.domain.enums import EntityType
from multisearch.domain.exceptions import EntitySearchFailure
from tests.conftest import SAMPLE_ROWS, fixed_clock, mock_repository


def make_searcher(entity_type: EntityType, repository, **kwargs) -> EntitySearcher:
    return EntitySearcher(
        repository, RelevanceScorer.for_entity(entity_type, clock=fixed_clock), **kwargs
    )


@pytest.mark.asyncio
async def test_search_all_scores_and_sorts_rows() -> None:
    repo = mock_repository(
        [
            {"id": "j3", "title": "Senior Software Engineer"},
            {"id": "j1", "title": "Software Engineer"},
            {"id": "j2", "title": "Software Engineering Intern"},
        ]
    )
    searcher = make_searcher(EntityType.JOB, repo)

    outcome = await searcher.search_all(SearchQuery.build("Software Engineer"))

    assert not outcome.failed
    assert outcome.ranked[0].record.display_name == "Software Engineer"
    assert [c.relevance_score for c in outcome.ranked] == [150, 150, 100]
    assert outcome.ranked[-1].record.id == "j3"


@pytest.mark.asyncio
async def test_passes_query_options_to_repository() -> None:
    repo = mock_repository()
    searcher = make_searcher(EntityType.JOB, repo)
    query = SearchQuery.build(
        "  python ", filters={"location": "London"}, include_inactive=True, user_id="u9"
    )

    await searcher.search_all(query)

    repo.search.assert_awaited_once_with(
        term="python",
        filters={"location": "London"},
        include_inactive=True,
        exclude_user_id=None,
    )


@pytest.mark.asyncio
async def test_user_search_excludes_requesting_user() -> None:
    repo = mock_repository()
    searcher = make_searcher(EntityType.USER, repo)

    await searcher.search_all(SearchQuery.build("python", user_id="u9"))

    assert repo.search.await_args.kwargs["exclude_user_id"] == "u9"


@pytest.mark.asyncio
async def test_repository_error_becomes_failed_outcome() -> None:
    repo = mock_repository()
    repo.search.side_effect = ConnectionError("database unavailable")
    searcher = make_searcher(EntityType.JOB, repo)

    outcome = await searcher.search_all(SearchQuery.build("python"))

    assert outcome.failed
    assert outcome.ranked == []
    assert isinstance(outcome.failure, EntitySearchFailure)
    assert isinstance(outcome.failure.cause, ConnectionError)
    assert outcome.failure.details == {"entity_type": "job", "cause": "ConnectionError"}


@pytest.mark.asyncio
async def test_malformed_row_fails_only_this_branch() -> None:
    repo = mock_repository([{"title": "no id"}])
    searcher = make_searcher(EntityType.JOB, repo)

    outcome = await searcher.search_all(SearchQuery.build("python"))

    assert outcome.failed
    assert isinstance(outcome.failure.cause, ValueError)


@pytest.mark.asyncio
async def test_timeout_becomes_failed_outcome() -> None:
    async def slow_search(**kwargs):
        await asyncio.sleep(1)
        return []

    repo = mock_repository()
    repo.search.side_effect = slow_search
    searcher = make_searcher(EntityType.EVENT, repo, timeout_seconds=0.01)

    outcome = await searcher.search_all(SearchQuery.build("python"))

    assert outcome.failed
    assert isinstance(outcome.failure.cause, TimeoutError)


@pytest.mark.asyncio
async def test_search_returns_page_total_and_entity_facets() -> None:
    rows = [
        {"id": f"s{i}", "serviceName": f"Python service {i}", "category": "Consulting"}
        for i in range(5)
    ]
    searcher = make_searcher(EntityType.SERVICE, mock_repository(rows))

    result = await searcher.search(SearchQuery.build("python", page=2, limit=2))

    assert result.entity_type is EntityType.SERVICE
    assert result.total == 5
    assert [c.record.id for c in result.results] == ["s2", "s3"]
    assert result.facets["categories"] == {"Consulting": 5}


@pytest.mark.asyncio
async def test_failed_scoped_search_is_empty() -> None:
    repo = mock_repository()
    repo.search.side_effect = RuntimeError("boom")
    searcher = make_searcher(EntityType.PROJECT, repo)

    result = await searcher.search(SearchQuery.build("python"))

    assert result.total == 0
    assert result.results == []


@pytest.mark.asyncio
async def test_accepts_typed_records_from_repository() -> None:
    record = record_from_mapping(EntityType.INVESTOR, SAMPLE_ROWS[EntityType.INVESTOR][0])
    searcher = make_searcher(EntityType.INVESTOR, mock_repository([record]))

    outcome = await searcher.search_all(SearchQuery.build("python"))

    assert outcome.ranked[0].record is record
    assert outcome.ranked[0].relevance_score == 50
