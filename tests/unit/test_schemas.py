"""Tests for response schemas (camelCase dumps)."""

import pytest

from multisearch.core.search_history_store import SearchHistoryStore
from multisearch.domain.enums import EntityType
from multisearch.schemas import (
    RelevanceExplanationResponse,
    ScopedSearchResponse,
    SearchAnalyticsResponse,
    SearchHistoryEntryResponse,
    SearchResultPageResponse,
)
from tests.conftest import NOW, SAMPLE_ROWS, fixed_clock


@pytest.mark.asyncio
async def test_search_page_dumps_camel_case(orchestrator) -> None:
    page = await orchestrator.global_search("python", limit=1)

    data = SearchResultPageResponse.from_page(page).model_dump(by_alias=True)

    assert data["totalResults"] == 7
    assert data["totalPages"] == 7
    assert data["results"][0]["entityType"] == "service"
    assert data["results"][0]["relevanceScore"] == 225
    assert data["results"][0]["serviceName"] == "Python Code Review"
    assert data["facets"]["entityTypes"]["user"] == 2


@pytest.mark.asyncio
async def test_scoped_response(orchestrator) -> None:
    result = await orchestrator.search_scoped("investors", "python")

    data = ScopedSearchResponse.from_result(result).model_dump(by_alias=True)

    assert data["entityType"] == "investor"
    assert data["total"] == 1
    assert data["results"][0]["investmentFocus"] == ["Python tooling", "DevTools"]
    assert data["facets"]["fundSizes"] == {"large": 1}


def test_explanation_response(orchestrator) -> None:
    explanation = orchestrator.explain_relevance(
        "service", SAMPLE_ROWS[EntityType.SERVICE][0], "python"
    )

    data = RelevanceExplanationResponse.from_explanation(explanation).model_dump(
        by_alias=True
    )

    assert data["recordId"] == "s1"
    assert data["relevanceScore"] == 225
    assert data["contributions"][0] == {"rule": "service_name", "points": 100}


def test_history_and_analytics_responses() -> None:
    store = SearchHistoryStore(clock=fixed_clock)
    store.log("u1", "python", "global", 4)

    [entry] = store.history("u1")
    entry_data = SearchHistoryEntryResponse.from_entry(entry).model_dump(by_alias=True)
    analytics_data = SearchAnalyticsResponse.from_analytics(store.analytics()).model_dump(
        by_alias=True
    )

    assert entry_data == {
        "timestamp": NOW,
        "term": "python",
        "searchType": "global",
        "resultCount": 4,
        "userId": "u1",
    }
    assert analytics_data["totalSearches"] == 1
    assert analytics_data["averageResultsPerSearch"] == 4
    assert analytics_data["topSearches"] == [{"term": "python", "count": 1}]
    assert analytics_data["searchTypeDistribution"] == {"global": 1}
