"""Composition root: builds the search stack from settings and repositories.

Single place for startup/shutdown wiring (SRP). The history store is
created here and nowhere else; it lives exactly as long as the container.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import TYPE_CHECKING

from multisearch.application.services.facet_aggregator import FacetAggregator
from multisearch.application.services.relevance_scorer import RelevanceScorer
from multisearch.application.services.result_merger import ResultMerger
from multisearch.application.services.suggestion_engine import SuggestionEngine
from multisearch.application.use_cases.entity_search import EntitySearcher
from multisearch.application.use_cases.search import SearchOrchestrator
from multisearch.core.config import Settings, get_settings
from multisearch.core.search_history_store import SearchHistoryStore
from multisearch.domain.enums import EntityType
from multisearch.shared.telemetry.logging import get_logger, setup_logging
from multisearch.shared.telemetry.telemetry import TelemetryConfig, set_telemetry
from multisearch.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from multisearch.application.interfaces.repositories import IEntityRepository

logger = get_logger(__name__)


class SearchContainer:
    """Owns one orchestrator and its history store for the process lifetime.

    Usage:
        async with SearchContainer(repositories) as container:
            page = await container.orchestrator.global_search("python")
    """

    def __init__(
        self,
        repositories: Mapping[EntityType, "IEntityRepository"],
        settings: Settings | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.settings = settings or get_settings()
        self.clock = clock
        self.telemetry: TelemetryConfig | None = None
        merger = ResultMerger()
        facets = FacetAggregator()
        self.history_store = SearchHistoryStore(
            capacity=self.settings.history_capacity,
            analytics_window_days=self.settings.analytics_window_days,
            clock=clock,
        )
        searchers = {
            entity_type: EntitySearcher(
                repository,
                RelevanceScorer.for_entity(entity_type, clock=clock),
                merger=merger,
                facets=facets,
                timeout_seconds=self.settings.search_branch_timeout_seconds,
            )
            for entity_type, repository in repositories.items()
        }
        missing = [t.value for t in EntityType if t not in searchers]
        if missing:
            logger.warning("No repository configured for: %s", ", ".join(missing))
        self.orchestrator = SearchOrchestrator(
            searchers,
            self.history_store,
            merger=merger,
            facets=facets,
            suggestions=SuggestionEngine(max_suggestions=self.settings.suggestions_max),
            min_term_length=self.settings.search_min_term_length,
            default_limit=self.settings.search_default_limit,
            max_limit=self.settings.search_max_limit,
            history_default_limit=self.settings.history_default_limit,
        )

    def startup(self) -> None:
        """Configure logging and initialize telemetry when enabled."""
        setup_logging(self.settings.debug)
        if self.settings.telemetry_enabled:
            self.telemetry = TelemetryConfig(
                service_name=self.settings.app_name,
                service_version=self.settings.app_version,
                enabled=True,
                environment=self.settings.telemetry_environment,
            )
            self.telemetry.setup_telemetry(
                exporter_type=self.settings.telemetry_exporter,
                otlp_endpoint=self.settings.telemetry_otlp_endpoint,
                sample_rate=self.settings.telemetry_sample_rate,
            )
            self.telemetry.instrument_logging()
            set_telemetry(self.telemetry)
            logger.info("Telemetry initialized")
        logger.info(
            "Search container started with %d entity searchers",
            len(self.orchestrator.searchers),
        )

    def shutdown(self) -> None:
        """Flush telemetry and discard all in-memory search history."""
        self.history_store.clear_all()
        if self.telemetry is not None:
            self.telemetry.shutdown()
            set_telemetry(None)
            self.telemetry = None
        logger.info("Search container shut down")

    async def __aenter__(self) -> SearchContainer:
        self.startup()
        return self

    async def __aexit__(self, exc_type: type | None, exc: BaseException | None, tb: object) -> None:
        self.shutdown()
