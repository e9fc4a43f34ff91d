"""Tests for tracing helpers and telemetry setup."""

import pytest
from opentelemetry.sdk.trace import TracerProvider

from multisearch.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
)
from multisearch.shared.telemetry.tracing import TracedOperation, traced


def test_disabled_telemetry_sets_nothing_up() -> None:
    config = TelemetryConfig("multisearch", "1.0.0", enabled=False)
    assert config.setup_telemetry() is None
    assert config.tracer_provider is None


def test_setup_without_exporter_returns_provider() -> None:
    config = TelemetryConfig("multisearch", "1.0.0", environment="test")
    provider = config.setup_telemetry(exporter_type="none")
    try:
        assert isinstance(provider, TracerProvider)
    finally:
        config.shutdown()


def test_set_and_get_telemetry() -> None:
    config = TelemetryConfig("multisearch", "1.0.0", enabled=False)
    set_telemetry(config)
    try:
        assert get_telemetry() is config
    finally:
        set_telemetry(None)
    assert get_telemetry() is None


def test_traced_rejects_plain_functions() -> None:
    with pytest.raises(TypeError):

        @traced("sync")
        def not_a_coroutine() -> None:
            return None


@pytest.mark.asyncio
async def test_traced_passes_results_and_errors_through() -> None:
    @traced("ok")
    async def ok(value: int, *, page: int = 1) -> int:
        return value * page

    @traced("fails")
    async def fails() -> None:
        raise RuntimeError("boom")

    assert await ok(2, page=3) == 6
    with pytest.raises(RuntimeError):
        await fails()


@pytest.mark.asyncio
async def test_traced_operation_propagates_exceptions() -> None:
    with pytest.raises(ValueError):
        async with TracedOperation("op", {"entity_type": "job"}):
            raise ValueError("bad")
