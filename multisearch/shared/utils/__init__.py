"""Shared utilities: datetime helpers."""

from multisearch.shared.utils.datetime import (
    EPOCH_MIN,
    ensure_utc,
    month_label,
    utc_now,
    whole_days_between,
)

__all__ = [
    "EPOCH_MIN",
    "ensure_utc",
    "month_label",
    "utc_now",
    "whole_days_between",
]
