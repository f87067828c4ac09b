"""Observability module for metrics."""

from makia.observability.metrics import (
    ACTIVE_SESSIONS,
    GENERATION_FALLBACK_TOTAL,
    POINTS_AWARDED,
    SESSIONS_EXPIRED,
    STAGE_LATENCY,
    TURN_TOTAL,
    record_stage_latency,
    record_turn_metrics,
)

__all__ = [
    "TURN_TOTAL",
    "POINTS_AWARDED",
    "GENERATION_FALLBACK_TOTAL",
    "SESSIONS_EXPIRED",
    "ACTIVE_SESSIONS",
    "STAGE_LATENCY",
    "record_turn_metrics",
    "record_stage_latency",
]
