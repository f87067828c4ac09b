"""Prometheus metrics for the MAKIA tutor backend.

Provides metrics for monitoring turn outcomes, stage latency, and sessions.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST

# =============================================================================
# Counters
# =============================================================================

TURN_TOTAL = Counter(
    "makia_turn_total",
    "Total tutoring turns handled",
    ["channel", "outcome"],
)

POINTS_AWARDED = Counter(
    "makia_points_awarded_total",
    "Reward points awarded to learners",
    ["channel"],
)

GENERATION_FALLBACK_TOTAL = Counter(
    "makia_generation_fallback_total",
    "Turns answered with the apology reply because the LLM failed",
)

SESSIONS_EXPIRED = Counter(
    "makia_sessions_expired_total",
    "Sessions removed by the expiry sweeper",
)

# =============================================================================
# Gauges
# =============================================================================

ACTIVE_SESSIONS = Gauge(
    "makia_active_sessions",
    "Sessions currently held in memory",
)

# =============================================================================
# Histograms
# =============================================================================

STAGE_LATENCY = Histogram(
    "makia_stage_latency_seconds",
    "Latency of each external pipeline stage",
    ["stage"],
    buckets=[0.1, 0.25, 0.5, 0.75, 1.0, 1.5, 2.0, 3.0, 5.0, 10.0],
)

# =============================================================================
# Helper Functions
# =============================================================================


def record_turn_metrics(channel: str, outcome: str, points: int = 0) -> None:
    """Record metrics for a finished turn.

    Args:
        channel: "voice" or "text"
        outcome: "completed" or the name of the error that ended the turn
        points: Points awarded (0 for failed turns)
    """
    TURN_TOTAL.labels(channel=channel, outcome=outcome).inc()
    if points > 0:
        POINTS_AWARDED.labels(channel=channel).inc(points)


def record_stage_latency(stage: str, latency_ms: float) -> None:
    """Record latency of a transcription, generation or synthesis call."""
    if latency_ms >= 0:
        STAGE_LATENCY.labels(stage=stage).observe(latency_ms / 1000)


def record_generation_fallback() -> None:
    GENERATION_FALLBACK_TOTAL.inc()


def record_sessions_expired(count: int) -> None:
    if count > 0:
        SESSIONS_EXPIRED.inc(count)


def record_sessions_active(count: int) -> None:
    ACTIVE_SESSIONS.set(count)


def get_metrics() -> bytes:
    """Generate Prometheus metrics output.

    Returns:
        Metrics in Prometheus text exposition format.
    """
    return generate_latest()


def get_content_type() -> str:
    """Get the content type for Prometheus metrics.

    Returns:
        Content-Type header value for Prometheus metrics.
    """
    return CONTENT_TYPE_LATEST
