"""Tests for Prometheus metrics."""

from __future__ import annotations

from prometheus_client import REGISTRY

from makia.observability.metrics import (
    ACTIVE_SESSIONS,
    get_content_type,
    get_metrics,
    record_generation_fallback,
    record_sessions_active,
    record_sessions_expired,
    record_stage_latency,
    record_turn_metrics,
)


def sample(name: str, labels: dict | None = None) -> float:
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


class TestMetricsModule:
    """Tests for metrics module functions."""

    def test_get_metrics_returns_bytes(self) -> None:
        assert isinstance(get_metrics(), bytes)

    def test_get_content_type(self) -> None:
        content_type = get_content_type()
        assert "text/plain" in content_type or "text/openmetrics" in content_type

    def test_record_completed_turn(self) -> None:
        before_turns = sample("makia_turn_total", {"channel": "voice", "outcome": "completed"})
        before_points = sample("makia_points_awarded_total", {"channel": "voice"})

        record_turn_metrics("voice", "completed", 75)

        assert sample("makia_turn_total", {"channel": "voice", "outcome": "completed"}) == (
            before_turns + 1
        )
        assert sample("makia_points_awarded_total", {"channel": "voice"}) == before_points + 75

    def test_failed_turn_awards_no_points(self) -> None:
        before_points = sample("makia_points_awarded_total", {"channel": "text"})

        record_turn_metrics("text", "EmptyMessageError")

        assert sample("makia_points_awarded_total", {"channel": "text"}) == before_points
        output = get_metrics().decode("utf-8")
        assert 'outcome="EmptyMessageError"' in output

    def test_record_stage_latency(self) -> None:
        before = sample("makia_stage_latency_seconds_count", {"stage": "synthesis"})

        record_stage_latency("synthesis", 420.0)
        record_stage_latency("synthesis", -1.0)  # Ignored

        assert sample("makia_stage_latency_seconds_count", {"stage": "synthesis"}) == before + 1

    def test_record_generation_fallback(self) -> None:
        before = sample("makia_generation_fallback_total")
        record_generation_fallback()
        assert sample("makia_generation_fallback_total") == before + 1

    def test_session_metrics(self) -> None:
        before = sample("makia_sessions_expired_total")

        record_sessions_expired(3)
        record_sessions_expired(0)
        record_sessions_active(7)

        assert sample("makia_sessions_expired_total") == before + 3
        assert ACTIVE_SESSIONS._value.get() == 7


class TestMetricsEndpoint:
    """Tests for GET /metrics."""

    def test_metrics_endpoint(self, test_client) -> None:
        test_client.post("/api/text", json={"message": "Hi", "sessionId": "s1"})

        response = test_client.get("/metrics")

        assert response.status_code == 200
        body = response.text
        assert "makia_turn_total" in body
        assert "makia_active_sessions" in body

    def test_scrape_refreshes_active_sessions(self, test_client) -> None:
        record_sessions_active(99)
        test_client.post("/api/text", json={"message": "Hi", "sessionId": "s1"})
        test_client.post("/api/text", json={"message": "Hi", "sessionId": "s2"})

        body = test_client.get("/metrics").text

        assert "makia_active_sessions 2.0" in body
