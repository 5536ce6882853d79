"""Unit tests for metric tracking helpers."""

from __future__ import annotations

import pytest

from notify_relay.infra.messaging import ConnectionState
from notify_relay.infra.metrics import REGISTRY
from notify_relay.infra.metrics.tracking import (
    track_connection_state,
    track_orders_request,
    track_rejected,
)


def _sample(name: str, labels: dict[str, str] | None = None) -> float:
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


@pytest.mark.unit
class TestTracking:
    """Counters and gauges on the dedicated registry."""

    def test_connection_state_is_one_hot(self):
        """Test exactly the current state is set for a component."""
        track_connection_state("broker", ConnectionState.CONNECTING, ConnectionState)
        track_connection_state("broker", ConnectionState.CONNECTED, ConnectionState)

        values = {
            state.value: _sample("relay_connection_state", {"component": "broker", "state": state.value})
            for state in ConnectionState
        }
        assert values == {"disconnected": 0.0, "connecting": 0.0, "connected": 1.0, "error": 0.0}

    def test_rejections_counted_by_reason(self):
        """Test each rejection reason has its own counter."""
        before = _sample("relay_events_rejected_total", {"reason": "unknown-topic"})

        track_rejected("unknown-topic")
        track_rejected("unknown-topic")

        assert _sample("relay_events_rejected_total", {"reason": "unknown-topic"}) == before + 2

    def test_published_orders_request_counts_batch(self):
        """Test only a published outcome bumps the batch counter."""
        batches = _sample("orders_published_total")
        not_found = _sample("orders_requests_total", {"outcome": "not_found"})

        track_orders_request("not_found")
        track_orders_request("published")

        assert _sample("orders_published_total") == batches + 1
        assert _sample("orders_requests_total", {"outcome": "not_found"}) == not_found + 1
