"""Prometheus metrics for relay and orders service observability."""

from __future__ import annotations

from notify_relay.infra.metrics.prometheus import REGISTRY

__all__ = ["REGISTRY"]
