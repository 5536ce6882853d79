from __future__ import annotations

from notify_relay.utils.retry.decorator import retry
from notify_relay.utils.retry.exceptions import RetryError, RetryStatistics
from notify_relay.utils.retry.strategies import Backoff, FixedBackoff, RetryStrategy

__all__ = ["Backoff", "FixedBackoff", "RetryError", "RetryStatistics", "RetryStrategy", "retry"]
