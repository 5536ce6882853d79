"""Outcome of a bounded retry that ran out of attempts."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class RetryStatistics:
    attempts: int = 0
    total_delay: float = 0.0
    start_time: float = 0.0
    end_time: float = 0.0
    exceptions: list[str] = field(default_factory=list)

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time


class RetryError(Exception):
    """Raised with the final failure as ``__cause__`` and ``last_exception``."""

    def __init__(self, last_exception: Exception, attempts: int, statistics: RetryStatistics | None = None) -> None:
        super().__init__(f"Gave up after {attempts} attempt(s): {last_exception}")
        self.last_exception = last_exception
        self.attempts = attempts
        self.statistics = statistics or RetryStatistics(attempts=attempts)
