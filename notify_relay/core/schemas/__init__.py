"""Shared API schemas."""

from notify_relay.core.schemas.problem_details import ProblemDetails

__all__ = ["ProblemDetails"]
