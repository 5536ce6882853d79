"""Health check response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class LivenessResponse(BaseModel):
    alive: bool = Field(description="Whether the process is alive")
    timestamp: datetime


class ReadinessResponse(BaseModel):
    ready: bool = Field(description="Whether the service can take requests")
    checks: dict[str, bool] = Field(default_factory=dict, description="Per-dependency status")
    timestamp: datetime
