"""Health check endpoints.

- Liveness probe: /health/live
- Readiness probe: /health/ready (broker connected)
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from faststream.rabbit import RabbitBroker
from fastapi import APIRouter, Depends, Response, status

from notify_relay.features.orders.dependencies import get_broker
from notify_relay.features.status.schemas import LivenessResponse, ReadinessResponse

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/live", response_model=LivenessResponse, summary="Liveness probe")
async def liveness_check() -> LivenessResponse:
    """Return 200 while the process is able to serve requests."""
    return LivenessResponse(alive=True, timestamp=datetime.now(UTC))


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Broker not connected"}},
    summary="Readiness probe",
)
async def readiness_check(
    response: Response,
    broker: Annotated[RabbitBroker, Depends(get_broker)],
) -> ReadinessResponse:
    """Return 200 when the broker connection is up, 503 otherwise."""
    try:
        ready = await broker.ping(timeout=2.0)
    except Exception:
        ready = False
    if not ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return ReadinessResponse(ready=ready, checks={"rabbitmq": ready}, timestamp=datetime.now(UTC))
