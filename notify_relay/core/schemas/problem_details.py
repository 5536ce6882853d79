"""Error body returned by the HTTP service (RFC 7807)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ProblemDetails(BaseModel):
    """Standard members of an ``application/problem+json`` document.

    Problem-specific members such as ``address`` or ``queue`` are added
    next to these when the response is built.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "type": "orders-not-found",
                "title": "Not Found",
                "status": 404,
                "detail": "No open orders for address 0xabc",
                "instance": "/api/v1/orders/0xabc/publish",
            }
        },
    )

    type: str = Field(default="about:blank", min_length=1)
    title: str = Field(min_length=1)
    status: int = Field(ge=400, le=599)
    detail: str | None = None
    instance: str | None = None
