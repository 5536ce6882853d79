"""Schemas for the orders republishing endpoint."""

from __future__ import annotations

from pydantic import BaseModel, Field


class OrdersPublishResponse(BaseModel):
    """Result of publishing one address's open orders."""

    address: str = Field(description="Address as given in the request path")
    queue: str = Field(description="Queue the orders were published to")
    published: int = Field(ge=1, description="Number of orders in the published message")
