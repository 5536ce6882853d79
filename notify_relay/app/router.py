"""Router registration."""

from __future__ import annotations

from fastapi import FastAPI

from notify_relay.features.orders.router import router as orders_router
from notify_relay.features.status.router import router as status_router

API_PREFIX = "/api/v1"


def setup_routers(app: FastAPI) -> None:
    app.include_router(status_router)
    app.include_router(orders_router, prefix=API_PREFIX)
