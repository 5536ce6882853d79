"""Problem Details rendering for errors raised inside request handlers."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from notify_relay.core.exceptions import AppException, status_title
from notify_relay.core.schemas import ProblemDetails

logger = logging.getLogger(__name__)

PROBLEM_JSON = "application/problem+json"


def problem_response(
    request: Request,
    *,
    status_code: int,
    type_: str,
    title: str | None = None,
    detail: str | None = None,
    instance: str | None = None,
    extra: dict[str, Any] | None = None,
) -> JSONResponse:
    """Build an ``application/problem+json`` response.

    ``instance`` falls back to the request path. ``extra`` members sit next
    to the standard ones without overriding them.
    """
    body = ProblemDetails(
        type=type_,
        title=title or status_title(status_code),
        status=status_code,
        detail=detail,
        instance=instance or request.url.path,
    ).model_dump(exclude_none=True)
    for key, value in (extra or {}).items():
        body.setdefault(key, value)
    return JSONResponse(body, status_code=status_code, media_type=PROBLEM_JSON)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    logger.warning(
        "%s %s -> %d %s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.type,
        extra={"status_code": exc.status_code, "problem_type": exc.type},
    )
    return problem_response(
        request,
        status_code=exc.status_code,
        type_=exc.type,
        title=exc.title,
        detail=exc.detail,
        instance=exc.instance,
        extra=exc.extra,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback, answer 500 without internals."""
    logger.exception(
        "Unhandled %s on %s %s",
        type(exc).__name__,
        request.method,
        request.url.path,
    )
    return problem_response(
        request,
        status_code=500,
        type_="internal-server-error",
        detail="An unexpected error occurred.",
    )


def configure_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
