"""Custom exception classes for the relay and the orders HTTP service."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any

# ──────────────────────────────────────────────────────────────────────────────
# Relay errors
# ──────────────────────────────────────────────────────────────────────────────


class RelayError(Exception):
    """Base class for relay failures."""


class ConfigurationError(RelayError):
    """Required configuration is missing or invalid. Fatal at startup."""


class ExchangeProvisioningError(RelayError):
    """The broker refused to declare a target exchange. Fatal at startup.

    Attributes:
        exchange: Name of the exchange being declared.
        reply_code: AMQP reply code reported by the broker, if any.
    """

    def __init__(self, exchange: str, reason: str, reply_code: int | None = None) -> None:
        self.exchange = exchange
        self.reply_code = reply_code
        self.reason = reason
        super().__init__(f"Cannot declare exchange '{exchange}': {reason}")


class ExchangeConflictError(ExchangeProvisioningError):
    """Exchange already exists with a different type or flags (AMQP 406)."""


class ExchangeAccessError(ExchangeProvisioningError):
    """Credentials are not allowed to configure the exchange (AMQP 403)."""


class PublishError(RelayError):
    """A publish did not reach the broker."""


class PublishNotConfirmedError(PublishError):
    """The broker answered the publish with a negative confirm."""

    def __init__(self, exchange: str, routing_key: str, confirmation: str) -> None:
        self.exchange = exchange
        self.routing_key = routing_key
        self.confirmation = confirmation
        super().__init__(
            f"Publish to '{exchange}' with key '{routing_key}' was not confirmed ({confirmation})"
        )


# ──────────────────────────────────────────────────────────────────────────────
# HTTP errors
# ──────────────────────────────────────────────────────────────────────────────


class AppException(Exception):
    """An error the HTTP layer renders as an RFC 7807 Problem Details body.

    Subclasses fix ``status_code`` and a default ``type``; ``extra`` members
    are merged into the top level of the response body.
    """

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    default_type: str = "about:blank"

    def __init__(
        self,
        detail: str,
        *,
        type: str | None = None,
        title: str | None = None,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
        status_code: int | None = None,
    ) -> None:
        if status_code is not None:
            self.status_code = status_code
        self.detail = detail
        self.type = type or self.default_type
        self.title = title or status_title(self.status_code)
        self.instance = instance
        self.extra = dict(extra or {})
        super().__init__(detail)


def status_title(status_code: int) -> str:
    """Standard reason phrase for ``status_code``, or ``"Error"``."""
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


class NotFoundException(AppException):
    """Nothing matched the request, e.g. no open orders for an address."""

    status_code = HTTPStatus.NOT_FOUND
    default_type = "not-found"


class UpstreamException(AppException):
    """An upstream HTTP dependency failed or answered nonsense."""

    status_code = HTTPStatus.BAD_GATEWAY
    default_type = "upstream-error"


class PublishFailedException(AppException):
    """A message could not be handed to the broker."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    default_type = "publish-failed"
