"""Process-wide logging setup.

Records are handed to a ``QueueHandler`` on the root logger and written by
a ``QueueListener`` thread, so a slow stderr or disk never stalls the event
loop. dictConfig sets levels and quiets the chatty client libraries; the
handlers behind the queue are built here directly.
"""

from __future__ import annotations

import atexit
import logging
import logging.config
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path
from queue import SimpleQueue
import sys
from typing import TYPE_CHECKING, Any

from notify_relay.infra.logging.context import ContextInjectingFilter
from notify_relay.infra.logging.formatters import ContextTextFormatter, JSONFormatter

if TYPE_CHECKING:
    from notify_relay.core.settings.logs import LoggingSettings

logger = logging.getLogger(__name__)

# Broker and database client libraries log every reconnect at INFO.
QUIET_LOGGERS = ("aiormq", "aio_pika", "faststream", "httpx", "httpcore", "psycopg")


class _State:
    listener: QueueListener | None = None
    handler: QueueHandler | None = None
    configured: bool = False


def shutdown() -> None:
    """Flush queued records and detach the queue handler. Idempotent."""
    if _State.listener is not None:
        _State.listener.stop()
        _State.listener = None
    if _State.handler is not None:
        logging.getLogger().removeHandler(_State.handler)
        _State.handler = None


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **overrides: Any,
) -> None:
    """Configure logging from ``LoggingSettings`` once per process.

    Later calls are no-ops unless ``force`` is set, so every entrypoint
    (CLI group, FastAPI lifespan) can call it unconditionally.
    """
    if _State.configured and not force:
        return
    if log_settings is None:
        from notify_relay.core.settings import get_logging_settings

        log_settings = get_logging_settings()
    configure_logging(**{**log_settings.to_logging_kwargs(), **overrides})
    _State.configured = True


def _output_handlers(
    *,
    formatter: logging.Formatter,
    console_level: str,
    file_level: str,
    console_enabled: bool,
    file_path: Path | None,
    file_max_bytes: int,
    file_backup_count: int,
) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []
    if console_enabled:
        stream = logging.StreamHandler(sys.stderr)
        stream.setLevel(console_level)
        handlers.append(stream)
    if file_path is not None:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        rotating = RotatingFileHandler(
            file_path, maxBytes=file_max_bytes, backupCount=file_backup_count, encoding="utf-8"
        )
        rotating.setLevel(file_level)
        handlers.append(rotating)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def configure_logging(
    log_level: str = "INFO",
    console_level: str | None = None,
    file_path: str | Path | None = None,
    json_logs: bool = True,
    console_enabled: bool = True,
    include_context: bool = True,
    service_name: str = "notify-relay",
    file_max_bytes: int = 10 * 1024 * 1024,
    file_backup_count: int = 5,
    capture_warnings: bool = True,
) -> None:
    """Replace any previous configuration with a fresh queue-backed one.

    ``json_logs`` picks ``JSONFormatter`` (with a static ``service`` field)
    over ``ContextTextFormatter``. ``include_context`` attaches the
    contextvars filter to the queue handler, where it still runs on the
    task that emitted the record.
    """
    shutdown()
    level = log_level.upper()

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "root": {"level": level, "handlers": []},
            "loggers": {name: {"level": "WARNING"} for name in QUIET_LOGGERS},
        }
    )
    logging.captureWarnings(capture_warnings)

    formatter: logging.Formatter = (
        JSONFormatter(static={"service": service_name}) if json_logs else ContextTextFormatter()
    )
    handlers = _output_handlers(
        formatter=formatter,
        console_level=(console_level or level).upper(),
        file_level=level,
        console_enabled=console_enabled,
        file_path=Path(file_path) if file_path else None,
        file_max_bytes=file_max_bytes,
        file_backup_count=file_backup_count,
    )

    queue: SimpleQueue[logging.LogRecord] = SimpleQueue()
    _State.handler = QueueHandler(queue)
    if include_context:
        _State.handler.addFilter(ContextInjectingFilter())
    logging.getLogger().addHandler(_State.handler)

    if handlers:
        _State.listener = QueueListener(queue, *handlers, respect_handler_level=True)
        _State.listener.start()
        atexit.register(shutdown)

    logger.debug("Logging configured", extra={"json_logs": json_logs, "handlers": len(handlers)})
