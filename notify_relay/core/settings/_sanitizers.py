"""Value clean-up shared by the settings models."""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import urlsplit, urlunsplit

# "5  # seconds" -> "5"; "foo#bar" has no whitespace before '#' and is kept.
_INLINE_COMMENT = re.compile(r"(^|\s+)#.*$")


def strip_inline_comment(value: str) -> str:
    """Drop a trailing ``# comment`` that some env-file loaders leave in."""
    return _INLINE_COMMENT.sub("", value).strip()


def sanitize_inline_numeric(value: Any) -> Any:
    """``mode="before"`` validator body for numeric env values."""
    if isinstance(value, str):
        return strip_inline_comment(value) or value
    return value


def redact_url(url: str) -> str:
    """Mask the password of a connection URL so it can be logged."""
    parts = urlsplit(url)
    if parts.password is None:
        return url
    host = parts.netloc.rpartition("@")[2]
    return urlunsplit(parts._replace(netloc=f"{parts.username or ''}:***@{host}"))
