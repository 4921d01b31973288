"""Centralized logging helpers.

Provides one place to configure handlers/levels plus the small utilities used
for structured DEBUG traces: context dicts for ``extra=``, URL redaction and a
duration timer.
"""
from __future__ import annotations

import logging
import os
import re
import time
from typing import Any, Dict, Optional
from urllib.parse import urlsplit, urlunsplit

from constants import Constants

_SENSITIVE_PARAM = re.compile(r"(?i)\b(token|password|passwd|secret|key|auth)=([^&\s]+)")


def configure_logging(log_file: Optional[str] = None) -> None:
    """Configure the root logger.

    Level comes from PFCHECK_LOG_LEVEL (default INFO). Calling this twice
    replaces the handlers installed by the previous call.
    """
    level_name = os.environ.get(Constants.ENV_LOG_LEVEL, "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_pfcheck", False):
            root.removeHandler(handler)

    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    formatter = logging.Formatter(Constants.LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler._pfcheck = True  # type: ignore[attr-defined]  # pylint: disable=protected-access
        root.addHandler(handler)
    root.setLevel(level)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records from ``logger`` would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**kwargs: Any) -> Dict[str, Any]:
    """Build an ``extra=`` mapping for structured log records, dropping None values."""
    return {k: v for k, v in kwargs.items() if v is not None}


def redact(text: str) -> str:
    """Mask values of credential-looking query parameters."""
    if not text:
        return text
    return _SENSITIVE_PARAM.sub(lambda m: f"{m.group(1)}=[REDACTED]", text)


def safe_url(url: str) -> str:
    """Return ``url`` with any userinfo removed and sensitive params masked."""
    if not url:
        return url
    try:
        parts = urlsplit(url)
    except ValueError:
        return redact(url)
    netloc = parts.netloc
    if "@" in netloc:
        netloc = "[REDACTED]@" + netloc.rsplit("@", 1)[1]
    return redact(urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment)))


class Timer:
    """Context manager measuring wall time in milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *exc: Any) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        """Elapsed milliseconds, measured up to now while still running."""
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
