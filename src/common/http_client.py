"""Shared HTTP helpers used across registry and repository clients.

Encapsulates common request/timeout error handling so modules avoid
duplicating try/except blocks. This module is dependency-light and can be
safely imported by both registry/* and repository/* without cycles.
"""
from __future__ import annotations

import logging
import sys
from typing import Any, Dict, Optional

import requests
from requests.auth import HTTPBasicAuth

from constants import Constants, ExitCodes
from common.credentials import Credentials
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


def _default_headers(headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    merged = {"User-Agent": Constants.USER_AGENT}
    if headers:
        merged.update(headers)
    return merged


def safe_get(url: str, *, context: str, exit_on_error: bool = True, **kwargs: Any) -> requests.Response:
    """Perform a GET request with consistent error handling and DEBUG traces.

    Connection errors and timeouts are fatal: they are logged and the process
    exits with ExitCodes.CONNECTION_ERROR. With ``exit_on_error=False`` the
    requests exception is re-raised so the caller can report it.
    """
    safe_target = safe_url(url)
    headers = _default_headers(kwargs.pop("headers", None))
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_target,
                    context=context
                )
            )
        try:
            res = requests.get(url, timeout=Constants.REQUEST_TIMEOUT, headers=headers, **kwargs)
            if is_debug_enabled(logger):
                logger.debug(
                    "HTTP response ok",
                    extra=extra_context(
                        event="http_response",
                        component="http_client",
                        action="GET",
                        outcome="success",
                        status_code=res.status_code,
                        duration_ms=t.duration_ms(),
                        target=safe_target,
                        context=context
                    )
                )
            return res
        except requests.RequestException as exc:
            if not exit_on_error:
                if is_debug_enabled(logger):
                    logger.debug(
                        "HTTP request failed",
                        extra=extra_context(
                            event="http_error",
                            component="http_client",
                            action="GET",
                            outcome=type(exc).__name__,
                            duration_ms=t.duration_ms(),
                            target=safe_target,
                            context=context
                        )
                    )
                raise
            _exit_on_request_error(exc, context)


def _exit_on_request_error(exc: requests.RequestException, context: str) -> None:
    if isinstance(exc, requests.Timeout):
        logger.error(
            "%s request timed out after %s seconds",
            context,
            Constants.REQUEST_TIMEOUT,
        )
    else:
        logger.error("%s connection error: %s", context, exc)
    sys.exit(ExitCodes.CONNECTION_ERROR.value)


def fetch_text(
    url: str,
    *,
    context: str,
    credentials: Optional[Credentials] = None,
) -> Optional[str]:
    """GET ``url`` and return the body, or None on any transport/client failure.

    Redirects are followed. When ``credentials`` are given they are sent as
    HTTP basic auth.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs (e.g., "git").
        credentials: Optional credentials for basic auth.

    Returns:
        Response text for 2xx/3xx outcomes, otherwise None.
    """
    safe_target = safe_url(url)
    auth = None
    if credentials is not None:
        auth = HTTPBasicAuth(credentials.user.reveal(), credentials.password.reveal())

    with Timer() as t:
        try:
            res = requests.get(
                url,
                timeout=Constants.REQUEST_TIMEOUT,
                headers=_default_headers(),
                auth=auth,
                allow_redirects=True,
            )
            res.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            if is_debug_enabled(logger):
                logger.debug(
                    "HTTP client error",
                    extra=extra_context(
                        event="http_response",
                        component="http_client",
                        action="GET",
                        outcome="http_error",
                        status_code=status,
                        duration_ms=t.duration_ms(),
                        target=safe_target,
                        context=context
                    )
                )
            return None
        except requests.RequestException as exc:
            logger.warning("%s request to %s failed: %s", context, safe_target, exc)
            return None

    if is_debug_enabled(logger):
        logger.debug(
            "HTTP response ok",
            extra=extra_context(
                event="http_response",
                component="http_client",
                action="GET",
                outcome="success",
                status_code=res.status_code,
                duration_ms=t.duration_ms(),
                target=safe_target,
                context=context
            )
        )
    return res.text
