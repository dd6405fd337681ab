"""Shared HTTP helpers used by the registry clients.

Encapsulates common request/timeout error handling so modules avoid
duplicating try/except blocks. Transport failures surface as
HttpRequestError; callers decide whether a failure is fatal.
"""
from __future__ import annotations

import logging
from typing import Any, Callable

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


class HttpRequestError(Exception):
    """Raised when a request could not be completed (timeout, connection)."""


def _send(
    send: Callable[..., requests.Response],
    method: str,
    url: str,
    *,
    context: str,
    **kwargs: Any,
) -> requests.Response:
    safe_target = safe_url(url)
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action=method,
                    target=safe_target,
                    context=context
                )
            )
        try:
            res = send(url, timeout=Constants.REQUEST_TIMEOUT, **kwargs)
        except requests.Timeout as exc:
            logger.debug(
                "HTTP timeout",
                extra=extra_context(
                    event="http_exception",
                    component="http_client",
                    action=method,
                    outcome="timeout",
                    target=safe_target,
                    context=context
                )
            )
            raise HttpRequestError(
                f"{context} request timed out after {Constants.REQUEST_TIMEOUT} seconds"
            ) from exc
        except requests.RequestException as exc:  # includes ConnectionError
            raise HttpRequestError(f"{context} connection error: {exc}") from exc

        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action=method,
                    outcome="success" if res.status_code < 400 else "http_error",
                    status_code=res.status_code,
                    duration_ms=t.duration_ms(),
                    target=safe_target,
                    context=context
                )
            )
        return res


def safe_get(url: str, *, context: str, **kwargs: Any) -> requests.Response:
    """Perform a GET request with consistent error handling and DEBUG traces.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs (e.g., "rest", "graphql").
        **kwargs: Passed through to requests.get.

    Returns:
        requests.Response: The HTTP response object.

    Raises:
        HttpRequestError: On timeout or connection failure.
    """
    return _send(requests.get, "GET", url, context=context, **kwargs)


def safe_post(url: str, *, context: str, **kwargs: Any) -> requests.Response:
    """Perform a POST request with consistent error handling and DEBUG traces."""
    return _send(requests.post, "POST", url, context=context, **kwargs)


def safe_delete(url: str, *, context: str, **kwargs: Any) -> requests.Response:
    """Perform a DELETE request with consistent error handling and DEBUG traces."""
    return _send(requests.delete, "DELETE", url, context=context, **kwargs)
