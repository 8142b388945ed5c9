"""Shared HTTP plumbing for the REST-backed stores and providers."""

from __future__ import annotations

import logging
from typing import Any

import requests

from divtrack.errors import DivTrackError, ErrorCode

log = logging.getLogger(__name__)


def status_error(status: int, message: str) -> DivTrackError:
    """Classify an HTTP error status."""
    if status in (401, 403):
        return DivTrackError(message, code=ErrorCode.AUTH_FAILED)
    if status == 404:
        return DivTrackError(message, code=ErrorCode.NOT_FOUND)
    if status == 429:
        return DivTrackError(message, code=ErrorCode.RATE_LIMITED, retryable=True)
    if status >= 500:
        return DivTrackError(message, code=ErrorCode.PROVIDER_ERROR, retryable=True)
    return DivTrackError(message, code=ErrorCode.PROVIDER_ERROR)


def request_json(
    session: requests.Session,
    method: str,
    url: str,
    *,
    source: str,
    timeout: float,
    **kwargs: Any,
) -> Any:
    """Send a request and decode the JSON body.

    Returns None for an empty body (e.g. 204 No Content).

    Raises:
        DivTrackError: classified by status code, TIMEOUT on timeouts,
            PROVIDER_ERROR on transport or decoding failures.
    """
    try:
        resp = session.request(method, url, timeout=timeout, **kwargs)
    except requests.Timeout as exc:
        raise DivTrackError(
            f"{source} request timed out",
            code=ErrorCode.TIMEOUT,
            retryable=True,
        ) from exc
    except requests.RequestException as exc:
        raise DivTrackError(
            f"{source} request failed: {exc}",
            code=ErrorCode.PROVIDER_ERROR,
            retryable=True,
        ) from exc

    if resp.status_code >= 400:
        log.debug("%s %s -> HTTP %s", method, url, resp.status_code)
        raise status_error(resp.status_code, f"{source} returned HTTP {resp.status_code}")

    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError as exc:
        raise DivTrackError(
            f"{source} returned invalid JSON",
            code=ErrorCode.PROVIDER_ERROR,
        ) from exc
