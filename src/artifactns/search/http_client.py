"""Shared HTTP helper for repository backends.

Provides a thin wrapper around ``httpx.Client`` with standardised
timeouts, user-agent headers, and error handling. A missing resource
(HTTP 404 or 410) raises ``ResourceNotFoundError`` so callers can fall
back to another resource; every other failure is logged and reported
as an empty body.
"""

from __future__ import annotations

import logging

import httpx

from artifactns.exceptions import ResourceNotFoundError

logger = logging.getLogger(__name__)

# Timeout for all repository HTTP requests (seconds).
DEFAULT_TIMEOUT: float = 30.0

# User-Agent sent with every request.
USER_AGENT: str = "artifactns-search/0.1"

_NOT_FOUND_STATUSES = frozenset({404, 410})


def fetch_text(url: str, *, timeout: float = DEFAULT_TIMEOUT) -> str:
    """Fetch a URL and return the response body as text.

    Args:
        url: The URL to fetch.
        timeout: Request timeout in seconds.

    Returns:
        Response body text. Empty string on transport or server errors.

    Raises:
        ResourceNotFoundError: If the server reports the resource missing.
    """
    try:
        with httpx.Client(
            timeout=timeout,
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
        ) as client:
            resp = client.get(url)
    except httpx.TimeoutException:
        logger.warning("Timeout fetching %s", url)
        return ""
    except httpx.RequestError as exc:
        logger.warning("Request error for %s: %s", url, exc)
        return ""

    if resp.status_code in _NOT_FOUND_STATUSES:
        raise ResourceNotFoundError(f"{url} not found (HTTP {resp.status_code})")
    try:
        resp.raise_for_status()
    except httpx.HTTPStatusError as exc:
        logger.warning("HTTP %d from %s", exc.response.status_code, url)
        return ""
    return resp.text
