"""HTTP transport posting form bodies with httpx."""

from __future__ import annotations

import logging
from collections.abc import Mapping

import httpx

from elastic_email_adapter.application.ports import TransportResponse
from elastic_email_adapter.domain.errors import TransportError

logger = logging.getLogger(__name__)


def post_form(
    url: str,
    *,
    headers: Mapping[str, str],
    body: str,
    timeout: float = 30.0,
) -> TransportResponse:
    """POST *body* to *url* and return the raw response.

    Args:
        url: Absolute endpoint URL.
        headers: Request headers.
        body: Encoded form body.
        timeout: Overall timeout in seconds.

    Returns:
        Status, headers, and decoded text body.

    Raises:
        TransportError: When no response was received (connection refused,
            timeout, invalid URL, protocol error).
    """
    try:
        response = httpx.post(url, headers=dict(headers), content=body.encode("utf-8"), timeout=timeout)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.debug("HTTP request failed", extra={"url": url}, exc_info=True)
        raise TransportError(f"{type(exc).__name__}: {exc}") from exc

    return TransportResponse(
        status_code=response.status_code,
        headers=list(response.headers.items()),
        body=response.text,
    )


__all__ = ["post_form"]
