"""Delivery of emails through the Elastic Email ``/email/send`` endpoint.

Composes the transformation pipeline, the form codec, and a transport.
Every error raised from here has the API key scrubbed from its message.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from elastic_email_adapter.application.ports import Transport, TransportResponse
from elastic_email_adapter.domain.errors import ApiError, ConfigurationError, TransportError
from elastic_email_adapter.domain.message import Email
from elastic_email_adapter.domain.pipeline import build_wire_fields
from elastic_email_adapter.domain.query import decode_query, encode_query

from .config import ElasticEmailConfig
from .transport import post_form

logger = logging.getLogger(__name__)

SEND_MESSAGE_PATH = "/email/send"
FORM_HEADERS: Mapping[str, str] = {"Content-Type": "application/x-www-form-urlencoded"}
FILTERED = "[FILTERED]"


def _missing_key_message(config: ElasticEmailConfig) -> str:
    return (
        "There was no API key set for the ElasticEmail adapter.\n"
        "\n"
        "* Here are the config options that were passed in:\n"
        "\n"
        f"{config!r}\n"
    )


def _require_api_key(config: ElasticEmailConfig) -> str:
    api_key = config.resolve_api_key()
    if not api_key:
        raise ConfigurationError(_missing_key_message(config))
    return api_key


def validate_config(config: ElasticEmailConfig) -> ElasticEmailConfig:
    """Return *config* unchanged when it yields a non-empty API key.

    Raises:
        ConfigurationError: When the key is missing, blank, or an environment
            reference that resolves to nothing.

    Example:
        >>> validate_config(ElasticEmailConfig(api_key="123_abc")).resolve_api_key()
        '123_abc'
        >>> validate_config(ElasticEmailConfig())  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ConfigurationError: There was no API key set for the ElasticEmail adapter.
    """
    _require_api_key(config)
    return config


def _scrub(text: str, api_key: str) -> str:
    return text.replace(api_key, FILTERED) if api_key else text


def _filtered_params(params: str, api_key: str) -> dict[str, object]:
    filtered: dict[str, object] = {}
    for key, values in decode_query(params).items():
        if key == "apikey":
            filtered[key] = FILTERED
        else:
            filtered[_scrub(key, api_key)] = [value if value is None else _scrub(value, api_key) for value in values]
    filtered.setdefault("apikey", FILTERED)
    return filtered


def _filtered_response(response: object, api_key: str) -> str:
    if isinstance(response, str):
        return repr(_scrub(response, api_key))
    return _scrub(repr(response), api_key)


def build_api_error_message(params: str, response: object, api_key: str) -> str:
    """Describe a rejected request with the API key filtered out.

    Only the response and the sent params are scrubbed; the surrounding
    text is fixed, so ``'apikey': '[FILTERED]'`` survives any key.

    Args:
        params: The encoded body that was sent.
        response: The response body returned by the API.
        api_key: The key to remove from the output.

    Example:
        >>> message = build_api_error_message("apikey=SECRET&from=x", "Error!!", "SECRET")
        >>> "SECRET" in message
        False
        >>> "'apikey': '[FILTERED]'" in message
        True
    """
    return (
        "There was a problem sending the email through the ElasticEmail API.\n"
        "\n"
        "Here is the response:\n"
        "\n"
        f"{_filtered_response(response, api_key)}\n"
        "\n"
        "Here are the params we sent:\n"
        "\n"
        f"{_filtered_params(params, api_key)!r}\n"
    )


def deliver(
    email: Email,
    config: ElasticEmailConfig,
    *,
    transport: Transport | None = None,
) -> TransportResponse:
    """Send *email* through the Elastic Email API.

    Args:
        email: The message to send.
        config: API settings; the key is resolved eagerly.
        transport: Replaces the httpx transport, mainly for tests.

    Returns:
        The API response when the status is 299 or below.

    Raises:
        ConfigurationError: No API key could be resolved.
        ApiError: The API answered with a status above 299, or the transport
            failed before a response arrived.

    Side Effects:
        One HTTP POST to ``{base_url}/email/send``. Logs the attempt at INFO
        and rejections at ERROR.
    """
    api_key = _require_api_key(config)
    body = encode_query(build_wire_fields(email, api_key))
    url = f"{config.base_url}{SEND_MESSAGE_PATH}"
    send = transport if transport is not None else post_form

    logger.info(
        "Sending email through Elastic Email",
        extra={
            "url": url,
            "recipient_count": len(email.to) + len(email.cc) + len(email.bcc),
            "subject": email.subject,
        },
    )

    try:
        response = send(url, headers=FORM_HEADERS, body=body, timeout=config.timeout)
    except TransportError as exc:
        logger.debug("Elastic Email transport failed", exc_info=True)
        raise ApiError(_scrub(str(exc), api_key)) from exc

    if response.status_code > 299:
        logger.error(
            "Elastic Email rejected the request",
            extra={"url": url, "status_code": response.status_code},
        )
        raise ApiError(build_api_error_message(body, response.body, api_key), status_code=response.status_code)

    logger.info("Email accepted by Elastic Email", extra={"status_code": response.status_code})
    return response


__all__ = [
    "FILTERED",
    "FORM_HEADERS",
    "SEND_MESSAGE_PATH",
    "build_api_error_message",
    "deliver",
    "validate_config",
]
