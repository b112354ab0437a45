"""In-memory transport for testing.

Satisfies the Transport protocol without any network I/O, recording each
request and decoding its body the way the Elastic Email API would.

Contents:
    * :class:`CapturedRequest` - One recorded POST.
    * :class:`TransportSpy` - Records requests and replies with a canned response.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from elastic_email_adapter.application.ports import TransportResponse
from elastic_email_adapter.domain.query import DecodedQuery, decode_query


@dataclass(frozen=True)
class CapturedRequest:
    """A request received by :class:`TransportSpy`."""

    url: str
    headers: Mapping[str, str]
    body: str
    timeout: float

    @property
    def params(self) -> DecodedQuery:
        """The form body decoded into key -> list of values."""
        return decode_query(self.body)


def _empty_request_list() -> list[CapturedRequest]:
    """Create an empty typed list for request records."""
    return []


def _empty_header_list() -> list[tuple[str, str]]:
    return []


@dataclass
class TransportSpy:
    """Captures transport calls for test assertions.

    Each test should create its own TransportSpy instance to avoid cross-test
    pollution.

    Attributes:
        requests: Every request received, oldest first.
        status_code: Status returned when no responder is set.
        body: Body returned when no responder is set.
        headers: Headers returned when no responder is set.
        responder: Optional callable building the response from the request.
        raise_exception: When set, calls record the request and raise this.

    Example:
        >>> spy = TransportSpy()
        >>> spy("http://localhost/email/send", headers={}, body="foo=bar", timeout=1.0).status_code
        200
        >>> spy.last_request.params
        {'foo': ['bar']}
    """

    requests: list[CapturedRequest] = field(default_factory=_empty_request_list)
    status_code: int = 200
    body: str = "SENT"
    headers: list[tuple[str, str]] = field(default_factory=_empty_header_list)
    responder: Callable[[CapturedRequest], TransportResponse] | None = None
    raise_exception: Exception | None = None

    def __call__(
        self,
        url: str,
        *,
        headers: Mapping[str, str],
        body: str,
        timeout: float = 30.0,
    ) -> TransportResponse:
        """Record the call and return the configured response.

        Raises:
            Exception: If raise_exception is set, raises that exception.
        """
        request = CapturedRequest(url=url, headers=dict(headers), body=body, timeout=timeout)
        self.requests.append(request)
        if self.raise_exception is not None:
            raise self.raise_exception
        if self.responder is not None:
            return self.responder(request)
        return TransportResponse(status_code=self.status_code, headers=list(self.headers), body=self.body)

    @property
    def last_request(self) -> CapturedRequest:
        """The most recent request.

        Raises:
            LookupError: When nothing was sent yet.
        """
        if not self.requests:
            raise LookupError("TransportSpy has not received any request")
        return self.requests[-1]

    def clear(self) -> None:
        """Reset captured data for next test."""
        self.requests.clear()
        self.raise_exception = None


__all__ = [
    "CapturedRequest",
    "TransportSpy",
]
