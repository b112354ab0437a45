"""Structured email message consumed by the transformation pipeline.

The message is an immutable value: every helper returns a new ``Email``.
Provider-specific options travel in the ``private`` extension bag.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Union, cast

AddressPair = tuple[Union[str, None], str]
Address = Union[str, AddressPair]
NormalizedAddress = tuple[Union[str, None], str]

SEND_OPTIONS_KEY = "elastic_send_options"
LEGACY_SEND_OPTIONS_KEY = "elastic_custom_vars"


def _empty_private() -> Mapping[str, Any]:
    return MappingProxyType({})


def normalize_address(address: Address) -> NormalizedAddress:
    """Return ``(name, email)`` with an empty name collapsed to None.

    Example:
        >>> normalize_address("to@bar.com")
        (None, 'to@bar.com')
        >>> normalize_address(("", "to@bar.com"))
        (None, 'to@bar.com')
        >>> normalize_address(("To", "to@bar.com"))
        ('To', 'to@bar.com')
    """
    if isinstance(address, tuple):
        name, email = address
        return (name or None, email)
    return (None, address)


def format_address(address: Address) -> str:
    """Render an address as ``Name <email>`` or the bare email.

    Example:
        >>> format_address(("To", "to@bar.com"))
        'To <to@bar.com>'
        >>> format_address((None, "to@bar.com"))
        'to@bar.com'
    """
    name, email = normalize_address(address)
    if name is None:
        return email
    return f"{name} <{email}>"


def _is_single_address(value: object) -> bool:
    """A bare string or a ``(name, email)`` 2-tuple is one address, anything else a list."""
    if isinstance(value, str):
        return True
    if not isinstance(value, tuple):
        return False
    items = cast(tuple[object, ...], value)
    return len(items) == 2 and all(item is None or isinstance(item, str) for item in items)


def _normalize_recipients(value: Address | Sequence[Address] | None) -> tuple[NormalizedAddress, ...]:
    if value is None:
        return ()
    if _is_single_address(value):
        return (normalize_address(cast(Address, value)),)
    return tuple(normalize_address(address) for address in cast(Sequence[Address], value))


def _normalize_headers(value: Mapping[str, Any] | Sequence[tuple[str, Any]] | None) -> tuple[tuple[str, Any], ...]:
    if value is None:
        return ()
    if isinstance(value, Mapping):
        return tuple(cast(Mapping[str, Any], value).items())
    return tuple((key, header_value) for key, header_value in value)


@dataclass(frozen=True)
class Email:
    """An outgoing email.

    Attributes:
        from_: Sender, bare address or ``(name, email)``.
        to: Primary recipients.
        cc: Carbon-copy recipients.
        bcc: Blind carbon-copy recipients.
        subject: Subject line.
        text_body: Plain-text body.
        html_body: HTML body.
        headers: Ordered ``(key, value)`` header pairs.
        private: Extension bag for provider-specific options.
    """

    from_: NormalizedAddress | None = None
    to: tuple[NormalizedAddress, ...] = ()
    cc: tuple[NormalizedAddress, ...] = ()
    bcc: tuple[NormalizedAddress, ...] = ()
    subject: str | None = None
    text_body: str | None = None
    html_body: str | None = None
    headers: tuple[tuple[str, Any], ...] = ()
    private: Mapping[str, Any] = field(default_factory=_empty_private)


def new_email(
    *,
    from_: Address | None = None,
    to: Address | Sequence[Address] | None = None,
    cc: Address | Sequence[Address] | None = None,
    bcc: Address | Sequence[Address] | None = None,
    subject: str | None = None,
    text_body: str | None = None,
    html_body: str | None = None,
    headers: Mapping[str, Any] | Sequence[tuple[str, Any]] | None = None,
    private: Mapping[str, Any] | None = None,
) -> Email:
    """Build an :class:`Email` with normalized addresses.

    Example:
        >>> email = new_email(from_=("From", "from@foo.com"), to="to@bar.com")
        >>> email.from_
        ('From', 'from@foo.com')
        >>> email.to
        ((None, 'to@bar.com'),)
    """
    return Email(
        from_=normalize_address(from_) if from_ is not None else None,
        to=_normalize_recipients(to),
        cc=_normalize_recipients(cc),
        bcc=_normalize_recipients(bcc),
        subject=subject,
        text_body=text_body,
        html_body=html_body,
        headers=_normalize_headers(headers),
        private=MappingProxyType(dict(private or {})),
    )


def put_header(email: Email, key: str, value: Any) -> Email:
    """Return a copy of *email* with one more header appended.

    Example:
        >>> put_header(new_email(), "Reply-To", "reply@foo.com").headers
        (('Reply-To', 'reply@foo.com'),)
    """
    return dataclasses.replace(email, headers=(*email.headers, (key, value)))


def put_private(email: Email, key: str, value: Any) -> Email:
    """Return a copy of *email* with *key* set in the extension bag."""
    return dataclasses.replace(email, private=MappingProxyType({**email.private, key: value}))


__all__ = [
    "Address",
    "Email",
    "LEGACY_SEND_OPTIONS_KEY",
    "NormalizedAddress",
    "SEND_OPTIONS_KEY",
    "format_address",
    "new_email",
    "normalize_address",
    "put_header",
    "put_private",
]
