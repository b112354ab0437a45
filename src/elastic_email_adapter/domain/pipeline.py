"""Transformation of an :class:`Email` into Elastic Email API parameters.

The conversion runs as a fixed sequence of independent steps writing into
one mapping; later steps may overwrite earlier ones (a ``charset`` send
option replaces the global default). A final pass drops blank values.

Contents:
    * :func:`build_wire_fields` - ``Email x api_key -> wire field mapping``
    * :func:`filter_wire_fields` - the blank-value filter applied last
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Union, cast

from .message import Email, NormalizedAddress, format_address, normalize_address
from .send_options import WIRE_NAMES, SendOptions, resolve_send_options

WireScalar = Union[str, int, float, bool]
WireValue = Union[WireScalar, list[WireScalar]]
WireFields = dict[str, WireValue]

DEFAULT_CHARSET = "utf-8"
REPLY_TO_HEADER = "reply-to"
MERGE_PREFIX = "merge_"


def _put_named_address(fields: dict[Any, Any], address: NormalizedAddress, email_key: str, name_key: str) -> None:
    name, email = address
    if name is not None:
        fields[name_key] = name
    fields[email_key] = email


def _put_from(fields: dict[Any, Any], email: Email) -> None:
    if email.from_ is not None:
        _put_named_address(fields, normalize_address(email.from_), "from", "fromName")


def _put_recipients(fields: dict[Any, Any], email: Email) -> None:
    for key, recipients in (("msgTo", email.to), ("msgCc", email.cc), ("msgBcc", email.bcc)):
        fields[key] = ";".join(format_address(address) for address in recipients)


def _put_bodies(fields: dict[Any, Any], email: Email) -> None:
    if email.html_body is not None:
        fields["bodyHtml"] = email.html_body
    if email.text_body is not None:
        fields["bodyText"] = email.text_body


def _put_reply_to(fields: dict[Any, Any], value: Any) -> None:
    if value is None or value == "":
        return
    if isinstance(value, tuple):
        _put_named_address(fields, normalize_address(cast(NormalizedAddress, value)), "replyTo", "replyToName")
    else:
        fields["replyTo"] = str(value)


def _put_headers(fields: dict[Any, Any], email: Email) -> None:
    for key, value in email.headers:
        name = key.lower()
        if name == REPLY_TO_HEADER:
            _put_reply_to(fields, value)
        else:
            fields[f"headers_{name}"] = f"{name}: {value}"


def _wire_value(value: object) -> WireValue | None:
    """Return *value* in wire form, or None when it cannot be sent."""
    if isinstance(value, (str, int, float)):
        return value
    if isinstance(value, (list, tuple)):
        elements = list(cast(Sequence[object], value))
        if all(isinstance(element, (str, int, float)) for element in elements):
            return cast(list[WireScalar], elements)
    return None


def _as_list(value: WireValue) -> list[WireScalar]:
    return list(value) if isinstance(value, list) else [value]


def _merge_key(key: str) -> str:
    """Return *key* with the ``merge_`` prefix, added only when missing.

    Example:
        >>> _merge_key("first_name"), _merge_key("merge_first_name")
        ('merge_first_name', 'merge_first_name')
    """
    return key if key.startswith(MERGE_PREFIX) else f"{MERGE_PREFIX}{key}"


def _merge_entries(value: object) -> list[tuple[str, Any]]:
    # builder output is already prefixed; raw bags are not
    if isinstance(value, Mapping):
        return [(_merge_key(str(key)), item) for key, item in cast(Mapping[Any, Any], value).items()]
    if not isinstance(value, (list, tuple)):
        return []
    entries: list[tuple[str, Any]] = []
    for entry in cast(Sequence[object], value):
        if isinstance(entry, tuple) and len(cast(tuple[Any, ...], entry)) == 2:
            key, item = cast(tuple[Any, Any], entry)
            if isinstance(key, str):
                entries.append((_merge_key(key), item))
        elif isinstance(entry, Mapping):
            entries.extend(_merge_entries(entry))
    return entries


def _put_merge(fields: dict[Any, Any], value: object) -> None:
    for key, item in _merge_entries(value):
        wire = _wire_value(item)
        if wire is None:
            continue
        if key in fields:
            fields[key] = _as_list(fields[key]) + _as_list(wire)
        else:
            fields[key] = wire


def _put_send_options(fields: dict[Any, Any], options: SendOptions) -> None:
    for name, value in options.items():
        if name == "merge":
            _put_merge(fields, value)
            continue
        wire = _wire_value(value)
        # a blank option leaves the default in place
        if wire is not None and not _is_blank(wire):
            fields[WIRE_NAMES[name]] = wire


def _is_blank(value: object) -> bool:
    if value is None or value == "":
        return True
    return isinstance(value, (list, tuple)) and len(cast(Sequence[object], value)) == 0


def filter_wire_fields(fields: Mapping[Any, Any]) -> WireFields:
    """Drop non-string keys and ``None``, ``""`` or empty-sequence values.

    Example:
        >>> filter_wire_fields({"a": "", "b": [], "c": None, "d": False, 1: "x", "e": "ok"})
        {'d': False, 'e': 'ok'}
    """
    return {key: value for key, value in fields.items() if isinstance(key, str) and not _is_blank(value)}


def build_wire_fields(
    email: Email,
    api_key: str,
    *,
    charset: str = DEFAULT_CHARSET,
    is_transactional: bool = True,
) -> WireFields:
    """Convert *email* into the parameters of an ``/email/send`` call.

    The global ``charset`` and the ``isTransactional`` flag are fixed
    policy; they are keyword arguments only so the defaults are visible.

    Args:
        email: The message to send.
        api_key: Resolved API key, sent as ``apikey``.
        charset: Global charset, overridden by a ``charset`` send option.
        is_transactional: Value of ``isTransactional``.

    Returns:
        Mapping of API parameter name to value, without blank values.

    Example:
        >>> from elastic_email_adapter.domain.message import new_email
        >>> fields = build_wire_fields(
        ...     new_email(from_=("From", "from@foo.com"), to=[("To", "to@bar.com")], subject="Hi"),
        ...     "KEY",
        ... )
        >>> fields["fromName"], fields["from"], fields["msgTo"]
        ('From', 'from@foo.com', 'To <to@bar.com>')
        >>> fields["isTransactional"], fields["charset"]
        (True, 'utf-8')
    """
    fields: dict[Any, Any] = {}
    _put_from(fields, email)
    _put_recipients(fields, email)
    _put_bodies(fields, email)
    fields["charset"] = charset
    _put_headers(fields, email)
    fields["apikey"] = api_key
    _put_send_options(fields, resolve_send_options(email))
    fields["isTransactional"] = is_transactional
    fields["subject"] = email.subject
    return filter_wire_fields(fields)


__all__ = [
    "DEFAULT_CHARSET",
    "WireFields",
    "WireScalar",
    "WireValue",
    "build_wire_fields",
    "filter_wire_fields",
]
