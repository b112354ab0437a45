"""Builders attaching Elastic Email send options to an :class:`Email`.

Each builder takes an email and one value and returns a new email whose
``elastic_send_options`` bag holds the validated value. The input email is
never modified.

Example:
    >>> from elastic_email_adapter.domain.message import new_email
    >>> email = pool_name(post_back(new_email(), "12345"), "test")
    >>> email.private["elastic_send_options"]
    SendOptions(pool_name='test', post_back='12345')
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, cast

from .enums import CharsetPart, EncodingType, SegmentSelector
from .errors import InvalidSendOptionError
from .message import SEND_OPTIONS_KEY, Email, put_private
from .send_options import MergePair, SendOptions

CHANNEL_MAX_LENGTH = 191
TIME_OFF_SET_MINUTES_MIN = 1
TIME_OFF_SET_MINUTES_MAX = 524_160  # one year

_CHARSET_FIELDS = {
    CharsetPart.AMP: "charset_body_amp",
    CharsetPart.HTML: "charset_body_html",
    CharsetPart.TEXT: "charset_body_text",
}

_UTM_FIELDS = {
    "campaign": "utm_campaign",
    "content": "utm_content",
    "medium": "utm_medium",
    "source": "utm_source",
}


def _current_options(email: Email) -> SendOptions:
    existing = email.private.get(SEND_OPTIONS_KEY)
    if isinstance(existing, SendOptions):
        return existing
    if isinstance(existing, Mapping):
        return SendOptions.from_mapping(cast(Mapping[Any, Any], existing))
    return SendOptions()


def _put_send_options(email: Email, **values: Any) -> Email:
    options = dataclasses.replace(_current_options(email), **values)
    return put_private(email, SEND_OPTIONS_KEY, options)


def _wrap(value: str | Sequence[Any]) -> list[Any]:
    if isinstance(value, str):
        return [value]
    return list(value)


def attachments(email: Email, names: str | Sequence[str]) -> Email:
    """Attach files previously uploaded to the account, by name or ID."""
    return _put_send_options(email, attachments=tuple(_wrap(names)))


def channel(email: Email, name: str) -> Email:
    """Set the reporting channel, truncated to 191 characters.

    Example:
        >>> from elastic_email_adapter.domain.message import new_email
        >>> len(channel(new_email(), "x" * 300).private["elastic_send_options"].channel)
        191
    """
    return _put_send_options(email, channel=name[:CHANNEL_MAX_LENGTH])


def charset(email: Email, value: str, part: CharsetPart | str | None = None) -> Email:
    """Set the charset of the whole message or of one MIME part.

    ``part`` selects ``charsetBodyAmp``, ``charsetBodyHtml`` or
    ``charsetBodyText``; any other value overrides the global ``charset``
    default of ``utf-8``.

    Example:
        >>> from elastic_email_adapter.domain.message import new_email
        >>> charset(new_email(), "iso-8859-1", "html").private["elastic_send_options"]
        SendOptions(charset_body_html='iso-8859-1')
    """
    field_name = "charset"
    if isinstance(part, str):
        try:
            field_name = _CHARSET_FIELDS[CharsetPart(part)]
        except ValueError:
            field_name = "charset"
    return _put_send_options(email, **{field_name: value})


def data_source(email: Email, name: str) -> Email:
    """Name or ID of an uploaded CSV file of recipients."""
    return _put_send_options(email, data_source=name)


def encoding_type(email: Email, encoding: EncodingType | int | str) -> Email:
    """Set the body encoding; anything unrecognised falls back to base64.

    Example:
        >>> from elastic_email_adapter.domain.message import new_email
        >>> encoding_type(new_email(), "quoted_printable").private["elastic_send_options"].encoding_type
        3
        >>> encoding_type(new_email(), "bogus").private["elastic_send_options"].encoding_type
        4
        >>> encoding_type(new_email(), 3).private["elastic_send_options"].encoding_type
        3
    """
    if isinstance(encoding, EncodingType):
        code = int(encoding)
    elif isinstance(encoding, int) and not isinstance(encoding, bool):
        try:
            code = int(EncodingType(encoding))
        except ValueError:
            code = int(EncodingType.BASE64)
    else:
        try:
            code = int(EncodingType[str(encoding).upper()])
        except KeyError:
            code = int(EncodingType.BASE64)
    return _put_send_options(email, encoding_type=code)


def lists(email: Email, names: str | Sequence[str]) -> Email:
    """Send to one or more contact lists."""
    return _put_send_options(email, lists=";".join(_wrap(names)))


def _merge_pairs(params: Any) -> list[MergePair]:
    if isinstance(params, Mapping):
        return [(f"merge_{key}", value) for key, value in cast(Mapping[Any, Any], params).items()]
    if isinstance(params, tuple):
        entry = cast(tuple[Any, ...], params)
        if len(entry) == 2 and isinstance(entry[0], str):
            return [(f"merge_{entry[0]}", entry[1])]
    if isinstance(params, (list, tuple)):
        return [pair for item in cast(Sequence[Any], params) for pair in _merge_pairs(item)]
    raise InvalidSendOptionError(f"merge expects mappings or (key, value) pairs, got: {params!r}")


def merge(
    email: Email,
    params: Mapping[str, Any] | Sequence[tuple[str, Any]] | Sequence[Mapping[str, Any] | Sequence[tuple[str, Any]]],
) -> Email:
    """Set template merge fields; keys are prefixed with ``merge_``.

    Example:
        >>> from elastic_email_adapter.domain.message import new_email
        >>> merge(new_email(), [{"first_name": "Chris"}, ("last_name", "Smith")]).private[
        ...     "elastic_send_options"
        ... ].merge
        (('merge_first_name', 'Chris'), ('merge_last_name', 'Smith'))

    Raises:
        InvalidSendOptionError: When an entry is neither a mapping nor a pair.
    """
    return _put_send_options(email, merge=tuple(_merge_pairs(params)))


def merge_source_filename(email: Email, filename: str) -> Email:
    """File name of an uploaded attachment holding a CSV list of recipients."""
    return _put_send_options(email, merge_source_filename=filename)


def pool_name(email: Email, name: str) -> Email:
    """Name of the custom IP pool used for sending."""
    return _put_send_options(email, pool_name=name)


def post_back(email: Email, value: str) -> Email:
    """Header value returned in notifications."""
    return _put_send_options(email, post_back=value)


def segments(email: Email, selection: SegmentSelector | str | Iterable[SegmentSelector | str]) -> Email:
    """Send to contact segments; ``ALL_SEGMENTS`` means every active contact.

    Example:
        >>> from elastic_email_adapter.domain.enums import ALL_SEGMENTS
        >>> from elastic_email_adapter.domain.message import new_email
        >>> segments(new_email(), ["a", ALL_SEGMENTS, "a", "b"]).private["elastic_send_options"].segments
        'a;0;b'
    """
    if isinstance(selection, (str, SegmentSelector)):
        items: list[SegmentSelector | str] = [selection]
    else:
        items = list(selection)
    names = [item.value if isinstance(item, SegmentSelector) else item for item in items]
    return _put_send_options(email, segments=";".join(dict.fromkeys(names)))


def template(email: Email, template_id: str) -> Email:
    """ID of an email template in the account."""
    return _put_send_options(email, template=template_id)


def time_off_set_minutes(email: Email, minutes: int) -> Email:
    """Delay sending by *minutes*, clamped to one minute up to one year.

    Example:
        >>> from elastic_email_adapter.domain.message import new_email
        >>> time_off_set_minutes(new_email(), 0).private["elastic_send_options"].time_off_set_minutes
        1

    Raises:
        InvalidSendOptionError: When *minutes* is not an integer.
    """
    if isinstance(minutes, bool) or not isinstance(minutes, int):
        raise InvalidSendOptionError(f"time_off_set_minutes must be an integer, got: {minutes!r}")
    clamped = min(max(minutes, TIME_OFF_SET_MINUTES_MIN), TIME_OFF_SET_MINUTES_MAX)
    return _put_send_options(email, time_off_set_minutes=clamped)


def _require_bool(name: str, value: object) -> bool:
    if not isinstance(value, bool):
        raise InvalidSendOptionError(f"{name} must be a boolean, got: {value!r}")
    return value


def track_clicks(email: Email, enabled: bool) -> Email:
    """Whether clicks should be tracked."""
    return _put_send_options(email, track_clicks=_require_bool("track_clicks", enabled))


def track_opens(email: Email, enabled: bool) -> Email:
    """Whether opens should be tracked."""
    return _put_send_options(email, track_opens=_require_bool("track_opens", enabled))


def utm_parameters(email: Email, params: Mapping[str, str] | Sequence[tuple[str, str]]) -> Email:
    """Set UTM marketing parameters, keeping any already set.

    Example:
        >>> from elastic_email_adapter.domain.message import new_email
        >>> email = utm_parameters(new_email(), {"campaign": "spring"})
        >>> utm_parameters(email, [("source", "newsletter")]).private["elastic_send_options"]
        SendOptions(utm_campaign='spring', utm_source='newsletter')

    Raises:
        InvalidSendOptionError: On a key other than campaign, content, medium or source.
    """
    pairs = params.items() if isinstance(params, Mapping) else params
    values: dict[str, str] = {}
    for key, value in pairs:
        field_name = _UTM_FIELDS.get(key)
        if field_name is None:
            raise InvalidSendOptionError(f"unknown UTM parameter: {key!r}")
        values[field_name] = value
    return _put_send_options(email, **values)


__all__ = [
    "CHANNEL_MAX_LENGTH",
    "TIME_OFF_SET_MINUTES_MAX",
    "TIME_OFF_SET_MINUTES_MIN",
    "attachments",
    "channel",
    "charset",
    "data_source",
    "encoding_type",
    "lists",
    "merge",
    "merge_source_filename",
    "pool_name",
    "post_back",
    "segments",
    "template",
    "time_off_set_minutes",
    "track_clicks",
    "track_opens",
    "utm_parameters",
]
