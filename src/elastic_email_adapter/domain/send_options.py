"""Closed set of Elastic Email send options and their wire names."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, cast

from .message import LEGACY_SEND_OPTIONS_KEY, SEND_OPTIONS_KEY, Email

MergePair = tuple[str, Any]


@dataclass(frozen=True)
class SendOptions:
    """Provider options attached to an email; ``None`` means not set.

    Example:
        >>> SendOptions(pool_name="test").pool_name
        'test'
        >>> SendOptions().post_back is None
        True
    """

    attachments: tuple[str, ...] | None = None
    channel: str | None = None
    charset: str | None = None
    charset_body_amp: str | None = None
    charset_body_html: str | None = None
    charset_body_text: str | None = None
    data_source: str | None = None
    encoding_type: int | None = None
    lists: str | None = None
    merge: tuple[MergePair, ...] | None = None
    merge_source_filename: str | None = None
    pool_name: str | None = None
    post_back: str | None = None
    segments: str | None = None
    template: str | None = None
    time_off_set_minutes: int | None = None
    track_clicks: bool | None = None
    track_opens: bool | None = None
    utm_campaign: str | None = None
    utm_content: str | None = None
    utm_medium: str | None = None
    utm_source: str | None = None

    @classmethod
    def from_mapping(cls, raw: Mapping[Any, Any]) -> SendOptions:
        """Build options from a loosely-typed bag, dropping unknown keys.

        Values are taken as given; the pipeline skips the malformed ones.

        Example:
            >>> SendOptions.from_mapping({"pool_name": "test", "unknown": "x"})
            SendOptions(pool_name='test')
        """
        known = {field.name for field in dataclasses.fields(cls)}
        values: dict[str, Any] = {}
        for key, value in raw.items():
            name = key.value if isinstance(key, Enum) else key
            if isinstance(name, str) and name in known:
                values[name] = value
        return cls(**values)

    def items(self) -> list[tuple[str, Any]]:
        """Return the set options as ``(name, value)`` pairs in field order."""
        return [
            (field.name, getattr(self, field.name))
            for field in dataclasses.fields(self)
            if getattr(self, field.name) is not None
        ]

    def __repr__(self) -> str:
        set_fields = ", ".join(f"{name}={value!r}" for name, value in self.items())
        return f"SendOptions({set_fields})"


# Option name -> API parameter name. ``merge`` is absent: its pairs are
# promoted to top-level ``merge_*`` parameters.
WIRE_NAMES: Mapping[str, str] = {
    "attachments": "attachments",
    "channel": "channel",
    "charset": "charset",
    "charset_body_amp": "charsetBodyAmp",
    "charset_body_html": "charsetBodyHtml",
    "charset_body_text": "charsetBodyText",
    "data_source": "dataSource",
    "encoding_type": "encodingType",
    "lists": "lists",
    "merge_source_filename": "mergeSourceFilename",
    "pool_name": "poolName",
    "post_back": "postBack",
    "segments": "segments",
    "template": "template",
    "time_off_set_minutes": "timeOffSetMinutes",
    "track_clicks": "trackClicks",
    "track_opens": "trackOpens",
    "utm_campaign": "utmCampaign",
    "utm_content": "utmContent",
    "utm_medium": "utmMedium",
    "utm_source": "utmSource",
}


def _coerce(value: object) -> SendOptions | None:
    if value is None:
        return None
    if isinstance(value, SendOptions):
        return value
    if isinstance(value, Mapping):
        return SendOptions.from_mapping(cast(Mapping[Any, Any], value))
    return None


def resolve_send_options(email: Email) -> SendOptions:
    """Return the options attached to *email*.

    Precedence is explicit: the ``elastic_send_options`` bag is used when
    present and not None; otherwise the deprecated ``elastic_custom_vars``
    bag is read. The two are never merged.

    Example:
        >>> from elastic_email_adapter.domain.message import new_email
        >>> email = new_email(private={
        ...     "elastic_send_options": {"pool_name": "new"},
        ...     "elastic_custom_vars": {"pool_name": "old", "post_back": "1"},
        ... })
        >>> resolve_send_options(email)
        SendOptions(pool_name='new')
    """
    current = _coerce(email.private.get(SEND_OPTIONS_KEY))
    if current is not None:
        return current
    legacy = _coerce(email.private.get(LEGACY_SEND_OPTIONS_KEY))
    return legacy if legacy is not None else SendOptions()


__all__ = [
    "MergePair",
    "SendOptions",
    "WIRE_NAMES",
    "resolve_send_options",
]
