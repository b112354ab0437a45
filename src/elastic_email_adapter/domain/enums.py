"""Type-safe domain enums for send options."""

from __future__ import annotations

from enum import Enum, IntEnum


class EncodingType(IntEnum):
    """Body encoding codes understood by the Elastic Email API.

    ``BASE64`` is the API default and the recommended value; ``BASE64`` or
    ``QUOTED_PRINTABLE`` is recommended when signing with DKIM.

    Example:
        >>> int(EncodingType.BASE64)
        4
        >>> EncodingType["UUE"].value
        5
    """

    NONE = 0
    RAW_7BIT = 1
    RAW_8BIT = 2
    QUOTED_PRINTABLE = 3
    BASE64 = 4
    UUE = 5


class CharsetPart(str, Enum):
    """MIME part a charset override applies to.

    Inherits from str so plain strings compare equal.

    Example:
        >>> CharsetPart.HTML == "html"
        True
    """

    AMP = "amp"
    HTML = "html"
    TEXT = "text"


class SegmentSelector(Enum):
    """Sentinel values accepted by the ``segments`` builder.

    Deliberately not a str enum: a segment literally named ``"all"`` must not
    be confused with the selector for all active contacts.

    Example:
        >>> SegmentSelector.ALL.value
        '0'
    """

    ALL = "0"


ALL_SEGMENTS = SegmentSelector.ALL


__all__ = [
    "ALL_SEGMENTS",
    "CharsetPart",
    "EncodingType",
    "SegmentSelector",
]
