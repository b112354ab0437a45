"""Domain layer - pure business logic with no I/O or framework dependencies.

Contents:
    * :mod:`.message` - Email value object and address helpers
    * :mod:`.send_options` - Closed set of send options and their wire names
    * :mod:`.options` - Send-option builders
    * :mod:`.pipeline` - Email to wire field transformation
    * :mod:`.query` - Repeated-key form codec
    * :mod:`.enums` - Domain enumerations
    * :mod:`.errors` - Domain exception types
"""

from __future__ import annotations

from .enums import ALL_SEGMENTS, CharsetPart, EncodingType, SegmentSelector
from .errors import (
    ApiError,
    BadEncodingError,
    ConfigurationError,
    InvalidSendOptionError,
    QueryEncodeError,
    TransportError,
)
from .message import Email, format_address, new_email, normalize_address, put_header, put_private
from .pipeline import build_wire_fields, filter_wire_fields
from .query import decode_query, encode_query, to_query_string
from .send_options import SendOptions, resolve_send_options

__all__ = [
    # Enums
    "ALL_SEGMENTS",
    "CharsetPart",
    "EncodingType",
    "SegmentSelector",
    # Errors
    "ApiError",
    "BadEncodingError",
    "ConfigurationError",
    "InvalidSendOptionError",
    "QueryEncodeError",
    "TransportError",
    # Message
    "Email",
    "format_address",
    "new_email",
    "normalize_address",
    "put_header",
    "put_private",
    # Options
    "SendOptions",
    "resolve_send_options",
    # Pipeline
    "build_wire_fields",
    "filter_wire_fields",
    # Codec
    "decode_query",
    "encode_query",
    "to_query_string",
]
