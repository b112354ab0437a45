"""Public package surface for sending email through the Elastic Email API.

Routes imports through the architectural layers:
- Domain exports: Email value, send-option builders, wire pipeline, form codec
- Composition exports: Wired adapter services (configuration, delivery)
- Metadata: Package information

Example:
    >>> from elastic_email_adapter import new_email, options, build_wire_fields
    >>> email = options.pool_name(new_email(from_="from@foo.com"), "test")
    >>> build_wire_fields(email, "KEY")["poolName"]
    'test'
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# Composition exports (wired adapters)
from .adapters.elastic.config import ElasticEmailConfig, EnvReference
from .adapters.elastic.delivery import validate_config
from .composition import (
    build_production,
    build_testing,
    deliver,
    get_config,
    init_logging,
    load_elastic_email_config,
    load_elastic_email_config_from_dict,
)

# Domain exports
from .domain import options
from .domain.enums import ALL_SEGMENTS, CharsetPart, EncodingType
from .domain.errors import (
    ApiError,
    BadEncodingError,
    ConfigurationError,
    InvalidSendOptionError,
    QueryEncodeError,
    TransportError,
)
from .domain.message import Email, new_email, put_header, put_private
from .domain.pipeline import build_wire_fields
from .domain.query import decode_query, encode_query
from .domain.send_options import SendOptions

__all__ = [
    # Domain
    "ALL_SEGMENTS",
    "CharsetPart",
    "Email",
    "EncodingType",
    "SendOptions",
    "build_wire_fields",
    "decode_query",
    "encode_query",
    "new_email",
    "options",
    "put_header",
    "put_private",
    # Errors
    "ApiError",
    "BadEncodingError",
    "ConfigurationError",
    "InvalidSendOptionError",
    "QueryEncodeError",
    "TransportError",
    # Composition
    "ElasticEmailConfig",
    "EnvReference",
    "build_production",
    "build_testing",
    "deliver",
    "get_config",
    "init_logging",
    "load_elastic_email_config",
    "load_elastic_email_config_from_dict",
    "validate_config",
    # Metadata
    "print_info",
]
