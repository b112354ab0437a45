"""Domain-specific exceptions for typed error handling at boundaries."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Missing, invalid, or incomplete configuration.

    Raised when no usable API key can be resolved, including an
    environment-variable reference that resolves to nothing. Inherits from
    ValueError so callers treating it as an argument error keep working.

    Example:
        >>> from elastic_email_adapter.domain.errors import ConfigurationError
        >>> err = ConfigurationError("There was no API key set")
        >>> str(err)
        'There was no API key set'
        >>> isinstance(err, ValueError)
        True
    """


class InvalidSendOptionError(ValueError):
    """A send option was given a value of the wrong type or shape.

    Raised synchronously by the option builders, never by the pipeline.

    Example:
        >>> from elastic_email_adapter.domain.errors import InvalidSendOptionError
        >>> str(InvalidSendOptionError("time_off_set_minutes must be an integer"))
        'time_off_set_minutes must be an integer'
    """


class QueryEncodeError(ValueError):
    """The value handed to the form encoder has an unsupported structure.

    Example:
        >>> from elastic_email_adapter.domain.errors import QueryEncodeError
        >>> str(QueryEncodeError("cannot encode nested structures for foo"))
        'cannot encode nested structures for foo'
    """


class BadEncodingError(ValueError):
    """A query-string fragment is not valid www-form encoding.

    Example:
        >>> from elastic_email_adapter.domain.errors import BadEncodingError
        >>> str(BadEncodingError("invalid www-form encoding on query-string, got %ZZ"))
        'invalid www-form encoding on query-string, got %ZZ'
    """


class TransportError(Exception):
    """The HTTP transport failed before a response was received.

    Example:
        >>> from elastic_email_adapter.domain.errors import TransportError
        >>> str(TransportError("connection refused"))
        'connection refused'
    """


class ApiError(Exception):
    """Delivery through the Elastic Email API failed.

    Carries the HTTP status when the API answered. The message never
    contains the API key.

    Example:
        >>> from elastic_email_adapter.domain.errors import ApiError
        >>> err = ApiError("Error!!", status_code=500)
        >>> (str(err), err.status_code)
        ('Error!!', 500)
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


__all__ = [
    "ApiError",
    "BadEncodingError",
    "ConfigurationError",
    "InvalidSendOptionError",
    "QueryEncodeError",
    "TransportError",
]
