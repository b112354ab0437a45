"""Repeated-key ``application/x-www-form-urlencoded`` codec.

The Elastic Email API accepts list values as repeated keys
(``lists=a&lists=b``) instead of the conventional ``lists[]=a`` bracket
notation, and nested keys are not supported at all. The standard library
helpers either collapse singletons or never fail on malformed escapes, so
both directions are implemented here.

Contents:
    * :func:`encode_query` - mapping, pair list, or list of mappings to a query string
    * :func:`decode_query` - query string to a mapping of key -> list of values
    * :func:`to_query_string` - default scalar formatter
"""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from enum import Enum
from typing import Any, cast
from urllib.parse import quote_plus, unquote_plus

from .errors import BadEncodingError, QueryEncodeError

ValueFormatter = Callable[[Any], str]
DecodedQuery = dict[str, list[str | None]]

_INVALID_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class QuerySourceKind(Enum):
    """Shape of a value handed to :func:`encode_query`, classified once."""

    EMPTY = "empty"
    MAPPING = "mapping"
    PAIRS = "pairs"
    MAPPINGS = "mappings"


def to_query_string(value: Any) -> str:
    """Format a scalar the way the API expects it.

    Example:
        >>> to_query_string(True)
        'true'
        >>> to_query_string(None)
        ''
        >>> to_query_string(42)
        '42'
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return to_query_string(value.value)
    return str(value)


def _is_pair(item: object) -> bool:
    return isinstance(item, tuple) and len(cast(tuple[Any, ...], item)) == 2


def _is_sequence(value: object) -> bool:
    return isinstance(value, (list, tuple))


def _is_dataclass_instance(value: object) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def classify_source(source: object) -> QuerySourceKind:
    """Determine which encoding rule applies to *source*.

    Raises:
        QueryEncodeError: When *source* is none of the supported shapes.

    Example:
        >>> classify_source({"foo": "bar"}).name
        'MAPPING'
        >>> classify_source([("foo", "bar")]).name
        'PAIRS'
        >>> classify_source([{"foo": "bar"}]).name
        'MAPPINGS'
        >>> classify_source([]).name
        'EMPTY'
    """
    if source is None:
        return QuerySourceKind.EMPTY
    if isinstance(source, Mapping) or _is_dataclass_instance(source):
        return QuerySourceKind.MAPPING
    if _is_sequence(source) and not isinstance(source, str):
        items = list(cast(Sequence[object], source))
        if not items:
            return QuerySourceKind.EMPTY
        if all(_is_pair(item) for item in items):
            return QuerySourceKind.PAIRS
        if all(isinstance(item, Mapping) or _is_dataclass_instance(item) for item in items):
            return QuerySourceKind.MAPPINGS
    raise QueryEncodeError(f"can only encode mappings, pair lists, or lists of mappings, got: {source!r}")


def _as_mapping(source: object) -> Mapping[Any, Any]:
    if isinstance(source, Mapping):
        return cast(Mapping[Any, Any], source)
    return {field.name: getattr(source, field.name) for field in dataclasses.fields(cast(Any, source))}


def _sorted_items(source: object) -> list[tuple[Any, Any]]:
    return sorted(_as_mapping(source).items(), key=lambda item: str(item[0]))


def _encode_key(key: Any) -> str:
    return quote_plus(to_query_string(key), safe="")


def _encode_value(value: Any, formatter: ValueFormatter) -> str:
    return quote_plus(formatter(value), safe="")


def _is_empty_container(value: object) -> bool:
    if isinstance(value, Mapping) or _is_sequence(value):
        return len(cast(Sequence[object], value)) == 0
    return False


def _encode_items(items: Iterable[tuple[Any, Any]], formatter: ValueFormatter) -> Iterator[str]:
    for field, value in items:
        if _is_empty_container(value):
            continue
        if isinstance(value, Mapping):
            raise QueryEncodeError(f"cannot encode nested structures for {field}")
        if _is_sequence(value):
            elements = list(cast(Sequence[object], value))
            if any(isinstance(element, (tuple, list, Mapping)) for element in elements):
                raise QueryEncodeError(f"cannot encode nested structures for {field}")
            key = _encode_key(field)
            for element in elements:
                yield f"{key}={_encode_value(element, formatter)}"
        else:
            yield f"{_encode_key(field)}={_encode_value(value, formatter)}"


def encode_query(source: object, formatter: ValueFormatter = to_query_string) -> str:
    """Encode *source* as an Elastic Email API query string.

    Mappings are encoded with their keys in sorted order:

    >>> encode_query({"foo": "bar", "baz": "bat"})
    'baz=bat&foo=bar'

    Pair lists preserve order and duplicate keys:

    >>> encode_query([("foo", "bar"), ("baz", "bat")])
    'foo=bar&baz=bat'
    >>> encode_query([("foo", "bar"), ("foo", "bat")])
    'foo=bar&foo=bat'

    List values, and lists of mappings, become repeated keys:

    >>> encode_query({"foo": ["bar", "bat"]})
    'foo=bar&foo=bat'
    >>> encode_query([{"foo": "bar"}, {"foo": "bat"}])
    'foo=bar&foo=bat'

    Nested structures are rejected:

    >>> encode_query({"foo": {"bar": "baz"}})
    Traceback (most recent call last):
    ...
    elastic_email_adapter.domain.errors.QueryEncodeError: cannot encode nested structures for foo

    Args:
        source: A mapping, a dataclass instance, a sequence of ``(key, value)``
            pairs, a sequence of mappings, or None.
        formatter: Turns each scalar value into a string before percent-encoding.

    Returns:
        The encoded query string, without a leading ``&``.

    Raises:
        QueryEncodeError: On nested values or an unsupported *source*.
    """
    kind = classify_source(source)
    if kind is QuerySourceKind.EMPTY:
        return ""
    if kind is QuerySourceKind.PAIRS:
        parts = list(_encode_items(cast(Sequence[tuple[Any, Any]], source), formatter))
    elif kind is QuerySourceKind.MAPPING:
        parts = list(_encode_items(_sorted_items(source), formatter))
    else:
        parts = [
            part for element in cast(Sequence[object], source) for part in _encode_items(_sorted_items(element), formatter)
        ]
    return "&".join(parts)


def _decode_www_form(raw: str) -> str:
    if _INVALID_ESCAPE.search(raw):
        raise BadEncodingError(f"invalid www-form encoding on query-string, got {raw}")
    try:
        return unquote_plus(raw, errors="strict")
    except UnicodeDecodeError as exc:
        raise BadEncodingError(f"invalid www-form encoding on query-string, got {raw}") from exc


def _decode_segment(segment: str) -> tuple[str, str | None]:
    key, separator, value = segment.partition("=")
    if not separator:
        return _decode_www_form(key), None
    return _decode_www_form(key), _decode_www_form(value)


def decode_query(
    query: str,
    initial: Mapping[str, Sequence[str | None]] | None = None,
) -> DecodedQuery:
    """Decode an Elastic Email API query string.

    Every key maps to a list, even when it occurs once:

    >>> decode_query("foo=bar")["foo"]
    ['bar']
    >>> decode_query("foo=bar&foo=baz")["foo"]
    ['bar', 'baz']
    >>> decode_query("")
    {}

    A segment without ``=`` decodes to a ``None`` value:

    >>> decode_query("flag")
    {'flag': [None]}

    Args:
        query: The raw query string.
        initial: Values to merge into; decoded values for a key come before
            the values already present. Not mutated.

    Returns:
        A new mapping of key to the list of its values in appearance order.

    Raises:
        BadEncodingError: When a key or value has an invalid percent escape.
    """
    result: DecodedQuery = {key: list(values) for key, values in (initial or {}).items()}
    if query == "":
        return result

    observations = [_decode_segment(segment) for segment in query.split("&")]

    grouped: DecodedQuery = {}
    for key, value in observations:
        grouped.setdefault(key, []).append(value)

    for key, values in grouped.items():
        result[key] = values + result.get(key, [])
    return result


__all__ = [
    "DecodedQuery",
    "QuerySourceKind",
    "ValueFormatter",
    "classify_source",
    "decode_query",
    "encode_query",
    "to_query_string",
]
