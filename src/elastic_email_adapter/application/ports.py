"""Application ports: callable Protocol definitions for adapter functions.

Each Protocol class defines a ``__call__`` method whose signature exactly
matches the corresponding adapter function.  Existing module-level functions
satisfy these protocols automatically via structural subtyping (PEP 544).

System Role:
    Sits between domain and adapters.  Infrastructure types (``Config``,
    ``ElasticEmailConfig``) are imported under ``TYPE_CHECKING`` only so that
    import-linter layer contracts remain satisfied at runtime.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

from ..domain.message import Email

if TYPE_CHECKING:
    from lib_layered_config import Config

    from ..adapters.elastic.config import ElasticEmailConfig


def _empty_headers() -> list[tuple[str, str]]:
    return []


@dataclass(frozen=True)
class TransportResponse:
    """Status, headers and body returned by a transport."""

    status_code: int
    headers: Sequence[tuple[str, str]] = field(default_factory=_empty_headers)
    body: str = ""


class Transport(Protocol):
    """POST a form body and return the response, or raise TransportError."""

    def __call__(
        self,
        url: str,
        *,
        headers: Mapping[str, str],
        body: str,
        timeout: float = ...,
    ) -> TransportResponse: ...


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class LoadElasticEmailConfigFromDict(Protocol):
    """Load ElasticEmailConfig from a configuration dictionary."""

    def __call__(self, config_dict: Mapping[str, Any]) -> ElasticEmailConfig: ...


class Deliver(Protocol):
    """Send an email through the Elastic Email API."""

    def __call__(
        self,
        email: Email,
        config: ElasticEmailConfig,
        *,
        transport: Transport | None = ...,
    ) -> TransportResponse: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


__all__ = [
    "Deliver",
    "GetConfig",
    "InitLogging",
    "LoadElasticEmailConfigFromDict",
    "Transport",
    "TransportResponse",
]
