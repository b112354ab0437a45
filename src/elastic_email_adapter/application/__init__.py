"""Application layer - port definitions.

Contains the port protocols that define the interfaces for adapter
implementations, and the response value transports hand back.

Contents:
    * :mod:`.ports` - Callable Protocol definitions for adapter functions
"""

from __future__ import annotations

from .ports import (
    Deliver,
    GetConfig,
    InitLogging,
    LoadElasticEmailConfigFromDict,
    Transport,
    TransportResponse,
)

__all__ = [
    "Deliver",
    "GetConfig",
    "InitLogging",
    "LoadElasticEmailConfigFromDict",
    "Transport",
    "TransportResponse",
]
