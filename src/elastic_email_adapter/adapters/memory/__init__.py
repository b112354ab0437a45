"""In-memory adapters for tests: no filesystem, no HTTP, no logging runtime.

Contents:
    * :mod:`.config` - configuration built from plain dictionaries
    * :mod:`.transport` - :class:`TransportSpy`, recording every form POST
    * :func:`init_logging_in_memory` - leaves logging untouched
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lib_layered_config import Config

from .config import get_config_in_memory, load_elastic_email_config_from_dict_in_memory
from .transport import CapturedRequest, TransportSpy


def init_logging_in_memory(config: Config) -> None:
    """Accept the configuration without starting lib_log_rich."""


# Static conformance assertions
if TYPE_CHECKING:
    from elastic_email_adapter.application.ports import (
        GetConfig,
        InitLogging,
        LoadElasticEmailConfigFromDict,
        Transport,
    )

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_load_config: LoadElasticEmailConfigFromDict = load_elastic_email_config_from_dict_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory
    _assert_transport: Transport = TransportSpy()

__all__ = [
    "CapturedRequest",
    "TransportSpy",
    "get_config_in_memory",
    "init_logging_in_memory",
    "load_elastic_email_config_from_dict_in_memory",
]
