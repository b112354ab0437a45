"""Composition root wiring adapters to application ports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

# Configuration services
from ..adapters.config.loader import get_config, get_default_config_path, load_elastic_email_config

# Delivery services
from ..adapters.elastic.config import load_elastic_email_config_from_dict
from ..adapters.elastic.delivery import deliver
from ..adapters.elastic.transport import post_form

# Logging services
from ..adapters.logging.setup import init_logging

# Static conformance assertions: pyright verifies that each adapter function
# structurally satisfies its corresponding Protocol at type-check time.
if TYPE_CHECKING:
    from ..adapters.memory.transport import TransportSpy
    from ..application.ports import (
        Deliver,
        GetConfig,
        InitLogging,
        LoadElasticEmailConfigFromDict,
        Transport,
    )

    _assert_get_config: GetConfig = get_config
    _assert_load_elastic_email_config_from_dict: LoadElasticEmailConfigFromDict = load_elastic_email_config_from_dict
    _assert_deliver: Deliver = deliver
    _assert_post_form: Transport = post_form
    _assert_init_logging: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    get_config: GetConfig
    load_elastic_email_config_from_dict: LoadElasticEmailConfigFromDict
    deliver: Deliver
    transport: Transport
    init_logging: InitLogging


def build_production() -> AppServices:
    """Wire production adapters into an AppServices container."""
    return AppServices(
        get_config=get_config,
        load_elastic_email_config_from_dict=load_elastic_email_config_from_dict,
        deliver=deliver,
        transport=post_form,
        init_logging=init_logging,
    )


def build_testing(*, spy: TransportSpy | None = None) -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    Args:
        spy: Optional TransportSpy instance for capturing requests.
            When None, a fresh TransportSpy is created. Pass your own spy
            to assert on captured requests in tests.

    Returns:
        AppServices container with in-memory adapters.
    """
    from ..adapters.memory import (
        TransportSpy,
        get_config_in_memory,
        init_logging_in_memory,
        load_elastic_email_config_from_dict_in_memory,
    )

    transport_spy = spy if spy is not None else TransportSpy()

    return AppServices(
        get_config=get_config_in_memory,
        load_elastic_email_config_from_dict=load_elastic_email_config_from_dict_in_memory,
        deliver=deliver,
        transport=transport_spy,
        init_logging=init_logging_in_memory,
    )


__all__ = [
    # Configuration
    "get_config",
    "get_default_config_path",
    "load_elastic_email_config",
    "load_elastic_email_config_from_dict",
    # Delivery
    "deliver",
    "post_form",
    # Logging
    "init_logging",
    # Composition
    "AppServices",
    "build_production",
    "build_testing",
]
