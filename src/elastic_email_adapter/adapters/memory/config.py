"""In-memory configuration adapters for testing.

Provides configuration functions that satisfy the same Protocols as
production adapters but operate entirely in memory -- no filesystem,
no layered lookup.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from lib_layered_config import Config

from ..elastic.config import ElasticEmailConfig


def get_config_in_memory(
    *,
    profile: str | None = None,
    start_dir: str | None = None,
) -> Config:
    """Return an empty in-memory Config."""
    return Config({}, {})


def load_elastic_email_config_from_dict_in_memory(
    config_dict: Mapping[str, Any],
) -> ElasticEmailConfig:
    """Parse the API config from dict using the real Pydantic model."""
    section = config_dict.get("elastic_email", {})
    return ElasticEmailConfig.model_validate(section if section else {})


__all__ = [
    "get_config_in_memory",
    "load_elastic_email_config_from_dict_in_memory",
]
