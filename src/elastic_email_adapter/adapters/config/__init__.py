"""Configuration adapter - layered configuration loading.

Contents:
    * :mod:`.loader` - lib_layered_config reads and the Elastic Email settings built from them
"""

from __future__ import annotations

from .loader import get_config, get_default_config_path, load_elastic_email_config

__all__ = [
    "get_config",
    "get_default_config_path",
    "load_elastic_email_config",
]
