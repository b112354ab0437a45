"""Elastic Email adapter - HTTP delivery of transformed messages.

Structure:
    * :mod:`.config` - API configuration model and loader
    * :mod:`.transport` - httpx form POST
    * :mod:`.delivery` - deliver and validate_config

Contents:
    * :class:`.config.ElasticEmailConfig` - API configuration container
    * :func:`.config.load_elastic_email_config_from_dict` - Config dict loader
    * :func:`.delivery.deliver` - Primary sending interface
    * :func:`.delivery.validate_config` - API key presence check
"""

from __future__ import annotations

from .config import DEFAULT_BASE_URL, ElasticEmailConfig, EnvReference, load_elastic_email_config_from_dict
from .delivery import deliver, validate_config
from .transport import post_form

__all__ = [
    "DEFAULT_BASE_URL",
    "ElasticEmailConfig",
    "EnvReference",
    "deliver",
    "load_elastic_email_config_from_dict",
    "post_form",
    "validate_config",
]
