"""Layered configuration for the Elastic Email adapter.

lib_layered_config merges the bundled ``defaultconfig.toml`` with the app,
host and user files, a ``.env`` file and environment variables, in that
order of precedence. The ``[elastic_email]`` section of the result becomes
an :class:`~elastic_email_adapter.adapters.elastic.config.ElasticEmailConfig`;
``[lib_log_rich]`` is read by logging setup.

Contents:
    * :func:`get_config` - cached layered read, one per profile and start dir
    * :func:`load_elastic_email_config` - the validated API settings
    * :func:`get_default_config_path` - the bundled defaults file
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from lib_layered_config import DEFAULT_MAX_PROFILE_LENGTH, Config, read_config, validate_profile_name

from elastic_email_adapter import __init__conf__
from elastic_email_adapter.adapters.elastic.config import ElasticEmailConfig, load_elastic_email_config_from_dict

DEFAULT_CONFIG_PATH = Path(__file__).with_name("defaultconfig.toml")


def get_default_config_path() -> Path:
    """Return the bundled ``defaultconfig.toml``.

    Example:
        >>> get_default_config_path().name
        'defaultconfig.toml'
    """
    return DEFAULT_CONFIG_PATH


@lru_cache(maxsize=4)
def get_config(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    """Read the layered configuration.

    Args:
        profile: Optional profile name; inserts ``profile/<name>/`` into
            every configuration path.
        start_dir: Directory where ``.env`` discovery starts. Defaults to
            the current working directory.

    Raises:
        ValueError: When *profile* is empty, too long, or not a plain name.
            Rejected profiles are not cached.

    Example:
        >>> isinstance(get_config().as_dict(), dict)
        True
    """
    if profile is not None:
        validate_profile_name(profile, max_length=DEFAULT_MAX_PROFILE_LENGTH)
    return read_config(
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        profile=profile,
        default_file=DEFAULT_CONFIG_PATH,
        start_dir=start_dir,
    )


def load_elastic_email_config(*, profile: str | None = None, start_dir: str | None = None) -> ElasticEmailConfig:
    """Return the ``[elastic_email]`` section as validated API settings.

    The key is not resolved here; ``deliver`` and ``validate_config`` do that.
    """
    return load_elastic_email_config_from_dict(get_config(profile=profile, start_dir=start_dir).as_dict())


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "get_config",
    "get_default_config_path",
    "load_elastic_email_config",
]
