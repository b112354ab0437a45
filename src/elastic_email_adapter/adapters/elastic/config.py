"""Elastic Email configuration model and loader.

Provides the ElasticEmailConfig Pydantic model for validated, immutable API
settings and the loader function to create it from configuration dictionaries.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

DEFAULT_BASE_URL = "https://api.elasticemail.com/v2"


class EnvReference(BaseModel):
    """Indirection to an environment variable holding a secret.

    Written in TOML as ``api_key = { env = "ELASTIC_EMAIL_API_KEY" }``.

    Example:
        >>> EnvReference(env="ELASTIC_EMAIL_API_KEY").env
        'ELASTIC_EMAIL_API_KEY'
    """

    model_config = ConfigDict(frozen=True)

    env: str

    def resolve(self) -> str | None:
        """Return the variable's value, or None when unset or blank."""
        value = os.environ.get(self.env)
        if value is None or not value.strip():
            return None
        return value


class ElasticEmailConfig(BaseModel):
    """Validated, immutable Elastic Email API configuration.

    Example:
        >>> config = ElasticEmailConfig(api_key="123_abc")
        >>> config.base_url
        'https://api.elasticemail.com/v2'
        >>> config.resolve_api_key()
        '123_abc'
    """

    model_config = ConfigDict(frozen=True)

    api_key: str | EnvReference | None = None
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0

    @field_validator("api_key", mode="before")
    @classmethod
    def _coerce_empty_key_to_none(cls, v: Any) -> Any:
        """Treat empty or whitespace-only keys from config files as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("base_url", mode="before")
    @classmethod
    def _normalize_base_url(cls, v: Any) -> Any:
        """Strip trailing slashes; an empty value falls back to the production endpoint.

        Examples:
            >>> ElasticEmailConfig._normalize_base_url("http://localhost:8080/")
            'http://localhost:8080'
            >>> ElasticEmailConfig._normalize_base_url("")
            'https://api.elasticemail.com/v2'
        """
        if isinstance(v, str):
            stripped = v.strip().rstrip("/")
            return stripped or DEFAULT_BASE_URL
        return v

    @model_validator(mode="after")
    def _validate_config(self) -> ElasticEmailConfig:
        """Validate configuration values.

        Raises:
            ValueError: When the timeout is not positive or the base URL is
                not an http(s) URL.

        Example:
            >>> ElasticEmailConfig(timeout=0)  # doctest: +IGNORE_EXCEPTION_DETAIL
            Traceback (most recent call last):
            ...
            ValidationError: ...
        """
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got {self.base_url!r}")
        return self

    def resolve_api_key(self) -> str | None:
        """Return the API key, following an environment reference.

        Example:
            >>> ElasticEmailConfig().resolve_api_key() is None
            True
        """
        if isinstance(self.api_key, EnvReference):
            return self.api_key.resolve()
        return self.api_key

    def __repr__(self) -> str:
        """Return string representation with a literal api_key redacted.

        Example:
            >>> config = ElasticEmailConfig(api_key="secret123")
            >>> "secret123" in repr(config)
            False
            >>> "[REDACTED]" in repr(config)
            True
        """
        fields: list[str] = []
        for name, value in self:
            if name == "api_key" and isinstance(value, str):
                fields.append(f"{name}='[REDACTED]'")
            else:
                fields.append(f"{name}={value!r}")
        return f"ElasticEmailConfig({', '.join(fields)})"

    def __str__(self) -> str:
        return repr(self)


def load_elastic_email_config_from_dict(config_dict: Mapping[str, Any]) -> ElasticEmailConfig:
    """Load ElasticEmailConfig from a configuration dictionary.

    Bridges lib_layered_config's dictionary output with the typed
    ElasticEmailConfig Pydantic model.

    Args:
        config_dict: Configuration dictionary typically from lib_layered_config.
            Expected to have an 'elastic_email' section.

    Returns:
        Configured API settings with defaults for missing values.

    Example:
        >>> config = load_elastic_email_config_from_dict(
        ...     {"elastic_email": {"api_key": {"env": "ELASTIC_EMAIL_API_KEY"}, "timeout": 5}}
        ... )
        >>> config.api_key
        EnvReference(env='ELASTIC_EMAIL_API_KEY')
        >>> config.timeout
        5.0
    """
    section: Any = config_dict.get("elastic_email", {})
    if not isinstance(section, Mapping):
        return ElasticEmailConfig.model_validate(section)
    raw = dict(cast(Mapping[str, Any], section))
    return ElasticEmailConfig.model_validate(raw if raw else {})


__all__ = [
    "DEFAULT_BASE_URL",
    "ElasticEmailConfig",
    "EnvReference",
    "load_elastic_email_config_from_dict",
]
