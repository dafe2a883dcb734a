from __future__ import annotations

import os
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .constants import (
    DEFAULT_INTROSPECT_ENDPOINT,
    DEFAULT_SCOPE,
    DEFAULT_TOKEN_ENDPOINT,
)
from .errors import ConfigError


class EndpointConfig(BaseModel):
    """Authorization server endpoints."""

    token: str = DEFAULT_TOKEN_ENDPOINT
    introspect: str = DEFAULT_INTROSPECT_ENDPOINT


class HttpConfig(BaseModel):
    """HTTP client settings.

    ``timeout`` is ``None`` by default: calls block until the server answers.
    """

    timeout: Optional[float] = None


class SatokenConfig(BaseModel):
    """Top-level configuration model."""

    endpoints: EndpointConfig = Field(default_factory=EndpointConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)
    scope: str = DEFAULT_SCOPE
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value):
        return value.upper() if isinstance(value, str) else value


def load_config(path: Optional[str] = None) -> SatokenConfig:
    """Load configuration from YAML file.

    Args:
        path: Optional path to config file. Falls back to SATOKEN_CONFIG env
            variable or 'satoken.yaml' in the current directory.

    Raises:
        ConfigError: If the file is not valid YAML or holds invalid values.
    """

    config_path = path or os.getenv("SATOKEN_CONFIG", "satoken.yaml")
    try:
        if os.path.exists(config_path):
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
            config = SatokenConfig(**data)
        else:
            config = SatokenConfig()
    except (yaml.YAMLError, ValidationError, TypeError) as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e

    env_token = os.getenv("SATOKEN_TOKEN_ENDPOINT")
    if env_token:
        config.endpoints.token = env_token
    env_introspect = os.getenv("SATOKEN_INTROSPECT_ENDPOINT")
    if env_introspect:
        config.endpoints.introspect = env_introspect
    env_timeout = os.getenv("SATOKEN_TIMEOUT")
    if env_timeout:
        try:
            config.http.timeout = float(env_timeout)
        except ValueError as e:
            raise ConfigError(f"SATOKEN_TIMEOUT is not a number: {env_timeout}") from e
    return config
