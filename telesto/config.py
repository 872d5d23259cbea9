"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for all configuration.
Every value can be overridden via environment variables:

- TELESTO_DIRECTIONS_BASE_URL=https://maps.googleapis.com
- TELESTO_DIRECTIONS_TIMEOUT_SECONDS=10
- TELESTO_DISPATCH_CONCURRENCY=20
- TELESTO_API_KEY=...
- TELESTO_LOG_LEVEL=DEBUG
- etc.

Command-line options take precedence over the environment.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DirectionsConfig(BaseSettings):
    """Directions service endpoint configuration.

    Environment variables prefixed with TELESTO_DIRECTIONS_.
    """

    model_config = SettingsConfigDict(env_prefix="TELESTO_DIRECTIONS_")

    base_url: str = "https://maps.googleapis.com"
    path: str = "/maps/api/directions/json"
    timeout_seconds: float = Field(default=30.0, gt=0)


class DispatchConfig(BaseSettings):
    """Concurrent dispatch configuration.

    Environment variables prefixed with TELESTO_DISPATCH_.
    """

    model_config = SettingsConfigDict(env_prefix="TELESTO_DISPATCH_")

    concurrency: int = Field(default=50, ge=1)


class CredentialsConfig(BaseSettings):
    """Credentials fallback when none are given on the command line.

    Environment variables prefixed with TELESTO_.
    """

    model_config = SettingsConfigDict(env_prefix="TELESTO_")

    api_key: Optional[str] = None
    client_id: Optional[str] = None
    private_key: Optional[str] = None
    channel: Optional[str] = None


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with TELESTO_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="TELESTO_LOG_")

    level: str = "WARNING"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

    Sub-configurations can be accessed via attributes:

        config = get_config()
        print(config.dispatch.concurrency)
        print(config.directions.base_url)

    Environment variables prefixed with TELESTO_.
    """

    model_config = SettingsConfigDict(env_prefix="TELESTO_")

    directions: DirectionsConfig = Field(default_factory=DirectionsConfig)
    dispatch: DispatchConfig = Field(default_factory=DispatchConfig)
    credentials: CredentialsConfig = Field(default_factory=CredentialsConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache."""
    get_config.cache_clear()
