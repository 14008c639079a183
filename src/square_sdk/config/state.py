"""
Settings loaded from YAML and the process environment.

Applications that prefer configuration files over constructor arguments
describe the client in ``square.yaml`` and let ``ConfigLoader`` merge:

  1. Global defaults (the pydantic field defaults below)
  2. ``square.yaml`` from the config directory
  3. ``env/<SQUARE_ENV>.yaml`` from the config directory
  4. Environment variable overrides
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from square_sdk.config.value_objects import (
    DEFAULT_SQUARE_VERSION,
    ClientConfig,
    Environment,
    HttpClientConfig,
    RetryConfig,
)
from square_sdk.observability import setup_logging

logger = logging.getLogger(__name__)


# =============================================================================
# PYDANTIC MODELS - Type-Safe Configuration
# =============================================================================


class HttpSettings(BaseModel):
    """Transport settings."""

    timeout: float = Field(default=60.0, gt=0)
    proxy: str | None = Field(default=None)
    connector_limit: int = Field(default=100, ge=1)
    verify_ssl: bool = Field(default=True)


class RetrySettings(BaseModel):
    """Retry tuning."""

    max_retries: int = Field(default=0, ge=0, le=20)
    retry_on_timeout: bool = Field(default=True)
    base_interval: float = Field(default=1.0, ge=0)
    max_total_wait: float = Field(default=60.0, ge=0)
    backoff_factor: float = Field(default=2.0, ge=1)
    retryable_status_codes: list[int] = Field(
        default_factory=lambda: [408, 413, 429, 500, 502, 503, 504, 521, 522, 524]
    )
    retryable_methods: list[str] = Field(default_factory=lambda: ["GET", "PUT"])

    @field_validator("retryable_methods")
    @classmethod
    def upper_methods(cls, v: list[str]) -> list[str]:
        return [m.upper() for m in v]


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO")
    json_logs: bool = Field(default=True)


class SdkSettings(BaseModel):
    """
    Root configuration state for a SquareClient built from files.
    """

    environment: Environment = Field(default=Environment.SANDBOX)
    custom_url: str = Field(default="https://connect.squareup.com")
    square_version: str = Field(default=DEFAULT_SQUARE_VERSION)
    access_token: str | None = Field(default=None)
    additional_headers: dict[str, str] = Field(default_factory=dict)
    user_agent_detail: str = Field(default="", max_length=128)
    strict_decoding: bool = Field(default=False)
    http: HttpSettings = Field(default_factory=HttpSettings)
    retry: RetrySettings = Field(default_factory=RetrySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    config_dir: str = Field(default="./config")

    @field_validator("custom_url")
    @classmethod
    def validate_custom_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("custom_url must start with http:// or https://")
        return v

    @model_validator(mode="after")
    def require_token_in_production(self) -> "SdkSettings":
        if self.environment is Environment.PRODUCTION and not self.access_token:
            raise ValueError("access_token is required for the production environment")
        return self

    def to_client_config(self) -> ClientConfig:
        """Build the immutable client configuration."""
        return ClientConfig(
            environment=self.environment,
            custom_url=self.custom_url,
            square_version=self.square_version,
            access_token=self.access_token,
            additional_headers=dict(self.additional_headers),
            user_agent_detail=self.user_agent_detail,
            strict_decoding=self.strict_decoding,
            http_config=HttpClientConfig(**self.http.model_dump()),
            retry_config=RetryConfig(
                max_retries=self.retry.max_retries,
                retry_on_timeout=self.retry.retry_on_timeout,
                base_interval=self.retry.base_interval,
                max_total_wait=self.retry.max_total_wait,
                backoff_factor=self.retry.backoff_factor,
                retryable_status_codes=frozenset(self.retry.retryable_status_codes),
                retryable_methods=frozenset(self.retry.retryable_methods),
            ),
        )


# =============================================================================
# CONFIG LOADER - Clean, Validated Loading
# =============================================================================


class ConfigLoader:
    """
    Load and validate SDK settings from YAML files and the environment.
    """

    def __init__(self, config_dir: str = "./config", env: dict[str, str] | None = None):
        self.config_dir = Path(config_dir)
        self._env = os.environ if env is None else env
        self.profile = self._env.get("SQUARE_ENV", "dev")

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        """Load a YAML mapping; a missing file yields an empty mapping."""
        if not path.exists():
            logger.debug(f"Config file not found (using defaults): {path}")
            return {}

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path} must contain a mapping, got {type(data).__name__}")
        logger.debug(f"Loaded config: {path}")
        return data

    def _apply_env_overrides(self, config: dict[str, Any]) -> dict[str, Any]:
        """Apply environment variable overrides to config."""
        env = self._env

        if token := env.get("SQUARE_ACCESS_TOKEN"):
            config["access_token"] = token

        if environment := env.get("SQUARE_ENVIRONMENT"):
            config["environment"] = environment.lower()

        if version := env.get("SQUARE_VERSION"):
            config["square_version"] = version

        if custom_url := env.get("SQUARE_CUSTOM_URL"):
            config["custom_url"] = custom_url
            config.setdefault("environment", Environment.CUSTOM.value)

        if timeout := env.get("SQUARE_TIMEOUT"):
            config.setdefault("http", {})["timeout"] = float(timeout)

        if max_retries := env.get("SQUARE_MAX_RETRIES"):
            config.setdefault("retry", {})["max_retries"] = int(max_retries)

        if log_level := env.get("LOG_LEVEL"):
            config.setdefault("logging", {})["level"] = log_level

        return config

    def _merge_dicts(self, base: dict, override: dict) -> dict:
        """Deep merge override into base dict."""
        result = base.copy()
        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._merge_dicts(result[key], value)
            else:
                result[key] = value
        return result

    def load(self) -> SdkSettings:
        """
        Load complete SDK settings.

        Raises:
            pydantic.ValidationError: If the merged configuration is invalid
        """
        logger.info(f"Loading SDK configuration from {self.config_dir} (profile: {self.profile})")

        config = self._load_yaml(self.config_dir / "square.yaml")
        profile_config = self._load_yaml(self.config_dir / "env" / f"{self.profile}.yaml")
        config = self._merge_dicts(config, profile_config)
        config = self._apply_env_overrides(config)

        try:
            settings = SdkSettings(config_dir=str(self.config_dir), **config)
        except Exception as e:
            logger.error(f"Configuration validation failed: {e}")
            raise

        logger.info(
            f"Configuration loaded: environment={settings.environment.value}, "
            f"version={settings.square_version}, max_retries={settings.retry.max_retries}"
        )
        return settings


def load_client_config(
    config_dir: str | None = None, configure_logging: bool = False
) -> ClientConfig:
    """
    Load settings and return the client configuration.

    Args:
        config_dir: Override config directory. Defaults to $SQUARE_CONFIG_DIR or ./config
        configure_logging: Also apply the ``logging`` section via setup_logging()
    """
    if config_dir is None:
        config_dir = os.getenv("SQUARE_CONFIG_DIR", "./config")
    settings = ConfigLoader(config_dir=config_dir).load()
    if configure_logging:
        setup_logging(level=settings.logging.level, json_logs=settings.logging.json_logs)
    return settings.to_client_config()
