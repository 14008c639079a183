"""Configuration value objects for dependency injection.

Instead of reading a global settings object, every component receives the
specific frozen dataclass it needs. Enables:
- Easy testing with different configurations
- Clear constructor contracts
- Cheap, independent clones via ``with_overrides``
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

SDK_VERSION = "0.4.0"
DEFAULT_SQUARE_VERSION = "2024-02-28"
MAX_USER_AGENT_DETAIL_LENGTH = 128


class Environment(str, Enum):
    """API environment the client talks to."""

    PRODUCTION = "production"
    SANDBOX = "sandbox"
    CUSTOM = "custom"


ENVIRONMENT_URLS = {
    Environment.PRODUCTION: "https://connect.squareup.com",
    Environment.SANDBOX: "https://connect.squareupsandbox.com",
}


@dataclass(frozen=True)
class HttpClientConfig:
    """Configuration for the HTTP transport."""

    timeout: float = 60.0
    proxy: str | None = None
    connector_limit: int = 100
    verify_ssl: bool = True


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry behavior.

    Retries are opt-in: ``max_retries`` defaults to zero. Only idempotent
    methods are retried unless ``retryable_methods`` says otherwise.
    """

    max_retries: int = 0
    retry_on_timeout: bool = True
    base_interval: float = 1.0
    max_total_wait: float = 60.0
    backoff_factor: float = 2.0
    retryable_status_codes: frozenset[int] = frozenset(
        {408, 413, 429, 500, 502, 503, 504, 521, 522, 524}
    )
    retryable_methods: frozenset[str] = frozenset({"GET", "PUT"})

    def __post_init__(self):
        """Normalize collections and reject nonsensical values."""
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.base_interval < 0 or self.max_total_wait < 0:
            raise ValueError("retry intervals must be >= 0")
        if self.backoff_factor < 1:
            raise ValueError("backoff_factor must be >= 1")
        object.__setattr__(
            self, "retryable_status_codes", frozenset(self.retryable_status_codes)
        )
        object.__setattr__(
            self,
            "retryable_methods",
            frozenset(m.upper() for m in self.retryable_methods),
        )


@dataclass(frozen=True)
class BearerAuthCredentials:
    """Structured credential object for the bearer scheme."""

    access_token: str


@dataclass(frozen=True)
class ClientConfig:
    """Configuration for a SquareClient instance.

    Immutable; ``with_overrides`` produces a new instance.
    """

    environment: Environment = Environment.PRODUCTION
    custom_url: str = "https://connect.squareup.com"
    square_version: str = DEFAULT_SQUARE_VERSION
    access_token: str | None = None
    bearer_auth_credentials: BearerAuthCredentials | None = None
    additional_headers: dict[str, str] = field(default_factory=dict)
    user_agent_detail: str = ""
    strict_decoding: bool = False
    http_config: HttpClientConfig = None
    retry_config: RetryConfig = None

    def __post_init__(self):
        """Set defaults for nested configs and validate."""
        if self.http_config is None:
            object.__setattr__(self, "http_config", HttpClientConfig())
        if self.retry_config is None:
            object.__setattr__(self, "retry_config", RetryConfig())
        if not isinstance(self.environment, Environment):
            object.__setattr__(self, "environment", Environment(self.environment))
        if len(self.user_agent_detail) > MAX_USER_AGENT_DETAIL_LENGTH:
            raise ValueError(
                f"user_agent_detail must be at most {MAX_USER_AGENT_DETAIL_LENGTH} characters"
            )
        object.__setattr__(self, "additional_headers", dict(self.additional_headers))

    @property
    def base_url(self) -> str:
        if self.environment is Environment.CUSTOM:
            return self.custom_url.rstrip("/")
        return ENVIRONMENT_URLS[self.environment]

    @property
    def bearer_token(self) -> str | None:
        """Token for the bearer scheme; the structured credentials win."""
        if self.bearer_auth_credentials is not None:
            return self.bearer_auth_credentials.access_token
        return self.access_token

    @property
    def user_agent(self) -> str:
        agent = f"Square-Python-SDK/{SDK_VERSION} ({self.square_version})"
        if self.user_agent_detail:
            agent = f"{agent} {self.user_agent_detail}"
        return agent

    def with_overrides(self, **changes: Any) -> "ClientConfig":
        """Return a copy with ``changes`` applied; ``None`` values are ignored.

        ``timeout`` and the retry fields may be passed directly and are routed
        into the nested configs.

        Usage:
            >>> slow = config.with_overrides(timeout=120, max_retries=2)
        """
        changes = {k: v for k, v in changes.items() if v is not None}

        http_fields = {f for f in HttpClientConfig.__dataclass_fields__}
        retry_fields = {f for f in RetryConfig.__dataclass_fields__}

        http_changes = {k: changes.pop(k) for k in list(changes) if k in http_fields}
        retry_changes = {k: changes.pop(k) for k in list(changes) if k in retry_fields}

        http_config = changes.pop("http_config", self.http_config)
        retry_config = changes.pop("retry_config", self.retry_config)
        if http_changes:
            http_config = replace(http_config, **http_changes)
        if retry_changes:
            retry_config = replace(retry_config, **retry_changes)

        if "additional_headers" in changes:
            changes["additional_headers"] = {
                **self.additional_headers,
                **changes["additional_headers"],
            }

        return replace(
            self, http_config=http_config, retry_config=retry_config, **changes
        )
