from .state import ConfigLoader, SdkSettings, load_client_config
from .value_objects import (
    BearerAuthCredentials,
    ClientConfig,
    Environment,
    HttpClientConfig,
    RetryConfig,
)

__all__ = [
    "BearerAuthCredentials",
    "ClientConfig",
    "ConfigLoader",
    "Environment",
    "HttpClientConfig",
    "RetryConfig",
    "SdkSettings",
    "load_client_config",
]
