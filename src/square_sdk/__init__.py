"""Async Python client for the Square API."""

from square_sdk.client import SquareClient
from square_sdk.config.value_objects import (
    SDK_VERSION,
    BearerAuthCredentials,
    ClientConfig,
    Environment,
    HttpClientConfig,
    RetryConfig,
)
from square_sdk.core.errors import (
    BadRequestError,
    ErrorDetail,
    ForbiddenError,
    MissingCredentialsError,
    NotFoundError,
    RateLimitError,
    RequestAbortedError,
    RequestTimeoutError,
    SchemaValidationError,
    ServerError,
    SquareApiError,
    SquareError,
    TransportError,
    UnauthorizedError,
)
from square_sdk.core.pipeline import ApiResponse
from square_sdk.core.request_builder import RequestOptions
from square_sdk.ports.http import FileWrapper

__version__ = SDK_VERSION

__all__ = [
    "ApiResponse",
    "BadRequestError",
    "BearerAuthCredentials",
    "ClientConfig",
    "Environment",
    "ErrorDetail",
    "FileWrapper",
    "ForbiddenError",
    "HttpClientConfig",
    "MissingCredentialsError",
    "NotFoundError",
    "RateLimitError",
    "RequestAbortedError",
    "RequestOptions",
    "RequestTimeoutError",
    "RetryConfig",
    "SchemaValidationError",
    "ServerError",
    "SquareApiError",
    "SquareClient",
    "SquareError",
    "TransportError",
    "UnauthorizedError",
]
