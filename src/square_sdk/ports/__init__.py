"""Ports: protocols the request pipeline depends on."""

from .http import (  # noqa: F401
    FileWrapper,
    HttpRequest,
    HttpResponse,
    IAuthProvider,
    IHttpClient,
    JsonBody,
    JsonPart,
    MultipartBody,
    RequestBody,
)
from .validators import IErrorMapper, IRetryPolicy, RetryDecision  # noqa: F401

__all__ = [
    "FileWrapper",
    "HttpRequest",
    "HttpResponse",
    "IAuthProvider",
    "IHttpClient",
    "JsonBody",
    "JsonPart",
    "MultipartBody",
    "RequestBody",
    "IErrorMapper",
    "IRetryPolicy",
    "RetryDecision",
]
