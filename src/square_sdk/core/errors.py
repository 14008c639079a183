"""
Square SDK Exception Hierarchy

Provides specific exception types for every failure the SDK can surface,
enabling callers to tell validation, transport and API errors apart.
"""

from dataclasses import dataclass
from dataclasses import field as dataclass_field
from typing import Any

# Category given to errors synthesized from the flat v1 error body
LEGACY_ERROR_CATEGORY = "V1_ERROR"


@dataclass
class ErrorDetail:
    """One entry of the ``errors`` array returned by the API."""

    category: str | None = None
    code: str | None = None
    detail: str | None = None
    field: str | None = None
    # entry exactly as the server sent it, unknown keys included
    raw: dict[str, Any] | None = dataclass_field(default=None, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ErrorDetail":
        return cls(
            category=data.get("category"),
            code=data.get("code"),
            detail=data.get("detail"),
            field=data.get("field"),
            raw=dict(data),
        )

    def to_dict(self) -> dict[str, Any]:
        if self.raw is not None:
            return dict(self.raw)
        return {
            key: getattr(self, key)
            for key in ("category", "code", "detail", "field")
            if getattr(self, key) is not None
        }


class SquareError(Exception):
    """Base exception for all SDK errors."""

    pass


class SchemaValidationError(SquareError):
    """Value does not match its declared schema.

    Raised before any network call for request arguments, and after the
    response arrives for payloads that fail strict decoding.
    """

    def __init__(
        self,
        message: str,
        path: str = "",
        errors: list[dict[str, Any]] | None = None,
    ):
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path
        self.errors = errors or []


class MissingCredentialsError(SquareError):
    """A call requires credentials that the configuration does not hold."""

    pass


class TransportError(SquareError):
    """Connection-level failure; no HTTP response was received."""

    def __init__(self, message: str, method: str | None = None, url: str | None = None):
        super().__init__(message)
        self.method = method
        self.url = url


class RequestTimeoutError(TransportError):
    """The attempt exceeded its timeout."""

    pass


class RequestAbortedError(TransportError):
    """The caller signalled abort before or during an attempt."""

    pass


class SquareApiError(SquareError):
    """Non-2xx response from the API.

    Attributes:
        status_code: HTTP status code of the final attempt
        headers: Response headers
        body: Raw response body text
        errors: Parsed sub-errors (empty when the body was not JSON)
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        headers: dict[str, str] | None = None,
        body: str = "",
        errors: list[ErrorDetail] | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.headers = headers or {}
        self.body = body
        self.errors = errors or []

    def __str__(self) -> str:
        base = super().__str__()
        if self.errors:
            first = self.errors[0]
            return f"{base} [{first.category}/{first.code}] {first.detail or ''}".rstrip()
        return base


class BadRequestError(SquareApiError):
    """400 - Malformed request or invalid parameters."""

    pass


class UnauthorizedError(SquareApiError):
    """401 - Missing, expired or revoked access token."""

    pass


class ForbiddenError(SquareApiError):
    """403 - Token lacks the required permission."""

    pass


class NotFoundError(SquareApiError):
    """404 - Resource not found."""

    pass


class RateLimitError(SquareApiError):
    """429 - Too many requests."""

    def __init__(self, message: str, retry_after: float | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class ServerError(SquareApiError):
    """5xx - Server-side error."""

    pass
