"""
Square Error Mapper

Converts a non-2xx response into a SquareApiError carrying parsed sub-errors.

The API answers in two shapes. Current endpoints send
``{"errors": [{"category", "code", "detail", "field"}, ...]}``; endpoints
from the v1 generation send a flat ``{"type", "message", "field"}`` object.
Each shape has its own handler; handlers are tried in registration order and
the first match wins.
"""

from dataclasses import dataclass
from typing import Any, Protocol

from square_sdk.core import json_codec
from square_sdk.core.errors import (
    LEGACY_ERROR_CATEGORY,
    BadRequestError,
    ErrorDetail,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    SquareApiError,
    UnauthorizedError,
)
from square_sdk.core.retry import parse_retry_after
from square_sdk.ports.http import HttpResponse
from square_sdk.ports.validators import IErrorMapper

_UNPARSED = object()


@dataclass
class ErrorBody:
    """Response body of a failed call, parsed once for all handlers."""

    text: str
    data: Any = _UNPARSED

    @classmethod
    def parse(cls, text: str) -> "ErrorBody":
        if not text or not text.strip():
            return cls(text=text or "")
        try:
            return cls(text=text, data=json_codec.parse(text))
        except ValueError:
            return cls(text=text)

    @property
    def parsed(self) -> bool:
        return self.data is not _UNPARSED


class IErrorHandler(Protocol):
    """Strategy for extracting sub-errors from one body shape."""

    def can_handle(self, body: ErrorBody) -> bool:
        ...

    def extract(self, body: ErrorBody) -> list[ErrorDetail]:
        ...


class StructuredErrorsHandler(IErrorHandler):
    """Body is an object with an ``errors`` array: use it verbatim."""

    def can_handle(self, body: ErrorBody) -> bool:
        return (
            body.parsed
            and isinstance(body.data, dict)
            and isinstance(body.data.get("errors"), list)
        )

    def extract(self, body: ErrorBody) -> list[ErrorDetail]:
        details = []
        for entry in body.data["errors"]:
            if isinstance(entry, dict):
                details.append(ErrorDetail.from_dict(entry))
            else:
                details.append(ErrorDetail(detail=str(entry)))
        return details


class LegacyErrorHandler(IErrorHandler):
    """Any other JSON object: synthesize one sub-error from the flat fields."""

    def can_handle(self, body: ErrorBody) -> bool:
        return body.parsed and isinstance(body.data, dict)

    def extract(self, body: ErrorBody) -> list[ErrorDetail]:
        data = body.data
        return [
            ErrorDetail(
                category=LEGACY_ERROR_CATEGORY,
                code=data.get("type") or "Unknown",
                detail=data.get("message"),
                field=data.get("field"),
            )
        ]


class UnparseableBodyHandler(IErrorHandler):
    """Empty, non-JSON or non-object body: no structured sub-errors."""

    def can_handle(self, body: ErrorBody) -> bool:
        return True

    def extract(self, body: ErrorBody) -> list[ErrorDetail]:
        return []


_STATUS_ERRORS: dict[int, type[SquareApiError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    429: RateLimitError,
}


class ErrorMapperChain(IErrorMapper):
    """Chain of Responsibility for error mapping."""

    def __init__(self):
        """Initialize empty chain."""
        self._handlers: list[IErrorHandler] = []

    def register(self, handler: IErrorHandler) -> None:
        """Register error handler.

        Handlers are tried in registration order; first match wins.
        """
        self._handlers.append(handler)

    def extract_errors(self, body: ErrorBody) -> list[ErrorDetail]:
        for handler in self._handlers:
            if handler.can_handle(body):
                return handler.extract(body)
        return []

    def map_error(self, response: HttpResponse) -> SquareApiError:
        """Build the exception for a failed call.

        Args:
            response: Final response of the call

        Returns:
            SquareApiError subclass matching the status code
        """
        body = ErrorBody.parse(response.body)
        errors = self.extract_errors(body)
        message = f"HTTP {response.status_code} from {response.url}"

        status = response.status_code
        kwargs = dict(
            status_code=status,
            headers=response.headers,
            body=body.text,
            errors=errors,
        )
        if status == 429:
            return RateLimitError(
                message, retry_after=parse_retry_after(response.headers), **kwargs
            )
        if status >= 500:
            return ServerError(message, **kwargs)
        error_cls = _STATUS_ERRORS.get(status, SquareApiError)
        return error_cls(message, **kwargs)


def create_error_mapper_chain() -> ErrorMapperChain:
    """Factory to create pre-configured error mapper chain.

    Returns:
        Chain with all standard body-shape handlers registered
    """
    chain = ErrorMapperChain()
    chain.register(StructuredErrorsHandler())
    chain.register(LegacyErrorHandler())
    chain.register(UnparseableBodyHandler())
    return chain
