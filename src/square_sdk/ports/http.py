"""HTTP communication abstractions.

Separates the HTTP transport layer from request building, retry and error
mapping. Allows easy mocking and swapping of HTTP implementations in tests.
"""

import asyncio
from dataclasses import dataclass, field
from typing import IO, Any, Protocol, Union


@dataclass(frozen=True)
class FileWrapper:
    """Binary part of a multipart upload."""

    file: IO[bytes] | bytes
    filename: str | None = None
    content_type: str | None = None


@dataclass(frozen=True)
class JsonBody:
    """Serialized JSON request body."""

    text: str
    content_type: str = "application/json"


@dataclass(frozen=True)
class JsonPart:
    """JSON part of a multipart upload (sent as a form field)."""

    text: str
    content_type: str = "application/json; charset=utf-8"


@dataclass(frozen=True)
class MultipartBody:
    """multipart/form-data body; the transport sets the boundary."""

    parts: tuple[tuple[str, Union[JsonPart, FileWrapper]], ...]


RequestBody = Union[JsonBody, MultipartBody, None]


@dataclass(frozen=True)
class HttpRequest:
    """One physical HTTP attempt."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: RequestBody = None
    timeout: float | None = None


@dataclass
class HttpResponse:
    """HTTP response data container."""

    status_code: int
    headers: dict[str, str]
    body: str
    url: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class IHttpClient(Protocol):
    """Abstraction for HTTP client.

    Single Responsibility: Execute one HTTP request and return its response.
    Does NOT handle:
    - Response validation
    - Error mapping
    - Retry logic
    - Credential injection
    """

    async def execute(
        self,
        request: HttpRequest,
        abort_signal: asyncio.Event | None = None,
    ) -> HttpResponse:
        """Execute a single attempt.

        Args:
            request: Fully built request
            abort_signal: Event that cancels the attempt when set

        Raises:
            RequestTimeoutError: The attempt exceeded its timeout
            RequestAbortedError: abort_signal was set
            TransportError: On network or connection errors
        """
        ...

    async def close(self) -> None:
        """Release pooled connections."""
        ...


class IAuthProvider(Protocol):
    """Abstraction for credential schemes.

    Single Responsibility: Produce the headers a call's auth requirements need.
    Never performs network activity.
    """

    def apply(self, headers: dict[str, str], requirements: tuple[str, ...]) -> dict[str, str]:
        """Return a new header mapping with credentials attached.

        Raises:
            MissingCredentialsError: If a requirement cannot be satisfied
        """
        ...


def describe_body(body: RequestBody) -> dict[str, Any]:
    """Loggable summary of a request body (never the content)."""
    if body is None:
        return {"body": "none"}
    if isinstance(body, JsonBody):
        return {"body": "json", "body_bytes": len(body.text.encode("utf-8"))}
    return {"body": "multipart", "parts": [name for name, _ in body.parts]}
