"""Concrete HTTP client implementation for async requests.

Wraps aiohttp behind the IHttpClient abstraction. One session (and its
connection pool) is shared by every call made through a client instance.
"""

import asyncio

import aiohttp

from square_sdk.config.value_objects import HttpClientConfig
from square_sdk.core.errors import (
    RequestAbortedError,
    RequestTimeoutError,
    TransportError,
)
from square_sdk.observability import get_sdk_logger
from square_sdk.ports.http import (
    FileWrapper,
    HttpRequest,
    HttpResponse,
    IHttpClient,
    JsonBody,
    MultipartBody,
    RequestBody,
)

log = get_sdk_logger("aiohttp-client")


class AiohttpClient(IHttpClient):
    """HTTP client implementation using aiohttp."""

    def __init__(self, config: HttpClientConfig):
        """Initialize HTTP client.

        Args:
            config: HTTP client configuration
        """
        self.config = config
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            if self.config.verify_ssl:
                connector = aiohttp.TCPConnector(limit=self.config.connector_limit)
            else:
                connector = aiohttp.TCPConnector(
                    limit=self.config.connector_limit, ssl=False
                )
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.config.timeout),
                connector=connector,
            )
        return self._session

    @staticmethod
    def _build_data(body: RequestBody):
        if body is None:
            return None
        if isinstance(body, JsonBody):
            return body.text.encode("utf-8")
        if isinstance(body, MultipartBody):
            form = aiohttp.FormData()
            for name, part in body.parts:
                if isinstance(part, FileWrapper):
                    payload = part.file
                    # rewind so a retried attempt sends the whole file again
                    if hasattr(payload, "seek"):
                        payload.seek(0)
                    form.add_field(
                        name,
                        payload,
                        filename=part.filename or name,
                        content_type=part.content_type or "application/octet-stream",
                    )
                else:
                    form.add_field(name, part.text, content_type=part.content_type)
            return form
        raise TypeError(f"Unsupported request body: {type(body).__name__}")

    async def _send(self, request: HttpRequest) -> HttpResponse:
        session = await self._get_session()
        timeout = aiohttp.ClientTimeout(total=request.timeout or self.config.timeout)

        try:
            async with session.request(
                request.method,
                request.url,
                headers=request.headers,
                data=self._build_data(request.body),
                timeout=timeout,
                proxy=self.config.proxy,
            ) as resp:
                body = await resp.text(errors="replace")
                return HttpResponse(
                    status_code=resp.status,
                    headers=dict(resp.headers),
                    body=body,
                    url=str(resp.url),
                )
        except asyncio.TimeoutError as exc:
            raise RequestTimeoutError(
                f"{request.method} {request.url} timed out after {timeout.total}s",
                method=request.method,
                url=request.url,
            ) from exc
        except aiohttp.ClientError as exc:
            raise TransportError(
                f"{request.method} {request.url} failed: {exc}",
                method=request.method,
                url=request.url,
            ) from exc

    async def execute(
        self,
        request: HttpRequest,
        abort_signal: asyncio.Event | None = None,
    ) -> HttpResponse:
        """Execute a single attempt.

        Args:
            request: Fully built request
            abort_signal: Event that cancels the in-flight attempt when set

        Returns:
            HttpResponse with status, headers, body text

        Raises:
            RequestTimeoutError: On timeout
            RequestAbortedError: When abort_signal is set
            TransportError: On connection errors
        """
        if abort_signal is None:
            return await self._send(request)

        if abort_signal.is_set():
            raise RequestAbortedError(
                "Request aborted before sending", method=request.method, url=request.url
            )

        send_task = asyncio.ensure_future(self._send(request))
        abort_task = asyncio.ensure_future(abort_signal.wait())
        try:
            done, _ = await asyncio.wait(
                {send_task, abort_task}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            abort_task.cancel()
            if not send_task.done():
                send_task.cancel()

        if send_task in done:
            return send_task.result()

        # let the cancelled attempt release its connection
        await asyncio.gather(send_task, return_exceptions=True)
        log.info("request_aborted", method=request.method, url=request.url)
        raise RequestAbortedError(
            "Request aborted in flight", method=request.method, url=request.url
        )

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None
