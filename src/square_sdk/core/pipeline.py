"""Request execution pipeline.

Coordinates one logical call: request steps, transport attempts, retry
decisions, error mapping and response decoding. Does NOT implement these
concerns itself; each is delegated to an injected collaborator.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from square_sdk.config.value_objects import ClientConfig
from square_sdk.core import json_codec
from square_sdk.core.errors import (
    RequestAbortedError,
    RequestTimeoutError,
    SchemaValidationError,
    TransportError,
)
from square_sdk.core.request_builder import (
    REQUEST_STEPS,
    RequestDescriptor,
    RequestOptions,
    RequestStep,
    StepContext,
    apply_steps,
    url_for,
    warn_deprecated,
)
from square_sdk.core.retry import RetryState
from square_sdk.core.schema import Schema
from square_sdk.observability import get_sdk_logger, mask_headers
from square_sdk.ports.http import (
    HttpRequest,
    HttpResponse,
    IAuthProvider,
    IHttpClient,
    describe_body,
)
from square_sdk.ports.validators import IErrorMapper, IRetryPolicy, RetryDecision

T = TypeVar("T")

log = get_sdk_logger("pipeline", layer="core")

_NO_OPTIONS = RequestOptions()


@dataclass(frozen=True)
class ApiResponse(Generic[T]):
    """Successful call: the raw response plus the decoded payload."""

    status_code: int
    headers: dict[str, str]
    body: str
    result: T


class RequestPipeline:
    """Executes RequestDescriptors against the API.

    Dependencies injected (not instantiated):
    - http_client: Executes single HTTP attempts
    - auth_provider: Attaches credentials
    - retry_policy: Decides retry eligibility and delays
    - error_mapper: Turns final non-2xx responses into exceptions
    """

    def __init__(
        self,
        config: ClientConfig,
        http_client: IHttpClient,
        auth_provider: IAuthProvider,
        retry_policy: IRetryPolicy,
        error_mapper: IErrorMapper,
        steps: tuple[RequestStep, ...] = REQUEST_STEPS,
        strict_decoding: bool = False,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize pipeline with injected dependencies.

        Args:
            config: Client configuration (base URL, headers, timeouts)
            http_client: Transport implementation (e.g., AiohttpClient)
            auth_provider: Credential provider (e.g., CompositeAuthProvider)
            retry_policy: Retry policy (e.g., RetryPolicy)
            error_mapper: Error mapper (e.g., ErrorMapperChain)
            steps: Ordered request transformations
            strict_decoding: Reject response payloads that do not match
            sleep: Backoff wait used when no abort signal is given
        """
        self.config = config
        self.http_client = http_client
        self.auth_provider = auth_provider
        self.retry_policy = retry_policy
        self.error_mapper = error_mapper
        self.steps = steps
        self.strict_decoding = strict_decoding
        self._sleep = sleep

    def prepare(
        self, descriptor: RequestDescriptor, options: RequestOptions | None = None
    ) -> HttpRequest:
        """Apply the request steps and resolve the final HTTP request."""
        options = options or _NO_OPTIONS
        ctx = StepContext(
            config=self.config, auth_provider=self.auth_provider, options=options
        )
        descriptor = apply_steps(descriptor, ctx, self.steps)
        return HttpRequest(
            method=descriptor.method,
            url=url_for(descriptor, self.config.base_url),
            headers=dict(descriptor.headers),
            body=descriptor.body,
            timeout=options.timeout or self.config.http_config.timeout,
        )

    async def execute(
        self,
        descriptor: RequestDescriptor,
        response_schema: Schema[T],
        options: RequestOptions | None = None,
    ) -> ApiResponse[T]:
        """Perform a logical call and decode its result.

        Args:
            descriptor: Call built by a resource method
            response_schema: Shape of the success payload
            options: Per-call overrides

        Returns:
            ApiResponse with the decoded payload

        Raises:
            SquareApiError: Final response was not 2xx
            TransportError: No response could be obtained
            SchemaValidationError: Strict decoding rejected the payload
            MissingCredentialsError: The call needs credentials that are absent
        """
        options = options or _NO_OPTIONS
        if descriptor.deprecation:
            warn_deprecated(descriptor)
            log.warning(
                "deprecated_endpoint_called",
                method=descriptor.method,
                path=descriptor.path,
                note=descriptor.deprecation,
            )

        request = self.prepare(descriptor, options)
        response = await self._send_with_retries(request, options.abort_signal)

        if not response.is_success:
            error = self.error_mapper.map_error(response)
            log.error(
                "request_failed",
                method=request.method,
                url=request.url,
                status_code=response.status_code,
                error=str(error),
            )
            raise error

        result = self._decode(response, response_schema)
        return ApiResponse(
            status_code=response.status_code,
            headers=response.headers,
            body=response.body,
            result=result,
        )

    async def _send_with_retries(
        self, request: HttpRequest, abort_signal: asyncio.Event | None
    ) -> HttpResponse:
        state = RetryState()

        log.debug(
            "request_started",
            method=request.method,
            url=request.url,
            timeout=request.timeout,
            headers=mask_headers(request.headers),
            **describe_body(request.body),
        )

        while True:
            if abort_signal is not None and abort_signal.is_set():
                raise RequestAbortedError(
                    "Request aborted", method=request.method, url=request.url
                )

            state.begin_attempt()
            response: HttpResponse | None = None
            failure: TransportError | None = None
            try:
                response = await self.http_client.execute(request, abort_signal)
            except RequestAbortedError:
                raise
            except TransportError as exc:
                failure = exc

            if response is not None:
                decision = self.retry_policy.decide(
                    state,
                    request.method,
                    status_code=response.status_code,
                    headers=response.headers,
                )
            else:
                decision = self.retry_policy.decide(
                    state,
                    request.method,
                    timed_out=isinstance(failure, RequestTimeoutError),
                    transport_failure=not isinstance(failure, RequestTimeoutError),
                )

            if decision is RetryDecision.RETRYING:
                delay = state.begin_retry()
                log.warning(
                    "request_retrying",
                    method=request.method,
                    url=request.url,
                    attempt=state.attempts,
                    status_code=response.status_code if response else None,
                    error=str(failure) if failure else None,
                    delay=delay,
                    total_wait=state.total_wait,
                )
                await self._wait(delay, abort_signal, request)
                continue

            if failure is not None:
                log.error(
                    "request_failed",
                    method=request.method,
                    url=request.url,
                    attempts=state.attempts,
                    error=str(failure),
                )
                raise failure

            if decision is RetryDecision.EXHAUSTED:
                log.warning(
                    "retries_exhausted",
                    method=request.method,
                    url=request.url,
                    attempts=state.attempts,
                    status_code=response.status_code,
                )
            elif response.is_success:
                log.info(
                    "request_succeeded",
                    method=request.method,
                    url=request.url,
                    status_code=response.status_code,
                    attempts=state.attempts,
                )
            return response

    async def _wait(
        self, delay: float, abort_signal: asyncio.Event | None, request: HttpRequest
    ) -> None:
        """Back off before the next attempt; an abort ends the wait early."""
        if abort_signal is None:
            await self._sleep(delay)
            return
        try:
            await asyncio.wait_for(abort_signal.wait(), timeout=delay)
        except asyncio.TimeoutError:
            return
        raise RequestAbortedError(
            "Request aborted during backoff", method=request.method, url=request.url
        )

    def _decode(self, response: HttpResponse, schema: Schema[T]) -> T:
        if response.body and response.body.strip():
            try:
                data = json_codec.parse(response.body)
            except ValueError as exc:
                raise SchemaValidationError(
                    f"Response body is not valid JSON: {exc}"
                ) from exc
        else:
            data = {}
        return schema.decode(data, strict=self.strict_decoding)
