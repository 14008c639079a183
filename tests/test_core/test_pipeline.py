"""
Tests for RequestPipeline: attempt counts, backoff, abort and decoding.
"""

import asyncio

import pytest

from square_sdk.config.value_objects import ClientConfig, Environment
from square_sdk.core.errors import (
    BadRequestError,
    MissingCredentialsError,
    RequestAbortedError,
    RequestTimeoutError,
    SchemaValidationError,
    ServerError,
    TransportError,
)
from square_sdk.core.request_builder import RequestBuilder, RequestOptions
from square_sdk.core.schema import Schema
from square_sdk.models import CreateOrderResponse, ListLocationsResponse
from tests.fixtures import HangingHttpClient, fixture_response, make_response

LOCATIONS = Schema(ListLocationsResponse)


def get_locations():
    return RequestBuilder("GET", "/v2/locations").requires_auth().build()


def post_order():
    return (
        RequestBuilder("POST", "/v2/orders")
        .json_body({"order": {"location_id": "L1"}}, Schema(dict))
        .requires_auth()
        .build()
    )


class TestSuccess:
    @pytest.mark.asyncio
    async def test_decodes_payload(self, make_pipeline, transport):
        transport.queue(fixture_response("list_locations"))

        response = await make_pipeline().execute(get_locations(), LOCATIONS)

        assert response.status_code == 200
        assert response.result.locations[0].name == "Main Street Store"
        assert '"Main Street Store"' in response.body

    @pytest.mark.asyncio
    async def test_request_shape(self, make_pipeline, transport):
        transport.queue(make_response(200, "{}"))

        await make_pipeline().execute(get_locations(), LOCATIONS)

        request = transport.requests[0]
        assert request.method == "GET"
        assert request.url == "https://connect.squareupsandbox.com/v2/locations"
        assert request.headers["Authorization"] == "Bearer EAAAl-test-token"
        assert request.headers["Square-Version"] == "2024-02-28"
        assert request.timeout == 60.0

    @pytest.mark.asyncio
    async def test_empty_body_decodes_as_empty_object(self, make_pipeline, transport):
        transport.queue(make_response(200, ""))

        response = await make_pipeline().execute(get_locations(), LOCATIONS)

        assert response.result.locations == []

    @pytest.mark.asyncio
    async def test_big_integers_survive(self, make_pipeline, transport):
        transport.queue(fixture_response("create_order"))

        response = await make_pipeline().execute(post_order(), Schema(CreateOrderResponse))

        assert response.result.order.total_money.amount == 9007199254740993

    @pytest.mark.asyncio
    async def test_non_json_success_body(self, make_pipeline, transport):
        transport.queue(make_response(200, "<html>"))

        with pytest.raises(SchemaValidationError):
            await make_pipeline().execute(get_locations(), LOCATIONS)

    @pytest.mark.asyncio
    async def test_per_call_options(self, make_pipeline, transport):
        transport.queue(make_response(200, "{}"))

        await make_pipeline().execute(
            get_locations(),
            LOCATIONS,
            RequestOptions(timeout=5.0, headers={"X-Debug": "1"}),
        )

        request = transport.requests[0]
        assert request.timeout == 5.0
        assert request.headers["X-Debug"] == "1"


class TestAttemptCounts:
    @pytest.mark.asyncio
    async def test_post_is_attempted_once(self, make_pipeline, transport):
        transport.queue(make_response(503, "{}"), make_response(200, "{}"))

        with pytest.raises(ServerError):
            await make_pipeline(max_retries=5).execute(post_order(), Schema(dict))

        assert transport.attempts == 1

    @pytest.mark.asyncio
    async def test_get_retries_until_success(self, make_pipeline, transport, sleep):
        transport.queue(
            make_response(503, "{}"),
            make_response(503, "{}"),
            fixture_response("list_locations"),
        )

        response = await make_pipeline(max_retries=5).execute(get_locations(), LOCATIONS)

        assert response.status_code == 200
        assert transport.attempts == 3
        assert sleep.delays == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_get_stops_at_max_retries(self, make_pipeline, transport, sleep):
        transport.queue(*[make_response(503, "{}") for _ in range(5)])

        with pytest.raises(ServerError) as exc_info:
            await make_pipeline(max_retries=2, base_interval=0.5).execute(
                get_locations(), LOCATIONS
            )

        assert transport.attempts == 3
        assert sleep.delays == [0.5, 1.0]
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_waits_stay_under_ceiling(self, make_pipeline, transport, sleep):
        transport.queue(*[make_response(500, "{}") for _ in range(10)])

        with pytest.raises(ServerError):
            await make_pipeline(max_retries=9, max_total_wait=5.0).execute(
                get_locations(), LOCATIONS
            )

        # 1 + 2, then the third wait is clamped to the remaining 2
        assert sleep.delays == [1.0, 2.0, 2.0]
        assert sum(sleep.delays) == 5.0
        assert transport.attempts == 4

    @pytest.mark.asyncio
    async def test_default_ceiling_allows_every_retry(self, make_pipeline, transport, sleep):
        transport.queue(*[make_response(503, "{}") for _ in range(8)])

        with pytest.raises(ServerError):
            await make_pipeline(max_retries=6).execute(get_locations(), LOCATIONS)

        assert transport.attempts == 7
        assert sleep.delays == [1.0, 2.0, 4.0, 8.0, 16.0, 29.0]
        assert sum(sleep.delays) <= 60.0

    @pytest.mark.asyncio
    async def test_default_policy_makes_one_attempt(self, make_pipeline, transport):
        transport.queue(make_response(503, "{}"), make_response(200, "{}"))

        with pytest.raises(ServerError):
            await make_pipeline().execute(get_locations(), LOCATIONS)

        assert transport.attempts == 1

    @pytest.mark.asyncio
    async def test_non_retryable_status_fails_immediately(self, make_pipeline, transport):
        transport.queue(fixture_response("structured_error", 400))

        with pytest.raises(BadRequestError) as exc_info:
            await make_pipeline(max_retries=3).execute(get_locations(), LOCATIONS)

        assert transport.attempts == 1
        assert exc_info.value.errors[0].field == "idempotency_key"


class TestTransportFailures:
    @pytest.mark.asyncio
    async def test_timeout_is_retried(self, make_pipeline, transport):
        transport.queue(RequestTimeoutError("slow"), make_response(200, "{}"))

        response = await make_pipeline(max_retries=1).execute(get_locations(), LOCATIONS)

        assert response.status_code == 200
        assert transport.attempts == 2

    @pytest.mark.asyncio
    async def test_timeout_surfaces_when_flag_is_off(self, make_pipeline, transport):
        transport.queue(RequestTimeoutError("slow"), make_response(200, "{}"))

        with pytest.raises(RequestTimeoutError):
            await make_pipeline(max_retries=1, retry_on_timeout=False).execute(
                get_locations(), LOCATIONS
            )

        assert transport.attempts == 1

    @pytest.mark.asyncio
    async def test_connection_error_on_post_surfaces(self, make_pipeline, transport):
        transport.queue(TransportError("reset"))

        with pytest.raises(TransportError, match="reset"):
            await make_pipeline(max_retries=3).execute(post_order(), Schema(dict))

        assert transport.attempts == 1

    @pytest.mark.asyncio
    async def test_connection_errors_exhaust_retries(self, make_pipeline, transport):
        transport.queue(TransportError("reset"), TransportError("reset again"))

        with pytest.raises(TransportError, match="reset again"):
            await make_pipeline(max_retries=1).execute(get_locations(), LOCATIONS)

        assert transport.attempts == 2


class TestValidationBeforeNetwork:
    @pytest.mark.asyncio
    async def test_missing_token_sends_nothing(self, make_pipeline, transport):
        pipeline = make_pipeline(ClientConfig(environment=Environment.SANDBOX))

        with pytest.raises(MissingCredentialsError):
            await pipeline.execute(get_locations(), LOCATIONS)

        assert transport.attempts == 0


class TestAbort:
    @pytest.mark.asyncio
    async def test_already_aborted_sends_nothing(self, make_pipeline, transport):
        signal = asyncio.Event()
        signal.set()

        with pytest.raises(RequestAbortedError):
            await make_pipeline().execute(
                get_locations(), LOCATIONS, RequestOptions(abort_signal=signal)
            )

        assert transport.attempts == 0

    @pytest.mark.asyncio
    async def test_abort_in_flight(self, make_pipeline, sleep):
        hanging = HangingHttpClient()
        pipeline = make_pipeline(max_retries=3)
        pipeline.http_client = hanging
        signal = asyncio.Event()

        call = asyncio.ensure_future(
            pipeline.execute(get_locations(), LOCATIONS, RequestOptions(abort_signal=signal))
        )
        await asyncio.sleep(0)
        signal.set()

        with pytest.raises(RequestAbortedError):
            await call

        assert hanging.attempts == 1

    @pytest.mark.asyncio
    async def test_abort_during_backoff_stops_retries(self, make_pipeline, transport):
        transport.queue(make_response(503, "{}"), make_response(200, "{}"))
        pipeline = make_pipeline(max_retries=3, base_interval=30.0)
        signal = asyncio.Event()

        call = asyncio.ensure_future(
            pipeline.execute(get_locations(), LOCATIONS, RequestOptions(abort_signal=signal))
        )
        await asyncio.sleep(0.01)
        signal.set()

        with pytest.raises(RequestAbortedError):
            await call

        assert transport.attempts == 1


class TestDeprecation:
    @pytest.mark.asyncio
    async def test_deprecated_call_warns_and_proceeds(self, make_pipeline, transport):
        transport.queue(make_response(200, "{}"))
        descriptor = (
            RequestBuilder("GET", "/v2/locations/{location_id}/transactions")
            .path_params(location_id="L1")
            .requires_auth()
            .deprecated("Use list_payments.")
            .build()
        )

        with pytest.warns(DeprecationWarning):
            response = await make_pipeline().execute(descriptor, Schema(dict))

        assert response.status_code == 200
        assert transport.attempts == 1
