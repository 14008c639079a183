"""
Tests for the resource facades: paths, query strings, bodies and results.
"""

import json
from urllib.parse import parse_qsl, urlsplit

import pytest

from square_sdk.core.errors import NotFoundError, SchemaValidationError
from square_sdk.models import CreatePaymentRequest, Money
from square_sdk.ports.http import FileWrapper, JsonBody, MultipartBody
from tests.fixtures import fixture_response, make_response

SANDBOX = "https://connect.squareupsandbox.com"


def sent(transport, index=0):
    request = transport.requests[index]
    parts = urlsplit(request.url)
    return request, parts.path, dict(parse_qsl(parts.query))


class TestCatalogApi:
    @pytest.mark.asyncio
    async def test_list_catalog_query(self, client, transport):
        transport.queue(make_response(200, '{"objects":[]}'))

        await client.catalog.list_catalog(types=["ITEM", "CATEGORY"])

        request, path, query = sent(transport)
        assert request.method == "GET"
        assert path == "/v2/catalog/list"
        assert query == {"types": "ITEM,CATEGORY"}

    @pytest.mark.asyncio
    async def test_retrieve_catalog_object(self, client, transport):
        transport.queue(fixture_response("retrieve_catalog_object"))

        response = await client.catalog.retrieve_catalog_object(
            "W62UWFY35CWMYGVWK6TWJDNI", include_related_objects=True
        )

        _, path, query = sent(transport)
        assert path == "/v2/catalog/object/W62UWFY35CWMYGVWK6TWJDNI"
        assert query == {"include_related_objects": "true"}
        assert response.result.object.item_data.name == "Coffee Mug"

    @pytest.mark.asyncio
    async def test_path_argument_is_validated(self, client, transport):
        with pytest.raises(SchemaValidationError):
            await client.catalog.retrieve_catalog_object(12345)

        assert transport.attempts == 0

    @pytest.mark.asyncio
    async def test_search_catalog_items_body(self, client, transport):
        transport.queue(make_response(200, '{"items":[],"matched_variation_ids":[]}'))

        await client.catalog.search_catalog_items({"text_filter": "mug", "limit": 10})

        request, path, _ = sent(transport)
        assert request.method == "POST"
        assert path == "/v2/catalog/search-catalog-items"
        assert json.loads(request.body.text) == {"text_filter": "mug", "limit": 10}
        assert request.headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_delete_catalog_object(self, client, transport):
        transport.queue(make_response(200, '{"deleted_object_ids":["A"]}'))

        response = await client.catalog.delete_catalog_object("A")

        assert transport.requests[0].method == "DELETE"
        assert response.result.deleted_object_ids == ["A"]

    @pytest.mark.asyncio
    async def test_create_catalog_image_is_multipart(self, client, transport):
        transport.queue(make_response(200, '{"image":{"type":"IMAGE","id":"IMG1"}}'))
        image = FileWrapper(b"\x89PNG", filename="mug.png", content_type="image/png")

        response = await client.catalog.create_catalog_image(
            {"idempotency_key": "k", "image": {"type": "IMAGE", "id": "#img"}}, image
        )

        request = transport.requests[0]
        assert isinstance(request.body, MultipartBody)
        assert [name for name, _ in request.body.parts] == ["request", "image_file"]
        assert "Content-Type" not in request.headers
        assert response.result.image.id == "IMG1"


class TestOtherResources:
    @pytest.mark.asyncio
    async def test_list_locations(self, client, transport):
        transport.queue(fixture_response("list_locations"))

        response = await client.locations.list_locations()

        assert response.result.locations[0].id == "L8W2QS5ZXY4JK"

    @pytest.mark.asyncio
    async def test_retrieve_location_not_found(self, client, transport):
        transport.queue(fixture_response("legacy_error", 404))

        with pytest.raises(NotFoundError):
            await client.locations.retrieve_location("nope")

    @pytest.mark.asyncio
    async def test_inventory_count_joins_locations(self, client, transport):
        transport.queue(make_response(200, '{"counts":[{"quantity":"3"}]}'))

        response = await client.inventory.retrieve_inventory_count(
            "VAR1", location_ids=["L1", "L2"]
        )

        _, path, query = sent(transport)
        assert path == "/v2/inventory/VAR1"
        assert query == {"location_ids": "L1,L2"}
        assert response.result.counts[0].quantity == "3"

    @pytest.mark.asyncio
    async def test_create_payment_accepts_model(self, client, transport):
        transport.queue(make_response(200, '{"payment":{"id":"P1","status":"COMPLETED"}}'))
        body = CreatePaymentRequest(
            source_id="cnon:card-nonce-ok",
            idempotency_key="4935a656-a929-4792-b97c-8848be85c27c",
            amount_money=Money(amount=1500, currency="USD"),
        )

        response = await client.payments.create_payment(body)

        assert json.loads(transport.requests[0].body.text) == {
            "source_id": "cnon:card-nonce-ok",
            "idempotency_key": "4935a656-a929-4792-b97c-8848be85c27c",
            "amount_money": {"amount": 1500, "currency": "USD"},
        }
        assert response.result.payment.status == "COMPLETED"

    @pytest.mark.asyncio
    async def test_invalid_payment_never_hits_network(self, client, transport):
        with pytest.raises(SchemaValidationError, match="idempotency_key"):
            await client.payments.create_payment({"source_id": "cnon:card-nonce-ok"})

        assert transport.attempts == 0

    @pytest.mark.asyncio
    async def test_create_order_then_retrieve(self, client, transport):
        transport.queue(fixture_response("create_order"), fixture_response("create_order"))

        created = await client.orders.create_order(
            {"idempotency_key": "k", "order": {"location_id": "L8W2QS5ZXY4JK"}}
        )
        fetched = await client.orders.retrieve_order(created.result.order.id)

        assert transport.requests[1].url == f"{SANDBOX}/v2/orders/CAISENgvlJ6jLWAzERDzjyHVybY"
        assert fetched.result.order.line_items[0].quantity == "2"

    @pytest.mark.asyncio
    async def test_update_order_uses_put(self, client, transport):
        transport.queue(fixture_response("create_order"))

        await client.orders.update_order("O1", {"order": {"location_id": "L1", "version": 1}})

        assert transport.requests[0].method == "PUT"
        assert isinstance(transport.requests[0].body, JsonBody)

    @pytest.mark.asyncio
    async def test_create_payment_link(self, client, transport):
        transport.queue(
            make_response(200, '{"payment_link":{"id":"PL1","version":1,"url":"https://square.link/u/x"}}')
        )

        response = await client.checkout.create_payment_link(
            {
                "idempotency_key": "k",
                "quick_pay": {
                    "name": "Mug",
                    "price_money": {"amount": 1500, "currency": "USD"},
                    "location_id": "L1",
                },
            }
        )

        assert transport.requests[0].url == f"{SANDBOX}/v2/online-checkout/payment-links"
        assert response.result.payment_link.url == "https://square.link/u/x"

    @pytest.mark.asyncio
    async def test_list_customers_skips_absent_params(self, client, transport):
        transport.queue(make_response(200, '{"customers":[]}'))

        await client.customers.list_customers(limit=10)

        _, _, query = sent(transport)
        assert query == {"limit": "10"}

    @pytest.mark.asyncio
    async def test_list_transactions_is_deprecated(self, client, transport):
        transport.queue(make_response(200, '{"transactions":[{"id":"T1","tenders":[]}]}'))

        with pytest.warns(DeprecationWarning, match="list_payments"):
            response = await client.transactions.list_transactions("L1")

        assert response.result.transactions[0].model_extra == {"tenders": []}

    @pytest.mark.asyncio
    async def test_deprecation_points_at_calling_code(self, client, transport):
        transport.queue(make_response(200, "{}"))

        with pytest.warns(DeprecationWarning) as record:
            await client.transactions.list_transactions("L1")

        assert record[0].filename == __file__
