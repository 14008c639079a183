from square_sdk.core.pipeline import ApiResponse
from square_sdk.core.request_builder import RequestBuilder, RequestOptions
from square_sdk.core.schema import Schema
from square_sdk.models.customers import (
    CreateCustomerRequest,
    CreateCustomerResponse,
    ListCustomersResponse,
    RetrieveCustomerResponse,
)
from square_sdk.resources.base import BaseApi

_LIMIT = Schema(int, "limit")
_COUNT = Schema(bool, "count")


class CustomersApi(BaseApi):
    async def list_customers(
        self,
        cursor: str | None = None,
        limit: int | None = None,
        sort_field: str | None = None,
        sort_order: str | None = None,
        count: bool | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[ListCustomersResponse]:
        request = (
            RequestBuilder("GET", "/v2/customers")
            .query("cursor", cursor)
            .query("limit", limit, _LIMIT)
            .query("sort_field", sort_field)
            .query("sort_order", sort_order)
            .query("count", count, _COUNT)
            .requires_auth()
            .build()
        )
        return await self._execute(request, Schema(ListCustomersResponse), options)

    async def create_customer(
        self, body: CreateCustomerRequest | dict, options: RequestOptions | None = None
    ) -> ApiResponse[CreateCustomerResponse]:
        request = (
            RequestBuilder("POST", "/v2/customers")
            .json_body(body, Schema(CreateCustomerRequest, "body"))
            .requires_auth()
            .build()
        )
        return await self._execute(request, Schema(CreateCustomerResponse), options)

    async def retrieve_customer(
        self, customer_id: str, options: RequestOptions | None = None
    ) -> ApiResponse[RetrieveCustomerResponse]:
        request = (
            RequestBuilder("GET", "/v2/customers/{customer_id}")
            .path_params(customer_id=self._path_arg("customer_id", customer_id))
            .requires_auth()
            .build()
        )
        return await self._execute(request, Schema(RetrieveCustomerResponse), options)
