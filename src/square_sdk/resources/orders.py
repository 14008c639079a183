from square_sdk.core.pipeline import ApiResponse
from square_sdk.core.request_builder import RequestBuilder, RequestOptions
from square_sdk.core.schema import Schema
from square_sdk.models.orders import (
    CalculateOrderRequest,
    CalculateOrderResponse,
    CreateOrderRequest,
    CreateOrderResponse,
    RetrieveOrderResponse,
    UpdateOrderRequest,
    UpdateOrderResponse,
)
from square_sdk.resources.base import BaseApi


class OrdersApi(BaseApi):
    async def create_order(
        self, body: CreateOrderRequest | dict, options: RequestOptions | None = None
    ) -> ApiResponse[CreateOrderResponse]:
        request = (
            RequestBuilder("POST", "/v2/orders")
            .json_body(body, Schema(CreateOrderRequest, "body"))
            .requires_auth()
            .build()
        )
        return await self._execute(request, Schema(CreateOrderResponse), options)

    async def retrieve_order(
        self, order_id: str, options: RequestOptions | None = None
    ) -> ApiResponse[RetrieveOrderResponse]:
        request = (
            RequestBuilder("GET", "/v2/orders/{order_id}")
            .path_params(order_id=self._path_arg("order_id", order_id))
            .requires_auth()
            .build()
        )
        return await self._execute(request, Schema(RetrieveOrderResponse), options)

    async def calculate_order(
        self, body: CalculateOrderRequest | dict, options: RequestOptions | None = None
    ) -> ApiResponse[CalculateOrderResponse]:
        """Price an order (totals, taxes, discounts) without creating it."""
        request = (
            RequestBuilder("POST", "/v2/orders/calculate")
            .json_body(body, Schema(CalculateOrderRequest, "body"))
            .requires_auth()
            .build()
        )
        return await self._execute(request, Schema(CalculateOrderResponse), options)

    async def update_order(
        self,
        order_id: str,
        body: UpdateOrderRequest | dict,
        options: RequestOptions | None = None,
    ) -> ApiResponse[UpdateOrderResponse]:
        request = (
            RequestBuilder("PUT", "/v2/orders/{order_id}")
            .path_params(order_id=self._path_arg("order_id", order_id))
            .json_body(body, Schema(UpdateOrderRequest, "body"))
            .requires_auth()
            .build()
        )
        return await self._execute(request, Schema(UpdateOrderResponse), options)
