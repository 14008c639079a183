from square_sdk.core.pipeline import ApiResponse
from square_sdk.core.request_builder import RequestBuilder, RequestOptions
from square_sdk.core.schema import Schema
from square_sdk.models.payments import (
    CancelPaymentResponse,
    CreatePaymentRequest,
    CreatePaymentResponse,
    GetPaymentResponse,
    ListPaymentsResponse,
)
from square_sdk.resources.base import BaseApi

_AMOUNT = Schema(int, "amount")
_LIMIT = Schema(int, "limit")


class PaymentsApi(BaseApi):
    async def list_payments(
        self,
        begin_time: str | None = None,
        end_time: str | None = None,
        sort_order: str | None = None,
        cursor: str | None = None,
        location_id: str | None = None,
        total: int | None = None,
        last_4: str | None = None,
        card_brand: str | None = None,
        limit: int | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[ListPaymentsResponse]:
        request = (
            RequestBuilder("GET", "/v2/payments")
            .query("begin_time", begin_time)
            .query("end_time", end_time)
            .query("sort_order", sort_order)
            .query("cursor", cursor)
            .query("location_id", location_id)
            .query("total", total, _AMOUNT)
            .query("last_4", last_4)
            .query("card_brand", card_brand)
            .query("limit", limit, _LIMIT)
            .requires_auth()
            .build()
        )
        return await self._execute(request, Schema(ListPaymentsResponse), options)

    async def create_payment(
        self, body: CreatePaymentRequest | dict, options: RequestOptions | None = None
    ) -> ApiResponse[CreatePaymentResponse]:
        """Charge a payment source.

        POST is never retried by default; pass a fresh ``idempotency_key``
        per logical payment so a manual retry cannot charge twice.
        """
        request = (
            RequestBuilder("POST", "/v2/payments")
            .json_body(body, Schema(CreatePaymentRequest, "body"))
            .requires_auth()
            .build()
        )
        return await self._execute(request, Schema(CreatePaymentResponse), options)

    async def get_payment(
        self, payment_id: str, options: RequestOptions | None = None
    ) -> ApiResponse[GetPaymentResponse]:
        request = (
            RequestBuilder("GET", "/v2/payments/{payment_id}")
            .path_params(payment_id=self._path_arg("payment_id", payment_id))
            .requires_auth()
            .build()
        )
        return await self._execute(request, Schema(GetPaymentResponse), options)

    async def cancel_payment(
        self, payment_id: str, options: RequestOptions | None = None
    ) -> ApiResponse[CancelPaymentResponse]:
        request = (
            RequestBuilder("POST", "/v2/payments/{payment_id}/cancel")
            .path_params(payment_id=self._path_arg("payment_id", payment_id))
            .requires_auth()
            .build()
        )
        return await self._execute(request, Schema(CancelPaymentResponse), options)
