from square_sdk.core.pipeline import ApiResponse
from square_sdk.core.request_builder import RequestBuilder, RequestOptions
from square_sdk.core.schema import Schema
from square_sdk.models.checkout import CreatePaymentLinkRequest, CreatePaymentLinkResponse
from square_sdk.resources.base import BaseApi


class CheckoutApi(BaseApi):
    async def create_payment_link(
        self,
        body: CreatePaymentLinkRequest | dict,
        options: RequestOptions | None = None,
    ) -> ApiResponse[CreatePaymentLinkResponse]:
        """Create a hosted checkout page for an order or a quick-pay amount."""
        request = (
            RequestBuilder("POST", "/v2/online-checkout/payment-links")
            .json_body(body, Schema(CreatePaymentLinkRequest, "body"))
            .requires_auth()
            .build()
        )
        return await self._execute(request, Schema(CreatePaymentLinkResponse), options)
