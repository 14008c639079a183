from square_sdk.core.schema import SquareModel
from square_sdk.models.common import Money, SquareResponse
from square_sdk.models.orders import Order


class QuickPay(SquareModel):
    name: str
    price_money: Money
    location_id: str


class CheckoutOptions(SquareModel):
    allow_tipping: bool | None = None
    redirect_url: str | None = None
    merchant_support_email: str | None = None
    ask_for_shipping_address: bool | None = None


class PrePopulatedData(SquareModel):
    buyer_email: str | None = None
    buyer_phone_number: str | None = None


class PaymentLink(SquareModel):
    id: str | None = None
    version: int
    description: str | None = None
    order_id: str | None = None
    checkout_options: CheckoutOptions | None = None
    url: str | None = None
    long_url: str | None = None
    created_at: str | None = None


class CreatePaymentLinkRequest(SquareModel):
    idempotency_key: str | None = None
    description: str | None = None
    quick_pay: QuickPay | None = None
    order: Order | None = None
    checkout_options: CheckoutOptions | None = None
    pre_populated_data: PrePopulatedData | None = None
    payment_note: str | None = None


class CreatePaymentLinkResponse(SquareResponse):
    payment_link: PaymentLink | None = None
    related_resources: dict[str, list[dict]] | None = None
