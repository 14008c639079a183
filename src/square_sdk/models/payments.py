from pydantic import Field

from square_sdk.core.schema import SquareModel
from square_sdk.models.common import Address, Money, SquareResponse


class CardPaymentDetails(SquareModel):
    status: str | None = None
    entry_method: str | None = None
    cvv_status: str | None = None
    avs_status: str | None = None


class Payment(SquareModel):
    id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    amount_money: Money | None = None
    tip_money: Money | None = None
    total_money: Money | None = None
    app_fee_money: Money | None = None
    status: str | None = None
    source_type: str | None = None
    card_details: CardPaymentDetails | None = None
    location_id: str | None = None
    order_id: str | None = None
    reference_id: str | None = None
    customer_id: str | None = None
    buyer_email_address: str | None = None
    note: str | None = None
    receipt_number: str | None = None
    receipt_url: str | None = None
    version_token: str | None = None


class CreatePaymentRequest(SquareModel):
    source_id: str
    idempotency_key: str
    amount_money: Money | None = None
    tip_money: Money | None = None
    app_fee_money: Money | None = None
    autocomplete: bool | None = None
    order_id: str | None = None
    customer_id: str | None = None
    location_id: str | None = None
    reference_id: str | None = None
    verification_token: str | None = None
    buyer_email_address: str | None = None
    billing_address: Address | None = None
    shipping_address: Address | None = None
    note: str | None = None


class CreatePaymentResponse(SquareResponse):
    payment: Payment | None = None


class GetPaymentResponse(SquareResponse):
    payment: Payment | None = None


class CancelPaymentResponse(SquareResponse):
    payment: Payment | None = None


class ListPaymentsResponse(SquareResponse):
    payments: list[Payment] = Field(default_factory=list)
    cursor: str | None = None
