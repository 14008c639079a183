from square_sdk.core.schema import OpenSquareModel, SquareModel
from square_sdk.models.common import Money, SquareResponse


class OrderLineItemModifier(SquareModel):
    uid: str | None = None
    catalog_object_id: str | None = None
    name: str | None = None
    quantity: str | None = None
    base_price_money: Money | None = None


class OrderLineItem(SquareModel):
    uid: str | None = None
    name: str | None = None
    quantity: str
    catalog_object_id: str | None = None
    catalog_version: int | None = None
    variation_name: str | None = None
    item_type: str | None = None
    # seller metadata, arbitrary string keys
    metadata: dict[str, str] | None = None
    modifiers: list[OrderLineItemModifier] | None = None
    note: str | None = None
    base_price_money: Money | None = None
    total_money: Money | None = None


class OrderSource(SquareModel):
    name: str | None = None


class OrderFulfillment(OpenSquareModel):
    uid: str | None = None
    type: str | None = None
    state: str | None = None


class Order(SquareModel):
    id: str | None = None
    location_id: str
    reference_id: str | None = None
    source: OrderSource | None = None
    customer_id: str | None = None
    line_items: list[OrderLineItem] | None = None
    fulfillments: list[OrderFulfillment] | None = None
    metadata: dict[str, str] | None = None
    created_at: str | None = None
    updated_at: str | None = None
    state: str | None = None
    version: int | None = None
    total_money: Money | None = None
    total_tax_money: Money | None = None
    total_discount_money: Money | None = None
    net_amount_due_money: Money | None = None
    ticket_name: str | None = None


class CreateOrderRequest(SquareModel):
    order: Order | None = None
    idempotency_key: str | None = None


class CreateOrderResponse(SquareResponse):
    order: Order | None = None


class RetrieveOrderResponse(SquareResponse):
    order: Order | None = None


class CalculateOrderRequest(SquareModel):
    order: Order
    proposed_rewards: list[dict[str, str]] | None = None


class CalculateOrderResponse(SquareResponse):
    order: Order | None = None


class UpdateOrderRequest(SquareModel):
    order: Order | None = None
    fields_to_clear: list[str] | None = None
    idempotency_key: str | None = None


class UpdateOrderResponse(SquareResponse):
    order: Order | None = None
