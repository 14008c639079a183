"""Shapes of the v2 Transactions API, superseded by Payments and Orders."""

from pydantic import Field

from square_sdk.core.schema import OpenSquareModel
from square_sdk.models.common import SquareResponse


class Transaction(OpenSquareModel):
    id: str | None = None
    location_id: str | None = None
    created_at: str | None = None
    reference_id: str | None = None
    product: str | None = None
    order_id: str | None = None


class ListTransactionsResponse(SquareResponse):
    transactions: list[Transaction] = Field(default_factory=list)
    cursor: str | None = None
