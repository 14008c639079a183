"""Shapes shared across resource areas."""

from pydantic import Field

from square_sdk.core.schema import OpenSquareModel, SquareModel


class Money(SquareModel):
    """Amount in the smallest denomination of the currency (cents for USD)."""

    amount: int | None = None
    currency: str | None = None


class Error(OpenSquareModel):
    """Entry of the ``errors`` array carried by every response."""

    category: str
    code: str
    detail: str | None = None
    field: str | None = None


class Address(SquareModel):
    address_line_1: str | None = None
    address_line_2: str | None = None
    locality: str | None = None
    administrative_district_level_1: str | None = None
    postal_code: str | None = None
    country: str | None = None
    first_name: str | None = None
    last_name: str | None = None


class SquareResponse(SquareModel):
    """Fields present on every response body."""

    errors: list[Error] = Field(default_factory=list)
