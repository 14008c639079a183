from pydantic import Field

from square_sdk.core.schema import SquareModel
from square_sdk.models.common import Address, SquareResponse


class Customer(SquareModel):
    id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    given_name: str | None = None
    family_name: str | None = None
    nickname: str | None = None
    company_name: str | None = None
    email_address: str | None = None
    address: Address | None = None
    phone_number: str | None = None
    reference_id: str | None = None
    note: str | None = None
    version: int | None = None


class CreateCustomerRequest(SquareModel):
    idempotency_key: str | None = None
    given_name: str | None = None
    family_name: str | None = None
    company_name: str | None = None
    nickname: str | None = None
    email_address: str | None = None
    address: Address | None = None
    phone_number: str | None = None
    reference_id: str | None = None
    note: str | None = None


class CreateCustomerResponse(SquareResponse):
    customer: Customer | None = None


class RetrieveCustomerResponse(SquareResponse):
    customer: Customer | None = None


class ListCustomersResponse(SquareResponse):
    customers: list[Customer] = Field(default_factory=list)
    cursor: str | None = None
    count: int | None = None
