from pydantic import Field

from square_sdk.core.schema import SquareModel
from square_sdk.models.common import Address, SquareResponse


class Location(SquareModel):
    id: str | None = None
    name: str | None = None
    address: Address | None = None
    timezone: str | None = None
    capabilities: list[str] | None = None
    status: str | None = None
    created_at: str | None = None
    merchant_id: str | None = None
    country: str | None = None
    language_code: str | None = None
    currency: str | None = None
    business_name: str | None = None
    type: str | None = None
    mcc: str | None = None


class ListLocationsResponse(SquareResponse):
    locations: list[Location] = Field(default_factory=list)


class RetrieveLocationResponse(SquareResponse):
    location: Location | None = None
