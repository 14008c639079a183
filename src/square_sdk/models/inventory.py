from pydantic import Field

from square_sdk.core.schema import SquareModel
from square_sdk.models.common import SquareResponse


class InventoryCount(SquareModel):
    catalog_object_id: str | None = None
    catalog_object_type: str | None = None
    state: str | None = None
    location_id: str | None = None
    # decimal quantity, sent as a string to keep precision
    quantity: str | None = None
    calculated_at: str | None = None
    is_estimated: bool | None = None


class BatchRetrieveInventoryCountsRequest(SquareModel):
    catalog_object_ids: list[str] | None = None
    location_ids: list[str] | None = None
    updated_after: str | None = None
    cursor: str | None = None
    states: list[str] | None = None
    limit: int | None = None


class BatchRetrieveInventoryCountsResponse(SquareResponse):
    counts: list[InventoryCount] = Field(default_factory=list)
    cursor: str | None = None


class RetrieveInventoryCountResponse(SquareResponse):
    counts: list[InventoryCount] = Field(default_factory=list)
    cursor: str | None = None
