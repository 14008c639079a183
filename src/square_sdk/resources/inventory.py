from square_sdk.core.pipeline import ApiResponse
from square_sdk.core.request_builder import RequestBuilder, RequestOptions
from square_sdk.core.schema import Schema
from square_sdk.models.inventory import (
    BatchRetrieveInventoryCountsRequest,
    BatchRetrieveInventoryCountsResponse,
    RetrieveInventoryCountResponse,
)
from square_sdk.resources.base import BaseApi

_LOCATION_IDS = Schema(list[str], "location_ids")


class InventoryApi(BaseApi):
    async def retrieve_inventory_count(
        self,
        catalog_object_id: str,
        location_ids: list[str] | None = None,
        cursor: str | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[RetrieveInventoryCountResponse]:
        """Current counts of one catalog object, per location and state."""
        if location_ids is not None:
            location_ids = ",".join(_LOCATION_IDS.validate(location_ids))
        request = (
            RequestBuilder("GET", "/v2/inventory/{catalog_object_id}")
            .path_params(
                catalog_object_id=self._path_arg("catalog_object_id", catalog_object_id)
            )
            .query("location_ids", location_ids)
            .query("cursor", cursor)
            .requires_auth()
            .build()
        )
        return await self._execute(request, Schema(RetrieveInventoryCountResponse), options)

    async def batch_retrieve_inventory_counts(
        self,
        body: BatchRetrieveInventoryCountsRequest | dict,
        options: RequestOptions | None = None,
    ) -> ApiResponse[BatchRetrieveInventoryCountsResponse]:
        request = (
            RequestBuilder("POST", "/v2/inventory/counts/batch-retrieve")
            .json_body(body, Schema(BatchRetrieveInventoryCountsRequest, "body"))
            .requires_auth()
            .build()
        )
        return await self._execute(
            request, Schema(BatchRetrieveInventoryCountsResponse), options
        )
