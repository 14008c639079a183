from square_sdk.core.pipeline import ApiResponse
from square_sdk.core.request_builder import RequestBuilder, RequestOptions
from square_sdk.core.schema import Schema
from square_sdk.models.locations import ListLocationsResponse, RetrieveLocationResponse
from square_sdk.resources.base import BaseApi


class LocationsApi(BaseApi):
    async def list_locations(
        self, options: RequestOptions | None = None
    ) -> ApiResponse[ListLocationsResponse]:
        request = RequestBuilder("GET", "/v2/locations").requires_auth().build()
        return await self._execute(request, Schema(ListLocationsResponse), options)

    async def retrieve_location(
        self, location_id: str, options: RequestOptions | None = None
    ) -> ApiResponse[RetrieveLocationResponse]:
        """Retrieve one location; ``"main"`` names the main location."""
        request = (
            RequestBuilder("GET", "/v2/locations/{location_id}")
            .path_params(location_id=self._path_arg("location_id", location_id))
            .requires_auth()
            .build()
        )
        return await self._execute(request, Schema(RetrieveLocationResponse), options)
