from square_sdk.core.pipeline import ApiResponse
from square_sdk.core.request_builder import RequestBuilder, RequestOptions
from square_sdk.core.schema import Schema
from square_sdk.models.transactions import ListTransactionsResponse
from square_sdk.resources.base import BaseApi


class TransactionsApi(BaseApi):
    async def list_transactions(
        self,
        location_id: str,
        begin_time: str | None = None,
        end_time: str | None = None,
        sort_order: str | None = None,
        cursor: str | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[ListTransactionsResponse]:
        request = (
            RequestBuilder("GET", "/v2/locations/{location_id}/transactions")
            .path_params(location_id=self._path_arg("location_id", location_id))
            .query("begin_time", begin_time)
            .query("end_time", end_time)
            .query("sort_order", sort_order)
            .query("cursor", cursor)
            .requires_auth()
            .deprecated("Use PaymentsApi.list_payments instead.")
            .build()
        )
        return await self._execute(request, Schema(ListTransactionsResponse), options)
