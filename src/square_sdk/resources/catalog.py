"""Catalog: items, variations, categories and images."""

from square_sdk.core.pipeline import ApiResponse
from square_sdk.core.request_builder import RequestBuilder, RequestOptions
from square_sdk.core.schema import Schema
from square_sdk.models.catalog import (
    BatchRetrieveCatalogObjectsRequest,
    BatchRetrieveCatalogObjectsResponse,
    CreateCatalogImageRequest,
    CreateCatalogImageResponse,
    DeleteCatalogObjectResponse,
    ListCatalogResponse,
    RetrieveCatalogObjectResponse,
    SearchCatalogItemsRequest,
    SearchCatalogItemsResponse,
    SearchCatalogObjectsRequest,
    SearchCatalogObjectsResponse,
    UpsertCatalogObjectRequest,
    UpsertCatalogObjectResponse,
)
from square_sdk.ports.http import FileWrapper
from square_sdk.resources.base import BaseApi

_TYPES = Schema(list[str], "types")
_CATALOG_VERSION = Schema(int, "catalog_version")
_INCLUDE_RELATED = Schema(bool, "include_related_objects")


class CatalogApi(BaseApi):
    async def list_catalog(
        self,
        cursor: str | None = None,
        types: list[str] | None = None,
        catalog_version: int | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[ListCatalogResponse]:
        """List catalog objects, optionally limited to some object types.

        ``types`` goes on the wire as one comma-separated value.
        """
        if types is not None:
            types = ",".join(_TYPES.validate(types))
        request = (
            RequestBuilder("GET", "/v2/catalog/list")
            .query("cursor", cursor)
            .query("types", types)
            .query("catalog_version", catalog_version, _CATALOG_VERSION)
            .requires_auth()
            .build()
        )
        return await self._execute(request, Schema(ListCatalogResponse), options)

    async def retrieve_catalog_object(
        self,
        object_id: str,
        include_related_objects: bool | None = None,
        catalog_version: int | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[RetrieveCatalogObjectResponse]:
        request = (
            RequestBuilder("GET", "/v2/catalog/object/{object_id}")
            .path_params(object_id=self._path_arg("object_id", object_id))
            .query("include_related_objects", include_related_objects, _INCLUDE_RELATED)
            .query("catalog_version", catalog_version, _CATALOG_VERSION)
            .requires_auth()
            .build()
        )
        return await self._execute(request, Schema(RetrieveCatalogObjectResponse), options)

    async def batch_retrieve_catalog_objects(
        self,
        body: BatchRetrieveCatalogObjectsRequest | dict,
        options: RequestOptions | None = None,
    ) -> ApiResponse[BatchRetrieveCatalogObjectsResponse]:
        request = (
            RequestBuilder("POST", "/v2/catalog/batch-retrieve")
            .json_body(body, Schema(BatchRetrieveCatalogObjectsRequest, "body"))
            .requires_auth()
            .build()
        )
        return await self._execute(
            request, Schema(BatchRetrieveCatalogObjectsResponse), options
        )

    async def search_catalog_objects(
        self,
        body: SearchCatalogObjectsRequest | dict,
        options: RequestOptions | None = None,
    ) -> ApiResponse[SearchCatalogObjectsResponse]:
        request = (
            RequestBuilder("POST", "/v2/catalog/search")
            .json_body(body, Schema(SearchCatalogObjectsRequest, "body"))
            .requires_auth()
            .build()
        )
        return await self._execute(request, Schema(SearchCatalogObjectsResponse), options)

    async def search_catalog_items(
        self,
        body: SearchCatalogItemsRequest | dict,
        options: RequestOptions | None = None,
    ) -> ApiResponse[SearchCatalogItemsResponse]:
        request = (
            RequestBuilder("POST", "/v2/catalog/search-catalog-items")
            .json_body(body, Schema(SearchCatalogItemsRequest, "body"))
            .requires_auth()
            .build()
        )
        return await self._execute(request, Schema(SearchCatalogItemsResponse), options)

    async def upsert_catalog_object(
        self,
        body: UpsertCatalogObjectRequest | dict,
        options: RequestOptions | None = None,
    ) -> ApiResponse[UpsertCatalogObjectResponse]:
        request = (
            RequestBuilder("POST", "/v2/catalog/object")
            .json_body(body, Schema(UpsertCatalogObjectRequest, "body"))
            .requires_auth()
            .build()
        )
        return await self._execute(request, Schema(UpsertCatalogObjectResponse), options)

    async def delete_catalog_object(
        self, object_id: str, options: RequestOptions | None = None
    ) -> ApiResponse[DeleteCatalogObjectResponse]:
        request = (
            RequestBuilder("DELETE", "/v2/catalog/object/{object_id}")
            .path_params(object_id=self._path_arg("object_id", object_id))
            .requires_auth()
            .build()
        )
        return await self._execute(request, Schema(DeleteCatalogObjectResponse), options)

    async def create_catalog_image(
        self,
        request: CreateCatalogImageRequest | dict | None = None,
        image_file: FileWrapper | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[CreateCatalogImageResponse]:
        """Upload an image file together with its catalog metadata.

        Sent as multipart/form-data: a JSON ``request`` part and a binary
        ``image_file`` part.
        """
        descriptor = (
            RequestBuilder("POST", "/v2/catalog/images")
            .multipart(
                "request",
                request,
                Schema(CreateCatalogImageRequest, "request"),
                "image_file",
                image_file,
            )
            .requires_auth()
            .build()
        )
        return await self._execute(descriptor, Schema(CreateCatalogImageResponse), options)
