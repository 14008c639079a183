"""Catalog shapes.

``CatalogObject`` nests itself (related objects, item variations) and
``CatalogCategory`` points back at its parent category, so both are declared
with forward references and rebuilt at the bottom of the module.
"""

from typing import Any

from pydantic import Field

from square_sdk.core.schema import OpenSquareModel, SquareModel
from square_sdk.models.common import Money, SquareResponse


class CatalogCustomAttributeValue(OpenSquareModel):
    """Seller-defined attribute value; unknown keys are preserved."""

    name: str | None = None
    string_value: str | None = None
    custom_attribute_definition_id: str | None = None
    type: str | None = None
    number_value: str | None = None
    boolean_value: bool | None = None
    selection_uid_values: list[str] | None = None
    key: str | None = None


class CatalogItemVariation(SquareModel):
    item_id: str | None = None
    name: str | None = None
    sku: str | None = None
    ordinal: int | None = None
    pricing_type: str | None = None
    price_money: Money | None = None
    track_inventory: bool | None = None
    sellable: bool | None = None
    stockable: bool | None = None
    image_ids: list[str] | None = None


class CatalogCategoryReference(SquareModel):
    id: str | None = None
    ordinal: int | None = None


class CatalogCategory(SquareModel):
    name: str | None = None
    image_ids: list[str] | None = None
    category_type: str | None = None
    parent_category: "CatalogCategoryReference | None" = None
    is_top_level: bool | None = None
    root_category: str | None = None
    # resolved parent, populated when the caller expands the hierarchy
    parent: "CatalogCategory | None" = None


class CatalogItem(SquareModel):
    name: str | None = None
    description: str | None = None
    abbreviation: str | None = None
    category_id: str | None = None
    categories: list[CatalogCategoryReference] | None = None
    product_type: str | None = None
    variations: list["CatalogObject"] | None = None
    image_ids: list[str] | None = None
    is_archived: bool | None = None


class CatalogImage(SquareModel):
    name: str | None = None
    url: str | None = None
    caption: str | None = None
    photo_studio_order_id: str | None = None


class CatalogObject(SquareModel):
    type: str
    id: str
    updated_at: str | None = None
    version: int | None = None
    is_deleted: bool | None = None
    custom_attribute_values: dict[str, CatalogCustomAttributeValue] | None = None
    catalog_v1_ids: list[dict[str, Any]] | None = None
    present_at_all_locations: bool | None = None
    present_at_location_ids: list[str] | None = None
    absent_at_location_ids: list[str] | None = None
    item_data: CatalogItem | None = None
    category_data: CatalogCategory | None = None
    item_variation_data: CatalogItemVariation | None = None
    image_data: CatalogImage | None = None


class CatalogQueryExact(SquareModel):
    attribute_name: str
    attribute_value: str


class CatalogQueryText(SquareModel):
    keywords: list[str]


class CatalogQuery(SquareModel):
    exact_query: CatalogQueryExact | None = None
    text_query: CatalogQueryText | None = None


class ListCatalogResponse(SquareResponse):
    cursor: str | None = None
    objects: list[CatalogObject] = Field(default_factory=list)


class RetrieveCatalogObjectResponse(SquareResponse):
    object: CatalogObject | None = None
    related_objects: list[CatalogObject] = Field(default_factory=list)


class BatchRetrieveCatalogObjectsRequest(SquareModel):
    object_ids: list[str]
    include_related_objects: bool | None = None
    catalog_version: int | None = None
    include_deleted_objects: bool | None = None


class BatchRetrieveCatalogObjectsResponse(SquareResponse):
    objects: list[CatalogObject] = Field(default_factory=list)
    related_objects: list[CatalogObject] = Field(default_factory=list)


class SearchCatalogObjectsRequest(SquareModel):
    cursor: str | None = None
    object_types: list[str] | None = None
    include_deleted_objects: bool | None = None
    include_related_objects: bool | None = None
    begin_time: str | None = None
    query: CatalogQuery | None = None
    limit: int | None = None


class SearchCatalogObjectsResponse(SquareResponse):
    cursor: str | None = None
    objects: list[CatalogObject] = Field(default_factory=list)
    related_objects: list[CatalogObject] = Field(default_factory=list)
    latest_time: str | None = None


class SearchCatalogItemsRequest(SquareModel):
    text_filter: str | None = None
    category_ids: list[str] | None = None
    stock_levels: list[str] | None = None
    enabled_location_ids: list[str] | None = None
    cursor: str | None = None
    limit: int | None = None
    sort_order: str | None = None
    product_types: list[str] | None = None


class SearchCatalogItemsResponse(SquareResponse):
    items: list[CatalogObject] = Field(default_factory=list)
    cursor: str | None = None
    matched_variation_ids: list[str] = Field(default_factory=list)


class UpsertCatalogObjectRequest(SquareModel):
    idempotency_key: str
    object: CatalogObject


class UpsertCatalogObjectResponse(SquareResponse):
    catalog_object: CatalogObject | None = None
    id_mappings: list[dict[str, str]] = Field(default_factory=list)


class DeleteCatalogObjectResponse(SquareResponse):
    deleted_object_ids: list[str] = Field(default_factory=list)
    deleted_at: str | None = None


class CreateCatalogImageRequest(SquareModel):
    idempotency_key: str
    object_id: str | None = None
    image: CatalogObject
    is_primary: bool | None = None


class CreateCatalogImageResponse(SquareResponse):
    image: CatalogObject | None = None


for _model in (
    CatalogCategory,
    CatalogItem,
    CatalogObject,
    ListCatalogResponse,
    RetrieveCatalogObjectResponse,
    BatchRetrieveCatalogObjectsResponse,
    SearchCatalogObjectsResponse,
    SearchCatalogItemsResponse,
    UpsertCatalogObjectRequest,
    UpsertCatalogObjectResponse,
    CreateCatalogImageRequest,
    CreateCatalogImageResponse,
):
    _model.model_rebuild()
