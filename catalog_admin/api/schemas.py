"""API schemas for the catalog admin API.

Pydantic models for request/response validation and serialization.
Every response is wrapped in a ``{success, data, message}`` envelope and
record fields are camelCase on the wire.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    success: bool = Field(default=False, description="Always false for errors")
    message: str = Field(..., description="Human-readable error message")


class MessageResponse(BaseModel):
    """Envelope without a payload."""

    success: bool = True
    message: str | None = None


# ============================================================================
# Record Schemas
# ============================================================================


class ProductSchema(CamelModel):
    """Product representation."""

    id: str
    name: str
    category: str
    price: float
    discount_percentage: float = 0
    description: str
    in_stock: bool = True
    image_url: str
    image_file_id: str | None = None
    created_at: datetime
    updated_at: datetime


class CategorySchema(CamelModel):
    """Category representation."""

    id: str
    name: str
    created_at: datetime
    updated_at: datetime


class BannerImageSchema(CamelModel):
    """Banner image representation."""

    id: str
    image_url: str
    image_file_id: str | None = None
    created_at: datetime
    updated_at: datetime


# ============================================================================
# Request Schemas
# ============================================================================


class CategoryRequest(BaseModel):
    """Request to create or rename a category."""

    name: str = Field(..., description="Category name")


# ============================================================================
# Response Envelopes
# ============================================================================


class ProductResponse(MessageResponse):
    data: ProductSchema


class ProductListResponse(MessageResponse):
    """Paginated list of products."""

    data: list[ProductSchema]
    total: int = Field(..., description="Total number of matching products")
    page: int = Field(..., description="Current page number")
    pages: int = Field(..., description="Total number of pages")


class ProductsByCategoryResponse(MessageResponse):
    """Newest products grouped by category name."""

    data: dict[str, list[ProductSchema]]


class CategoryResponse(MessageResponse):
    data: CategorySchema


class CategoryListResponse(MessageResponse):
    data: list[CategorySchema]


class CategoryRenameResponse(CamelModel):
    """Renamed category plus what the cascade changed."""

    success: bool = True
    message: str | None = None
    data: CategorySchema
    previous_name: str
    products_updated: int


class CategoryDeleteResponse(CamelModel):
    """Deleted category plus what the cascade changed."""

    success: bool = True
    message: str | None = None
    data: CategorySchema
    products_reassigned: int


class BannerImageResponse(MessageResponse):
    data: BannerImageSchema


class BannerImageListResponse(MessageResponse):
    data: list[BannerImageSchema]
