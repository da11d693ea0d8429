"""Product API endpoints.

Provides endpoints for the product catalog:
- GET /api/products - list products (paginated, filtered, sorted)
- GET /api/products-by-category - newest products grouped by category
- GET /api/products/{id} - product details
- POST /api/products - create a product (multipart, optional image)
- PUT /api/products/{id} - replace product fields (multipart)
- DELETE /api/products/{id} - delete a product and its image
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from catalog_admin.api.deps import get_service, read_upload
from catalog_admin.api.schemas import (
    ErrorResponse,
    ProductListResponse,
    ProductResponse,
    ProductSchema,
    ProductsByCategoryResponse,
)
from catalog_admin.catalog.service import CatalogService, ProductQuery, ProductSort
from catalog_admin.infrastructure.config import settings

router = APIRouter(prefix="/api", tags=["Products"])

Service = Annotated[CatalogService, Depends(get_service)]


# ============================================================================
# Form Fields
# ============================================================================

NameField = Annotated[str | None, Form()]
CategoryField = Annotated[str | None, Form()]
PriceField = Annotated[float | None, Form()]
DescriptionField = Annotated[str | None, Form()]
DiscountField = Annotated[float | None, Form(alias="discountPercentage")]
# The admin UI posts the stock flag under its legacy snake_case name
InStockField = Annotated[bool | None, Form()]
ImageUrlField = Annotated[str | None, Form(alias="imageUrl")]
ImageField = Annotated[UploadFile | None, File()]


def _product_fields(**fields: object) -> dict[str, object]:
    """Drop form fields that were not sent."""
    return {key: value for key, value in fields.items() if value is not None}


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "/products",
    response_model=ProductListResponse,
    responses={400: {"model": ErrorResponse}},
    summary="List products",
    description="Get a paginated list of products with optional search, "
    "category filter and creation-time ordering.",
)
async def list_products(
    service: Service,
    page: int = Query(default=1, ge=1, description="Page number (1-based)"),
    limit: int | None = Query(
        default=None, ge=1, le=settings.max_page_size, description="Items per page"
    ),
    search: str | None = Query(
        default=None, description="Case-insensitive text in name, description or category"
    ),
    category: str | None = Query(
        default=None, description="Exact category name, 'all' for every category"
    ),
    sort: ProductSort = Query(default=ProductSort.NEWEST, description="newest or oldest"),
) -> ProductListResponse:
    """List products with pagination and filtering.

    Args:
        service: Catalog service.
        page: Page number (1-based).
        limit: Items per page, server default when omitted.
        search: Text search.
        category: Category filter.
        sort: Creation order.

    Returns:
        One page of products with total count and page count.
    """
    result = await service.list_products(
        ProductQuery(
            page=page,
            limit=limit or settings.default_page_size,
            search=search,
            category=category,
            sort=sort,
        )
    )

    return ProductListResponse(
        data=[ProductSchema.model_validate(p) for p in result.items],
        total=result.total,
        page=result.page,
        pages=result.pages,
    )


@router.get(
    "/products-by-category",
    response_model=ProductsByCategoryResponse,
    summary="Products grouped by category",
    description="Newest products of every category, capped per category.",
)
async def products_by_category(service: Service) -> ProductsByCategoryResponse:
    grouped = await service.products_by_category()
    return ProductsByCategoryResponse(
        data={
            name: [ProductSchema.model_validate(p) for p in products]
            for name, products in grouped.items()
        }
    )


@router.get(
    "/products/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get product details",
)
async def get_product(product_id: str, service: Service) -> ProductResponse:
    """Get a product by ID.

    Raises:
        NotFoundError: If product not found.
    """
    product = await service.get_product(product_id)
    return ProductResponse(data=ProductSchema.model_validate(product))


@router.post(
    "/products",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
    summary="Create product",
    description="Create a product from multipart form fields. The image is "
    "uploaded to the asset store; without a file, imageUrl is required.",
)
async def create_product(
    service: Service,
    name: NameField = None,
    category: CategoryField = None,
    price: PriceField = None,
    description: DescriptionField = None,
    discount_percentage: DiscountField = None,
    in_stock: InStockField = None,
    image_url: ImageUrlField = None,
    image: ImageField = None,
) -> ProductResponse:
    """Create a product.

    Returns:
        The created product.

    Raises:
        ValidationError: If a required field is missing or invalid.
        UpstreamError: If the image upload fails.
    """
    product = await service.create_product(
        _product_fields(
            name=name,
            category=category,
            price=price,
            description=description,
            discount_percentage=discount_percentage,
            in_stock=in_stock,
            image_url=image_url,
        ),
        image=await read_upload(image),
    )
    return ProductResponse(data=ProductSchema.model_validate(product))


@router.put(
    "/products/{product_id}",
    response_model=ProductResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
    summary="Update product",
    description="Replace the product fields present in the form. A new image "
    "file replaces the stored image.",
)
async def update_product(
    product_id: str,
    service: Service,
    name: NameField = None,
    category: CategoryField = None,
    price: PriceField = None,
    description: DescriptionField = None,
    discount_percentage: DiscountField = None,
    in_stock: InStockField = None,
    image_url: ImageUrlField = None,
    image: ImageField = None,
) -> ProductResponse:
    """Update a product.

    Returns:
        The product after the update.

    Raises:
        NotFoundError: If product not found.
        ValidationError: If a replaced field is invalid.
    """
    product = await service.update_product(
        product_id,
        _product_fields(
            name=name,
            category=category,
            price=price,
            description=description,
            discount_percentage=discount_percentage,
            in_stock=in_stock,
            image_url=image_url,
        ),
        image=await read_upload(image),
    )
    return ProductResponse(data=ProductSchema.model_validate(product))


@router.delete(
    "/products/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Delete product",
    description="Delete a product. Its image is removed from the asset store "
    "on a best-effort basis.",
)
async def delete_product(product_id: str, service: Service) -> ProductResponse:
    product = await service.delete_product(product_id)
    return ProductResponse(data=ProductSchema.model_validate(product))
