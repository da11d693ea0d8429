"""Category API endpoints.

Renaming or deleting a category rewrites the category name stored on
products in the same transaction.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from catalog_admin.api.deps import get_service
from catalog_admin.api.schemas import (
    CategoryDeleteResponse,
    CategoryListResponse,
    CategoryRenameResponse,
    CategoryRequest,
    CategoryResponse,
    CategorySchema,
    ErrorResponse,
)
from catalog_admin.catalog.service import CatalogService

router = APIRouter(prefix="/api/categories", tags=["Categories"])

Service = Annotated[CatalogService, Depends(get_service)]


@router.get(
    "",
    response_model=CategoryListResponse,
    summary="List categories",
)
async def list_categories(service: Service) -> CategoryListResponse:
    categories = await service.list_categories()
    return CategoryListResponse(data=[CategorySchema.model_validate(c) for c in categories])


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
    summary="Create category",
)
async def create_category(request: CategoryRequest, service: Service) -> CategoryResponse:
    category = await service.create_category(request.name)
    return CategoryResponse(data=CategorySchema.model_validate(category))


@router.put(
    "/{category_id}",
    response_model=CategoryRenameResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Rename category",
    description="Rename a category and move every product of the old name "
    "to the new one.",
)
async def rename_category(
    category_id: str,
    request: CategoryRequest,
    service: Service,
) -> CategoryRenameResponse:
    """Rename a category.

    Args:
        category_id: Category identifier.
        request: New name.
        service: Catalog service.

    Returns:
        The renamed category with its previous name and the number of
        products moved.

    Raises:
        NotFoundError: If category not found.
        ValidationError: If the name is blank.
    """
    result = await service.rename_category(category_id, request.name)
    return CategoryRenameResponse(
        data=CategorySchema.model_validate(result.category),
        previous_name=result.old_name,
        products_updated=result.products_updated,
    )


@router.delete(
    "/{category_id}",
    response_model=CategoryDeleteResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Delete category",
    description="Delete a category and move its products to the "
    "uncategorized label.",
)
async def delete_category(category_id: str, service: Service) -> CategoryDeleteResponse:
    result = await service.delete_category(category_id)
    return CategoryDeleteResponse(
        data=CategorySchema.model_validate(result.category),
        products_reassigned=result.products_reassigned,
    )
