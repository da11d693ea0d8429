"""Banner image API endpoints.

Banners are created from an uploaded file (or an existing URL) and
deleted; they are never edited.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from catalog_admin.api.deps import get_service, read_upload
from catalog_admin.api.schemas import (
    BannerImageListResponse,
    BannerImageResponse,
    BannerImageSchema,
    ErrorResponse,
)
from catalog_admin.catalog.service import CatalogService

router = APIRouter(prefix="/api/banner-images", tags=["Banner Images"])

Service = Annotated[CatalogService, Depends(get_service)]


@router.get(
    "",
    response_model=BannerImageListResponse,
    summary="List banner images",
)
async def list_banner_images(service: Service) -> BannerImageListResponse:
    banners = await service.list_banner_images()
    return BannerImageListResponse(data=[BannerImageSchema.model_validate(b) for b in banners])


@router.post(
    "",
    response_model=BannerImageResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
    summary="Create banner image",
)
async def create_banner_image(
    service: Service,
    image: Annotated[UploadFile | None, File()] = None,
    image_url: Annotated[str | None, Form(alias="imageUrl")] = None,
) -> BannerImageResponse:
    """Create a banner from an image file, or from imageUrl when no file is sent.

    Raises:
        ValidationError: If neither an image nor a URL is given.
        UpstreamError: If the image upload fails.
    """
    banner = await service.create_banner_image(
        image=await read_upload(image),
        image_url=image_url,
    )
    return BannerImageResponse(data=BannerImageSchema.model_validate(banner))


@router.delete(
    "/{banner_id}",
    response_model=BannerImageResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Delete banner image",
)
async def delete_banner_image(banner_id: str, service: Service) -> BannerImageResponse:
    banner = await service.delete_banner_image(banner_id)
    return BannerImageResponse(data=BannerImageSchema.model_validate(banner))
