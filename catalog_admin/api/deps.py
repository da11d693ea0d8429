"""Shared FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_admin.catalog.service import CatalogService, ImageUpload
from catalog_admin.infrastructure.asset_store import ImageKitClient, get_asset_store
from catalog_admin.infrastructure.database import get_session


def get_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    asset_store: Annotated[ImageKitClient, Depends(get_asset_store)],
) -> CatalogService:
    """Get catalog service bound to the request's session."""
    return CatalogService(session, asset_store)


async def read_upload(image: UploadFile | None) -> ImageUpload | None:
    """Buffer an uploaded file, treating an empty part as no file."""
    if image is None:
        return None
    content = await image.read()
    if not content:
        return None
    return ImageUpload(content=content)
