"""API layer module.

Contains FastAPI routers and request/response schemas.
"""

from catalog_admin.api.banner_images import router as banner_images_router
from catalog_admin.api.categories import router as categories_router
from catalog_admin.api.health import router as health_router
from catalog_admin.api.products import router as products_router

__all__ = [
    "banner_images_router",
    "categories_router",
    "health_router",
    "products_router",
]
