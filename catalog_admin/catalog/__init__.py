"""Product Catalog Service.

Provides product, category and banner image persistence and the catalog
operations built on top of it, including category rename and delete
cascades onto products.
"""

from catalog_admin.catalog.models import BannerImage, Category, Product
from catalog_admin.catalog.repository import (
    BannerImageRepository,
    CategoryRepository,
    ProductRepository,
)
from catalog_admin.catalog.service import (
    CatalogService,
    CategoryDeletion,
    CategoryRename,
    ImageUpload,
    PaginatedResult,
    ProductQuery,
    ProductSort,
)

__all__ = [
    # Models
    "BannerImage",
    "Category",
    "Product",
    # Repositories
    "BannerImageRepository",
    "CategoryRepository",
    "ProductRepository",
    # Service
    "CatalogService",
    "CategoryDeletion",
    "CategoryRename",
    "ImageUpload",
    "PaginatedResult",
    "ProductQuery",
    "ProductSort",
]
