"""Catalog service for product, category and banner operations.

High-level service that combines repository operations with
business logic: listing plans, category cascades and image
cleanup against the asset store.
"""

import time
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_admin.catalog.models import BannerImage, Category, Product
from catalog_admin.catalog.repository import (
    BannerImageRepository,
    CategoryRepository,
    ProductRepository,
    validate_product_fields,
)
from catalog_admin.domain.exceptions import ValidationError
from catalog_admin.infrastructure.asset_store import ImageKitClient
from catalog_admin.infrastructure.config import settings

logger = structlog.get_logger()

T = TypeVar("T")

ALL_CATEGORIES = "all"


class ProductSort(str, Enum):
    """Product listing order by creation time."""

    NEWEST = "newest"
    OLDEST = "oldest"


@dataclass
class ProductQuery:
    """Listing parameters.

    Attributes:
        page: Page number (1-indexed).
        limit: Items per page.
        search: Text matched against name, description and category.
        category: Exact category name, or "all" for no filter.
        sort: Creation order.
    """

    page: int = 1
    limit: int = 20
    search: str | None = None
    category: str | None = None
    sort: ProductSort = ProductSort.NEWEST

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValidationError("page", "must be at least 1")
        if self.limit < 1:
            raise ValidationError("limit", "must be at least 1")
        try:
            self.sort = ProductSort(self.sort)
        except ValueError:
            raise ValidationError("sort", "must be one of newest, oldest") from None

    @property
    def offset(self) -> int:
        """Calculate offset from page number."""
        return (self.page - 1) * self.limit

    @property
    def search_term(self) -> str | None:
        """Search text, or None when blank."""
        return self.search or None

    @property
    def category_filter(self) -> str | None:
        """Category to match, or None when absent or "all"."""
        if not self.category or self.category == ALL_CATEGORIES:
            return None
        return self.category


@dataclass
class PaginatedResult(Generic[T]):
    """Paginated result container.

    Attributes:
        items: List of items.
        total: Total count of matching items.
        page: Current page.
        limit: Items per page.
    """

    items: list[T]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        """Calculate total pages."""
        return (self.total + self.limit - 1) // self.limit

    @property
    def has_next(self) -> bool:
        """Check if there's a next page."""
        return self.page < self.pages


@dataclass
class ImageUpload:
    """An image received from a client, fully buffered."""

    content: bytes


@dataclass
class CategoryRename:
    """Outcome of a category rename cascade."""

    category: Category
    old_name: str
    products_updated: int


@dataclass
class CategoryDeletion:
    """Outcome of a category delete cascade."""

    category: Category
    products_reassigned: int


def _upload_name(prefix: str) -> str:
    return f"{prefix}-{int(time.time() * 1000)}"


class CatalogService:
    """Service for catalog operations.

    Every write method commits before it returns, so a cascade and the
    record change that triggered it commit or roll back together, and the
    caller sees the outcome of the commit. Asset store cleanup only runs
    once the commit has succeeded.

    Example usage:
        async with async_session_factory() as session:
            service = CatalogService(session, get_asset_store())

            result = await service.list_products(
                ProductQuery(page=2, limit=12, category="Skincare"),
            )
            await service.rename_category(category_id, "Beauty")
    """

    def __init__(
        self,
        session: AsyncSession,
        asset_store: ImageKitClient,
        delete_scope: str | None = None,
    ) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
            asset_store: Client used to store and delete images.
            delete_scope: Category delete scope ("affected" or "all"),
                defaults to the configured scope.
        """
        self.session = session
        self.asset_store = asset_store
        self.delete_scope = delete_scope or settings.category_delete_scope
        self.products = ProductRepository(session)
        self.categories = CategoryRepository(session)
        self.banners = BannerImageRepository(session)

    # ========================================================================
    # Products
    # ========================================================================

    async def list_products(self, query: ProductQuery) -> PaginatedResult[Product]:
        """Search products with filters and pagination.

        Args:
            query: Listing parameters.

        Returns:
            Paginated product results.
        """
        search = query.search_term
        category = query.category_filter

        products = await self.products.find_all(
            search=search,
            category=category,
            sort_order="asc" if query.sort is ProductSort.OLDEST else "desc",
            limit=query.limit,
            offset=query.offset,
        )
        total = await self.products.count(search=search, category=category)

        return PaginatedResult(
            items=list(products),
            total=total,
            page=query.page,
            limit=query.limit,
        )

    async def products_by_category(
        self,
        per_category: int | None = None,
    ) -> dict[str, list[Product]]:
        """Group the newest products by category name.

        Args:
            per_category: Maximum products kept per category.

        Returns:
            Mapping of category name to its newest products.
        """
        per_category = per_category or settings.products_per_category
        grouped: dict[str, list[Product]] = {}

        for product in await self.products.find_all(sort_order="desc"):
            bucket = grouped.setdefault(product.category, [])
            if len(bucket) < per_category:
                bucket.append(product)

        return grouped

    async def get_product(self, product_id: str) -> Product:
        """Get product by ID.

        Raises:
            NotFoundError: If the product does not exist.
        """
        return await self.products.get(product_id)

    async def create_product(
        self,
        data: dict[str, Any],
        image: ImageUpload | None = None,
    ) -> Product:
        """Create a product, uploading its image first if one was sent.

        Args:
            data: Product fields keyed by model attribute name.
            image: Optional image; replaces any image_url in data.

        Returns:
            The created product.

        Raises:
            ValidationError: If a required field is missing or invalid.
            UpstreamError: If the image upload fails.
        """
        fields = {k: v for k, v in data.items() if v is not None}

        if image is not None:
            # Reject bad payloads before anything reaches the asset store
            for field in ("name", "category", "price", "description"):
                if field not in fields:
                    raise ValidationError(field, "is required")
            validate_product_fields(fields)

            asset = await self.asset_store.upload(image.content, _upload_name(fields["name"]))
            fields["image_url"] = asset.url
            fields["image_file_id"] = asset.file_id

            try:
                product = await self.products.create(fields)
                await self.session.commit()
            except Exception:
                await self._cleanup_asset(asset.file_id)
                raise
        else:
            product = await self.products.create(fields)
            await self.session.commit()

        logger.info("Product created", product_id=product.id, category=product.category)
        return product

    async def update_product(
        self,
        product_id: str,
        patch: dict[str, Any],
        image: ImageUpload | None = None,
    ) -> Product:
        """Replace the fields present in patch, and the image if one was sent.

        The previous image is deleted from the asset store on a best-effort
        basis once the new one is stored.

        Raises:
            NotFoundError: If the product does not exist.
            ValidationError: If a replaced field is invalid.
            UpstreamError: If the image upload fails.
        """
        product = await self.products.get(product_id)
        validate_product_fields(patch)
        patch = dict(patch)

        if image is None:
            product = await self.products.update(product_id, patch)
            await self.session.commit()
            logger.info("Product updated", product_id=product_id, fields=sorted(patch))
            return product

        asset = await self.asset_store.upload(
            image.content,
            _upload_name(patch.get("name") or product.name),
        )
        previous_file_id = product.image_file_id
        patch["image_url"] = asset.url
        patch["image_file_id"] = asset.file_id

        try:
            product = await self.products.update(product_id, patch)
            await self.session.commit()
        except Exception:
            await self._cleanup_asset(asset.file_id)
            raise

        if previous_file_id:
            await self._cleanup_asset(previous_file_id)

        logger.info("Product updated", product_id=product_id, fields=sorted(patch))
        return product

    async def delete_product(self, product_id: str) -> Product:
        """Delete a product and, best-effort, its image.

        Raises:
            NotFoundError: If the product does not exist.
        """
        product = await self.products.delete(product_id)
        await self.session.commit()
        logger.info("Product deleted", product_id=product_id)

        if product.image_file_id:
            await self._cleanup_asset(product.image_file_id)

        return product

    # ========================================================================
    # Categories
    # ========================================================================

    async def list_categories(self) -> Sequence[Category]:
        return await self.categories.list_all()

    async def create_category(self, name: Any) -> Category:
        category = await self.categories.create(name)
        await self.session.commit()
        logger.info("Category created", category_id=category.id, name=category.name)
        return category

    async def rename_category(self, category_id: str, new_name: Any) -> CategoryRename:
        """Rename a category and move its products to the new name.

        Args:
            category_id: Category ID.
            new_name: Replacement name.

        Returns:
            The renamed category, its previous name and the number of
            products moved.

        Raises:
            NotFoundError: If the category does not exist.
            ValidationError: If the new name is blank.
        """
        old_name, category = await self.categories.update(category_id, new_name)
        updated = 0
        if old_name != category.name:
            updated = await self.products.rename_category(old_name, category.name)
        await self.session.commit()

        logger.info(
            "Category renamed",
            category_id=category_id,
            old_name=old_name,
            new_name=category.name,
            products_updated=updated,
        )
        return CategoryRename(category=category, old_name=old_name, products_updated=updated)

    async def delete_category(self, category_id: str) -> CategoryDeletion:
        """Delete a category and reassign products to the uncategorized label.

        With the "affected" scope only products of the deleted category are
        reassigned; with "all" every product is.

        Raises:
            NotFoundError: If the category does not exist.
        """
        category = await self.categories.delete(category_id)
        only = None if self.delete_scope == "all" else category.name
        reassigned = await self.products.reassign_category(settings.uncategorized_label, only=only)
        await self.session.commit()

        logger.info(
            "Category deleted",
            category_id=category_id,
            name=category.name,
            scope=self.delete_scope,
            products_reassigned=reassigned,
        )
        return CategoryDeletion(category=category, products_reassigned=reassigned)

    # ========================================================================
    # Banner images
    # ========================================================================

    async def list_banner_images(self) -> Sequence[BannerImage]:
        return await self.banners.list_all()

    async def create_banner_image(
        self,
        image: ImageUpload | None = None,
        image_url: str | None = None,
    ) -> BannerImage:
        """Create a banner from an uploaded image or an existing URL.

        Raises:
            ValidationError: If neither an image nor a URL is given.
            UpstreamError: If the image upload fails.
        """
        if image is None:
            banner = await self.banners.create(image_url)
            await self.session.commit()
            return banner

        asset = await self.asset_store.upload(image.content, _upload_name("banner"))
        try:
            banner = await self.banners.create(asset.url, image_file_id=asset.file_id)
            await self.session.commit()
        except Exception:
            await self._cleanup_asset(asset.file_id)
            raise
        logger.info("Banner image created", banner_id=banner.id)
        return banner

    async def delete_banner_image(self, banner_id: str) -> BannerImage:
        """Delete a banner and, best-effort, its image."""
        banner = await self.banners.delete(banner_id)
        await self.session.commit()
        if banner.image_file_id:
            await self._cleanup_asset(banner.image_file_id)
        return banner

    async def _cleanup_asset(self, file_id: str) -> None:
        """Delete an image from the asset store, logging any failure."""
        try:
            await self.asset_store.delete(file_id)
        except Exception as e:
            logger.warning("Asset cleanup failed", file_id=file_id, error=str(e))
