"""Catalog store: repositories for database operations.

Provides CRUD operations for products, categories and banner images,
with filtering, sorting and required-field validation. Nothing outside
this module writes catalog rows.
"""

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import and_, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_admin.catalog.models import BannerImage, Category, Product
from catalog_admin.domain.exceptions import NotFoundError, ValidationError

PRODUCT_FIELDS = frozenset(
    {
        "name",
        "category",
        "price",
        "discount_percentage",
        "description",
        "in_stock",
        "image_url",
        "image_file_id",
    }
)
REQUIRED_PRODUCT_FIELDS = ("name", "category", "price", "description", "image_url")
TEXT_PRODUCT_FIELDS = ("name", "category", "description", "image_url")


# ============================================================================
# Validation
# ============================================================================


def _require_text(field: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(field, "must be a non-empty string")
    return value


def validate_product_fields(data: dict[str, Any]) -> dict[str, Any]:
    """Validate the product fields present in ``data``.

    Args:
        data: Field values keyed by model attribute name.

    Returns:
        The cleaned values.

    Raises:
        ValidationError: On unknown fields or invalid values.
    """
    unknown = set(data) - PRODUCT_FIELDS
    if unknown:
        raise ValidationError(sorted(unknown)[0], "unknown product field")

    cleaned = dict(data)

    for field in TEXT_PRODUCT_FIELDS:
        if field in cleaned:
            cleaned[field] = _require_text(field, cleaned[field])

    if "price" in cleaned:
        price = cleaned["price"]
        if isinstance(price, bool) or not isinstance(price, (int, float)) or price <= 0:
            raise ValidationError("price", "must be a positive number")
        cleaned["price"] = float(price)

    if "discount_percentage" in cleaned:
        discount = cleaned["discount_percentage"]
        if discount is None:
            discount = 0
        if isinstance(discount, bool) or not isinstance(discount, (int, float)):
            raise ValidationError("discount_percentage", "must be a number")
        if not 0 <= discount <= 100:
            raise ValidationError("discount_percentage", "must be between 0 and 100")
        cleaned["discount_percentage"] = float(discount)

    if "in_stock" in cleaned:
        if cleaned["in_stock"] is None:
            cleaned["in_stock"] = True
        elif not isinstance(cleaned["in_stock"], bool):
            raise ValidationError("in_stock", "must be a boolean")

    return cleaned


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# Product Repository
# ============================================================================


class ProductRepository:
    """Repository for Product database operations.

    Handles all database interactions for products including
    filtering, sorting, pagination and the bulk category rewrites
    used by category cascades.

    Example usage:
        async with async_session_factory() as session:
            repo = ProductRepository(session)
            products = await repo.find_all(
                category="Skincare",
                search="serum",
                limit=20,
            )
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def create(self, data: dict[str, Any]) -> Product:
        """Validate and persist a new product.

        Args:
            data: Product fields keyed by model attribute name.

        Returns:
            Saved product with id and timestamps assigned.

        Raises:
            ValidationError: If a required field is missing or invalid.
        """
        for field in REQUIRED_PRODUCT_FIELDS:
            if data.get(field) is None:
                raise ValidationError(field, "is required")

        product = Product(**validate_product_fields(data))
        self.session.add(product)
        await self.session.flush()
        return product

    async def get_by_id(self, product_id: str) -> Product | None:
        """Get product by ID.

        Args:
            product_id: Product ID.

        Returns:
            Product if found, None otherwise.
        """
        result = await self.session.execute(select(Product).where(Product.id == product_id))
        return result.scalar_one_or_none()

    async def get(self, product_id: str) -> Product:
        """Get product by ID or raise.

        Raises:
            NotFoundError: If no product has this ID.
        """
        product = await self.get_by_id(product_id)
        if product is None:
            raise NotFoundError("Product", product_id)
        return product

    async def find_all(
        self,
        search: str | None = None,
        category: str | None = None,
        sort_order: str = "desc",
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[Product]:
        """Find products with filtering, sorting, and pagination.

        Args:
            search: Case-insensitive substring matched against name,
                description and category.
            category: Exact category name.
            sort_order: Creation time order (asc, desc).
            limit: Maximum results, None for all.
            offset: Result offset for pagination.

        Returns:
            Sequence of matching products.
        """
        query = select(Product)

        conditions = self._build_conditions(search=search, category=category)
        if conditions:
            query = query.where(and_(*conditions))

        # Ties on created_at are broken by id so pages never overlap
        if sort_order.lower() == "asc":
            query = query.order_by(Product.created_at.asc(), Product.id.asc())
        else:
            query = query.order_by(Product.created_at.desc(), Product.id.desc())

        if limit is not None:
            query = query.limit(limit)
        if offset:
            query = query.offset(offset)

        result = await self.session.execute(query)
        return result.scalars().all()

    async def count(
        self,
        search: str | None = None,
        category: str | None = None,
    ) -> int:
        """Count products matching the same filters as find_all.

        Returns:
            Count of matching products.
        """
        query = select(func.count(Product.id))

        conditions = self._build_conditions(search=search, category=category)
        if conditions:
            query = query.where(and_(*conditions))

        result = await self.session.execute(query)
        return result.scalar_one()

    async def update(self, product_id: str, patch: dict[str, Any]) -> Product:
        """Replace exactly the fields present in patch.

        Args:
            product_id: Product ID.
            patch: Field values keyed by model attribute name.

        Returns:
            The product after the update.

        Raises:
            NotFoundError: If no product has this ID.
            ValidationError: If a replaced field is invalid.
        """
        product = await self.get(product_id)
        for key, value in validate_product_fields(patch).items():
            setattr(product, key, value)
        product.updated_at = _utcnow()
        await self.session.flush()
        return product

    async def delete(self, product_id: str) -> Product:
        """Delete a product.

        Returns:
            The deleted product, so callers can clean up its image.

        Raises:
            NotFoundError: If no product has this ID.
        """
        product = await self.get(product_id)
        await self.session.delete(product)
        await self.session.flush()
        return product

    async def rename_category(self, old_name: str, new_name: str) -> int:
        """Move every product in old_name to new_name.

        Returns:
            Number of products updated.
        """
        result = await self.session.execute(
            update(Product)
            .where(Product.category == old_name)
            .values(category=new_name, updated_at=_utcnow())
            .execution_options(synchronize_session="evaluate")
        )
        return result.rowcount or 0

    async def reassign_category(self, new_name: str, only: str | None = None) -> int:
        """Set the category of products to new_name.

        Args:
            new_name: Category name to assign.
            only: If given, only products currently in this category are
                touched; otherwise every product is.

        Returns:
            Number of products updated.
        """
        stmt = update(Product).values(category=new_name, updated_at=_utcnow())
        if only is not None:
            stmt = stmt.where(Product.category == only)
        result = await self.session.execute(
            stmt.execution_options(synchronize_session="evaluate")
        )
        return result.rowcount or 0

    def _build_conditions(
        self,
        search: str | None,
        category: str | None,
    ) -> list[Any]:
        conditions = []

        if search:
            pattern = f"%{_escape_like(search)}%"
            conditions.append(
                or_(
                    Product.name.ilike(pattern, escape="\\"),
                    Product.description.ilike(pattern, escape="\\"),
                    Product.category.ilike(pattern, escape="\\"),
                )
            )

        if category is not None:
            conditions.append(Product.category == category)

        return conditions


# ============================================================================
# Category Repository
# ============================================================================


class CategoryRepository:
    """Repository for Category database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, name: Any) -> Category:
        """Persist a new category.

        Raises:
            ValidationError: If the name is blank.
        """
        category = Category(name=_require_text("name", name).strip())
        self.session.add(category)
        await self.session.flush()
        return category

    async def list_all(self) -> Sequence[Category]:
        """List categories in creation order."""
        result = await self.session.execute(
            select(Category).order_by(Category.created_at.asc(), Category.id.asc())
        )
        return result.scalars().all()

    async def get_by_id(self, category_id: str) -> Category | None:
        result = await self.session.execute(select(Category).where(Category.id == category_id))
        return result.scalar_one_or_none()

    async def get(self, category_id: str) -> Category:
        """Get category by ID or raise NotFoundError."""
        category = await self.get_by_id(category_id)
        if category is None:
            raise NotFoundError("Category", category_id)
        return category

    async def update(self, category_id: str, name: Any) -> tuple[str, Category]:
        """Replace the category name.

        Returns:
            The name before the update and the updated category.

        Raises:
            NotFoundError: If no category has this ID.
            ValidationError: If the new name is blank.
        """
        new_name = _require_text("name", name).strip()
        category = await self.get(category_id)
        old_name = category.name
        category.name = new_name
        category.updated_at = _utcnow()
        await self.session.flush()
        return old_name, category

    async def delete(self, category_id: str) -> Category:
        """Delete a category and return it."""
        category = await self.get(category_id)
        await self.session.delete(category)
        await self.session.flush()
        return category


# ============================================================================
# Banner Image Repository
# ============================================================================


class BannerImageRepository:
    """Repository for BannerImage database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, image_url: Any, image_file_id: str | None = None) -> BannerImage:
        """Persist a new banner image.

        Raises:
            ValidationError: If the image URL is blank.
        """
        banner = BannerImage(
            image_url=_require_text("image_url", image_url),
            image_file_id=image_file_id,
        )
        self.session.add(banner)
        await self.session.flush()
        return banner

    async def list_all(self) -> Sequence[BannerImage]:
        result = await self.session.execute(
            select(BannerImage).order_by(BannerImage.created_at.asc(), BannerImage.id.asc())
        )
        return result.scalars().all()

    async def get(self, banner_id: str) -> BannerImage:
        result = await self.session.execute(select(BannerImage).where(BannerImage.id == banner_id))
        banner = result.scalar_one_or_none()
        if banner is None:
            raise NotFoundError("BannerImage", banner_id)
        return banner

    async def delete(self, banner_id: str) -> BannerImage:
        """Delete a banner image and return it."""
        banner = await self.get(banner_id)
        await self.session.delete(banner)
        await self.session.flush()
        return banner
