#!/usr/bin/env python3
"""Seed catalog script.

Creates a small demo catalog: a handful of categories, products spread
across them and, optionally, banner images. Images are referenced by
URL, so nothing is uploaded to the asset store.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --products-per-category 12
    python scripts/seed_catalog.py --clear --banners 3
"""

import argparse
import asyncio
import random

from sqlalchemy import delete

from catalog_admin.catalog.models import BannerImage, Category, Product
from catalog_admin.catalog.service import CatalogService
from catalog_admin.infrastructure.asset_store import close_asset_store, get_asset_store
from catalog_admin.infrastructure.database import async_session_factory, create_tables, engine

CATEGORIES = {
    "Skincare": ["Hydrating Serum", "Night Cream", "Clay Mask", "Toner", "Sunscreen SPF 50"],
    "Haircare": ["Argan Oil Shampoo", "Leave-in Conditioner", "Hair Mask", "Scalp Scrub"],
    "Fragrance": ["Eau de Parfum", "Body Mist", "Solid Perfume", "Travel Spray"],
    "Makeup": ["Matte Lipstick", "Liquid Foundation", "Mascara", "Brow Pencil", "Blush"],
}

PLACEHOLDER_IMAGE = "https://placehold.co/600x600?text={slug}"


async def clear_catalog() -> None:
    """Delete every product, category and banner image."""
    async with async_session_factory() as session:
        for model in (Product, Category, BannerImage):
            await session.execute(delete(model))
        await session.commit()


async def seed(products_per_category: int, banners: int, seed_value: int) -> dict:
    """Seed categories, products and banners.

    Args:
        products_per_category: Products created in each category.
        banners: Banner images to create.
        seed_value: Random seed for prices and discounts.

    Returns:
        Seeding result counts.
    """
    rng = random.Random(seed_value)
    created = {"categories": 0, "products": 0, "banners": 0}

    async with async_session_factory() as session:
        service = CatalogService(session, get_asset_store())

        for category, names in CATEGORIES.items():
            await service.create_category(category)
            created["categories"] += 1

            for i in range(products_per_category):
                base = names[i % len(names)]
                name = base if i < len(names) else f"{base} #{i // len(names) + 1}"
                await service.create_product(
                    {
                        "name": name,
                        "category": category,
                        "price": round(rng.uniform(5, 120), 2),
                        "discount_percentage": rng.choice([0, 0, 10, 15, 25]),
                        "description": f"{name} from our {category.lower()} range.",
                        "in_stock": rng.random() > 0.1,
                        "image_url": PLACEHOLDER_IMAGE.format(slug=name.replace(" ", "+")),
                    }
                )
                created["products"] += 1

        for i in range(banners):
            await service.create_banner_image(
                image_url=PLACEHOLDER_IMAGE.format(slug=f"Banner+{i + 1}")
            )
            created["banners"] += 1

        await session.commit()

    return created


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed the catalog with demo data",
    )
    parser.add_argument(
        "--products-per-category",
        type=int,
        default=10,
        help="Products created in each category (default: 10)",
    )
    parser.add_argument(
        "--banners",
        type=int,
        default=2,
        help="Banner images to create (default: 2)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for prices and discounts (default: 42)",
    )
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Delete the existing catalog before seeding",
    )

    args = parser.parse_args()

    print("=" * 60)
    print("Catalog Admin Seeder")
    print("=" * 60)

    print("Creating database tables...")
    await create_tables()
    print("Tables ready.")

    if args.clear:
        print("Clearing existing catalog...")
        await clear_catalog()

    try:
        result = await seed(
            products_per_category=args.products_per_category,
            banners=args.banners,
            seed_value=args.seed,
        )
        print(f"  ✓ Categories: {result['categories']}")
        print(f"  ✓ Products: {result['products']}")
        print(f"  ✓ Banners: {result['banners']}")
    except Exception as e:
        print(f"  ✗ Error: {e}")
        raise
    finally:
        await close_asset_store()
        await engine.dispose()

    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
