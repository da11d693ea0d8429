"""Domain layer - catalog errors shared by every layer."""

from catalog_admin.domain.exceptions import (
    CatalogError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)

__all__ = [
    "CatalogError",
    "NotFoundError",
    "UpstreamError",
    "ValidationError",
]
