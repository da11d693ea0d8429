"""Catalog Admin API Client.

Thin HTTP client for communicating with the catalog admin REST API.
This module handles envelope parsing and error handling; failures are
returned as values, never raised.
"""

from dataclasses import dataclass, field
from typing import Any

import httpx
import structlog

logger = structlog.get_logger()


@dataclass
class APIError:
    """Represents an API error response."""

    message: str
    status_code: int
    error_code: str = "ERROR"
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class APIResponse:
    """Represents an API response."""

    success: bool
    data: dict[str, Any] | list[Any] | None = None
    error: APIError | None = None
    total: int | None = None
    page: int | None = None
    pages: int | None = None


class CatalogAPIClient:
    """HTTP client for the catalog admin REST API.

    Provides methods for every catalog endpoint, including multipart
    uploads for products and banner images.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the API client.

        Args:
            base_url: Catalog API base URL.
            timeout: Request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"Accept": "application/json"},
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
    ) -> APIResponse:
        """Make an API request.

        Args:
            method: HTTP method.
            path: API endpoint path.
            json: Request body as JSON.
            params: Query parameters.
            data: Multipart form fields.
            files: Multipart files.

        Returns:
            APIResponse with success status and data or error.
        """
        client = await self._get_client()

        # Filter out None params and form fields
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        if data:
            data = {k: _form_value(v) for k, v in data.items() if v is not None}

        try:
            logger.debug(
                "Making API request",
                method=method,
                path=path,
                has_body=json is not None or bool(data) or bool(files),
            )

            response = await client.request(
                method=method,
                url=path,
                json=json,
                params=params,
                data=data,
                files=files,
            )

            body = response.json()
            if not isinstance(body, dict):
                raise ValueError(f"expected a JSON object, got {type(body).__name__}")

            if response.status_code >= 400 or not body.get("success", False):
                return APIResponse(
                    success=False,
                    error=APIError(
                        message=body.get("message", "Unknown error"),
                        status_code=response.status_code,
                    ),
                )

            return APIResponse(
                success=True,
                data=body.get("data"),
                total=body.get("total"),
                page=body.get("page"),
                pages=body.get("pages"),
            )

        except httpx.TimeoutException as e:
            logger.error("API request timeout", path=path, error=str(e))
            return APIResponse(
                success=False,
                error=APIError(
                    error_code="TIMEOUT",
                    message=f"Request timed out: {path}",
                    status_code=504,
                ),
            )
        except httpx.RequestError as e:
            logger.error("API request failed", path=path, error=str(e))
            return APIResponse(
                success=False,
                error=APIError(
                    error_code="REQUEST_ERROR",
                    message=f"Request failed: {str(e)}",
                    status_code=500,
                ),
            )
        except ValueError as e:
            logger.error("API response was not a JSON object", path=path, error=str(e))
            return APIResponse(
                success=False,
                error=APIError(
                    error_code="INVALID_RESPONSE",
                    message=f"Invalid response body: {path}",
                    status_code=502,
                ),
            )

    # =========================================================================
    # Product Endpoints
    # =========================================================================

    async def list_products(
        self,
        page: int = 1,
        limit: int | None = None,
        search: str | None = None,
        category: str | None = None,
        sort: str | None = None,
    ) -> APIResponse:
        """List products.

        Args:
            page: Page number (1-based).
            limit: Items per page.
            search: Text search.
            category: Category name, "all" or None for every category.
            sort: "newest" or "oldest".

        Returns:
            APIResponse with one page of products plus total/page/pages.
        """
        return await self._request(
            method="GET",
            path="/api/products",
            params={
                "page": page,
                "limit": limit,
                "search": search or None,
                "category": category,
                "sort": sort,
            },
        )

    async def get_product(self, product_id: str) -> APIResponse:
        return await self._request(method="GET", path=f"/api/products/{product_id}")

    async def products_by_category(self) -> APIResponse:
        return await self._request(method="GET", path="/api/products-by-category")

    async def create_product(
        self,
        fields: dict[str, Any],
        image: bytes | None = None,
        image_name: str = "image",
    ) -> APIResponse:
        """Create a product.

        Args:
            fields: Form fields (name, category, price, description,
                discountPercentage, in_stock, imageUrl).
            image: Optional image bytes.
            image_name: File name sent with the image.

        Returns:
            APIResponse with the created product.
        """
        return await self._request(
            method="POST",
            path="/api/products",
            data=fields,
            files={"image": (image_name, image)} if image is not None else None,
        )

    async def update_product(
        self,
        product_id: str,
        fields: dict[str, Any],
        image: bytes | None = None,
        image_name: str = "image",
    ) -> APIResponse:
        return await self._request(
            method="PUT",
            path=f"/api/products/{product_id}",
            data=fields,
            files={"image": (image_name, image)} if image is not None else None,
        )

    async def delete_product(self, product_id: str) -> APIResponse:
        return await self._request(method="DELETE", path=f"/api/products/{product_id}")

    # =========================================================================
    # Category Endpoints
    # =========================================================================

    async def list_categories(self) -> APIResponse:
        return await self._request(method="GET", path="/api/categories")

    async def create_category(self, name: str) -> APIResponse:
        return await self._request(method="POST", path="/api/categories", json={"name": name})

    async def rename_category(self, category_id: str, name: str) -> APIResponse:
        return await self._request(
            method="PUT",
            path=f"/api/categories/{category_id}",
            json={"name": name},
        )

    async def delete_category(self, category_id: str) -> APIResponse:
        return await self._request(method="DELETE", path=f"/api/categories/{category_id}")

    # =========================================================================
    # Banner Image Endpoints
    # =========================================================================

    async def list_banner_images(self) -> APIResponse:
        return await self._request(method="GET", path="/api/banner-images")

    async def create_banner_image(
        self,
        image: bytes,
        image_name: str = "banner",
    ) -> APIResponse:
        return await self._request(
            method="POST",
            path="/api/banner-images",
            files={"image": (image_name, image)},
        )

    async def delete_banner_image(self, banner_id: str) -> APIResponse:
        return await self._request(method="DELETE", path=f"/api/banner-images/{banner_id}")


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
