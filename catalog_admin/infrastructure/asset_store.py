"""Asset store HTTP client for product and banner images.

Wraps the two ImageKit endpoints the catalog needs: uploading a file
and deleting it by file ID.
"""

from dataclasses import dataclass
from typing import Any

import httpx
import structlog

from catalog_admin.domain.exceptions import UpstreamError
from catalog_admin.infrastructure.config import settings

logger = structlog.get_logger()

SERVICE_NAME = "imagekit"


@dataclass
class UploadedAsset:
    """A file stored in the asset store."""

    url: str
    file_id: str

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "UploadedAsset":
        """Create from upload API response.

        Args:
            data: API response data.

        Returns:
            UploadedAsset instance.
        """
        return cls(url=data["url"], file_id=data["fileId"])


class ImageKitClient:
    """HTTP client for the ImageKit media API.

    Uploads are single-attempt and send the whole buffer in one request.
    Authentication is HTTP basic with the private key as username.
    """

    def __init__(
        self,
        private_key: str,
        upload_url: str,
        api_url: str,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the client.

        Args:
            private_key: ImageKit private API key.
            upload_url: Upload endpoint URL.
            api_url: Management API base URL.
            timeout: Request timeout in seconds.
        """
        self.private_key = private_key
        self.upload_url = upload_url
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if not self.private_key:
            raise UpstreamError(SERVICE_NAME, "Asset store credentials are not configured")
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                auth=(self.private_key, ""),
                headers={"Accept": "application/json"},
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def upload(self, content: bytes, file_name: str) -> UploadedAsset:
        """Upload a file.

        Args:
            content: Raw file bytes.
            file_name: Name to store the file under.

        Returns:
            Public URL and file ID of the stored file.

        Raises:
            UpstreamError: If the upload fails for any reason.
        """
        client = await self._get_client()

        try:
            response = await client.post(
                self.upload_url,
                files={"file": (file_name, content)},
                data={"fileName": file_name},
            )
        except httpx.RequestError as e:
            logger.error("Asset upload request failed", file_name=file_name, error=str(e))
            raise UpstreamError(SERVICE_NAME, f"Upload failed: {e}") from e

        if response.status_code >= 400:
            logger.error(
                "Asset upload rejected",
                file_name=file_name,
                status_code=response.status_code,
            )
            raise UpstreamError(
                SERVICE_NAME,
                f"Upload failed: {response.text}",
                response.status_code,
            )

        asset = UploadedAsset.from_api_response(response.json())
        logger.info("Asset uploaded", file_name=file_name, file_id=asset.file_id)
        return asset

    async def delete(self, file_id: str) -> None:
        """Delete a file by ID.

        Raises:
            UpstreamError: If the deletion fails for any reason.
        """
        client = await self._get_client()

        try:
            response = await client.delete(f"{self.api_url}/files/{file_id}")
        except httpx.RequestError as e:
            raise UpstreamError(SERVICE_NAME, f"Delete failed: {e}") from e

        if response.status_code >= 400:
            raise UpstreamError(
                SERVICE_NAME,
                f"Delete failed: {response.text}",
                response.status_code,
            )

        logger.info("Asset deleted", file_id=file_id)


# Global client instance
_asset_store: ImageKitClient | None = None


def get_asset_store() -> ImageKitClient:
    """Get the asset store client singleton.

    Returns:
        ImageKitClient configured from settings.
    """
    global _asset_store
    if _asset_store is None:
        _asset_store = ImageKitClient(
            private_key=settings.imagekit_private_key,
            upload_url=settings.imagekit_upload_url,
            api_url=settings.imagekit_api_url,
            timeout=settings.asset_timeout_seconds,
        )
    return _asset_store


async def close_asset_store() -> None:
    """Close the asset store client if it was created."""
    global _asset_store
    if _asset_store is not None:
        await _asset_store.close()
        _asset_store = None
