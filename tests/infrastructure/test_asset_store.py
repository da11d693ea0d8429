"""Tests for the ImageKit asset store client."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from catalog_admin.domain.exceptions import UpstreamError
from catalog_admin.infrastructure.asset_store import ImageKitClient


class TestImageKitClient:
    """Tests for ImageKitClient."""

    @pytest.fixture
    def store(self) -> ImageKitClient:
        return ImageKitClient(
            private_key="private_test",
            upload_url="https://upload.imagekit.io/api/v1/files/upload",
            api_url="https://api.imagekit.io/v1/",
        )

    @pytest.mark.asyncio
    async def test_upload_success(self, store: ImageKitClient) -> None:
        response = MagicMock()
        response.status_code = 200
        response.json.return_value = {
            "url": "https://ik.imagekit.io/demo/serum.jpg",
            "fileId": "file-123",
            "name": "serum.jpg",
        }

        with patch.object(store, "_get_client", new_callable=AsyncMock) as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.post = AsyncMock(return_value=response)
            mock_get_client.return_value = mock_http_client

            asset = await store.upload(b"jpeg", "serum-1700000000000")

            assert asset.url == "https://ik.imagekit.io/demo/serum.jpg"
            assert asset.file_id == "file-123"
            kwargs = mock_http_client.post.call_args.kwargs
            assert kwargs["data"] == {"fileName": "serum-1700000000000"}

    @pytest.mark.asyncio
    async def test_upload_rejected(self, store: ImageKitClient) -> None:
        response = MagicMock()
        response.status_code = 401
        response.text = "Your account cannot be authenticated."

        with patch.object(store, "_get_client", new_callable=AsyncMock) as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.post = AsyncMock(return_value=response)
            mock_get_client.return_value = mock_http_client

            with pytest.raises(UpstreamError) as exc:
                await store.upload(b"jpeg", "serum")

            assert exc.value.upstream_status == 401

    @pytest.mark.asyncio
    async def test_upload_network_error(self, store: ImageKitClient) -> None:
        with patch.object(store, "_get_client", new_callable=AsyncMock) as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.post = AsyncMock(side_effect=httpx.ConnectError("refused"))
            mock_get_client.return_value = mock_http_client

            with pytest.raises(UpstreamError):
                await store.upload(b"jpeg", "serum")

    @pytest.mark.asyncio
    async def test_delete_uses_file_id(self, store: ImageKitClient) -> None:
        response = MagicMock()
        response.status_code = 204

        with patch.object(store, "_get_client", new_callable=AsyncMock) as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.delete = AsyncMock(return_value=response)
            mock_get_client.return_value = mock_http_client

            await store.delete("file-123")

            mock_http_client.delete.assert_called_once_with(
                "https://api.imagekit.io/v1/files/file-123"
            )

    @pytest.mark.asyncio
    async def test_missing_credentials(self) -> None:
        store = ImageKitClient(private_key="", upload_url="u", api_url="a")

        with pytest.raises(UpstreamError):
            await store.upload(b"jpeg", "serum")

    @pytest.mark.asyncio
    async def test_close_client(self, store: ImageKitClient) -> None:
        mock_http_client = AsyncMock()
        store._client = mock_http_client

        await store.close()

        mock_http_client.aclose.assert_called_once()
        assert store._client is None
