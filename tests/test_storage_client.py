"""Tests for the StorageClient class."""

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from newsdesk.clients import APIError, StorageClient


@pytest.fixture
def storage_config():
    return {"base_url": "https://project.example.co/", "api_key": "anon", "bucket": "images"}


@pytest.fixture
def image_path(tmp_path):
    path = tmp_path / "lead.png"
    path.write_bytes(b"\x89PNG fake image")
    return path


class TestStorageClientNaming:
    """Tests for object naming and public URLs."""

    def test_default_bucket(self):
        client = StorageClient({"base_url": "https://project.example.co"})

        assert client.bucket == "article-images"

    @patch("newsdesk.clients.storage_client.time.time", return_value=1767225600.5)
    def test_object_name_keeps_extension(self, _mock_time, storage_config):
        client = StorageClient(storage_config)

        assert client.object_name(Path("photo.JPG")) == "1767225600500.JPG"
        assert client.object_name(Path("noext")) == "1767225600500"

    def test_public_url(self, storage_config):
        client = StorageClient(storage_config)

        assert (
            client.public_url("1.png")
            == "https://project.example.co/storage/v1/object/public/images/1.png"
        )


class TestStorageClientUpload:
    """Tests for StorageClient.upload()."""

    @patch("newsdesk.clients.storage_client.time.time", return_value=1767225600.0)
    def test_upload_posts_bytes(self, _mock_time, storage_config, image_path):
        client = StorageClient(storage_config)
        response = MagicMock()
        response.is_success = True
        client._client = MagicMock()
        client._client.request = AsyncMock(return_value=response)

        url = asyncio.run(client.upload(image_path))

        assert url.endswith("/storage/v1/object/public/images/1767225600000.png")
        client._client.request.assert_awaited_once_with(
            "POST",
            "/storage/v1/object/images/1767225600000.png",
            content=b"\x89PNG fake image",
            headers={"Content-Type": "image/png"},
        )

    def test_upload_missing_file_raises_os_error(self, storage_config, tmp_path):
        client = StorageClient(storage_config)
        client._client = MagicMock()
        client._client.request = AsyncMock()

        with pytest.raises(OSError):
            asyncio.run(client.upload(tmp_path / "missing.png"))

        client._client.request.assert_not_called()

    def test_upload_rejected(self, storage_config, image_path):
        client = StorageClient(storage_config)
        response = MagicMock()
        response.is_success = False
        response.status_code = 413
        response.url = "https://project.example.co/storage"
        response.json.return_value = {"message": "Payload too large"}
        client._client = MagicMock()
        client._client.request = AsyncMock(return_value=response)

        with pytest.raises(APIError, match="Payload too large"):
            asyncio.run(client.upload(image_path))
