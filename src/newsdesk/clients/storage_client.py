"""Object storage client for article images."""

import logging
import mimetypes
import time
from pathlib import Path

from newsdesk.interfaces import ObjectStorage

from .client import Client

logger = logging.getLogger(__name__)


class StorageClient(Client, ObjectStorage):
    """Uploads files into a public storage bucket.

    Config keys (in addition to Client's):
        bucket: Target bucket name (default: article-images)
    """

    DEFAULT_BUCKET = "article-images"

    @property
    def bucket(self) -> str:
        return str(self._config.get("bucket", self.DEFAULT_BUCKET))

    def object_name(self, path: Path) -> str:
        """Timestamped object name keeping the file's extension."""
        name = str(int(time.time() * 1000))
        suffix = path.suffix.lstrip(".")
        return f"{name}.{suffix}" if suffix else name

    def public_url(self, name: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/{name}"

    async def upload(self, path: Path) -> str:
        """Upload ``path`` and return its public URL.

        Raises:
            OSError: If the local file cannot be read
            ClientError: If the upload request fails
        """
        name = self.object_name(path)
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"

        await self.post(
            f"/storage/v1/object/{self.bucket}/{name}",
            content=path.read_bytes(),
            headers={"Content-Type": content_type},
        )
        logger.info(f"Uploaded {path.name} as {self.bucket}/{name}")
        return self.public_url(name)
