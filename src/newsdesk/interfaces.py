"""Collaborator interfaces consumed by the authoring pipeline.

The pipeline depends only on these classes. Concrete implementations live in
``newsdesk.clients`` (hosted backend) and ``newsdesk.drafts`` (local store);
tests substitute in-memory fakes.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from schemas import ArticleDraft, Category, DraftSnapshot, Identity


class ArticleRepository(ABC):
    """Remote row store holding published and draft articles."""

    @abstractmethod
    async def fetch(self, article_id: str) -> ArticleDraft:
        """Load an existing article for editing."""

    @abstractmethod
    async def insert(self, record: dict) -> str:
        """Create an article row and return its identifier."""

    @abstractmethod
    async def update(self, article_id: str, record: dict) -> None:
        """Apply ``record`` to the row identified by ``article_id``."""

    @abstractmethod
    async def find_id_by_slug(self, slug: str, exclude_id: str | None = None) -> str | None:
        """Return the id of an article owning ``slug``, ignoring ``exclude_id``."""

    @abstractmethod
    async def get_categories(self) -> list[Category]:
        """Return all categories ordered by name."""


class Authenticator(ABC):
    """Source of the signed-in identity."""

    @abstractmethod
    async def get_current_user(self) -> Identity | None:
        """Return the active identity, or None when nobody is signed in."""


class ObjectStorage(ABC):
    """Object storage for article images."""

    @abstractmethod
    async def upload(self, path: Path) -> str:
        """Upload a local file and return its public URL."""


class DraftStore(ABC):
    """Key-value persistence local to the editing device."""

    @abstractmethod
    def get(self, key: str) -> DraftSnapshot | None:
        pass

    @abstractmethod
    def set(self, key: str, snapshot: DraftSnapshot) -> None:
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        pass
