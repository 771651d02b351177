"""Pytest fixtures for newsdesk tests."""

import asyncio
import json

import pytest

from newsdesk.clients import APIError, ConflictError
from newsdesk.drafts import MemoryDraftStore
from newsdesk.interfaces import ArticleRepository, Authenticator, ObjectStorage
from schemas import ArticleDraft, Category, Identity


class FakeArticleRepository(ArticleRepository):
    """In-memory row store recording every call in order.

    Set ``gate`` to an asyncio.Event to hold ``update`` calls until it is set,
    and ``fail_with`` to make writes raise.
    """

    def __init__(self, categories=None):
        self.rows: dict[str, dict] = {}
        self.categories = categories if categories is not None else []
        self.calls: list[tuple] = []
        self.gate: asyncio.Event | None = None
        self.fail_with: Exception | None = None
        self._next_id = 1

    @property
    def writes(self) -> list[tuple]:
        return [c for c in self.calls if c[0] in ("insert", "update")]

    def add_row(self, article_id: str, **columns) -> None:
        self.rows[article_id] = {"id": article_id, **columns}

    async def fetch(self, article_id):
        self.calls.append(("fetch", article_id))
        return ArticleDraft.model_validate(self.rows[article_id])

    async def insert(self, record):
        self.calls.append(("insert", record))
        if self.fail_with is not None:
            raise self.fail_with
        if any(r.get("slug") == record.get("slug") for r in self.rows.values()):
            raise ConflictError("duplicate key value violates unique constraint")
        article_id = f"art-{self._next_id}"
        self._next_id += 1
        self.rows[article_id] = {"id": article_id, **record}
        return article_id

    async def update(self, article_id, record):
        self.calls.append(("update", article_id, record))
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_with is not None:
            raise self.fail_with
        self.rows.setdefault(article_id, {"id": article_id}).update(record)
        self.calls.append(("update-done", article_id))

    async def find_id_by_slug(self, slug, exclude_id=None):
        self.calls.append(("find_id_by_slug", slug, exclude_id))
        for article_id, row in self.rows.items():
            if row.get("slug") == slug and article_id != exclude_id:
                return article_id
        return None

    async def get_categories(self):
        self.calls.append(("get_categories",))
        return list(self.categories)


class FakeAuthenticator(Authenticator):
    def __init__(self, user=None):
        self.user = user

    async def get_current_user(self):
        return self.user


class FakeStorage(ObjectStorage):
    def __init__(self, fail=False):
        self.fail = fail
        self.uploaded = []

    async def upload(self, path):
        if self.fail:
            raise APIError("Bucket not found", status_code=400)
        self.uploaded.append(path)
        return f"https://cdn.example.com/article-images/{path.name}"


@pytest.fixture
def categories():
    return [Category(id="cat-news", name="News"), Category(id="cat-tech", name="Tech")]


@pytest.fixture
def repository(categories):
    return FakeArticleRepository(categories=categories)


@pytest.fixture
def editor_user():
    return Identity(
        id="user-1",
        email="editor@example.com",
        user_metadata={"full_name": "Ada Editor"},
    )


@pytest.fixture
def authenticator(editor_user):
    return FakeAuthenticator(editor_user)


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def draft_store():
    return MemoryDraftStore()


@pytest.fixture
def sample_article_data():
    """A complete, publishable article as stored in the row store."""
    return {
        "id": "art-42",
        "title": "City Council Approves Budget",
        "slug": "city-council-approves-budget",
        "excerpt": "The council voted 7-2 on Tuesday.",
        "content": "<p>The city council approved the annual budget on Tuesday.</p>",
        "image_url": "https://cdn.example.com/article-images/budget.jpg",
        "category_id": "cat-news",
        "tags": ["Budget", "City Hall"],
        "published": True,
        "published_at": "2026-01-15T14:00:00+00:00",
        "meta_title": "Council approves budget",
        "meta_description": "The city council approved the annual budget.",
        "is_premium": False,
        "premium_preview_length": 300,
        "ads_enabled": True,
        "affiliate_products_enabled": False,
        "author": "Ada Editor",
        "author_id": "user-1",
        "created_at": "2026-01-15T10:00:00+00:00",
        "updated_at": "2026-01-15T14:00:00+00:00",
        "views_count": 120,
    }


@pytest.fixture
def sample_article(sample_article_data):
    return ArticleDraft.model_validate(sample_article_data)


@pytest.fixture
def article_file(tmp_path, sample_article_data):
    """An unpublished new article written to a JSON file."""
    data = {
        k: v
        for k, v in sample_article_data.items()
        if k not in ("id", "published", "published_at", "created_at", "updated_at")
    }
    path = tmp_path / "article.json"
    path.write_text(json.dumps(data, indent=2))
    return path
