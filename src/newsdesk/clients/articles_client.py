"""Row store client for the ``articles`` and ``categories`` tables."""

import logging

from pydantic import ValidationError as PydanticValidationError

from newsdesk.interfaces import ArticleRepository
from schemas import ArticleDraft, Category

from .client import Client
from .exceptions import APIError, NotFoundError, ResponseValidationError

logger = logging.getLogger(__name__)


class ArticlesClient(Client, ArticleRepository):
    """Client for the hosted backend's REST row API.

    Filters use the ``column=op.value`` query convention (``eq``, ``neq``).

    Example:
        config = {"base_url": "https://project.example.co", "api_key": "..."}
        async with ArticlesClient(config) as client:
            article_id = await client.insert(draft.to_row())
    """

    ARTICLES_PATH = "/rest/v1/articles"
    CATEGORIES_PATH = "/rest/v1/categories"

    async def fetch(self, article_id: str) -> ArticleDraft:
        """Load an existing article for editing.

        Raises:
            NotFoundError: If no row has this id
            ResponseValidationError: If the row does not match ArticleDraft
        """
        response = await self.get(
            self.ARTICLES_PATH,
            params={"select": "*", "id": f"eq.{article_id}", "limit": 1},
        )
        rows = response.json()
        if not rows:
            raise NotFoundError(f"Article not found: {article_id}")
        try:
            return ArticleDraft.model_validate(rows[0])
        except PydanticValidationError as e:
            raise ResponseValidationError(
                f"Article {article_id} failed validation",
                errors=[str(err) for err in e.errors()],
            ) from e

    async def insert(self, record: dict) -> str:
        response = await self.post(
            self.ARTICLES_PATH,
            json=record,
            headers={"Prefer": "return=representation"},
        )
        rows = response.json()
        if not rows or "id" not in rows[0]:
            raise APIError("Insert returned no row", status_code=response.status_code)
        article_id = str(rows[0]["id"])
        logger.info(f"Inserted article {article_id}")
        return article_id

    async def update(self, article_id: str, record: dict) -> None:
        await self.patch(
            self.ARTICLES_PATH,
            params={"id": f"eq.{article_id}"},
            json=record,
        )
        logger.debug(f"Updated article {article_id}: {sorted(record)}")

    async def find_id_by_slug(self, slug: str, exclude_id: str | None = None) -> str | None:
        params = {"select": "id", "slug": f"eq.{slug}", "limit": 1}
        if exclude_id:
            params["id"] = f"neq.{exclude_id}"

        response = await self.get(self.ARTICLES_PATH, params=params)
        rows = response.json()
        return str(rows[0]["id"]) if rows else None

    async def get_categories(self) -> list[Category]:
        """Return all categories ordered by name.

        Raises:
            ResponseValidationError: If any row fails the Category schema
        """
        response = await self.get(
            self.CATEGORIES_PATH,
            params={"select": "id,name", "order": "name"},
        )
        categories: list[Category] = []
        for i, row in enumerate(response.json()):
            try:
                categories.append(Category.model_validate(row))
            except PydanticValidationError as e:
                raise ResponseValidationError(
                    f"Category {row.get('id', f'index {i}')} failed validation",
                    errors=[str(err) for err in e.errors()],
                ) from e
        return categories
