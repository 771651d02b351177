"""Article record schemas."""

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field

# Columns the row store never receives from the editor.
LOCAL_ONLY_FIELDS = {"id", "image_file"}


class Category(BaseModel):
    """A category row as returned by the row store."""

    id: str
    name: str

    model_config = {"extra": "ignore"}


class Identity(BaseModel):
    """The signed-in user acting on an article.

    Attributes:
        id: User identifier issued by the authentication service
        email: Account email, if the provider exposes it
        user_metadata: Free-form profile data (display name, avatar, ...)
    """

    id: str
    email: str | None = None
    user_metadata: dict = {}

    model_config = {"extra": "ignore"}

    @property
    def display_name(self) -> str:
        """Name written to the article's author column."""
        name = self.user_metadata.get("full_name") or self.user_metadata.get("name")
        return name or self.email or self.id


class ArticleDraft(BaseModel):
    """The in-progress article owned by one editing session.

    Attributes:
        id: Row identifier; None until the article is first persisted
        title: Headline
        slug: URL token, derived from the title unless locked
        excerpt: Short summary shown in listings
        content: Article body (HTML produced by the editor)
        image_url: Public URL of the lead image
        image_file: Local image staged for upload on the next save
        category_id: Owning category; required to publish
        tags: Free-form labels, de-duplicated before persistence
        published: Whether the article is publicly visible
        published_at: Set on the first transition to published
        meta_title: SEO title override
        meta_description: SEO description override
        is_premium: Restrict full content to subscribers
        premium_preview_length: Characters shown before the paywall
        ads_enabled: Render ad slots on the article page
        affiliate_products_enabled: Render affiliate product blocks
    """

    id: str | None = None
    title: str = ""
    slug: str = ""
    excerpt: str = ""
    content: str = ""
    image_url: str | None = None
    image_file: Path | None = None
    category_id: str | None = None
    tags: list[str] = Field(default_factory=list)
    published: bool = False
    published_at: datetime | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    is_premium: bool = False
    premium_preview_length: int | None = 300
    ads_enabled: bool = True
    affiliate_products_enabled: bool = False
    author: str | None = None
    author_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"extra": "ignore"}

    def to_row(self, include: set[str] | None = None, exclude: set[str] | None = None) -> dict:
        """Serialize to a JSON-ready row for the row store.

        Args:
            include: Restrict the row to these columns
            exclude: Drop these columns

        Returns:
            Dictionary of column values, local-only fields removed
        """
        row = self.model_dump(mode="json", exclude=LOCAL_ONLY_FIELDS | (exclude or set()))
        if include is not None:
            row = {k: v for k, v in row.items() if k in include}
        return row
