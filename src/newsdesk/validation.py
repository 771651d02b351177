"""Publish-time validation of article records.

Rules run in a fixed order and each field carries exactly one message, so a
record rejected here reports the same first violation every time:

1. title present, at least 3 characters
2. slug 3-120 characters of lowercase words joined by hyphens
3. content at least 20 characters after trimming
4. excerpt at most 300 characters
5. meta title at most 60 characters
6. meta description at most 160 characters
7. category chosen
8. at most 20 tags
9. premium preview length between 0 and 5000

Autosave never calls into this module.
"""

import logging

from pydantic import BaseModel, ValidationError as PydanticValidationError, field_validator
from pydantic_core import PydanticCustomError

from schemas import ArticleDraft

from .errors import ValidationError
from .slugs import is_valid_slug

logger = logging.getLogger(__name__)

TITLE_MIN_LENGTH = 3
SLUG_MIN_LENGTH = 3
SLUG_MAX_LENGTH = 120
CONTENT_MIN_LENGTH = 20
EXCERPT_MAX_LENGTH = 300
META_TITLE_MAX_LENGTH = 60
META_DESCRIPTION_MAX_LENGTH = 160
MAX_TAGS = 20
PREVIEW_LENGTH_RANGE = (0, 5000)

MISSING_CATEGORY = "Please select a category"


def _fail(code: str, message: str) -> PydanticCustomError:
    return PydanticCustomError(code, message)


class PublishableArticle(BaseModel):
    """The publish rules, one field validator per rule, in rule order."""

    title: str | None
    slug: str | None
    content: str | None
    excerpt: str | None
    meta_title: str | None
    meta_description: str | None
    category_id: str | None
    tags: list[str]
    premium_preview_length: int | None

    @field_validator("title")
    @classmethod
    def check_title(cls, v):
        if not v or len(v.strip()) < TITLE_MIN_LENGTH:
            raise _fail("title", f"Title must be at least {TITLE_MIN_LENGTH} characters")
        return v

    @field_validator("slug")
    @classmethod
    def check_slug(cls, v):
        if not v:
            raise _fail("slug", "Slug is required")
        if not SLUG_MIN_LENGTH <= len(v) <= SLUG_MAX_LENGTH:
            raise _fail(
                "slug",
                f"Slug must be between {SLUG_MIN_LENGTH} and {SLUG_MAX_LENGTH} characters",
            )
        if not is_valid_slug(v):
            raise _fail(
                "slug",
                "Slug may only contain lowercase letters, numbers and single hyphens",
            )
        return v

    @field_validator("content")
    @classmethod
    def check_content(cls, v):
        if len((v or "").strip()) < CONTENT_MIN_LENGTH:
            raise _fail("content", f"Content must be at least {CONTENT_MIN_LENGTH} characters")
        return v

    @field_validator("excerpt")
    @classmethod
    def check_excerpt(cls, v):
        if v and len(v) > EXCERPT_MAX_LENGTH:
            raise _fail("excerpt", f"Excerpt must be at most {EXCERPT_MAX_LENGTH} characters")
        return v

    @field_validator("meta_title")
    @classmethod
    def check_meta_title(cls, v):
        if v and len(v) > META_TITLE_MAX_LENGTH:
            raise _fail(
                "meta_title", f"Meta title must be at most {META_TITLE_MAX_LENGTH} characters"
            )
        return v

    @field_validator("meta_description")
    @classmethod
    def check_meta_description(cls, v):
        if v and len(v) > META_DESCRIPTION_MAX_LENGTH:
            raise _fail(
                "meta_description",
                f"Meta description must be at most {META_DESCRIPTION_MAX_LENGTH} characters",
            )
        return v

    @field_validator("category_id")
    @classmethod
    def check_category(cls, v):
        if not v or not v.strip():
            raise _fail("category_id", MISSING_CATEGORY)
        return v

    @field_validator("tags")
    @classmethod
    def check_tags(cls, v):
        if len(v) > MAX_TAGS:
            raise _fail("tags", f"At most {MAX_TAGS} tags are allowed")
        return v

    @field_validator("premium_preview_length")
    @classmethod
    def check_preview_length(cls, v):
        low, high = PREVIEW_LENGTH_RANGE
        if v is not None and not low <= v <= high:
            raise _fail(
                "premium_preview_length",
                f"Premium preview length must be between {low} and {high}",
            )
        return v


def check_article(article: ArticleDraft) -> list[tuple[str, str]]:
    """Return every rule violation as ``(field, message)``, in rule order."""
    candidate = article.model_dump(include=set(PublishableArticle.model_fields))
    try:
        PublishableArticle.model_validate(candidate)
    except PydanticValidationError as e:
        return [(str(err["loc"][0]), err["msg"]) for err in e.errors()]
    return []


def validate_article(article: ArticleDraft) -> ArticleDraft:
    """Accept ``article`` or raise for its first rule violation.

    Args:
        article: Fully assembled candidate (tags and slug already normalized)

    Returns:
        The same record, unchanged

    Raises:
        ValidationError: Carrying the first violation's field and message,
            with the full ordered list in ``violations``
    """
    violations = check_article(article)
    if violations:
        field, message = violations[0]
        logger.debug(f"Validation failed on {field}: {message}")
        raise ValidationError(message, field=field, violations=violations)
    return article
