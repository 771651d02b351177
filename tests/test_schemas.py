"""Tests for schema definitions."""

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest
from pydantic import ValidationError

from schemas import ArticleDraft, Category, DraftSnapshot, Identity


class TestArticleDraft:
    """Tests for ArticleDraft model."""

    def test_defaults(self):
        """A blank draft has the editor's starting values."""
        article = ArticleDraft()

        assert article.id is None
        assert article.title == ""
        assert article.tags == []
        assert article.published is False
        assert article.published_at is None
        assert article.is_premium is False
        assert article.premium_preview_length == 300
        assert article.ads_enabled is True
        assert article.affiliate_products_enabled is False

    def test_tags_not_shared_between_instances(self):
        first = ArticleDraft()
        first.tags.append("Budget")

        assert ArticleDraft().tags == []

    def test_ignores_unknown_columns(self, sample_article_data):
        """Row columns the editor does not own are dropped."""
        article = ArticleDraft.model_validate(sample_article_data)

        assert not hasattr(article, "views_count")
        assert article.published_at == datetime(2026, 1, 15, 14, 0, tzinfo=timezone.utc)

    def test_rejects_wrong_types(self):
        with pytest.raises(ValidationError):
            ArticleDraft.model_validate({"tags": "Budget"})


class TestArticleDraftToRow:
    """Tests for ArticleDraft.to_row()."""

    def test_drops_local_only_fields(self, sample_article):
        sample_article.image_file = Path("/tmp/lead.jpg")

        row = sample_article.to_row()

        assert "id" not in row
        assert "image_file" not in row
        assert row["slug"] == "city-council-approves-budget"

    def test_row_is_json_ready(self, sample_article):
        row = sample_article.to_row()

        assert json.loads(json.dumps(row)) == row
        assert row["published_at"] == "2026-01-15T14:00:00Z"

    def test_exclude(self, sample_article):
        row = sample_article.to_row(exclude={"created_at", "author"})

        assert "created_at" not in row
        assert "author" not in row
        assert "author_id" in row

    def test_include(self, sample_article):
        row = sample_article.to_row(include={"title", "id"})

        assert row == {"title": "City Council Approves Budget"}


class TestCategory:
    """Tests for Category model."""

    def test_extra_columns_ignored(self):
        category = Category.model_validate({"id": "cat-news", "name": "News", "slug": "news"})

        assert category == Category(id="cat-news", name="News")


class TestIdentity:
    """Tests for Identity model."""

    def test_display_name_prefers_full_name(self):
        user = Identity(
            id="user-1",
            email="ada@example.com",
            user_metadata={"full_name": "Ada Editor", "name": "ada"},
        )

        assert user.display_name == "Ada Editor"

    def test_display_name_falls_back_to_name(self):
        user = Identity(id="user-1", user_metadata={"name": "ada"})

        assert user.display_name == "ada"

    def test_display_name_falls_back_to_email_then_id(self):
        assert Identity(id="user-1", email="ada@example.com").display_name == "ada@example.com"
        assert Identity(id="user-1").display_name == "user-1"


class TestDraftSnapshot:
    """Tests for DraftSnapshot model."""

    def test_age(self):
        snapshot = DraftSnapshot(data=ArticleDraft(title="x"), timestamp=1_000)

        assert snapshot.age_ms(61_000) == 60_000

    def test_json_round_trip(self, sample_article):
        snapshot = DraftSnapshot(data=sample_article, timestamp=1767225600000)

        loaded = DraftSnapshot.model_validate_json(snapshot.model_dump_json())

        assert loaded == snapshot
