"""In-memory editing of a single article."""

import logging
from pathlib import Path
from typing import Callable, Iterable

from newsdesk.drafts import draft_key, load_snapshot
from newsdesk.interfaces import DraftStore
from newsdesk.slugs import normalize_slug
from schemas import ArticleDraft

logger = logging.getLogger(__name__)

# Fields the editor may change directly; lifecycle fields belong to the
# publish controller.
EDITABLE_FIELDS = {
    "title",
    "slug",
    "excerpt",
    "content",
    "image_url",
    "category_id",
    "tags",
    "meta_title",
    "meta_description",
    "is_premium",
    "premium_preview_length",
    "ads_enabled",
    "affiliate_products_enabled",
}


def normalize_tags(tags: Iterable[str]) -> list[str]:
    """Trim, drop empties and de-duplicate, keeping first-seen order."""
    seen: list[str] = []
    for tag in tags:
        tag = tag.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


class EditingSession:
    """Owns the mutable draft for one editing session.

    Every change bumps ``revision`` and notifies listeners (the autosave
    scheduler). While the slug is unlocked, title changes re-derive it.

    Attributes:
        draft: The article being edited
        revision: Count of edits applied so far
        slug_locked: True once the slug was edited by hand or persisted
    """

    def __init__(self, article: ArticleDraft | None = None):
        self.draft = article.model_copy(deep=True) if article else ArticleDraft()
        self.revision = 0
        self.slug_locked = bool(self.draft.slug)
        self._listeners: list[Callable[[], None]] = []

    def __repr__(self) -> str:
        return f"EditingSession({self.key}, revision={self.revision})"

    @property
    def key(self) -> str:
        return draft_key(self.draft.id)

    def on_change(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    def _changed(self) -> None:
        self.revision += 1
        for listener in self._listeners:
            listener()

    def edit(self, **changes) -> None:
        """Apply field changes to the draft.

        Raises:
            ValueError: If a field is not editable
        """
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"not editable: {', '.join(sorted(unknown))}")

        if "slug" in changes:
            self.slug_locked = True

        for name, value in changes.items():
            setattr(self.draft, name, value)

        if "title" in changes and not self.slug_locked:
            self.draft.slug = normalize_slug(self.draft.title)

        self._changed()

    def add_tag(self, text: str) -> bool:
        tag = text.strip()
        if not tag or tag in self.draft.tags:
            return False
        self.draft.tags = [*self.draft.tags, tag]
        self._changed()
        return True

    def remove_tag(self, tag: str) -> bool:
        if tag not in self.draft.tags:
            return False
        self.draft.tags = [t for t in self.draft.tags if t != tag]
        self._changed()
        return True

    def stage_image(self, path: Path) -> None:
        """Hold a local image for upload on the next manual save."""
        self.draft.image_file = Path(path)
        self._changed()

    def clear_image(self) -> None:
        self.draft.image_file = None
        self.draft.image_url = None
        self._changed()

    def restore(self, store: DraftStore, now: int | None = None) -> bool:
        """Adopt the live local snapshot for this article, if there is one."""
        snapshot = load_snapshot(store, self.key, now)
        if snapshot is None:
            return False

        logger.info(f"Restoring local draft {self.key}")
        data = snapshot.data
        self.draft = data
        self.slug_locked = bool(data.id) or (
            bool(data.slug) and data.slug != normalize_slug(data.title)
        )
        self._changed()
        return True

    def mark_persisted(self, saved: ArticleDraft) -> None:
        """Adopt the fields the publish controller wrote remotely."""
        for name in (
            "id",
            "slug",
            "tags",
            "category_id",
            "image_url",
            "image_file",
            "published",
            "published_at",
            "created_at",
            "updated_at",
            "author",
            "author_id",
        ):
            setattr(self.draft, name, getattr(saved, name))
        self.slug_locked = True
