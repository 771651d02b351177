"""Local draft store implementations and snapshot lifecycle helpers."""

import json
import logging
import time
from datetime import timedelta
from pathlib import Path

from schemas import ArticleDraft, DraftSnapshot

from .interfaces import DraftStore

logger: logging.Logger = logging.getLogger(__name__)

NEW_ARTICLE_KEY = "new-article"
DRAFT_TTL = timedelta(hours=24)


def now_ms() -> int:
    return int(time.time() * 1000)


def draft_key(article_id: str | None) -> str:
    """Store key for an article: its id, or the new-article sentinel."""
    return article_id or NEW_ARTICLE_KEY


class MemoryDraftStore(DraftStore):
    """Draft store held in process memory for the life of the session."""

    def __init__(self):
        self._snapshots: dict[str, DraftSnapshot] = {}

    def get(self, key: str) -> DraftSnapshot | None:
        snapshot = self._snapshots.get(key)
        return snapshot.model_copy(deep=True) if snapshot else None

    def set(self, key: str, snapshot: DraftSnapshot) -> None:
        self._snapshots[key] = snapshot.model_copy(deep=True)

    def remove(self, key: str) -> None:
        self._snapshots.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._snapshots)


class FileDraftStore(DraftStore):
    """Draft store keeping one JSON document per key in a directory.

    Attributes:
        directory: Folder holding ``<key>.json`` snapshot files
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def __repr__(self) -> str:
        return f"FileDraftStore('{self.directory}')"

    def path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> DraftSnapshot | None:
        """Load the snapshot for ``key``.

        Raises:
            ValueError: If the file is not a valid snapshot document
        """
        path = self.path(key)
        if not path.is_file():
            return None
        with path.open("r") as f:
            return DraftSnapshot.model_validate(json.load(f))

    def set(self, key: str, snapshot: DraftSnapshot) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        with self.path(key).open("w+") as f:
            json.dump(snapshot.model_dump(mode="json"), fp=f, indent=2)

    def remove(self, key: str) -> None:
        self.path(key).unlink(missing_ok=True)

    def keys(self) -> list[str]:
        if not self.directory.is_dir():
            return []
        return sorted(p.stem for p in self.directory.glob("*.json"))


def take_snapshot(article: ArticleDraft, timestamp: int | None = None) -> DraftSnapshot:
    return DraftSnapshot(
        data=article.model_copy(deep=True),
        timestamp=timestamp if timestamp is not None else now_ms(),
    )


def is_expired(snapshot: DraftSnapshot, now: int | None = None, ttl: timedelta = DRAFT_TTL) -> bool:
    now = now if now is not None else now_ms()
    return snapshot.age_ms(now) > ttl.total_seconds() * 1000


def load_snapshot(
    store: DraftStore,
    key: str,
    now: int | None = None,
    ttl: timedelta = DRAFT_TTL,
) -> DraftSnapshot | None:
    """Return the live snapshot for ``key``, discarding stale or corrupt ones.

    Expiry is checked lazily here; an expired or unreadable snapshot is
    removed from the store and reported as absent.
    """
    try:
        snapshot = store.get(key)
    except ValueError as e:
        logger.warning(f"Discarding unreadable draft {key}: {e}")
        store.remove(key)
        return None

    if snapshot is None:
        return None

    if is_expired(snapshot, now, ttl):
        logger.info(f"Discarding expired draft {key}")
        store.remove(key)
        return None

    return snapshot


def purge_expired(store: DraftStore, now: int | None = None, ttl: timedelta = DRAFT_TTL) -> list[str]:
    """Remove every expired or unreadable snapshot and return their keys."""
    removed = []
    for key in store.keys():
        if load_snapshot(store, key, now, ttl) is None:
            removed.append(key)
    return removed
