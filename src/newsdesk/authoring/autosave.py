"""Debounced autosave of the article being edited.

The scheduler arms a timer on every edit; the timer fires once the draft has
been quiet for the full delay. A fire always writes the local snapshot first
and then, for articles that already exist remotely, pushes the content
fields. While the publish controller runs the scheduler is suspended: the
timer is cancelled and edits do not re-arm it.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Literal

from newsdesk.drafts import take_snapshot
from newsdesk.errors import AutosaveError
from newsdesk.interfaces import ArticleRepository, DraftStore
from schemas import ArticleDraft

from .session import EditingSession, normalize_tags

logger = logging.getLogger(__name__)

AUTOSAVE_DELAY_SECONDS = 30.0

# Content columns an autosave may overwrite on an existing row. Slug,
# category, publication state, authorship and creation time are only ever
# written by the publish controller.
AUTOSAVE_FIELDS = {
    "title",
    "excerpt",
    "content",
    "image_url",
    "tags",
    "meta_title",
    "meta_description",
}

AutosaveStatus = Literal["idle", "saving", "saved", "error"]


@dataclass
class AutosaveState:
    """Autosave status read by the editing UI.

    Attributes:
        status: Outcome of the most recent tick
        last_saved_at: When the last successful tick finished
        has_unsaved_changes: Edits exist that no tick or save has captured
        error: Message of the last failed tick
    """

    status: AutosaveStatus = "idle"
    last_saved_at: datetime | None = None
    has_unsaved_changes: bool = False
    error: str | None = None


def is_empty_shell(article: ArticleDraft) -> bool:
    return not article.title.strip() and not article.content.strip()


def autosave_record(article: ArticleDraft, now: datetime | None = None) -> dict:
    """Partial row pushed by an autosave tick."""
    record = article.to_row(include=AUTOSAVE_FIELDS)
    record["tags"] = normalize_tags(article.tags)
    record["updated_at"] = (now or datetime.now(timezone.utc)).isoformat()
    return record


class AutosaveScheduler:
    """Single owner of the autosave timer for one editing session.

    Attributes:
        state: Status shared with the UI
        delay: Quiet period in seconds before a tick fires
    """

    def __init__(
        self,
        session: EditingSession,
        store: DraftStore,
        repository: ArticleRepository | None = None,
        delay: float = AUTOSAVE_DELAY_SECONDS,
    ):
        self.state = AutosaveState()
        self.delay = delay
        self._session = session
        self._store = store
        self._repository = repository
        self._timer: asyncio.TimerHandle | None = None
        self._task: asyncio.Task | None = None
        self._suspended = False
        self._closed = False
        session.on_change(self.notify_edit)

    @property
    def armed(self) -> bool:
        return self._timer is not None

    @property
    def suspended(self) -> bool:
        return self._suspended

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    def notify_edit(self) -> None:
        """Record an edit and restart the quiet period."""
        self.state.has_unsaved_changes = True
        self.arm()

    def arm(self) -> bool:
        """(Re)start the timer; refused while suspended or closed."""
        if self._suspended or self._closed or not self.state.has_unsaved_changes:
            return False

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; autosave not armed")
            return False

        self.cancel()
        self._timer = loop.call_later(self.delay, self._fire)
        return True

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self) -> None:
        self._timer = None
        self._task = asyncio.get_running_loop().create_task(self.save_now())

    async def save_now(self) -> bool:
        """Run one autosave tick.

        Returns:
            True if the draft was captured, False if skipped or failed
        """
        if self._suspended:
            return False

        article = self._session.draft
        if is_empty_shell(article):
            logger.debug("Skipping autosave of empty draft")
            return False

        revision = self._session.revision
        key = self._session.key
        self.state.status = "saving"
        self.state.error = None

        try:
            self._store.set(key, take_snapshot(article))
        except OSError as e:
            logger.error(f"Could not write local draft {key}: {e}")
            self._record_failure(AutosaveError(f"Local draft not saved: {e}"))
            return False

        if article.id and self._repository is not None:
            try:
                await self._repository.update(article.id, autosave_record(article))
            except Exception as e:
                logger.warning(f"Autosave push for {article.id} failed: {e}")
                self._record_failure(AutosaveError(str(e)))
                return False

        logger.debug(f"Autosaved {key} at revision {revision}")
        self.state.status = "saved"
        self.state.last_saved_at = datetime.now(timezone.utc)
        self.state.has_unsaved_changes = self._session.revision != revision
        return True

    def _record_failure(self, error: AutosaveError) -> None:
        self.state.status = "error"
        self.state.error = error.message

    async def suspend(self) -> None:
        """Stop autosaving until ``resume``; waits for a tick already in flight."""
        self._suspended = True
        self.cancel()
        if self.in_flight:
            await asyncio.shield(self._task)

    def resume(self) -> None:
        """Allow arming again; the next edit starts a fresh quiet period."""
        self._suspended = False

    def mark_clean(self, revision: int) -> None:
        """Reset after a manual save that captured ``revision``."""
        self.cancel()
        self.state.status = "idle"
        self.state.error = None
        self.state.has_unsaved_changes = self._session.revision != revision

    def close(self) -> None:
        """Cancel the pending timer when the editing session ends.

        A tick already in flight is left to finish on its own.
        """
        self._closed = True
        self.cancel()
