"""Entry point for form handlers editing one article."""

import logging
from pathlib import Path
from typing import Callable

from newsdesk.interfaces import ArticleRepository, Authenticator, DraftStore, ObjectStorage
from schemas import ArticleDraft

from .autosave import AUTOSAVE_DELAY_SECONDS, AutosaveScheduler, AutosaveState
from .cache import InvalidationBus
from .publisher import Notification, PublishController, PublishOutcome, log_notification
from .session import EditingSession

logger = logging.getLogger(__name__)


class ArticleEditor:
    """Wires an editing session to its autosave scheduler and publish controller.

    Example:
        editor = await ArticleEditor.open(repository, auth, storage, drafts)
        editor.edit(title="My First Post", content=body, category_id=news_id)
        outcome = await editor.publish()
        editor.close()
    """

    def __init__(
        self,
        repository: ArticleRepository,
        authenticator: Authenticator,
        storage: ObjectStorage | None,
        store: DraftStore,
        article: ArticleDraft | None = None,
        invalidation: InvalidationBus | None = None,
        notify: Callable[[Notification], None] = log_notification,
        on_saved: Callable[[PublishOutcome], None] | None = None,
        autosave_delay: float = AUTOSAVE_DELAY_SECONDS,
    ):
        self.session = EditingSession(article)
        self.scheduler = AutosaveScheduler(self.session, store, repository, delay=autosave_delay)
        self.controller = PublishController(
            self.session,
            self.scheduler,
            store,
            repository,
            authenticator,
            storage=storage,
            invalidation=invalidation,
            notify=notify,
            on_saved=on_saved,
        )

    @classmethod
    async def open(
        cls,
        repository: ArticleRepository,
        authenticator: Authenticator,
        storage: ObjectStorage | None,
        store: DraftStore,
        article_id: str | None = None,
        restore: bool = True,
        **kwargs,
    ) -> "ArticleEditor":
        """Start editing an existing article, or a new one when ``article_id`` is None.

        With ``restore`` set, a live local snapshot replaces the loaded copy.
        """
        article = await repository.fetch(article_id) if article_id else None
        editor = cls(repository, authenticator, storage, store, article=article, **kwargs)
        if restore:
            editor.session.restore(store)
        return editor

    @property
    def article(self) -> ArticleDraft:
        return self.session.draft

    @property
    def autosave_state(self) -> AutosaveState:
        return self.scheduler.state

    def edit(self, **changes) -> None:
        self.session.edit(**changes)

    def add_tag(self, text: str) -> bool:
        return self.session.add_tag(text)

    def remove_tag(self, tag: str) -> bool:
        return self.session.remove_tag(tag)

    def stage_image(self, path: Path) -> None:
        self.session.stage_image(path)

    async def save_draft(self) -> PublishOutcome:
        return await self.controller.submit(draft=True)

    async def publish(self) -> PublishOutcome:
        return await self.controller.submit(draft=False)

    def close(self) -> None:
        self.scheduler.close()
