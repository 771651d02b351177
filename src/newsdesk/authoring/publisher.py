"""Manual save and publish of the article being edited.

``PublishController.submit`` runs the whole sequence with autosave suspended:

1. suspend autosave and back the draft up locally
2. resolve the signed-in identity
3. upload a staged image
4. normalize tags and resolve the category
5. normalize the slug
6. validate
7. reject a slug owned by another article
8. require a category
9. stamp publication state
10. insert or update the row
11. clear the local draft, reset autosave, invalidate listings
12. resume autosave

Steps 2-8 never write remotely. Every failure ends as a ``PublishOutcome``
carrying the error; nothing is raised to the caller.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Literal

from newsdesk.clients.exceptions import ClientError
from newsdesk.drafts import draft_key, take_snapshot
from newsdesk.errors import (
    AuthenticationRequiredError,
    AuthoringError,
    DuplicateSlugError,
    RemoteWriteError,
    UploadError,
    ValidationError,
)
from newsdesk.interfaces import ArticleRepository, Authenticator, DraftStore, ObjectStorage
from newsdesk.slugs import normalize_slug
from newsdesk.validation import MISSING_CATEGORY, validate_article
from schemas import ArticleDraft, Identity

from .autosave import AutosaveScheduler
from .cache import ARTICLE_LIST, ARTICLE_PAGES, InvalidationBus
from .session import EditingSession, normalize_tags

logger = logging.getLogger(__name__)

SIGN_IN_PATH = "/auth"
ARTICLES_ADMIN_PATH = "/admin/articles"

# Columns fixed at insert time and never rewritten by an update.
INSERT_ONLY_FIELDS = {"created_at", "author", "author_id"}


@dataclass
class Notification:
    """A user-facing message (toast) about a save."""

    title: str
    description: str
    level: Literal["info", "error"] = "info"


@dataclass
class PublishOutcome:
    """Result of one submit.

    Attributes:
        ok: True when the row was written
        article_id: Row id after a successful write
        published: Whether the article is now public
        error: The failure, when ok is False
        redirect_to: Where the caller should navigate next, if anywhere
    """

    ok: bool
    article_id: str | None = None
    published: bool = False
    error: AuthoringError | None = None
    redirect_to: str | None = None


def log_notification(notification: Notification) -> None:
    level = logging.ERROR if notification.level == "error" else logging.INFO
    logger.log(level, f"{notification.title}: {notification.description}")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_candidate(article: ArticleDraft) -> ArticleDraft:
    """Copy of ``article`` with tags and slug normalized the way a save does."""
    return article.model_copy(
        update={
            "tags": normalize_tags(article.tags),
            "slug": normalize_slug(article.slug or article.title),
        }
    )


def stamp_publication(
    article: ArticleDraft, draft: bool, now: datetime
) -> ArticleDraft:
    """Set publication state for a save.

    A draft save always leaves the article unpublished with no publication
    time. Publishing keeps an existing publication time and stamps ``now``
    otherwise. ``updated_at`` is always ``now``.
    """
    if draft:
        published, published_at = False, None
    else:
        published = True
        published_at = article.published_at if article.published and article.published_at else now

    return article.model_copy(
        update={"published": published, "published_at": published_at, "updated_at": now}
    )


class PublishController:
    """Runs explicit draft saves and publishes for one editing session."""

    def __init__(
        self,
        session: EditingSession,
        scheduler: AutosaveScheduler,
        store: DraftStore,
        repository: ArticleRepository,
        authenticator: Authenticator,
        storage: ObjectStorage | None = None,
        invalidation: InvalidationBus | None = None,
        notify: Callable[[Notification], None] = log_notification,
        on_saved: Callable[[PublishOutcome], None] | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._session = session
        self._scheduler = scheduler
        self._store = store
        self._repository = repository
        self._authenticator = authenticator
        self._storage = storage
        self._invalidation = invalidation
        self._notify = notify
        self._on_saved = on_saved
        self._clock = clock
        self._in_progress = False

    @property
    def in_progress(self) -> bool:
        return self._in_progress

    async def submit(self, draft: bool = False) -> PublishOutcome:
        """Save the current draft, publishing it unless ``draft`` is set."""
        if self._in_progress:
            return PublishOutcome(ok=False, error=AuthoringError("A save is already in progress"))

        self._in_progress = True
        try:
            await self._scheduler.suspend()
            outcome = await self._run(draft)
        except AuthoringError as e:
            logger.warning(f"Save of {self._session.key} failed: {e.message}")
            outcome = PublishOutcome(
                ok=False,
                error=e,
                redirect_to=getattr(e, "redirect_to", None),
            )
        except Exception as e:
            logger.exception(f"Unexpected error saving {self._session.key}")
            outcome = PublishOutcome(ok=False, error=AuthoringError(str(e)))
        finally:
            self._in_progress = False
            self._scheduler.resume()

        if outcome.ok:
            if self._on_saved is not None:
                self._on_saved(outcome)
        else:
            self._notify(self._failure_notification(outcome.error))
        return outcome

    async def _run(self, draft: bool) -> PublishOutcome:
        session = self._session
        key = session.key
        revision = session.revision
        is_new = session.draft.id is None

        self._back_up(key)
        user = await self.resolve_identity()
        await self.upload_staged_image()

        candidate = normalize_candidate(session.draft)
        candidate.category_id = await self.resolve_category(candidate.category_id)
        slug = candidate.slug

        validate_article(candidate)
        await self.ensure_slug_available(slug, candidate.id)
        if not candidate.category_id:
            raise ValidationError(MISSING_CATEGORY, field="category_id")

        now = self._clock()
        record = stamp_publication(candidate, draft, now)
        if is_new:
            record = record.model_copy(
                update={"created_at": now, "author": user.display_name, "author_id": user.id}
            )
        article_id = await self._write(record)
        record = record.model_copy(update={"id": article_id})

        session.mark_persisted(record)
        self._discard_drafts(key, draft_key(article_id))
        self._scheduler.mark_clean(revision)
        if self._invalidation is not None:
            self._invalidation.invalidate(ARTICLE_LIST, ARTICLE_PAGES)

        self._notify(Notification(
            title="Article Created" if is_new else "Article Updated",
            description=f"Article {'saved as draft' if draft else 'published'} successfully.",
        ))
        logger.info(f"{'Saved draft' if draft else 'Published'} article {article_id} ({slug})")
        return PublishOutcome(
            ok=True,
            article_id=article_id,
            published=record.published,
            redirect_to=ARTICLES_ADMIN_PATH,
        )

    def _back_up(self, key: str) -> None:
        """Write the local snapshot so the draft survives any failure below."""
        try:
            self._store.set(key, take_snapshot(self._session.draft))
        except OSError as e:
            logger.warning(f"Could not back up draft {key} before saving: {e}")

    def _discard_drafts(self, *keys: str) -> None:
        """Remove local snapshots once the row is written; failures only log."""
        for key in dict.fromkeys(keys):
            try:
                self._store.remove(key)
            except OSError as e:
                logger.warning(f"Could not remove local draft {key} after saving: {e}")

    async def resolve_identity(self) -> Identity:
        """Return the acting user.

        Raises:
            AuthenticationRequiredError: If nobody is signed in
        """
        try:
            user = await self._authenticator.get_current_user()
        except ClientError as e:
            logger.warning(f"Could not resolve current user: {e.message}")
            user = None
        if user is None:
            raise AuthenticationRequiredError(redirect_to=SIGN_IN_PATH)
        return user

    async def upload_staged_image(self) -> None:
        """Upload the staged image and adopt its URL.

        Raises:
            UploadError: If there is no storage or the upload fails
        """
        image_file = self._session.draft.image_file
        if image_file is None:
            return
        if self._storage is None:
            raise UploadError("Image upload is not configured")

        try:
            url = await self._storage.upload(image_file)
        except (ClientError, OSError) as e:
            raise UploadError(f"Image upload failed: {e}") from e

        self._session.draft.image_url = url
        self._session.draft.image_file = None

    async def resolve_category(self, category_id: str | None) -> str | None:
        """Return the chosen category, else the first available one."""
        if category_id:
            return category_id

        try:
            categories = await self._repository.get_categories()
        except ClientError as e:
            logger.warning(f"Could not load categories: {e.message}")
            return None

        if not categories:
            return None
        logger.debug(f"No category chosen, defaulting to {categories[0].name}")
        return categories[0].id

    async def ensure_slug_available(self, slug: str, article_id: str | None) -> None:
        """Reject a slug owned by an article other than ``article_id``.

        Raises:
            DuplicateSlugError: If another article owns the slug
        """
        try:
            owner = await self._repository.find_id_by_slug(slug, exclude_id=article_id)
        except ClientError as e:
            logger.warning(f"Slug lookup for {slug} failed: {e.message}")
            return
        if owner is not None:
            raise DuplicateSlugError(slug)

    async def _write(self, record: ArticleDraft) -> str:
        """Insert or update the row.

        Raises:
            RemoteWriteError: If the backend call fails
        """
        try:
            if record.id:
                await self._repository.update(record.id, record.to_row(exclude=INSERT_ONLY_FIELDS))
                return record.id

            return await self._repository.insert(record.to_row())
        except ClientError as e:
            raise RemoteWriteError(e.message, hint=getattr(e, "hint", None)) from e

    def _failure_notification(self, error: AuthoringError) -> Notification:
        description = error.message
        hint = getattr(error, "hint", None)
        if hint:
            description = f"{description} ({hint})"
        return Notification(title="Error", description=description, level="error")
