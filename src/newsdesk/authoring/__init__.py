"""Article authoring pipeline: editing, autosave and publish."""

from .autosave import AUTOSAVE_DELAY_SECONDS, AutosaveScheduler, AutosaveState
from .cache import ARTICLE_LIST, ARTICLE_PAGES, InvalidationBus
from .editor import ArticleEditor
from .publisher import Notification, PublishController, PublishOutcome, normalize_candidate
from .session import EditingSession, normalize_tags

__all__ = [
    "ARTICLE_LIST",
    "ARTICLE_PAGES",
    "AUTOSAVE_DELAY_SECONDS",
    "ArticleEditor",
    "AutosaveScheduler",
    "AutosaveState",
    "EditingSession",
    "InvalidationBus",
    "Notification",
    "PublishController",
    "PublishOutcome",
    "normalize_candidate",
    "normalize_tags",
]
