"""Schema definitions for the newsdesk authoring pipeline."""

from .article import ArticleDraft, Category, Identity
from .draft import DraftSnapshot

__all__ = [
    "ArticleDraft",
    "Category",
    "DraftSnapshot",
    "Identity",
]
