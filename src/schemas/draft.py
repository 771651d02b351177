"""Local draft snapshot schema."""

from pydantic import BaseModel

from .article import ArticleDraft


class DraftSnapshot(BaseModel):
    """An unsent copy of an article held in the local draft store.

    Attributes:
        data: The article as it stood when the snapshot was taken
        timestamp: Capture time in epoch milliseconds
    """

    data: ArticleDraft
    timestamp: int

    def age_ms(self, now_ms: int) -> int:
        return now_ms - self.timestamp
