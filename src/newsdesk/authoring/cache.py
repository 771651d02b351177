"""Cache invalidation signals emitted after articles change."""

import logging
from collections import defaultdict
from typing import Callable

logger = logging.getLogger(__name__)

ARTICLE_LIST = "articles"
ARTICLE_PAGES = "articles-paginated"


class InvalidationBus:
    """Fan-out of cache invalidation to views holding article listings.

    Views subscribe a callback per namespace; ``invalidate`` calls every
    subscriber of each named namespace once.
    """

    def __init__(self):
        self._subscribers: dict[str, list[Callable[[str], None]]] = defaultdict(list)

    def subscribe(self, namespace: str, callback: Callable[[str], None]) -> Callable[[], None]:
        """Register ``callback`` and return a function that unregisters it."""
        self._subscribers[namespace].append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers[namespace]:
                self._subscribers[namespace].remove(callback)

        return unsubscribe

    def invalidate(self, *namespaces: str) -> None:
        for namespace in namespaces:
            for callback in list(self._subscribers.get(namespace, [])):
                try:
                    callback(namespace)
                except Exception as e:
                    logger.error(f"Invalidation subscriber for {namespace} failed: {e}")
            logger.debug(f"Invalidated {namespace}")
