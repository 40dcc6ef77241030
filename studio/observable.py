"""Minimal publish/subscribe base for editor state objects."""

import logging
from typing import Callable, List

logger = logging.getLogger(__name__)


class Observable:
    """
    Base class for state holders that announce their changes.

    Subscribers are called synchronously, in registration order, with the
    observable itself as the only argument. A failing subscriber is logged
    and does not prevent the others from running.
    """

    def __init__(self) -> None:
        self._subscribers: List[Callable] = []

    def subscribe(self, callback: Callable) -> Callable[[], None]:
        """Register a callback. Returns a function that removes it again."""
        self._subscribers.append(callback)
        return lambda: self.unsubscribe(callback)

    def unsubscribe(self, callback: Callable) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            try:
                callback(self)
            except Exception as e:
                logger.error(f"Error in subscriber of {type(self).__name__}: {e}")
