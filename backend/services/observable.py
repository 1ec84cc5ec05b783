"""
Observable value holder used to bind service state to presentation layers.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, Generic, List, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Observable(Generic[T]):
    """A value plus subscribers that are notified synchronously on every set()."""

    def __init__(self, initial: T):
        self._value = initial
        self._subscribers: List[Callable[[T], None]] = []
        self._lock = threading.Lock()

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        with self._lock:
            subscribers = list(self._subscribers)
        for fn in subscribers:
            try:
                fn(value)
            except Exception:
                logger.exception("Observable subscriber %r failed", fn)

    def subscribe(self, fn: Callable[[T], None]) -> Callable[[], None]:
        """Register fn; returns a callable that removes it again."""
        with self._lock:
            self._subscribers.append(fn)

        def unsubscribe() -> None:
            with self._lock:
                if fn in self._subscribers:
                    self._subscribers.remove(fn)

        return unsubscribe
