from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ObservableState(Generic[T]):
    """
    A value cell that pushes every new value to its subscribers.

    One owner writes with ``set``; any number of readers either poll
    ``value`` or ``subscribe``. Values are replaced wholesale, never
    mutated in place, so readers always see a complete snapshot.
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._subscribers: list[Callable[[T], None]] = []

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        for callback in list(self._subscribers):
            try:
                callback(value)
            except Exception:  # noqa: BLE001
                logger.exception("State subscriber %r failed", callback)

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """Register ``callback`` and return a function that unregisters it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            self._subscribers = [cb for cb in self._subscribers if cb is not callback]

        return unsubscribe
