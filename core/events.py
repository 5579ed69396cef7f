# core/events.py

"""
Change notification for gradebook collections.

The `Gradebook` owns a `ChangeNotifier` and calls `notify()` once per affected collection after
each committed mutation. Front ends subscribe to refresh whatever view depends on that collection.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum


class Collection(str, Enum):
    STUDENTS = "students"
    WEIGHTS = "weights"
    GRADES = "grades"


Subscriber = Callable[[Collection], None]


class ChangeNotifier:
    """
    A synchronous publisher of collection change events.

    Notes:
        - Subscribers are called in subscription order, on the caller's control flow.
        - Subscribing the same callback twice delivers each event to it twice.
    """

    def __init__(self):
        self._subscribers: list[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Registers a callback for change events.

        Args:
            callback (Subscriber): Called with the `Collection` that changed.

        Returns:
            A function that removes this subscription. Calling it more than once is harmless.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def notify(self, collection: Collection) -> None:
        for callback in list(self._subscribers):
            callback(collection)
