"""A queue for many producers and a single consumer."""

from __future__ import annotations

from collections import deque
from typing import Generic, TypeVar

T = TypeVar("T")


class MpscQueue(Generic[T]):
    """First-in first-out queue safe for concurrent producers.

    :meth:`enqueue` may be called from any thread; :meth:`dequeue` is meant
    to be called from one consumer thread.
    """

    def __init__(self) -> None:
        self._items: deque[T] = deque()

    def enqueue(self, item: T) -> None:
        """Put an item at the end of the queue."""
        self._items.append(item)

    def dequeue(self) -> T:
        """Remove and return the oldest item.

        Raises :class:`IndexError` when the queue is empty.
        """
        try:
            return self._items.popleft()
        except IndexError:
            raise IndexError("dequeue from an empty queue") from None

    def empty(self) -> bool:
        """True if there is nothing to dequeue."""
        return not self._items

    def __len__(self) -> int:
        return len(self._items)