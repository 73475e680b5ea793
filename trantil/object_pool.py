"""A pool of reusable objects."""

from __future__ import annotations

import threading
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class ObjectPool(Generic[T]):
    """Hands out idle objects, creating new ones with ``factory`` when none are idle.

    Objects given back with :meth:`release` are reused, most recently
    released first.  The pool is safe to use from several threads.
    """

    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self._idle: list[T] = []
        self._lock = threading.Lock()

    def get_object(self) -> T:
        """Take an idle object, or create one."""
        with self._lock:
            if self._idle:
                return self._idle.pop()
        return self._factory()

    def release(self, obj: T) -> None:
        """Give an object back to the pool for reuse."""
        with self._lock:
            self._idle.append(obj)

    def __len__(self) -> int:
        """Number of idle objects."""
        with self._lock:
            return len(self._idle)