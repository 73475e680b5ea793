"""Task queues: an abstract interface and a pool of worker threads."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections import deque
from concurrent.futures import Future
from typing import Callable, Optional

from trantil.logger import Logger, LogLevel

Task = Callable[[], object]


class TaskQueue(ABC):
    """Something that runs tasks, serially or in parallel."""

    @abstractmethod
    def run_task_in_queue(self, task: Task) -> None:
        """Queue ``task`` to be run."""

    def name(self) -> str:
        """The name of the queue."""
        return ""

    def sync_task_in_queue(self, task: Task) -> None:
        """Run ``task`` in the queue and wait until it has finished.

        An exception raised by the task is raised again here.
        """
        done: Future[None] = Future()

        def wrapper() -> None:
            try:
                task()
            except BaseException as exc:
                done.set_exception(exc)
            else:
                done.set_result(None)

        self.run_task_in_queue(wrapper)
        done.result()


class ConcurrentTaskQueue(TaskQueue):
    """A pool of worker threads taking tasks from one shared queue.

    Worker threads are named after the queue followed by their number.
    Tasks still waiting when the queue stops are not run.
    """

    def __init__(self, thread_num: int, name: str) -> None:
        if thread_num <= 0:
            raise ValueError("thread_num must be positive")
        self._name = name
        self._tasks: deque[Task] = deque()
        self._cond = threading.Condition()
        self._stop = False
        self._threads = [
            threading.Thread(target=self._queue_func, name=f"{name}{i}", daemon=True)
            for i in range(thread_num)
        ]
        for thread in self._threads:
            thread.start()

    def run_task_in_queue(self, task: Task) -> None:
        """Queue ``task`` for the next free worker."""
        with self._cond:
            self._tasks.append(task)
            self._cond.notify()

    def name(self) -> str:
        """The name of the queue."""
        return self._name

    def task_count(self) -> int:
        """Number of tasks waiting to be run."""
        with self._cond:
            return len(self._tasks)

    def stop(self) -> None:
        """Stop all worker threads and wait for them to end."""
        with self._cond:
            if self._stop:
                return
            self._stop = True
            self._cond.notify_all()
        current = threading.current_thread()
        for thread in self._threads:
            if thread is not current:
                thread.join()

    def __enter__(self) -> ConcurrentTaskQueue:
        return self

    def __exit__(self, *args: object) -> None:
        self.stop()

    def _queue_func(self) -> None:
        while not self._stop:
            task: Optional[Task] = None
            with self._cond:
                while not self._stop and not self._tasks:
                    self._cond.wait()
                if not self._tasks:
                    continue
                task = self._tasks.popleft()
            try:
                task()
            except Exception as exc:
                line = exc.__traceback__.tb_lineno if exc.__traceback__ else 0
                with Logger(__file__, line, LogLevel.ERROR) as log:
                    log.stream() << "task in queue " << self._name << " raised " << repr(exc)