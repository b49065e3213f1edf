"""A bounded pool that runs each submitted task on its own thread."""

from __future__ import annotations

import threading
from typing import Any, Callable


class PoolBusy(Exception):
    """Raised by ``try_submit`` when every slot of the pool is taken."""


class TaskStartError(Exception):
    """Raised when the thread for a task could not be started."""


class ThreadPool:
    """Runs tasks concurrently, never more than ``max_threads`` at once.

    Threads are not created up front: each task gets a fresh thread, and a
    slot is handed back as soon as the task returns.
    """

    def __init__(self, max_threads: int) -> None:
        if max_threads < 1:
            raise ValueError("max_threads must be at least 1")
        self.max_threads = max_threads
        self._slots = threading.BoundedSemaphore(max_threads)
        self._idle = threading.Condition()
        self._active = 0
        self._closed = False

    @property
    def active(self) -> int:
        """Number of tasks currently running."""
        with self._idle:
            return self._active

    def submit(self, fn: Callable[..., Any], *args: Any) -> None:
        """Start ``fn(*args)``, waiting for a free slot if the pool is full."""
        self._ensure_open()
        self._slots.acquire()
        self._start(fn, args)

    def try_submit(self, fn: Callable[..., Any], *args: Any) -> None:
        """Start ``fn(*args)`` at once, or raise ``PoolBusy`` if the pool is full."""
        self._ensure_open()
        if not self._slots.acquire(blocking=False):
            raise PoolBusy(f"all {self.max_threads} threads are in use")
        self._start(fn, args)

    def join(self) -> None:
        """Block until every submitted task has finished."""
        with self._idle:
            self._idle.wait_for(lambda: self._active == 0)

    def close(self) -> None:
        """Wait for the running tasks and refuse any further submissions."""
        self.join()
        self._closed = True

    def __enter__(self) -> ThreadPool:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("thread pool is closed")

    def _start(self, fn: Callable[..., Any], args: tuple[Any, ...]) -> None:
        with self._idle:
            self._active += 1
        thread = threading.Thread(target=self._run, args=(fn, args), daemon=True)
        try:
            thread.start()
        except RuntimeError as exc:
            self._finish()
            raise TaskStartError("could not start the task thread") from exc

    def _run(self, fn: Callable[..., Any], args: tuple[Any, ...]) -> None:
        try:
            fn(*args)
        finally:
            self._finish()

    def _finish(self) -> None:
        with self._idle:
            self._active -= 1
            if self._active == 0:
                self._idle.notify_all()
        self._slots.release()