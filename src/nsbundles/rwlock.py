"""Readers-writer lock for the MessageSource bundle cache.

Allows many concurrent cache reads while serializing inserts and clears.
Waiting writers block new readers, so a steady stream of lookups cannot
starve a cache insert.

Python 3.13+.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

__all__ = ["RWLock"]


class RWLock:
    """Readers-writer lock with writer preference.

    Neither side is reentrant: a thread holding the write lock must not
    acquire either lock again, and a reader must release before writing.

    Example:
        >>> lock = RWLock()
        >>> with lock.read():
        ...     pass
        >>> with lock.write():
        ...     pass
    """

    __slots__ = ("_active_readers", "_active_writer", "_condition", "_waiting_writers")

    def __init__(self) -> None:
        self._condition = threading.Condition(threading.Lock())
        self._active_readers = 0
        self._active_writer: int | None = None
        self._waiting_writers = 0

    @contextmanager
    def read(self) -> Generator[None]:
        """Hold the lock shared for the duration of the block."""
        with self._condition:
            while self._active_writer is not None or self._waiting_writers > 0:
                self._condition.wait()
            self._active_readers += 1
        try:
            yield
        finally:
            with self._condition:
                self._active_readers -= 1
                if self._active_readers == 0:
                    self._condition.notify_all()

    @contextmanager
    def write(self) -> Generator[None]:
        """Hold the lock exclusively for the duration of the block.

        Raises:
            RuntimeError: If the calling thread already holds the write lock
        """
        current_thread_id = threading.get_ident()
        with self._condition:
            if self._active_writer == current_thread_id:
                msg = "Cannot acquire write lock: already holding write lock"
                raise RuntimeError(msg)
            self._waiting_writers += 1
            try:
                while self._active_readers > 0 or self._active_writer is not None:
                    self._condition.wait()
                self._active_writer = current_thread_id
            finally:
                self._waiting_writers -= 1
        try:
            yield
        finally:
            with self._condition:
                self._active_writer = None
                self._condition.notify_all()

    @property
    def reader_count(self) -> int:
        """Number of readers currently holding the lock."""
        with self._condition:
            return self._active_readers

    @property
    def writer_active(self) -> bool:
        """True if a thread currently holds the write lock."""
        with self._condition:
            return self._active_writer is not None
