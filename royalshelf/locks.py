"""
Reader/writer lock used by the popular cache
"""

import threading
from contextlib import contextmanager


class ReadWriteLock:
    """
    Many concurrent readers or one writer.

    Writers exclude readers and each other. A waiting writer blocks new
    readers so a steady stream of reads cannot starve a refresh.
    Not reentrant: do not take the read side while holding the write side.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_readers = 0
        self._waiting_writers = 0

    @contextmanager
    def read(self):
        """Hold the shared side of the lock for the duration of the block."""
        with self._cond:
            self._waiting_readers += 1
            try:
                while self._writer or self._waiting_writers:
                    self._cond.wait()
            finally:
                self._waiting_readers -= 1
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self):
        """Hold the exclusive side of the lock for the duration of the block."""
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()

    @property
    def waiting(self) -> int:
        """Threads currently blocked on either side of the lock."""
        with self._cond:
            return self._waiting_readers + self._waiting_writers
