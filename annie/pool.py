"""A wait group that limits how many tasks run at once."""

from __future__ import annotations

import threading

_UNLIMITED = 2**31 - 1


class WaitGroupPool:
    """Counts running tasks, blocking new ones once the size is reached."""

    def __init__(self, size: int = 0) -> None:
        if size <= 0:
            size = _UNLIMITED
        self._slots = threading.Semaphore(size)
        self._cond = threading.Condition()
        self._count = 0

    def add(self) -> None:
        """Take a slot, blocking while the pool is full, and count one task."""
        self._slots.acquire()
        with self._cond:
            self._count += 1

    def done(self) -> None:
        """Mark one task finished and free its slot."""
        with self._cond:
            if self._count <= 0:
                raise ValueError("negative WaitGroupPool counter")
            self._count -= 1
            if self._count == 0:
                self._cond.notify_all()
        self._slots.release()

    def wait(self) -> None:
        """Block until every added task is done."""
        with self._cond:
            self._cond.wait_for(lambda: self._count == 0)