"""A thread-safe queue of messages to print while a line is being edited."""

from __future__ import annotations

import queue
from typing import Generic, TypeVar

T = TypeVar("T")

EXTERNAL_PRINTER_DEFAULT_CAPACITY = 20


class ExternalPrinter(Generic[T]):
    """Collects lines from other threads to be printed above the edited line.

    At most ``max_cap`` lines are held; :meth:`print` blocks while it is full.
    """

    def __init__(self, max_cap: int = EXTERNAL_PRINTER_DEFAULT_CAPACITY) -> None:
        if max_cap < 1:
            raise ValueError("max_cap must be at least 1")
        self.max_cap = max_cap
        self._queue: queue.Queue[T] = queue.Queue(maxsize=max_cap)

    def print(self, line: T) -> None:
        """Queue a line, blocking while the printer is full."""
        self._queue.put(line)

    def get_line(self) -> T | None:
        """Return the oldest queued line, or None if there is none; never blocks."""
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None