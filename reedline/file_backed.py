"""History kept in memory and optionally synchronised with a plain text file."""

from __future__ import annotations

import os
import sys
from collections import deque
from itertools import islice
from pathlib import Path
from typing import Callable, Iterator

import portalocker

from .history_base import (
    History,
    HistoryFeatureUnsupported,
    OtherHistoryError,
    SearchDirection,
    SearchQuery,
)
from .history_item import HistoryItem

HISTORY_SIZE = 1000
"""Capacity of a ``FileBackedHistory`` created without an explicit one."""

NEWLINE_ESCAPE = "<\\n>"
"""What a newline inside an entry is written as in the history file."""

_NAME = "FileBackedHistory"


def _encode_entry(entry: str) -> str:
    return entry.replace("\n", NEWLINE_ESCAPE)


def _decode_entry(line: str) -> str:
    return line.replace(NEWLINE_ESCAPE, "\n")


def _read_entries(data: bytes) -> list[str]:
    lines = data.decode("utf-8").split("\n")
    if lines[-1] == "":
        lines.pop()
    return [_decode_entry(line[:-1] if line.endswith("\r") else line) for line in lines]


def _construct_entry(item_id: int | None, command_line: str) -> HistoryItem:
    # This history keeps nothing but the command line.
    return HistoryItem(command_line=command_line, id=item_id)


class FileBackedHistory(History):
    """History that remembers at most ``capacity`` command lines.

    Optionally associated with a newline separated history file through
    :meth:`with_file`; unwritten entries are then appended to the file on
    :meth:`sync` and on :meth:`close`. Newlines inside entries are escaped.
    """

    def __init__(self, capacity: int = HISTORY_SIZE) -> None:
        if capacity < 0:
            raise ValueError("History capacity must not be negative")
        if capacity >= sys.maxsize:
            raise OtherHistoryError("History capacity too large to be addressed safely")
        self._capacity = capacity
        self._entries: deque[str] = deque()
        self._file: Path | None = None
        self._len_on_disk = 0
        self._session: int | None = None
        self._closed = False

    @classmethod
    def with_file(cls, capacity: int, file: str | os.PathLike[str]) -> FileBackedHistory:
        """Create a history synchronised with ``file``.

        The file is read if it exists, otherwise it is created together with
        any missing parent directories.
        """
        history = cls(capacity)
        path = Path(file)
        path.parent.mkdir(parents=True, exist_ok=True)
        history._file = path
        try:
            history.sync()
        except BaseException:
            history._closed = True
            raise
        return history

    def save(self, item: HistoryItem) -> HistoryItem:
        """Append the command line unless it is empty or repeats the last one."""
        entry = item.command_line
        entry_id: int | None = None
        is_new = not self._entries or self._entries[-1] != entry
        if is_new and entry and self._capacity > 0:
            if len(self._entries) == self._capacity:
                self._entries.popleft()
                self._len_on_disk = max(0, self._len_on_disk - 1)
            self._entries.append(entry)
            entry_id = len(self._entries) - 1
        return _construct_entry(entry_id, entry)

    def load(self, item_id: int) -> HistoryItem:
        if not 0 <= item_id < len(self._entries):
            raise OtherHistoryError("Item does not exist")
        return _construct_entry(item_id, self._entries[item_id])

    def count(self, query: SearchQuery) -> int:
        return len(self.search(query))

    def search(self, query: SearchQuery) -> list[HistoryItem]:
        if query.start_time is not None or query.end_time is not None:
            raise HistoryFeatureUnsupported(_NAME, "filtering by time")
        flt = query.filter
        extra = (flt.hostname, flt.cwd_exact, flt.cwd_prefix, flt.exit_successful)
        if any(value is not None for value in extra):
            raise HistoryFeatureUnsupported(_NAME, "filtering by extra info")

        if query.direction is SearchDirection.BACKWARD:
            lower, upper = query.end_id, query.start_id
        else:
            lower, upper = query.start_id, query.end_id

        entries = list(self._entries)
        last = len(entries) - 1
        # Both bounds are exclusive.
        min_id = lower + 1 if lower is not None else 0
        max_id = upper - 1 if upper is not None else last
        if max_id < 0 or min_id < 0 or min_id > last or max_id < min_id:
            return []

        intrinsic_limit = max_id - min_id + 1
        limit = intrinsic_limit if query.limit is None else min(intrinsic_limit, query.limit)
        indices: Iterator[int] | range = range(min_id, min(max_id, last) + 1)
        if query.direction is SearchDirection.BACKWARD:
            indices = reversed(indices)

        def matching() -> Iterator[HistoryItem]:
            for idx in indices:
                cmd = entries[idx]
                if flt.command_line is not None and not flt.command_line.matches(cmd):
                    continue
                if flt.not_command_line is not None and cmd == flt.not_command_line:
                    continue
                yield _construct_entry(idx, cmd)

        return list(islice(matching(), max(limit, 0)))

    def update(
        self, item_id: int, updater: Callable[[HistoryItem], HistoryItem]
    ) -> None:
        raise HistoryFeatureUnsupported(_NAME, "updating entries")

    def clear(self) -> None:
        """Forget all entries and remove the history file, if any."""
        self._entries.clear()
        self._len_on_disk = 0
        if self._file is not None:
            os.remove(self._file)

    def delete(self, item_id: int) -> None:
        raise HistoryFeatureUnsupported(_NAME, "removing entries")

    def sync(self) -> None:
        """Write unwritten entries to the file, merging with what others wrote.

        If the file would exceed the capacity, its oldest entries are dropped.
        """
        if self._file is None:
            return
        own = list(self._entries)[self._len_on_disk:]
        self._file.parent.mkdir(parents=True, exist_ok=True)

        fd = os.open(self._file, os.O_RDWR | os.O_CREAT, 0o644)
        with os.fdopen(fd, "r+b") as handle:
            portalocker.lock(handle, portalocker.LOCK_EX)
            try:
                from_file = _read_entries(handle.read())
                truncate = len(from_file) + len(own) > self._capacity
                if truncate:
                    keep = max(0, self._capacity - len(own))
                    foreign = from_file[len(from_file) - keep:]
                    handle.seek(0)
                    to_write = foreign + own
                else:
                    foreign = from_file
                    handle.seek(0, os.SEEK_END)
                    to_write = own
                handle.write(
                    "".join(_encode_entry(line) + "\n" for line in to_write).encode("utf-8")
                )
                handle.flush()
                if truncate:
                    handle.truncate()
                    handle.flush()
            finally:
                portalocker.unlock(handle)

        self._entries = deque(foreign + own)
        self._len_on_disk = len(self._entries)

    def session(self) -> int | None:
        return self._session

    def close(self) -> None:
        """Write remaining entries to the file; later calls do nothing."""
        if not self._closed:
            self._closed = True
            self.sync()

    def __enter__(self) -> FileBackedHistory:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __del__(self) -> None:
        if not getattr(self, "_closed", True):
            try:
                self.close()
            except Exception:
                pass