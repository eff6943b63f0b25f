"""A single entry of the command history."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any


@dataclass
class HistoryItem:
    """One run command with some optional additional context.

    ``id`` is the primary key, unique across one history; more recent items
    have higher ids than older ones. ``session_id`` identifies the shell
    session the command was run in.
    """

    command_line: str
    id: int | None = None
    start_timestamp: datetime | None = None
    session_id: int | None = None
    hostname: str | None = None
    cwd: str | None = None
    duration: timedelta | None = None
    exit_status: int | None = None
    more_info: Any = None

    @classmethod
    def from_command_line(cls, cmd: str) -> HistoryItem:
        """Create an item from the command line alone, everything else unset."""
        return cls(command_line=str(cmd))