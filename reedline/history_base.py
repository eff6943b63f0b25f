"""Queries, filters and the abstract interface shared by history backends."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Callable

from .history_item import HistoryItem


class HistoryError(Exception):
    """Base class for errors raised by a history backend."""


class HistoryFeatureUnsupported(HistoryError):
    """The history backend does not support the requested feature."""

    def __init__(self, history: str, feature: str) -> None:
        super().__init__(f"{history} does not support {feature}")
        self.history = history
        self.feature = feature


class HistoryDatabaseError(HistoryError):
    """The history database reported an error."""


class OtherHistoryError(HistoryError):
    """Any other error reported by a history backend."""


class SearchKind(enum.Enum):
    """How a command line is matched against a search string."""

    PREFIX = "prefix"
    SUBSTRING = "substring"
    EXACT = "exact"


@dataclass(frozen=True)
class CommandLineSearch:
    """A way to search for a particular command line in the history."""

    kind: SearchKind
    text: str

    @classmethod
    def prefix(cls, text: str) -> CommandLineSearch:
        """Command line starts with ``text``."""
        return cls(SearchKind.PREFIX, text)

    @classmethod
    def substring(cls, text: str) -> CommandLineSearch:
        """Command line contains ``text``."""
        return cls(SearchKind.SUBSTRING, text)

    @classmethod
    def exact(cls, text: str) -> CommandLineSearch:
        """Command line is exactly ``text``."""
        return cls(SearchKind.EXACT, text)

    def matches(self, command_line: str) -> bool:
        """Return whether ``command_line`` satisfies this search (case sensitive)."""
        if self.kind is SearchKind.PREFIX:
            return command_line.startswith(self.text)
        if self.kind is SearchKind.SUBSTRING:
            return self.text in command_line
        return command_line == self.text


class NavigationKind(enum.Enum):
    """Browsing modes for a history."""

    NORMAL = "normal"
    PREFIX_SEARCH = "prefix_search"
    SUBSTRING_SEARCH = "substring_search"


@dataclass(frozen=True)
class HistoryNavigationQuery:
    """A browsing mode together with its search text or saved buffer.

    In normal mode ``buffer`` keeps the state of manual entry from before
    browsing started.
    """

    kind: NavigationKind
    text: str = ""
    buffer: Any = None

    @classmethod
    def normal(cls, buffer: Any) -> HistoryNavigationQuery:
        """Shell-style browsing through the whole history."""
        return cls(NavigationKind.NORMAL, buffer=buffer)

    @classmethod
    def prefix_search(cls, prefix: str) -> HistoryNavigationQuery:
        """Browse entries starting with ``prefix``."""
        return cls(NavigationKind.PREFIX_SEARCH, text=prefix)

    @classmethod
    def substring_search(cls, substring: str) -> HistoryNavigationQuery:
        """Browse entries containing ``substring``."""
        return cls(NavigationKind.SUBSTRING_SEARCH, text=substring)


class SearchDirection(enum.Enum):
    """How to traverse the history when executing a query."""

    BACKWARD = "backward"
    FORWARD = "forward"


@dataclass(frozen=True)
class SearchFilter:
    """Additional filters for querying a history.

    ``not_command_line`` excludes one exact command line; it is used to skip
    the currently shown value while navigating.
    """

    command_line: CommandLineSearch | None = None
    not_command_line: str | None = None
    hostname: str | None = None
    cwd_exact: str | None = None
    cwd_prefix: str | None = None
    exit_successful: bool | None = None
    session: int | None = None

    @classmethod
    def from_text_search(
        cls, cmd: CommandLineSearch, session: int | None
    ) -> SearchFilter:
        """Filter on the command line content."""
        return replace(cls.anything(session), command_line=cmd)

    @classmethod
    def from_text_search_cwd(
        cls, cwd: str, cmd: CommandLineSearch, session: int | None
    ) -> SearchFilter:
        """Filter on the command line content and the exact working directory."""
        return replace(cls.anything(session), command_line=cmd, cwd_exact=cwd)

    @classmethod
    def anything(cls, session: int | None) -> SearchFilter:
        """Match anything within ``session``."""
        return cls(session=session)


@dataclass(frozen=True)
class SearchQuery:
    """A search in a history.

    The start and end bounds are exclusive of ``start_*`` and apply after or
    before it depending on ``direction``.
    """

    direction: SearchDirection
    start_time: datetime | None = None
    end_time: datetime | None = None
    start_id: int | None = None
    end_id: int | None = None
    limit: int | None = None
    filter: SearchFilter = SearchFilter()

    @classmethod
    def all_that_contain_rev(cls, contains: str) -> SearchQuery:
        """All entries containing ``contains``, most recent first."""
        return cls(
            direction=SearchDirection.BACKWARD,
            filter=SearchFilter.from_text_search(
                CommandLineSearch.substring(contains), None
            ),
        )

    @classmethod
    def last_with_search(cls, filter: SearchFilter) -> SearchQuery:
        """The most recent entry matching ``filter``."""
        return cls(direction=SearchDirection.BACKWARD, limit=1, filter=filter)

    @classmethod
    def last_with_prefix(cls, prefix: str, session: int | None) -> SearchQuery:
        """The most recent entry starting with ``prefix``."""
        return cls.last_with_search(
            SearchFilter.from_text_search(CommandLineSearch.prefix(prefix), session)
        )

    @classmethod
    def last_with_prefix_and_cwd(
        cls, prefix: str, cwd: str, session: int | None
    ) -> SearchQuery:
        """The most recent entry starting with ``prefix`` run in ``cwd``."""
        return cls.last_with_search(
            SearchFilter.from_text_search_cwd(
                cwd, CommandLineSearch.prefix(prefix), session
            )
        )

    @classmethod
    def everything(
        cls, direction: SearchDirection, session: int | None
    ) -> SearchQuery:
        """All entries in the given direction."""
        return cls(direction=direction, filter=SearchFilter.anything(session))


class History(ABC):
    """A history store, such as a plain text file or a database."""

    @abstractmethod
    def save(self, item: HistoryItem) -> HistoryItem:
        """Save an item; a new id is assigned when ``item.id`` is None,
        otherwise the existing entry is updated."""

    @abstractmethod
    def load(self, item_id: int) -> HistoryItem:
        """Load an item by its id."""

    @abstractmethod
    def count(self, query: SearchQuery) -> int:
        """Count the results of a query."""

    def count_all(self) -> int:
        """Return the total number of history items."""
        return self.count(SearchQuery.everything(SearchDirection.FORWARD, None))

    @abstractmethod
    def search(self, query: SearchQuery) -> list[HistoryItem]:
        """Return the results of a query."""

    @abstractmethod
    def update(
        self, item_id: int, updater: Callable[[HistoryItem], HistoryItem]
    ) -> None:
        """Replace an item by what ``updater`` makes of it."""

    @abstractmethod
    def clear(self) -> None:
        """Delete all history items."""

    @abstractmethod
    def delete(self, item_id: int) -> None:
        """Remove one item from the history."""

    @abstractmethod
    def sync(self) -> None:
        """Make sure the history is written to its storage."""

    @abstractmethod
    def session(self) -> int | None:
        """Return the history session id."""