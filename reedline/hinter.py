"""Inline hints from the history, in the style of fish autosuggestions."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod

from .history_base import (
    History,
    HistoryError,
    HistoryFeatureUnsupported,
    SearchQuery,
)
from .history_item import HistoryItem
from .style import Color, Style

_NOT_RUST_WHITESPACE = frozenset("\x1c\x1d\x1e\x1f")

_LETTER = r"[^\W\d_]"
_WORD = (
    rf"\w+(?:(?:(?<={_LETTER})[:\u00b7'\u2019.](?={_LETTER})"
    rf"|(?<=\d)[,;'\u2019.](?=\d))\w+)*"
)
_EXTEND = r"[\u0300-\u036f\u200d\ufe0e\ufe0f]*"
_SEGMENT = re.compile(
    rf"\r\n|[ \u1680\u2000-\u2006\u2008-\u200a\u205f\u3000]+|{_WORD}{_EXTEND}|.{_EXTEND}",
    re.DOTALL,
)


def is_whitespace_str(s: str) -> bool:
    """Whether every character of ``s`` is whitespace (true for empty ``s``)."""
    return all(c.isspace() and c not in _NOT_RUST_WHITESPACE for c in s)


def _word_bounds(string: str) -> list[str]:
    return [m.group() for m in _SEGMENT.finditer(string)]


def get_first_token(string: str) -> str:
    """Return leading whitespace together with the first word-bounded segment."""
    taken: list[str] = []
    for segment in _word_bounds(string):
        taken.append(segment)
        if not is_whitespace_str(segment):
            break
    return "".join(taken)


def _remainder(items: list[HistoryItem], line: str) -> str:
    if not items:
        return ""
    return items[0].command_line[len(line):]


class Hinter(ABC):
    """Produces the hint for the current line, shown in-line after the buffer."""

    @abstractmethod
    def handle(
        self, line: str, pos: int, history: History, use_ansi_coloring: bool, cwd: str
    ) -> str:
        """Compute the hint for ``line`` and return it formatted for display."""

    @abstractmethod
    def complete_hint(self) -> str:
        """Return the current hint unformatted."""

    @abstractmethod
    def next_hint_token(self) -> str:
        """Return the first token of the hint, for incremental completion."""


class _HistoryHinter(Hinter):
    def __init__(self) -> None:
        self.style = Style().fg(Color.LIGHT_GRAY)
        self.current_hint = ""
        self.min_chars = 1

    def _find_hint(self, line: str, history: History, cwd: str) -> str:
        raise NotImplementedError

    def handle(
        self, line: str, pos: int, history: History, use_ansi_coloring: bool, cwd: str
    ) -> str:
        if len(line) >= self.min_chars:
            self.current_hint = self._find_hint(line, history, cwd)
        else:
            self.current_hint = ""
        if use_ansi_coloring and self.current_hint:
            return self.style.paint(self.current_hint)
        return self.current_hint

    def complete_hint(self) -> str:
        return self.current_hint

    def next_hint_token(self) -> str:
        return get_first_token(self.current_hint)

    def with_style(self, style: Style):
        """Set the style applied to the hint and return this hinter."""
        self.style = style
        return self

    def with_min_chars(self, min_chars: int):
        """Set how many characters enable hints and return this hinter."""
        self.min_chars = min_chars
        return self


class DefaultHinter(_HistoryHinter):
    """Hints the rest of the most recent history entry starting with the line."""

    def __init__(self) -> None:
        super().__init__()

    def _find_hint(self, line: str, history: History, cwd: str) -> str:
        found = history.search(SearchQuery.last_with_prefix(line, history.session()))
        return _remainder(found, line)

    def handle(
        self, line: str, pos: int, history: History, use_ansi_coloring: bool, cwd: str
    ) -> str:
        return super().handle(line, pos, history, use_ansi_coloring, cwd)

    def complete_hint(self) -> str:
        return super().complete_hint()

    def next_hint_token(self) -> str:
        return super().next_hint_token()

    def with_style(self, style: Style) -> DefaultHinter:
        return super().with_style(style)

    def with_min_chars(self, min_chars: int) -> DefaultHinter:
        return super().with_min_chars(min_chars)


class CwdAwareHinter(_HistoryHinter):
    """Prefers history entries run in the current directory, else any entry."""

    def __init__(self) -> None:
        super().__init__()

    def _find_hint(self, line: str, history: History, cwd: str) -> str:
        session = history.session()
        try:
            with_cwd = history.search(
                SearchQuery.last_with_prefix_and_cwd(line, cwd, session)
            )
        except HistoryFeatureUnsupported:
            try:
                with_cwd = history.search(SearchQuery.last_with_prefix(line, session))
            except HistoryError:
                with_cwd = []
        except HistoryError:
            with_cwd = []
        if with_cwd:
            return _remainder(with_cwd, line)
        try:
            found = history.search(SearchQuery.last_with_prefix(line, session))
        except HistoryError:
            found = []
        return _remainder(found, line)

    def handle(
        self, line: str, pos: int, history: History, use_ansi_coloring: bool, cwd: str
    ) -> str:
        return super().handle(line, pos, history, use_ansi_coloring, cwd)

    def complete_hint(self) -> str:
        return super().complete_hint()

    def next_hint_token(self) -> str:
        return super().next_hint_token()

    def with_style(self, style: Style) -> CwdAwareHinter:
        return super().with_style(style)

    def with_min_chars(self, min_chars: int) -> CwdAwareHinter:
        return super().with_min_chars(min_chars)