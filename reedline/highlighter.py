"""Syntax highlighting of the edited line."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .style import Color, Style

DEFAULT_BUFFER_MATCH_COLOR = Color.GREEN
DEFAULT_BUFFER_NEUTRAL_COLOR = Color.WHITE
DEFAULT_BUFFER_NOT_MATCH_COLOR = Color.RED


class Highlighter(ABC):
    """Turns the current line into styled segments."""

    @abstractmethod
    def highlight(self, line: str, cursor: int) -> list[tuple[Style, str]]:
        """Return the line as (style, text) segments; ``cursor`` is a byte offset."""


class ExampleHighlighter(Highlighter):
    """Highlights the longest known command found in the line."""

    def __init__(self, external_commands: list[str] | None = None) -> None:
        self.external_commands = list(external_commands or [])
        self.match_color = DEFAULT_BUFFER_MATCH_COLOR
        self.not_match_color = DEFAULT_BUFFER_NOT_MATCH_COLOR
        self.neutral_color = DEFAULT_BUFFER_NEUTRAL_COLOR

    def highlight(self, line: str, cursor: int) -> list[tuple[Style, str]]:
        matches = [cmd for cmd in self.external_commands if cmd in line]
        if matches:
            longest = ""
            for cmd in matches:
                if len(cmd.encode()) > len(longest.encode()):
                    longest = cmd
            if longest:
                before, after = line.split(longest, 1)
            else:
                before, after = "", line
            return [
                (Style().fg(self.neutral_color), before),
                (Style().fg(self.match_color), longest),
                (Style().bold().fg(self.neutral_color), after),
            ]
        if not self.external_commands:
            return [(Style().fg(self.neutral_color), line)]
        return [(Style().fg(self.not_match_color), line)]

    def change_colors(
        self, match_color: Color, notmatch_color: Color, neutral_color: Color
    ) -> None:
        """Use different colours for matches, non-matches and neutral text."""
        self.match_color = match_color
        self.not_match_color = notmatch_color
        self.neutral_color = neutral_color


class SimpleMatchHighlighter(Highlighter):
    """Highlights every exact occurrence of a query string."""

    def __init__(self, query: str = "") -> None:
        self.query = query
        self.neutral_style = Style()
        self.match_style = Style().fg(Color.GREEN)

    def highlight(self, line: str, cursor: int) -> list[tuple[Style, str]]:
        if not self.query:
            return [(self.neutral_style, line)]
        segments: list[tuple[Style, str]] = []
        next_idx = 0
        idx = line.find(self.query)
        while idx != -1:
            if idx != next_idx:
                segments.append((self.neutral_style, line[next_idx:idx]))
            segments.append((self.match_style, self.query))
            next_idx = idx + len(self.query)
            idx = line.find(self.query, next_idx)
        if next_idx != len(line):
            segments.append((self.neutral_style, line[next_idx:]))
        return segments

    def with_query(self, query: str) -> SimpleMatchHighlighter:
        """Set the string to match and return this highlighter."""
        self.query = query
        return self

    def with_match_style(self, match_style: Style) -> SimpleMatchHighlighter:
        """Set the style of matches and return this highlighter."""
        self.match_style = match_style
        return self

    def with_neutral_style(self, neutral_style: Style) -> SimpleMatchHighlighter:
        """Set the style of non-matching text and return this highlighter."""
        self.neutral_style = neutral_style
        return self