"""Terminal colours and text styles rendered as ANSI escape sequences."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace


class Color(enum.Enum):
    """A terminal colour, valued by its foreground SGR code."""

    BLACK = "30"
    RED = "31"
    GREEN = "32"
    YELLOW = "33"
    BLUE = "34"
    PURPLE = "35"
    CYAN = "36"
    WHITE = "37"
    DEFAULT = "39"
    DARK_GRAY = "90"
    LIGHT_RED = "91"
    LIGHT_GREEN = "92"
    LIGHT_YELLOW = "93"
    LIGHT_BLUE = "94"
    LIGHT_PURPLE = "95"
    LIGHT_CYAN = "96"
    LIGHT_GRAY = "97"


_RESET = "\x1b[0m"


@dataclass(frozen=True)
class Style:
    """An immutable text style; the builder methods return new styles."""

    foreground: Color | None = None
    is_bold: bool = False
    is_italic: bool = False

    def fg(self, color: Color) -> Style:
        """Return this style with ``color`` as foreground."""
        return replace(self, foreground=color)

    def bold(self) -> Style:
        """Return this style in bold."""
        return replace(self, is_bold=True)

    def italic(self) -> Style:
        """Return this style in italics."""
        return replace(self, is_italic=True)

    @property
    def is_plain(self) -> bool:
        """Whether this style changes nothing."""
        return self == Style()

    def _codes(self) -> list[str]:
        codes = []
        if self.is_bold:
            codes.append("1")
        if self.is_italic:
            codes.append("3")
        if self.foreground is not None:
            codes.append(self.foreground.value)
        return codes

    def paint(self, text: str) -> str:
        """Return ``text`` wrapped in the escape sequences of this style."""
        if self.is_plain:
            return text
        return f"\x1b[{';'.join(self._codes())}m{text}{_RESET}"