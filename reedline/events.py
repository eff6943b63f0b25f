"""Results of reading a line and the actions the editor can be asked to take."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable

from .edit_command import EditCommand


class SignalKind(enum.Enum):
    """How reading a line ended."""

    SUCCESS = "Success"
    CTRL_C = "CtrlC"
    CTRL_D = "CtrlD"


@dataclass(frozen=True)
class Signal:
    """The outcome of reading a line.

    ``SUCCESS`` carries the entered ``content``. ``CTRL_C`` means the entry
    was aborted and ``CTRL_D`` means end of input or of the whole session;
    neither carries content.
    """

    kind: SignalKind
    content: str | None = None

    def __post_init__(self) -> None:
        if self.kind is SignalKind.SUCCESS:
            if not isinstance(self.content, str):
                raise ValueError("Success needs the entered content")
        elif self.content is not None:
            raise ValueError(f"{self.kind.value} carries no content")


class ReedlineEventKind(enum.Enum):
    """The actions the editor supports."""

    NONE = "None"
    HISTORY_HINT_COMPLETE = "HistoryHintComplete"
    HISTORY_HINT_WORD_COMPLETE = "HistoryHintWordComplete"
    CTRL_D = "CtrlD"
    CTRL_C = "CtrlC"
    CLEAR_SCREEN = "ClearScreen"
    CLEAR_SCROLLBACK = "ClearScrollback"
    ENTER = "Enter"
    SUBMIT = "Submit"
    SUBMIT_OR_NEWLINE = "SubmitOrNewline"
    ESC = "Esc"
    MOUSE = "Mouse"
    RESIZE = "Resize"
    EDIT = "Edit"
    REPAINT = "Repaint"
    PREVIOUS_HISTORY = "PreviousHistory"
    UP = "Up"
    DOWN = "Down"
    RIGHT = "Right"
    LEFT = "Left"
    NEXT_HISTORY = "NextHistory"
    SEARCH_HISTORY = "SearchHistory"
    MULTIPLE = "Multiple"
    UNTIL_FOUND = "UntilFound"
    MENU = "Menu"
    MENU_NEXT = "MenuNext"
    MENU_PREVIOUS = "MenuPrevious"
    MENU_UP = "MenuUp"
    MENU_DOWN = "MenuDown"
    MENU_LEFT = "MenuLeft"
    MENU_RIGHT = "MenuRight"
    MENU_PAGE_NEXT = "MenuPageNext"
    MENU_PAGE_PREVIOUS = "MenuPagePrevious"
    EXECUTE_HOST_COMMAND = "ExecuteHostCommand"
    OPEN_EDITOR = "OpenEditor"


_E = ReedlineEventKind

_DESCRIPTIONS: dict[ReedlineEventKind, str] = {
    _E.RESIZE: "Resize <int> <int>",
    _E.EDIT: "Edit: <EditCommand> or Edit: <EditCommand> value: <string>",
    _E.MULTIPLE: "Multiple[ { ReedLineEvents, } ]",
    _E.UNTIL_FOUND: "UntilFound [ { ReedLineEvents, } ]",
    _E.MENU: "Menu Name: <string>",
}

_NEEDS_TEXT = frozenset({_E.MENU, _E.EXECUTE_HOST_COMMAND})
_NEEDS_EVENTS = frozenset({_E.MULTIPLE, _E.UNTIL_FOUND})
_MAX_TERMINAL_SIZE = 0xFFFF


def _check_size(name: str, value: object) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"Resize needs an integer {name}")
    if not 0 <= value <= _MAX_TERMINAL_SIZE:
        raise ValueError(f"Resize {name} must be between 0 and {_MAX_TERMINAL_SIZE}")


@dataclass(frozen=True)
class ReedlineEvent:
    """An editor action together with its arguments.

    ``columns`` and ``rows`` belong to ``RESIZE``; ``commands`` to ``EDIT``;
    ``events`` to ``MULTIPLE`` and ``UNTIL_FOUND``; ``text`` is the menu name
    of ``MENU`` or the command of ``EXECUTE_HOST_COMMAND``.
    """

    kind: ReedlineEventKind
    columns: int | None = None
    rows: int | None = None
    commands: tuple[EditCommand, ...] = field(default=())
    events: tuple[ReedlineEvent, ...] = field(default=())
    text: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "commands", tuple(self._as_iterable(self.commands)))
        object.__setattr__(self, "events", tuple(self._as_iterable(self.events)))

        if self.kind is _E.RESIZE:
            _check_size("columns", self.columns)
            _check_size("rows", self.rows)
        elif self.columns is not None or self.rows is not None:
            raise ValueError(f"{self.kind.value} carries no terminal size")

        if self.kind is not _E.EDIT and self.commands:
            raise ValueError(f"{self.kind.value} carries no edit commands")
        if not all(isinstance(cmd, EditCommand) for cmd in self.commands):
            raise TypeError("Edit commands must be EditCommand instances")

        if self.kind not in _NEEDS_EVENTS and self.events:
            raise ValueError(f"{self.kind.value} carries no nested events")
        if not all(isinstance(evt, ReedlineEvent) for evt in self.events):
            raise TypeError("Nested events must be ReedlineEvent instances")

        if self.kind in _NEEDS_TEXT:
            if not isinstance(self.text, str):
                raise ValueError(f"{self.kind.value} needs a string")
        elif self.text is not None:
            raise ValueError(f"{self.kind.value} carries no string")

    @staticmethod
    def _as_iterable(value: Iterable | None) -> Iterable:
        return () if value is None else value

    def __str__(self) -> str:
        return _DESCRIPTIONS.get(self.kind, self.kind.value)