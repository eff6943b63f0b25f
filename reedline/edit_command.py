"""Editing actions, their undo classification and undo grouping rules."""

from __future__ import annotations

import enum
from dataclasses import dataclass

_NOT_RUST_WHITESPACE = frozenset("\x1c\x1d\x1e\x1f")


def _is_whitespace(char: str) -> bool:
    return char.isspace() and char not in _NOT_RUST_WHITESPACE


class EditCommandKind(enum.Enum):
    """The editing actions that can be mapped to key bindings."""

    MOVE_TO_START = "MoveToStart"
    MOVE_TO_LINE_START = "MoveToLineStart"
    MOVE_TO_END = "MoveToEnd"
    MOVE_TO_LINE_END = "MoveToLineEnd"
    MOVE_LEFT = "MoveLeft"
    MOVE_RIGHT = "MoveRight"
    MOVE_WORD_LEFT = "MoveWordLeft"
    MOVE_BIG_WORD_LEFT = "MoveBigWordLeft"
    MOVE_WORD_RIGHT = "MoveWordRight"
    MOVE_WORD_RIGHT_START = "MoveWordRightStart"
    MOVE_BIG_WORD_RIGHT_START = "MoveBigWordRightStart"
    MOVE_WORD_RIGHT_END = "MoveWordRightEnd"
    MOVE_BIG_WORD_RIGHT_END = "MoveBigWordRightEnd"
    MOVE_TO_POSITION = "MoveToPosition"
    INSERT_CHAR = "InsertChar"
    INSERT_STRING = "InsertString"
    INSERT_NEWLINE = "InsertNewline"
    REPLACE_CHAR = "ReplaceChar"
    REPLACE_CHARS = "ReplaceChars"
    BACKSPACE = "Backspace"
    DELETE = "Delete"
    CUT_CHAR = "CutChar"
    BACKSPACE_WORD = "BackspaceWord"
    DELETE_WORD = "DeleteWord"
    CLEAR = "Clear"
    CLEAR_TO_LINE_END = "ClearToLineEnd"
    COMPLETE = "Complete"
    CUT_CURRENT_LINE = "CutCurrentLine"
    CUT_FROM_START = "CutFromStart"
    CUT_FROM_LINE_START = "CutFromLineStart"
    CUT_TO_END = "CutToEnd"
    CUT_TO_LINE_END = "CutToLineEnd"
    CUT_WORD_LEFT = "CutWordLeft"
    CUT_BIG_WORD_LEFT = "CutBigWordLeft"
    CUT_WORD_RIGHT = "CutWordRight"
    CUT_BIG_WORD_RIGHT = "CutBigWordRight"
    CUT_WORD_RIGHT_TO_NEXT = "CutWordRightToNext"
    CUT_BIG_WORD_RIGHT_TO_NEXT = "CutBigWordRightToNext"
    PASTE_CUT_BUFFER_BEFORE = "PasteCutBufferBefore"
    PASTE_CUT_BUFFER_AFTER = "PasteCutBufferAfter"
    UPPERCASE_WORD = "UppercaseWord"
    LOWERCASE_WORD = "LowercaseWord"
    CAPITALIZE_CHAR = "CapitalizeChar"
    SWITCHCASE_CHAR = "SwitchcaseChar"
    SWAP_WORDS = "SwapWords"
    SWAP_GRAPHEMES = "SwapGraphemes"
    UNDO = "Undo"
    REDO = "Redo"
    CUT_RIGHT_UNTIL = "CutRightUntil"
    CUT_RIGHT_BEFORE = "CutRightBefore"
    MOVE_RIGHT_UNTIL = "MoveRightUntil"
    MOVE_RIGHT_BEFORE = "MoveRightBefore"
    CUT_LEFT_UNTIL = "CutLeftUntil"
    CUT_LEFT_BEFORE = "CutLeftBefore"
    MOVE_LEFT_UNTIL = "MoveLeftUntil"
    MOVE_LEFT_BEFORE = "MoveLeftBefore"
    SELECT_ALL = "SelectAll"
    CUT_SELECTION = "CutSelection"
    COPY_SELECTION = "CopySelection"
    PASTE = "Paste"
    CUT_SELECTION_SYSTEM = "CutSelectionSystem"
    COPY_SELECTION_SYSTEM = "CopySelectionSystem"
    PASTE_SYSTEM = "PasteSystem"


K = EditCommandKind

_SELECTABLE_MOVES = frozenset(
    {
        K.MOVE_TO_START,
        K.MOVE_TO_LINE_START,
        K.MOVE_TO_END,
        K.MOVE_TO_LINE_END,
        K.MOVE_LEFT,
        K.MOVE_RIGHT,
        K.MOVE_WORD_LEFT,
        K.MOVE_BIG_WORD_LEFT,
        K.MOVE_WORD_RIGHT,
        K.MOVE_WORD_RIGHT_START,
        K.MOVE_BIG_WORD_RIGHT_START,
        K.MOVE_WORD_RIGHT_END,
        K.MOVE_BIG_WORD_RIGHT_END,
    }
)

_CHAR_MOVES = frozenset(
    {K.MOVE_RIGHT_UNTIL, K.MOVE_RIGHT_BEFORE, K.MOVE_LEFT_UNTIL, K.MOVE_LEFT_BEFORE}
)

_CURSOR_MOVES = _SELECTABLE_MOVES | _CHAR_MOVES | {K.MOVE_TO_POSITION}

_NEEDS_CHAR = _CHAR_MOVES | {
    K.INSERT_CHAR,
    K.REPLACE_CHAR,
    K.CUT_RIGHT_UNTIL,
    K.CUT_RIGHT_BEFORE,
    K.CUT_LEFT_UNTIL,
    K.CUT_LEFT_BEFORE,
}

_NEEDS_TEXT = frozenset({K.INSERT_STRING, K.REPLACE_CHARS})
_NEEDS_POSITION = frozenset({K.MOVE_TO_POSITION, K.REPLACE_CHARS})

_DESCRIPTIONS: dict[EditCommandKind, str] = {
    **{kind: f"{kind.value} Optional[select: <bool>]" for kind in _SELECTABLE_MOVES},
    K.MOVE_TO_POSITION: "MoveToPosition  Value: <int>, Optional[select: <bool>]",
    K.MOVE_LEFT_UNTIL: "MoveLeftUntil Value: <char>, Optional[select: <bool>]",
    K.MOVE_LEFT_BEFORE: "MoveLeftBefore Value: <char>, Optional[select: <bool>]",
    K.INSERT_CHAR: "InsertChar  Value: <char>",
    K.INSERT_STRING: "InsertString Value: <string>",
    K.REPLACE_CHAR: "ReplaceChar <char>",
    K.REPLACE_CHARS: "ReplaceChars <int> <string>",
    K.CUT_RIGHT_UNTIL: "CutRightUntil Value: <char>",
    K.CUT_RIGHT_BEFORE: "CutRightBefore Value: <char>",
    K.MOVE_RIGHT_UNTIL: "MoveRightUntil Value: <char>",
    K.MOVE_RIGHT_BEFORE: "MoveRightBefore Value: <char>",
    K.CUT_LEFT_UNTIL: "CutLeftUntil Value: <char>",
    K.CUT_LEFT_BEFORE: "CutLeftBefore Value: <char>",
}


class EditType(enum.Enum):
    """How an edit command affects the buffer, for grouping undo steps."""

    MOVE_CURSOR = "move_cursor"
    MOVE_CURSOR_SELECT = "move_cursor_select"
    UNDO_REDO = "undo_redo"
    EDIT_TEXT = "edit_text"
    NO_OP = "no_op"

    @property
    def moves_cursor(self) -> bool:
        """Whether this is a cursor movement."""
        return self in (EditType.MOVE_CURSOR, EditType.MOVE_CURSOR_SELECT)

    @property
    def selects(self) -> bool:
        """Whether this is a cursor movement that selects text."""
        return self is EditType.MOVE_CURSOR_SELECT


@dataclass(frozen=True)
class EditCommand:
    """An editing action together with its arguments.

    ``char`` holds the character of char-taking commands, ``text`` the string
    of ``InsertString``/``ReplaceChars``, and ``position`` the target of
    ``MoveToPosition`` or the character count of ``ReplaceChars``.
    """

    kind: EditCommandKind
    select: bool = False
    position: int | None = None
    char: str | None = None
    text: str | None = None

    def __post_init__(self) -> None:
        if self.kind in _NEEDS_CHAR and (
            not isinstance(self.char, str) or len(self.char) != 1
        ):
            raise ValueError(f"{self.kind.value} needs a single character")
        if self.kind in _NEEDS_TEXT and not isinstance(self.text, str):
            raise ValueError(f"{self.kind.value} needs a string")
        if self.kind in _NEEDS_POSITION and (
            not isinstance(self.position, int) or self.position < 0
        ):
            raise ValueError(f"{self.kind.value} needs a non-negative integer")

    def edit_type(self) -> EditType:
        """Classify the command for undo grouping."""
        if self.kind in _CURSOR_MOVES:
            return EditType.MOVE_CURSOR_SELECT if self.select else EditType.MOVE_CURSOR
        if self.kind is K.SELECT_ALL:
            return EditType.MOVE_CURSOR_SELECT
        if self.kind in (K.UNDO, K.REDO):
            return EditType.UNDO_REDO
        if self.kind in (K.COPY_SELECTION, K.COPY_SELECTION_SYSTEM):
            return EditType.NO_OP
        return EditType.EDIT_TEXT

    def __str__(self) -> str:
        return _DESCRIPTIONS.get(self.kind, self.kind.value)


class UndoKind(enum.Enum):
    """The kinds of line changes, as far as undo is concerned."""

    INSERT_CHARACTER = "insert_character"
    BACKSPACE = "backspace"
    DELETE = "delete"
    MOVE_CURSOR = "move_cursor"
    HISTORY_NAVIGATION = "history_navigation"
    CREATE_UNDO_POINT = "create_undo_point"
    UNDO_REDO = "undo_redo"


@dataclass(frozen=True)
class UndoBehavior:
    """A line change tag; ``char`` is the inserted or deleted character, if any."""

    kind: UndoKind
    char: str | None = None

    def create_undo_point_after(self, previous: UndoBehavior) -> bool:
        """Whether this change starts a new undo set after ``previous``."""
        if self.kind is UndoKind.MOVE_CURSOR:
            return False
        if previous.kind is not self.kind:
            return True
        if self.kind is UndoKind.HISTORY_NAVIGATION:
            return False
        if self.kind is UndoKind.INSERT_CHARACTER:
            prev, new = previous.char or "", self.char or ""
            return prev in ("\n", "\r") or (
                not _is_whitespace(prev) and _is_whitespace(new)
            )
        if self.kind in (UndoKind.BACKSPACE, UndoKind.DELETE):
            if previous.char is None or self.char is None:
                return False
            return self.char in ("\n", "\r") or (
                _is_whitespace(previous.char) and not _is_whitespace(self.char)
            )
        return True