"""Line-editor building blocks: history stores, hints, highlighters, edit commands and events."""

__version__ = "0.1.0"

__all__ = [
    "edit_command",
    "events",
    "external_printer",
    "file_backed",
    "highlighter",
    "hinter",
    "history_base",
    "history_cursor",
    "history_item",
    "sqlite_backed",
    "style",
]