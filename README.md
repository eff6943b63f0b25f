# reedline

Building blocks for interactive line editors. The package provides command history stores, history-based hints and syntax highlighters. It also defines the edit commands and events that an editor binds to keys.

## Installation

```
pip install reedline
```

## History

The two history stores share the `History` interface from `reedline.history_base`. It has the methods `save`, `load`, `count`, `count_all`, `search`, `update`, `clear`, `delete`, `sync` and `session`.

A `HistoryItem` (from `reedline.history_item`) holds the following fields:

- `command_line`
- `id`
- `start_timestamp`
- `session_id`
- `hostname`
- `cwd`
- `duration`
- `exit_status`
- `more_info`

`HistoryItem.from_command_line(cmd)` creates an item with only the command line set.

Searches are described by a `SearchQuery`, which contains:

- a `SearchDirection` (`FORWARD` or `BACKWARD`)
- optional id and time bounds
- an optional limit
- a `SearchFilter`

Queries are usually built with helpers:

- `SearchQuery.everything`
- `SearchQuery.last_with_prefix`
- `SearchQuery.last_with_prefix_and_cwd`
- `SearchQuery.last_with_search`
- `SearchQuery.all_that_contain_rev`

A filter can restrict the command line with a `CommandLineSearch`: `prefix`, `substring` or `exact`. All three are case sensitive. A filter can also restrict hostname, working directory, exit status and session.

### FileBackedHistory

`reedline.file_backed.FileBackedHistory` keeps command lines only, and at most `capacity` of them. The default capacity is `HISTORY_SIZE`, which is 1000.

It does not store empty entries, or an entry equal to the one just before it. When the history is full, the oldest entry is dropped.

`FileBackedHistory.with_file(capacity, path)` ties the history to a plain text file, creating the file and its directories if needed.

- Newlines inside entries are written as `<\n>`.
- `sync()` appends unwritten entries under a file lock and merges in what other writers added meanwhile.
- If the file would exceed the capacity, `sync()` drops its oldest lines.
- `close()`, or leaving a `with` block, performs a final sync.

```python
from reedline.file_backed import FileBackedHistory
from reedline.history_item import HistoryItem
from reedline.history_base import SearchQuery, SearchDirection

with FileBackedHistory.with_file(1000, "history.txt") as history:
    history.save(HistoryItem.from_command_line("ls -alh"))
    history.save(HistoryItem.from_command_line("cd /tmp"))
    everything = history.search(SearchQuery.everything(SearchDirection.FORWARD, None))
    print([item.command_line for item in everything])
```

Ids are positions in the current list of entries. Some operations raise `HistoryFeatureUnsupported`:

- filtering by time
- filtering by hostname, working directory or exit status
- `update`
- `delete`

`clear()` also removes the file.

### SqliteBackedHistory

`reedline.sqlite_backed.SqliteBackedHistory` stores full items in SQLite. `more_info` is stored as JSON.

Create one with `SqliteBackedHistory.in_memory()` or `SqliteBackedHistory.with_file(path, session, session_timestamp)`. It supports every filter, as well as `update` and `delete`.

If both a session id and a session timestamp were given, session filtering returns two kinds of entries:

- entries of that session
- entries started before the session timestamp

```python
from reedline.sqlite_backed import SqliteBackedHistory
from reedline.history_item import HistoryItem
from reedline.history_base import SearchQuery

history = SqliteBackedHistory.in_memory()
history.save(HistoryItem.from_command_line("vim nginx.conf"))
latest = history.search(SearchQuery.last_with_prefix("vim", None))
history.close()
```

### Errors

Errors raised by the stores are subclasses of `HistoryError`:

- `HistoryFeatureUnsupported`
- `HistoryDatabaseError`
- `OtherHistoryError`

### Browsing

`reedline.history_cursor.HistoryCursor` walks back and forward through a history. It is steered by a `HistoryNavigationQuery`, which is one of `normal`, `prefix_search` or `substring_search`. The cursor skips entries equal to the one it currently shows.

- Going back stops at the oldest match.
- Going forward past the newest match unsets the cursor.

```python
from reedline.history_cursor import HistoryCursor
from reedline.history_base import HistoryNavigationQuery

cursor = HistoryCursor(HistoryNavigationQuery.prefix_search("vim"), None)
cursor.back(history)
print(cursor.string_at_cursor())
```

## Hints

`reedline.hinter` provides two hinters:

- `DefaultHinter` suggests the rest of the most recent history entry that starts with the current line.
- `CwdAwareHinter` first looks for such an entry run in the given working directory. If there is none, or the store cannot filter by directory, it looks in the whole history.

Both hinters have the following methods:

- `handle(line, pos, history, use_ansi_coloring, cwd)` returns the hint, painted with the hinter's style when colouring is on.
- `complete_hint()` returns the plain hint.
- `next_hint_token()` returns its first word, with any leading whitespace.
- `with_style` and `with_min_chars` configure the hinter.

```python
from reedline.hinter import DefaultHinter

hinter = DefaultHinter().with_min_chars(2)
shown = hinter.handle("ls", 2, history, True, "/home")
full = hinter.complete_hint()
word = hinter.next_hint_token()
```

## Highlighting

`reedline.highlighter` provides two highlighters:

- `ExampleHighlighter` colours the longest known command found in the line. Its colours can be changed with `change_colors`.
- `SimpleMatchHighlighter` marks every occurrence of a query string.

Both return a list of `(Style, text)` pairs. `Style` and `Color` in `reedline.style` render ANSI escape sequences with `Style.paint`. `Style` is built up with `fg`, `bold` and `italic`.

## Edit commands and events

`reedline.edit_command` defines the following:

- `EditCommand` (with `EditCommandKind`), an editing action and its arguments.
- `EditCommand.edit_type()` returns its `EditType` for undo grouping.
- `UndoBehavior.create_undo_point_after(previous)` decides when a change starts a new undo step.

`reedline.events` defines two more types:

- `Signal`: success with the entered text, Ctrl-C, or Ctrl-D.
- `ReedlineEvent`: an editor action with its arguments.

`reedline.external_printer.ExternalPrinter` is a bounded, thread-safe queue of lines to print while a line is being edited. `print` blocks while the queue is full; `get_line` never blocks.

## What is not included

There is no line editor here. The package does not read keys from a terminal or draw a prompt. It has no line buffer that carries out `EditCommand`s, no key binding tables, and no completion menus. It provides the pieces listed above for such an editor to use.

## Running the tests

```
pip install -e .[test]
pytest
```