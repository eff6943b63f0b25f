import pytest

from reedline.file_backed import FileBackedHistory
from reedline.hinter import (
    CwdAwareHinter,
    DefaultHinter,
    get_first_token,
    is_whitespace_str,
)
from reedline.history_base import History, HistoryDatabaseError
from reedline.history_item import HistoryItem
from reedline.sqlite_backed import SqliteBackedHistory
from reedline.style import Color, Style


class FailingHistory(History):
    def save(self, item):
        return item

    def load(self, item_id):
        raise HistoryDatabaseError("broken")

    def count(self, query):
        raise HistoryDatabaseError("broken")

    def search(self, query):
        raise HistoryDatabaseError("broken")

    def update(self, item_id, updater):
        raise HistoryDatabaseError("broken")

    def clear(self):
        pass

    def delete(self, item_id):
        raise HistoryDatabaseError("broken")

    def sync(self):
        pass

    def session(self):
        return None


@pytest.fixture
def history():
    hist = FileBackedHistory()
    for cmd in ("echo first", "ls -l", "echo second"):
        hist.save(HistoryItem.from_command_line(cmd))
    return hist


def test_is_whitespace_str():
    assert is_whitespace_str(" \t\n")
    assert is_whitespace_str("")
    assert not is_whitespace_str(" a ")


def test_first_token_keeps_leading_whitespace():
    assert get_first_token("  hello world") == "  hello"


def test_first_token_of_empty_and_blank():
    assert get_first_token("") == ""
    assert get_first_token("   ") == "   "


def test_first_token_is_prefix():
    for text in ("foo bar", " -x y", "a.b c", "  ,,"):
        token = get_first_token(text)
        assert text.startswith(token)
        assert token.strip() != "" or text.strip() == ""


def test_default_hinter_uses_most_recent_prefix(history):
    hinter = DefaultHinter()
    assert hinter.handle("echo", 4, history, False, "/") == " second"
    assert hinter.complete_hint() == " second"
    assert hinter.next_hint_token() == " second"


def test_default_hinter_no_match(history):
    hinter = DefaultHinter()
    assert hinter.handle("xyz", 3, history, False, "/") == ""
    assert hinter.complete_hint() == ""


def test_default_hinter_min_chars(history):
    hinter = DefaultHinter().with_min_chars(5)
    assert hinter.handle("echo", 4, history, False, "/") == ""
    assert hinter.handle("echo ", 5, history, False, "/") == "second"


def test_default_hinter_colors(history):
    style = Style().fg(Color.RED)
    hinter = DefaultHinter().with_style(style)
    shown = hinter.handle("ls", 2, history, True, "/")
    assert shown == style.paint(" -l")
    assert hinter.complete_hint() == " -l"


def test_default_hinter_raises_on_history_error():
    with pytest.raises(HistoryDatabaseError):
        DefaultHinter().handle("ec", 2, FailingHistory(), False, "/")


def test_cwd_hinter_falls_back_for_file_history(history):
    hinter = CwdAwareHinter()
    assert hinter.handle("echo", 4, history, False, "/tmp") == " second"


def test_cwd_hinter_swallows_errors():
    hinter = CwdAwareHinter()
    assert hinter.handle("ec", 2, FailingHistory(), False, "/") == ""


def test_cwd_hinter_prefers_current_directory():
    hist = SqliteBackedHistory.in_memory()
    try:
        hist.save(HistoryItem(command_line="make test", cwd="/project"))
        hist.save(HistoryItem(command_line="make clean", cwd="/elsewhere"))
        hinter = CwdAwareHinter()
        assert hinter.handle("make", 4, hist, False, "/project") == " test"
        assert hinter.handle("make", 4, hist, False, "/nowhere") == " clean"
        assert hinter.next_hint_token() == " clean"
    finally:
        hist.close()