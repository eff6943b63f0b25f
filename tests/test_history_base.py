from dataclasses import replace

import pytest

from reedline.history_base import (
    CommandLineSearch,
    History,
    HistoryDatabaseError,
    HistoryError,
    HistoryFeatureUnsupported,
    HistoryNavigationQuery,
    NavigationKind,
    OtherHistoryError,
    SearchDirection,
    SearchFilter,
    SearchKind,
    SearchQuery,
)
from reedline.history_item import HistoryItem


class ListHistory(History):
    """Minimal in-memory history used to exercise the base class."""

    def __init__(self):
        self.items = []
        self.queries = []

    def save(self, item):
        saved = replace(item, id=len(self.items))
        self.items.append(saved)
        return saved

    def load(self, item_id):
        return self.items[item_id]

    def count(self, query):
        return len(self.search(query))

    def search(self, query):
        self.queries.append(query)
        found = [
            item
            for item in self.items
            if query.filter.command_line is None
            or query.filter.command_line.matches(item.command_line)
        ]
        if query.direction is SearchDirection.BACKWARD:
            found.reverse()
        return found if query.limit is None else found[: query.limit]

    def update(self, item_id, updater):
        self.items[item_id] = updater(self.items[item_id])

    def clear(self):
        self.items.clear()

    def delete(self, item_id):
        raise HistoryFeatureUnsupported("ListHistory", "removing entries")

    def sync(self):
        return None

    def session(self):
        return None


@pytest.mark.parametrize(
    "search, line, expected",
    [
        (CommandLineSearch.prefix("ls "), "ls -alh", True),
        (CommandLineSearch.prefix("ls "), "ls", False),
        (CommandLineSearch.prefix("LS "), "ls -alh", False),
        (CommandLineSearch.substring("foo.zip"), "unzip foo.zip", True),
        (CommandLineSearch.substring("foo.zip"), "cd foo", False),
        (CommandLineSearch.exact("ls"), "ls", True),
        (CommandLineSearch.exact("ls"), "ls -l", False),
    ],
)
def test_command_line_search_matches(search, line, expected):
    assert search.matches(line) is expected


def test_command_line_search_kinds():
    assert CommandLineSearch.prefix("a").kind is SearchKind.PREFIX
    assert CommandLineSearch.substring("a").kind is SearchKind.SUBSTRING
    assert CommandLineSearch.exact("a").kind is SearchKind.EXACT


def test_navigation_queries():
    normal = HistoryNavigationQuery.normal("buffer state")
    assert normal.kind is NavigationKind.NORMAL
    assert normal.buffer == "buffer state"
    prefix = HistoryNavigationQuery.prefix_search("find")
    assert (prefix.kind, prefix.text) == (NavigationKind.PREFIX_SEARCH, "find")
    sub = HistoryNavigationQuery.substring_search("substring")
    assert (sub.kind, sub.text) == (NavigationKind.SUBSTRING_SEARCH, "substring")


def test_filter_anything_has_only_session():
    f = SearchFilter.anything(7)
    assert f == SearchFilter(session=7)
    assert f.command_line is None and f.cwd_exact is None


def test_filter_from_text_search_cwd():
    cmd = CommandLineSearch.prefix("vim")
    f = SearchFilter.from_text_search_cwd("/etc/nginx", cmd, None)
    assert f.command_line == cmd
    assert f.cwd_exact == "/etc/nginx"
    assert f.session is None
    assert SearchFilter.from_text_search(cmd, 2) == SearchFilter(
        command_line=cmd, session=2
    )


def test_last_with_search_is_backward_single():
    q = SearchQuery.last_with_search(SearchFilter.anything(None))
    assert q.direction is SearchDirection.BACKWARD
    assert q.limit == 1
    assert q.start_id is None and q.end_id is None


def test_last_with_prefix_and_cwd():
    q = SearchQuery.last_with_prefix_and_cwd("cd", "/home/me", 1)
    assert q.limit == 1
    assert q.filter.command_line == CommandLineSearch.prefix("cd")
    assert q.filter.cwd_exact == "/home/me"
    assert q.filter.session == 1
    assert SearchQuery.last_with_prefix("cd", 1).filter.cwd_exact is None


def test_all_that_contain_rev_and_everything():
    q = SearchQuery.all_that_contain_rev("nginx")
    assert q.direction is SearchDirection.BACKWARD
    assert q.limit is None
    assert q.filter.command_line == CommandLineSearch.substring("nginx")
    e = SearchQuery.everything(SearchDirection.FORWARD, 3)
    assert e.filter == SearchFilter.anything(3)
    assert e.limit is None


def test_count_all_uses_forward_everything_query():
    history = ListHistory()
    for cmd in ("cd ~/Downloads", "ls", "ls -alh"):
        history.save(HistoryItem.from_command_line(cmd))
    assert history.count_all() == 3
    assert history.queries[-1] == SearchQuery.everything(SearchDirection.FORWARD, None)


def test_search_through_base_helpers():
    history = ListHistory()
    for cmd in ("ls -l", "cat x.txt", "ls -alh"):
        history.save(HistoryItem.from_command_line(cmd))
    found = history.search(SearchQuery.last_with_prefix("ls", None))
    assert [i.command_line for i in found] == ["ls -alh"]
    history.clear()
    assert history.count_all() == 0


def test_error_hierarchy():
    err = HistoryFeatureUnsupported("FileBackedHistory", "removing entries")
    assert err.history == "FileBackedHistory"
    assert err.feature == "removing entries"
    assert isinstance(err, HistoryError)
    with pytest.raises(HistoryError):
        ListHistory().delete(0)
    assert issubclass(HistoryDatabaseError, HistoryError)
    assert issubclass(OtherHistoryError, HistoryError)


def test_history_is_abstract():
    with pytest.raises(TypeError):
        History()