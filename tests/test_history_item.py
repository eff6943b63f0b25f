from dataclasses import replace
from datetime import timedelta

from reedline.history_item import HistoryItem


def test_from_command_line_sets_only_command_line():
    item = HistoryItem.from_command_line("ls -alh")
    assert item.command_line == "ls -alh"
    assert item.id is None
    assert item.start_timestamp is None
    assert item.session_id is None
    assert item.hostname is None
    assert item.cwd is None
    assert item.duration is None
    assert item.exit_status is None
    assert item.more_info is None


def test_items_compare_by_value():
    assert HistoryItem.from_command_line("cd foo") == HistoryItem.from_command_line(
        "cd foo"
    )
    assert HistoryItem.from_command_line("cd foo") != HistoryItem.from_command_line(
        "cd bar"
    )


def test_full_item_and_replace():
    item = HistoryItem(
        command_line="unzip foo.zip",
        id=3,
        session_id=1,
        hostname="foohost",
        cwd="/home/me/Downloads",
        duration=timedelta(milliseconds=1000),
        exit_status=0,
    )
    after = replace(item, exit_status=1)
    assert after.exit_status == 1
    assert replace(after, exit_status=0) == item
    assert after.cwd == "/home/me/Downloads"


def test_item_is_mutable():
    item = HistoryItem.from_command_line("vim htpasswd")
    item.id = 11
    assert item.id == 11