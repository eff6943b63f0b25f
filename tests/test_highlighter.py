import pytest

from reedline.highlighter import ExampleHighlighter, Highlighter, SimpleMatchHighlighter
from reedline.style import Color, Style


def joined(segments):
    return "".join(text for _, text in segments)


def test_highlighter_is_abstract():
    with pytest.raises(TypeError):
        Highlighter()


def test_example_highlighter_longest_match():
    hl = ExampleHighlighter(["test", "hello world", "hello world reedline"])
    line = "say hello world reedline now"
    result = hl.highlight(line, 0)
    assert result == [
        (Style().fg(Color.WHITE), "say "),
        (Style().fg(Color.GREEN), "hello world reedline"),
        (Style().bold().fg(Color.WHITE), " now"),
    ]
    assert joined(result) == line


def test_example_highlighter_without_commands_is_neutral():
    assert ExampleHighlighter().highlight("anything", 3) == [
        (Style().fg(Color.WHITE), "anything")
    ]


def test_example_highlighter_no_match_is_red():
    hl = ExampleHighlighter(["test"])
    assert hl.highlight("nothing here", 0) == [(Style().fg(Color.RED), "nothing here")]


def test_example_highlighter_splits_at_first_occurrence():
    hl = ExampleHighlighter(["ab"])
    result = hl.highlight("xabyab", 0)
    assert [text for _, text in result] == ["x", "ab", "yab"]


def test_example_highlighter_change_colors():
    hl = ExampleHighlighter(["go"])
    hl.change_colors(Color.BLUE, Color.YELLOW, Color.CYAN)
    assert hl.highlight("stop", 0) == [(Style().fg(Color.YELLOW), "stop")]
    result = hl.highlight("go on", 0)
    assert result[1] == (Style().fg(Color.BLUE), "go")
    assert result[2][0] == Style().bold().fg(Color.CYAN)


def test_simple_match_empty_query():
    assert SimpleMatchHighlighter().highlight("some line", 0) == [(Style(), "some line")]


def test_simple_match_all_occurrences():
    hl = SimpleMatchHighlighter("ab")
    neutral = Style()
    match = Style().fg(Color.GREEN)
    assert hl.highlight("xxabyyab", 0) == [
        (neutral, "xx"),
        (match, "ab"),
        (neutral, "yy"),
        (match, "ab"),
    ]


def test_simple_match_adjacent_matches_have_no_empty_segments():
    result = SimpleMatchHighlighter("a").highlight("aaa", 0)
    assert all(text for _, text in result)
    assert joined(result) == "aaa"
    assert len(result) == 3


def test_simple_match_builders():
    neutral = Style().italic()
    match = Style().bold()
    hl = (
        SimpleMatchHighlighter()
        .with_query("cd")
        .with_match_style(match)
        .with_neutral_style(neutral)
    )
    assert hl.highlight("cd foo", 0) == [(match, "cd"), (neutral, " foo")]


@pytest.mark.parametrize(
    "query, line",
    [("o", "foo boo"), ("xyz", "no match"), ("ab", "abab"), ("é", "café é")],
)
def test_simple_match_round_trip(query, line):
    result = SimpleMatchHighlighter(query).highlight(line, 0)
    assert joined(result) == line
    matches = [text for style, text in result if style == Style().fg(Color.GREEN)]
    assert matches == [query] * line.count(query)