import dataclasses

import pytest

from reedline.style import Color, Style


def test_plain_style_paints_text_unchanged():
    assert Style().paint("hello") == "hello"
    assert Style().is_plain


def test_builders_return_new_styles():
    base = Style()
    green = base.fg(Color.GREEN)
    assert base == Style()
    assert green.foreground is Color.GREEN
    assert not green.is_plain


def test_builder_order_does_not_matter():
    assert Style().bold().fg(Color.RED) == Style().fg(Color.RED).bold()
    assert Style().italic().bold() == Style().bold().italic()


def test_bold_is_idempotent():
    assert Style().bold().bold() == Style().bold()


def test_style_is_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        Style().is_bold = True


def test_foreground_paint():
    assert Style().fg(Color.GREEN).paint("hi") == "\x1b[32mhi\x1b[0m"


def test_bold_foreground_paint():
    assert Style().bold().fg(Color.RED).paint("x") == "\x1b[1;31mx\x1b[0m"


@pytest.mark.parametrize("color", list(Color))
def test_painted_text_keeps_content(color):
    painted = Style().fg(color).italic().paint("content")
    assert "content" in painted
    assert painted.startswith("\x1b[")
    assert painted.endswith("\x1b[0m")
    assert color.value in painted