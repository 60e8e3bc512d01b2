"""Tests for merging text runs with anchored widgets."""

import pytest

from ctb_archive.core.content.merger import merge_content
from ctb_archive.errors import OffsetInconsistencyError
from ctb_archive.models.document import Anchor, TextRun


def _anchor(offset: int, name: str = "") -> Anchor:
    return Anchor(offset=offset, justification="left", name=name or f"a{offset}")


def _text_length(tree: tuple) -> int:
    return sum(len(el.text) for line in tree for el in line if isinstance(el, TextRun))


def _widgets(tree: tuple) -> list:
    return [el for line in tree for el in line if not isinstance(el, TextRun)]


def test_no_widgets_returns_lines_verbatim() -> None:
    lines = ((TextRun(text="ab"),), (), (TextRun(text="cd"), TextRun(text="")))
    assert merge_content(lines, ()) == lines


def test_widget_inside_run_splits_it_keeping_style() -> None:
    run = TextRun(text="Hello", weight="heavy")
    w = _anchor(2)
    tree = merge_content(((run,),), (w,))
    assert tree == (
        (TextRun(text="He", weight="heavy"), w, TextRun(text="llo", weight="heavy")),
    )


def test_widget_at_start_of_text() -> None:
    w = _anchor(0)
    assert merge_content(((TextRun(text="ab"),),), (w,)) == ((w, TextRun(text="ab")),)


def test_widget_right_after_run() -> None:
    w = _anchor(2)
    lines = ((TextRun(text="ab"), TextRun(text="cd")),)
    assert merge_content(lines, (w,)) == ((TextRun(text="ab"), w, TextRun(text="cd")),)


def test_widget_at_line_break_ends_the_closed_line() -> None:
    """Offset 2 in "ab\\ncd" is the break itself: the widget ends line one."""
    w = _anchor(2)
    lines = ((TextRun(text="ab"),), (TextRun(text="cd"),))
    assert merge_content(lines, (w,)) == ((TextRun(text="ab"), w), (TextRun(text="cd"),))


def test_widget_after_line_break_starts_next_line() -> None:
    w = _anchor(3)
    lines = ((TextRun(text="ab"),), (TextRun(text="cd"),))
    assert merge_content(lines, (w,)) == ((TextRun(text="ab"),), (w, TextRun(text="cd")))


def test_widget_at_break_does_not_shift_following_offsets() -> None:
    """Text after a widget ending a line starts one position later."""
    w1, w2 = _anchor(2), _anchor(5)
    lines = ((TextRun(text="ab"),), (TextRun(text="cd"),))
    tree = merge_content(lines, (w1, w2))
    assert tree == (
        (TextRun(text="ab"), w1),
        (TextRun(text="c"), w2, TextRun(text="d")),
    )


def test_widget_on_its_own_empty_line() -> None:
    w = _anchor(2)
    lines = ((TextRun(text="a"),), (), (TextRun(text="b"),))
    assert merge_content(lines, (w,)) == ((TextRun(text="a"),), (w,), (TextRun(text="b"),))


def test_widget_at_end_of_text() -> None:
    w = _anchor(2)
    assert merge_content(((TextRun(text="ab"),),), (w,)) == ((TextRun(text="ab"), w),)


def test_widget_in_empty_document() -> None:
    w = _anchor(0)
    assert merge_content(((),), (w,)) == ((w,),)
    assert merge_content((), (w,)) == ((w,),)


def test_functional_run_at_widget_position_comes_first() -> None:
    marker = TextRun(text="", justification="center")
    w = _anchor(1)
    lines = ((TextRun(text="a"), marker, TextRun(text="b")),)
    tree = merge_content(lines, (w,))
    assert tree == ((TextRun(text="a"), marker, w, TextRun(text="b")),)


def test_adjacent_widgets_in_one_run() -> None:
    w1, w2 = _anchor(1), _anchor(2)
    tree = merge_content(((TextRun(text="abc"),),), (w1, w2))
    assert tree == ((TextRun(text="a"), w1, w2, TextRun(text="bc")),)


def test_two_splits_of_the_same_run() -> None:
    w1, w2 = _anchor(1), _anchor(3)
    tree = merge_content(((TextRun(text="Hello"),),), (w1, w2))
    assert tree == (
        (TextRun(text="H"), w1, TextRun(text="e"), w2, TextRun(text="llo")),
    )


def test_offsets_count_code_points() -> None:
    w = _anchor(2)
    tree = merge_content(((TextRun(text="日本語"),),), (w,))
    assert tree == ((TextRun(text="日本"), w, TextRun(text="語")),)


def test_merge_preserves_widgets_and_text() -> None:
    lines = (
        (TextRun(text="first line"), TextRun(text="")),
        (),
        (TextRun(text="täxt"), TextRun(text="more", style="italic")),
        (TextRun(text="end"),),
    )
    widgets = tuple(_anchor(o) for o in (0, 4, 12, 13, 16, 20, 24))
    tree = merge_content(lines, widgets)
    assert _widgets(tree) == list(widgets)
    assert _text_length(tree) == sum(len(r.text) for line in lines for r in line)
    assert len(tree) == len(lines)


def test_offset_behind_position_raises() -> None:
    w1, w2 = _anchor(3), _anchor(1, name="late")
    lines = ((TextRun(text="abcdef"),), (TextRun(text="next"),))
    with pytest.raises(OffsetInconsistencyError) as exc_info:
        merge_content(lines, (w1, w2))
    err = exc_info.value
    assert err.position == 4
    assert err.expected_offset == 1
    assert err.current_line_text == "def"
    assert err.next_line_text == "next"
    assert "cur=4 expected=1" in str(err)


def test_offset_beyond_text_raises() -> None:
    w = _anchor(10)
    with pytest.raises(OffsetInconsistencyError, match="no more lines"):
        merge_content(((TextRun(text="ab"),),), (w,))
