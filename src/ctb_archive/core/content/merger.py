"""Interleave a node's text runs with its anchored widgets.

Offsets count code points in the node's flattened text stream, in which
every line break and every widget occupies exactly one position. Text runs
advance the position by their length; widgets are inserted when the
position reaches their offset, splitting a run if the offset falls inside it.
"""

from collections.abc import Sequence
from dataclasses import replace

from ctb_archive.errors import OffsetInconsistencyError
from ctb_archive.models.document import DocumentTree, Element, TextRun, Widget


class _TextCursor:
    """Read position over lines of runs, with room for one pushed-back run."""

    def __init__(self, lines: Sequence[Sequence[TextRun]]) -> None:
        self.lines = lines
        self.line_index = 0
        self.run_index = 0
        # Right half of a split run, read before lines[line_index][run_index].
        self.pending: TextRun | None = None

    def head(self) -> TextRun | None:
        """Next run of the current line, or None at end of line."""
        if self.pending is not None:
            return self.pending
        line = self.lines[self.line_index]
        return line[self.run_index] if self.run_index < len(line) else None

    def advance(self) -> None:
        if self.pending is not None:
            self.pending = None
        else:
            self.run_index += 1

    def push_back(self, run: TextRun) -> None:
        self.pending = run

    def is_last_line(self) -> bool:
        return self.line_index == len(self.lines) - 1

    def next_line(self) -> None:
        self.line_index += 1
        self.run_index = 0

    def rest_of_line(self) -> list[TextRun]:
        line = self.lines[self.line_index]
        rest = list(line[self.run_index :])
        if self.pending is not None:
            rest.insert(0, self.pending)
        return rest

    def following_line_text(self) -> str | None:
        if self.is_last_line():
            return None
        return "".join(run.text for run in self.lines[self.line_index + 1])


def _offset_error(cursor: _TextCursor, chars: int, offset: int) -> OffsetInconsistencyError:
    return OffsetInconsistencyError(
        position=chars,
        expected_offset=offset,
        current_line_text="".join(run.text for run in cursor.rest_of_line()),
        next_line_text=cursor.following_line_text(),
    )


def merge_content(
    lines: Sequence[Sequence[TextRun]],
    widgets: Sequence[Widget],
) -> DocumentTree:
    """Merge lines of text runs with offset-sorted widgets into a document tree.

    A widget whose offset is the position of a line break is placed at the
    end of the line that the break closes.

    Args:
        lines: Lines of run fragments, as returned by ``parse_rich_text``.
        widgets: Anchored widgets sorted by ascending offset.

    Returns:
        Lines of elements; each widget appears exactly once, in input order.

    Raises:
        OffsetInconsistencyError: a widget offset lies before the current
            position or beyond the end of the text.
    """
    if not lines:
        lines = [()]
    cursor = _TextCursor(lines)
    out: list[list[Element]] = [[]]
    chars = 0
    widget_index = 0

    while True:
        if widget_index == len(widgets):
            out[-1].extend(cursor.rest_of_line())
            out.extend(list(line) for line in lines[cursor.line_index + 1 :])
            break

        widget = widgets[widget_index]
        offset = widget.offset
        run = cursor.head()

        # Functional runs at the widget's position are emitted first.
        if offset == chars and (run is None or run.text != ""):
            out[-1].append(widget)
            chars += 1
            widget_index += 1
            continue

        if offset < chars:
            raise _offset_error(cursor, chars, offset)

        if run is None:
            if cursor.is_last_line():
                raise _offset_error(cursor, chars, offset)
            cursor.next_line()
            out.append([])
            chars += 1
            continue

        length = len(run.text)
        if length == 0 or chars + length <= offset:
            out[-1].append(run)
            chars += length
            cursor.advance()
            continue

        # The widget sits inside this run: split it.
        cut = offset - chars
        cursor.advance()
        cursor.push_back(replace(run, text=run.text[cut:]))
        out[-1].append(replace(run, text=run.text[:cut]))
        out[-1].append(widget)
        chars = offset + 1
        widget_index += 1

    return tuple(tuple(line) for line in out)
