"""Parse CherryTree rich-text and grid markup.

Rich text is stored as::

    <node><rich_text weight="heavy">Hello</rich_text><rich_text>
    world</rich_text></node>

``\\n`` inside run text is the only line separator.
"""

from dataclasses import replace
from xml.etree import ElementTree as ET

from ctb_archive.core.flags import normalize_color
from ctb_archive.errors import DecodeError
from ctb_archive.models.document import TextRun

# Attribute names of <rich_text> copied verbatim onto TextRun.
_STRING_ATTRIBUTES = (
    "weight",
    "style",
    "underline",
    "strikethrough",
    "scale",
    "family",
    "link",
    "justification",
)


def _parse_xml(markup: str, *, what: str) -> ET.Element:
    try:
        return ET.fromstring(markup.encode("utf-8"))
    except ET.ParseError as e:
        msg = f"Malformed {what} markup: {e}"
        raise DecodeError(msg) from e


def _text_run(element: ET.Element) -> TextRun:
    attrs = element.attrib
    raw_indent = attrs.get("indent", "")
    try:
        indent = int(raw_indent) if raw_indent else 0
    except ValueError as e:
        msg = f"Malformed indent {raw_indent!r}"
        raise DecodeError(msg) from e
    return TextRun(
        text="".join(element.itertext()),
        foreground=normalize_color(attrs.get("foreground", "")),
        background=normalize_color(attrs.get("background", "")),
        indent=indent,
        **{name: attrs.get(name, "") for name in _STRING_ATTRIBUTES},
    )


def parse_text_runs(markup: str) -> list[TextRun]:
    """Parse rich-text markup into styled runs, in document order."""
    root = _parse_xml(markup, what="rich text")
    return [_text_run(element) for element in root.iter("rich_text")]


def split_lines(runs: list[TextRun]) -> tuple[tuple[TextRun, ...], ...]:
    """Split runs on ``\\n`` into lines of run fragments.

    Every fragment keeps its run's style. Runs with empty text are
    functional and kept as they are; empty fragments left over from
    splitting are dropped. The result has at least one line.
    """
    lines: list[list[TextRun]] = [[]]
    for run in runs:
        if run.text == "":
            lines[-1].append(run)
            continue
        parts = run.text.split("\n")
        for i, part in enumerate(parts):
            if part:
                lines[-1].append(replace(run, text=part))
            if i < len(parts) - 1:
                lines.append([])
    return tuple(tuple(line) for line in lines)


def parse_rich_text(markup: str) -> tuple[tuple[TextRun, ...], ...]:
    """Parse a node's rich-text markup into lines of styled run fragments."""
    return split_lines(parse_text_runs(markup))


def parse_grid(markup: str) -> tuple[tuple[str, ...], ...]:
    """Parse grid markup into rows of cell text in display order.

    Rows are rotated so the first stored row ends up last, e.g. stored
    ``[R3, R1, R2]`` gives ``[R1, R2, R3]``. Rotating the other way (last
    stored row to the front) is the alternative reading of the format; check
    here first if header rows of real .ctb tables look misplaced.
    """
    root = _parse_xml(markup, what="grid")
    rows = [
        tuple("".join(cell.itertext()) for cell in row.iter("cell"))
        for row in root.iter("row")
    ]
    if rows:
        rows = rows[1:] + rows[:1]
    return tuple(rows)
