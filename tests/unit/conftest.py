"""Shared test fixtures."""

import io
import sqlite3
from collections.abc import Iterator
from pathlib import Path

import pytest
from PIL import Image

from ctb_archive.core.database.schema import create_schema
from ctb_archive.core.database.storage import CtbStorage

RICH_TEXT = (
    '<?xml version="1.0" encoding="UTF-8"?>'
    "<node>"
    '<rich_text weight="heavy" foreground="#eded33333b3b">Title</rich_text>'
    "<rich_text>\nHi</rich_text>"
    "</node>"
)

GRID = (
    "<table>"
    "<row><cell>x</cell><cell>y</cell></row>"
    "<row><cell>a</cell><cell>b</cell></row>"
    "</table>"
)


def make_png(width: int = 3, height: int = 2) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), (255, 0, 0)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


def populate(conn: sqlite3.Connection, png: bytes) -> None:
    """Fill a CherryTree schema with a small tree.

    1 "Notes" (rich text, children 2 and 3)
      2 "Script" (python code)
      3 "Empty" (rich text)
    4 "Other" (plain text, top level)
    """
    nodes = [
        (1, "Notes", RICH_TEXT, "custom-colors", 0b10, 0b0111 | (0xFF0000 << 3), 0),
        (2, "Script", "print('hi')\n", "python3", 0, 0, 1),
        (3, "Empty", "<node/>", "custom-colors", 1, 1, 1),
        (4, "Other", "just text", "plain-text", 0, 0, 0),
    ]
    conn.executemany(
        "INSERT INTO node (node_id, name, txt, syntax, tags, is_ro, is_richtxt, "
        "has_codebox, has_table, has_image, level, ts_creation, ts_lastsave) "
        "VALUES (?, ?, ?, ?, '', ?, ?, 0, 0, 0, ?, 1000, 2000)",
        nodes,
    )
    conn.executemany(
        "INSERT INTO children (node_id, father_id, sequence, master_id) VALUES (?, ?, ?, 0)",
        [(1, 0, 1), (2, 1, 2), (3, 1, 1), (4, 0, 2)],
    )
    # "Title\nHi": the image sits between "H" and "i", the table ends the text.
    conn.execute(
        "INSERT INTO image (node_id, offset, justification, anchor, png, filename, link, time) "
        "VALUES (1, 7, 'left', '', ?, '', '', 0)",
        (png,),
    )
    conn.execute(
        "INSERT INTO grid (node_id, offset, justification, txt, col_min, col_max) "
        "VALUES (1, 9, 'left', ?, 40, 400)",
        (GRID,),
    )
    conn.commit()


@pytest.fixture
def ctb_path(tmp_path: Path, png_bytes: bytes) -> Path:
    """Return the path of a populated .ctb file."""
    path = tmp_path / "notes.ctb"
    conn = sqlite3.connect(str(path))
    create_schema(conn)
    populate(conn, png_bytes)
    conn.close()
    return path


@pytest.fixture
def storage(ctb_path: Path) -> Iterator[CtbStorage]:
    s = CtbStorage.open(ctb_path)
    yield s
    s.close()
