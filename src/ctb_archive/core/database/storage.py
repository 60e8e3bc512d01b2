"""Read-only SQLite access to a CherryTree .ctb document store."""

import sqlite3
from pathlib import Path
from typing import Any

from loguru import logger

from ctb_archive.core.database.schema import check_schema
from ctb_archive.errors import NotFoundError, StorageError
from ctb_archive.models.node import (
    ChildLink,
    CodeBoxRow,
    GridRow,
    ImageRow,
    NodeContentRow,
    NodeMetaRow,
)


def _str(value: Any) -> str:
    return "" if value is None else str(value)


def _int(value: Any) -> int:
    return 0 if value is None else int(value)


def _to_link(row: tuple[Any, ...]) -> ChildLink:
    return ChildLink(node_id=_int(row[0]), father_id=_int(row[1]), sequence=_int(row[2]))


class CtbStorage:
    """Storage collaborator backed by a sqlite3 connection.

    The connection is owned by the caller unless the storage was created
    with ``open()``, in which case ``close()`` closes it.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    @classmethod
    def open(cls, path: str | Path) -> "CtbStorage":
        """Open a .ctb file read-only and check that it is a CherryTree store."""
        db_path = Path(path).expanduser()
        if not db_path.is_file():
            msg = f"Database not found: {str(db_path)!r}"
            raise NotFoundError(msg)
        try:
            conn = sqlite3.connect(f"{db_path.resolve().as_uri()}?mode=ro", uri=True)
        except sqlite3.Error as e:
            msg = f"Cannot open {str(db_path)!r}: {e}"
            raise StorageError(msg) from e
        try:
            check_schema(conn)
        except StorageError:
            conn.close()
            raise
        logger.debug("Opened {}", db_path)
        return cls(conn)

    def close(self) -> None:
        self.conn.close()

    def _fetchone(self, sql: str, params: tuple[Any, ...], what: str) -> tuple[Any, ...]:
        row = self._fetchall(sql, params)
        if not row:
            msg = f"{what} not found"
            raise NotFoundError(msg)
        return row[0]

    def _fetchall(self, sql: str, params: tuple[Any, ...] = ()) -> list[tuple[Any, ...]]:
        try:
            return self.conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            msg = f"Query failed: {e}"
            raise StorageError(msg) from e

    def count_nodes(self) -> int:
        rows = self._fetchall("SELECT COUNT(*) FROM node")
        return int(rows[0][0]) if rows else 0

    def get_node_meta(self, node_id: int) -> NodeMetaRow:
        r = self._fetchone(
            "SELECT node_id, name, syntax, is_ro, is_richtxt, level FROM node WHERE node_id = ?",
            (node_id,),
            f"Node {node_id}",
        )
        return NodeMetaRow(
            node_id=_int(r[0]), name=_str(r[1]), syntax=_str(r[2]),
            is_ro=_int(r[3]), is_richtxt=_int(r[4]), level=_int(r[5]),
        )

    def get_parent_link(self, node_id: int) -> ChildLink:
        r = self._fetchone(
            "SELECT node_id, father_id, sequence FROM children WHERE node_id = ?",
            (node_id,),
            f"Children row of node {node_id}",
        )
        return _to_link(r)

    def get_child_links(self, parent_id: int) -> list[ChildLink]:
        rows = self._fetchall(
            "SELECT node_id, father_id, sequence FROM children "
            "WHERE father_id = ? ORDER BY sequence",
            (parent_id,),
        )
        return [_to_link(r) for r in rows]

    def get_node_content(self, node_id: int) -> NodeContentRow:
        r = self._fetchone(
            "SELECT node_id, txt, syntax, is_richtxt, ts_creation, ts_lastsave "
            "FROM node WHERE node_id = ?",
            (node_id,),
            f"Node {node_id}",
        )
        return NodeContentRow(
            node_id=_int(r[0]), txt=_str(r[1]), syntax=_str(r[2]),
            is_richtxt=_int(r[3]), ts_creation=_int(r[4]), ts_lastsave=_int(r[5]),
        )

    def get_image_rows(self, node_id: int) -> list[ImageRow]:
        rows = self._fetchall(
            'SELECT node_id, "offset", justification, anchor, png, filename, link, time '
            "FROM image WHERE node_id = ?",
            (node_id,),
        )
        return [
            ImageRow(
                node_id=_int(r[0]), offset=_int(r[1]), justification=_str(r[2]),
                anchor=_str(r[3]), png=bytes(r[4] or b""), filename=_str(r[5]),
                link=_str(r[6]), time=_int(r[7]),
            )
            for r in rows
        ]

    def get_codebox_rows(self, node_id: int) -> list[CodeBoxRow]:
        rows = self._fetchall(
            'SELECT node_id, "offset", justification, txt, syntax, width, height, '
            "is_width_pix, do_highl_bra, do_show_linenum FROM codebox WHERE node_id = ?",
            (node_id,),
        )
        return [
            CodeBoxRow(
                node_id=_int(r[0]), offset=_int(r[1]), justification=_str(r[2]),
                txt=_str(r[3]), syntax=_str(r[4]), width=_int(r[5]), height=_int(r[6]),
                is_width_pix=_int(r[7]), do_highl_bra=_int(r[8]), do_show_linenum=_int(r[9]),
            )
            for r in rows
        ]

    def get_grid_rows(self, node_id: int) -> list[GridRow]:
        rows = self._fetchall(
            'SELECT node_id, "offset", justification, txt, col_min, col_max '
            "FROM grid WHERE node_id = ?",
            (node_id,),
        )
        return [
            GridRow(
                node_id=_int(r[0]), offset=_int(r[1]), justification=_str(r[2]),
                txt=_str(r[3]), col_min=_int(r[4]), col_max=_int(r[5]),
            )
            for r in rows
        ]
