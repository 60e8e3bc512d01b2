"""SQLite schema of CherryTree .ctb document stores."""

import sqlite3

from ctb_archive.config import REQUIRED_TABLES
from ctb_archive.errors import StorageError

# Table layout written by CherryTree. This package only reads it; the DDL
# is used to build fixture databases.
_SCHEMA_SQL = """\
CREATE TABLE IF NOT EXISTS node (
    node_id INTEGER UNIQUE,
    name TEXT,
    txt TEXT,
    syntax TEXT,
    tags TEXT,
    is_ro INTEGER,
    is_richtxt INTEGER,
    has_codebox INTEGER,
    has_table INTEGER,
    has_image INTEGER,
    level INTEGER,
    ts_creation INTEGER,
    ts_lastsave INTEGER
);

CREATE TABLE IF NOT EXISTS codebox (
    node_id INTEGER,
    offset INTEGER,
    justification TEXT,
    txt TEXT,
    syntax TEXT,
    width INTEGER,
    height INTEGER,
    is_width_pix INTEGER,
    do_highl_bra INTEGER,
    do_show_linenum INTEGER
);

CREATE TABLE IF NOT EXISTS grid (
    node_id INTEGER,
    offset INTEGER,
    justification TEXT,
    txt TEXT,
    col_min INTEGER,
    col_max INTEGER
);

CREATE TABLE IF NOT EXISTS image (
    node_id INTEGER,
    offset INTEGER,
    justification TEXT,
    anchor TEXT,
    png BLOB,
    filename TEXT,
    link TEXT,
    time INTEGER
);

CREATE TABLE IF NOT EXISTS children (
    node_id INTEGER UNIQUE,
    father_id INTEGER,
    sequence INTEGER,
    master_id INTEGER
);

CREATE TABLE IF NOT EXISTS bookmark (
    node_id INTEGER UNIQUE,
    sequence INTEGER
);
"""


def create_schema(conn: sqlite3.Connection) -> None:
    """Create all CherryTree tables."""
    conn.executescript(_SCHEMA_SQL)
    conn.commit()


def missing_tables(conn: sqlite3.Connection) -> set[str]:
    """Return the required CherryTree tables absent from the database."""
    try:
        rows = conn.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()
    except sqlite3.Error as e:
        msg = f"Cannot read database schema: {e}"
        raise StorageError(msg) from e
    return set(REQUIRED_TABLES) - {row[0] for row in rows}


def check_schema(conn: sqlite3.Connection) -> None:
    """Raise StorageError unless the database looks like a CherryTree store."""
    missing = missing_tables(conn)
    if missing:
        msg = f"Not a CherryTree database, missing tables: {sorted(missing)!r}"
        raise StorageError(msg)
