"""Configuration constants for ctb-archive."""

import os
from pathlib import Path

# Environment variable naming the default .ctb database.
DATABASE_ENV_VAR: str = "CTB_ARCHIVE_DATABASE"

# Node syntax values. Anything else is the language of a code node.
SYNTAX_RICH_TEXT: str = "custom-colors"
SYNTAX_PLAIN_TEXT: str = "plain-text"

# Image rows with this filename hold LaTeX formulas, which are not supported.
LATEX_PLACEHOLDER_FILENAME: str = "__ct_special.tex"

# Tables a file must have to be treated as a CherryTree store.
REQUIRED_TABLES: frozenset[str] = frozenset(
    {"node", "children", "codebox", "grid", "image"}
)


def resolve_database_path(explicit: Path | None = None) -> Path | None:
    """Return the database to open: explicit path first, then $CTB_ARCHIVE_DATABASE."""
    if explicit is not None:
        return explicit.expanduser()
    env_value = os.environ.get(DATABASE_ENV_VAR)
    if env_value:
        return Path(env_value).expanduser()
    return None
