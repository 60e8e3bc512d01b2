"""CLI for reading CherryTree .ctb document stores."""

import json
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from ctb_archive.config import (
    DATABASE_ENV_VAR,
    SYNTAX_PLAIN_TEXT,
    SYNTAX_RICH_TEXT,
    resolve_database_path,
)
from ctb_archive.core.content.assembler import get_node_content
from ctb_archive.core.database.storage import CtbStorage
from ctb_archive.core.tree.navigation import count_nodes, find_root_node, get_node, get_sub_nodes
from ctb_archive.errors import CtbError
from ctb_archive.logging_config import configure_logging
from ctb_archive.models.node import Node

app = typer.Typer(help="ctb-archive: browse and export CherryTree notes.")

DatabaseOption = Annotated[
    Path | None,
    typer.Option(
        "--database", "-d", help=f"CherryTree .ctb file (default: ${DATABASE_ENV_VAR})"
    ),
]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Also write a debug log to this file"
    ),
) -> None:
    configure_logging(verbose=verbose, log_file=log_file)


def _open_storage(database: Path | None) -> CtbStorage:
    """Open the database, exiting with an error if it can't be read."""
    db_path = resolve_database_path(database)
    if db_path is None:
        logger.error("No database given. Use --database or set ${}.", DATABASE_ENV_VAR)
        raise typer.Exit(1)
    try:
        return CtbStorage.open(db_path)
    except CtbError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e


def _describe_syntax(n: Node) -> str:
    if n.is_rich_text or n.syntax == SYNTAX_RICH_TEXT:
        return "rich text"
    if n.syntax == SYNTAX_PLAIN_TEXT:
        return "plain text"
    return f"code: {n.syntax}"


def _echo_nodes(nodes: tuple[Node, ...], *, output_json: bool) -> None:
    if output_json:
        data = {"nodes": [n.to_dict() for n in nodes], "count": len(nodes)}
        typer.echo(json.dumps(data, indent=2))
        return
    for n in nodes:
        marker = "+" if n.has_children else "-"
        typer.echo(f"  {marker} {n.name}  [id={n.id}, {_describe_syntax(n)}]")


@app.command()
def count(database: DatabaseOption = None) -> None:
    """Print the number of nodes."""
    storage = _open_storage(database)
    try:
        typer.echo(str(count_nodes(storage)))
    except CtbError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e
    finally:
        storage.close()


@app.command()
def node(
    node_id: int = typer.Argument(..., help="Node ID"),
    database: DatabaseOption = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Show a node's metadata."""
    storage = _open_storage(database)
    try:
        _echo_nodes((get_node(storage, node_id),), output_json=output_json)
    except CtbError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e
    finally:
        storage.close()


@app.command()
def children(
    node_id: int = typer.Argument(0, help="Parent node ID (0 lists top-level nodes)"),
    database: DatabaseOption = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """List the children of a node."""
    storage = _open_storage(database)
    try:
        _echo_nodes(get_sub_nodes(storage, node_id), output_json=output_json)
    except CtbError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e
    finally:
        storage.close()


@app.command()
def root(
    node_id: int = typer.Argument(..., help="Node ID"),
    database: DatabaseOption = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Show the top-level ancestor of a node."""
    storage = _open_storage(database)
    try:
        _echo_nodes((find_root_node(storage, node_id),), output_json=output_json)
    except CtbError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e
    finally:
        storage.close()


@app.command()
def content(
    node_id: int = typer.Argument(..., help="Node ID"),
    database: DatabaseOption = None,
    binary_dir: Annotated[
        Path | None,
        typer.Option(
            "--binary-dir", "-b", help="Write images and attachments here instead of inline"
        ),
    ] = None,
) -> None:
    """Print a node's content as JSON."""
    storage = _open_storage(database)
    try:
        node_content = get_node_content(storage, node_id, binary_dir=binary_dir)
    except CtbError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e
    finally:
        storage.close()
    typer.echo(json.dumps(node_content.to_dict(), indent=2, ensure_ascii=False))
