"""Reconstruct the content of a single node."""

from pathlib import Path

from loguru import logger

from ctb_archive.core.content.markup import parse_rich_text
from ctb_archive.core.content.merger import merge_content
from ctb_archive.core.content.widgets import extract_widgets
from ctb_archive.core.flags import decode_node_flags
from ctb_archive.models.document import NodeContent
from ctb_archive.protocols import BinaryWriterProtocol, StorageProtocol
from ctb_archive.writer import BinaryWriter


def get_node_content(
    storage: StorageProtocol,
    node_id: int,
    *,
    binary_dir: str | Path | None = None,
    writer: BinaryWriterProtocol | None = None,
) -> NodeContent:
    """Return a node's content as code or as a rich-text document tree.

    Code nodes (plain text included) are returned verbatim. Rich-text nodes
    have their markup parsed and merged with the node's widgets.

    Args:
        storage: Document store to read from.
        node_id: Node to reconstruct.
        binary_dir: If given, images and attachments are written into this
            directory and referenced by path instead of carried inline.
        writer: Writer to use instead of one created for ``binary_dir``.

    Raises:
        NotFoundError: the node does not exist.
        DecodeError, OffsetInconsistencyError, BinaryExportError: the
            content cannot be reconstructed; nothing partial is returned.
    """
    meta = storage.get_node_meta(node_id)
    raw = storage.get_node_content(node_id)
    flags = decode_node_flags(meta.is_ro, meta.is_richtxt)

    if not flags.is_rich_text:
        return NodeContent(
            id=raw.node_id,
            is_rich_text=False,
            created=raw.ts_creation,
            updated=raw.ts_lastsave,
            language=raw.syntax,
            code=raw.txt,
        )

    if writer is None and binary_dir is not None:
        writer = BinaryWriter(binary_dir)
    widgets = extract_widgets(storage, node_id, writer=writer)
    lines = parse_rich_text(raw.txt)
    tree = merge_content(lines, widgets)
    logger.debug("Node {}: {} lines, {} widgets", node_id, len(tree), len(widgets))

    return NodeContent(
        id=raw.node_id,
        is_rich_text=True,
        created=raw.ts_creation,
        updated=raw.ts_lastsave,
        rich_texts=tree,
    )
