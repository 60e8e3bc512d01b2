"""Tree navigation: node lookup, children, root ancestor."""

from ctb_archive.core.flags import decode_node_flags
from ctb_archive.errors import NotFoundError, StorageError
from ctb_archive.models.node import Node
from ctb_archive.protocols import StorageProtocol


def count_nodes(storage: StorageProtocol) -> int:
    """Return the number of nodes in the store (0 when empty)."""
    try:
        return storage.count_nodes()
    except NotFoundError:
        return 0


def get_node(storage: StorageProtocol, node_id: int) -> Node:
    """Get a node's decoded metadata, without content."""
    meta = storage.get_node_meta(node_id)
    flags = decode_node_flags(meta.is_ro, meta.is_richtxt)
    return Node(
        id=meta.node_id,
        name=meta.name,
        syntax=meta.syntax,
        level=meta.level,
        is_read_only=flags.is_read_only,
        icon=flags.icon,
        is_rich_text=flags.is_rich_text,
        is_bold=flags.is_bold,
        is_custom_color=flags.is_custom_color,
        color=flags.color,
        has_children=bool(storage.get_child_links(meta.node_id)),
    )


def get_sub_nodes(storage: StorageProtocol, node_id: int) -> tuple[Node, ...]:
    """Get direct children of a node, ordered by sequence.

    Node id 0 lists the top-level nodes.
    """
    return tuple(get_node(storage, link.node_id) for link in storage.get_child_links(node_id))


def find_root_node(storage: StorageProtocol, node_id: int) -> Node:
    """Get the top-level ancestor of a node (the node itself if top-level)."""
    link = storage.get_parent_link(node_id)
    seen = {link.node_id}
    while link.father_id != 0:
        link = storage.get_parent_link(link.father_id)
        if link.node_id in seen:
            msg = f"Cycle in children table at node {link.node_id}"
            raise StorageError(msg)
        seen.add(link.node_id)
    return get_node(storage, link.node_id)
