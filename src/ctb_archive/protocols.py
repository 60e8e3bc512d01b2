"""Protocols for dependency injection in the content reader."""

from typing import Protocol, runtime_checkable

from ctb_archive.models.node import (
    ChildLink,
    CodeBoxRow,
    GridRow,
    ImageRow,
    NodeContentRow,
    NodeMetaRow,
)


@runtime_checkable
class StorageProtocol(Protocol):
    """Protocol for read access to a CherryTree document store.

    Single-row lookups raise ``NotFoundError`` when the row is absent; other
    failures raise ``StorageError``.
    """

    def count_nodes(self) -> int:
        """Return the number of nodes in the store."""
        ...

    def get_node_meta(self, node_id: int) -> NodeMetaRow:
        """Return node metadata without content."""
        ...

    def get_parent_link(self, node_id: int) -> ChildLink:
        """Return the ``children`` row placing a node under its parent."""
        ...

    def get_child_links(self, parent_id: int) -> list[ChildLink]:
        """Return the child rows of a parent, ordered by sequence."""
        ...

    def get_node_content(self, node_id: int) -> NodeContentRow:
        """Return the raw content row of a node."""
        ...

    def get_image_rows(self, node_id: int) -> list[ImageRow]:
        ...

    def get_codebox_rows(self, node_id: int) -> list[CodeBoxRow]:
        ...

    def get_grid_rows(self, node_id: int) -> list[GridRow]:
        ...


@runtime_checkable
class BinaryWriterProtocol(Protocol):
    """Protocol for writers that persist extracted images and attachments."""

    def write(self, fname: str, data: bytes) -> str:
        """Write data under the output directory and return the written path."""
        ...
