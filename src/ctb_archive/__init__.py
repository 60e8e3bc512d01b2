"""Read CherryTree .ctb document stores and reconstruct node content."""

from ctb_archive.core.content.assembler import get_node_content
from ctb_archive.core.database.storage import CtbStorage
from ctb_archive.protocols import BinaryWriterProtocol, StorageProtocol
from ctb_archive.writer import BinaryWriter

__all__ = [
    "BinaryWriter",
    "BinaryWriterProtocol",
    "CtbStorage",
    "StorageProtocol",
    "get_node_content",
]
