"""Exception types raised while reading a CherryTree document store."""


class CtbError(Exception):
    """Base class for all ctb-archive errors."""


class NotFoundError(CtbError):
    """A requested node or row does not exist."""


class StorageError(CtbError):
    """The underlying database query failed."""


class DecodeError(CtbError):
    """Stored data (color, markup, image bytes) could not be decoded."""


class BinaryExportError(CtbError):
    """Extracted images or attachments could not be written to disk."""


class OffsetInconsistencyError(CtbError):
    """An anchored widget's offset cannot be reached in the node's text stream."""

    def __init__(
        self,
        *,
        position: int,
        expected_offset: int,
        current_line_text: str,
        next_line_text: str | None,
    ) -> None:
        self.position = position
        self.expected_offset = expected_offset
        self.current_line_text = current_line_text
        self.next_line_text = next_line_text
        msg = (
            f"expected offset will not appear: cur={position} expected={expected_offset}\n"
            f"remaining text in current line:\n{current_line_text}\n"
        )
        if next_line_text is None:
            msg += "no more lines."
        else:
            msg += f"text in next line:\n{next_line_text}"
        super().__init__(msg)
