"""Build the anchored widgets (code boxes, grids, images) of a node."""

import io
from pathlib import PurePosixPath

from loguru import logger
from PIL import Image, UnidentifiedImageError

from ctb_archive.config import LATEX_PLACEHOLDER_FILENAME
from ctb_archive.core.content.markup import parse_grid
from ctb_archive.errors import DecodeError
from ctb_archive.models.document import (
    Anchor,
    CodeBox,
    EmbeddedFile,
    PngImage,
    Table,
    Widget,
    widget_offset,
)
from ctb_archive.models.node import CodeBoxRow, GridRow, ImageRow
from ctb_archive.protocols import BinaryWriterProtocol, StorageProtocol


def image_size(data: bytes) -> tuple[int, int]:
    """Return (width, height) of encoded image bytes.

    Only the header is read, so Pillow's pixel limit is lifted: large images
    are sized, not rejected.
    """
    limit = Image.MAX_IMAGE_PIXELS
    Image.MAX_IMAGE_PIXELS = None
    try:
        with Image.open(io.BytesIO(data)) as img:
            return img.size
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        msg = f"Cannot decode image ({len(data)} bytes): {e}"
        raise DecodeError(msg) from e
    finally:
        Image.MAX_IMAGE_PIXELS = limit


def code_box_from_row(row: CodeBoxRow) -> CodeBox:
    return CodeBox(
        offset=row.offset,
        justification=row.justification,
        code=row.txt,
        language=row.syntax,
        width=row.width,
        height=row.height,
        is_width_pixel=row.is_width_pix != 0,
        is_highlight_braces=row.do_highl_bra != 0,
        is_show_line_number=row.do_show_linenum != 0,
    )


def table_from_row(row: GridRow) -> Table:
    return Table(
        offset=row.offset,
        justification=row.justification,
        data=parse_grid(row.txt),
        min_col_width=row.col_min,
        max_col_width=row.col_max,
    )


def image_widget_from_row(
    row: ImageRow,
    *,
    writer: BinaryWriterProtocol | None = None,
) -> Widget | None:
    """Turn an image row into an anchor, attachment or PNG widget.

    Returns None for LaTeX rows. With a writer, image and attachment bytes
    are written to ``{node_id}_{offset}{ext}`` and the widget carries the
    path instead of the bytes.
    """
    if row.anchor:
        return Anchor(offset=row.offset, justification=row.justification, name=row.anchor)
    if row.filename == LATEX_PLACEHOLDER_FILENAME:
        logger.debug("Skipping LaTeX element of node {} at offset {}", row.node_id, row.offset)
        return None

    if row.filename:
        disk_path = None
        if writer is not None:
            suffix = PurePosixPath(row.filename).suffix
            disk_path = writer.write(f"{row.node_id}_{row.offset}{suffix}", row.png)
        return EmbeddedFile(
            offset=row.offset,
            justification=row.justification,
            filename=row.filename,
            data=row.png if disk_path is None else None,
            disk_path=disk_path,
        )

    width, height = image_size(row.png)
    disk_path = None
    if writer is not None:
        disk_path = writer.write(f"{row.node_id}_{row.offset}.png", row.png)
    return PngImage(
        offset=row.offset,
        justification=row.justification,
        width=width,
        height=height,
        data=row.png if disk_path is None else None,
        disk_path=disk_path,
    )


def extract_widgets(
    storage: StorageProtocol,
    node_id: int,
    *,
    writer: BinaryWriterProtocol | None = None,
) -> tuple[Widget, ...]:
    """Return all anchored widgets of a node, sorted by offset.

    Args:
        storage: Store to read code box, grid and image rows from.
        node_id: Node whose widgets are wanted.
        writer: If given, images and attachments are saved through it.

    Raises:
        DecodeError: grid markup or image bytes cannot be decoded.
        BinaryExportError: the writer cannot save a binary.
    """
    widgets: list[Widget] = [code_box_from_row(r) for r in storage.get_codebox_rows(node_id)]
    widgets.extend(table_from_row(r) for r in storage.get_grid_rows(node_id))
    for row in storage.get_image_rows(node_id):
        widget = image_widget_from_row(row, writer=writer)
        if widget is not None:
            widgets.append(widget)

    logger.debug("Node {}: {} anchored widgets", node_id, len(widgets))
    return tuple(sorted(widgets, key=widget_offset))
