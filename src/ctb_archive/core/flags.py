"""Decoding of packed node flags and stored color strings."""

from ctb_archive.errors import DecodeError
from ctb_archive.models.node import NodeFlags

_UINT32_MASK = 0xFFFFFFFF


def decode_node_flags(is_ro: int, is_richtxt: int) -> NodeFlags:
    """Decode the ``is_ro`` and ``is_richtxt`` node columns.

    ``is_richtxt``: bit 0 rich text, bit 1 bold title, bit 2 custom title
    color, bits 3.. the title color as 0xRRGGBB.
    ``is_ro``: bit 0 read-only, bits 1.. the icon id.
    """
    richtxt = is_richtxt & _UINT32_MASK
    ro = is_ro & _UINT32_MASK
    return NodeFlags(
        is_read_only=bool(ro & 0b1),
        icon=ro >> 1,
        is_rich_text=bool(richtxt & 0b001),
        is_bold=bool(richtxt & 0b010),
        is_custom_color=bool(richtxt & 0b100),
        color=richtxt >> 3,
    )


def normalize_color(value: str) -> str:
    """Shorten a stored 16-bit-per-channel color to ``#rrggbb``.

    Colors are stored as e.g. ``#eded33333b3b``; the high byte of each
    channel is kept, giving ``#ed333b``. The empty string means "unset".
    """
    if not value:
        return ""
    if len(value) < 11:
        msg = f"Malformed color {value!r}: expected at least 11 characters"
        raise DecodeError(msg)
    return value[0:3] + value[5:7] + value[9:11]
