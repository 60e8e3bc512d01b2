"""Row and node models for the CherryTree document store."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NodeMetaRow:
    """Node columns needed to describe a node, without its content."""

    node_id: int
    name: str
    syntax: str
    is_ro: int
    is_richtxt: int
    level: int


@dataclass(frozen=True)
class ChildLink:
    """A row of the ``children`` table linking a node to its parent."""

    node_id: int
    father_id: int
    sequence: int


@dataclass(frozen=True)
class NodeContentRow:
    """Node columns needed to reconstruct content."""

    node_id: int
    txt: str
    syntax: str
    is_richtxt: int
    ts_creation: int
    ts_lastsave: int


@dataclass(frozen=True)
class ImageRow:
    """A row of the ``image`` table: PNG, embedded file, anchor or LaTeX."""

    node_id: int
    offset: int
    justification: str
    anchor: str
    png: bytes
    filename: str
    link: str = ""
    time: int = 0


@dataclass(frozen=True)
class CodeBoxRow:
    node_id: int
    offset: int
    justification: str
    txt: str
    syntax: str
    width: int
    height: int
    is_width_pix: int
    do_highl_bra: int
    do_show_linenum: int


@dataclass(frozen=True)
class GridRow:
    node_id: int
    offset: int
    justification: str
    txt: str
    col_min: int
    col_max: int


@dataclass(frozen=True)
class NodeFlags:
    """Semantic properties packed into the ``is_ro`` and ``is_richtxt`` columns."""

    is_read_only: bool
    icon: int
    is_rich_text: bool
    is_bold: bool
    is_custom_color: bool
    color: int


@dataclass(frozen=True)
class Node:
    """A single node (page) of a CherryTree document, without its content."""

    id: int
    name: str
    syntax: str
    level: int
    is_read_only: bool
    icon: int
    is_rich_text: bool
    is_bold: bool
    is_custom_color: bool
    color: int
    has_children: bool = False

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "syntax": self.syntax,
            "level": self.level,
            "is_read_only": self.is_read_only,
            "icon": self.icon,
            "is_rich_text": self.is_rich_text,
            "is_bold": self.is_bold,
            "is_custom_color": self.is_custom_color,
            "color": self.color,
            "has_children": self.has_children,
        }
