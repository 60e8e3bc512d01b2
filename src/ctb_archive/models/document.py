"""Document tree elements: styled text runs and anchored widgets."""

import base64
from dataclasses import dataclass, fields
from typing import Any, ClassVar, TypeAlias


@dataclass(frozen=True)
class TextRun:
    """A run of text sharing one style.

    An empty ``text`` marks a functional run that carries only style or
    marker semantics; it is still part of the document.
    """

    kind: ClassVar[str] = "text"

    text: str
    foreground: str = ""
    background: str = ""
    weight: str = ""
    style: str = ""
    underline: str = ""
    strikethrough: str = ""
    scale: str = ""
    family: str = ""
    link: str = ""
    justification: str = ""
    indent: int = 0


@dataclass(frozen=True)
class CodeBox:
    kind: ClassVar[str] = "code-box"

    offset: int
    justification: str
    code: str
    language: str
    width: int
    height: int
    is_width_pixel: bool
    is_highlight_braces: bool
    is_show_line_number: bool


@dataclass(frozen=True)
class Table:
    """A grid widget; ``data`` holds rows of cell strings in display order."""

    kind: ClassVar[str] = "grid"

    offset: int
    justification: str
    data: tuple[tuple[str, ...], ...]
    min_col_width: int
    max_col_width: int


@dataclass(frozen=True)
class PngImage:
    """An embedded image. Exactly one of ``data`` and ``disk_path`` is set."""

    kind: ClassVar[str] = "image-png"

    offset: int
    justification: str
    width: int
    height: int
    data: bytes | None = None
    disk_path: str | None = None


@dataclass(frozen=True)
class EmbeddedFile:
    """An attached file. Exactly one of ``data`` and ``disk_path`` is set."""

    kind: ClassVar[str] = "image-embfile"

    offset: int
    justification: str
    filename: str
    data: bytes | None = None
    disk_path: str | None = None


@dataclass(frozen=True)
class Anchor:
    kind: ClassVar[str] = "image-anchor"

    offset: int
    justification: str
    name: str


Widget: TypeAlias = CodeBox | Table | PngImage | EmbeddedFile | Anchor
Element: TypeAlias = TextRun | Widget
Line: TypeAlias = tuple[Element, ...]
DocumentTree: TypeAlias = tuple[Line, ...]


def widget_offset(widget: Widget) -> int:
    """Character position the widget occupies in its node's text stream."""
    return widget.offset


def element_to_dict(element: Element) -> dict[str, Any]:
    """Serialize an element to a JSON-ready dict tagged with its ``type``."""
    out: dict[str, Any] = {"type": element.kind}
    for f in fields(element):
        value = getattr(element, f.name)
        if value is None:
            continue
        if isinstance(value, bytes):
            value = base64.b64encode(value).decode("ascii")
        elif isinstance(element, Table) and f.name == "data":
            value = [list(row) for row in value]
        out[f.name] = value
    return out


@dataclass(frozen=True)
class NodeContent:
    """Content of one node: either code (plain text included) or a rich-text tree."""

    id: int
    is_rich_text: bool
    created: int
    updated: int
    language: str = ""
    code: str = ""
    rich_texts: DocumentTree | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "is_rich_text": self.is_rich_text,
            "created": self.created,
            "updated": self.updated,
        }
        if self.rich_texts is None:
            out["language"] = self.language
            out["code"] = self.code
        else:
            out["rich_texts"] = [
                [element_to_dict(element) for element in line] for line in self.rich_texts
            ]
        return out
