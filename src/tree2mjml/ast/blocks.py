#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2mjml/ast/blocks.py
"""Typed payload records for email blocks.

Every block kind carries a payload whose shape is fixed by the kind. The
records in this module form a tagged union over those shapes: the compiler
works with these values only, never with raw wire dictionaries. Decoding
from the wire format lives in :mod:`tree2mjml.ast.serialization`.

Shared style fragments
----------------------
- Padding: control mode, shorthand value and four sides
- BorderSide / Border: control mode, shorthand side, four sides and radius
- Wrapper: alignment plus padding and border around an image or button

Payload records
---------------
- RootData (document-wide RootStyles)
- SectionData (``section`` and all column layouts)
- ColumnData, TextData, HeadingData, ImageData, ButtonData
- DividerData, SpacerData, RawTemplateData, OpenTrackingData

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from tree2mjml.constants import PARAGRAPH_LINE_TYPE, SEMANTIC_TAGS


@dataclass(frozen=True)
class Padding:
    """Padding group resolved by control mode.

    Parameters
    ----------
    control : str, default = ""
        ``"all"``, ``"separate"``, or anything else (treated as shorthand)
    shorthand : str, default = ""
        Single padding value used by ``"all"`` and the fallback mode
    top, right, bottom, left : str, default = ""
        Per-side values used by ``"separate"``

    """

    control: str = ""
    shorthand: str = ""
    top: str = ""
    right: str = ""
    bottom: str = ""
    left: str = ""


@dataclass(frozen=True)
class BorderSide:
    """One border declaration (width, style, color)."""

    style: str = ""
    width: str = ""
    color: str = ""


@dataclass(frozen=True)
class Border:
    """Border group resolved by control mode.

    Parameters
    ----------
    control : str, default = ""
        ``"all"`` or ``"separate"``; borders are only emitted for these modes
    shorthand : BorderSide
        Border applied to every side in ``"all"`` mode
    top, right, bottom, left : BorderSide
        Per-side borders used by ``"separate"``
    radius : str, default = ""
        Border radius, independent of the control mode

    """

    control: str = ""
    shorthand: BorderSide = field(default_factory=BorderSide)
    top: BorderSide = field(default_factory=BorderSide)
    right: BorderSide = field(default_factory=BorderSide)
    bottom: BorderSide = field(default_factory=BorderSide)
    left: BorderSide = field(default_factory=BorderSide)
    radius: str = ""


@dataclass(frozen=True)
class Wrapper:
    """Container styles around an image or a button."""

    align: str = ""
    padding: Padding = field(default_factory=Padding)
    border: Border = field(default_factory=Border)


@dataclass(frozen=True)
class TextStyle:
    """Document-wide style defaults for one semantic tag.

    All values are kept as strings; numeric wire values are normalized during
    decoding (``400`` becomes ``"400"``).
    """

    color: str = ""
    font_family: str = ""
    font_size: str = ""
    font_style: str = ""
    font_weight: str = ""
    line_height: str = ""
    letter_spacing: str = ""
    text_decoration: str = ""
    text_transform: str = ""
    width: str = ""
    background_color: str = ""
    padding: Padding = field(default_factory=Padding)
    margin: Padding = field(default_factory=Padding)


@dataclass(frozen=True)
class RootStyles:
    """Immutable set of document-wide style defaults, keyed by semantic tag."""

    body: TextStyle = field(default_factory=TextStyle)
    h1: TextStyle = field(default_factory=TextStyle)
    h2: TextStyle = field(default_factory=TextStyle)
    h3: TextStyle = field(default_factory=TextStyle)
    paragraph: TextStyle = field(default_factory=TextStyle)
    hyperlink: TextStyle = field(default_factory=TextStyle)

    def for_tag(self, tag: str) -> TextStyle:
        """Return the defaults for ``tag``, or empty defaults for unknown tags."""
        if tag in SEMANTIC_TAGS:
            return getattr(self, tag)
        return TextStyle()


@dataclass(frozen=True)
class Hyperlink:
    """Link target carried by a text run."""

    url: str = ""
    disable_tracking: bool = False


@dataclass(frozen=True)
class TextRun:
    """One formatted span of text within a rich text line.

    ``underlined`` is ``None`` when the run does not state it, which lets a
    hyperlink fall back to the block or root text decoration.
    """

    text: str = ""
    bold: bool = False
    italic: bool = False
    underlined: Optional[bool] = None
    font_size: str = ""
    font_color: str = ""
    font_family: str = ""
    font_weight: str = ""
    font_style: str = ""
    hyperlink: Optional[Hyperlink] = None

    @property
    def has_formatting(self) -> bool:
        """Whether the run overrides any formatting of its line."""
        return bool(
            self.bold
            or self.italic
            or self.underlined
            or self.font_size
            or self.font_color
            or self.font_family
            or self.font_weight
            or self.font_style
        )


@dataclass(frozen=True)
class RichTextLine:
    """A paragraph or heading line made of ordered runs."""

    type: str = PARAGRAPH_LINE_TYPE
    runs: tuple[TextRun, ...] = ()


@dataclass(frozen=True)
class HyperlinkStyle:
    """Link styles declared on a text block, layered under run overrides."""

    color: str = ""
    text_decoration: str = ""
    font_family: str = ""
    font_size: str = ""
    font_weight: int = 0
    font_style: str = ""
    text_transform: str = ""


@dataclass(frozen=True)
class RootData:
    """Payload of the ``root`` block."""

    styles: RootStyles = field(default_factory=RootStyles)


@dataclass(frozen=True)
class SectionData:
    """Payload shared by ``section`` and the fixed-ratio column layouts."""

    columns_on_mobile: bool = False
    stack_columns_at_width: int = 0
    background_type: str = ""
    text_align: str = ""
    background_color: str = ""
    background_image: str = ""
    background_size: str = ""
    background_repeat: str = ""
    padding: Padding = field(default_factory=Padding)
    border: Border = field(default_factory=Border)
    columns: tuple[int, ...] = ()


@dataclass(frozen=True)
class ColumnData:
    """Payload of a ``column`` block."""

    vertical_align: str = ""
    background_color: str = ""
    min_height: str = ""
    padding: Padding = field(default_factory=Padding)
    border: Border = field(default_factory=Border)


@dataclass(frozen=True)
class TextData:
    """Payload of a ``text`` block."""

    align: str = ""
    width: str = ""
    hyperlink_styles: HyperlinkStyle = field(default_factory=HyperlinkStyle)
    lines: tuple[RichTextLine, ...] = ()
    background_color: str = ""
    padding: Padding = field(default_factory=Padding)


@dataclass(frozen=True)
class HeadingData:
    """Payload of a ``heading`` block. ``type`` is ``h1``, ``h2`` or ``h3``."""

    type: str = "h1"
    align: str = ""
    width: str = ""
    lines: tuple[RichTextLine, ...] = ()
    background_color: str = ""
    padding: Padding = field(default_factory=Padding)


@dataclass(frozen=True)
class ImageData:
    """Payload of an ``image`` block."""

    src: str = ""
    alt: str = ""
    href: str = ""
    width: str = ""
    disable_tracking: bool = False
    wrapper: Wrapper = field(default_factory=Wrapper)


@dataclass(frozen=True)
class ButtonData:
    """Payload of a ``button`` block.

    The button's own border group (including its radius) lives in ``border``;
    the surrounding container styles live in ``wrapper``.
    """

    text: str = ""
    href: str = ""
    background_color: str = ""
    font_family: str = ""
    font_size: str = ""
    font_weight: int = 0
    font_style: str = ""
    color: str = ""
    inner_vertical_padding: str = ""
    inner_horizontal_padding: str = ""
    width: str = ""
    text_transform: str = ""
    disable_tracking: bool = False
    border: Border = field(default_factory=Border)
    wrapper: Wrapper = field(default_factory=Wrapper)


@dataclass(frozen=True)
class DividerData:
    """Payload of a ``divider`` block."""

    align: str = ""
    border_color: str = ""
    border_style: str = ""
    border_width: str = ""
    background_color: str = ""
    width: str = ""
    padding: Padding = field(default_factory=Padding)


@dataclass(frozen=True)
class SpacerData:
    """Payload of a ``spacer`` block."""

    height: str = ""
    background_color: str = ""


@dataclass(frozen=True)
class RawTemplateData:
    """Payload of a ``liquid`` block: template code rendered verbatim."""

    code: str = ""


@dataclass(frozen=True)
class OpenTrackingData:
    """Payload of an ``openTracking`` block (carries no fields)."""


BlockData = Union[
    RootData,
    SectionData,
    ColumnData,
    TextData,
    HeadingData,
    ImageData,
    ButtonData,
    DividerData,
    SpacerData,
    RawTemplateData,
    OpenTrackingData,
]
