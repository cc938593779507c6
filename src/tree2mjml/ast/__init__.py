#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2mjml/ast/__init__.py
"""Email block tree model.

- nodes: the :class:`EmailBlock` tree node and :class:`LayoutSlot`
- blocks: typed payload records for every block kind and shared style fragments
- serialization: decoding from and encoding to the editor's JSON wire format

Examples
--------
    >>> from tree2mjml.ast import block_from_json
    >>> block = block_from_json('{"id": "d1", "kind": "divider", "data": {"borderColor": "#ccc"}}')
    >>> block.data.border_color
    '#ccc'

"""

from tree2mjml.ast.blocks import (
    BlockData,
    Border,
    BorderSide,
    ButtonData,
    ColumnData,
    DividerData,
    HeadingData,
    Hyperlink,
    HyperlinkStyle,
    ImageData,
    OpenTrackingData,
    Padding,
    RawTemplateData,
    RichTextLine,
    RootData,
    RootStyles,
    SectionData,
    SpacerData,
    TextData,
    TextRun,
    TextStyle,
    Wrapper,
)
from tree2mjml.ast.nodes import BlockKind, EmailBlock, LayoutSlot, copy_block
from tree2mjml.ast.serialization import (
    block_from_dict,
    block_from_json,
    block_to_dict,
    block_to_json,
    decode_block_data,
    root_styles_from_dict,
    root_styles_to_dict,
)

__all__ = [
    "BlockData",
    "BlockKind",
    "Border",
    "BorderSide",
    "ButtonData",
    "ColumnData",
    "DividerData",
    "EmailBlock",
    "HeadingData",
    "Hyperlink",
    "HyperlinkStyle",
    "ImageData",
    "LayoutSlot",
    "OpenTrackingData",
    "Padding",
    "RawTemplateData",
    "RichTextLine",
    "RootData",
    "RootStyles",
    "SectionData",
    "SpacerData",
    "TextData",
    "TextRun",
    "TextStyle",
    "Wrapper",
    "block_from_dict",
    "block_from_json",
    "block_to_dict",
    "block_to_json",
    "copy_block",
    "decode_block_data",
    "root_styles_from_dict",
    "root_styles_to_dict",
]
