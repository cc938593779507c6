#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2mjml/ast/nodes.py
"""Email block tree nodes.

An email document is a tree of :class:`EmailBlock` nodes. Each node has an
identifier, a kind from a closed set, a payload whose shape is determined by
the kind, and ordered children. Nodes are treated as read-only by the
compiler; derived variants are made with :meth:`EmailBlock.copy`.

"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Literal, Union

from tree2mjml.ast.blocks import BlockData
from tree2mjml.constants import COLUMN_WIDTHS, SUPPORTED_KINDS

BlockKind = Literal[
    "root",
    "section",
    "oneColumn",
    "columns168",
    "columns204",
    "columns420",
    "columns816",
    "columns888",
    "columns1212",
    "columns6666",
    "column",
    "text",
    "heading",
    "image",
    "button",
    "divider",
    "spacer",
    "openTracking",
    "liquid",
]

# Payloads are typed records once decoded. Nodes built in code may still
# carry raw wire dictionaries, which the compiler decodes on first use.
Payload = Union[BlockData, dict[str, Any], None]


@dataclass
class EmailBlock:
    """One node of an email block tree.

    Parameters
    ----------
    id : str
        Identifier, unique within a document but not globally enforced
    kind : str
        Block kind (see ``BlockKind``); unknown kinds are kept and compile
        to a placeholder comment
    data : BlockData, dict or None, default = None
        Kind-specific payload
    children : list of EmailBlock, default = empty list
        Child blocks in document order
    path : str, default = ""
        Editor path of the block, carried through unchanged

    Examples
    --------
    >>> from tree2mjml.ast.blocks import SpacerData
    >>> spacer = EmailBlock(id="s1", kind="spacer", data=SpacerData(height="20px"))
    >>> spacer.is_supported
    True

    """

    id: str
    kind: str
    data: Payload = None
    children: list[EmailBlock] = field(default_factory=list)
    path: str = ""

    @property
    def is_supported(self) -> bool:
        """Whether the compiler knows how to translate this kind."""
        return self.kind in SUPPORTED_KINDS

    def copy(self) -> EmailBlock:
        """Return a fully independent copy of this block and its subtree.

        Payload records, raw payload dictionaries and child lists are all
        copied, so mutating the copy never affects the original tree.
        """
        return copy.deepcopy(self)

    def walk(self):
        """Yield this block and all descendants in depth-first document order."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass(frozen=True)
class LayoutSlot:
    """Position of a column inside a fixed-ratio layout.

    The compiler passes a slot downward when recursing into a layout's
    children, so a column can resolve its width without a parent reference.

    Parameters
    ----------
    layout_kind : str
        Kind of the enclosing layout block
    index : int
        Ordinal position of the column among the layout's children

    """

    layout_kind: str
    index: int

    @property
    def column_width(self) -> str | None:
        """Width assigned to this slot, or None when the layout leaves it unset."""
        widths = COLUMN_WIDTHS.get(self.layout_kind, ())
        if 0 <= self.index < len(widths):
            return widths[self.index]
        return None


def copy_block(block: EmailBlock) -> EmailBlock:
    """Return a fully independent copy of ``block`` and its subtree."""
    return block.copy()
