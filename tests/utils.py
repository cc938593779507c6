"""Test utilities for the tree2mjml test suite.

Builders for wire-format block dictionaries, so tests read close to the
JSON the visual editor sends.
"""

from typing import Any


def block(block_id: str, kind: str, data: dict[str, Any] | None = None, *children: dict[str, Any]) -> dict[str, Any]:
    """Build a wire-format block."""
    return {"id": block_id, "kind": kind, "data": data or {}, "children": list(children)}


def run(text: str, **formatting: Any) -> dict[str, Any]:
    """Build a rich text run."""
    return {"text": text, **formatting}


def text_block(block_id: str, *runs: dict[str, Any], line_type: str = "paragraph", **data: Any) -> dict[str, Any]:
    """Build a text block holding a single line."""
    payload = {"editorData": [{"type": line_type, "children": list(runs)}], **data}
    return block(block_id, "text", payload)


def spacer(block_id: str, height: str = "20px") -> dict[str, Any]:
    """Build a spacer block."""
    return block(block_id, "spacer", {"height": height})


def column(block_id: str, *children: dict[str, Any], **data: Any) -> dict[str, Any]:
    """Build a column block."""
    return block(block_id, "column", data, *children)


def root(*children: dict[str, Any], styles: dict[str, Any] | None = None) -> dict[str, Any]:
    """Build a root block."""
    return block("root", "root", {"styles": styles or {}}, *children)
