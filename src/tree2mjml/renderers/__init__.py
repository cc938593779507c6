#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/tree2mjml/renderers/__init__.py
"""Renderers for email block trees.

- MjmlRenderer: compile a block tree to MJML (always available)
- HtmlRenderer: render MJML to HTML (requires mjml-python unless a converter is injected)
- RichTextFormatter: inline HTML for text and heading lines
"""

from tree2mjml.renderers.base import BaseRenderer
from tree2mjml.renderers.html import HtmlRenderer
from tree2mjml.renderers.mjml import MjmlRenderer, tree_to_mjml
from tree2mjml.renderers.rich_text import RichTextFormatter

__all__ = [
    "BaseRenderer",
    "HtmlRenderer",
    "MjmlRenderer",
    "RichTextFormatter",
    "tree_to_mjml",
]
