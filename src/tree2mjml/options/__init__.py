#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for tree2mjml renderers.

Every options class is a frozen dataclass; use ``create_updated`` to derive
a modified copy.
"""

from __future__ import annotations

from tree2mjml.options.base import BaseRendererOptions, CloneFrozenMixin
from tree2mjml.options.html import HtmlRendererOptions
from tree2mjml.options.mjml import MjmlRendererOptions
from tree2mjml.options.tracking import TrackingSettings

__all__ = [
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "HtmlRendererOptions",
    "MjmlRendererOptions",
    "TrackingSettings",
]
