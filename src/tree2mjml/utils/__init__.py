#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2mjml/utils/__init__.py
"""Utility modules for the tree2mjml package.

This package contains style resolution, escaping and attribute formatting,
template interpolation, link tracking and optional dependency helpers.
"""

from tree2mjml.utils.templating import has_template_markers
from tree2mjml.utils.tracking import resolve_tracking_url

__all__ = [
    "has_template_markers",
    "resolve_tracking_url",
]
