#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2mjml/options/base.py
"""Base classes for renderer and tracking options.

This module defines the foundation classes for the frozen configuration
objects used throughout the tree2mjml pipeline.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for all renderer options.

    Subclasses define renderer-specific options as frozen dataclass fields,
    each documented through ``field(metadata={"help": ...})``, and validate
    value ranges in ``__post_init__``.
    """

    def __post_init__(self) -> None:
        """Validate field values. Subclasses extend this and call ``super().__post_init__()``."""
