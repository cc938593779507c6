#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for compiling email block trees to MJML."""

from __future__ import annotations

from dataclasses import dataclass, field

from tree2mjml.constants import DEFAULT_INDENT_STEP
from tree2mjml.options.base import BaseRendererOptions
from tree2mjml.options.tracking import TrackingSettings


@dataclass(frozen=True)
class MjmlRendererOptions(BaseRendererOptions):
    """Configuration options for the MJML tree compiler.

    Parameters
    ----------
    tracking : TrackingSettings, default TrackingSettings()
        UTM tagging applied to image, button and text links
    indent : int, default 0
        Indentation (in spaces) of the outermost emitted tag
    indent_step : int, default 2
        Additional spaces per nesting level

    Examples
    --------
        >>> from tree2mjml.options import MjmlRendererOptions, TrackingSettings
        >>> options = MjmlRendererOptions(tracking=TrackingSettings(utm_source="newsletter"))

    """

    tracking: TrackingSettings = field(
        default_factory=TrackingSettings,
        metadata={"help": "Tracking configuration for link rewriting", "importance": "core"},
    )
    indent: int = field(
        default=0,
        metadata={"help": "Indentation of the outermost tag, in spaces", "type": int, "importance": "advanced"},
    )
    indent_step: int = field(
        default=DEFAULT_INDENT_STEP,
        metadata={"help": "Spaces added per nesting level", "type": int, "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate indentation settings.

        Raises
        ------
        ValueError
            If ``indent`` is negative or ``indent_step`` is less than 1

        """
        super().__post_init__()

        if not isinstance(self.tracking, TrackingSettings):
            raise ValueError(f"tracking must be TrackingSettings, got {type(self.tracking).__name__}")
        if self.indent < 0:
            raise ValueError(f"indent must be non-negative, got {self.indent}")
        if self.indent_step < 1:
            raise ValueError(f"indent_step must be at least 1, got {self.indent_step}")
