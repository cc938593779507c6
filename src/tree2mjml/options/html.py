#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for rendering MJML to HTML."""

from __future__ import annotations

from dataclasses import dataclass, field

from tree2mjml.options.base import BaseRendererOptions
from tree2mjml.options.tracking import TrackingSettings


@dataclass(frozen=True)
class HtmlRendererOptions(BaseRendererOptions):
    """Configuration options for the MJML to HTML renderer.

    Parameters
    ----------
    tracking : TrackingSettings, default TrackingSettings()
        Tracking configuration for the link tracking post-pass
    decode_url_entities : bool, default True
        Undo HTML entity encoding in ``href``, ``src`` and ``action`` values
    apply_link_tracking : bool, default True
        Rewrite links and add the open pixel per ``tracking``

    """

    tracking: TrackingSettings = field(
        default_factory=TrackingSettings,
        metadata={"help": "Tracking configuration for the link tracking pass", "importance": "core"},
    )
    decode_url_entities: bool = field(
        default=True,
        metadata={
            "help": "Decode HTML entities inside URL attributes",
            "cli_name": "no-decode-url-entities",
            "importance": "advanced",
        },
    )
    apply_link_tracking: bool = field(
        default=True,
        metadata={
            "help": "Apply UTM tagging, click redirects and the open pixel to rendered HTML",
            "cli_name": "no-link-tracking",
            "importance": "core",
        },
    )

    def __post_init__(self) -> None:
        """Validate the tracking configuration type."""
        super().__post_init__()

        if not isinstance(self.tracking, TrackingSettings):
            raise ValueError(f"tracking must be TrackingSettings, got {type(self.tracking).__name__}")
