#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2mjml/constants.py
"""Constants and default values for the tree2mjml compiler.

This module centralizes the block kinds understood by the compiler, the
MJML tags they map to, the fixed column-width table for multi-column
layouts, style sentinels, tracking constants and optional dependency specs.
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

ControlMode = Literal["all", "separate"]
SemanticTag = Literal["body", "h1", "h2", "h3", "paragraph", "hyperlink"]

SEMANTIC_TAGS: tuple[str, ...] = ("body", "h1", "h2", "h3", "paragraph", "hyperlink")

# =============================================================================
# Block kinds
# =============================================================================

KIND_ROOT = "root"
KIND_SECTION = "section"
KIND_ONE_COLUMN = "oneColumn"
KIND_COLUMNS_168 = "columns168"
KIND_COLUMNS_204 = "columns204"
KIND_COLUMNS_420 = "columns420"
KIND_COLUMNS_816 = "columns816"
KIND_COLUMNS_888 = "columns888"
KIND_COLUMNS_1212 = "columns1212"
KIND_COLUMNS_6666 = "columns6666"
KIND_COLUMN = "column"
KIND_TEXT = "text"
KIND_HEADING = "heading"
KIND_IMAGE = "image"
KIND_BUTTON = "button"
KIND_DIVIDER = "divider"
KIND_SPACER = "spacer"
KIND_OPEN_TRACKING = "openTracking"
KIND_LIQUID = "liquid"

# Layout kinds that map to mj-section and own a column-width table entry
LAYOUT_KINDS: frozenset[str] = frozenset(
    {
        KIND_ONE_COLUMN,
        KIND_COLUMNS_168,
        KIND_COLUMNS_204,
        KIND_COLUMNS_420,
        KIND_COLUMNS_816,
        KIND_COLUMNS_888,
        KIND_COLUMNS_1212,
        KIND_COLUMNS_6666,
    }
)

SECTION_KINDS: frozenset[str] = LAYOUT_KINDS | {KIND_SECTION}

# MJML tag emitted for each kind. Kinds mapping to None emit raw content only.
KIND_TAGS: dict[str, str | None] = {
    KIND_ROOT: "mjml",
    **{kind: "mj-section" for kind in SECTION_KINDS},
    KIND_COLUMN: "mj-column",
    KIND_TEXT: "mj-text",
    KIND_HEADING: "mj-text",
    KIND_IMAGE: "mj-image",
    KIND_BUTTON: "mj-button",
    KIND_DIVIDER: "mj-divider",
    KIND_SPACER: "mj-spacer",
    KIND_OPEN_TRACKING: "mj-raw",
    KIND_LIQUID: None,
}

SUPPORTED_KINDS: frozenset[str] = frozenset(KIND_TAGS)

# Column widths by (layout kind, column ordinal). Ordinals past the end of a
# tuple, and layouts with an empty tuple, leave the width unset.
COLUMN_WIDTHS: dict[str, tuple[str, ...]] = {
    KIND_COLUMNS_168: ("66.66%", "33.33%"),
    KIND_COLUMNS_204: ("83.33%", "16.66%"),
    KIND_COLUMNS_420: ("16.66%", "83.33%"),
    KIND_COLUMNS_816: ("33.33%", "66.66%"),
    KIND_COLUMNS_888: ("33.33%", "33.33%", "33.33%"),
    KIND_COLUMNS_1212: ("50%", "50%"),
    KIND_COLUMNS_6666: ("25%", "25%", "25%", "25%"),
    KIND_ONE_COLUMN: (),
}

# =============================================================================
# Style resolution
# =============================================================================

CONTROL_ALL = "all"
CONTROL_SEPARATE = "separate"

SIDES: tuple[str, ...] = ("top", "right", "bottom", "left")

# Values that count as "nothing to emit" for padding, margin and border widths
ZERO_LENGTH_VALUES: frozenset[str] = frozenset({"", "0px"})

# Values skipped when deriving per-line block styles from root defaults
LINE_STYLE_SENTINELS: frozenset[str] = frozenset({"", "0px", "none", "normal", "0"})

# Root-style properties applied to a rich text line, in emission order
LINE_STYLE_PROPERTIES: tuple[tuple[str, str], ...] = (
    ("color", "color"),
    ("font-family", "font_family"),
    ("font-size", "font_size"),
    ("font-style", "font_style"),
    ("font-weight", "font_weight"),
    ("line-height", "line_height"),
    ("letter-spacing", "letter_spacing"),
    ("text-decoration", "text_decoration"),
    ("text-transform", "text_transform"),
)

IMPORTANT_SUFFIX = " !important"
DEFAULT_MARGIN_DECLARATION = "margin: 0px !important"

HEADING_LINE_TAGS: frozenset[str] = frozenset({"h1", "h2", "h3"})
PARAGRAPH_LINE_TYPE = "paragraph"

DEFAULT_BUTTON_INNER_VERTICAL_PADDING = "10"
DEFAULT_BUTTON_INNER_HORIZONTAL_PADDING = "25"

DEFAULT_INDENT_STEP = 2

# =============================================================================
# Templating
# =============================================================================

TEMPLATE_MARKERS: tuple[str, ...] = ("{{", "{%")

OPEN_TRACKING_PIXEL_MARKUP = (
    '<img src="{{ open_tracking_pixel_src }}" alt="" height="1" width="1" '
    'style="display:block; max-height:1px; max-width:1px; visibility:hidden; '
    'mso-hide:all; border:0; padding:0;" />'
)

# =============================================================================
# Tracking
# =============================================================================

TRACKED_URL_SCHEMES: frozenset[str] = frozenset({"http", "https"})
UNTRACKED_URL_PREFIXES: tuple[str, ...] = ("mailto:", "tel:")
NON_TRACKABLE_URL_PREFIXES: tuple[str, ...] = (
    "mailto:",
    "tel:",
    "sms:",
    "javascript:",
    "data:",
    "blob:",
    "file:",
)

UTM_PARAM_KEYS: tuple[str, ...] = (
    "utm_source",
    "utm_medium",
    "utm_campaign",
    "utm_content",
    "utm_term",
    "utm_id",
)

LINK_TARGET = "_blank"
LINK_REL = "noopener noreferrer"

REDIRECT_PATH = "/visit"
OPEN_PIXEL_PATH = "/opens"

# =============================================================================
# Optional dependencies
# =============================================================================

DEPS_MJML = [("mjml-python", "mjml", ">=1.0")]
