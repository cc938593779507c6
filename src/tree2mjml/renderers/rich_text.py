#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2mjml/renderers/rich_text.py
"""Rich text line formatting for text and heading blocks.

A line is a list of runs. Each run becomes one of:

- an anchor, when it carries a hyperlink; link styles are resolved per
  property from the run's own overrides, then the block's hyperlink styles,
  then the document's ``hyperlink`` defaults
- a ``<span>`` holding only the overrides the run actually sets
- the bare text

The joined runs are wrapped in ``<h1>``/``<h2>``/``<h3>`` or ``<p>`` with an
inline style derived from the document defaults for that line type. Every
declaration carries ``!important`` so email clients cannot override it.
"""

from __future__ import annotations

import logging
from typing import Callable

from tree2mjml.ast.blocks import HyperlinkStyle, RichTextLine, RootStyles, TextRun, TextStyle
from tree2mjml.constants import (
    HEADING_LINE_TAGS,
    IMPORTANT_SUFFIX,
    LINE_STYLE_PROPERTIES,
    LINE_STYLE_SENTINELS,
    LINK_REL,
    LINK_TARGET,
    PARAGRAPH_LINE_TYPE,
)
from tree2mjml.options.tracking import TrackingSettings
from tree2mjml.utils.escape import format_style_attribute
from tree2mjml.utils.styles import margin_declarations, padding_declarations
from tree2mjml.utils.tracking import resolve_tracking_url

logger = logging.getLogger(__name__)

# Renders a run's raw text: template interpolation or HTML escaping
TextRenderer = Callable[[str], str]


def _first(*values: str) -> str:
    for value in values:
        if value:
            return value
    return ""


def _important(prop: str, value: str) -> str:
    return f"{prop}: {value}{IMPORTANT_SUFFIX}"


class RichTextFormatter:
    """Format rich text lines of one block into inline HTML.

    Parameters
    ----------
    root_styles : RootStyles
        Document-wide style defaults
    render_text : callable
        Turns a run's raw text into markup (escaped or template-rendered)
    tracking : TrackingSettings or None
        Tracking configuration applied to hyperlink runs
    hyperlink_style : HyperlinkStyle, optional
        Link styles declared on the block, layered between run overrides and
        the document's hyperlink defaults
    untracked_urls : set of str, optional
        Collects the destinations of links that opt out of tracking

    """

    def __init__(
        self,
        root_styles: RootStyles,
        render_text: TextRenderer,
        tracking: TrackingSettings | None = None,
        hyperlink_style: HyperlinkStyle | None = None,
        untracked_urls: set[str] | None = None,
    ):
        self.root_styles = root_styles
        self.render_text = render_text
        self.tracking = tracking
        self.hyperlink_style = hyperlink_style or HyperlinkStyle()
        self.untracked_urls = untracked_urls

    def format_lines(self, lines: tuple[RichTextLine, ...] | list[RichTextLine]) -> str:
        """Format all lines, dropping empty ones, joined by newlines."""
        formatted = [self.format_line(line) for line in lines]
        return "\n".join(line for line in formatted if line).strip()

    def format_line(self, line: RichTextLine) -> str:
        """Format one line, or return an empty string when every run renders empty or blank.

        Examples
        --------
        >>> from tree2mjml.ast.blocks import RootStyles, TextRun
        >>> formatter = RichTextFormatter(RootStyles(), render_text=str)
        >>> formatter.format_line(RichTextLine(runs=(TextRun(text="Hi"),)))
        '<p style="margin: 0px !important">Hi</p>'

        """
        texts = [self.render_text(run.text) for run in line.runs]
        if not "".join(texts).strip():
            return ""

        content = "".join(self._format_run(run, text) for run, text in zip(line.runs, texts))
        tag = line.type if line.type in HEADING_LINE_TAGS else "p"
        style = format_style_attribute(self.line_declarations(line.type))
        return f"<{tag}{style}>{content}</{tag}>"

    def line_declarations(self, line_type: str) -> list[str]:
        """Block-level declarations for a line, from the document defaults for its type."""
        style_tag = line_type if line_type in HEADING_LINE_TAGS else PARAGRAPH_LINE_TYPE
        style = self.root_styles.for_tag(style_tag)

        declarations = []
        for css_name, attr in LINE_STYLE_PROPERTIES:
            value = getattr(style, attr)
            if value and value not in LINE_STYLE_SENTINELS:
                declarations.append(_important(css_name, value))
        declarations.extend(padding_declarations(style.padding, IMPORTANT_SUFFIX))
        declarations.extend(margin_declarations(style.margin, IMPORTANT_SUFFIX))
        return declarations

    def format_run(self, run: TextRun) -> str:
        """Format a single run as link, span or bare text."""
        return self._format_run(run, self.render_text(run.text))

    def _format_run(self, run: TextRun, text: str) -> str:
        if run.hyperlink is not None:
            if run.hyperlink.disable_tracking and run.hyperlink.url and self.untracked_urls is not None:
                self.untracked_urls.add(run.hyperlink.url)
            href = resolve_tracking_url(run.hyperlink.url, run.hyperlink.disable_tracking, self.tracking)
            style = format_style_attribute(self.link_declarations(run))
            return f'<a{style} href="{href}" target="{LINK_TARGET}" rel="{LINK_REL}">{text}</a>'

        if run.has_formatting:
            style = format_style_attribute(self.span_declarations(run))
            if style:
                return f"<span{style}>{text}</span>"
        return text

    def link_declarations(self, run: TextRun) -> list[str]:
        """Resolve inline link styles, property by property.

        Precedence is run override, then block hyperlink style, then the
        document ``hyperlink`` default.
        """
        block = self.hyperlink_style
        root: TextStyle = self.root_styles.hyperlink
        declarations = []

        color = _first(run.font_color, block.color, root.color)
        if color:
            declarations.append(_important("color", color))

        font_family = _first(run.font_family, block.font_family, root.font_family)
        if font_family:
            declarations.append(_important("font-family", font_family))

        font_size = _first(run.font_size, block.font_size, root.font_size)
        if font_size:
            declarations.append(_important("font-size", font_size))

        font_style = "italic" if run.italic else _first(run.font_style, block.font_style, root.font_style)
        if font_style and font_style != "normal":
            declarations.append(_important("font-style", font_style))

        block_weight = str(block.font_weight) if block.font_weight else ""
        font_weight = "bold" if run.bold else _first(run.font_weight, block_weight, root.font_weight)
        if font_weight not in ("", "normal", "0"):
            declarations.append(_important("font-weight", font_weight))

        if run.underlined is not None:
            decoration = "underline" if run.underlined else "none"
        elif _first(block.text_decoration, root.text_decoration) == "none":
            decoration = "none"
        else:
            decoration = "underline"
        declarations.append(_important("text-decoration", decoration))

        transform = _first(block.text_transform, root.text_transform)
        if transform and transform != "none":
            declarations.append(_important("text-transform", transform))

        return declarations

    @staticmethod
    def span_declarations(run: TextRun) -> list[str]:
        """Declarations for a formatted, non-link run; only overrides present are emitted."""
        declarations = []
        if run.bold:
            declarations.append("font-weight: bold")
        elif run.font_weight and run.font_weight != "normal":
            declarations.append(f"font-weight: {run.font_weight}")

        if run.italic:
            declarations.append("font-style: italic")
        elif run.font_style and run.font_style != "normal":
            declarations.append(f"font-style: {run.font_style}")

        if run.underlined:
            declarations.append("text-decoration: underline")

        if run.font_size:
            declarations.append(_important("font-size", run.font_size))
        if run.font_color:
            declarations.append(_important("color", run.font_color))
        if run.font_family:
            declarations.append(_important("font-family", run.font_family))
        return declarations
