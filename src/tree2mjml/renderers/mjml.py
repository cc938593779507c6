#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2mjml/renderers/mjml.py
"""MJML compilation from email block trees.

This module provides the MjmlRenderer class, a recursive compiler that turns
an :class:`~tree2mjml.ast.nodes.EmailBlock` tree into an MJML document. Each
block kind maps to one MJML tag; attributes are derived from the block's
typed payload, text content is produced by the rich text formatter, and
children are compiled one indentation level deeper.

Compilation is all-or-nothing: a payload that does not match its kind, bad
template data, or a template the engine rejects aborts the whole compile
with an error naming the offending block. Unknown kinds are not errors; they
compile to a visible placeholder comment.

"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, Mapping

from tree2mjml.ast.blocks import (
    ButtonData,
    ColumnData,
    DividerData,
    HeadingData,
    ImageData,
    OpenTrackingData,
    RawTemplateData,
    RichTextLine,
    RootData,
    RootStyles,
    SectionData,
    SpacerData,
    TextData,
)
from tree2mjml.ast.nodes import EmailBlock, LayoutSlot
from tree2mjml.ast.serialization import decode_block_data
from tree2mjml.constants import (
    DEFAULT_BUTTON_INNER_HORIZONTAL_PADDING,
    DEFAULT_BUTTON_INNER_VERTICAL_PADDING,
    DEFAULT_INDENT_STEP,
    KIND_BUTTON,
    KIND_COLUMN,
    KIND_DIVIDER,
    KIND_HEADING,
    KIND_IMAGE,
    KIND_LIQUID,
    KIND_OPEN_TRACKING,
    KIND_ROOT,
    KIND_SPACER,
    KIND_TAGS,
    KIND_TEXT,
    LAYOUT_KINDS,
    LINK_REL,
    LINK_TARGET,
    OPEN_TRACKING_PIXEL_MARKUP,
    PARAGRAPH_LINE_TYPE,
    SECTION_KINDS,
)
from tree2mjml.options.mjml import MjmlRendererOptions
from tree2mjml.options.tracking import TrackingSettings
from tree2mjml.renderers.base import BaseRenderer
from tree2mjml.renderers.rich_text import RichTextFormatter
from tree2mjml.utils.escape import escape_html, format_attributes, indent_pad, normalize_pixel_value, strip_px
from tree2mjml.utils.styles import apply_border, apply_padding, border_attributes, border_radius_attributes
from tree2mjml.utils.templating import TemplateData, TemplateEngine, has_template_markers
from tree2mjml.utils.tracking import resolve_tracking_url

logger = logging.getLogger(__name__)

# Attributes that make an attribute-only tag worth emitting, per kind
_SELF_CLOSING_ATTRIBUTES: dict[str, frozenset[str]] = {
    KIND_IMAGE: frozenset({"src"}),
    KIND_DIVIDER: frozenset({"border-color", "border-style", "border-width", "width"}),
    KIND_SPACER: frozenset({"height", "container-background-color"}),
}

Attributes = dict[str, Any]


class MjmlRenderer(BaseRenderer):
    """Compile email block trees to MJML.

    Parameters
    ----------
    options : MjmlRendererOptions or None, default = None
        Tracking and indentation options

    Attributes
    ----------
    untracked_urls : set of str
        Destinations of links that opted out of tracking during the last
        compile, so a later HTML pass can leave them alone

    Examples
    --------
    Compile a decoded tree:

        >>> from tree2mjml.ast.serialization import block_from_dict
        >>> from tree2mjml.renderers.mjml import MjmlRenderer
        >>> tree = block_from_dict({"id": "r", "kind": "root", "data": {"styles": {}}, "children": []})
        >>> print(MjmlRenderer().render_to_string(tree))
        <mjml>
          <mj-body>
          </mj-body>
        </mjml>

    """

    def __init__(self, options: MjmlRendererOptions | None = None):
        """Initialize the MJML renderer with options."""
        BaseRenderer._validate_options_type(options, MjmlRendererOptions, "mjml")
        options = options or MjmlRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: MjmlRendererOptions = options
        self._engine = TemplateEngine()
        self._root_styles = RootStyles()
        self._template_data = TemplateData()
        self.untracked_urls: set[str] = set()
        self._dispatch: dict[str, Callable[[EmailBlock, Any, int, LayoutSlot | None], str]] = {
            KIND_ROOT: self._render_root,
            KIND_COLUMN: self._render_column,
            KIND_TEXT: self._render_text,
            KIND_HEADING: self._render_heading,
            KIND_IMAGE: self._render_image,
            KIND_BUTTON: self._render_button,
            KIND_DIVIDER: self._render_divider,
            KIND_SPACER: self._render_spacer,
            KIND_OPEN_TRACKING: self._render_open_tracking,
            KIND_LIQUID: self._render_raw_template,
            **{kind: self._render_section for kind in SECTION_KINDS},
        }

    @property
    def tracking(self) -> TrackingSettings:
        return self.options.tracking

    def render_to_string(  # type: ignore[override]
        self,
        block: EmailBlock,
        root_styles: RootStyles | None = None,
        template_data: str | Mapping[str, Any] | None = None,
        layout_slot: LayoutSlot | None = None,
    ) -> str:
        """Compile a block tree to MJML.

        Parameters
        ----------
        block : EmailBlock
            Block to compile, normally the ``root`` block
        root_styles : RootStyles, optional
            Document-wide style defaults. Defaults to the styles carried by
            ``block`` when it is a root block, otherwise empty defaults.
        template_data : str or Mapping, optional
            Template data as a JSON object string or a decoded mapping
        layout_slot : LayoutSlot, optional
            Position of ``block`` inside a column layout, when compiling a
            column on its own

        Returns
        -------
        str
            MJML markup, or an empty string when the block renders nothing

        Raises
        ------
        BlockDataError
            If a payload does not match its block kind
        TemplateDataError
            If the template data is not a JSON object
        TemplateRenderError
            If a template fails to render

        """
        if root_styles is None:
            root_styles = self._styles_of(block)
        self._root_styles = root_styles
        self._template_data = TemplateData(template_data)
        self.untracked_urls = set()

        logger.debug(f"Compiling block tree {block.id!r} ({block.kind}) to MJML")
        return self._render_block(block, self.options.indent, layout_slot)

    @staticmethod
    def _styles_of(block: EmailBlock) -> RootStyles:
        if block.kind != KIND_ROOT:
            return RootStyles()
        data = decode_block_data(KIND_ROOT, block.data, block.id)
        return data.styles

    # ------------------------------------------------------------------
    # Dispatch and assembly
    # ------------------------------------------------------------------

    def _render_block(self, block: EmailBlock, indent: int, slot: LayoutSlot | None = None) -> str:
        handler = self._dispatch.get(block.kind)
        if handler is None:
            logger.warning(f"MJML conversion not implemented for block kind {block.kind!r} (block ID: {block.id})")
            return f"{indent_pad(indent)}<!-- MJML Not Implemented: {block.kind} -->"

        data = decode_block_data(block.kind, block.data, block.id)
        return handler(block, data, indent, slot)

    def _render_children(self, block: EmailBlock, indent: int, with_slots: bool = False) -> str:
        """Compile children at ``indent``, dropping blank output."""
        fragments = []
        for index, child in enumerate(block.children):
            slot = LayoutSlot(block.kind, index) if with_slots else None
            fragment = self._render_block(child, indent, slot)
            if fragment.strip():
                fragments.append(fragment)
        return "\n".join(fragments)

    def _assemble(
        self,
        block: EmailBlock,
        attrs: Attributes,
        indent: int,
        content: str = "",
        children: str | None = None,
    ) -> str:
        """Wrap content or compiled children in the block's tag.

        Leaf kinds pass ``children=""`` so their own children are never
        compiled. When neither content nor children is present, image, divider
        and spacer render self-closing if they set one of their defining
        attributes; everything else renders nothing.
        """
        tag = KIND_TAGS.get(block.kind)
        if children is None:
            children = self._render_children(block, indent + self.options.indent_step)
        if tag is None:
            return children

        sp = indent_pad(indent)
        opening = f"{sp}<{tag}{format_attributes(attrs)}>"
        closing = f"{sp}</{tag}>"

        if content:
            inner_pad = indent_pad(indent + self.options.indent_step)
            inner = "\n".join(f"{inner_pad}{line}" for line in content.split("\n"))
            return f"{opening}\n{inner}\n{closing}"
        if children:
            return f"{opening}\n{children}\n{closing}"
        defining = _SELF_CLOSING_ATTRIBUTES.get(block.kind, frozenset())
        if any(attrs.get(name) for name in defining):
            return f"{sp}<{tag}{format_attributes(attrs)} />"
        return ""

    def _render_text_value(self, text: str, block: EmailBlock) -> str:
        """Render templated text with the template engine, escape everything else."""
        if has_template_markers(text):
            context = self._template_data.context(block.id, block.kind)
            return self._engine.render(text, context, block_id=block.id, block_kind=block.kind)
        return escape_html(text)

    def _link_attributes(self, href: str, disable_tracking: bool) -> Attributes:
        if not href:
            return {}
        if disable_tracking:
            self.untracked_urls.add(href)
        return {
            "href": resolve_tracking_url(href, disable_tracking, self.tracking),
            "target": LINK_TARGET,
            "rel": LINK_REL,
        }

    # ------------------------------------------------------------------
    # Structural kinds
    # ------------------------------------------------------------------

    def _render_root(self, block: EmailBlock, data: RootData, indent: int, slot: LayoutSlot | None) -> str:
        step = self.options.indent_step
        body = self._root_styles.body
        body_attrs = format_attributes({"width": body.width, "background-color": body.background_color})
        children = self._render_children(block, indent + 2 * step)

        sp = indent_pad(indent)
        body_sp = indent_pad(indent + step)
        inner = f"{children}\n" if children else ""
        return (
            f"{sp}<mjml>\n"
            f"{body_sp}<mj-body{body_attrs}>\n"
            f"{inner}"
            f"{body_sp}</mj-body>\n"
            f"{sp}</mjml>"
        )

    def _render_section(self, block: EmailBlock, data: SectionData, indent: int, slot: LayoutSlot | None) -> str:
        attrs: Attributes = {"text-align": data.text_align}
        if data.background_type == "image":
            if data.background_image:
                attrs["background-url"] = data.background_image
                attrs["background-size"] = data.background_size
                attrs["background-repeat"] = data.background_repeat
        elif data.background_type == "color":
            attrs["background-color"] = data.background_color
        apply_border(attrs, data.border)
        apply_padding(attrs, data.padding)

        step = self.options.indent_step
        if block.kind in LAYOUT_KINDS and data.columns_on_mobile and block.children:
            grouped = self._render_children(block, indent + 2 * step, with_slots=True)
            children = ""
            if grouped:
                group_sp = indent_pad(indent + step)
                children = f"{group_sp}<mj-group>\n{grouped}\n{group_sp}</mj-group>"
        else:
            children = self._render_children(block, indent + step, with_slots=True)

        return self._assemble(block, attrs, indent, children=children)

    def _render_column(self, block: EmailBlock, data: ColumnData, indent: int, slot: LayoutSlot | None) -> str:
        attrs: Attributes = {
            "vertical-align": data.vertical_align,
            "width": slot.column_width if slot is not None else None,
            "background-color": data.background_color,
        }
        apply_border(attrs, data.border)
        apply_padding(attrs, data.padding)
        return self._assemble(block, attrs, indent)

    # ------------------------------------------------------------------
    # Content kinds
    # ------------------------------------------------------------------

    def _text_attributes(self, data: TextData | HeadingData) -> Attributes:
        attrs: Attributes = {
            "align": data.align,
            "padding": "0",
            "container-background-color": data.background_color,
        }
        apply_padding(attrs, data.padding)
        return attrs

    def _formatter(self, block: EmailBlock, hyperlink_style=None) -> RichTextFormatter:
        return RichTextFormatter(
            self._root_styles,
            render_text=lambda text: self._render_text_value(text, block),
            tracking=self.tracking,
            hyperlink_style=hyperlink_style,
            untracked_urls=self.untracked_urls,
        )

    def _render_text(self, block: EmailBlock, data: TextData, indent: int, slot: LayoutSlot | None) -> str:
        content = self._formatter(block, data.hyperlink_styles).format_lines(data.lines)
        return self._assemble(block, self._text_attributes(data), indent, content=content, children="")

    def _render_heading(self, block: EmailBlock, data: HeadingData, indent: int, slot: LayoutSlot | None) -> str:
        lines = [self._coerce_heading_line(line, data.type, block) for line in data.lines]
        content = self._formatter(block).format_lines(lines)
        return self._assemble(block, self._text_attributes(data), indent, content=content, children="")

    @staticmethod
    def _coerce_heading_line(line: RichTextLine, heading_type: str, block: EmailBlock) -> RichTextLine:
        if line.type in (heading_type, PARAGRAPH_LINE_TYPE):
            return line
        logger.warning(
            f"Heading block {block.id!r} contains a {line.type!r} line; rendering it as {heading_type!r}"
        )
        return replace(line, type=heading_type)

    def _render_image(self, block: EmailBlock, data: ImageData, indent: int, slot: LayoutSlot | None) -> str:
        wrapper = data.wrapper
        attrs: Attributes = {
            "align": wrapper.align,
            "src": data.src,
            "alt": data.alt,
            "padding": "0",
        }
        if data.width and data.width != "auto":
            width = normalize_pixel_value(data.width)
            if width is None:
                logger.warning(f"Image block {block.id!r} has non-pixel width {data.width!r}; passing it through")
                width = data.width
            attrs["width"] = width
        attrs.update(self._link_attributes(data.href, data.disable_tracking))
        attrs.update(border_radius_attributes(wrapper.border.radius))
        apply_padding(attrs, wrapper.padding)
        attrs.update(border_attributes(wrapper.border))
        return self._assemble(block, attrs, indent, children="")

    def _render_button(self, block: EmailBlock, data: ButtonData, indent: int, slot: LayoutSlot | None) -> str:
        attrs: Attributes = {
            "align": data.wrapper.align,
            "background-color": data.background_color,
            "font-family": data.font_family,
            "color": data.color,
            "padding": "0",
        }
        attrs.update(self._link_attributes(data.href, data.disable_tracking))

        if data.font_size:
            font_size = normalize_pixel_value(data.font_size)
            if font_size is None:
                logger.warning(f"Button block {block.id!r} has non-pixel font size {data.font_size!r}")
                font_size = data.font_size
            attrs["font-size"] = font_size
        if data.font_weight:
            attrs["font-weight"] = data.font_weight
        if data.font_style and data.font_style != "normal":
            attrs["font-style"] = data.font_style

        vertical = strip_px(data.inner_vertical_padding or DEFAULT_BUTTON_INNER_VERTICAL_PADDING)
        horizontal = strip_px(data.inner_horizontal_padding or DEFAULT_BUTTON_INNER_HORIZONTAL_PADDING)
        attrs["inner-padding"] = f"{vertical}px {horizontal}px"

        if data.text_transform and data.text_transform != "none":
            attrs["text-transform"] = data.text_transform
        if data.width and data.width != "auto":
            attrs["width"] = strip_px(data.width)

        apply_padding(attrs, data.wrapper.padding)
        apply_border(attrs, data.border)

        if not data.text:
            logger.warning(f"Button block {block.id!r} has no text")
        return self._assemble(block, attrs, indent, content=escape_html(data.text), children="")

    def _render_divider(self, block: EmailBlock, data: DividerData, indent: int, slot: LayoutSlot | None) -> str:
        attrs: Attributes = {
            "align": data.align,
            "border-color": data.border_color,
            "border-style": data.border_style,
            "border-width": data.border_width,
            "padding": "0",
            "container-background-color": data.background_color,
        }
        if data.width and data.width != "100%":
            attrs["width"] = strip_px(data.width)
        apply_padding(attrs, data.padding)
        return self._assemble(block, attrs, indent, children="")

    def _render_spacer(self, block: EmailBlock, data: SpacerData, indent: int, slot: LayoutSlot | None) -> str:
        attrs: Attributes = {"height": data.height, "container-background-color": data.background_color}
        return self._assemble(block, attrs, indent, children="")

    def _render_open_tracking(
        self, block: EmailBlock, data: OpenTrackingData, indent: int, slot: LayoutSlot | None
    ) -> str:
        return self._assemble(block, {}, indent, content=OPEN_TRACKING_PIXEL_MARKUP, children="")

    def _render_raw_template(
        self, block: EmailBlock, data: RawTemplateData, indent: int, slot: LayoutSlot | None
    ) -> str:
        if not data.code:
            logger.warning(f"Raw template block {block.id!r} has no code")
            return ""
        context = self._template_data.context(block.id, block.kind)
        return self._engine.render(data.code, context, block_id=block.id, block_kind=block.kind)


def tree_to_mjml(
    root_styles: RootStyles | None,
    block: EmailBlock,
    template_data: str | Mapping[str, Any] | None = None,
    tracking: TrackingSettings | None = None,
    indent: int = 0,
    layout_slot: LayoutSlot | None = None,
    indent_step: int = DEFAULT_INDENT_STEP,
) -> str:
    """Compile an email block tree to MJML.

    Functional wrapper around :class:`MjmlRenderer`; each call uses a fresh
    renderer, so concurrent calls share no state.

    Parameters
    ----------
    root_styles : RootStyles or None
        Document-wide style defaults; None uses the root block's own styles
    block : EmailBlock
        Block to compile
    template_data : str or Mapping, optional
        Template data as a JSON object string or a decoded mapping
    tracking : TrackingSettings, optional
        UTM tagging configuration for links
    indent : int, default 0
        Indentation of the outermost tag
    layout_slot : LayoutSlot, optional
        Position of ``block`` inside a column layout
    indent_step : int, default 2
        Spaces per nesting level

    Returns
    -------
    str
        MJML markup

    Examples
    --------
        >>> from tree2mjml.ast.nodes import EmailBlock
        >>> from tree2mjml.ast.blocks import SpacerData
        >>> tree_to_mjml(None, EmailBlock(id="s", kind="spacer", data=SpacerData(height="20px")))
        '<mj-spacer height="20px" />'

    """
    options = MjmlRendererOptions(tracking=tracking or TrackingSettings(), indent=indent, indent_step=indent_step)
    return MjmlRenderer(options).render_to_string(
        block, root_styles=root_styles, template_data=template_data, layout_slot=layout_slot
    )
