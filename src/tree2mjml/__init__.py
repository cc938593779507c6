"""tree2mjml - compile visual email editor block trees to MJML and HTML.

tree2mjml takes the block tree produced by a drag-and-drop email editor
(sections, column layouts, text, headings, images, buttons, dividers,
spacers and raw template blocks) and compiles it into an MJML document,
which is then rendered to email-ready HTML.

Key Features
------------
- Typed, decode-once payloads for every block kind
- Padding, border and margin resolution with "all" / "separate" control modes
- Rich text runs with per-property hyperlink style precedence
- Liquid interpolation in text runs and raw template blocks
- UTM tagging, click redirects and open-tracking pixels

Requirements
------------
- Python 3.10+
- python-liquid for template interpolation
- mjml-python (optional) for MJML to HTML rendering

Examples
--------
Compile a tree to MJML:

    >>> from tree2mjml import block_from_json, tree_to_mjml
    >>> tree = block_from_json(open("template.json").read())  # doctest: +SKIP
    >>> mjml = tree_to_mjml(None, tree)  # doctest: +SKIP

Compile a full request to HTML:

    >>> from tree2mjml import CompileTemplateRequest, compile_template
    >>> request = CompileTemplateRequest.from_dict(payload)  # doctest: +SKIP
    >>> response = compile_template(request)  # doctest: +SKIP

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from tree2mjml.api import CompileError, CompileTemplateRequest, CompileTemplateResponse, compile_template
from tree2mjml.ast import (
    EmailBlock,
    LayoutSlot,
    RootStyles,
    block_from_dict,
    block_from_json,
    block_to_dict,
    block_to_json,
    copy_block,
)
from tree2mjml.exceptions import (
    BlockDataError,
    CompilationError,
    DependencyError,
    InvalidOptionsError,
    InvalidRequestError,
    RenderingError,
    TemplateDataError,
    TemplateRenderError,
    Tree2MjmlError,
    ValidationError,
)
from tree2mjml.options import HtmlRendererOptions, MjmlRendererOptions, TrackingSettings
from tree2mjml.renderers import HtmlRenderer, MjmlRenderer, tree_to_mjml
from tree2mjml.utils.tracking import resolve_tracking_url, track_links

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "BlockDataError",
    "CompilationError",
    "CompileError",
    "CompileTemplateRequest",
    "CompileTemplateResponse",
    "DependencyError",
    "EmailBlock",
    "HtmlRenderer",
    "HtmlRendererOptions",
    "InvalidOptionsError",
    "InvalidRequestError",
    "LayoutSlot",
    "MjmlRenderer",
    "MjmlRendererOptions",
    "RenderingError",
    "RootStyles",
    "TemplateDataError",
    "TemplateRenderError",
    "TrackingSettings",
    "Tree2MjmlError",
    "ValidationError",
    "block_from_dict",
    "block_from_json",
    "block_to_dict",
    "block_to_json",
    "compile_template",
    "copy_block",
    "resolve_tracking_url",
    "track_links",
    "tree_to_mjml",
]
