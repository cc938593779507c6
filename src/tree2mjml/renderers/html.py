#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2mjml/renderers/html.py
"""HTML rendering from MJML.

This module provides the HtmlRenderer class which turns the MJML produced by
:class:`~tree2mjml.renderers.mjml.MjmlRenderer` into email-ready HTML using
the optional ``mjml-python`` package, then post-processes the result:
entity-encoded URL attributes are decoded and link tracking is applied.

The MJML converter can be injected, which lets callers swap the backend and
lets tests run without ``mjml-python`` installed.

"""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Any, Callable, Collection, Mapping

from tree2mjml.constants import DEPS_MJML
from tree2mjml.exceptions import RenderingError
from tree2mjml.options.html import HtmlRendererOptions
from tree2mjml.renderers.base import BaseRenderer
from tree2mjml.utils.decorators import debug_timer, requires_dependencies
from tree2mjml.utils.tracking import decode_html_entities_in_url_attributes, track_links

logger = logging.getLogger(__name__)

# Takes MJML source, returns a mapping or object with ``html`` and ``errors``
MjmlConverter = Callable[[str], Any]


def _unpack_result(result: Any) -> tuple[str, list[Any]]:
    if isinstance(result, str):
        return result, []
    if isinstance(result, Mapping):
        html = result.get("html") or ""
        errors = result.get("errors") or []
    else:
        html = getattr(result, "html", "") or ""
        errors = getattr(result, "errors", None) or []
    return str(html), list(errors)


class HtmlRenderer(BaseRenderer):
    """Render MJML markup to HTML.

    Parameters
    ----------
    options : HtmlRendererOptions or None, default = None
        Post-processing and tracking options
    converter : callable, optional
        MJML to HTML converter. Defaults to ``mjml.mjml_to_html`` from the
        ``mjml-python`` package, loaded on first use.

    Examples
    --------
        >>> from tree2mjml.renderers.html import HtmlRenderer
        >>> renderer = HtmlRenderer(converter=lambda src: {"html": "<html></html>", "errors": []})
        >>> renderer.render_to_string("<mjml><mj-body></mj-body></mjml>")
        '<html></html>'

    """

    def __init__(self, options: HtmlRendererOptions | None = None, converter: MjmlConverter | None = None):
        """Initialize the HTML renderer with options."""
        BaseRenderer._validate_options_type(options, HtmlRendererOptions, "html")
        options = options or HtmlRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: HtmlRendererOptions = options
        self._converter = converter

    def render_to_string(  # type: ignore[override]
        self,
        mjml_source: str,
        timestamp: int | None = None,
        untracked_urls: Collection[str] | None = None,
    ) -> str:
        """Convert MJML to HTML and apply post-processing.

        Parameters
        ----------
        mjml_source : str
            MJML document
        timestamp : int, optional
            Unix timestamp for tracking URLs; defaults to the current time
        untracked_urls : collection of str, optional
            Link destinations that opted out of tracking during MJML compilation

        Raises
        ------
        RenderingError
            If the converter fails or reports errors without producing HTML
        DependencyError
            If no converter was injected and ``mjml-python`` is not installed

        """
        html = self.mjml_to_html(mjml_source)
        if self.options.decode_url_entities:
            html = decode_html_entities_in_url_attributes(html)
        if self.options.apply_link_tracking:
            html = track_links(
                html, self.options.tracking, timestamp=timestamp, untracked_urls=untracked_urls or frozenset()
            )
        return html

    def mjml_to_html(self, mjml_source: str) -> str:
        """Convert MJML to HTML without post-processing.

        Converter diagnostics are logged as warnings when HTML was still
        produced, and raised as a :class:`RenderingError` otherwise.
        """
        converter = self._converter or self._load_converter()

        with debug_timer(logger, "MJML to HTML"):
            try:
                result = converter(mjml_source)
            except Exception as e:
                raise RenderingError(
                    f"Failed to convert MJML to HTML: {e}", rendering_stage="mjml_to_html", original_error=e
                ) from e

        html, errors = _unpack_result(result)
        if errors and not html:
            raise RenderingError(
                f"MJML to HTML conversion failed with {len(errors)} error(s): {errors[0]}",
                rendering_stage="mjml_to_html",
                diagnostics=errors,
            )
        for error in errors:
            logger.warning(f"MJML diagnostic: {error}")
        return html

    @requires_dependencies("html", DEPS_MJML)
    def _load_converter(self) -> MjmlConverter:
        from mjml import mjml_to_html

        def convert(mjml_source: str) -> Any:
            return mjml_to_html(BytesIO(mjml_source.encode("utf-8")))

        self._converter = convert
        return convert
