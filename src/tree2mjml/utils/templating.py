#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2mjml/utils/templating.py
"""Template interpolation for text runs and raw template blocks.

Text containing an interpolation marker (``{{`` or ``{%``) is rendered with
Liquid (python-liquid) against the template data supplied to a compile.
Marker detection is a plain substring test: text holding a marker without a
well-formed tag is still handed to the engine, and Liquid decides whether it
fails.

Template data arrives either as a JSON string or as a decoded mapping. A
JSON string is parsed at most once per compile, on first use, so documents
without templated text never pay for (or fail on) the data.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from liquid import Environment
from liquid.exceptions import LiquidError

from tree2mjml.constants import TEMPLATE_MARKERS
from tree2mjml.exceptions import TemplateDataError, TemplateRenderError

logger = logging.getLogger(__name__)


def has_template_markers(text: str) -> bool:
    """Return True when ``text`` contains ``{{`` or ``{%``."""
    return any(marker in text for marker in TEMPLATE_MARKERS)


class TemplateEngine:
    """Liquid adapter rendering one template string against a data context.

    Autoescaping stays off, since the rendered text is inserted into markup
    verbatim. Missing variables render as empty strings, and filters take
    Liquid arguments such as ``{{ name | default: "there" }}``.
    """

    def __init__(self) -> None:
        self._env = Environment()

    def render(
        self,
        template: str,
        context: Mapping[str, Any],
        block_id: str | None = None,
        block_kind: str | None = None,
    ) -> str:
        """Render ``template`` with ``context``.

        Parameters
        ----------
        template : str
            Liquid template source
        context : Mapping
            Variables available to the template
        block_id, block_kind : str, optional
            Block owning the template, named in any error raised

        Raises
        ------
        TemplateRenderError
            If the template has a syntax error or fails while rendering

        """
        try:
            return self._env.from_string(template).render(**context)
        except LiquidError as e:
            raise TemplateRenderError(
                f"template rendering error: {e}", block_id=block_id, block_kind=block_kind, original_error=e
            ) from e


class TemplateData:
    """Lazily decoded template data for one compile.

    Parameters
    ----------
    data : str, Mapping or None
        JSON object text, an already decoded mapping, or None/empty for no data

    """

    def __init__(self, data: str | Mapping[str, Any] | None = None):
        self._raw = data
        self._context: dict[str, Any] | None = None
        self._error: str | None = None
        self._cause: Exception | None = None

    def context(self, block_id: str | None = None, block_kind: str | None = None) -> dict[str, Any]:
        """Return the decoded data context.

        Parameters
        ----------
        block_id, block_kind : str, optional
            Block requesting the data, named in any error raised

        Raises
        ------
        TemplateDataError
            If the data is not valid JSON or not a JSON object

        """
        if self._context is None and self._error is None:
            self._decode()
        if self._error is not None:
            raise TemplateDataError(self._error, block_id=block_id, block_kind=block_kind, original_error=self._cause)
        return self._context if self._context is not None else {}

    def _decode(self) -> None:
        raw = self._raw
        if raw is None or raw == "":
            self._context = {}
            return
        if isinstance(raw, Mapping):
            self._context = dict(raw)
            return
        try:
            decoded = json.loads(raw)
        except (TypeError, ValueError) as e:
            self._error = f"invalid JSON in template data: {e}"
            self._cause = e
            return
        if not isinstance(decoded, dict):
            self._error = f"template data must be a JSON object, got {type(decoded).__name__}"
            return
        logger.debug(f"Decoded template data with {len(decoded)} top-level keys")
        self._context = decoded
