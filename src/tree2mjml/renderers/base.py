#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2mjml/renderers/base.py
"""Base classes for tree2mjml renderers.

This module defines the abstract base class shared by the MJML compiler and
the HTML renderer. Both produce text; ``render_to_string`` is the primary
entry point and ``render`` writes the same text to a path or stream.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Any, Union

from tree2mjml.exceptions import InvalidOptionsError
from tree2mjml.options.base import BaseRendererOptions


class BaseRenderer(ABC):
    """Abstract base class for all renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Renderer-specific options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        self.options = options

    @abstractmethod
    def render_to_string(self, source: Any) -> str:
        """Render ``source`` and return the result.

        Raises
        ------
        CompilationError
            If the source cannot be compiled
        RenderingError
            If a downstream renderer fails

        """

    def render(self, source: Any, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render ``source`` and write the result to ``output``."""
        self.write_text_output(self.render_to_string(source), output)

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                renderer_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def write_text_output(text: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Write text output to a file path or an IO stream.

        Binary streams receive UTF-8 encoded bytes.

        Raises
        ------
        TypeError
            If output type is not supported

        """
        if isinstance(output, (str, Path)):
            Path(output).write_text(text, encoding="utf-8")
            return
        if not hasattr(output, "write"):
            raise TypeError(f"Unsupported output type: {type(output).__name__}")
        try:
            output.write(text)  # type: ignore[arg-type]
        except TypeError:
            output.write(text.encode("utf-8"))  # type: ignore[arg-type]
