"""Request-level API for compiling email block trees to MJML and HTML."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/tree2mjml/api.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from tree2mjml.ast.blocks import RootData, RootStyles
from tree2mjml.ast.nodes import EmailBlock
from tree2mjml.ast.serialization import block_from_dict, block_to_dict, decode_block_data
from tree2mjml.constants import KIND_ROOT
from tree2mjml.exceptions import CompilationError, InvalidRequestError, RenderingError
from tree2mjml.options.html import HtmlRendererOptions
from tree2mjml.options.mjml import MjmlRendererOptions
from tree2mjml.options.tracking import TrackingSettings
from tree2mjml.renderers.html import HtmlRenderer, MjmlConverter
from tree2mjml.renderers.mjml import MjmlRenderer
from tree2mjml.utils.decorators import debug_timer

logger = logging.getLogger(__name__)


def _has_root_styles(tree: EmailBlock) -> bool:
    if isinstance(tree.data, Mapping):
        return bool(tree.data.get("styles"))
    return isinstance(tree.data, RootData) and tree.data.styles != RootStyles()


@dataclass
class CompileTemplateRequest:
    """A request to compile one email template.

    Parameters
    ----------
    workspace_id : str
        Tenant identifier, also used in tracking URLs
    message_id : str
        Message identifier, also used in tracking URLs
    visual_editor_tree : EmailBlock
        Root of the block tree
    test_data : Mapping or str, optional
        Template data, decoded or as JSON object text
    tracking_settings : TrackingSettings
        Link tracking configuration

    """

    workspace_id: str
    message_id: str
    visual_editor_tree: EmailBlock
    test_data: Optional[Mapping[str, Any] | str] = None
    tracking_settings: TrackingSettings = field(default_factory=TrackingSettings)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CompileTemplateRequest:
        """Build a request from its wire form.

        Raises
        ------
        BlockDataError
            If the tree does not have the expected shape
        InvalidRequestError
            If the request is not an object or the tracking settings are malformed

        """
        if not isinstance(data, Mapping):
            raise InvalidRequestError("request must be an object", parameter_value=data)

        tree_data = data.get("visual_editor_tree")
        if not isinstance(tree_data, Mapping):
            raise InvalidRequestError("visual_editor_tree is required", parameter_name="visual_editor_tree")

        tracking_data = data.get("tracking_settings")
        if tracking_data is not None and not isinstance(tracking_data, Mapping):
            raise InvalidRequestError("tracking_settings must be an object", parameter_name="tracking_settings")
        try:
            tracking = TrackingSettings.from_dict(tracking_data)
        except ValueError as e:
            raise InvalidRequestError(str(e), parameter_name="tracking_settings") from e

        return cls(
            workspace_id=str(data.get("workspace_id") or ""),
            message_id=str(data.get("message_id") or ""),
            visual_editor_tree=block_from_dict(tree_data),
            test_data=data.get("test_data"),
            tracking_settings=tracking,
        )

    def validate(self) -> None:
        """Check the request before compiling.

        Raises
        ------
        InvalidRequestError
            If an identifier is missing, the tree is not rooted at a ``root``
            block with children, or the root carries no styles

        """
        if not self.workspace_id:
            raise InvalidRequestError("workspace_id is required", parameter_name="workspace_id")
        if not self.message_id:
            raise InvalidRequestError("message_id is required", parameter_name="message_id")

        tree = self.visual_editor_tree
        if tree.kind != KIND_ROOT:
            raise InvalidRequestError(
                f"visual_editor_tree must have kind '{KIND_ROOT}'",
                parameter_name="visual_editor_tree",
                parameter_value=tree.kind,
            )
        if not tree.children:
            raise InvalidRequestError(
                "visual_editor_tree root block must have children", parameter_name="visual_editor_tree"
            )
        if not _has_root_styles(tree):
            raise InvalidRequestError(
                "visual_editor_tree root block must have styles", parameter_name="visual_editor_tree"
            )

    def to_dict(self) -> dict[str, Any]:
        """Return the request in its wire form."""
        result: dict[str, Any] = {
            "workspace_id": self.workspace_id,
            "message_id": self.message_id,
            "visual_editor_tree": block_to_dict(self.visual_editor_tree),
            "tracking_settings": self.tracking_settings.to_dict(),
        }
        if self.test_data:
            result["test_data"] = self.test_data
        return result


@dataclass(frozen=True)
class CompileError:
    """Structured failure reported in a compile response."""

    message: str
    details: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"message": self.message}
        if self.details:
            result["details"] = self.details
        return result


@dataclass(frozen=True)
class CompileTemplateResponse:
    """Outcome of :func:`compile_template`.

    ``success`` is False when the tree could not be compiled (``mjml`` is
    None) or when the HTML renderer rejected the MJML (``mjml`` holds the
    compiled document for inspection).
    """

    success: bool
    mjml: Optional[str] = None
    html: Optional[str] = None
    error: Optional[CompileError] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"success": self.success}
        if self.mjml is not None:
            result["mjml"] = self.mjml
        if self.html is not None:
            result["html"] = self.html
        if self.error is not None:
            result["error"] = self.error.to_dict()
        return result


def _request_tracking(request: CompileTemplateRequest) -> TrackingSettings:
    """Tracking settings with identifiers defaulted from the request."""
    tracking = request.tracking_settings
    return tracking.create_updated(
        workspace_id=tracking.workspace_id or request.workspace_id,
        message_id=tracking.message_id or request.message_id,
    )


def compile_template(
    request: CompileTemplateRequest,
    converter: MjmlConverter | None = None,
    timestamp: int | None = None,
) -> CompileTemplateResponse:
    """Compile a template request to MJML and HTML.

    The request is validated, the tree is compiled to MJML, the MJML is
    rendered to HTML, entity-encoded URL attributes are decoded and link
    tracking is applied. Links that opt out of tracking in the tree are left
    alone by the HTML tracking pass as well.

    Parameters
    ----------
    request : CompileTemplateRequest
        The compile request
    converter : callable, optional
        MJML to HTML converter; defaults to ``mjml-python``
    timestamp : int, optional
        Unix timestamp for tracking URLs; defaults to the current time

    Returns
    -------
    CompileTemplateResponse
        ``success=False`` with an error when compilation or HTML rendering
        fails; such failures are never raised

    Raises
    ------
    InvalidRequestError
        If the request fails validation
    DependencyError
        If no converter is given and ``mjml-python`` is not installed

    Examples
    --------
        >>> response = compile_template(request, converter=my_converter)  # doctest: +SKIP
        >>> response.success
        True

    """
    request.validate()
    tree = request.visual_editor_tree
    tracking = _request_tracking(request)

    try:
        root_data = decode_block_data(KIND_ROOT, tree.data, tree.id)
        compiler = MjmlRenderer(MjmlRendererOptions(tracking=tracking))
        mjml = compiler.render_to_string(tree, root_styles=root_data.styles, template_data=request.test_data)
    except CompilationError as e:
        logger.debug(f"Compilation of message {request.message_id!r} failed: {e}")
        return CompileTemplateResponse(success=False, error=CompileError(message=str(e)))

    renderer = HtmlRenderer(HtmlRendererOptions(tracking=tracking), converter=converter)
    try:
        with debug_timer(logger, f"Rendering message {request.message_id!r} to HTML"):
            html = renderer.render_to_string(mjml, timestamp=timestamp, untracked_urls=compiler.untracked_urls)
    except RenderingError as e:
        details = "; ".join(str(d) for d in e.diagnostics) or None
        return CompileTemplateResponse(success=False, mjml=mjml, error=CompileError(message=str(e), details=details))

    return CompileTemplateResponse(success=True, mjml=mjml, html=html)
