#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the tree2mjml library.

This module defines specialized exception classes for the error conditions
that can occur while decoding an email block tree, compiling it to MJML and
rendering the MJML to HTML.

Exception Hierarchy
-------------------
- Tree2MjmlError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for a renderer)
    - InvalidRequestError (compile request failed validation)

  - CompilationError (tree compilation failures, carries block id and kind)
    - BlockDataError (payload does not match its kind)
    - TemplateDataError (template data is not a JSON object)
    - TemplateRenderError (template engine rejected a template string)

  - RenderingError (MJML to HTML rendering failures)

  - DependencyError (missing/incompatible packages)

"""

from typing import Any


class Tree2MjmlError(Exception):
    """Base exception class for all tree2mjml-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(Tree2MjmlError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when an incorrect options class is given to a renderer.

    Parameters
    ----------
    renderer_name : str
        Name of the renderer that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        renderer_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{renderer_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.renderer_name = renderer_name
        self.expected_type = expected_type
        self.received_type = received_type


class InvalidRequestError(ValidationError):
    """Exception raised when a compile request is missing required fields."""

    def __init__(self, message: str, parameter_name: str | None = None, parameter_value: Any = None):
        """Initialize the request error, prefixing the standard request context."""
        super().__init__(
            f"invalid compile template request: {message}",
            parameter_name=parameter_name,
            parameter_value=parameter_value,
        )


class CompilationError(Tree2MjmlError):
    """Exception raised when a block tree cannot be compiled.

    Every compilation error names the block that caused it. Errors raised
    while compiling a nested block keep the identity of that nested block
    as they propagate to the caller.

    Parameters
    ----------
    message : str
        Description of the failure
    block_id : str, optional
        Identifier of the offending block
    block_kind : str, optional
        Kind of the offending block
    original_error : Exception, optional
        The underlying exception

    Attributes
    ----------
    block_id : str or None
        Identifier of the offending block
    block_kind : str or None
        Kind of the offending block

    """

    def __init__(
        self,
        message: str,
        block_id: str | None = None,
        block_kind: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the compilation error, appending block context to the message."""
        if block_id is not None or block_kind is not None:
            message = f"{message} (block ID: {block_id}, kind: {block_kind})"
        super().__init__(message, original_error)
        self.block_id = block_id
        self.block_kind = block_kind


class BlockDataError(CompilationError):
    """Exception raised when a block payload does not match its declared kind.

    Parameters
    ----------
    message : str
        Description of the mismatch
    block_id : str, optional
        Identifier of the offending block
    block_kind : str, optional
        Kind of the offending block
    field_path : str, optional
        Dotted path of the offending field within the payload (e.g. ``button.fontWeight``)

    """

    def __init__(
        self,
        message: str,
        block_id: str | None = None,
        block_kind: str | None = None,
        field_path: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the block data error."""
        if field_path:
            message = f"{message} at '{field_path}'"
        super().__init__(message, block_id=block_id, block_kind=block_kind, original_error=original_error)
        self.field_path = field_path


class TemplateDataError(CompilationError):
    """Exception raised when template data is not a valid JSON object."""


class TemplateRenderError(CompilationError):
    """Exception raised when the template engine rejects a template string."""


class RenderingError(Tree2MjmlError):
    """Exception raised when MJML to HTML rendering fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    diagnostics : list, optional
        Structured diagnostics reported by the renderer
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(
        self,
        message: str,
        rendering_stage: str | None = None,
        diagnostics: list[Any] | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage
        self.diagnostics = diagnostics or []


class DependencyError(Tree2MjmlError):
    """Exception raised when required dependencies are not available.

    Parameters
    ----------
    renderer_name : str
        Name of the renderer requiring dependencies
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    version_mismatches : list[tuple[str, str, str]], optional
        List of (package_name, required_version, installed_version) tuples
    install_command : str, optional
        Suggested pip install command to resolve the issue
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        renderer_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        install_command: str = "",
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        version_mismatches = version_mismatches or []
        self.original_import_error = original_import_error
        if message is None:
            message_parts = []
            if missing_packages:
                pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
                message_parts.append(f"{renderer_name} rendering requires the following packages: {pkg_list}")
            if version_mismatches:
                mismatch_str = ", ".join(
                    f"'{name}' (requires {required}, but {installed} is installed)"
                    for name, required, installed in version_mismatches
                )
                message_parts.append(f"{renderer_name} rendering has version mismatches: {mismatch_str}")
            message = "\n".join(message_parts)

            if install_command:
                message += f"\nInstall with: {install_command}"
            else:
                all_packages = missing_packages + [(name, req) for name, req, _ in version_mismatches]
                if all_packages:
                    packages_str = " ".join(f'"{name}{spec}"' if spec else name for name, spec in all_packages)
                    message += f"\nInstall with: pip install --upgrade {packages_str}"

        super().__init__(message)
        self.renderer_name = renderer_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
        self.install_command = install_command
