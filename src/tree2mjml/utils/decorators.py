#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2mjml/utils/decorators.py
"""Utility decorators for tree2mjml renderers.

This module provides the optional-dependency gate used by renderers that
wrap third-party packages, and a DEBUG-level timing helper.

"""

from __future__ import annotations

import importlib
import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Generator, List, Tuple

from tree2mjml.exceptions import DependencyError
from tree2mjml.utils.packages import check_version_requirement


def requires_dependencies(renderer_name: str, packages: List[Tuple[str, str, str]]) -> Callable:
    """Check required dependencies and versions before method execution.

    Parameters
    ----------
    renderer_name : str
        Name of the renderer (e.g., "html"), used in error messages
    packages : list of tuple
        Required packages as (install_name, import_name, version_spec) tuples where:
        - install_name: Package name for pip install (e.g., "mjml-python")
        - import_name: Module name for import statement (e.g., "mjml")
        - version_spec: Version requirement (e.g., ">=1.3" or "" for any version)

    Returns
    -------
    Callable
        Decorated method that checks dependencies before execution

    Raises
    ------
    DependencyError
        If any required package is missing or has an incompatible version.
        All problems are collected before raising, and the first ImportError
        is kept for debugging.

    Examples
    --------
        >>> @requires_dependencies("html", [("mjml-python", "mjml", "")])
        ... def render(self, mjml_source):
        ...     from mjml import mjml_to_html
        ...     return mjml_to_html(mjml_source)

    """

    def decorator(method: Callable) -> Callable:
        @wraps(method)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            missing = []
            version_mismatches = []
            original_error = None

            for install_name, import_name, version_spec in packages:
                try:
                    # nosemgrep: python.lang.security.audit.non-literal-import.non-literal-import
                    importlib.import_module(import_name)
                except ImportError as e:
                    missing.append((install_name, version_spec))
                    if original_error is None:
                        original_error = e
                    continue

                if version_spec:
                    meets_requirement, installed_version = check_version_requirement(install_name, version_spec)
                    if not meets_requirement:
                        version_mismatches.append((install_name, version_spec, installed_version or "unknown"))

            if missing or version_mismatches:
                raise DependencyError(
                    renderer_name=renderer_name,
                    missing_packages=missing,
                    version_mismatches=version_mismatches,
                    original_import_error=original_error,
                ) from original_error

            return method(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Time the enclosed block and log the elapsed time at DEBUG level.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance to use for DEBUG messages
    operation : str
        Description of the operation being timed (e.g., "MJML to HTML")

    Notes
    -----
    Time is only measured when the logger has DEBUG enabled.

    """
    if logger.isEnabledFor(logging.DEBUG):
        start_time = time.perf_counter()
        yield
        elapsed = time.perf_counter() - start_time
        logger.debug(f"{operation} completed in {elapsed:.2f}s")
    else:
        yield
