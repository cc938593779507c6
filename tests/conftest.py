"""Pytest configuration and shared fixtures for the tree2mjml test suite.

This module provides shared fixtures for building block trees and a stub
MJML converter so HTML rendering can be exercised without ``mjml-python``.
"""

from typing import Any, Callable

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: End-to-end compilation tests")


class StubConverter:
    """MJML converter double that records its input and returns canned HTML."""

    def __init__(self, html: str = "<html><body></body></html>", errors: list | None = None):
        self.html = html
        self.errors = errors or []
        self.calls: list[str] = []

    def __call__(self, mjml_source: str) -> dict[str, Any]:
        self.calls.append(mjml_source)
        return {"html": self.html, "errors": list(self.errors)}


@pytest.fixture
def stub_converter() -> StubConverter:
    """Provide a converter returning an empty HTML document."""
    return StubConverter()


@pytest.fixture
def make_converter() -> Callable[..., StubConverter]:
    """Provide a factory for converters with custom HTML and diagnostics."""
    return StubConverter


@pytest.fixture
def paragraph_styles() -> dict[str, Any]:
    """Root styles with a fully specified paragraph."""
    return {
        "paragraph": {
            "color": "#000000",
            "fontFamily": "Arial",
            "fontSize": "14px",
            "fontWeight": 400,
            "margin": "0px",
        }
    }
