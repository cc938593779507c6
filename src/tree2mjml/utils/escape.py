#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2mjml/utils/escape.py
"""Escaping and formatting helpers for MJML output."""

from __future__ import annotations

from html import escape as _html_escape
from typing import Any, Iterable, Mapping


def escape_html(text: str) -> str:
    """Escape ``&``, ``<``, ``>``, ``"`` and ``'`` for use as element text."""
    return _html_escape(text, quote=True)


def indent_pad(width: int) -> str:
    """Return ``width`` spaces, or an empty string for non-positive widths."""
    return " " * width if width > 0 else ""


def strip_px(value: str) -> str:
    """Remove a trailing ``px`` unit from ``value``."""
    return value[:-2] if value.endswith("px") else value


def normalize_pixel_value(value: str) -> str | None:
    """Return ``"<n>px"`` when ``value`` is a plain integer (with or without ``px``).

    Returns None for anything else (percentages, ``auto``, decimals).

    Examples
    --------
    >>> normalize_pixel_value("300")
    '300px'
    >>> normalize_pixel_value(" 16px ")
    '16px'
    >>> normalize_pixel_value("50%") is None
    True

    """
    cleaned = strip_px(value.strip())
    try:
        return f"{int(cleaned)}px"
    except ValueError:
        return None


def _format_attribute_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def line_attributes(attrs: Mapping[str, Any]) -> str:
    """Format attributes as ``key="value"`` pairs sorted by name.

    None values and empty strings are dropped. Booleans render as
    ``true``/``false`` and numbers verbatim.

    Examples
    --------
    >>> line_attributes({"width": "600px", "align": "left", "alt": ""})
    'align="left" width="600px"'

    """
    pairs = [
        f'{key}="{_format_attribute_value(value)}"'
        for key, value in sorted(attrs.items())
        if value is not None and value != ""
    ]
    return " ".join(pairs)


def format_attributes(attrs: Mapping[str, Any]) -> str:
    """Format attributes for an opening tag, with a leading space when non-empty."""
    formatted = line_attributes(attrs)
    return f" {formatted}" if formatted else ""


def format_style_attribute(declarations: Iterable[str]) -> str:
    """Join CSS declarations into a `` style="..."`` attribute.

    Blank declarations are skipped; an empty list produces an empty string.

    Examples
    --------
    >>> format_style_attribute(["color: red", "", "margin: 0px"])
    ' style="color: red; margin: 0px"'

    """
    valid = [declaration.strip() for declaration in declarations if declaration.strip()]
    if not valid:
        return ""
    return f' style="{"; ".join(valid)}"'
