#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2mjml/utils/styles.py
"""Padding, margin and border resolution.

Each style group is governed by a control mode:

``"all"``
    Only the shorthand value is used.
``"separate"``
    Only the four per-side values are used; the shorthand is ignored.
anything else
    The shorthand acts as the default, exactly as in ``"all"`` mode.

Zero-length values (empty or ``0px``) are never emitted. Borders are only
emitted for the ``"all"`` and ``"separate"`` modes, and only when style,
width and color are all present with a style other than ``none``. Margins
always resolve to at least one declaration so the target renderer's own
defaults never leak through.

Helpers return either a flat attribute map (for MJML tag attributes) or a
list of CSS declarations (for inline ``style`` strings).
"""

from __future__ import annotations

from typing import Any, MutableMapping

from tree2mjml.ast.blocks import Border, BorderSide, Padding
from tree2mjml.constants import (
    CONTROL_ALL,
    CONTROL_SEPARATE,
    DEFAULT_MARGIN_DECLARATION,
    SIDES,
    ZERO_LENGTH_VALUES,
)


def _box_values(box: Padding, prefix: str) -> list[tuple[str, str]]:
    """Resolve a padding or margin group to ``(property, value)`` pairs."""
    if box.control == CONTROL_SEPARATE:
        return [
            (f"{prefix}-{side}", getattr(box, side))
            for side in SIDES
            if getattr(box, side) not in ZERO_LENGTH_VALUES
        ]
    # "all" and unrecognized modes both use the shorthand
    if box.shorthand not in ZERO_LENGTH_VALUES:
        return [(prefix, box.shorthand)]
    return []


def padding_attributes(padding: Padding) -> dict[str, str]:
    """Resolve a padding group to MJML attributes.

    Examples
    --------
    >>> padding_attributes(Padding(control="all", shorthand="10px", top="5px"))
    {'padding': '10px'}
    >>> padding_attributes(Padding(control="separate", shorthand="10px", top="5px", left="0px"))
    {'padding-top': '5px'}

    """
    return dict(_box_values(padding, "padding"))


def apply_padding(attrs: MutableMapping[str, Any], padding: Padding) -> None:
    """Merge resolved padding into ``attrs``.

    In ``"separate"`` mode any existing shorthand ``padding`` attribute (such
    as a forced ``padding="0"``) is removed before the sides are applied.
    """
    if padding.control == CONTROL_SEPARATE:
        attrs.pop("padding", None)
    attrs.update(padding_attributes(padding))


def padding_declarations(padding: Padding, suffix: str = "") -> list[str]:
    """Resolve a padding group to CSS declarations, each ending in ``suffix``."""
    return [f"{prop}: {value}{suffix}" for prop, value in _box_values(padding, "padding")]


def margin_declarations(margin: Padding, suffix: str = "") -> list[str]:
    """Resolve a margin group to CSS declarations.

    Always returns at least one declaration: when nothing specific is set the
    result is an explicit zero margin.

    Examples
    --------
    >>> margin_declarations(Padding(), " !important")
    ['margin: 0px !important']
    >>> margin_declarations(Padding(control="separate", bottom="12px"))
    ['margin-bottom: 12px']

    """
    declarations = [f"{prop}: {value}{suffix}" for prop, value in _box_values(margin, "margin")]
    if not declarations:
        declarations.append(f"margin: 0px{suffix}" if suffix else DEFAULT_MARGIN_DECLARATION)
    return declarations


def _border_value(side: BorderSide) -> str | None:
    if side.style in ("", "none") or side.width in ZERO_LENGTH_VALUES or not side.color:
        return None
    return f"{side.width} {side.style} {side.color}"


def border_attributes(border: Border) -> dict[str, str]:
    """Resolve a border group to MJML attributes (``border`` or ``border-<side>``).

    Border radius is not included; see :func:`border_radius_attributes`.
    """
    attrs: dict[str, str] = {}
    if border.control == CONTROL_ALL:
        value = _border_value(border.shorthand)
        if value:
            attrs["border"] = value
    elif border.control == CONTROL_SEPARATE:
        for side in SIDES:
            value = _border_value(getattr(border, side))
            if value:
                attrs[f"border-{side}"] = value
    return attrs


def border_radius_attributes(radius: str) -> dict[str, str]:
    """Return a ``border-radius`` attribute unless ``radius`` is empty or zero."""
    if radius in ZERO_LENGTH_VALUES:
        return {}
    return {"border-radius": radius}


def apply_border(attrs: MutableMapping[str, Any], border: Border) -> None:
    """Merge resolved borders and border radius into ``attrs``."""
    attrs.update(border_attributes(border))
    attrs.update(border_radius_attributes(border.radius))
