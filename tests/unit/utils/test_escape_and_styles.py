"""Unit tests for escaping helpers and padding, margin and border resolution."""

import pytest

from tree2mjml.ast.blocks import Border, BorderSide, Padding
from tree2mjml.utils.escape import (
    escape_html,
    format_attributes,
    format_style_attribute,
    indent_pad,
    line_attributes,
    normalize_pixel_value,
    strip_px,
)
from tree2mjml.utils.styles import (
    apply_border,
    apply_padding,
    border_attributes,
    margin_declarations,
    padding_attributes,
    padding_declarations,
)

SOLID = BorderSide(style="solid", width="1px", color="#000")


@pytest.mark.unit
class TestEscape:
    """Test escaping and attribute formatting."""

    def test_escape_html(self):
        """Test that all markup characters are escaped."""
        assert escape_html("<a href='x'>\"&\"</a>") == "&lt;a href=&#x27;x&#x27;&gt;&quot;&amp;&quot;&lt;/a&gt;"

    def test_indent_pad(self):
        """Test indentation padding."""
        assert indent_pad(4) == "    "
        assert indent_pad(0) == ""
        assert indent_pad(-2) == ""

    def test_strip_px(self):
        """Test unit stripping."""
        assert strip_px("200px") == "200"
        assert strip_px("50%") == "50%"

    @pytest.mark.parametrize(
        "value,expected",
        [("300", "300px"), ("300px", "300px"), (" 16px ", "16px"), ("50%", None), ("auto", None), ("12.5", None)],
    )
    def test_normalize_pixel_value(self, value, expected):
        """Test pixel normalization."""
        assert normalize_pixel_value(value) == expected

    def test_attributes_sorted_and_filtered(self):
        """Test that attributes are sorted and empty values dropped."""
        attrs = {"width": "600px", "align": "", "padding": None, "font-weight": 700, "fluid": True}
        assert line_attributes(attrs) == 'fluid="true" font-weight="700" width="600px"'
        assert format_attributes(attrs).startswith(" fluid=")
        assert format_attributes({"align": ""}) == ""

    def test_style_attribute(self):
        """Test style attribute joining."""
        assert format_style_attribute(["color: red", "  ", "margin: 0px"]) == ' style="color: red; margin: 0px"'
        assert format_style_attribute([]) == ""


@pytest.mark.unit
class TestPadding:
    """Test padding and margin control modes."""

    def test_all_mode_uses_shorthand_only(self):
        """Test that sides are ignored in all mode."""
        padding = Padding(control="all", shorthand="10px", top="5px")
        assert padding_attributes(padding) == {"padding": "10px"}

    def test_separate_mode_uses_sides_only(self):
        """Test that the shorthand is ignored in separate mode."""
        padding = Padding(control="separate", shorthand="10px", top="5px", right="0px", bottom="7px")
        assert padding_attributes(padding) == {"padding-top": "5px", "padding-bottom": "7px"}

    def test_unknown_mode_falls_back_to_shorthand(self):
        """Test the shorthand default for unrecognized modes."""
        assert padding_attributes(Padding(control="", shorthand="4px", left="9px")) == {"padding": "4px"}

    def test_zero_length_values_are_suppressed(self):
        """Test that 0px and empty values are never emitted."""
        assert padding_attributes(Padding(control="all", shorthand="0px")) == {}
        assert padding_declarations(Padding(control="all", shorthand="")) == []

    def test_separate_mode_replaces_forced_padding(self):
        """Test that a forced padding="0" yields to per-side values."""
        attrs = {"padding": "0"}
        apply_padding(attrs, Padding(control="separate", top="3px"))
        assert attrs == {"padding-top": "3px"}

    def test_all_mode_overrides_forced_padding(self):
        """Test that a shorthand replaces a forced padding."""
        attrs = {"padding": "0"}
        apply_padding(attrs, Padding(control="all", shorthand="6px"))
        assert attrs == {"padding": "6px"}

    def test_declarations_with_suffix(self):
        """Test CSS declarations with an importance suffix."""
        padding = Padding(control="separate", top="1px", left="2px")
        assert padding_declarations(padding, " !important") == [
            "padding-top: 1px !important",
            "padding-left: 2px !important",
        ]

    def test_margin_always_emits(self):
        """Test that margins fall back to an explicit zero."""
        assert margin_declarations(Padding()) == ["margin: 0px"]
        assert margin_declarations(Padding(control="all", shorthand="0px"), " !important") == [
            "margin: 0px !important"
        ]
        assert margin_declarations(Padding(control="all", shorthand="8px")) == ["margin: 8px"]


@pytest.mark.unit
class TestBorders:
    """Test border resolution."""

    def test_all_mode(self):
        """Test the shorthand border."""
        assert border_attributes(Border(control="all", shorthand=SOLID)) == {"border": "1px solid #000"}

    def test_separate_mode(self):
        """Test per-side borders."""
        border = Border(control="separate", shorthand=SOLID, top=SOLID, left=BorderSide("dashed", "2px", "red"))
        assert border_attributes(border) == {"border-top": "1px solid #000", "border-left": "2px dashed red"}

    def test_missing_control_emits_nothing(self):
        """Test that borders need an explicit control mode."""
        assert border_attributes(Border(control="", shorthand=SOLID)) == {}

    @pytest.mark.parametrize(
        "side",
        [
            BorderSide(style="none", width="1px", color="#000"),
            BorderSide(style="solid", width="0px", color="#000"),
            BorderSide(style="solid", width="1px", color=""),
            BorderSide(style="", width="1px", color="#000"),
        ],
    )
    def test_incomplete_border_is_suppressed(self, side):
        """Test that a border needs style, width and color."""
        assert border_attributes(Border(control="all", shorthand=side)) == {}

    def test_apply_border_includes_radius(self):
        """Test that apply_border merges border radius."""
        attrs = {}
        apply_border(attrs, Border(control="all", shorthand=SOLID, radius="6px"))
        assert attrs == {"border": "1px solid #000", "border-radius": "6px"}

    def test_zero_radius_is_suppressed(self):
        """Test that a zero radius is not emitted."""
        attrs = {}
        apply_border(attrs, Border(radius="0px"))
        assert attrs == {}
