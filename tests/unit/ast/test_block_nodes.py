"""Unit tests for email block tree nodes and layout slots."""

import pytest

from tree2mjml.ast.blocks import ButtonData, SpacerData
from tree2mjml.ast.nodes import EmailBlock, LayoutSlot, copy_block


@pytest.mark.unit
class TestEmailBlock:
    """Test EmailBlock behavior."""

    def test_supported_kinds(self):
        """Test that known kinds are reported as supported."""
        assert EmailBlock(id="a", kind="columns168").is_supported
        assert EmailBlock(id="b", kind="liquid").is_supported
        assert not EmailBlock(id="c", kind="carousel").is_supported

    def test_walk_is_depth_first(self):
        """Test walk yields blocks in document order."""
        tree = EmailBlock(
            id="root",
            kind="root",
            children=[
                EmailBlock(id="s1", kind="section", children=[EmailBlock(id="t1", kind="text")]),
                EmailBlock(id="s2", kind="spacer"),
            ],
        )
        assert [b.id for b in tree.walk()] == ["root", "s1", "t1", "s2"]

    def test_copy_is_independent(self):
        """Test that mutating a copy leaves the original untouched."""
        original = EmailBlock(
            id="root",
            kind="root",
            data={"styles": {"body": {"width": "600px"}}},
            children=[EmailBlock(id="sp", kind="spacer", data=SpacerData(height="10px"))],
        )
        clone = copy_block(original)

        clone.data["styles"]["body"]["width"] = "320px"
        clone.children.append(EmailBlock(id="extra", kind="divider"))
        clone.children[0].id = "renamed"

        assert original.data["styles"]["body"]["width"] == "600px"
        assert [c.id for c in original.children] == ["sp"]

    def test_copy_keeps_typed_payloads_equal(self):
        """Test that typed payloads survive a copy."""
        original = EmailBlock(id="b", kind="button", data=ButtonData(text="Go", href="https://example.com"))
        clone = original.copy()
        assert clone == original
        assert clone is not original


@pytest.mark.unit
class TestLayoutSlot:
    """Test column width resolution from layout slots."""

    @pytest.mark.parametrize(
        "layout,index,expected",
        [
            ("columns168", 0, "66.66%"),
            ("columns168", 1, "33.33%"),
            ("columns204", 0, "83.33%"),
            ("columns204", 1, "16.66%"),
            ("columns420", 0, "16.66%"),
            ("columns816", 1, "66.66%"),
            ("columns888", 2, "33.33%"),
            ("columns1212", 1, "50%"),
            ("columns6666", 3, "25%"),
        ],
    )
    def test_fixed_widths(self, layout, index, expected):
        """Test the width assigned to each layout position."""
        assert LayoutSlot(layout, index).column_width == expected

    def test_extra_columns_have_no_width(self):
        """Test that columns beyond the layout arity get no width."""
        assert LayoutSlot("columns168", 2).column_width is None

    def test_one_column_and_plain_section_leave_width_unset(self):
        """Test layouts without fixed ratios."""
        assert LayoutSlot("oneColumn", 0).column_width is None
        assert LayoutSlot("section", 0).column_width is None
