"""End-to-end tests compiling editor JSON documents to MJML and HTML."""

import json

import pytest
from utils import block, column, root, run, spacer, text_block

from tree2mjml.api import CompileTemplateRequest, compile_template
from tree2mjml.ast.serialization import block_from_json, block_to_json
from tree2mjml.exceptions import TemplateRenderError
from tree2mjml.renderers.mjml import tree_to_mjml

NEWSLETTER = root(
    block(
        "hero",
        "columns816",
        {"backgroundType": "color", "styles": {"backgroundColor": "#ffffff"}},
        column(
            "hero-left",
            block(
                "logo",
                "image",
                {
                    "image": {"src": "https://cdn.example.com/logo.png", "alt": "Logo", "href": "https://example.com"},
                    "wrapper": {"align": "left"},
                },
            ),
        ),
        column(
            "hero-right",
            block(
                "title",
                "heading",
                {"type": "h1", "align": "left", "editorData": [{"type": "h1", "children": [run("Spring sale")]}]},
            ),
            text_block(
                "intro",
                run("Hi {{ first_name }}, read "),
                run("our picks", hyperlink={"url": "https://example.com/picks"}),
                align="left",
            ),
            block(
                "cta",
                "button",
                {
                    "button": {"text": "Shop now", "href": "https://example.com/shop", "backgroundColor": "#222"},
                    "wrapper": {"align": "center"},
                },
            ),
        ),
    ),
    block("rule", "divider", {"borderColor": "#eee", "borderStyle": "solid", "borderWidth": "1px"}),
    block("outro", "liquid", {"liquidCode": "{% if vip %}<p>Thanks for being VIP</p>{% endif %}"}),
    block("pixel", "openTracking", {}),
    styles={
        "body": {"width": "600px", "backgroundColor": "#f4f4f4"},
        "h1": {"fontSize": "28px", "fontWeight": 700},
        "paragraph": {"color": "#000000", "fontFamily": "Arial", "fontSize": "14px", "fontWeight": 400},
        "hyperlink": {"color": "#0066cc"},
    },
)


@pytest.mark.integration
class TestNewsletterCompilation:
    """Test compiling a realistic newsletter."""

    def test_compiles_to_mjml_and_html(self, stub_converter):
        """Test the full request flow."""
        request = CompileTemplateRequest.from_dict(
            {
                "workspace_id": "ws-9",
                "message_id": "msg-42",
                "visual_editor_tree": NEWSLETTER,
                "test_data": json.dumps({"first_name": "Ada", "vip": True}),
                "tracking_settings": {"utm_source": "newsletter", "utm_medium": "email"},
            }
        )
        response = compile_template(request, converter=stub_converter)
        assert response.success, response.error
        mjml = response.mjml

        assert '  <mj-body background-color="#f4f4f4" width="600px">' in mjml
        assert '    <mj-section background-color="#ffffff">' in mjml
        assert '      <mj-column width="33.33%">' in mjml
        assert '      <mj-column width="66.66%">' in mjml
        assert 'href="https://example.com?utm_medium=email&utm_source=newsletter"' in mjml
        assert 'href="https://example.com/shop?utm_medium=email&utm_source=newsletter"' in mjml
        assert (
            '<a style="color: #0066cc !important; text-decoration: underline !important" '
            'href="https://example.com/picks?utm_medium=email&utm_source=newsletter" '
            'target="_blank" rel="noopener noreferrer">our picks</a>'
        ) in mjml
        assert "Hi Ada, read " in mjml
        assert '<h1 style="font-size: 28px !important; font-weight: 700 !important; margin: 0px !important">' in mjml
        assert "<p>Thanks for being VIP</p>" in mjml
        assert "{{ open_tracking_pixel_src }}" in mjml
        assert mjml.endswith("  </mj-body>\n</mjml>")

    def test_document_order_is_preserved(self):
        """Test that blocks appear in document order."""
        mjml = tree_to_mjml(None, block_from_json(json.dumps(NEWSLETTER)), template_data={"first_name": "Ada"})
        positions = [mjml.index(marker) for marker in ("logo.png", "Spring sale", "Shop now", "<mj-divider", "<mj-raw>")]
        assert positions == sorted(positions)

    def test_json_round_trip_compiles_identically(self):
        """Test that re-encoded trees compile to the same MJML."""
        tree = block_from_json(json.dumps(NEWSLETTER))
        again = block_from_json(block_to_json(tree))
        data = {"first_name": "Ada"}
        assert tree_to_mjml(None, again, template_data=data) == tree_to_mjml(None, tree, template_data=data)

    def test_template_error_aborts_compile(self, stub_converter):
        """Test that a broken template fails the whole document."""
        broken = root(spacer("s"), block("bad", "liquid", {"liquidCode": "{% invalid %}"}), styles={"body": {}})
        with pytest.raises(TemplateRenderError):
            tree_to_mjml(None, block_from_json(json.dumps(broken)))


@pytest.mark.integration
class TestHelloWorld:
    """Test the smallest useful document."""

    def test_hello_world(self, paragraph_styles):
        """Test a single paragraph inside a one-column layout."""
        tree = root(
            block("layout", "oneColumn", {}, column("col", text_block("t", run("Hello World"), align="left"))),
            styles=paragraph_styles,
        )
        mjml = tree_to_mjml(None, block_from_json(json.dumps(tree)))
        assert mjml == (
            "<mjml>\n"
            "  <mj-body>\n"
            "    <mj-section>\n"
            "      <mj-column>\n"
            '        <mj-text align="left" padding="0">\n'
            '          <p style="color: #000000 !important; font-family: Arial !important; '
            "font-size: 14px !important; font-weight: 400 !important; margin: 0px !important\">"
            "Hello World</p>\n"
            "        </mj-text>\n"
            "      </mj-column>\n"
            "    </mj-section>\n"
            "  </mj-body>\n"
            "</mjml>"
        )


@pytest.mark.integration
class TestMjmlPython:
    """Test HTML rendering with the real mjml-python package."""

    def test_renders_html(self):
        """Test that compiled MJML renders to HTML."""
        pytest.importorskip("mjml")
        tree = root(text_block("t", run("Hello World")), styles={"body": {"width": "600px"}})
        request = CompileTemplateRequest.from_dict(
            {"workspace_id": "w", "message_id": "m", "visual_editor_tree": tree}
        )
        response = compile_template(request)
        assert response.success, response.error
        assert "Hello World" in response.html
