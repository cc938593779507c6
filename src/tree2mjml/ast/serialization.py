#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2mjml/ast/serialization.py
"""JSON serialization and deserialization for email block trees.

The wire format is the one produced by the visual email editor: every block
is an object with ``id``, ``kind``, ``path``, ``data`` and ``children`` keys,
and payload fields use camelCase names. Decoding turns each payload into the
typed record for its kind exactly once; a payload whose shape does not match
its kind raises :class:`~tree2mjml.exceptions.BlockDataError` naming the
block, its kind and the offending field.

Examples
--------
Decode a tree:

    >>> from tree2mjml.ast.serialization import block_from_dict
    >>> block = block_from_dict({
    ...     "id": "s1", "kind": "spacer", "data": {"height": "24px"}, "children": []
    ... })
    >>> block.data.height
    '24px'

Encode it back:

    >>> from tree2mjml.ast.serialization import block_to_dict
    >>> block_to_dict(block)["data"]
    {'height': '24px'}

"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Mapping

from tree2mjml.ast.blocks import (
    BlockData,
    Border,
    BorderSide,
    ButtonData,
    ColumnData,
    DividerData,
    HeadingData,
    Hyperlink,
    HyperlinkStyle,
    ImageData,
    OpenTrackingData,
    Padding,
    RawTemplateData,
    RichTextLine,
    RootData,
    RootStyles,
    SectionData,
    SpacerData,
    TextData,
    TextRun,
    TextStyle,
    Wrapper,
)
from tree2mjml.ast.nodes import EmailBlock
from tree2mjml.constants import (
    KIND_BUTTON,
    KIND_COLUMN,
    KIND_DIVIDER,
    KIND_HEADING,
    KIND_IMAGE,
    KIND_LIQUID,
    KIND_OPEN_TRACKING,
    KIND_ROOT,
    KIND_SPACER,
    KIND_TEXT,
    PARAGRAPH_LINE_TYPE,
    SECTION_KINDS,
    SEMANTIC_TAGS,
    SIDES,
)
from tree2mjml.exceptions import BlockDataError

logger = logging.getLogger(__name__)


class _ShapeError(Exception):
    """Raised by payload decoders; converted to BlockDataError with block context."""

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.message = message
        self.path = path


# =============================================================================
# Field readers
# =============================================================================


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _type_name(value: Any) -> str:
    return type(value).__name__


def _get_str(data: Mapping[str, Any], key: str, path: str) -> str:
    """Read a strict string field; a missing or null value reads as empty."""
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise _ShapeError(f"expected string, got {_type_name(value)}", _join(path, key))
    return value


def _get_int(data: Mapping[str, Any], key: str, path: str) -> int:
    """Read a strict integer field; integral JSON floats are accepted."""
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool):
        raise _ShapeError("expected integer, got bool", _join(path, key))
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise _ShapeError(f"expected integer, got {_type_name(value)}", _join(path, key))


def _get_bool(data: Mapping[str, Any], key: str, path: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise _ShapeError(f"expected boolean, got {_type_name(value)}", _join(path, key))
    return value


def _get_mapping(data: Mapping[str, Any], key: str, path: str) -> Mapping[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise _ShapeError(f"expected object, got {_type_name(value)}", _join(path, key))
    return value


def _get_list(data: Mapping[str, Any], key: str, path: str) -> list[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise _ShapeError(f"expected array, got {_type_name(value)}", _join(path, key))
    return value


def normalize_scalar(value: Any) -> str:
    """Format a scalar wire value as a string.

    Integral numbers lose their fractional part (``400.0`` becomes ``"400"``)
    and booleans become ``"true"``/``"false"``. None becomes an empty string.

    Raises
    ------
    TypeError
        If the value is not a scalar.

    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    raise TypeError(f"expected a scalar value, got {_type_name(value)}")


def _get_scalar(data: Mapping[str, Any], key: str, path: str) -> str:
    """Read a lenient scalar field (strings and numbers) as a string."""
    try:
        return normalize_scalar(data.get(key))
    except TypeError as e:
        raise _ShapeError(str(e), _join(path, key)) from e


def _get_flag(data: Mapping[str, Any], key: str, default: bool | None = False) -> bool | None:
    """Read a lenient boolean: real booleans, or the strings "true"/"false"."""
    value = data.get(key)
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    return default


# =============================================================================
# Shared style fragments
# =============================================================================


def _decode_box(control: str, values: Mapping[str, Any], prefix: str, path: str) -> Padding:
    """Decode a padding or margin group from ``<prefix>``/``<prefix>Top``... keys."""
    return Padding(
        control=control,
        shorthand=_get_str(values, prefix, path),
        **{side: _get_str(values, f"{prefix}{side.capitalize()}", path) for side in SIDES},
    )


def _decode_border(control: str, values: Mapping[str, Any], path: str) -> Border:
    def side(name: str) -> BorderSide:
        return BorderSide(
            style=_get_str(values, f"border{name}Style", path),
            width=_get_str(values, f"border{name}Width", path),
            color=_get_str(values, f"border{name}Color", path),
        )

    return Border(
        control=control,
        shorthand=side(""),
        top=side("Top"),
        right=side("Right"),
        bottom=side("Bottom"),
        left=side("Left"),
        radius=_get_str(values, "borderRadius", path),
    )


def _decode_wrapper(data: Mapping[str, Any], path: str) -> Wrapper:
    return Wrapper(
        align=_get_str(data, "align", path),
        padding=_decode_box(_get_str(data, "paddingControl", path), data, "padding", path),
        border=_decode_border(_get_str(data, "borderControl", path), data, path),
    )


def _decode_text_style(data: Mapping[str, Any], path: str) -> TextStyle:
    """Decode root style defaults for one semantic tag (lenient scalars)."""

    def box(prefix: str) -> Padding:
        return Padding(
            control=_get_scalar(data, f"{prefix}Control", path),
            shorthand=_get_scalar(data, prefix, path),
            **{side: _get_scalar(data, f"{prefix}{side.capitalize()}", path) for side in SIDES},
        )

    return TextStyle(
        color=_get_scalar(data, "color", path),
        font_family=_get_scalar(data, "fontFamily", path),
        font_size=_get_scalar(data, "fontSize", path),
        font_style=_get_scalar(data, "fontStyle", path),
        font_weight=_get_scalar(data, "fontWeight", path),
        line_height=_get_scalar(data, "lineHeight", path),
        letter_spacing=_get_scalar(data, "letterSpacing", path),
        text_decoration=_get_scalar(data, "textDecoration", path),
        text_transform=_get_scalar(data, "textTransform", path),
        width=_get_scalar(data, "width", path),
        background_color=_get_scalar(data, "backgroundColor", path),
        padding=box("padding"),
        margin=box("margin"),
    )


def root_styles_from_dict(styles: Mapping[str, Any] | None, path: str = "styles") -> RootStyles:
    """Build immutable root style defaults from the root payload's ``styles`` object.

    Semantic tags whose value is not an object are ignored with a warning;
    keys other than the semantic tags are ignored.

    Raises
    ------
    BlockDataError
        If a style value is not a scalar.

    """
    try:
        return _decode_root_styles(styles or {}, path)
    except _ShapeError as e:
        raise BlockDataError(f"invalid root styles: {e.message}", field_path=e.path) from e


def _decode_root_styles(styles: Mapping[str, Any], path: str) -> RootStyles:
    decoded: dict[str, TextStyle] = {}
    for tag in SEMANTIC_TAGS:
        value = styles.get(tag)
        if value is None:
            continue
        if not isinstance(value, Mapping):
            logger.warning(f"Root style '{tag}' is not an object ({_type_name(value)}), ignoring it")
            continue
        decoded[tag] = _decode_text_style(value, _join(path, tag))
    return RootStyles(**decoded)


# =============================================================================
# Rich text
# =============================================================================


def _decode_run(data: Any, path: str) -> TextRun:
    if not isinstance(data, Mapping):
        raise _ShapeError(f"expected object, got {_type_name(data)}", path)

    hyperlink = None
    link_data = data.get("hyperlink")
    if isinstance(link_data, Mapping):
        hyperlink = Hyperlink(
            url=_get_scalar(link_data, "url", _join(path, "hyperlink")),
            disable_tracking=bool(_get_flag(link_data, "disable_tracking")),
        )

    return TextRun(
        text=_get_scalar(data, "text", path),
        bold=bool(_get_flag(data, "bold")),
        italic=bool(_get_flag(data, "italic")),
        underlined=_get_flag(data, "underlined", default=None),
        font_size=_get_scalar(data, "fontSize", path),
        font_color=_get_scalar(data, "fontColor", path),
        font_family=_get_scalar(data, "fontFamily", path),
        font_weight=_get_scalar(data, "fontWeight", path),
        font_style=_get_scalar(data, "fontStyle", path),
        hyperlink=hyperlink,
    )


def _decode_lines(data: Mapping[str, Any], path: str) -> tuple[RichTextLine, ...]:
    lines = []
    for i, line in enumerate(_get_list(data, "editorData", path)):
        line_path = f"{_join(path, 'editorData')}[{i}]"
        if not isinstance(line, Mapping):
            raise _ShapeError(f"expected object, got {_type_name(line)}", line_path)
        runs = tuple(
            _decode_run(run, f"{_join(line_path, 'children')}[{j}]")
            for j, run in enumerate(_get_list(line, "children", line_path))
        )
        lines.append(RichTextLine(type=_get_str(line, "type", line_path) or PARAGRAPH_LINE_TYPE, runs=runs))
    return tuple(lines)


# =============================================================================
# Payload decoders
# =============================================================================


def _decode_root(data: Mapping[str, Any], path: str) -> RootData:
    return RootData(styles=_decode_root_styles(_get_mapping(data, "styles", path), _join(path, "styles")))


def _decode_section(data: Mapping[str, Any], path: str) -> SectionData:
    styles_path = _join(path, "styles")
    styles = _get_mapping(data, "styles", path)
    columns = []
    for i, width in enumerate(_get_list(data, "columns", path)):
        if isinstance(width, bool) or not isinstance(width, (int, float)):
            raise _ShapeError(f"expected integer, got {_type_name(width)}", f"{_join(path, 'columns')}[{i}]")
        columns.append(int(width))

    return SectionData(
        columns_on_mobile=_get_bool(data, "columnsOnMobile", path),
        stack_columns_at_width=_get_int(data, "stackColumnsAtWidth", path),
        background_type=_get_str(data, "backgroundType", path),
        text_align=_get_str(styles, "textAlign", styles_path),
        background_color=_get_str(styles, "backgroundColor", styles_path),
        background_image=_get_str(styles, "backgroundImage", styles_path),
        background_size=_get_str(styles, "backgroundSize", styles_path),
        background_repeat=_get_str(styles, "backgroundRepeat", styles_path),
        padding=_decode_box(_get_str(data, "paddingControl", path), styles, "padding", styles_path),
        border=_decode_border(_get_str(data, "borderControl", path), styles, styles_path),
        columns=tuple(columns),
    )


def _decode_column(data: Mapping[str, Any], path: str) -> ColumnData:
    styles_path = _join(path, "styles")
    styles = _get_mapping(data, "styles", path)
    return ColumnData(
        vertical_align=_get_str(styles, "verticalAlign", styles_path),
        background_color=_get_str(styles, "backgroundColor", styles_path),
        min_height=_get_str(styles, "minHeight", styles_path),
        padding=_decode_box(_get_str(data, "paddingControl", path), styles, "padding", styles_path),
        border=_decode_border(_get_str(data, "borderControl", path), styles, styles_path),
    )


def _decode_text(data: Mapping[str, Any], path: str) -> TextData:
    link_path = _join(path, "hyperlinkStyles")
    link = _get_mapping(data, "hyperlinkStyles", path)
    return TextData(
        align=_get_str(data, "align", path),
        width=_get_str(data, "width", path),
        hyperlink_styles=HyperlinkStyle(
            color=_get_str(link, "color", link_path),
            text_decoration=_get_str(link, "textDecoration", link_path),
            font_family=_get_str(link, "fontFamily", link_path),
            font_size=_get_str(link, "fontSize", link_path),
            font_weight=_get_int(link, "fontWeight", link_path),
            font_style=_get_str(link, "fontStyle", link_path),
            text_transform=_get_str(link, "textTransform", link_path),
        ),
        lines=_decode_lines(data, path),
        background_color=_get_str(data, "backgroundColor", path),
        padding=_decode_box(_get_str(data, "paddingControl", path), data, "padding", path),
    )


def _decode_heading(data: Mapping[str, Any], path: str) -> HeadingData:
    return HeadingData(
        type=_get_str(data, "type", path) or "h1",
        align=_get_str(data, "align", path),
        width=_get_str(data, "width", path),
        lines=_decode_lines(data, path),
        background_color=_get_str(data, "backgroundColor", path),
        padding=_decode_box(_get_str(data, "paddingControl", path), data, "padding", path),
    )


def _decode_image(data: Mapping[str, Any], path: str) -> ImageData:
    image_path = _join(path, "image")
    image = _get_mapping(data, "image", path)
    return ImageData(
        src=_get_str(image, "src", image_path),
        alt=_get_str(image, "alt", image_path),
        href=_get_str(image, "href", image_path),
        width=_get_str(image, "width", image_path),
        disable_tracking=_get_bool(image, "disable_tracking", image_path),
        wrapper=_decode_wrapper(_get_mapping(data, "wrapper", path), _join(path, "wrapper")),
    )


def _decode_button(data: Mapping[str, Any], path: str) -> ButtonData:
    button_path = _join(path, "button")
    button = _get_mapping(data, "button", path)
    return ButtonData(
        text=_get_str(button, "text", button_path),
        href=_get_str(button, "href", button_path),
        background_color=_get_str(button, "backgroundColor", button_path),
        font_family=_get_str(button, "fontFamily", button_path),
        font_size=_get_str(button, "fontSize", button_path),
        font_weight=_get_int(button, "fontWeight", button_path),
        font_style=_get_str(button, "fontStyle", button_path),
        color=_get_str(button, "color", button_path),
        inner_vertical_padding=_get_str(button, "innerVerticalPadding", button_path),
        inner_horizontal_padding=_get_str(button, "innerHorizontalPadding", button_path),
        width=_get_str(button, "width", button_path),
        text_transform=_get_str(button, "textTransform", button_path),
        disable_tracking=_get_bool(button, "disable_tracking", button_path),
        border=_decode_border(_get_str(button, "borderControl", button_path), button, button_path),
        wrapper=_decode_wrapper(_get_mapping(data, "wrapper", path), _join(path, "wrapper")),
    )


def _decode_divider(data: Mapping[str, Any], path: str) -> DividerData:
    return DividerData(
        align=_get_str(data, "align", path),
        border_color=_get_str(data, "borderColor", path),
        border_style=_get_str(data, "borderStyle", path),
        border_width=_get_str(data, "borderWidth", path),
        background_color=_get_str(data, "backgroundColor", path),
        width=_get_str(data, "width", path),
        padding=_decode_box(_get_str(data, "paddingControl", path), data, "padding", path),
    )


def _decode_spacer(data: Mapping[str, Any], path: str) -> SpacerData:
    return SpacerData(
        height=_get_scalar(data, "height", path),
        background_color=_get_scalar(data, "backgroundColor", path),
    )


def _decode_raw_template(data: Mapping[str, Any], path: str) -> RawTemplateData:
    return RawTemplateData(code=_get_str(data, "liquidCode", path))


def _decode_open_tracking(data: Mapping[str, Any], path: str) -> OpenTrackingData:
    return OpenTrackingData()


# Dispatch table mapping block kinds to payload decoders
_PAYLOAD_DECODERS: dict[str, Callable[[Mapping[str, Any], str], BlockData]] = {
    KIND_ROOT: _decode_root,
    **{kind: _decode_section for kind in SECTION_KINDS},
    KIND_COLUMN: _decode_column,
    KIND_TEXT: _decode_text,
    KIND_HEADING: _decode_heading,
    KIND_IMAGE: _decode_image,
    KIND_BUTTON: _decode_button,
    KIND_DIVIDER: _decode_divider,
    KIND_SPACER: _decode_spacer,
    KIND_LIQUID: _decode_raw_template,
    KIND_OPEN_TRACKING: _decode_open_tracking,
}

# Payload record expected for each kind
PAYLOAD_TYPES: dict[str, type] = {
    KIND_ROOT: RootData,
    **{kind: SectionData for kind in SECTION_KINDS},
    KIND_COLUMN: ColumnData,
    KIND_TEXT: TextData,
    KIND_HEADING: HeadingData,
    KIND_IMAGE: ImageData,
    KIND_BUTTON: ButtonData,
    KIND_DIVIDER: DividerData,
    KIND_SPACER: SpacerData,
    KIND_LIQUID: RawTemplateData,
    KIND_OPEN_TRACKING: OpenTrackingData,
}


def decode_block_data(kind: str, data: Any, block_id: str | None = None) -> Any:
    """Decode a raw payload into the typed record for ``kind``.

    Already-typed payloads are checked against the kind and returned as is.
    Payloads of unsupported kinds are returned unchanged. A missing payload
    decodes to the kind's record with default values.

    Parameters
    ----------
    kind : str
        Declared block kind
    data : Any
        Raw wire payload (mapping or None) or an already-typed record
    block_id : str, optional
        Block identifier used in error messages

    Returns
    -------
    BlockData or Any
        Typed payload record for supported kinds

    Raises
    ------
    BlockDataError
        If the payload does not match the shape expected for ``kind``

    """
    decoder = _PAYLOAD_DECODERS.get(kind)
    if decoder is None:
        return data

    expected_type = PAYLOAD_TYPES[kind]
    if isinstance(data, expected_type):
        return data
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise BlockDataError(
            f"payload must be an object or {expected_type.__name__}, got {_type_name(data)}",
            block_id=block_id,
            block_kind=kind,
        )

    try:
        return decoder(data, "")
    except _ShapeError as e:
        raise BlockDataError(
            f"invalid {kind} payload: {e.message}", block_id=block_id, block_kind=kind, field_path=e.path
        ) from e


def block_from_dict(data: Mapping[str, Any]) -> EmailBlock:
    """Decode a wire dictionary into an :class:`EmailBlock` tree.

    Payloads of supported kinds are decoded into typed records. Blocks of
    unknown kinds keep their raw payload so the compiler can emit a
    placeholder for them.

    Raises
    ------
    BlockDataError
        If a node or payload does not have the expected shape

    """
    if not isinstance(data, Mapping):
        raise BlockDataError(f"block must be an object, got {_type_name(data)}")

    block_id = data.get("id", "")
    kind = data.get("kind", "")
    if not isinstance(block_id, str):
        raise BlockDataError(f"block id must be a string, got {_type_name(block_id)}", block_kind=str(kind))
    if not isinstance(kind, str):
        raise BlockDataError(f"block kind must be a string, got {_type_name(kind)}", block_id=block_id)

    children_data = data.get("children") or []
    if not isinstance(children_data, list):
        raise BlockDataError("block children must be an array", block_id=block_id, block_kind=kind)

    path = data.get("path") or ""
    return EmailBlock(
        id=block_id,
        kind=kind,
        data=decode_block_data(kind, data.get("data"), block_id),
        children=[block_from_dict(child) for child in children_data],
        path=path if isinstance(path, str) else "",
    )


def block_from_json(json_str: str | bytes) -> EmailBlock:
    """Decode a JSON document into an :class:`EmailBlock` tree.

    Raises
    ------
    BlockDataError
        If the document is not valid JSON or does not describe a block tree

    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise BlockDataError(f"invalid block tree JSON: {e}", original_error=e) from e
    return block_from_dict(data)


# =============================================================================
# Encoders
# =============================================================================


def _compact(data: dict[str, Any]) -> dict[str, Any]:
    """Drop keys holding empty values so encoded payloads stay minimal."""
    return {k: v for k, v in data.items() if not (v is None or v is False or v == "" or v == {} or v == [])}


def _encode_box(box: Padding, prefix: str, include_control: bool = True) -> dict[str, Any]:
    result = {f"{prefix}Control": box.control} if include_control else {}
    result[prefix] = box.shorthand
    for side in SIDES:
        result[f"{prefix}{side.capitalize()}"] = getattr(box, side)
    return result


def _encode_border(border: Border, include_control: bool = True) -> dict[str, Any]:
    result: dict[str, Any] = {"borderControl": border.control} if include_control else {}
    for name, side in (
        ("", border.shorthand),
        ("Top", border.top),
        ("Right", border.right),
        ("Bottom", border.bottom),
        ("Left", border.left),
    ):
        result[f"border{name}Style"] = side.style
        result[f"border{name}Width"] = side.width
        result[f"border{name}Color"] = side.color
    result["borderRadius"] = border.radius
    return result


def _encode_wrapper(wrapper: Wrapper) -> dict[str, Any]:
    return _compact(
        {"align": wrapper.align, **_encode_box(wrapper.padding, "padding"), **_encode_border(wrapper.border)}
    )


def _encode_text_style(style: TextStyle) -> dict[str, Any]:
    return _compact(
        {
            "color": style.color,
            "fontFamily": style.font_family,
            "fontSize": style.font_size,
            "fontStyle": style.font_style,
            "fontWeight": style.font_weight,
            "lineHeight": style.line_height,
            "letterSpacing": style.letter_spacing,
            "textDecoration": style.text_decoration,
            "textTransform": style.text_transform,
            "width": style.width,
            "backgroundColor": style.background_color,
            **_encode_box(style.padding, "padding"),
            **_encode_box(style.margin, "margin"),
        }
    )


def root_styles_to_dict(styles: RootStyles) -> dict[str, Any]:
    """Encode root style defaults back to the wire ``styles`` object."""
    encoded = {tag: _encode_text_style(styles.for_tag(tag)) for tag in SEMANTIC_TAGS}
    return {tag: value for tag, value in encoded.items() if value}


def _encode_run(run: TextRun) -> dict[str, Any]:
    result = _compact(
        {
            "text": run.text,
            "bold": run.bold,
            "italic": run.italic,
            "fontSize": run.font_size,
            "fontColor": run.font_color,
            "fontFamily": run.font_family,
            "fontWeight": run.font_weight,
            "fontStyle": run.font_style,
        }
    )
    if run.underlined is not None:
        result["underlined"] = run.underlined
    if run.hyperlink is not None:
        result["hyperlink"] = _compact(
            {"url": run.hyperlink.url, "disable_tracking": run.hyperlink.disable_tracking}
        )
    return result


def _encode_lines(lines: tuple[RichTextLine, ...]) -> list[dict[str, Any]]:
    return [{"type": line.type, "children": [_encode_run(run) for run in line.runs]} for line in lines]


def _encode_root(data: RootData) -> dict[str, Any]:
    return {"styles": root_styles_to_dict(data.styles)}


def _encode_section(data: SectionData) -> dict[str, Any]:
    styles = _compact(
        {
            "textAlign": data.text_align,
            "backgroundColor": data.background_color,
            "backgroundImage": data.background_image,
            "backgroundSize": data.background_size,
            "backgroundRepeat": data.background_repeat,
            **_encode_box(data.padding, "padding", include_control=False),
            **_encode_border(data.border, include_control=False),
        }
    )
    return _compact(
        {
            "columnsOnMobile": data.columns_on_mobile,
            "stackColumnsAtWidth": data.stack_columns_at_width or None,
            "backgroundType": data.background_type,
            "paddingControl": data.padding.control,
            "borderControl": data.border.control,
            "columns": list(data.columns),
            "styles": styles,
        }
    )


def _encode_column(data: ColumnData) -> dict[str, Any]:
    styles = _compact(
        {
            "verticalAlign": data.vertical_align,
            "backgroundColor": data.background_color,
            "minHeight": data.min_height,
            **_encode_box(data.padding, "padding", include_control=False),
            **_encode_border(data.border, include_control=False),
        }
    )
    return _compact(
        {"paddingControl": data.padding.control, "borderControl": data.border.control, "styles": styles}
    )


def _encode_text(data: TextData) -> dict[str, Any]:
    link = data.hyperlink_styles
    return _compact(
        {
            "align": data.align,
            "width": data.width,
            "hyperlinkStyles": _compact(
                {
                    "color": link.color,
                    "textDecoration": link.text_decoration,
                    "fontFamily": link.font_family,
                    "fontSize": link.font_size,
                    "fontWeight": link.font_weight or None,
                    "fontStyle": link.font_style,
                    "textTransform": link.text_transform,
                }
            ),
            "editorData": _encode_lines(data.lines),
            "backgroundColor": data.background_color,
            **_encode_box(data.padding, "padding"),
        }
    )


def _encode_heading(data: HeadingData) -> dict[str, Any]:
    return _compact(
        {
            "type": data.type,
            "align": data.align,
            "width": data.width,
            "editorData": _encode_lines(data.lines),
            "backgroundColor": data.background_color,
            **_encode_box(data.padding, "padding"),
        }
    )


def _encode_image(data: ImageData) -> dict[str, Any]:
    return _compact(
        {
            "image": _compact(
                {
                    "src": data.src,
                    "alt": data.alt,
                    "href": data.href,
                    "width": data.width,
                    "disable_tracking": data.disable_tracking,
                }
            ),
            "wrapper": _encode_wrapper(data.wrapper),
        }
    )


def _encode_button(data: ButtonData) -> dict[str, Any]:
    button = _compact(
        {
            "text": data.text,
            "href": data.href,
            "backgroundColor": data.background_color,
            "fontFamily": data.font_family,
            "fontSize": data.font_size,
            "fontWeight": data.font_weight or None,
            "fontStyle": data.font_style,
            "color": data.color,
            "innerVerticalPadding": data.inner_vertical_padding,
            "innerHorizontalPadding": data.inner_horizontal_padding,
            "width": data.width,
            "textTransform": data.text_transform,
            "disable_tracking": data.disable_tracking,
            **_encode_border(data.border),
        }
    )
    return _compact({"button": button, "wrapper": _encode_wrapper(data.wrapper)})


def _encode_divider(data: DividerData) -> dict[str, Any]:
    return _compact(
        {
            "align": data.align,
            "borderColor": data.border_color,
            "borderStyle": data.border_style,
            "borderWidth": data.border_width,
            "backgroundColor": data.background_color,
            "width": data.width,
            **_encode_box(data.padding, "padding"),
        }
    )


# Dispatch table mapping payload records to encoders
_PAYLOAD_ENCODERS: dict[type, Callable[[Any], dict[str, Any]]] = {
    RootData: _encode_root,
    SectionData: _encode_section,
    ColumnData: _encode_column,
    TextData: _encode_text,
    HeadingData: _encode_heading,
    ImageData: _encode_image,
    ButtonData: _encode_button,
    DividerData: _encode_divider,
    SpacerData: lambda data: _compact({"height": data.height, "backgroundColor": data.background_color}),
    RawTemplateData: lambda data: {"liquidCode": data.code},
    OpenTrackingData: lambda data: {},
}


def block_to_dict(block: EmailBlock) -> dict[str, Any]:
    """Encode an :class:`EmailBlock` tree to the camelCase wire format.

    Raw dictionary payloads are copied through unchanged.
    """
    encoder = _PAYLOAD_ENCODERS.get(type(block.data))
    if encoder is not None:
        data: Any = encoder(block.data)
    elif isinstance(block.data, Mapping):
        data = json.loads(json.dumps(block.data))
    else:
        data = block.data

    result: dict[str, Any] = {"id": block.id, "kind": block.kind}
    if block.path:
        result["path"] = block.path
    result["data"] = data
    result["children"] = [block_to_dict(child) for child in block.children]
    return result


def block_to_json(block: EmailBlock, indent: int | None = None) -> str:
    """Encode an :class:`EmailBlock` tree to a JSON string."""
    return json.dumps(block_to_dict(block), indent=indent, ensure_ascii=False)
