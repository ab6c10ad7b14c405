"""zwcodec: parse ZW structured text and convert it to JSON and GDScript."""

from zwcodec.exceptions import ConversionError, ParseError, ZwCodecError
from zwcodec.json_export import DuplicateKeyPolicy, convert_zw_to_json, infer_scalar, to_json, to_json_text
from zwcodec.json_import import from_json, from_value
from zwcodec.output_formatter import count_nodes, format_zw, render_outline
from zwcodec.parser import ParseOptions, ensure_valid_tree, is_error_node, parse_zw, strip_code_fence
from zwcodec.schemas import ListItem, ListItems, SectionChildren, SectionNode
from zwcodec.script_literal import to_script_literal

__all__ = [
    "ConversionError",
    "DuplicateKeyPolicy",
    "ListItem",
    "ListItems",
    "ParseError",
    "ParseOptions",
    "SectionChildren",
    "SectionNode",
    "ZwCodecError",
    "convert_zw_to_json",
    "count_nodes",
    "ensure_valid_tree",
    "format_zw",
    "from_json",
    "from_value",
    "infer_scalar",
    "is_error_node",
    "parse_zw",
    "render_outline",
    "strip_code_fence",
    "to_json",
    "to_json_text",
    "to_script_literal",
]
