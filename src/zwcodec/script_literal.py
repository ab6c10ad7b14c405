"""Export parsed ZW trees as GDScript dictionary/array literals."""

from __future__ import annotations

from zwcodec.schemas import ListItem, ListItems, SectionChildren, SectionNode

_INDENT = "  "

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def quote_string(text: str) -> str:
    """Return ``text`` as a double-quoted GDScript string literal."""
    return '"' + "".join(_ESCAPES.get(char, char) for char in text) + '"'


def variable_name(root_key: str) -> str:
    """Derive the script variable name from a root key (``ZW-BASE`` -> ``ZW_BASE``)."""
    return root_key.replace("-", "_").upper()


def to_script_literal(tree: SectionNode | None) -> str:
    """Render a tree as a GDScript ``var NAME = <literal>`` assignment.

    Map-shaped content becomes a dictionary, list-shaped content an array.
    Leaf values are emitted as escaped strings; no type inference is applied.
    The sentinel error node produces comment lines instead of a literal.
    """
    if tree is None or tree.is_error:
        key = tree.key if tree else "Unknown error"
        detail = tree.value if tree and isinstance(tree.value, str) else ""
        return f"# Error: Invalid ZW input or parsing failed.\n# Message: {key} {detail}".rstrip() + "\n"

    lines = [
        f"# Auto-generated GDScript from ZW template: {tree.key}",
        f"var {variable_name(tree.key)} = {_render_value(tree.value, 0)}",
    ]
    return "\n".join(lines) + "\n"


def _render_value(value: str | SectionChildren | ListItems | None, level: int) -> str:
    if value is None:
        return "{}"
    if isinstance(value, str):
        return quote_string(value)
    if isinstance(value, ListItems):
        return _render_array(value.items, level)
    return _render_dictionary(value.nodes, level)


def _render_dictionary(nodes: list[SectionNode], level: int) -> str:
    if not nodes:
        return "{}"
    inner = _INDENT * (level + 1)
    entries = [f"{inner}{quote_string(node.key)}: {_render_value(node.value, level + 1)}" for node in nodes]
    return "{\n" + ",\n".join(entries) + "\n" + _INDENT * level + "}"


def _render_array(items: list[ListItem], level: int) -> str:
    if not items:
        return "[]"
    inner = _INDENT * (level + 1)
    entries = []
    for item in items:
        if item.is_key_value and item.item_key:
            rendered = f"{{ {quote_string(item.item_key)}: {_render_value(item.value, level + 1)} }}"
        else:
            rendered = _render_value(item.value, level + 1)
        entries.append(inner + rendered)
    return "[\n" + ",\n".join(entries) + "\n" + _INDENT * level + "]"
