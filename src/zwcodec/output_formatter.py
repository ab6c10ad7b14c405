"""Format parsed trees back into ZW text and readable outlines."""

from __future__ import annotations

from zwcodec.config import INDENT_WIDTH
from zwcodec.parser import ParseOptions
from zwcodec.schemas import ListItem, ListItems, SectionChildren, SectionNode


def format_zw(tree: SectionNode, options: ParseOptions | None = None) -> str:
    """Write a tree in ZW notation.

    Nesting is re-derived from the tree structure (two spaces per level), so
    irregular source indentation comes out normalized. Extra lines of a
    multi-line value are written one level deeper than the line they
    continue. The sentinel error node is written as comment lines.
    """
    opts = options or ParseOptions()
    if tree.is_error:
        detail = tree.value if isinstance(tree.value, str) else ""
        return f"# {tree.key}\n# {detail}".rstrip() + "\n"

    lines = [f"{tree.key}{opts.delimiter}"]
    if isinstance(tree.value, str):
        # A bare root string has no place on the root line; keep it as a child value.
        _write_text(lines, tree.value, 1)
    else:
        _write_children(lines, tree.value, 1, opts)
    return "\n".join(lines) + "\n"


def render_outline(tree: SectionNode) -> str:
    """Return an indented outline of keys and list entries (values elided)."""
    if tree.is_error:
        return f"{tree.key}: {tree.value}"
    lines = [tree.key]
    _outline(lines, tree.value, 1)
    return "\n".join(lines)


def count_nodes(tree: SectionNode) -> int:
    """Count section nodes and list items in the tree, root included."""
    return 1 + _count(tree.value)


def _indent(level: int) -> str:
    return " " * (level * INDENT_WIDTH)


def _value_text(value: str) -> str:
    return value if value else '""'


def _write_text(lines: list[str], text: str, level: int, lead: str = "") -> None:
    first, *rest = _value_text(text).split("\n")
    lines.append(f"{_indent(level)}{lead}{first}")
    lines.extend(f"{_indent(level + 1)}{extra}" for extra in rest)


def _write_children(
    lines: list[str],
    value: SectionChildren | ListItems | None,
    level: int,
    opts: ParseOptions,
) -> None:
    if isinstance(value, SectionChildren):
        for node in value.nodes:
            _write_node(lines, node, level, opts)
    elif isinstance(value, ListItems):
        for item in value.items:
            _write_item(lines, item, level, opts)


def _write_node(lines: list[str], node: SectionNode, level: int, opts: ParseOptions, lead: str = "") -> None:
    header = f"{lead}{node.key}{opts.delimiter}"
    if isinstance(node.value, str):
        _write_text(lines, node.value, level, lead=f"{header} ")
        return
    lines.append(f"{_indent(level)}{header}")
    # Children of a node written on a list marker line sit one level further in.
    _write_children(lines, node.value, level + (2 if lead else 1), opts)


def _write_item(lines: list[str], item: ListItem, level: int, opts: ParseOptions) -> None:
    marker = f"{opts.list_item_prefix} "
    if item.is_key_value and item.item_key:
        lead = f"{marker}{item.item_key}{opts.delimiter}"
        if isinstance(item.value, str):
            _write_text(lines, item.value, level, lead=f"{lead} ")
        else:
            lines.append(f"{_indent(level)}{lead}")
            _write_children(lines, item.value, level + 2, opts)
    elif isinstance(item.value, SectionChildren):
        if not item.value.nodes:
            lines.append(f"{_indent(level)}{marker}{{}}")
            return
        first, *rest = item.value.nodes
        _write_node(lines, first, level, opts, lead=marker)
        for node in rest:
            _write_node(lines, node, level + 1, opts)
    else:
        _write_text(lines, item.value, level, lead=marker)


def _outline(lines: list[str], value: str | SectionChildren | ListItems | None, level: int) -> None:
    prefix = "  " * level
    if isinstance(value, SectionChildren):
        for node in value.nodes:
            lines.append(prefix + node.key)
            _outline(lines, node.value, level + 1)
    elif isinstance(value, ListItems):
        for item in value.items:
            if item.is_key_value and item.item_key:
                lines.append(f"{prefix}- {item.item_key}")
            elif isinstance(item.value, SectionChildren):
                lines.append(f"{prefix}-")
                _outline(lines, item.value, level + 1)
            else:
                lines.append(f"{prefix}- {item.value.splitlines()[0] if item.value else ''}".rstrip())


def _count(value: str | SectionChildren | ListItems | None) -> int:
    if isinstance(value, SectionChildren):
        return sum(1 + _count(node.value) for node in value.nodes)
    if isinstance(value, ListItems):
        return sum(1 + _count(item.value) for item in value.items)
    return 0
