"""Parse ZW format text into a tree of section nodes and list items."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Literal, Union

from zwcodec.config import (
    COMMENT_MARKER,
    FENCE_MARKER,
    INDENT_WIDTH,
    INVALID_ROOT_KEY,
    ZWCODEC_DELIMITER,
    ZWCODEC_LIST_ITEM_PREFIX,
)
from zwcodec.exceptions import ParseError
from zwcodec.schemas import ListItem, ListItems, SectionChildren, SectionNode

logger = logging.getLogger(__name__)

_FENCE_OPEN_RE = re.compile(rf"^{re.escape(FENCE_MARKER)}(?:zw)?\s*$", re.IGNORECASE)

_Owner = Union[SectionNode, ListItem]


@dataclass
class ParseOptions:
    """Lexical tokens used by the parser.

    Attributes:
        delimiter: Separates a key from its value and marks section headers.
        list_item_prefix: Marker introducing a list entry (followed by a space).
    """

    delimiter: str = field(default=ZWCODEC_DELIMITER)
    list_item_prefix: str = field(default=ZWCODEC_LIST_ITEM_PREFIX)

    def __post_init__(self) -> None:
        if not self.delimiter:
            raise ValueError("delimiter cannot be empty")
        if not self.list_item_prefix:
            raise ValueError("list_item_prefix cannot be empty")


@dataclass(frozen=True)
class _Patterns:
    root: re.Pattern[str]
    section: re.Pattern[str]
    pair: re.Pattern[str]
    item_marker: str


@dataclass(frozen=True)
class _Line:
    kind: Literal["item", "section", "pair", "text"]
    text: str
    source: str
    key: str = ""
    value: str = ""


def _build_patterns(options: ParseOptions) -> _Patterns:
    delimiter = re.escape(options.delimiter)
    # A hyphen inside the delimiter would make identifiers ambiguous.
    ident_chars = "A-Za-z0-9_" if "-" in options.delimiter else "A-Za-z0-9_-"
    return _Patterns(
        root=re.compile(rf"^([A-Z0-9_-]+){delimiter}\s*$", re.IGNORECASE),
        section=re.compile(rf"^([{ident_chars}]+){delimiter}\s*$"),
        pair=re.compile(rf"^([{ident_chars}]+){delimiter}\s*(.*)$"),
        item_marker=f"{options.list_item_prefix} ",
    )


def strip_code_fence(text: str) -> str:
    """Remove an enclosing ```` ``` ```` (or ```` ```zw ````) fence if present."""
    lines = text.strip().splitlines()
    if len(lines) >= 2 and _FENCE_OPEN_RE.match(lines[0].strip()) and lines[-1].strip() == FENCE_MARKER:
        return "\n".join(lines[1:-1])
    return text


def error_node(diagnostic: str) -> SectionNode:
    """Build the sentinel node returned for an invalid root line."""
    return SectionNode(key=INVALID_ROOT_KEY, value=diagnostic, depth=0)


def is_error_node(node: SectionNode | None) -> bool:
    """Return True if ``node`` is missing or is the sentinel error node."""
    return node is None or node.is_error


def ensure_valid_tree(node: SectionNode) -> SectionNode:
    """Return ``node`` unchanged, or raise ParseError for the sentinel node.

    Raises:
        ParseError: If ``node`` is the sentinel error node.
    """
    if node.is_error:
        diagnostic = node.value if isinstance(node.value, str) else node.key
        raise ParseError(diagnostic)
    return node


def parse_zw(text: str, options: ParseOptions | None = None) -> SectionNode:
    """Parse ZW format text into a tree rooted at a single section node.

    Blank lines and ``#`` comment lines are ignored. The first remaining line
    must be a root line (``ZW-TYPE:``); otherwise the sentinel error node is
    returned. Interior lines never cause a failure: lines that fit no pattern
    are folded into the previous value as continuation text or dropped.

    Args:
        text: Complete input, optionally wrapped in a code fence.
        options: Delimiter and list-item prefix overrides.

    Returns:
        The root node, or the sentinel error node (see ``is_error_node``).
    """
    opts = options or ParseOptions()
    patterns = _build_patterns(opts)

    lines = [
        line
        for line in strip_code_fence(text or "").splitlines()
        if line.strip() and not line.strip().startswith(COMMENT_MARKER)
    ]
    if not lines:
        return error_node(f"Packet must start with a ZW type (e.g., ZW-REQUEST{opts.delimiter}). Input is empty.")

    root_match = patterns.root.match(lines[0].strip())
    if not root_match:
        return error_node(
            f"Packet must start with a ZW type (e.g., ZW-REQUEST{opts.delimiter}). "
            f'First line encountered: "{lines[0].strip()}"'
        )

    root = SectionNode(key=root_match.group(1), value=SectionChildren(), depth=0)
    stack: list[_Owner] = [root]

    for raw in lines[1:]:
        depth = _depth_of(raw)
        line = _classify(raw.strip(), patterns)

        while len(stack) > 1 and stack[-1].depth >= depth:
            stack.pop()
        owner = stack[-1]

        if isinstance(owner, ListItem):
            owner = _open_item(owner, line, depth, stack)
            if owner is None:
                continue

        if line.kind == "item":
            _append_item(owner, line, depth, stack, patterns)
        elif line.kind in ("section", "pair"):
            _append_node(owner, line, depth, stack)
        else:
            _append_continuation(owner, line.text)

    return root


def _depth_of(line: str) -> int:
    indentation = len(line) - len(line.lstrip())
    return max(1, indentation // INDENT_WIDTH)


def _classify(trimmed: str, patterns: _Patterns) -> _Line:
    if trimmed.startswith(patterns.item_marker):
        return _Line(kind="item", text=trimmed[len(patterns.item_marker) :].strip(), source=trimmed)
    section = patterns.section.match(trimmed)
    if section:
        return _Line(kind="section", text=trimmed, source=trimmed, key=section.group(1))
    pair = patterns.pair.match(trimmed)
    if pair:
        return _Line(kind="pair", text=trimmed, source=trimmed, key=pair.group(1), value=pair.group(2))
    return _Line(kind="text", text=trimmed, source=trimmed)


def _join(existing: str, extra: str) -> str:
    return f"{existing}\n{extra}" if existing else extra


def _open_item(item: ListItem, line: _Line, depth: int, stack: list[_Owner]) -> _Owner | None:
    """Resolve the container for a line indented below a list item.

    Returns None when the line was fully handled here.
    """
    if not item.is_key_value:
        if isinstance(item.value, SectionChildren):
            return item
        item.value = _join(item.value, line.source)
        return None
    if line.kind == "text":
        if isinstance(item.value, str):
            item.value = _join(item.value, line.source)
        else:
            logger.debug("Discarding text under empty list item header %r: %r", item.item_key, line.text)
        return None

    # The item's own pair becomes the first entry of a nested map. An empty
    # header followed by a list, or by a line two levels deeper, receives
    # those lines itself.
    head = SectionNode(key=item.item_key or "", value=item.value, depth=item.depth + 1)
    item.value = SectionChildren(nodes=[head])
    item.is_key_value = False
    item.item_key = None
    if not isinstance(head.value, SectionChildren):
        return item
    if depth > item.depth + 1:
        stack.append(head)
        return head
    if line.kind == "item":
        # Its entries share the header's indentation step, so it must stay
        # open for sibling entries at that depth.
        head.depth = item.depth
        stack.append(head)
        return head
    return item


def _append_item(owner: _Owner, line: _Line, depth: int, stack: list[_Owner], patterns: _Patterns) -> None:
    if isinstance(owner, ListItem):
        logger.debug("Dropping list item directly under a keyed list item: %r", line.text)
        return
    if not isinstance(owner.value, ListItems):
        if isinstance(owner.value, SectionChildren) and owner.value.nodes:
            logger.debug("Dropping list item under map-shaped section %r: %r", owner.key, line.text)
            return
        owner.value = ListItems()

    pair = patterns.pair.match(line.text)
    if pair:
        # An empty pair is a header, like a section line.
        value: str | SectionChildren = pair.group(2) or SectionChildren()
        item = ListItem(value=value, depth=depth, is_key_value=True, item_key=pair.group(1))
    else:
        item = ListItem(value=line.text, depth=depth)
    owner.value.items.append(item)
    stack.append(owner.value.items[-1])


def _append_node(owner: _Owner, line: _Line, depth: int, stack: list[_Owner]) -> None:
    if isinstance(owner.value, ListItems):
        logger.debug("Recording keyed line under list-shaped section as a list item: %r", line.text)
        value: str | SectionChildren = line.value if line.kind == "pair" else SectionChildren()
        owner.value.items.append(ListItem(value=value, depth=depth, is_key_value=True, item_key=line.key))
        stack.append(owner.value.items[-1])
        return
    if not isinstance(owner.value, SectionChildren):
        owner.value = SectionChildren()

    if line.kind == "section":
        owner.value.nodes.append(SectionNode(key=line.key, value=SectionChildren(), depth=depth))
        stack.append(owner.value.nodes[-1])
    else:
        owner.value.nodes.append(SectionNode(key=line.key, value=line.value, depth=depth))


def _append_continuation(owner: _Owner, text: str) -> None:
    value = owner.value
    if isinstance(value, SectionChildren):
        entries: list[SectionNode] | list[ListItem] = value.nodes
    elif isinstance(value, ListItems):
        entries = value.items
    else:
        entries = []
    if entries and isinstance(entries[-1].value, str):
        entries[-1].value = _join(entries[-1].value, text)
        return
    logger.debug("Discarding unattached line: %r", text)
