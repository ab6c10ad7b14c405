"""Convert parsed ZW trees into JSON-compatible values."""

from __future__ import annotations

import json
import logging
import math
import re
from decimal import Decimal
from enum import Enum
from typing import Any

from zwcodec.config import ROOT_ITEMS_KEY
from zwcodec.parser import ParseOptions, parse_zw
from zwcodec.schemas import ListItem, ListItems, SectionChildren, SectionNode

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"-?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER_RE = re.compile(r"-?\d+")


class DuplicateKeyPolicy(str, Enum):
    """How repeated keys inside one map are exported."""

    OVERWRITE = "overwrite"
    PAIRS = "pairs"


def infer_scalar(text: str) -> Any:
    """Infer a JSON scalar from a raw leaf string.

    Order: ``true``/``false`` and ``null`` (case-insensitive), numbers whose
    canonical form equals the input, quoted strings, then the trimmed raw
    string. Double-quoted text is decoded as a JSON string literal when it is
    one; otherwise only the surrounding quotes and escaped quotes are undone.
    """
    trimmed = text.strip()
    lowered = trimmed.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if lowered == "null":
        return None

    number = _parse_number(trimmed)
    if number is not None:
        return number

    if len(trimmed) >= 2 and trimmed[0] == trimmed[-1] and trimmed[0] in ('"', "'"):
        quote = trimmed[0]
        unquoted = _decode_json_string(trimmed) if quote == '"' else None
        if unquoted is not None:
            return unquoted
        return trimmed[1:-1].replace(f"\\{quote}", quote)
    return trimmed


def _decode_json_string(text: str) -> str | None:
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError:
        return None
    return decoded if isinstance(decoded, str) else None


def _parse_number(text: str) -> int | float | None:
    if _INTEGER_RE.fullmatch(text):
        # Exact for integers beyond float precision.
        try:
            integer = int(text)
        except ValueError:
            # Past the interpreter's digit limit for int conversion.
            return None
        return integer if str(integer) == text else None
    if not _NUMBER_RE.fullmatch(text):
        return None
    number = float(text)
    if not math.isfinite(number) or canonical_number(number) != text:
        return None
    return int(number) if number.is_integer() else number


def canonical_number(number: float) -> str:
    """Shortest round-trip text for ``number``, positional between 1e-6 and 1e21."""
    if number.is_integer() and abs(number) < 1e21:
        return str(int(number))
    shortest = repr(number)
    if 1e-6 <= abs(number) < 1e21:
        return format(Decimal(shortest), "f")
    mantissa, _, exponent = shortest.partition("e")
    return f"{mantissa}e{int(exponent):+d}"


def to_json(
    tree: SectionNode | None,
    *,
    duplicate_keys: DuplicateKeyPolicy = DuplicateKeyPolicy.OVERWRITE,
) -> dict[str, Any] | None:
    """Convert a parsed tree into a JSON object.

    Map-shaped root content becomes an object. List-shaped root content is
    wrapped as ``{"root_items": [...]}``.

    Args:
        tree: Root node returned by ``parse_zw``.
        duplicate_keys: Export policy for repeated keys within one map.

    Returns:
        The JSON object, or None for the sentinel error node and for roots
        holding a bare string.
    """
    if tree is None or tree.is_error:
        logger.warning(
            "ZW to JSON: parsing failed, nothing to convert",
            extra={"key": tree.key if tree else None, "diagnostic": tree.value if tree else None},
        )
        return None

    if tree.value is None:
        return {}
    if isinstance(tree.value, str):
        logger.warning("ZW to JSON: root %r holds a bare string value; expected a structure", tree.key)
        return None

    converted = _convert_value(tree.value, duplicate_keys)
    if isinstance(converted, dict):
        return converted
    logger.info("ZW to JSON: root %r content is a list; wrapping under %r", tree.key, ROOT_ITEMS_KEY)
    return {ROOT_ITEMS_KEY: converted}


def to_json_text(
    tree: SectionNode | None,
    *,
    indent: int | None = 2,
    duplicate_keys: DuplicateKeyPolicy = DuplicateKeyPolicy.OVERWRITE,
) -> str:
    """Serialize ``to_json(tree)`` with ``json.dumps`` (``null`` when not convertible)."""
    return json.dumps(to_json(tree, duplicate_keys=duplicate_keys), indent=indent, ensure_ascii=False)


def convert_zw_to_json(
    text: str,
    options: ParseOptions | None = None,
    *,
    duplicate_keys: DuplicateKeyPolicy = DuplicateKeyPolicy.OVERWRITE,
) -> dict[str, Any] | None:
    """Parse ZW text and convert the tree into a JSON object."""
    return to_json(parse_zw(text, options), duplicate_keys=duplicate_keys)


def _convert_value(
    value: str | SectionChildren | ListItems | None,
    duplicate_keys: DuplicateKeyPolicy,
) -> Any:
    if value is None:
        return {}
    if isinstance(value, str):
        return infer_scalar(value)
    if isinstance(value, ListItems):
        return [_convert_item(item, duplicate_keys) for item in value.items]
    return _convert_map(value.nodes, duplicate_keys)


def _convert_item(item: ListItem, duplicate_keys: DuplicateKeyPolicy) -> Any:
    if item.is_key_value and item.item_key:
        return {item.item_key: _convert_value(item.value, duplicate_keys)}
    return _convert_value(item.value, duplicate_keys)


def _convert_map(nodes: list[SectionNode], duplicate_keys: DuplicateKeyPolicy) -> dict[str, Any] | list[dict[str, Any]]:
    keys = [node.key for node in nodes]
    if duplicate_keys is DuplicateKeyPolicy.PAIRS and len(set(keys)) != len(keys):
        return [{node.key: _convert_value(node.value, duplicate_keys)} for node in nodes]

    result: dict[str, Any] = {}
    for node in nodes:
        # Later duplicates overwrite earlier ones, as plain object construction does.
        result[node.key] = _convert_value(node.value, duplicate_keys)
    return result
