"""Command line interface for zwcodec."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Sequence

from zwcodec.config import ZWCODEC_DELIMITER, ZWCODEC_LIST_ITEM_PREFIX
from zwcodec.exceptions import ConversionError, ZwCodecError
from zwcodec.json_export import DuplicateKeyPolicy, to_json
from zwcodec.json_import import from_json
from zwcodec.output_formatter import count_nodes, format_zw, render_outline
from zwcodec.parser import ParseOptions, ensure_valid_tree, parse_zw
from zwcodec.script_literal import to_script_literal
from zwcodec.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("input", help="Input file path, or '-' to read from stdin.")
    common.add_argument("-o", "--output", default="-", help="Output file path, or '-' for stdout (default).")
    common.add_argument("--delimiter", default=ZWCODEC_DELIMITER, help="Key/value delimiter (default: ':').")
    common.add_argument(
        "--list-prefix",
        default=ZWCODEC_LIST_ITEM_PREFIX,
        help="List item marker (default: '-').",
    )

    parser = argparse.ArgumentParser(
        prog="zwcodec",
        description="Parse ZW structured text and convert it to JSON, GDScript, or normalized ZW.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("parse", parents=[common], help="Print the parsed tree as JSON.")

    to_json_parser = subparsers.add_parser("to-json", parents=[common], help="Convert ZW text to JSON.")
    to_json_parser.add_argument("--indent", type=int, default=2, help="JSON indentation (default: 2).")
    to_json_parser.add_argument(
        "--duplicate-keys",
        choices=[policy.value for policy in DuplicateKeyPolicy],
        default=DuplicateKeyPolicy.OVERWRITE.value,
        help="How repeated keys are exported (default: overwrite).",
    )

    from_json_parser = subparsers.add_parser("from-json", parents=[common], help="Convert JSON to ZW text.")
    from_json_parser.add_argument("--root-type", default=None, help="Root type name, e.g. ZW-USER.")

    subparsers.add_parser("to-gdscript", parents=[common], help="Convert ZW text to a GDScript literal.")
    subparsers.add_parser("format", parents=[common], help="Rewrite ZW text with normalized indentation.")
    subparsers.add_parser("tree", parents=[common], help="Print an outline of the parsed tree.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging("DEBUG" if args.verbose else None)

    try:
        options = ParseOptions(delimiter=args.delimiter, list_item_prefix=args.list_prefix)
        text = _read_input(args.input)
        output = _run(args, text, options)
    except (ZwCodecError, ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    _write_output(args.output, output)
    return 0


def _run(args: argparse.Namespace, text: str, options: ParseOptions) -> str:
    if args.command == "from-json":
        result = from_json(text, args.root_type, options=options)
        if result.startswith("# Error:"):
            raise ConversionError(result.splitlines()[-1].lstrip("# "))
        return result + "\n"

    tree = ensure_valid_tree(parse_zw(text, options))
    logger.debug("Parsed %d nodes under root %r", count_nodes(tree), tree.key)

    if args.command == "parse":
        return tree.model_dump_json(indent=2) + "\n"
    if args.command == "to-json":
        result = to_json(tree, duplicate_keys=DuplicateKeyPolicy(args.duplicate_keys))
        if result is None:
            raise ConversionError(f"Root {tree.key!r} cannot be represented as a JSON object")
        return json.dumps(result, indent=args.indent, ensure_ascii=False) + "\n"
    if args.command == "to-gdscript":
        return to_script_literal(tree)
    if args.command == "format":
        return format_zw(tree, options)
    summary = f"Root: {tree.key}\nNodes: {count_nodes(tree)}\n"
    return summary + "\n" + render_outline(tree) + "\n"


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _write_output(destination: str, content: str) -> None:
    if destination == "-":
        sys.stdout.write(content)
        return
    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    logger.info("Wrote %s", path)
