"""Tests for ZW to JSON conversion."""

from __future__ import annotations

import json
import logging

import pytest

from zwcodec.json_export import (
    DuplicateKeyPolicy,
    canonical_number,
    convert_zw_to_json,
    infer_scalar,
    to_json,
    to_json_text,
)
from zwcodec.parser import ParseOptions, parse_zw
from zwcodec.schemas import ListItem, ListItems, SectionChildren, SectionNode


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("true", True),
        ("FALSE", False),
        ("Null", None),
        ("42", 42),
        ("-7", -7),
        ("3.5", 3.5),
        ("0.001", 0.001),
        ('"a b"', "a b"),
        ("'single'", "single"),
        ('"say \\"hi\\""', 'say "hi"'),
        ('"a\\nb"', "a\nb"),
        ('"C:\\path"', "C:\\path"),
        ("9007199254740993", 9007199254740993),
        ("-12345678901234567890", -12345678901234567890),
        ("hello", "hello"),
        ("  padded  ", "padded"),
        ("", ""),
    ],
)
def test_infer_scalar(raw: str, expected: object) -> None:
    assert infer_scalar(raw) == expected
    assert type(infer_scalar(raw)) is type(expected)


@pytest.mark.parametrize("raw", ["1.50", "007", "+5", "1e3", "0x1F", "1,000", "12abc", ".5", "5."])
def test_non_canonical_numbers_stay_strings(raw: str) -> None:
    """Numbers whose canonical text differs from the input are left as strings."""
    assert infer_scalar(raw) == raw


@pytest.mark.parametrize(
    ("number", "text"),
    [
        (1.0, "1"),
        (2.5, "2.5"),
        (1e21, "1e+21"),
        (1e-6, "0.000001"),
        (1e-7, "1e-7"),
        (1.5e-8, "1.5e-8"),
        (123456789012.0, "123456789012"),
    ],
)
def test_canonical_number(number: float, text: str) -> None:
    assert canonical_number(number) == text


class TestToJson:
    """Tests for tree conversion."""

    def test_base_example(self) -> None:
        text = (
            "ZW-BASE:\n  base: Echo\n  location: Hoth\n  defenses:\n"
            "    - ion cannon\n    - shield generator\n"
        )

        assert to_json(parse_zw(text)) == {
            "base": "Echo",
            "location": "Hoth",
            "defenses": ["ion cannon", "shield generator"],
        }

    def test_key_value_items_become_single_key_objects(self, base_packet: str) -> None:
        assert to_json(parse_zw(base_packet)) == {
            "TYPE": "example",
            "ATTRIBUTES": [{"name": "alpha"}, {"name": "beta"}],
            "NOTES": ["first note", "second note"],
        }

    def test_promoted_items_become_objects(self) -> None:
        text = "ZW-A:\n  PEOPLE:\n    - name: Ada\n      year: 1815\n      active: true"

        assert to_json(parse_zw(text)) == {"PEOPLE": [{"name": "Ada", "year": 1815, "active": True}]}

    def test_list_root_is_wrapped(self) -> None:
        assert to_json(parse_zw("ZW-LIST:\n  - 1\n  - two")) == {"root_items": [1, "two"]}

    def test_empty_section_is_empty_object(self) -> None:
        assert to_json(parse_zw("ZW-A:\n  EMPTY:")) == {"EMPTY": {}}

    def test_empty_root_is_empty_object(self) -> None:
        assert to_json(parse_zw("ZW-A:")) == {}

    def test_empty_list_is_empty_array(self) -> None:
        tree = SectionNode(
            key="ZW-A",
            depth=0,
            value=SectionChildren(nodes=[SectionNode(key="ITEMS", depth=1, value=ListItems())]),
        )

        assert to_json(tree) == {"ITEMS": []}

    def test_root_without_value(self) -> None:
        assert to_json(SectionNode(key="ZW-A", depth=0)) == {}

    def test_multi_line_value_is_joined(self) -> None:
        text = "ZW-A:\n  note: first\n  second"

        assert to_json(parse_zw(text)) == {"note": "first\nsecond"}

    def test_malformed_root_returns_none(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="zwcodec.json_export"):
            assert to_json(parse_zw("not-a-root-line")) is None

        assert "parsing failed" in caplog.text

    def test_none_tree_returns_none(self) -> None:
        assert to_json(None) is None

    def test_bare_string_root_returns_none(self, caplog: pytest.LogCaptureFixture) -> None:
        tree = SectionNode(key="ZW-A", depth=0, value="scalar")

        with caplog.at_level(logging.WARNING, logger="zwcodec.json_export"):
            assert to_json(tree) is None

        assert "bare string" in caplog.text

    def test_list_items_holding_maps(self) -> None:
        tree = SectionNode(
            key="ZW-A",
            depth=0,
            value=ListItems(
                items=[
                    ListItem(
                        value=SectionChildren(nodes=[SectionNode(key="k", depth=2, value="1")]),
                        depth=1,
                    )
                ]
            ),
        )

        assert to_json(tree) == {"root_items": [{"k": 1}]}

    def test_empty_item_header_is_empty_object(self) -> None:
        tree = parse_zw("ZW-A:\n  ROWS:\n    - meta:\n      id: 1\n    - meta:")

        assert to_json(tree) == {"ROWS": [{"meta": {}, "id": 1}, {"meta": {}}]}

    def test_list_one_level_under_item_header(self) -> None:
        tree = parse_zw("ZW-A:\n  ROWS:\n    - tags:\n      - x\n      - y")

        assert to_json(tree) == {"ROWS": [{"tags": ["x", "y"]}]}

    def test_quoted_multi_line_value(self) -> None:
        tree = parse_zw('ZW-A:\n  note: "first\\nsecond: part"\n  x: 1')

        assert to_json(tree) == {"note": "first\nsecond: part", "x": 1}


class TestDuplicateKeys:
    """Tests for repeated keys in one map."""

    TEXT = "ZW-A:\n  KEY: first\n  KEY: second\n  OTHER: x"

    def test_overwrite_keeps_last(self) -> None:
        assert to_json(parse_zw(self.TEXT)) == {"KEY": "second", "OTHER": "x"}

    def test_pairs_preserves_every_entry(self) -> None:
        result = to_json(parse_zw(self.TEXT), duplicate_keys=DuplicateKeyPolicy.PAIRS)

        assert result == {"root_items": [{"KEY": "first"}, {"KEY": "second"}, {"OTHER": "x"}]}

    def test_pairs_without_duplicates_is_plain_object(self) -> None:
        result = to_json(parse_zw("ZW-A:\n  A: 1\n  B: 2"), duplicate_keys=DuplicateKeyPolicy.PAIRS)

        assert result == {"A": 1, "B": 2}

    def test_policy_accepts_string_values(self) -> None:
        assert DuplicateKeyPolicy("pairs") is DuplicateKeyPolicy.PAIRS


class TestHelpers:
    """Tests for text-level helpers."""

    def test_convert_zw_to_json_with_options(self) -> None:
        result = convert_zw_to_json("PACKET=\n  FIELD=42", ParseOptions(delimiter="="))

        assert result == {"FIELD": 42}

    def test_to_json_text(self) -> None:
        text = to_json_text(parse_zw("ZW-A:\n  name: Zoë"), indent=None)

        assert json.loads(text) == {"name": "Zoë"}
        assert "Zoë" in text

    def test_to_json_text_for_error_node(self) -> None:
        assert to_json_text(parse_zw("bad")) == "null"
