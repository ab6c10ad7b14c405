"""Tree models produced by the parser."""

from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, Field

from zwcodec.config import ERROR_KEY_PREFIX


class SectionNode(BaseModel):
    """A keyed node: leaf pair, nested block, or declared-but-empty block."""

    key: str = Field(..., min_length=1)
    depth: int = Field(..., ge=0)
    value: Union[str, "SectionChildren", "ListItems", None] = None

    @property
    def is_error(self) -> bool:
        """True for the sentinel node returned when the root line is invalid."""
        return self.key.startswith(ERROR_KEY_PREFIX)


class ListItem(BaseModel):
    """One entry of a list-shaped block."""

    value: Union[str, "SectionChildren"]
    depth: int = Field(..., ge=0)
    is_key_value: bool = False
    item_key: str | None = None


class SectionChildren(BaseModel):
    """Map-shaped children. Empty means an empty map."""

    kind: Literal["map"] = "map"
    nodes: list[SectionNode] = Field(default_factory=list)


class ListItems(BaseModel):
    """List-shaped children. Empty means an empty list."""

    kind: Literal["list"] = "list"
    items: list[ListItem] = Field(default_factory=list)


SectionNode.model_rebuild()
ListItem.model_rebuild()
SectionChildren.model_rebuild()
ListItems.model_rebuild()
