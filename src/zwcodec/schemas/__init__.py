"""Shared schemas for zwcodec."""

from zwcodec.schemas.tree import ListItem, ListItems, SectionChildren, SectionNode

__all__ = ["ListItem", "ListItems", "SectionChildren", "SectionNode"]
