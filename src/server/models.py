"""Pydantic models for the conversion API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from server.server_config import MAX_INPUT_CHARS
from zwcodec.config import DEFAULT_DELIMITER, DEFAULT_LIST_ITEM_PREFIX
from zwcodec.json_export import DuplicateKeyPolicy
from zwcodec.parser import ParseOptions
from zwcodec.schemas import SectionNode


def _check_size(v: str) -> str:
    if len(v) > MAX_INPUT_CHARS:
        err = f"input exceeds {MAX_INPUT_CHARS} characters"
        raise ValueError(err)
    return v


class TokenOptions(BaseModel):
    """Lexical tokens shared by all conversion requests.

    Attributes
    ----------
    delimiter : str
        Key/value delimiter.
    list_item_prefix : str
        Marker introducing a list entry.

    """

    delimiter: str = Field(default=DEFAULT_DELIMITER, min_length=1, description="Key/value delimiter")
    list_item_prefix: str = Field(default=DEFAULT_LIST_ITEM_PREFIX, min_length=1, description="List item marker")

    def parse_options(self) -> ParseOptions:
        """Build the parser options for this request."""
        return ParseOptions(delimiter=self.delimiter, list_item_prefix=self.list_item_prefix)


class ConvertRequest(TokenOptions):
    """Request carrying ZW source text.

    Attributes
    ----------
    text : str
        The ZW text to parse.

    """

    text: str = Field(..., description="ZW source text")

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        """Reject oversized input."""
        return _check_size(v)


class ToJsonRequest(ConvertRequest):
    """Request for ``/api/to-json``."""

    duplicate_keys: DuplicateKeyPolicy = Field(
        default=DuplicateKeyPolicy.OVERWRITE,
        description="How repeated keys inside one map are exported",
    )


class FromJsonRequest(TokenOptions):
    """Request for ``/api/from-json``.

    Attributes
    ----------
    json_text : str
        JSON document to convert.
    root_type_name : str | None
        Root type written on the first line.

    """

    json_text: str = Field(..., description="JSON document")
    root_type_name: str | None = Field(default=None, description="Root type name, e.g. ZW-USER")

    @field_validator("json_text")
    @classmethod
    def validate_json_text(cls, v: str) -> str:
        """Reject oversized input."""
        return _check_size(v)


class TreeResponse(BaseModel):
    """Parsed tree and its node count."""

    tree: SectionNode
    node_count: int = Field(..., ge=1)


class JsonResultResponse(BaseModel):
    """JSON conversion result."""

    result: dict[str, Any]


class TextResponse(BaseModel):
    """Text conversion result (ZW or GDScript)."""

    text: str


class ErrorResponse(BaseModel):
    """Error response model.

    Attributes
    ----------
    error : str
        Error message describing what went wrong.

    """

    error: str = Field(..., description="Error message")
