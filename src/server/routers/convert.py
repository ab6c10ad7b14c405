"""Conversion endpoints for the API."""

from __future__ import annotations

from typing import Union

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from server.models import (
    ConvertRequest,
    ErrorResponse,
    FromJsonRequest,
    JsonResultResponse,
    TextResponse,
    ToJsonRequest,
    TreeResponse,
)
from zwcodec.exceptions import ParseError
from zwcodec.json_export import to_json
from zwcodec.json_import import from_json
from zwcodec.output_formatter import count_nodes, format_zw
from zwcodec.parser import ensure_valid_tree, parse_zw
from zwcodec.schemas import SectionNode
from zwcodec.script_literal import to_script_literal
from zwcodec.utils.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api")

# HTTP 422; Starlette's constant for it differs across releases.
INVALID_ROOT_STATUS = 422

COMMON_RESPONSES: dict[int | str, dict] = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse, "description": "Input could not be converted"},
    INVALID_ROOT_STATUS: {"model": ErrorResponse, "description": "Invalid ZW root line"},
}


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def _parse_request(request: ConvertRequest) -> SectionNode:
    return ensure_valid_tree(parse_zw(request.text, request.parse_options()))


@router.post("/parse", responses=COMMON_RESPONSES, response_model=TreeResponse)
async def api_parse(request: ConvertRequest) -> Union[TreeResponse, JSONResponse]:
    """Parse ZW text and return the tree."""
    try:
        tree = _parse_request(request)
    except ParseError as exc:
        logger.info("Rejected ZW input", extra={"error": str(exc)})
        return _error(str(exc), INVALID_ROOT_STATUS)
    return TreeResponse(tree=tree, node_count=count_nodes(tree))


@router.post("/to-json", responses=COMMON_RESPONSES, response_model=JsonResultResponse)
async def api_to_json(request: ToJsonRequest) -> Union[JsonResultResponse, JSONResponse]:
    """Convert ZW text into a JSON object."""
    try:
        tree = _parse_request(request)
    except ParseError as exc:
        logger.info("Rejected ZW input", extra={"error": str(exc)})
        return _error(str(exc), INVALID_ROOT_STATUS)

    result = to_json(tree, duplicate_keys=request.duplicate_keys)
    if result is None:
        return _error(f"Root {tree.key!r} cannot be represented as a JSON object", status.HTTP_400_BAD_REQUEST)
    return JsonResultResponse(result=result)


@router.post("/from-json", responses=COMMON_RESPONSES, response_model=TextResponse)
async def api_from_json(request: FromJsonRequest) -> Union[TextResponse, JSONResponse]:
    """Convert a JSON document into ZW text."""
    text = from_json(request.json_text, request.root_type_name, options=request.parse_options())
    if text.startswith("# Error:"):
        logger.info("Rejected JSON input", extra={"error": text})
        return _error(text, status.HTTP_400_BAD_REQUEST)
    return TextResponse(text=text)


@router.post("/to-gdscript", responses=COMMON_RESPONSES, response_model=TextResponse)
async def api_to_gdscript(request: ConvertRequest) -> Union[TextResponse, JSONResponse]:
    """Convert ZW text into a GDScript literal assignment."""
    try:
        tree = _parse_request(request)
    except ParseError as exc:
        logger.info("Rejected ZW input", extra={"error": str(exc)})
        return _error(str(exc), INVALID_ROOT_STATUS)
    return TextResponse(text=to_script_literal(tree))


@router.post("/format", responses=COMMON_RESPONSES, response_model=TextResponse)
async def api_format(request: ConvertRequest) -> Union[TextResponse, JSONResponse]:
    """Rewrite ZW text with normalized indentation."""
    try:
        tree = _parse_request(request)
    except ParseError as exc:
        logger.info("Rejected ZW input", extra={"error": str(exc)})
        return _error(str(exc), INVALID_ROOT_STATUS)
    return TextResponse(text=format_zw(tree, request.parse_options()))
