"""Local configuration for zwcodec."""

from __future__ import annotations

import os

DEFAULT_DELIMITER = ":"
DEFAULT_LIST_ITEM_PREFIX = "-"
DEFAULT_LOG_LEVEL = "WARNING"

# Two columns of leading whitespace per nesting level.
INDENT_WIDTH = 2
COMMENT_MARKER = "#"
FENCE_MARKER = "```"

ERROR_KEY_PREFIX = "Error:"
INVALID_ROOT_KEY = f"{ERROR_KEY_PREFIX} Invalid Root"

# Wrapper key used when the root content is a list rather than a map.
ROOT_ITEMS_KEY = "root_items"

# Synthetic names emitted by the JSON importer so its output always has a root line.
JSON_OBJECT_ROOT = "JSON_OBJECT_ROOT"
JSON_ARRAY_ROOT = "JSON_ARRAY_ROOT"
JSON_PRIMITIVE_ROOT = "JSON_PRIMITIVE_ROOT"
ROOT_LIST_KEY = "ROOT_LIST_DATA"
ROOT_VALUE_KEY = "ROOT_VALUE"

ZWCODEC_DELIMITER = os.getenv("ZWCODEC_DELIMITER", DEFAULT_DELIMITER)
ZWCODEC_LIST_ITEM_PREFIX = os.getenv("ZWCODEC_LIST_ITEM_PREFIX", DEFAULT_LIST_ITEM_PREFIX)
ZWCODEC_LOG_LEVEL = os.getenv("ZWCODEC_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
