"""Server configuration."""

from __future__ import annotations

import os

DEFAULT_HOST = "0.0.0.0"  # noqa: S104
DEFAULT_PORT = 8000
DEFAULT_MAX_INPUT_CHARS = 1_000_000

HOST = os.getenv("HOST", DEFAULT_HOST)
PORT = int(os.getenv("PORT", str(DEFAULT_PORT)))
RELOAD = os.getenv("RELOAD", "false").lower() == "true"

# Requests carrying more text than this are rejected during validation.
MAX_INPUT_CHARS = int(os.getenv("ZWCODEC_MAX_INPUT_CHARS", str(DEFAULT_MAX_INPUT_CHARS)))
