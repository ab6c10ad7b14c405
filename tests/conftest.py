"""Test setup for zwcodec."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for pytest.

    This allows running end-to-end tests selectively:
        pytest -m integration       # run only integration tests
        pytest -m "not integration" # skip integration tests
    """
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (spawn the CLI in a subprocess)",
    )


@pytest.fixture
def src_path() -> Path:
    """Path to the source tree, for subprocesses that import the package."""
    return SRC


@pytest.fixture
def base_packet() -> str:
    """Sample packet covering sections, pairs, and a list of scalars."""
    return "\n".join(
        [
            "ZW-BASE:",
            "  TYPE: example",
            "  ATTRIBUTES:",
            "    - name: alpha",
            "    - name: beta",
            "  NOTES:",
            "    - first note",
            "    - second note",
        ]
    )
