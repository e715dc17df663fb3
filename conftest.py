"""Pytest configuration: makes the project root importable and shares one pipeline."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))

from numeral_es.pipeline import NumeralPipeline  # noqa: E402


@pytest.fixture(scope="session")
def pipeline() -> NumeralPipeline:
    """One pipeline over the full rule registry; it holds no per-run state."""
    return NumeralPipeline()
