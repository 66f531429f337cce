"""
Shared pytest fixtures and configuration for composekit tests.

This module provides:
- Settings cache reset for test isolation
- Per-test execution context and call log

Sample domain types live in tests/_support/domain.py.
"""

import os
import sys
from pathlib import Path
from typing import Generator

import pytest

# Ensure composekit package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from composekit.core.config import reset_settings
from composekit.link import DynamicContext


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark all tests without explicit markers as unit tests."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "slow"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Settings Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """
    Drop cached settings and COMPOSEKIT_* variables around each test.

    Tests that need specific settings set env vars through monkeypatch;
    the cache is rebuilt on the next get_settings() call.
    """
    for key in [k for k in os.environ if k.startswith("COMPOSEKIT_")]:
        monkeypatch.delenv(key, raising=False)
    reset_settings()
    yield
    reset_settings()


# =============================================================================
# Per-test State
# =============================================================================


@pytest.fixture
def calls() -> list[str]:
    """Shared call log for RecordingHandler instances."""
    return []


@pytest.fixture
def ctx() -> DynamicContext:
    return DynamicContext()
