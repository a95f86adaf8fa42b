# tests/conftest.py
"""Shared test fixtures."""

from __future__ import annotations

import pytest


@pytest.fixture(params=[False, True], ids=["scalar", "bulk"])
def bulk(request: pytest.FixtureRequest) -> bool:
    """Run a test once with each translation kernel."""
    return request.param
