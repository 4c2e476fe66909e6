"""Shared fixtures for the cache tests."""

import pytest


@pytest.fixture
def cache_root(tmp_path):
    """An empty cache root directory."""
    root = tmp_path / "rpmmd"
    root.mkdir()
    return root
