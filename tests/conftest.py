"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def isolated_default_store(monkeypatch: pytest.MonkeyPatch):
    """Keep the process-wide store and env config from leaking between tests."""
    from store.default_store import reset_default_store

    for env_name in ("PREFKIT_STORE_PATH", "PREFKIT_STORE_FORMAT", "PREFKIT_STRICT_KEYS"):
        monkeypatch.delenv(env_name, raising=False)
    reset_default_store()
    yield
    reset_default_store()
