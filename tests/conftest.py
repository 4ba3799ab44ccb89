"""Shared fixtures: every test starts from default settings."""

import pytest

from parselab.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    for name in ("JSON_INDENT", "TOML_STRICT", "SEARCH_CASE_SENSITIVE", "LOG_LEVEL"):
        monkeypatch.delenv(f"PARSELAB_{name}", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
