"""Root conftest — shared test configuration and fixtures.

Invariants:
    - Tests never see MATCHER_DSL_* variables from the developer's shell
    - Every test that needs a registry gets a fresh, isolated one
    - Constructors the process-wide registry installed on Matchers are removed
      before its cache is dropped
"""

import logging
import os

import pytest

from matcher_dsl.config import get_settings
from matcher_dsl.services.matcher_registry import MatcherRegistry, get_registry


def _reset_registry():
    if get_registry.cache_info().currsize:
        get_registry().clear()
    get_registry.cache_clear()


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Strip MATCHER_DSL_* env vars and reset cached settings/registry."""
    for key in list(os.environ):
        if key.upper().startswith("MATCHER_DSL_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    _reset_registry()
    yield
    get_settings.cache_clear()
    _reset_registry()


@pytest.fixture
def registry() -> MatcherRegistry:
    return MatcherRegistry()


@pytest.fixture
def restore_root_logging():
    """Snapshot root handlers/level so setup_logging tests leave no trace."""
    handlers = list(logging.root.handlers)
    level = logging.root.level
    yield
    logging.root.handlers[:] = handlers
    logging.root.setLevel(level)
