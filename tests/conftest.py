from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.scope_builder import ScopeBuilder


@pytest.fixture
def scope_builder(tmp_path: Path) -> ScopeBuilder:
    """Provide a scope builder rooted at the pytest tmp_path."""
    return ScopeBuilder(tmp_path)
