from __future__ import annotations

from pathlib import Path

import pytest

from btintentlog.core.model import SymbolTables
from btintentlog.core.symbols import get_symbol_tables, load_symbol_tables


@pytest.fixture(autouse=True)
def isolated_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    get_symbol_tables.cache_clear()
    yield
    get_symbol_tables.cache_clear()


@pytest.fixture
def tables() -> SymbolTables:
    return load_symbol_tables(include_user=False)
