from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep every test away from the real ~/.airportfinder directory."""
    home = tmp_path / "airportfinder-home"
    monkeypatch.setenv("AIRPORTFINDER_HOME", str(home))
    return home


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def load_fixture_text(fixtures_dir: Path) -> Callable[[str], str]:
    def _load(name: str) -> str:
        return (fixtures_dir / name).read_text(encoding="utf-8")

    return _load


@pytest.fixture
def airports_csv(load_fixture_text: Callable[[str], str]) -> str:
    return load_fixture_text("airports_sample.csv")
