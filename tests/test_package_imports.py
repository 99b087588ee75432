from __future__ import annotations

import importlib
import pkgutil

import pytest

import airportfinder

MODULES = sorted(
    info.name
    for info in pkgutil.walk_packages(airportfinder.__path__, prefix="airportfinder.")
)


def test_modules_discovered() -> None:
    assert "airportfinder.data.csv_table" in MODULES
    assert "airportfinder.cli" in MODULES


@pytest.mark.parametrize("name", MODULES)
def test_module_imports(name: str) -> None:
    importlib.import_module(name)


def test_csv_module_documents_quote_limitation() -> None:
    from airportfinder.data import csv_table

    assert csv_table.__doc__ is not None
    assert "doubled quote" in csv_table.__doc__
