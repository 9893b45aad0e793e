# Shared pytest fixtures
from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pandas as pd
import pytest

from xlsx_acset.logging.init import reset_logging
from xlsx_acset.store.schema import Schema


def write_workbook(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
    """Write ``sheets`` (rows including the header row) to a real .xlsx file."""
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for sheet, rows in sheets.items():
            df = pd.DataFrame(rows)
            df.to_excel(writer, sheet_name=sheet, header=False, index=False)
    return path


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(tmp_path: Path, monkeypatch) -> Path:
    (tmp_path / "config").mkdir()
    (tmp_path / "data").mkdir()
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("XLSX_ACSET_CONFIG", raising=False)
    return tmp_path


@pytest.fixture()
def make_workbook(tmp_path: Path) -> Callable[..., Path]:
    def _make(sheets: dict[str, list[list[object]]], name: str = "book.xlsx") -> Path:
        return write_workbook(tmp_path / name, sheets)
    return _make


@pytest.fixture()
def pet_schema() -> Schema:
    return Schema.from_dict({
        "Person": {"attributes": {"name": "str"}},
        "Pet": {"attributes": {"name": "str"}, "homs": {"owner": "Person"}},
    })


@pytest.fixture()
def pet_sheets() -> dict[str, list[list[object]]]:
    return {
        "Person": [
            ["name"],
            ["Alice"],
            ["Bob"],
        ],
        "Pet": [
            ["name", "owner"],
            ["Rex", "Alice"],
            ["Fido", "Bob"],
        ],
    }


@pytest.fixture()
def pet_workbook(make_workbook, pet_sheets) -> Path:
    return make_workbook(pet_sheets, name="pets.xlsx")


@pytest.fixture()
def sample_config_yaml() -> str:
    return """schema:
  Person:
    attributes: {name: str, age: int}
  Pet:
    attributes: {name: str}
    homs: {owner: Person}
tables:
  Person:
    primary_key: name
    convert: {age: int}
  Pet:
    sheet: Pets
    column_labels: {owner: Owner}
    convert: {name: strip}
null_sentinels: ["N/A"]
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def config_workbook(temp_workdir: Path) -> Path:
    """Workbook matching sample_config_yaml."""
    return write_workbook(temp_workdir / "data" / "people.xlsx", {
        "Person": [
            ["name", "age"],
            ["Alice", 34],
            ["Bob", 29],
        ],
        "Pets": [
            ["name", "Owner"],
            ["  Rex ", "Alice"],
            ["Fido", "Bob"],
            ["Tom", "Alice"],
        ],
    })
