"""Pytest configuration and fixtures for refdata tests"""
from pathlib import Path
from typing import Iterable, Sequence
import pytest
from openpyxl import Workbook

HEADER = ("class", "生物類", "species", "物種", "breed", "品種")

def make_workbook(path: Path, rows: Iterable[Sequence], header: Sequence[str] = HEADER) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    wb = Workbook()
    ws = wb.active
    ws.title = "pets"
    ws.append(list(header))
    for r in rows:
        ws.append(list(r))
    wb.save(str(path))
    return path

def make_csv(path: Path, text: str, encoding: str = "utf-8") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(text.encode(encoding))
    return path

@pytest.fixture
def project_root(tmp_path, monkeypatch):
    """An empty project directory two levels below tmp_path, with env overrides cleared"""
    for var in ("REFDATA_ROOT", "REFDATA_TAXONOMY_SOURCE", "REFDATA_TAXONOMY_OUT",
                "REFDATA_GEO_SOURCE", "REFDATA_GEO_OUT"):
        monkeypatch.delenv(var, raising=False)
    root = tmp_path / "repo" / "app"
    root.mkdir(parents=True)
    return root

@pytest.fixture
def pets_rows():
    return [
        ("m", "哺乳類", "dog", "狗", "lab", "拉布拉多"),
        ("m", "哺乳類", "dog", "狗", "poodle", "貴賓"),
        ("m", "哺乳類", "cat", "貓", None, None),
        ("b", "鳥類", "parrot", "鸚鵡", "", ""),
    ]

@pytest.fixture
def districts_csv():
    return "台北市,中正區\n台北市,大安區\n新北市,板橋區\n"

@pytest.fixture
def seeded_root(project_root, pets_rows, districts_csv):
    """Project root with both sources in their default locations"""
    make_workbook(project_root / "pets_category.xlsx", pets_rows)
    make_csv(project_root / "public" / "tw_cities_districts.csv", districts_csv)
    return project_root

@pytest.fixture
def workbook():
    return make_workbook

@pytest.fixture
def csv_file():
    return make_csv
