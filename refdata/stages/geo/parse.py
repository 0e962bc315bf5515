from __future__ import annotations
from pathlib import Path
from typing import List

from ...shared.normalize import RawRow, clean_cell

CITY, REGION = "city", "region"
DELIMITER = ","

def read_rows(path: Path) -> List[RawRow]:
    """
    Two-column list without header: city label, region label.
    One row per line, split on the delimiter; quotes carry no meaning and extra columns are ignored.
    """
    rows: List[RawRow] = []
    with Path(path).open("r", encoding="utf-8-sig", newline="") as f:
        for raw in f:
            line = raw.strip()
            if not line:
                continue
            fields = line.split(DELIMITER)
            if len(fields) < 2:
                continue
            rows.append({CITY: clean_cell(fields[0]), REGION: clean_cell(fields[1])})
    return rows
