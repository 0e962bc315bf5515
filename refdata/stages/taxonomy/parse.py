from __future__ import annotations
from pathlib import Path
from typing import List

from openpyxl import load_workbook

from ...shared.normalize import RawRow, clean_cell, clean_row, is_blank_row

CLASS_KEY, CLASS_LABEL = "class", "生物類"
SPECIES_KEY, SPECIES_LABEL = "species", "物種"
BREED_KEY, BREED_LABEL = "breed", "品種"
COLUMNS = (CLASS_KEY, CLASS_LABEL, SPECIES_KEY, SPECIES_LABEL, BREED_KEY, BREED_LABEL)

def read_rows(path: Path) -> List[RawRow]:
    """Read the first worksheet; row 1 is the header, later rows are accessed by column name."""
    wb = load_workbook(filename=str(path), read_only=True, data_only=True)
    try:
        ws = wb.worksheets[0]
        it = ws.iter_rows(values_only=True)
        header = next(it, None)
        if header is None:
            return []
        names = [clean_cell(h) for h in header]
        rows: List[RawRow] = []
        for values in it:
            if is_blank_row(values):
                continue
            record = {name: v for name, v in zip(names, values) if name is not None}
            rows.append(clean_row(record, COLUMNS))
        return rows
    finally:
        wb.close()
