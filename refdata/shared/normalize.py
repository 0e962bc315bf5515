# -*- coding: utf-8 -*-
from __future__ import annotations
from typing import Any, Dict, Iterable, Optional

RawRow = Dict[str, Optional[str]]

def clean_cell(value: Any) -> Optional[str]:
    """
    Stringify and trim one source cell. Blank or missing cells become None.
    Whole-number floats render without the trailing '.0', as a spreadsheet shows them.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        s = "true" if value else "false"
    elif isinstance(value, float) and value.is_integer():
        s = str(int(value))
    else:
        s = str(value)
    s = s.strip()
    return s or None

def clean_row(record: Dict[str, Any], fields: Iterable[str]) -> RawRow:
    """Project a record onto `fields`, cleaning every value; absent fields read as None."""
    return {f: clean_cell(record.get(f)) for f in fields}

def is_blank_row(values: Iterable[Any]) -> bool:
    return all(clean_cell(v) is None for v in values)
