from __future__ import annotations
from typing import Any, Dict, Iterable, List

from ...shared.fold import FoldResult, Level, fold_rows, sequential
from ...shared.normalize import RawRow
from .parse import CITY, REGION

# cities dedup on label and get c1, c2...; regions are numbered per city: c1-r1, c1-r2...
LEVELS = (
    Level(CITY, CITY, CITY, make_key=sequential("c"), dedup_on="label", dictionary=True),
    Level(REGION, REGION, REGION, make_key=sequential("r"), dedup=False, dictionary=True),
)

def compile_geo(rows: Iterable[RawRow]) -> FoldResult:
    return fold_rows(rows, LEVELS)

def cities(result: FoldResult) -> List[Dict[str, Any]]:
    return [
        {"code": c.key, "label": c.label,
         "regions": [{"code": r.key, "label": r.label} for r in c.children]}
        for c in result.nodes
    ]

def city_dictionary(result: FoldResult) -> Dict[str, str]:
    return result.dictionaries[CITY]

def region_dictionary(result: FoldResult) -> Dict[str, str]:
    return result.dictionaries[REGION]

def to_document(result: FoldResult) -> Dict[str, Any]:
    """Plain-data view of the three exported declarations."""
    return {
        "TAIWAN_CITIES": cities(result),
        "CITY_DICTIONARY": dict(city_dictionary(result)),
        "REGION_DICTIONARY": dict(region_dictionary(result)),
    }
