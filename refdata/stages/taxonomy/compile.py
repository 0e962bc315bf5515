from __future__ import annotations
from typing import Any, Dict, Iterable, List

from ...shared.fold import FoldResult, Level, Node, fold_rows
from ...shared.normalize import RawRow
from .parse import BREED_KEY, BREED_LABEL, CLASS_KEY, CLASS_LABEL, SPECIES_KEY, SPECIES_LABEL

# class and species dedup on their source keys; breeds are kept as listed
LEVELS = (
    Level("class", CLASS_KEY, CLASS_LABEL),
    Level("species", SPECIES_KEY, SPECIES_LABEL),
    Level("breed", BREED_KEY, BREED_LABEL, dedup=False, required=False),
)

def compile_taxonomy(rows: Iterable[RawRow]) -> FoldResult:
    return fold_rows(rows, LEVELS)

def _breed(n: Node) -> Dict[str, Any]:
    return {"key": n.key, "label": n.label}

def _species(n: Node) -> Dict[str, Any]:
    breeds = [_breed(b) for b in n.children]
    return {"key": n.key, "label": n.label, "hasBreed": len(breeds) > 0, "breeds": breeds}

def _class(n: Node) -> Dict[str, Any]:
    return {"key": n.key, "label": n.label, "species": [_species(s) for s in n.children]}

def to_document(result: FoldResult) -> Dict[str, List[Dict[str, Any]]]:
    """Render the compiled tree as the `{"classes": [...]}` document."""
    return {"classes": [_class(c) for c in result.nodes]}
