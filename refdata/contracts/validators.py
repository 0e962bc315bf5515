from __future__ import annotations
from typing import Any, Dict, List, Set

from ..lookup import GeoIndex, TaxonomyIndex

def run_validators(spec: Dict[str, Any], doc: Dict[str, Any]) -> List[str]:
    """Run all validators listed in a contract spec against a compiled document."""
    errs: List[str] = []
    for validator in spec.get("validators", []) or []:
        kind = validator.get("kind")
        if kind == "field_presence":
            errs.extend(_validate_field_presence(doc, validator))
        elif kind == "unique":
            errs.extend(_validate_unique(doc, validator))
        elif kind == "breed_flags":
            errs.extend(_validate_breed_flags(doc))
        elif kind == "dictionary_bijection":
            errs.extend(_validate_dictionary_bijection(doc))
        elif kind == "min_items":
            errs.extend(_validate_min_items(doc, validator))
        else:
            errs.append(f"unknown validator kind: {kind}")
    return errs

def _select(doc: Any, path: str) -> List[List[Dict[str, Any]]]:
    """
    Resolve a slash path to the lists it names. '*' fans out over a list:
    'classes' -> [classes]; 'classes/*/species' -> one species list per class.
    """
    current: List[Any] = [doc]
    for part in [p for p in path.split("/") if p]:
        nxt: List[Any] = []
        for obj in current:
            if part == "*":
                nxt.extend(obj if isinstance(obj, list) else [])
            elif isinstance(obj, dict) and part in obj:
                nxt.append(obj[part])
        current = nxt
    return [x for x in current if isinstance(x, list)]

def _validate_field_presence(doc: Dict[str, Any], validator: Dict[str, Any]) -> List[str]:
    """Every item under `items` carries a non-blank string for each field."""
    errs: List[str] = []
    items = validator.get("items", "")
    for lst in _select(doc, items):
        for i, obj in enumerate(lst):
            for f in validator.get("fields", []):
                v = obj.get(f) if isinstance(obj, dict) else None
                if not isinstance(v, str) or not v.strip():
                    errs.append(f"{items}[{i}]: missing or blank '{f}'")
    return errs

def _validate_unique(doc: Dict[str, Any], validator: Dict[str, Any]) -> List[str]:
    """A field is unique within each selected list (i.e. within its parent scope)."""
    errs: List[str] = []
    items, field = validator.get("items", ""), validator.get("field")
    if not field:
        return errs
    for lst in _select(doc, items):
        seen: Set[Any] = set()
        for obj in lst:
            value = obj.get(field)
            if value in seen:
                errs.append(f"{items}: duplicate value for field '{field}': {value}")
            seen.add(value)
    return errs

def _validate_min_items(doc: Dict[str, Any], validator: Dict[str, Any]) -> List[str]:
    items, n = validator.get("items", ""), int(validator.get("min", 1))
    lists = _select(doc, items)
    if not lists or any(len(lst) < n for lst in lists):
        return [f"{items}: expected at least {n} item(s)"]
    return []

def _validate_breed_flags(doc: Dict[str, Any]) -> List[str]:
    """hasBreed is true exactly when a species lists breeds."""
    errs: List[str] = []
    idx = TaxonomyIndex.from_document(doc)
    for c in idx.classes:
        for s in idx.species_for(c["key"]):
            expected = len(idx.breeds_for(c["key"], s["key"])) > 0
            if idx.requires_breed(c["key"], s["key"]) != expected or s.get("hasBreed") is not expected:
                errs.append(f"{c['key']}/{s['key']}: hasBreed={s.get('hasBreed')!r} but {len(s['breeds'])} breed(s)")
    return errs

def _validate_dictionary_bijection(doc: Dict[str, Any]) -> List[str]:
    """Each city/region code in the tree has exactly one dictionary entry with the same label, and nothing extra."""
    errs: List[str] = []
    geo = GeoIndex.from_document(doc)

    tree_cities = {c["code"]: c["label"] for c in geo.cities}
    tree_regions: Dict[str, str] = {}
    for city_code, region_code in geo.pairs():
        if region_code in tree_regions:
            errs.append(f"region code {region_code} appears more than once")
        tree_regions[region_code] = next(r["label"] for r in geo.regions_for(city_code) if r["code"] == region_code)
    if len(tree_cities) != len(geo.cities):
        errs.append("city codes are not unique")

    for name, tree, lookup, dictionary in (
        ("CITY_DICTIONARY", tree_cities, geo.city_label, geo.city_dictionary),
        ("REGION_DICTIONARY", tree_regions, geo.region_label, geo.region_dictionary),
    ):
        for code, label in tree.items():
            if lookup(code) is None:
                errs.append(f"{name}: missing entry for {code}")
            elif lookup(code) != label:
                errs.append(f"{name}: {code} maps to {lookup(code)!r}, tree says {label!r}")
        for code in dictionary:
            if code not in tree:
                errs.append(f"{name}: {code} has no node in TAIWAN_CITIES")
    return errs
