"""
Read-side views over the compiled reference data, answering the questions the
apps ask of it: which species a class has, whether a species needs a breed,
what label a city or region code carries.
"""
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .io import read_json

@dataclass
class TaxonomyIndex:
    classes: List[Dict[str, Any]]

    @staticmethod
    def from_document(doc: Dict[str, Any]) -> "TaxonomyIndex":
        return TaxonomyIndex(classes=list(doc.get("classes") or []))

    @staticmethod
    def load(path: Path) -> "TaxonomyIndex":
        return TaxonomyIndex.from_document(read_json(path))

    def get_class(self, class_key: str) -> Optional[Dict[str, Any]]:
        return next((c for c in self.classes if c["key"] == class_key), None)

    def species_for(self, class_key: str) -> List[Dict[str, Any]]:
        c = self.get_class(class_key)
        return list(c["species"]) if c else []

    def get_species(self, class_key: str, species_key: str) -> Optional[Dict[str, Any]]:
        return next((s for s in self.species_for(class_key) if s["key"] == species_key), None)

    def breeds_for(self, class_key: str, species_key: str) -> List[Dict[str, Any]]:
        s = self.get_species(class_key, species_key)
        return list(s["breeds"]) if s else []

    def requires_breed(self, class_key: str, species_key: str) -> bool:
        s = self.get_species(class_key, species_key)
        return bool(s and s["hasBreed"])

    def is_complete_selection(self, class_key: Optional[str], species_key: Optional[str],
                              breed_key: Optional[str] = None) -> bool:
        """A pick is complete when class and species exist and, iff the species has breeds, a listed breed is chosen."""
        if not class_key or not species_key:
            return False
        s = self.get_species(class_key, species_key)
        if s is None:
            return False
        if not s["hasBreed"]:
            return not breed_key
        return bool(breed_key) and any(b["key"] == breed_key for b in s["breeds"])

@dataclass
class GeoIndex:
    cities: List[Dict[str, Any]]
    city_dictionary: Dict[str, str]
    region_dictionary: Dict[str, str]

    @staticmethod
    def from_document(doc: Dict[str, Any]) -> "GeoIndex":
        return GeoIndex(
            cities=list(doc.get("TAIWAN_CITIES") or []),
            city_dictionary=dict(doc.get("CITY_DICTIONARY") or {}),
            region_dictionary=dict(doc.get("REGION_DICTIONARY") or {}),
        )

    def city_label(self, code: str) -> Optional[str]:
        return self.city_dictionary.get(code)

    def region_label(self, code: str) -> Optional[str]:
        return self.region_dictionary.get(code)

    def regions_for(self, city_code: str) -> List[Dict[str, Any]]:
        c = next((c for c in self.cities if c["code"] == city_code), None)
        return list(c["regions"]) if c else []

    def pairs(self) -> List[Tuple[str, str]]:
        """Every (city code, region code) in tree order."""
        return [(c["code"], r["code"]) for c in self.cities for r in c["regions"]]
