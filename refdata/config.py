from __future__ import annotations
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, List, Optional
from dotenv import load_dotenv

TAXONOMY_SOURCE = "pets_category.xlsx"
TAXONOMY_OUT = "src/data/pets-category.json"
GEO_SOURCE = "public/tw_cities_districts.csv"
GEO_OUT = "src/data/taiwan-districts.ts"

# how many directories above the project root are probed for a source
PROBE_DEPTH = 2

def load_env(project_root: Path) -> None:
    """Load variables from <project_root>/.env without overriding the environment."""
    dotenv_path = project_root / ".env"
    if dotenv_path.exists():
        load_dotenv(dotenv_path, override=False)

@dataclass(frozen=True)
class BuildConfig:
    project_root: Path
    taxonomy_source: str = TAXONOMY_SOURCE
    taxonomy_out: str = TAXONOMY_OUT
    geo_source: str = GEO_SOURCE
    geo_out: str = GEO_OUT
    verbose: bool = False

    @staticmethod
    def from_env(root: Optional[Path] = None, verbose: bool = False) -> "BuildConfig":
        if root is None:
            root = Path(os.environ.get("REFDATA_ROOT") or Path.cwd())
        root = Path(root).resolve()
        load_env(root)
        return BuildConfig(
            project_root=root,
            taxonomy_source=os.environ.get("REFDATA_TAXONOMY_SOURCE", TAXONOMY_SOURCE),
            taxonomy_out=os.environ.get("REFDATA_TAXONOMY_OUT", TAXONOMY_OUT),
            geo_source=os.environ.get("REFDATA_GEO_SOURCE", GEO_SOURCE),
            geo_out=os.environ.get("REFDATA_GEO_OUT", GEO_OUT),
            verbose=verbose,
        )

    def with_overrides(self, **kwargs) -> "BuildConfig":
        return replace(self, **{k: v for k, v in kwargs.items() if v is not None})

    def candidates(self, relative: str) -> List[Path]:
        """Probe list for a source: the project root and up to PROBE_DEPTH ancestors."""
        rel = Path(relative)
        if rel.is_absolute():
            return [rel]
        bases = [self.project_root]
        for _ in range(PROBE_DEPTH):
            bases.append(bases[-1].parent)
        return [b / rel for b in bases]

    def output(self, relative: str) -> Path:
        rel = Path(relative)
        return rel if rel.is_absolute() else self.project_root / rel

    def as_paths(self) -> Dict[str, object]:
        return {
            "project_root": str(self.project_root),
            "taxonomy_candidates": [str(p) for p in self.candidates(self.taxonomy_source)],
            "taxonomy_out": str(self.output(self.taxonomy_out)),
            "geo_candidates": [str(p) for p in self.candidates(self.geo_source)],
            "geo_out": str(self.output(self.geo_out)),
        }
