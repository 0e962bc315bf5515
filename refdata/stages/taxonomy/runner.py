from __future__ import annotations
from pathlib import Path
from typing import Dict, Optional

from ...config import BuildConfig
from ...io import dump_json, first_existing, read_json, write_text
from ...logging import log
from ...shared.fold import FoldResult
from .compile import compile_taxonomy, to_document
from .parse import read_rows

def locate(cfg: BuildConfig) -> Path:
    return first_existing(cfg.candidates(cfg.taxonomy_source), name=Path(cfg.taxonomy_source).name)

def output_path(cfg: BuildConfig) -> Path:
    return cfg.output(cfg.taxonomy_out)

def compile_source(cfg: BuildConfig, source: Optional[Path] = None) -> FoldResult:
    source = source or locate(cfg)
    log().debug(f"taxonomy: reading {source}")
    return compile_taxonomy(read_rows(source))

def render(cfg: BuildConfig, result: FoldResult) -> str:
    return dump_json(to_document(result))

def load_document(cfg: BuildConfig) -> Dict[str, object]:
    """The artifact as written, for validating what consumers actually read."""
    return read_json(output_path(cfg))

def run(cfg: BuildConfig) -> Dict[str, object]:
    source = locate(cfg)
    result = compile_source(cfg, source)
    out = output_path(cfg)
    write_text(out, render(cfg, result))
    created = result.stats.created
    log().info(f"taxonomy: {created['class']} classes, {created['species']} species, "
               f"{created['breed']} breeds ({result.stats.dropped} rows dropped)")
    return {"source": str(source), "output": str(out), "stats": result.stats.as_dict()}
