from __future__ import annotations
from pathlib import Path
from typing import Dict, Optional

from ...config import BuildConfig
from ...io import first_existing, write_text
from ...logging import log
from ...shared.fold import FoldResult
from .compile import compile_geo
from .parse import read_rows
from .render import render_module

def locate(cfg: BuildConfig) -> Path:
    return first_existing(cfg.candidates(cfg.geo_source), name=Path(cfg.geo_source).name)

def output_path(cfg: BuildConfig) -> Path:
    return cfg.output(cfg.geo_out)

def source_label(cfg: BuildConfig) -> str:
    # configured relative path rather than the probed absolute one, so the header is machine independent
    src = Path(cfg.geo_source)
    return src.name if src.is_absolute() else src.as_posix()

def compile_source(cfg: BuildConfig, source: Optional[Path] = None) -> FoldResult:
    source = source or locate(cfg)
    log().debug(f"geo: reading {source}")
    return compile_geo(read_rows(source))

def render(cfg: BuildConfig, result: FoldResult) -> str:
    return render_module(result, source_label(cfg))

def run(cfg: BuildConfig) -> Dict[str, object]:
    source = locate(cfg)
    result = compile_source(cfg, source)
    out = output_path(cfg)
    write_text(out, render(cfg, result))
    created = result.stats.created
    log().info(f"geo: {created['city']} cities, {created['region']} regions "
               f"({result.stats.dropped} rows dropped)")
    return {"source": str(source), "output": str(out), "stats": result.stats.as_dict()}
