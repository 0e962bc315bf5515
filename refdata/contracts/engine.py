from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List, Optional
import json
import yaml

from ..config import BuildConfig
from ..io import SourceNotFound, write_json
from ..logging import console, log
from .validators import run_validators

STAGES_DIR = Path(__file__).resolve().parents[1] / "stages"

def _stage_module(stage: str):
    if stage == "taxonomy":
        from ..stages.taxonomy import runner, compile as comp
    elif stage == "geo":
        from ..stages.geo import runner, compile as comp
    else:
        raise ValueError(f"unknown stage: {stage}")
    return runner, comp

def load_contract(stage: str) -> Dict[str, Any]:
    contract_path = STAGES_DIR / stage / "contract.yml"
    if not contract_path.exists():
        raise FileNotFoundError(f"contract file not found: {contract_path}")
    return yaml.safe_load(contract_path.read_text(encoding="utf-8")) or {}

def check(stage: str, cfg: BuildConfig) -> List[str]:
    """Recompile `stage` from source and return every contract violation found."""
    runner, comp = _stage_module(stage)
    spec = load_contract(stage)
    errors: List[str] = []

    result = runner.compile_source(cfg)
    expected = runner.render(cfg, result)
    out = runner.output_path(cfg)

    if spec.get("up_to_date", True):
        if not out.exists():
            errors.append(f"missing: {out}")
        elif out.read_bytes() != expected.encode("utf-8"):
            errors.append(f"stale: {out} differs from a fresh compile of the source")

    # Validate the artifact consumers read where the stage can load it back;
    # otherwise the byte check above ties the fresh compile to what is on disk.
    doc = comp.to_document(result)
    load_document = getattr(runner, "load_document", None)
    if load_document is not None and out.exists():
        try:
            doc = load_document(cfg)
        except json.JSONDecodeError as e:
            errors.append(f"unreadable: {out}: {e}")
            return errors
    errors.extend(run_validators(spec, doc))
    return errors

def verify(stage: str, cfg: BuildConfig, report_dir: Optional[Path] = None) -> int:
    """Verify a stage's contract and return 0 for success, 1 for failure."""
    try:
        errors = check(stage, cfg)
    except SourceNotFound as e:
        errors = [str(e)]
    except (yaml.YAMLError, FileNotFoundError, ValueError) as e:
        errors = [f"contract error: {e}"]
        log().debug("contract error", exc_info=True)

    if report_dir is not None:
        report = {"stage": stage, "errors": errors, "ok": len(errors) == 0, "error_count": len(errors)}
        write_json(report_dir / f"verify_{stage}.json", report)

    if errors:
        console().print(f"✗ Verify {stage}: {len(errors)} issue(s)", style="red bold")
        for e in errors:
            console().print(f"  - {e}", style="red", markup=False)
        return 1
    console().print(f"✓ Verify {stage}: OK", style="green")
    return 0
