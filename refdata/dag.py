from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional
import time

from .config import BuildConfig
from .io import SourceNotFound, file_sha1
from .logging import log

@dataclass
class Stage:
    id: str
    name: str
    run: Callable[[BuildConfig], Dict[str, object]]

class StageRegistry:
    @staticmethod
    def load_default() -> List[Stage]:
        # Import here so stage modules can import the registry without cycles
        from .stages.taxonomy.runner import run as run_taxonomy
        from .stages.geo.runner import run as run_geo
        return [
            Stage(id="taxonomy", name="Pet taxonomy → pets-category.json", run=run_taxonomy),
            Stage(id="geo", name="Taiwan districts → taiwan-districts.ts", run=run_geo),
        ]

    @staticmethod
    def ids() -> List[str]:
        return [s.id for s in StageRegistry.load_default()]

class DagRunner:
    """Runs stages in registry order and stops at the first failure."""

    def __init__(self, cfg: BuildConfig, stages: Optional[List[Stage]] = None):
        self.cfg = cfg
        self.stages = stages if stages is not None else StageRegistry.load_default()

    def run(self, only: Optional[str] = None) -> Dict:
        summary = {"success": True, "stages": [], "built_at": int(time.time())}
        for s in self.stages:
            if only and s.id != only:
                continue
            started = time.time()
            entry: Dict[str, object] = {"id": s.id, "name": s.name}
            try:
                info = s.run(self.cfg)
                entry.update(info)
                entry["status"] = "ok"
                out = info.get("output")
                if out and Path(str(out)).exists():
                    entry["sha1"] = file_sha1(Path(str(out)))
            except SourceNotFound as e:
                entry.update({"status": "error", "error": str(e), "tried": [str(p) for p in e.candidates]})
                summary["success"] = False
            except Exception as e:
                log().debug(f"stage {s.id} failed", exc_info=True)
                entry.update({"status": "error", "error": f"{type(e).__name__}: {e}"})
                summary["success"] = False
            entry["duration_ms"] = round((time.time() - started) * 1000, 1)
            summary["stages"].append(entry)
            if not summary["success"]:
                break
        return summary
