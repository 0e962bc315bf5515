from __future__ import annotations
import json, hashlib
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence

class SourceNotFound(FileNotFoundError):
    """None of the candidate locations for a source file exist."""

    def __init__(self, name: str, candidates: Sequence[Path]):
        self.name = name
        self.candidates: List[Path] = [Path(p) for p in candidates]
        super().__init__(f"{name} not found. Tried: {', '.join(str(p) for p in self.candidates)}")

def first_existing(candidates: Iterable[Path], name: Optional[str] = None) -> Path:
    """Return the first candidate path that exists, in order."""
    tried: List[Path] = []
    for p in candidates:
        p = Path(p)
        tried.append(p)
        if p.exists():
            return p
    label = name or (tried[0].name if tried else "source")
    raise SourceNotFound(label, tried)

def read_json(p: Path) -> Any:
    return json.loads(Path(p).read_text(encoding="utf-8"))

def dump_json(obj: Any) -> str:
    return json.dumps(obj, ensure_ascii=False, indent=2)

def write_json(p: Path, obj: Any) -> None:
    """Write object to JSON file."""
    write_text(p, dump_json(obj))

def write_text(p: Path, text: str) -> None:
    p.parent.mkdir(parents=True, exist_ok=True)
    # newline="" keeps the bytes identical across platforms
    with p.open("w", encoding="utf-8", newline="") as f:
        f.write(text)

def sha1_bytes(data: bytes) -> str:
    return hashlib.sha1(data).hexdigest()

def file_sha1(path: Path) -> str:
    return sha1_bytes(Path(path).read_bytes())
