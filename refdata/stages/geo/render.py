from __future__ import annotations
from typing import Dict, List

from ...shared.fold import FoldResult
from .compile import city_dictionary, region_dictionary

def quote(s: str) -> str:
    """Single-quoted TS string literal."""
    s = s.replace("\\", "\\\\").replace("'", "\\'")
    return "'" + s.replace("\r", "\\r").replace("\n", "\\n") + "'"

def _dictionary(name: str, entries: Dict[str, str]) -> List[str]:
    out = [f"export const {name} = {{"]
    for code, label in entries.items():
        out.append(f"  {quote(code)}: {quote(label)},")
    out.append("} as const;")
    return out

def render_module(result: FoldResult, source_label: str) -> str:
    lines = [f"// Auto-generated from {source_label}", "export const TAIWAN_CITIES = ["]
    for c in result.nodes:
        lines.append(f"  {{ code: {quote(c.key)}, label: {quote(c.label)}, regions: [")
        for r in c.children:
            lines.append(f"    {{ code: {quote(r.key)}, label: {quote(r.label)} }},")
        lines.append("  ] },")
    lines.append("] as const;")
    lines += _dictionary("CITY_DICTIONARY", city_dictionary(result))
    lines += _dictionary("REGION_DICTIONARY", region_dictionary(result))
    return "\n".join(lines) + "\n"
