# -*- coding: utf-8 -*-
"""
Flat-row folder: one linear pass that turns ordered flat rows into an ordered tree.

Each row is walked top-down through a list of Levels. A level either reuses the
node already seen under the current parent (dedup levels) or appends a new one
(leaf levels). Nodes keep first-seen order, keys are assigned once at creation
and never change, and levels flagged with `dictionary` record code -> label as
nodes are created.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from .normalize import RawRow
from ..logging import log

KeyFn = Callable[["Node", int, str], str]

def passthrough(parent: "Node", ordinal: int, raw_key: str) -> str:
    """Use the source key as-is."""
    return raw_key

def sequential(prefix: str, sep: str = "-") -> KeyFn:
    """Synthesize `<prefix><n>` in first-seen order, nested under the parent's key: c1, c1-r1."""
    def make(parent: "Node", ordinal: int, raw_key: str) -> str:
        code = f"{prefix}{ordinal}"
        return f"{parent.key}{sep}{code}" if parent.key else code
    return make

@dataclass(frozen=True)
class Level:
    name: str
    key_field: str
    label_field: str
    make_key: KeyFn = passthrough
    dedup: bool = True
    dedup_on: str = "key"          # "key" | "label"
    required: bool = True
    dictionary: bool = False

    def __post_init__(self):
        if self.dedup_on not in ("key", "label"):
            raise ValueError(f"Level {self.name}: dedup_on must be 'key' or 'label', got {self.dedup_on!r}")

@dataclass
class Node:
    key: str
    label: str
    level: Optional[str] = None
    children: List["Node"] = field(default_factory=list)
    _index: Dict[str, int] = field(default_factory=dict, repr=False, compare=False)

    def find(self, ident: str) -> Optional["Node"]:
        i = self._index.get(ident)
        return None if i is None else self.children[i]

    def add(self, child: "Node", ident: Optional[str] = None) -> "Node":
        if ident is not None:
            self._index[ident] = len(self.children)
        self.children.append(child)
        return child

    def walk(self) -> Iterable["Node"]:
        """Depth-first, pre-order, excluding self."""
        for c in self.children:
            yield c
            yield from c.walk()

@dataclass
class FoldStats:
    rows: int = 0
    kept: int = 0
    dropped: int = 0
    created: Dict[str, int] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, object]:
        return {"rows": self.rows, "kept": self.kept, "dropped": self.dropped, "created": dict(self.created)}

@dataclass
class FoldResult:
    root: Node
    dictionaries: Dict[str, Dict[str, str]]
    stats: FoldStats

    @property
    def nodes(self) -> List[Node]:
        return self.root.children

def fold_rows(rows: Iterable[RawRow], levels: Sequence[Level]) -> FoldResult:
    """
    Fold normalized rows (values are trimmed strings or None) into a tree.

    A row missing the key of any required level is dropped in full. An optional
    level with a blank key ends the walk for that row. A blank label falls back
    to the key.
    """
    if not levels:
        raise ValueError("fold_rows needs at least one level")

    root = Node(key="", label="")
    dictionaries: Dict[str, Dict[str, str]] = {lv.name: {} for lv in levels if lv.dictionary}
    stats = FoldStats(created={lv.name: 0 for lv in levels})
    logger = log()

    for n, row in enumerate(rows, start=1):
        stats.rows += 1
        missing = [lv.key_field for lv in levels if lv.required and not row.get(lv.key_field)]
        if missing:
            stats.dropped += 1
            logger.debug(f"row {n}: dropped, blank {', '.join(missing)}")
            continue
        stats.kept += 1

        parent = root
        for lv in levels:
            raw_key = row.get(lv.key_field)
            if not raw_key:
                break
            label = row.get(lv.label_field) or raw_key
            ident = raw_key if lv.dedup_on == "key" else label

            node = parent.find(ident) if lv.dedup else None
            if node is None:
                key = lv.make_key(parent, len(parent.children) + 1, raw_key)
                node = parent.add(Node(key=key, label=label, level=lv.name), ident if lv.dedup else None)
                stats.created[lv.name] += 1
                if lv.dictionary:
                    dictionaries[lv.name][node.key] = node.label
            parent = node

    return FoldResult(root=root, dictionaries=dictionaries, stats=stats)
