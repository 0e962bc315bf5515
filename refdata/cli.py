#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
refdata CLI — reference-data compiler

Usage:
  refdata                      # same as `refdata run all`
  refdata run taxonomy --root frontend
  refdata verify geo --report build/report
  refdata plan
"""
from __future__ import annotations
import argparse, json, sys
from pathlib import Path
from typing import List, Optional
from rich.table import Table
from rich.text import Text

from .config import BuildConfig
from .contracts.engine import verify
from .dag import DagRunner, StageRegistry
from .logging import console, err_console, setup_logger

def print_stage_result(entry: dict) -> None:
    if entry["status"] == "ok":
        console().print(Text(f"  ✓ {entry['name']} → {entry['output']} in {entry['duration_ms']:.0f}ms", style="green"), soft_wrap=True)
    else:
        err_console().print(Text(f"  ❌ {entry['name']}: {entry['error']}", style="red bold"), soft_wrap=True)

def _config(args: argparse.Namespace) -> BuildConfig:
    cfg = BuildConfig.from_env(Path(args.root) if args.root else None, verbose=args.verbose)
    stage = getattr(args, "stage", "all")
    if stage == "taxonomy":
        cfg = cfg.with_overrides(taxonomy_source=getattr(args, "source", None), taxonomy_out=getattr(args, "out", None))
    elif stage == "geo":
        cfg = cfg.with_overrides(geo_source=getattr(args, "source", None), geo_out=getattr(args, "out", None))
    return cfg

def cmd_run(args: argparse.Namespace) -> int:
    if args.stage == "all" and (args.source or args.out):
        err_console().print("--source/--out need a single stage (taxonomy or geo)", style="red")
        return 2
    cfg = _config(args)
    summary = DagRunner(cfg).run(only=None if args.stage == "all" else args.stage)
    # stdout stays pure JSON under --json; failures still go to stderr
    for entry in summary["stages"]:
        if not args.json or entry["status"] != "ok":
            print_stage_result(entry)
    if args.json:
        print(json.dumps(summary, ensure_ascii=False, indent=2))
    return 0 if summary["success"] else 1

def cmd_verify(args: argparse.Namespace) -> int:
    cfg = _config(args)
    stages = StageRegistry.ids() if args.stage == "all" else [args.stage]
    rc = 0
    for s in stages:
        rc |= verify(s, cfg, Path(args.report) if args.report else None)
    return rc

def cmd_plan(args: argparse.Namespace) -> int:
    cfg = _config(args)
    paths = cfg.as_paths()
    table = Table(title="refdata plan")
    table.add_column("item", no_wrap=True)
    table.add_column("path")
    for k, v in paths.items():
        table.add_row(k, "\n".join(v) if isinstance(v, list) else str(v))
    console().print(table)
    return 0

def _common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--root", help="Project root (default: $REFDATA_ROOT or the current directory)")
    p.add_argument("--verbose", action="store_true")

def _run_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--source", help="Source path, relative to the probed directories or absolute")
    p.add_argument("--out", help="Output path, relative to the project root or absolute")
    p.add_argument("--json", action="store_true", help="Print the run summary as JSON")
    _common(p)

def build_stage_parser(prog: str, stage: str, description: str) -> argparse.ArgumentParser:
    """Parser for a single-stage entry point; parses straight into a `run <stage>` namespace."""
    ap = argparse.ArgumentParser(prog=prog, description=description)
    ap.set_defaults(cmd="run", stage=stage)
    _run_options(ap)
    return ap

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="refdata", description="Compile reference data (pet taxonomy, Taiwan districts)")
    sub = ap.add_subparsers(dest="cmd")

    run = sub.add_parser("run", help="Compile one or all stages")
    run.add_argument("stage", nargs="?", default="all", choices=["all"] + StageRegistry.ids())
    _run_options(run)

    ver = sub.add_parser("verify", help="Check generated artifacts against their contracts")
    ver.add_argument("stage", nargs="?", default="all", choices=["all"] + StageRegistry.ids())
    ver.add_argument("--report", help="Directory for verify_<stage>.json reports")
    _common(ver)

    plan = sub.add_parser("plan", help="Show resolved source candidates and outputs")
    _common(plan)
    return ap

HANDLERS = {"run": cmd_run, "verify": cmd_verify, "plan": cmd_plan}

def _dispatch(args: argparse.Namespace) -> None:
    setup_logger(args.verbose)
    sys.exit(HANDLERS[args.cmd](args))

def main(argv: Optional[List[str]] = None) -> None:
    ap = build_parser()
    args = ap.parse_args(argv)
    if args.cmd is None:
        args = ap.parse_args(["run", "all"])
    _dispatch(args)

def gen_pets_category(argv: Optional[List[str]] = None) -> None:
    ap = build_stage_parser("gen-pets-category", "taxonomy", "Compile the pet taxonomy workbook into pets-category.json")
    _dispatch(ap.parse_args(argv))

def gen_districts(argv: Optional[List[str]] = None) -> None:
    ap = build_stage_parser("gen-districts", "geo", "Compile the Taiwan districts CSV into taiwan-districts.ts")
    _dispatch(ap.parse_args(argv))

if __name__ == "__main__":
    main()
