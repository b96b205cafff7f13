"""Orchestration logic for converting symbol facts into API documentation."""

import argparse
import logging
import threading
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from dotnetdocs.build_model import build_model
from dotnetdocs.compute_config_hash import compute_config_hash
from dotnetdocs.compute_layout import compute_layout
from dotnetdocs.cross_reference_resolver import CrossReferenceResolver
from dotnetdocs.layout import FlatScope, LayoutMode
from dotnetdocs.load_assembly_facts import load_facts_dir
from dotnetdocs.load_config import load_config
from dotnetdocs.render_pipeline import OutputFormat, extension_for, render
from dotnetdocs.renderer_base import RenderOptions
from dotnetdocs.run_report import RunReport
from dotnetdocs.symbol_facts import Accessibility, AssemblyFacts
from dotnetdocs.write_output_units import write_output_units

logger = logging.getLogger(__name__)


def convert(
    assemblies: Sequence[AssemblyFacts],
    config: dict[str, Any],
    out_root: Path,
    *,
    dry_run: bool = False,
    cancel: threading.Event | None = None,
) -> RunReport:
    """Build, lay out, render and write one documentation set.

    Fatal conditions (inconsistent facts, path collisions) propagate as
    DotNetDocsError; write failures are collected in the report.
    """
    config_hash = compute_config_hash(config)
    report = RunReport(config_hash)
    output = config["output"]
    rendering = config["rendering"]
    output_format = OutputFormat(output["format"])

    included = [Accessibility(a) for a in config["documentation"]["included_members"]]
    model, warnings = build_model(assemblies, included=included)
    report.add_warnings(warnings)
    report.add_merge_log(model.merge_log)

    layout = compute_layout(
        model,
        LayoutMode(output["mode"]),
        flat_scope=FlatScope(output["flat_scope"]),
        extension=extension_for(output_format),
    )
    resolver = CrossReferenceResolver(model, layout, config["external_references"])
    options = RenderOptions(
        api_path=output["api_path"],
        code_language=rendering["code_language"],
        mode=output["mode"],
        config_hash=config_hash,
        max_workers=rendering["max_workers"],
    )
    units = render(
        model, resolver, layout, output_format, options=options, cancel=cancel
    )
    report.add_units([u.path for u in units])

    api_root = out_root / output["api_path"] if output["api_path"] else out_root
    report.set_write_report(
        write_output_units(
            units,
            api_root,
            max_workers=rendering["max_workers"],
            cancel=cancel,
            dry_run=dry_run,
        )
    )
    return report


def _overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Config values given explicitly on the command line."""
    output = {
        "format": args.format,
        "mode": args.mode,
        "flat_scope": args.flat_scope,
        "api_path": args.api_path,
    }
    overrides: dict[str, Any] = {
        "output": {k: v for k, v in output.items() if v is not None}
    }
    if args.max_workers is not None:
        overrides["rendering"] = {"max_workers": args.max_workers}
    return overrides


def run_conversion(args: argparse.Namespace) -> int:
    """Execute the full conversion pipeline; returns the process exit code."""
    config = load_config(args.config, _overrides(args))

    if not args.facts_dir.exists():
        logger.error("Facts path not found: %s", args.facts_dir)
        return 2
    assemblies = load_facts_dir(args.facts_dir)
    if not assemblies:
        logger.error("No facts files (*.yml, *.yaml, *.json) under: %s", args.facts_dir)
        return 2

    out_root = (args.out_dir or Path(config["output"]["root"])).resolve()
    report = convert(assemblies, config, out_root, dry_run=args.dry_run)

    if args.report:
        report.generate_report(str(args.report))
        logger.info("Run report written to %s", args.report)

    verb = "Checked" if args.dry_run else "Generated"
    fmt = config["output"]["format"]
    print(f"{verb} {fmt} docs into {out_root}: {report.summary_line()}")
    return 0 if report.write_report.ok else 1
