"""Command-line entry point: convert symbol facts into API documentation."""

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

from dotnetdocs.errors import DotNetDocsError
from dotnetdocs.layout import FlatScope, LayoutMode
from dotnetdocs.render_pipeline import OutputFormat
from dotnetdocs.run_conversion import run_conversion

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="dotnetdocs",
        description=(
            "Merge .NET assembly symbol facts and XML documentation into "
            "Markdown, Mintlify, YAML or JSON API reference docs."
        ),
    )
    ap.add_argument(
        "facts_dir",
        type=Path,
        help="Directory of per-assembly facts files (*.yml, *.yaml, *.json)",
    )
    ap.add_argument(
        "out_dir",
        type=Path,
        nargs="?",
        help="Output directory (default: output.root from the config)",
    )
    ap.add_argument(
        "--format",
        choices=[f.value for f in OutputFormat],
        help="Output format (default: markdown)",
    )
    ap.add_argument(
        "--mode",
        choices=[m.value for m in LayoutMode],
        help="One file per type (hierarchical) or per scope (flat)",
    )
    ap.add_argument(
        "--flat-scope",
        choices=[s.value for s in FlatScope],
        help="Unit scope in flat mode (default: assembly)",
    )
    ap.add_argument("--config", help="Path to configuration file")
    ap.add_argument(
        "--api-path",
        help="Sub-directory of the output root for API docs (default: api-reference)",
    )
    ap.add_argument(
        "--max-workers",
        type=int,
        help="Concurrent render/write workers (default: 4)",
    )
    ap.add_argument("--report", type=Path, help="Write a JSON run report here")
    ap.add_argument(
        "--dry-run",
        action="store_true",
        help="Build and render everything without writing files",
    )
    ap.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return ap


def main(argv: Sequence[str] | None = None) -> int:
    """Run the conversion process."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return run_conversion(args)
    except DotNetDocsError as e:
        logger.error("%s", e)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
