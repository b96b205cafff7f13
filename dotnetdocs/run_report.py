"""Logic for generating a JSON report of one conversion run."""

import json
import time
from collections import Counter
from pathlib import Path
from typing import Any

from dotnetdocs.merge_warning import MergeRecord, MergeWarning
from dotnetdocs.write_output_units import WriteReport

SCHEMA_VERSION = 1


class RunReport:
    """Collects warnings, merge outcomes and write results for one run."""

    def __init__(self, config_hash: str, schema_version: int = SCHEMA_VERSION) -> None:
        """Initialize the report with metadata."""
        self.config_hash = config_hash
        self.schema_version = schema_version
        self.warnings: list[MergeWarning] = []
        self.merge_log: list[MergeRecord] = []
        self.unit_paths: list[str] = []
        self.write_report = WriteReport()
        self.start_time = time.time()

    def add_warnings(self, warnings: list[MergeWarning]) -> None:
        self.warnings.extend(warnings)

    def add_merge_log(self, records: list[MergeRecord]) -> None:
        self.merge_log.extend(records)

    def add_units(self, paths: list[str]) -> None:
        self.unit_paths.extend(paths)

    def set_write_report(self, report: WriteReport) -> None:
        self.write_report = report

    def to_dict(self) -> dict[str, Any]:
        return {
            "meta": {
                "timestamp": time.time(),
                "duration": time.time() - self.start_time,
                "config_hash": self.config_hash,
                "schema_version": self.schema_version,
                "total_units": len(self.unit_paths),
            },
            "warnings": [
                {
                    "kind": w.kind.value,
                    "key": w.key,
                    "message": w.message,
                    "assemblies": list(w.assemblies),
                }
                for w in self.warnings
            ],
            "failures": [
                {"path": f.path, "error": f.error} for f in self.write_report.failures
            ],
            "stats": self._compute_stats(),
        }

    def generate_report(self, path: str) -> None:
        """Write the summary report to a JSON file."""
        Path(path).write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")

    def summary_line(self) -> str:
        stats = self._compute_stats()
        return (
            f"{stats['written']} written, {stats['failed']} failed, "
            f"{len(self.warnings)} warnings"
        )

    def _compute_stats(self) -> dict[str, Any]:
        outcome_counts = Counter(r.outcome.value for r in self.merge_log)
        warning_counts = Counter(w.kind.value for w in self.warnings)
        return {
            "merge_outcomes": dict(sorted(outcome_counts.items())),
            "warning_kinds": dict(sorted(warning_counts.items())),
            "written": len(self.write_report.written),
            "failed": len(self.write_report.failures),
            "skipped": len(self.write_report.skipped),
        }
