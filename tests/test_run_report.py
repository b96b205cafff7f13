"""Tests for the run report."""

import json
from pathlib import Path

from dotnetdocs.merge_warning import (
    MergeOutcome,
    MergeRecord,
    MergeWarning,
    WarningKind,
)
from dotnetdocs.run_report import RunReport
from dotnetdocs.write_output_units import WriteFailure, WriteReport


def _report() -> RunReport:
    report = RunReport("abc")
    report.add_warnings(
        [
            MergeWarning(
                kind=WarningKind.MERGE_CONFLICT,
                key="Acme.Dup",
                message="Type 'Acme.Dup' is defined twice",
                assemblies=("First", "Second"),
            )
        ]
    )
    report.add_merge_log(
        [
            MergeRecord("Acme.Dup", MergeOutcome.ADDED, "First"),
            MergeRecord(
                "Acme.Dup", MergeOutcome.REPLACED_WITH_WARNING, "Second", "First"
            ),
        ]
    )
    report.add_units(["Acme/Dup.md", "index.md"])
    report.set_write_report(
        WriteReport(
            written=["index.md"],
            failures=[WriteFailure("Acme/Dup.md", "disk full")],
        )
    )
    return report


def test_report_stats() -> None:
    """Verify stats aggregate merge outcomes, warnings and write results."""
    data = _report().to_dict()
    assert data["meta"]["config_hash"] == "abc"
    assert data["meta"]["total_units"] == 2
    assert data["stats"] == {
        "merge_outcomes": {"added": 1, "replaced_with_warning": 1},
        "warning_kinds": {"merge_conflict": 1},
        "written": 1,
        "failed": 1,
        "skipped": 0,
    }
    assert data["failures"] == [{"path": "Acme/Dup.md", "error": "disk full"}]
    assert data["warnings"][0]["assemblies"] == ["First", "Second"]


def test_generate_report(tmp_path: Path) -> None:
    """Verify the report is written as JSON."""
    path = tmp_path / "report.json"
    _report().generate_report(str(path))
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["meta"]["schema_version"] == 1
    assert data["stats"]["failed"] == 1


def test_summary_line() -> None:
    """Verify the one-line summary printed by the CLI."""
    assert _report().summary_line() == "1 written, 1 failed, 1 warnings"
