"""Write rendered output units to disk with bounded concurrency."""

import logging
import threading
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from dotnetdocs.renderer_base import OutputUnit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WriteFailure:
    """A unit that could not be written, with the reason."""

    path: str
    error: str


@dataclass
class WriteReport:
    """Aggregate outcome of one write pass."""

    written: list[str] = field(default_factory=list)
    failures: list[WriteFailure] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def output_file_for_unit(out_root: Path, path: str) -> Path:
    """Resolve a unit path under the output root.

    Raises ValueError for absolute paths or paths that escape the root.
    """
    if Path(path).is_absolute():
        msg = f"absolute output path '{path}'"
        raise ValueError(msg)
    base = out_root.resolve()
    target = (base / path).resolve()
    try:
        target.relative_to(base)
    except ValueError:
        msg = f"output path '{path}' escapes '{base}'"
        raise ValueError(msg) from None
    return target


def write_output_units(
    units: Sequence[OutputUnit],
    out_root: Path,
    *,
    max_workers: int = 4,
    cancel: threading.Event | None = None,
    dry_run: bool = False,
) -> WriteReport:
    """Write every unit; one failure never stops the others.

    Cancellation is checked before each unit starts. With ``dry_run`` nothing
    touches the disk but paths are still validated.
    """
    cancel = cancel or threading.Event()
    report = WriteReport()
    lock = threading.Lock()

    def write_one(unit: OutputUnit) -> None:
        if cancel.is_set():
            with lock:
                report.skipped.append(unit.path)
            return
        try:
            target = output_file_for_unit(out_root, unit.path)
            if not dry_run:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_bytes(unit.content)
        except (OSError, ValueError) as e:
            logger.error("Failed to write %s: %s", unit.path, e)
            with lock:
                report.failures.append(WriteFailure(unit.path, str(e)))
            return
        with lock:
            report.written.append(unit.path)

    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as pool:
        list(pool.map(write_one, units))

    report.written.sort()
    report.skipped.sort()
    report.failures.sort(key=lambda f: f.path)
    logger.info(
        "Wrote %d files under %s (%d failed)",
        len(report.written),
        out_root,
        len(report.failures),
    )
    return report
