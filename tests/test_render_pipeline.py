"""Tests for the render pipeline and output writing."""

import threading
from pathlib import Path

import pytest

from dotnetdocs.build_model import build_model
from dotnetdocs.compute_layout import compute_layout
from dotnetdocs.cross_reference_resolver import CrossReferenceResolver
from dotnetdocs.doc_model import DocModel
from dotnetdocs.errors import PathCollisionError
from dotnetdocs.layout import Layout, LayoutMode
from dotnetdocs.render_pipeline import OutputFormat, render
from dotnetdocs.renderer_base import OutputUnit, RenderOptions
from dotnetdocs.symbol_facts import AssemblyFacts, TypeFacts, TypeKind
from dotnetdocs.write_output_units import output_file_for_unit, write_output_units


def test_render_sorted_with_manifest(
    model: DocModel, layout: Layout, resolver: CrossReferenceResolver
) -> None:
    """Verify every unit is rendered once, sorted, plus the manifest."""
    units = render(model, resolver, layout, OutputFormat.MARKDOWN)
    paths = [u.path for u in units]
    assert paths == sorted(paths)
    assert "index.md" in paths
    assert len(paths) == len(layout.units) + 1
    assert len(set(paths)) == len(paths)


def test_render_is_deterministic(
    model: DocModel, layout: Layout, resolver: CrossReferenceResolver
) -> None:
    """Verify worker count never changes the output bytes."""
    fmt = OutputFormat.JSON
    one = render(model, resolver, layout, fmt, options=RenderOptions(max_workers=1))
    many = render(model, resolver, layout, fmt, options=RenderOptions(max_workers=8))
    assert one == many


def test_render_cancelled(
    model: DocModel, layout: Layout, resolver: CrossReferenceResolver
) -> None:
    """Verify a cancelled render produces no manifest."""
    cancel = threading.Event()
    cancel.set()
    units = render(model, resolver, layout, OutputFormat.MARKDOWN, cancel=cancel)
    assert units == []


def test_manifest_collision_raises() -> None:
    """Verify a unit that would overwrite the manifest is fatal."""
    facts = AssemblyFacts(
        name="Index",
        types=[TypeFacts(kind=TypeKind.CLASS, name="Index", namespace="Acme")],
    )
    model, _ = build_model([facts])
    layout = compute_layout(model, LayoutMode.FLAT, extension=".md")
    assert [u.path for u in layout.units] == ["Index.md"]
    resolver = CrossReferenceResolver(model, layout)
    with pytest.raises(PathCollisionError):
        render(model, resolver, layout, OutputFormat.MARKDOWN)


def test_config_hash_reaches_manifest(
    model: DocModel, layout: Layout, resolver: CrossReferenceResolver
) -> None:
    """Verify the manifest records the configuration hash."""
    units = render(
        model,
        resolver,
        layout,
        OutputFormat.MARKDOWN,
        options=RenderOptions(config_hash="abc123"),
    )
    index = next(u for u in units if u.path == "index.md")
    assert b"config: abc123" in index.content


def test_write_output_units(tmp_path: Path) -> None:
    """Verify units are written under the root with directories created."""
    units = [
        OutputUnit("Acme/Widgets/Cache.md", b"# Cache\n"),
        OutputUnit("index.md", b"# API Reference\n"),
    ]
    report = write_output_units(units, tmp_path)
    assert report.ok
    assert report.written == ["Acme/Widgets/Cache.md", "index.md"]
    assert (tmp_path / "Acme" / "Widgets" / "Cache.md").read_bytes() == b"# Cache\n"


def test_write_failure_does_not_stop_others(tmp_path: Path) -> None:
    """Verify an escaping path is reported while the rest are written."""
    out = tmp_path / "out"
    units = [
        OutputUnit("../evil.md", b"x"),
        OutputUnit("good.md", b"y"),
    ]
    report = write_output_units(units, out, max_workers=2)
    assert not report.ok
    assert [f.path for f in report.failures] == ["../evil.md"]
    assert report.written == ["good.md"]
    assert not (tmp_path / "evil.md").exists()
    assert (out / "good.md").read_bytes() == b"y"


def test_write_dry_run(tmp_path: Path) -> None:
    """Verify dry runs validate paths without touching the disk."""
    report = write_output_units(
        [OutputUnit("a/b.md", b"x")], tmp_path / "out", dry_run=True
    )
    assert report.written == ["a/b.md"]
    assert not (tmp_path / "out").exists()


def test_write_cancelled(tmp_path: Path) -> None:
    """Verify units are skipped once cancellation is requested."""
    cancel = threading.Event()
    cancel.set()
    report = write_output_units([OutputUnit("a.md", b"x")], tmp_path, cancel=cancel)
    assert report.skipped == ["a.md"]
    assert report.written == []
    assert not (tmp_path / "a.md").exists()


def test_output_file_for_unit_rejects_absolute(tmp_path: Path) -> None:
    """Verify absolute unit paths are refused."""
    with pytest.raises(ValueError):
        output_file_for_unit(tmp_path, "/etc/passwd")
    assert output_file_for_unit(tmp_path, "a/b.md") == (tmp_path / "a/b.md").resolve()
