"""Fan layout units out to a renderer and collect the rendered output units."""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from functools import partial

from dotnetdocs.build_navigation import build_navigation, navigation_view
from dotnetdocs.build_page_view import build_page_view
from dotnetdocs.cross_reference_resolver import CrossReferenceResolver
from dotnetdocs.doc_model import DocModel
from dotnetdocs.errors import PathCollisionError
from dotnetdocs.json_renderer import JsonRenderer
from dotnetdocs.layout import Layout, LayoutUnit
from dotnetdocs.markdown_renderer import MarkdownRenderer
from dotnetdocs.mintlify_renderer import MintlifyRenderer
from dotnetdocs.renderer_base import OutputUnit, RendererBase, RenderOptions
from dotnetdocs.yaml_renderer import YamlRenderer

logger = logging.getLogger(__name__)

GENERATOR = "dotnetdocs"


class OutputFormat(str, Enum):
    """Supported output formats."""

    MARKDOWN = "markdown"
    MINTLIFY = "mintlify"
    YAML = "yaml"
    JSON = "json"


RENDERERS: dict[OutputFormat, type[RendererBase]] = {
    OutputFormat.MARKDOWN: MarkdownRenderer,
    OutputFormat.MINTLIFY: MintlifyRenderer,
    OutputFormat.YAML: YamlRenderer,
    OutputFormat.JSON: JsonRenderer,
}


def renderer_for(
    output_format: OutputFormat, options: RenderOptions | None = None
) -> RendererBase:
    """Instantiate the renderer for a format."""
    return RENDERERS[OutputFormat(output_format)](options)


def extension_for(output_format: OutputFormat) -> str:
    """File extension the layout must use for a format."""
    return RENDERERS[OutputFormat(output_format)].extension


def render(
    model: DocModel,
    resolver: CrossReferenceResolver,
    layout: Layout,
    output_format: OutputFormat,
    *,
    options: RenderOptions | None = None,
    cancel: threading.Event | None = None,
) -> list[OutputUnit]:
    """Render every unit plus the navigation manifest, sorted by path.

    Units render concurrently on at most ``options.max_workers`` threads. When
    ``cancel`` is set, units not yet started are skipped and no manifest is
    produced.
    """
    options = options or RenderOptions()
    cancel = cancel or threading.Event()
    renderer = renderer_for(output_format, options)

    manifest_path = renderer.manifest_name
    for unit in layout.units:
        if unit.path.casefold() == manifest_path.casefold():
            owner = unit.type_keys[0] if unit.type_keys else unit.title
            raise PathCollisionError(manifest_path, "navigation manifest", owner)

    def render_one(unit: LayoutUnit) -> OutputUnit | None:
        if cancel.is_set():
            return None
        view = build_page_view(
            unit,
            model,
            resolver,
            layout,
            partial(renderer.link, unit.path),
            syntax=renderer.generic_syntax,
            code_language=options.code_language,
        )
        return OutputUnit(unit.path, renderer.encode(renderer.render_unit(view)))

    with ThreadPoolExecutor(max_workers=max(1, options.max_workers)) as pool:
        results = list(pool.map(render_one, layout.units))
    outputs = [r for r in results if r is not None]

    if cancel.is_set():
        logger.warning(
            "Rendering cancelled after %d of %d units", len(outputs), len(layout.units)
        )
        return sorted(outputs, key=lambda o: o.path)

    meta = {
        "generator": GENERATOR,
        "format": renderer.format_name,
        "mode": layout.mode.value,
        "config_hash": options.config_hash,
    }
    manifest = navigation_view(build_navigation(model, layout), meta)
    outputs.append(
        OutputUnit(manifest_path, renderer.encode(renderer.render_manifest(manifest)))
    )
    logger.info("Rendered %d units as %s", len(outputs), renderer.format_name)
    return sorted(outputs, key=lambda o: o.path)
