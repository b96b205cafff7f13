"""Render unit views as JSON documents plus a ``toc.json`` manifest."""

import json
from typing import Any

from dotnetdocs.renderer_base import RendererBase, View
from dotnetdocs.yaml_renderer import SCHEMA_VERSION


def dump_json(data: Any) -> str:
    # Opaque values become null rather than aborting the document.
    text = json.dumps(data, indent=2, ensure_ascii=False, default=lambda _o: None)
    return text + "\n"


class JsonRenderer(RendererBase):
    """One ``.json`` document per unit."""

    format_name = "json"
    extension = ".json"
    manifest_name = "toc.json"

    def render_unit(self, view: View) -> str:
        return dump_json({"schema_version": SCHEMA_VERSION, **view})

    def render_manifest(self, navigation: View) -> str:
        return dump_json({"schema_version": SCHEMA_VERSION, **navigation})
