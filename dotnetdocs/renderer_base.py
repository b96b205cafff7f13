"""Shared renderer plumbing: options, output units and relative links."""

import posixpath
from dataclasses import dataclass
from typing import Any

from dotnetdocs.resolution import GenericSyntax

View = dict[str, Any]


@dataclass
class OutputUnit:
    """One rendered document, path relative to the API root."""

    path: str
    content: bytes


@dataclass
class RenderOptions:
    """Knobs every renderer reads."""

    api_path: str = "api-reference"
    code_language: str = "csharp"
    mode: str = "hierarchical"
    config_hash: str = ""
    max_workers: int = 4


class RendererBase:
    """Base class for output formats.

    Subclasses set ``format_name``, ``extension`` and ``manifest_name`` and
    implement ``render_unit`` and ``render_manifest``; both receive plain views
    and return text.
    """

    format_name = ""
    extension = ""
    manifest_name = ""
    generic_syntax = GenericSyntax.ANGLE

    def __init__(self, options: RenderOptions | None = None) -> None:
        self.options = options or RenderOptions()

    def link(self, from_path: str, target: str) -> str:
        """Href from one unit to a layout-relative ``path#anchor`` target."""
        path, _, anchor = target.partition("#")
        if path == from_path:
            rel = ""
        else:
            rel = posixpath.relpath(path, posixpath.dirname(from_path) or ".")
        if anchor:
            return f"{rel}#{anchor}"
        return rel or posixpath.basename(path)

    def render_unit(self, view: View) -> str:
        """Render one unit view."""
        raise NotImplementedError

    def render_manifest(self, navigation: View) -> str:
        """Render the run's navigation manifest."""
        raise NotImplementedError

    def encode(self, text: str) -> bytes:
        return text.encode("utf-8")
