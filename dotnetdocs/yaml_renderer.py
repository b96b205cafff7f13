"""Render unit views as YAML documents plus a ``toc.yaml`` manifest."""

from typing import Any

import yaml

from dotnetdocs.renderer_base import RendererBase, View

SCHEMA_VERSION = 1


class ViewDumper(yaml.SafeDumper):
    """SafeDumper that writes unknown objects as null instead of failing."""


def _represent_opaque(dumper: yaml.SafeDumper, _data: Any) -> yaml.Node:
    return dumper.represent_none(None)


ViewDumper.add_multi_representer(object, _represent_opaque)


def dump_yaml(data: Any) -> str:
    return yaml.dump(
        data,
        Dumper=ViewDumper,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=1000,
    )


class YamlRenderer(RendererBase):
    """One ``.yaml`` document per unit."""

    format_name = "yaml"
    extension = ".yaml"
    manifest_name = "toc.yaml"

    def render_unit(self, view: View) -> str:
        return dump_yaml({"schema_version": SCHEMA_VERSION, **view})

    def render_manifest(self, navigation: View) -> str:
        return dump_yaml({"schema_version": SCHEMA_VERSION, **navigation})
