"""Logic for loading, merging and validating configuration files."""

import copy
import logging
from pathlib import Path
from typing import Any

import yaml

from dotnetdocs.cross_reference_resolver import DEFAULT_EXTERNAL_TEMPLATES
from dotnetdocs.deep_merge import deep_merge
from dotnetdocs.errors import ConfigError
from dotnetdocs.layout import FlatScope, LayoutMode
from dotnetdocs.render_pipeline import OutputFormat
from dotnetdocs.symbol_facts import Accessibility

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "output": {
        "format": OutputFormat.MARKDOWN.value,
        "mode": LayoutMode.HIERARCHICAL.value,
        "flat_scope": FlatScope.ASSEMBLY.value,
        "root": "docs",
        "api_path": "api-reference",
    },
    "documentation": {
        "included_members": [
            Accessibility.PUBLIC.value,
            Accessibility.PROTECTED.value,
            Accessibility.PROTECTED_INTERNAL.value,
        ],
    },
    "external_references": dict(DEFAULT_EXTERNAL_TEMPLATES),
    "rendering": {
        "max_workers": 4,
        "code_language": "csharp",
    },
}

# Sample values used to check that URL templates only use known placeholders.
TEMPLATE_PROBE = {
    "name": "List",
    "arity": 1,
    "namespace": "System.Collections.Generic",
    "full_name": "System.Collections.Generic.List",
    "uid": "system.collections.generic.list-1",
}


def load_config(
    path: str | None = None,
    overrides: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults.

    ``overrides`` (typically from CLI flags) win over the file. Raises
    ConfigError when the result holds an invalid value.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        p = Path(path)
        if p.exists():
            try:
                user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            except yaml.YAMLError as e:
                msg = f"Cannot parse config file {p}: {e}"
                raise ConfigError(msg) from e
            if not isinstance(user_config, dict):
                msg = f"Config file {p} must hold a mapping"
                raise ConfigError(msg)
            config = deep_merge(config, user_config)
        else:
            logger.warning("Config file %s not found; using defaults", p)
    if overrides:
        config = deep_merge(config, overrides)
    validate_config(config)
    return config


def _choice(config: dict[str, Any], section: str, key: str, allowed: list[str]) -> None:
    value = config.get(section, {}).get(key)
    if value not in allowed:
        msg = f"{section}.{key} must be one of {', '.join(allowed)}; got {value!r}"
        raise ConfigError(msg)


def validate_config(config: dict[str, Any]) -> None:
    """Reject values the pipeline cannot act on."""
    _choice(config, "output", "format", [f.value for f in OutputFormat])
    _choice(config, "output", "mode", [m.value for m in LayoutMode])
    _choice(config, "output", "flat_scope", [s.value for s in FlatScope])

    workers = config.get("rendering", {}).get("max_workers")
    if not isinstance(workers, int) or isinstance(workers, bool) or workers < 1:
        msg = f"rendering.max_workers must be a positive integer; got {workers!r}"
        raise ConfigError(msg)

    allowed = {a.value for a in Accessibility}
    for level in config.get("documentation", {}).get("included_members", []):
        if level not in allowed:
            msg = f"documentation.included_members has unknown level {level!r}"
            raise ConfigError(msg)

    templates = config.get("external_references") or {}
    if not isinstance(templates, dict):
        msg = "external_references must map namespace prefixes to URL templates"
        raise ConfigError(msg)
    for prefix, template in templates.items():
        try:
            str(template).format(**TEMPLATE_PROBE)
        except (KeyError, IndexError, ValueError) as e:
            msg = f"external_references[{prefix!r}] has a bad template: {e}"
            raise ConfigError(msg) from e
