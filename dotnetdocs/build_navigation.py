"""Build the navigation manifest shared by every output format."""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any

from dotnetdocs.build_ns_graph import build_ns_graph
from dotnetdocs.compute_layout import type_sort_key
from dotnetdocs.display_title import GLOBAL_NAMESPACE_TITLE, display_title
from dotnetdocs.doc_model import DocModel, TypeDoc
from dotnetdocs.layout import Layout, LayoutUnit


@dataclass
class NavEntry:
    """A link to one documented type."""

    key: str
    title: str
    kind: str
    href: str


@dataclass
class NavGroup:
    """Types of one namespace, in (kind, name) order."""

    namespace: str
    title: str
    entries: list[NavEntry] = field(default_factory=list)


@dataclass
class Navigation:
    """Run-wide manifest: every unit plus namespace-grouped type entries."""

    units: list[LayoutUnit]
    groups: list[NavGroup]
    namespace_children: dict[str, set[str]]

    def group(self, namespace: str) -> NavGroup | None:
        """Look up the group for a namespace."""
        for g in self.groups:
            if g.namespace == namespace:
                return g
        return None


def build_navigation(model: DocModel, layout: Layout) -> Navigation:
    """Group laid-out top-level types by namespace.

    Ordering depends only on names and kinds, never on assembly input order.
    """
    by_ns: dict[str, list[TypeDoc]] = defaultdict(list)
    for key in layout.locations:
        t = model.types[key]
        if not t.is_nested:
            by_ns[t.namespace].append(t)

    groups = []
    for ns in sorted(by_ns):
        entries = [
            NavEntry(
                key=t.key,
                title=display_title(t),
                kind=t.kind.value,
                href=layout.locations[t.key].href,
            )
            for t in sorted(by_ns[ns], key=type_sort_key)
        ]
        groups.append(
            NavGroup(namespace=ns, title=ns or GLOBAL_NAMESPACE_TITLE, entries=entries)
        )
    return Navigation(
        units=list(layout.units),
        groups=groups,
        namespace_children=build_ns_graph(by_ns),
    )


def navigation_view(navigation: Navigation, meta: dict[str, Any]) -> dict[str, Any]:
    """Plain-data form of the manifest consumed by renderers."""
    return {
        "meta": dict(meta),
        "units": [
            {"path": u.path, "title": u.title, "group": u.group}
            for u in navigation.units
        ],
        "groups": [
            {
                "namespace": g.namespace,
                "title": g.title,
                "entries": [
                    {"key": e.key, "title": e.title, "kind": e.kind, "href": e.href}
                    for e in g.entries
                ],
            }
            for g in navigation.groups
        ],
        "namespace_children": {
            ns: sorted(children)
            for ns, children in sorted(navigation.namespace_children.items())
        },
    }
