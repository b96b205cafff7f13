"""Map the documentation graph onto output paths under a flat or hierarchical scheme."""

import logging
from collections import defaultdict

from dotnetdocs.display_title import GLOBAL_NAMESPACE_TITLE, display_title
from dotnetdocs.doc_model import TYPE_KIND_ORDER, DocModel, TypeDoc
from dotnetdocs.dot_safe import dot_safe
from dotnetdocs.errors import PathCollisionError
from dotnetdocs.header_slug import header_slug
from dotnetdocs.layout import (
    FlatScope,
    Layout,
    LayoutMode,
    LayoutUnit,
    TypeLocation,
    member_signature,
    member_slug,
)

logger = logging.getLogger(__name__)


def type_sort_key(t: TypeDoc) -> tuple[int, str, int, str]:
    """Stable secondary order: kind, then name, then arity."""
    return (TYPE_KIND_ORDER.index(t.kind), t.name.casefold(), t.arity, t.key)


def compute_layout(
    model: DocModel,
    mode: LayoutMode,
    *,
    flat_scope: FlatScope = FlatScope.ASSEMBLY,
    extension: str = ".md",
) -> Layout:
    """Assign every type an output location.

    Raises PathCollisionError if two distinct nodes would share a path (compared
    case-insensitively) or an anchor within the same unit. Overloads whose
    short anchors clash fall back to namespace-qualified parameter types, then
    to a numeric suffix; only members with identical signatures collide.
    """
    layout = Layout(mode=mode)
    if mode is LayoutMode.HIERARCHICAL:
        _hierarchical(model, layout, extension)
    elif flat_scope is FlatScope.NAMESPACE:
        _flat(model, layout, extension, by_namespace=True)
    else:
        _flat(model, layout, extension, by_namespace=False)

    layout.units.sort(key=lambda u: u.path)
    _check_collisions(layout)
    _assign_member_anchors(model, layout)
    logger.info(
        "Laid out %d types into %d units", len(layout.locations), len(layout.units)
    )
    return layout


def _namespace_dir(namespace: str) -> str:
    if not namespace:
        return GLOBAL_NAMESPACE_TITLE
    return "/".join(dot_safe(seg) for seg in namespace.split("."))


def _nested_anchor(t: TypeDoc) -> str:
    # "+" becomes "_" so nested separators never alias namespace dots.
    return header_slug(t.key.replace("+", "_"))


def _descendants(model: DocModel, t: TypeDoc) -> list[str]:
    out: list[str] = []
    nested = sorted((model.types[k] for k in t.nested_type_keys), key=type_sort_key)
    for n in nested:
        out.append(n.key)
        out.extend(_descendants(model, n))
    return out


def _hierarchical(model: DocModel, layout: Layout, extension: str) -> None:
    by_ns: dict[str, list[TypeDoc]] = defaultdict(list)
    for t in model.iter_types():
        if not t.is_nested:
            by_ns[t.namespace].append(t)

    for ns, types in by_ns.items():
        arities: dict[str, set[int]] = defaultdict(set)
        for t in types:
            arities[t.name].add(t.arity)
        directory = _namespace_dir(ns)
        for t in sorted(types, key=type_sort_key):
            stem = t.name
            if t.arity and len(arities[t.name]) > 1:
                stem = f"{t.name}-{t.arity}"
            path = f"{directory}/{dot_safe(stem)}{extension}"
            nested = _descendants(model, t)
            layout.units.append(
                LayoutUnit(
                    path=path,
                    title=display_title(t),
                    group=ns,
                    type_keys=[t.key, *nested],
                    namespaces=[ns],
                )
            )
            layout.locations[t.key] = TypeLocation(path)
            for key in nested:
                anchor = _nested_anchor(model.types[key])
                layout.locations[key] = TypeLocation(path, anchor)


def _flat(
    model: DocModel, layout: Layout, extension: str, *, by_namespace: bool
) -> None:
    scopes: dict[str, list[TypeDoc]] = defaultdict(list)
    for t in model.iter_types():
        scopes[t.namespace if by_namespace else t.assembly].append(t)

    for scope, types in scopes.items():
        name = scope or GLOBAL_NAMESPACE_TITLE
        path = f"{dot_safe(name)}{extension}"
        ordered = sorted(types, key=lambda t: (t.namespace, *type_sort_key(t)))
        namespaces = sorted({t.namespace for t in types})
        layout.units.append(
            LayoutUnit(
                path=path,
                title=name,
                group=name,
                type_keys=[t.key for t in ordered],
                namespaces=namespaces,
            )
        )
        for t in ordered:
            layout.locations[t.key] = TypeLocation(path, _nested_anchor(t))


def _check_collisions(layout: Layout) -> None:
    seen_paths: dict[str, str] = {}
    for unit in layout.units:
        folded = unit.path.casefold()
        owner = unit.type_keys[0] if unit.type_keys else unit.title
        if folded in seen_paths:
            raise PathCollisionError(unit.path, seen_paths[folded], owner)
        seen_paths[folded] = owner

        anchors: dict[str, str] = {}
        for key in unit.type_keys:
            anchor = layout.locations[key].anchor
            if anchor is None:
                continue
            if anchor in anchors:
                where = f"{unit.path}#{anchor}"
                raise PathCollisionError(where, anchors[anchor], key)
            anchors[anchor] = key


def _assign_member_anchors(model: DocModel, layout: Layout) -> None:
    for unit in layout.units:
        taken = {
            layout.locations[k].anchor
            for k in unit.type_keys
            if layout.locations[k].anchor is not None
        }
        for key in unit.type_keys:
            prefix = layout.locations[key].anchor or ""
            for m in model.types[key].members:
                sig = member_signature(m)
                if sig in layout.member_anchors:
                    where = f"{unit.path}#{layout.member_anchors[sig]}"
                    name = f"{key}.{display_title(m)}"
                    raise PathCollisionError(where, name, name)
                anchor = header_slug(prefix, member_slug(m))
                if anchor in taken:
                    anchor = header_slug(prefix, member_slug(m, qualified=True))
                base, n = anchor, 2
                while anchor in taken:
                    anchor = f"{base}-{n}"
                    n += 1
                taken.add(anchor)
                layout.member_anchors[sig] = anchor
