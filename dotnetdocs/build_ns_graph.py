"""Logic for building a namespace hierarchy graph."""

from collections.abc import Iterable


def build_ns_graph(namespaces: Iterable[str]) -> dict[str, set[str]]:
    """Map each namespace (and every dotted prefix of one) to its direct children.

    Prefixes that declare no types of their own still appear, so ``Acme.Widgets``
    alone yields ``{"": {"Acme"}, "Acme": {"Acme.Widgets"}, "Acme.Widgets": set()}``.
    """
    ns_children: dict[str, set[str]] = {"": set()}
    for ns in namespaces:
        if not ns:
            continue
        parts = ns.split(".")
        ns_children[""].add(parts[0])
        for i in range(1, len(parts)):
            parent = ".".join(parts[:i])
            child = ".".join(parts[: i + 1])
            ns_children.setdefault(parent, set()).add(child)
        ns_children.setdefault(ns, set())
        ns_children.setdefault(parts[0], set())
    return ns_children
