"""Canonical keys identifying documented types across the merged graph."""

import re

ARITY_RE = re.compile(r"`(\d+)$")


def type_key(
    namespace: str,
    containing_types: tuple[str, ...] | list[str],
    name: str,
    arity: int,
) -> str:
    """Build the unique key of a type.

    ``Acme.Widgets.Cache`1`` for a generic type, ``Acme.Outer+Inner`` for a
    nested one. Entries of ``containing_types`` carry their own arity marker.
    """
    nested = "+".join([*containing_types, name])
    key = f"{namespace}.{nested}" if namespace else nested
    return f"{key}`{arity}" if arity else key


def split_arity(token: str) -> tuple[str, int]:
    """Split ``List`1`` into ``("List", 1)``."""
    m = ARITY_RE.search(token)
    if not m:
        return token, 0
    return token[: m.start()], int(m.group(1))
