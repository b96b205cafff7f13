"""Utility for turning dotted .NET names into stable file name tokens."""

import re

# Keep Unicode letters, digits, underscore and dash.
DOT_SAFE_RE = re.compile(r"[^\w-]+")


def dot_safe(name: str, separator: str = "-") -> str:
    """Make a stable filename-ish token.

    Dots, nested-type ``+`` and generic arity markers all become
    ``separator``: ``Acme.Widgets`` -> ``Acme-Widgets``, ``List`1`` ->
    ``List-1``.
    """
    for ch in (".", "+", "`"):
        name = name.replace(ch, separator)
    name = DOT_SAFE_RE.sub(separator, name).strip(separator)
    # Avoid pathological emptiness
    return name or "Unknown"
