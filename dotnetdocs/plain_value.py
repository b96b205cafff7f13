"""Logic for converting arbitrary values into YAML/JSON-safe plain data."""

from enum import Enum
from typing import Any

PLAIN_SCALARS = (str, int, float, bool)


def plain_value(v: Any) -> Any:
    """Reduce a value to None, scalars, lists and string-keyed dicts.

    Anything else (opaque provider handles, callables, custom objects)
    becomes None instead of failing the document.
    """
    if v is None or isinstance(v, PLAIN_SCALARS):
        return v
    if isinstance(v, Enum):
        return plain_value(v.value)
    if isinstance(v, list | tuple):
        return [plain_value(x) for x in v]
    if isinstance(v, dict):
        return {str(k): plain_value(x) for k, x in v.items()}
    return None
