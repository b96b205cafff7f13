"""Logic for computing stable hashes of configuration objects."""

import hashlib
import json
from typing import Any

from dotnetdocs.plain_value import plain_value

# Settings that change where or how fast output is written, not what it says.
OUTPUT_NEUTRAL_KEYS = (("output", "root"), ("rendering", "max_workers"))


def compute_config_hash(config: dict[str, Any]) -> str:
    """Compute a stable hash of the settings that shape the rendered documents.

    Two runs with the same hash produce byte-identical units, so the hash is
    stamped into every navigation manifest. Uses canonical JSON (sorted keys).
    """
    effective = plain_value(config)
    for section, key in OUTPUT_NEUTRAL_KEYS:
        if isinstance(effective.get(section), dict):
            effective[section].pop(key, None)
    config_json = json.dumps(effective, sort_keys=True, ensure_ascii=True)
    return hashlib.sha256(config_json.encode("utf-8")).hexdigest()
