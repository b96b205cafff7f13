"""Utility for removing YAML MIME headers from facts files."""

YAML_MIME_PREFIX = "### YamlMime:"


def strip_yaml_mime_header(text: str) -> str:
    """Remove a leading ``### YamlMime:<Kind>`` line from the content."""
    lines = text.splitlines()
    if lines and lines[0].startswith(YAML_MIME_PREFIX):
        return "\n".join(lines[1:]).lstrip("\n")
    return text


def yaml_mime_kind(text: str) -> str | None:
    """Return the MIME kind named by the header, if there is one."""
    first = text.split("\n", 1)[0].strip()
    if first.startswith(YAML_MIME_PREFIX):
        return first[len(YAML_MIME_PREFIX) :].strip() or None
    return None
