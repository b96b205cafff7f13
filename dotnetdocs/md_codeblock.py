"""Utility for generating Markdown code blocks."""

import re

FENCE_RE = re.compile(r"`{3,}")


def md_codeblock(lang: str | None, code: str) -> str:
    """Generate a fenced code block, lengthening the fence past any in the code."""
    longest = max((len(m) for m in FENCE_RE.findall(code)), default=2)
    fence = "`" * max(3, longest + 1)
    return f"""{fence}{lang or ""}
{code.rstrip()}
{fence}"""
