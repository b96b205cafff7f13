"""Utility for generating anchor slugs for Markdown headers."""

import re


def header_slug(*parts: str) -> str:
    """Generate a GitHub-ish anchor slug: lower, hyphenate non-word runs.

    Parts are joined with spaces; underscores survive so that nested-type
    separators stay distinguishable from namespace dots.
    """
    s = " ".join(p for p in parts if p).strip().lower()
    s = re.sub(r"[^\w]+", "-", s)
    s = re.sub(r"-{2,}", "-", s).strip("-")
    return s or "section"
