"""Logic for rewriting inline cross-reference tokens in documentation prose."""

import re
from collections.abc import Callable

from dotnetdocs.resolution import GenericSyntax, Resolution

XREF_TAG_RE = re.compile(r"<xref:([^?>#]+)(?:\?[^>#]*)?(?:#[^>]*)?>")
XREF_MD_LINK_RE = re.compile(
    r"\((xref:([^)?#]+)(?:\?[^)#]*)?(?:#[^)]+)?)\)",
)  # (xref:UID?...)


def rewrite_xrefs(
    text: str,
    resolve_uid: Callable[[str], Resolution],
    link: Callable[[Resolution], str | None],
    syntax: GenericSyntax = GenericSyntax.ANGLE,
) -> str:
    """Rewrite xref tokens to Markdown links.

    ``link`` turns a resolution into an href for the current output, or None
    when the target should render as code text.
    """
    if not text:
        return ""

    # <xref:UID> -> [Title](href)
    def repl_tag(m: re.Match) -> str:
        res = resolve_uid(m.group(1))
        title = res.format_display(syntax)
        href = link(res)
        if not href:
            return f"`{res.format_display()}`"
        return f"[{title}]({href})"

    text = XREF_TAG_RE.sub(repl_tag, text)

    # (xref:UID) -> (href)
    def repl_link(m: re.Match) -> str:
        href = link(resolve_uid(m.group(2)))
        return f"({href})" if href else "(#)"

    return XREF_MD_LINK_RE.sub(repl_link, text)
