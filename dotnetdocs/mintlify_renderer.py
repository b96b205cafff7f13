"""Render unit views as Mintlify MDX pages plus a docs.json navigation fragment."""

import json
import posixpath
import re
from collections.abc import Callable
from typing import Any

import yaml

from dotnetdocs.markdown_renderer import MarkdownRenderer
from dotnetdocs.renderer_base import View
from dotnetdocs.resolution import GenericSyntax

TYPE_ICONS = {
    "class": "file-brackets-curly",
    "interface": "plug",
    "struct": "cubes",
    "enum": "list-ol",
    "delegate": "arrow-right-arrow-left",
}
NAMESPACE_ICON = "folder-tree"
DEFAULT_ICON = "file-code"

# Modifier -> badge, first match wins.
TAG_MODIFIERS = [("abstract", "ABSTRACT"), ("sealed", "SEALED"), ("static", "STATIC")]

DESCRIPTION_LIMIT = 160
SIDEBAR_TITLE_LIMIT = 30

# Inline code spans and links are left as they are.
CODE_SPAN_RE = re.compile(r"(`+)(?:.*?)\1|\]\([^)]*\)", re.DOTALL)
LINK_RE = re.compile(r"\[([^\]]*)\]\([^)]*\)")

# View keys holding documentation prose.
PROSE_KEYS = {"summary", "value", "condition", "description"}


def _escape_braces(text: str) -> str:
    return text.replace("{", "\\{").replace("}", "\\}")


def _escape_jsx(text: str) -> str:
    text = text.replace("<", "&lt;").replace(">", "&gt;")
    return _escape_braces(text)


class MintlifyRenderer(MarkdownRenderer):
    """Markdown with Mintlify front matter and components, written as ``.mdx``."""

    format_name = "mintlify"
    extension = ".mdx"
    manifest_name = "docs.json"
    generic_syntax = GenericSyntax.ESCAPED

    def link(self, from_path: str, target: str) -> str:
        """Mintlify routes are site-absolute and carry no extension."""
        path, _, anchor = target.partition("#")
        route = self.route(path)
        return f"{route}#{anchor}" if anchor else route

    def route(self, path: str) -> str:
        stem = posixpath.splitext(path)[0]
        api = self.options.api_path.strip("/")
        return f"/{api}/{stem}" if api else f"/{stem}"

    def text(self, value: str) -> str:
        return _escape_jsx(value)

    def prose(self, value: str) -> str:
        """Escape JSX braces and angle brackets outside code spans and link targets."""
        out = []
        last = 0
        for m in CODE_SPAN_RE.finditer(value):
            out.append(_escape_jsx(value[last : m.start()]))
            out.append(m.group(0))
            last = m.end()
        out.append(_escape_jsx(value[last:]))
        return "".join(out)

    def front_matter(self, view: View) -> list[str]:
        types = view["types"]
        primary = types[0] if types and types[0]["anchor"] is None else None
        meta: dict = {"title": view["title"]}

        description = (view.get("description") or "").replace('"', "'")
        description = " ".join(LINK_RE.sub(r"\1", description).split())
        if len(description) > DESCRIPTION_LIMIT:
            description = description[: DESCRIPTION_LIMIT - 3] + "..."
        if description:
            meta["description"] = description

        if primary is not None:
            meta["icon"] = TYPE_ICONS.get(primary["kind"], DEFAULT_ICON)
            if len(primary["name"]) > SIDEBAR_TITLE_LIMIT:
                short = primary["name"]
                if "<" in short:
                    short = short[: short.index("<")] + "<...>"
                meta["sidebarTitle"] = short
            tag = self._tag(primary)
            if tag:
                meta["tag"] = tag
            keywords = [primary["name"], primary["key"], primary["namespace"]]
            keywords.append(primary["kind"])
        else:
            meta["icon"] = NAMESPACE_ICON
            meta["mode"] = "wide"
            keywords = [*view["namespaces"], *(t["name"] for t in types[:10])]
        meta["keywords"] = list(dict.fromkeys(k for k in keywords if k))

        dumped = yaml.safe_dump(
            meta, sort_keys=False, allow_unicode=True, default_flow_style=None
        )
        return ["---", dumped.rstrip("\n"), "---", ""]

    def _tag(self, t: View) -> str | None:
        if t["kind"] == "enum":
            return "ENUM"
        for modifier, tag in TAG_MODIFIERS:
            if modifier in t.get("modifiers", []):
                if modifier == "abstract" and t["kind"] == "interface":
                    continue
                return tag
        return None

    def note(self, paragraphs: list[str]) -> list[str]:
        body = "\n\n".join(self.prose(p) for p in paragraphs)
        return ["<Note>", body, "</Note>", ""]

    def warning_list(self, rows: list[str]) -> list[str]:
        return ["<Warning>", *rows, "</Warning>", ""]

    def param_list(self, params: list[View]) -> list[str]:
        out = []
        for p in params:
            attrs = f'path="{p["name"]}" type="{self._attr(p["type"]["display"])}"'
            if not p.get("optional"):
                attrs += " required"
            if "default" in p:
                attrs += f' default="{self._attr(p["default"])}"'
            out += [f"<ParamField {attrs}>", p.get("description", "")]
            out += ["</ParamField>", ""]
        return out

    def returns_block(self, returns: View) -> list[str]:
        type_display = returns["type"]["display"] if returns.get("type") else "void"
        return [
            f'<ResponseField name="Returns" type="{self._attr(type_display)}">',
            returns.get("description", ""),
            "</ResponseField>",
            "",
        ]

    def _attr(self, value: str) -> str:
        return value.replace("&", "&amp;").replace('"', "&quot;")

    def render_unit(self, view: View) -> str:
        escaped = _escaped_view(view, self.prose)
        escaped["description"] = view.get("description", "")
        return super().render_unit(escaped)

    def render_manifest(self, navigation: View) -> str:
        entries_by_ns = {g["namespace"]: g for g in navigation["groups"]}
        children = navigation["namespace_children"]
        groups = [self._nav_group(ns, entries_by_ns, children) for ns in children[""]]
        if "" in entries_by_ns:
            groups.append(self._nav_group("", entries_by_ns, {}))
        fragment = {
            "navigation": {
                "groups": [
                    {
                        "group": "API Reference",
                        "icon": "code",
                        "pages": [g for g in groups if g is not None],
                    }
                ]
            },
            "meta": navigation["meta"],
        }
        return json.dumps(fragment, indent=2, ensure_ascii=False) + "\n"

    def _nav_group(
        self,
        ns: str,
        entries_by_ns: dict[str, View],
        children: dict[str, list[str]],
    ) -> dict | None:
        pages: list = []
        group = entries_by_ns.get(ns)
        if group is not None:
            for entry in group["entries"]:
                route = self.route(entry["href"].partition("#")[0]).lstrip("/")
                if route not in pages:
                    pages.append(route)
        for child in children.get(ns, []):
            sub = self._nav_group(child, entries_by_ns, children)
            if sub is not None:
                pages.append(sub)
        if not pages:
            return None
        title = group["title"] if group is not None else ns
        return {"group": title, "icon": NAMESPACE_ICON, "pages": pages}


def _escaped_view(node: Any, escape: Callable[[str], str]) -> Any:
    """Copy of a view with prose strings escaped for MDX."""
    if isinstance(node, dict):
        out = {}
        for k, v in node.items():
            if k in PROSE_KEYS and isinstance(v, str):
                out[k] = escape(v)
            elif k == "remarks" and isinstance(v, list):
                out[k] = v  # escaped by note()
            else:
                out[k] = _escaped_view(v, escape)
        return out
    if isinstance(node, list):
        return [_escaped_view(x, escape) for x in node]
    return node
