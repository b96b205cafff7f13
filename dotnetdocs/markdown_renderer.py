"""Render unit views as plain Markdown."""

from dotnetdocs.md_codeblock import md_codeblock
from dotnetdocs.md_table import md_table
from dotnetdocs.renderer_base import RendererBase, View

MEMBER_SECTION_TITLES = [
    ("constructors", "Constructors"),
    ("properties", "Properties"),
    ("methods", "Methods"),
    ("events", "Events"),
    ("fields", "Fields"),
    ("operators", "Operators"),
]


class MarkdownRenderer(RendererBase):
    """CommonMark output: one ``.md`` file per unit plus an ``index.md``."""

    format_name = "markdown"
    extension = ".md"
    manifest_name = "index.md"

    def render_unit(self, view: View) -> str:
        parts = self.front_matter(view)
        types = view["types"]
        has_primary = bool(types) and types[0]["anchor"] is None
        if not has_primary:
            parts += [f"# {self.text(view['title'])}", ""]
        for t in types:
            level = 1 if t["anchor"] is None else 2
            parts.extend(self.type_section(t, level))
        return "\n".join(parts).rstrip() + "\n"

    def render_manifest(self, navigation: View) -> str:
        meta = navigation["meta"]
        parts = [
            f"<!-- format: {meta['format']}; mode: {meta['mode']}; "
            f"config: {meta['config_hash']} -->",
            "",
            "# API Reference",
            "",
        ]
        for group in navigation["groups"]:
            parts += [f"## {self.text(group['title'])}", ""]
            parts.extend(
                f"- [{self.text(e['title'])}]({e['href']}) ({e['kind']})"
                for e in group["entries"]
            )
            parts.append("")
        return "\n".join(parts).rstrip() + "\n"

    # Hooks overridden by MDX-flavoured subclasses.

    def front_matter(self, view: View) -> list[str]:
        return []

    def text(self, value: str) -> str:
        """Escape free text for the target dialect."""
        return value

    def anchor(self, anchor: str) -> str:
        return f'<a id="{anchor}"></a>'

    def ref(self, ref: View | None) -> str:
        if ref is None:
            return ""
        if ref.get("href"):
            return f"[{self.text(ref['display'])}]({ref['href']})"
        return f"`{ref['display']}`"

    def heading(self, level: int, title: str) -> list[str]:
        return [f"{'#' * min(level, 6)} {title}", ""]

    def note(self, paragraphs: list[str]) -> list[str]:
        out = []
        for p in paragraphs:
            out += [p, ""]
        return out

    def warning_list(self, rows: list[str]) -> list[str]:
        return [*rows, ""]

    def param_list(self, params: list[View]) -> list[str]:
        rows = [
            [f"`{p['name']}`", self.ref(p["type"]), p.get("description", "")]
            for p in params
        ]
        return [md_table(["Name", "Type", "Description"], rows), ""]

    def type_param_list(self, params: list[View]) -> list[str]:
        rows = [[f"`{p['name']}`", p.get("description", "")] for p in params]
        return [md_table(["Name", "Description"], rows), ""]

    def returns_block(self, returns: View) -> list[str]:
        text = self.ref(returns.get("type"))
        if returns.get("description"):
            description = returns["description"]
            text = f"{text}: {description}" if text else description
        return [text, ""]

    # Sections.

    def code(self, source: str, language: str | None = None) -> list[str]:
        return [md_codeblock(language or self.options.code_language, source), ""]

    def definition(self, t: View) -> list[str]:
        lines = [f"**Namespace:** {self.text(t['namespace'])}"]
        assemblies = t.get("source_assemblies") or [t["assembly"]]
        lines.append(
            "**Assembly:** " + ", ".join(self.text(f"{a}.dll") for a in assemblies)
        )
        return ["  \n".join(lines), ""]

    def type_section(self, t: View, level: int) -> list[str]:
        sub = level + 1
        out = []
        if t["anchor"]:
            out.append(self.anchor(t["anchor"]))
        out += self.heading(level, f"{t['kind'].capitalize()} {self.text(t['name'])}")
        out += self.heading(sub, "Definition") + self.definition(t)
        out += self.heading(sub, "Syntax") + self.code(t["syntax"])
        if t.get("summary"):
            out += self.heading(sub, "Summary") + [t["summary"], ""]
        if t.get("remarks"):
            out += self.heading(sub, "Remarks") + self.note(t["remarks"])
        if t.get("type_parameters"):
            out += self.heading(sub, "Type Parameters")
            out += self.type_param_list(t["type_parameters"])
        if t.get("parameters"):
            out += self.heading(sub, "Parameters") + self.param_list(t["parameters"])
        if t.get("returns"):
            out += self.heading(sub, "Returns") + self.returns_block(t["returns"])
        if t.get("inheritance"):
            chain = [self.ref(r) for r in t["inheritance"]]
            chain.append(self.text(t["name"]))
            out += self.heading(sub, "Inheritance") + [" → ".join(chain), ""]
        for key, title in (("implements", "Implements"), ("derived", "Derived")):
            if t.get(key):
                out += self.heading(sub, title)
                out += [*(f"- {self.ref(r)}" for r in t[key]), ""]
        for key, title in MEMBER_SECTION_TITLES:
            if t.get(key):
                out += self.heading(sub, title)
                for m in t[key]:
                    out.extend(self.member_section(m, sub + 1))
        if t.get("enum_values"):
            rows = [
                [f"`{v['name']}`", f"`{v['value']}`", v.get("summary", "")]
                for v in t["enum_values"]
            ]
            out += self.heading(sub, "Enum Values")
            out += [md_table(["Name", "Value", "Description"], rows), ""]
        if t.get("nested_types"):
            out += self.heading(sub, "Nested Types")
            out += [*(f"- {self.ref(r)}" for r in t["nested_types"]), ""]
        out.extend(self.common_tail(t, sub))
        return out

    def common_tail(self, node: View, level: int) -> list[str]:
        """Examples, Exceptions and See Also, shared by types and members."""
        out = []
        if node.get("examples"):
            out += self.heading(level, "Examples")
            for e in node["examples"]:
                out += self.code(e["code"], e.get("language"))
        if node.get("exceptions"):
            rows = [
                f"- {self.ref(e['type'])}: {e['condition']}"
                if e.get("condition")
                else f"- {self.ref(e['type'])}"
                for e in node["exceptions"]
            ]
            out += self.heading(level, "Exceptions") + self.warning_list(rows)
        if node.get("see_also"):
            out += self.heading(level, "See Also")
            out += [*(f"- {self.ref(r)}" for r in node["see_also"]), ""]
        return out

    def member_section(self, m: View, level: int) -> list[str]:
        sub = level + 1
        out = [self.anchor(m["anchor"])]
        out += self.heading(level, self.text(m["name"]))
        if m.get("inherited_from"):
            out += self.note([f"Inherited from {self.ref(m['inherited_from'])}"])
        if m.get("extension_from"):
            source = self.ref(m["extension_from"])
            out += self.note([f"Extension method from {source}"])
        out += self.code(m["syntax"])
        if m.get("summary"):
            out += [m["summary"], ""]
        if m.get("remarks"):
            out += self.note(m["remarks"])
        if m.get("type"):
            out += [f"**Type:** {self.ref(m['type'])}", ""]
        if m.get("value"):
            out += [f"**Value:** {m['value']}", ""]
        if m.get("type_parameters"):
            out += ["**Type Parameters:**", ""]
            out += self.type_param_list(m["type_parameters"])
        if m.get("parameters"):
            out += ["**Parameters:**", ""] + self.param_list(m["parameters"])
        if m.get("returns"):
            out += ["**Returns:**", ""] + self.returns_block(m["returns"])
        out.extend(self.common_tail(m, sub))
        return out
