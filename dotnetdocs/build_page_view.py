"""Build the renderer-neutral view of one layout unit.

The view is plain data (dicts, lists, strings, None): every type reference is
already resolved and every href already formatted, so renderers only lay out
text and never consult the resolver or the layout themselves.
"""

from collections.abc import Callable
from typing import Any

from dotnetdocs.build_signature import member_signature, type_signature
from dotnetdocs.cross_reference_resolver import CrossReferenceResolver
from dotnetdocs.display_title import GLOBAL_NAMESPACE_TITLE, display_title
from dotnetdocs.doc_comment import DocComment
from dotnetdocs.doc_model import DocModel, MemberDoc, ParameterDoc, TypeDoc
from dotnetdocs.layout import Layout, LayoutUnit
from dotnetdocs.plain_value import plain_value
from dotnetdocs.resolution import GenericSyntax, InternalAnchor, Resolution
from dotnetdocs.rewrite_xrefs import rewrite_xrefs
from dotnetdocs.symbol_facts import MemberKind, TypeKind
from dotnetdocs.type_reference import TypeReference

# Section key per member kind, in rendering order.
MEMBER_SECTIONS = {
    MemberKind.CONSTRUCTOR: "constructors",
    MemberKind.PROPERTY: "properties",
    MemberKind.METHOD: "methods",
    MemberKind.EVENT: "events",
    MemberKind.FIELD: "fields",
    MemberKind.OPERATOR: "operators",
}

View = dict[str, Any]
LinkFormatter = Callable[[str], str]


class PageViewBuilder:
    """Turns model nodes into view dicts for one unit."""

    def __init__(
        self,
        model: DocModel,
        resolver: CrossReferenceResolver,
        layout: Layout,
        link: LinkFormatter,
        *,
        syntax: GenericSyntax = GenericSyntax.ANGLE,
        code_language: str = "csharp",
    ) -> None:
        self.model = model
        self.resolver = resolver
        self.layout = layout
        self.link = link
        self.syntax = syntax
        self.code_language = code_language

    def href(self, res: Resolution) -> str | None:
        """Output href of a resolution; internal paths go through the formatter."""
        if isinstance(res, InternalAnchor):
            return self.link(res.href)
        return res.href

    def ref(self, res: Resolution) -> View:
        view: View = {
            "display": res.format_display(),
            "href": self.href(res),
            "kind": res.kind,
        }
        if res.arguments:
            view["arguments"] = [self.ref(a) for a in res.arguments]
        return view

    def type_ref(self, ref: TypeReference) -> View:
        return self.ref(self.resolver.resolve(ref))

    def key_ref(self, key: str) -> View:
        """Reference view of a type already in the model."""
        return self.type_ref(self.model.types[key].reference())

    def prose(self, text: str) -> str:
        return rewrite_xrefs(text, self.resolver.resolve_uid, self.href, self.syntax)

    def doc_sections(self, doc: DocComment) -> View:
        """Sections shared by types and members; empty ones are omitted."""
        view: View = {}
        if doc.summary:
            view["summary"] = self.prose(doc.summary)
        if doc.remarks:
            view["remarks"] = [self.prose(p) for p in doc.remarks]
        if doc.value:
            view["value"] = self.prose(doc.value)
        if doc.examples:
            view["examples"] = [
                {"code": e.code, "language": e.language or self.code_language}
                for e in doc.examples
            ]
        if doc.exceptions:
            view["exceptions"] = [
                {"type": self.type_ref(e.type), "condition": self.prose(e.condition)}
                for e in doc.exceptions
            ]
        if doc.see_also:
            view["see_also"] = [
                self.ref(self.resolver.resolve_see_also(s)) for s in doc.see_also
            ]
        return view

    def type_parameters(self, names: list[str], doc: DocComment) -> list[View]:
        return [
            {"name": n, "description": self.prose(doc.type_param(n))} for n in names
        ]

    def parameters(self, params: list[ParameterDoc], doc: DocComment) -> list[View]:
        out = []
        for p in params:
            view: View = {
                "name": p.name,
                "type": self.type_ref(p.type),
                "description": self.prose(doc.param(p.name)),
                "optional": p.is_optional,
            }
            if p.default_value is not None:
                view["default"] = p.default_value
            out.append(view)
        return out

    def returns(self, ref: TypeReference | None, doc: DocComment) -> View | None:
        if ref is None and not doc.returns:
            return None
        return {
            "type": self.type_ref(ref) if ref is not None else None,
            "description": self.prose(doc.returns),
        }

    def member(self, m: MemberDoc, owner: TypeDoc) -> View:
        doc = m.documentation
        view: View = {
            "name": display_title(m),
            "anchor": self.layout.member_anchor(m),
            "kind": m.kind.value,
            "syntax": member_signature(m, owner),
        }
        if m.declaring_type is not None:
            origin = "extension_from" if m.is_extension_method else "inherited_from"
            view[origin] = self.type_ref(m.declaring_type)
        view.update(self.doc_sections(doc))
        if m.generic_parameters:
            view["type_parameters"] = self.type_parameters(m.generic_parameters, doc)
        if m.parameters:
            view["parameters"] = self.parameters(m.parameters, doc)
        if m.kind in {MemberKind.METHOD, MemberKind.OPERATOR}:
            returns = self.returns(m.return_type, doc)
            if returns is not None:
                view["returns"] = returns
        elif m.return_type is not None and m.kind is not MemberKind.CONSTRUCTOR:
            view["type"] = self.type_ref(m.return_type)
        if m.constant_value is not None:
            view["value_literal"] = m.constant_value
        view["symbol"] = plain_value(m.symbol)
        return view

    def inheritance(self, t: TypeDoc) -> list[View]:
        """Base chain, outermost ancestor first, following internal types."""
        chain: list[View] = []
        seen = {t.key}
        base = t.base_type
        while base is not None:
            chain.append(self.type_ref(base))
            parent = self.model.type(base.lookup_key)
            if parent is None or parent.key in seen:
                break
            seen.add(parent.key)
            base = parent.base_type
        chain.reverse()
        return chain

    def type(self, t: TypeDoc, anchor: str | None) -> View:
        doc = t.documentation
        view: View = {
            "key": t.key,
            "anchor": anchor,
            "name": display_title(t),
            "kind": t.kind.value,
            "namespace": t.namespace or GLOBAL_NAMESPACE_TITLE,
            "assembly": t.assembly,
            "source_assemblies": list(t.source_assemblies),
            "modifiers": list(t.modifiers),
            "syntax": type_signature(t),
        }
        view.update(self.doc_sections(doc))
        if t.generic_parameters:
            view["type_parameters"] = self.type_parameters(t.generic_parameters, doc)
        if t.kind is TypeKind.DELEGATE:
            if t.parameters:
                view["parameters"] = self.parameters(t.parameters, doc)
            returns = self.returns(t.return_type, doc)
            if returns is not None:
                view["returns"] = returns
        inheritance = self.inheritance(t)
        if inheritance:
            view["inheritance"] = inheritance
        if t.interfaces:
            view["implements"] = [self.type_ref(i) for i in t.interfaces]
        derived = self.model.derived_types.get(t.key, [])
        if derived:
            view["derived"] = [self.key_ref(k) for k in derived]

        enum_values = t.enum_values
        enum_ids = {id(m) for m in enum_values}
        if enum_values:
            view["enum_values"] = [
                {
                    "name": m.name,
                    "value": m.constant_value,
                    "summary": self.prose(m.documentation.summary),
                }
                for m in enum_values
            ]
        for kind, section in MEMBER_SECTIONS.items():
            members = [
                self.member(m, t)
                for m in t.members_by_kind.get(kind, [])
                if id(m) not in enum_ids
            ]
            if members:
                view[section] = members
        if t.nested_type_keys:
            view["nested_types"] = [self.key_ref(k) for k in t.nested_type_keys]
        view["symbol"] = plain_value(t.symbol)
        return view


def build_page_view(
    unit: LayoutUnit,
    model: DocModel,
    resolver: CrossReferenceResolver,
    layout: Layout,
    link: LinkFormatter,
    *,
    syntax: GenericSyntax = GenericSyntax.ANGLE,
    code_language: str = "csharp",
) -> View:
    """Build the view of one unit; ``link`` formats layout-relative hrefs."""
    builder = PageViewBuilder(
        model, resolver, layout, link, syntax=syntax, code_language=code_language
    )
    types = [
        builder.type(model.types[key], layout.anchor_for(key))
        for key in unit.type_keys
    ]
    description = ""
    if types and types[0]["anchor"] is None:
        description = types[0].get("summary", "")
    return {
        "path": unit.path,
        "title": unit.title,
        "group": unit.group,
        "namespaces": [ns or GLOBAL_NAMESPACE_TITLE for ns in unit.namespaces],
        "description": description,
        "types": types,
    }
