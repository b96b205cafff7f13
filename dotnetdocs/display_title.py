"""Human-readable titles for graph nodes and type references."""

from dotnetdocs.doc_model import AssemblyDoc, MemberDoc, NamespaceDoc, TypeDoc
from dotnetdocs.symbol_facts import MemberKind
from dotnetdocs.type_key import split_arity
from dotnetdocs.type_reference import TypeReference

GLOBAL_NAMESPACE_TITLE = "global"

DocNode = AssemblyDoc | NamespaceDoc | TypeDoc | MemberDoc


def type_name_display(ref: TypeReference, open_: str = "<", close: str = ">") -> str:
    """Format a reference without resolving it, e.g. ``Dictionary<string, int>[]``."""
    text = ref.name
    if ref.generic_arguments:
        args = ", ".join(
            type_name_display(a, open_, close) for a in ref.generic_arguments
        )
        text += f"{open_}{args}{close}"
    if ref.nullable:
        text += "?"
    if ref.array_rank:
        text += "[" + "," * (ref.array_rank - 1) + "]"
    if ref.by_ref:
        text = f"ref {text}"
    return text


def display_title(node: DocNode) -> str:
    """Return the display title of any graph node."""
    if isinstance(node, AssemblyDoc):
        return node.name
    if isinstance(node, NamespaceDoc):
        return node.name or GLOBAL_NAMESPACE_TITLE
    if isinstance(node, TypeDoc):
        outer = [split_arity(c)[0] for c in node.containing_types]
        title = ".".join([*outer, node.name])
        if node.generic_parameters:
            title += f"<{', '.join(node.generic_parameters)}>"
        return title
    return _member_title(node)


def _member_title(member: MemberDoc) -> str:
    title = member.name
    if member.generic_parameters:
        title += f"<{', '.join(member.generic_parameters)}>"
    if member.kind in {MemberKind.METHOD, MemberKind.CONSTRUCTOR, MemberKind.OPERATOR}:
        params = ", ".join(type_name_display(p.type) for p in member.parameters)
        title += f"({params})"
    return title
