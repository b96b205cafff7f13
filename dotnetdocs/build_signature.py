"""Derive C#-style declaration signatures from symbol facts alone."""

from dotnetdocs.doc_model import MemberDoc, ParameterDoc, TypeDoc
from dotnetdocs.symbol_facts import Accessibility, MemberKind, TypeKind
from dotnetdocs.type_reference import TypeReference

# System types the C# compiler spells with a keyword.
CSHARP_KEYWORDS = {
    "Boolean": "bool",
    "Byte": "byte",
    "SByte": "sbyte",
    "Char": "char",
    "Decimal": "decimal",
    "Double": "double",
    "Single": "float",
    "Int16": "short",
    "UInt16": "ushort",
    "Int32": "int",
    "UInt32": "uint",
    "Int64": "long",
    "UInt64": "ulong",
    "Object": "object",
    "String": "string",
    "Void": "void",
}

ACCESSOR_KEYWORDS = ("get", "set", "init")


def csharp_type(ref: TypeReference | None) -> str:
    """Spell a reference the way a C# declaration would."""
    if ref is None:
        return "void"
    name = ref.name
    if ref.namespace == "System" and not ref.containing_types and not ref.arity:
        name = CSHARP_KEYWORDS.get(name, name)
    if ref.generic_arguments:
        name += f"<{', '.join(csharp_type(a) for a in ref.generic_arguments)}>"
    if ref.nullable:
        name += "?"
    if ref.array_rank:
        name += "[" + "," * (ref.array_rank - 1) + "]"
    if ref.by_ref:
        name = f"ref {name}"
    return name


def _generics(names: list[str]) -> str:
    return f"<{', '.join(names)}>" if names else ""


def _params(params: list[ParameterDoc], extension: bool = False) -> str:
    out = []
    for i, p in enumerate(params):
        text = f"{csharp_type(p.type)} {p.name}"
        if extension and i == 0:
            text = f"this {text}"
        if p.is_optional:
            default = "default" if p.default_value is None else p.default_value
            text += f" = {default}"
        out.append(text)
    return ", ".join(out)


def _prefix(accessibility: Accessibility, modifiers: list[str]) -> str:
    words = [accessibility.value]
    words.extend(m for m in modifiers if m not in ACCESSOR_KEYWORDS)
    return " ".join(words)


def type_signature(t: TypeDoc) -> str:
    """Declaration line of a type: ``public sealed class Cache<T> : IDisposable``."""
    prefix = _prefix(t.accessibility, t.modifiers)
    name = t.name + _generics(t.generic_parameters)
    if t.kind is TypeKind.DELEGATE:
        ret = csharp_type(t.return_type)
        return f"{prefix} delegate {ret} {name}({_params(t.parameters)});"
    bases = []
    if t.base_type is not None and t.kind is not TypeKind.STRUCT:
        bases.append(csharp_type(t.base_type))
    bases.extend(csharp_type(i) for i in t.interfaces)
    sig = f"{prefix} {t.kind.value} {name}"
    if bases:
        sig += " : " + ", ".join(bases)
    return sig


def member_signature(member: MemberDoc, owner: TypeDoc) -> str:
    """Declaration line of a member."""
    prefix = _prefix(member.accessibility, member.modifiers)
    generics = _generics(member.generic_parameters)
    kind = member.kind
    if kind is MemberKind.CONSTRUCTOR:
        return f"{prefix} {owner.name}({_params(member.parameters)})"
    if kind is MemberKind.METHOD:
        ret = csharp_type(member.return_type)
        params = _params(member.parameters, member.is_extension_method)
        return f"{prefix} {ret} {member.name}{generics}({params})"
    if kind is MemberKind.OPERATOR:
        ret = csharp_type(member.return_type)
        return f"{prefix} {ret} operator {member.name}({_params(member.parameters)})"
    if kind is MemberKind.PROPERTY:
        accessors = [a for a in ACCESSOR_KEYWORDS if a in member.modifiers] or ["get"]
        body = " ".join(f"{a};" for a in accessors)
        name = member.name
        if member.parameters:
            name = f"this[{_params(member.parameters)}]"
        return f"{prefix} {csharp_type(member.return_type)} {name} {{ {body} }}"
    if kind is MemberKind.EVENT:
        return f"{prefix} event {csharp_type(member.return_type)} {member.name}"
    if owner.kind is TypeKind.ENUM and member.constant_value is not None:
        return f"{member.name} = {member.constant_value}"
    sig = f"{prefix} {csharp_type(member.return_type)} {member.name}"
    if member.constant_value is not None:
        sig += f" = {member.constant_value}"
    return sig
