"""The merged documentation graph: assemblies, namespaces, types and members.

Namespaces and types live in arena dictionaries keyed by name/key; owners hold
keys rather than object references, so the same namespace node can be shared
by every assembly that contributes to it.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from dotnetdocs.doc_comment import DocComment
from dotnetdocs.merge_warning import MergeRecord
from dotnetdocs.symbol_facts import Accessibility, MemberKind, TypeKind
from dotnetdocs.type_reference import TypeReference

MEMBER_KIND_ORDER = [
    MemberKind.CONSTRUCTOR,
    MemberKind.PROPERTY,
    MemberKind.METHOD,
    MemberKind.EVENT,
    MemberKind.FIELD,
    MemberKind.OPERATOR,
]

TYPE_KIND_ORDER = [
    TypeKind.CLASS,
    TypeKind.STRUCT,
    TypeKind.INTERFACE,
    TypeKind.ENUM,
    TypeKind.DELEGATE,
]


@dataclass
class ParameterDoc:
    """A parameter in a member or delegate signature."""

    name: str
    type: TypeReference
    is_optional: bool = False
    default_value: str | None = None


@dataclass
class MemberDoc:
    """A documented member; ``owner_key`` points back to its TypeDoc.

    ``declaring_type`` names where the member really lives: the base type of an
    inherited member, or the static class an extension method was moved from.
    """

    kind: MemberKind
    name: str
    owner_key: str
    return_type: TypeReference | None = None
    parameters: list[ParameterDoc] = field(default_factory=list)
    accessibility: Accessibility = Accessibility.PUBLIC
    modifiers: list[str] = field(default_factory=list)
    generic_parameters: list[str] = field(default_factory=list)
    constant_value: str | None = None
    documentation: DocComment = field(default_factory=DocComment)
    declaring_type: TypeReference | None = None
    is_inherited: bool = False
    is_extension_method: bool = False
    symbol: Any = None


@dataclass
class TypeDoc:
    """A documented type and its members, partitioned by member kind."""

    key: str
    kind: TypeKind
    name: str
    namespace: str
    assembly: str
    containing_types: tuple[str, ...] = ()
    accessibility: Accessibility = Accessibility.PUBLIC
    generic_parameters: list[str] = field(default_factory=list)
    base_type: TypeReference | None = None
    interfaces: list[TypeReference] = field(default_factory=list)
    modifiers: list[str] = field(default_factory=list)
    documentation: DocComment = field(default_factory=DocComment)
    members_by_kind: dict[MemberKind, list[MemberDoc]] = field(default_factory=dict)
    parameters: list[ParameterDoc] = field(default_factory=list)
    return_type: TypeReference | None = None
    nested_type_keys: list[str] = field(default_factory=list)
    is_forwarder: bool = False
    source_assemblies: list[str] = field(default_factory=list)
    symbol: Any = None

    @property
    def arity(self) -> int:
        """Number of generic parameters."""
        return len(self.generic_parameters)

    @property
    def is_nested(self) -> bool:
        """True when declared inside another type."""
        return bool(self.containing_types)

    @property
    def containing_key(self) -> str | None:
        """Key of the directly containing type, if nested."""
        if not self.containing_types:
            return None
        head, _, _ = self.key.rpartition("+")
        return head

    @property
    def members(self) -> list[MemberDoc]:
        """All members in canonical kind order."""
        out: list[MemberDoc] = []
        for kind in MEMBER_KIND_ORDER:
            out.extend(self.members_by_kind.get(kind, []))
        return out

    @property
    def enum_values(self) -> list[MemberDoc]:
        """Enum constants: fields carrying a constant value."""
        if self.kind is not TypeKind.ENUM:
            return []
        return [
            m
            for m in self.members_by_kind.get(MemberKind.FIELD, [])
            if m.constant_value is not None
        ]

    def add_member(self, member: MemberDoc) -> None:
        """Attach a member, keeping the owner pointer consistent."""
        member.owner_key = self.key
        self.members_by_kind.setdefault(member.kind, []).append(member)

    def reference(self) -> TypeReference:
        """A reference pointing back at this type."""
        return TypeReference(
            name=self.name,
            namespace=self.namespace,
            containing_types=self.containing_types,
            generic_arguments=tuple(
                TypeReference.generic_parameter(g) for g in self.generic_parameters
            ),
        )


@dataclass
class NamespaceDoc:
    """A namespace shared by every assembly that declares types in it."""

    name: str
    type_keys: list[str] = field(default_factory=list)
    assemblies: list[str] = field(default_factory=list)


@dataclass
class AssemblyDoc:
    """An input assembly and the namespaces it contributes to."""

    name: str
    version: str = ""
    namespace_names: list[str] = field(default_factory=list)


@dataclass
class DocModel:
    """Arena storage for the whole merged graph."""

    assemblies: list[AssemblyDoc] = field(default_factory=list)
    namespaces: dict[str, NamespaceDoc] = field(default_factory=dict)
    types: dict[str, TypeDoc] = field(default_factory=dict)
    derived_types: dict[str, list[str]] = field(default_factory=dict)
    merge_log: list[MergeRecord] = field(default_factory=list)

    def namespace(self, name: str) -> NamespaceDoc | None:
        """Look up a namespace by name."""
        return self.namespaces.get(name)

    def type(self, key: str) -> TypeDoc | None:
        """Look up a type by key."""
        return self.types.get(key)

    def owner_of(self, member: MemberDoc) -> TypeDoc:
        """Return the TypeDoc that owns a member."""
        return self.types[member.owner_key]

    def iter_types(self) -> Iterator[TypeDoc]:
        """Yield types in namespace insertion order."""
        for ns in self.namespaces.values():
            for key in ns.type_keys:
                yield self.types[key]

    def iter_members(self) -> Iterator[MemberDoc]:
        """Yield every member of every type."""
        for t in self.iter_types():
            yield from t.members

    def remove_type(self, key: str) -> None:
        """Drop a type, and its namespace once nothing is left in it."""
        t = self.types.pop(key)
        ns = self.namespaces[t.namespace]
        ns.type_keys.remove(key)
        if ns.type_keys:
            return
        del self.namespaces[t.namespace]
        for asm in self.assemblies:
            if t.namespace in asm.namespace_names:
                asm.namespace_names.remove(t.namespace)
