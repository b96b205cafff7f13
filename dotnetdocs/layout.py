"""Data models for the output layout: which unit and anchor each type lands in."""

from dataclasses import dataclass, field
from enum import Enum

from dotnetdocs.doc_model import MemberDoc
from dotnetdocs.header_slug import header_slug
from dotnetdocs.type_reference import TypeReference

# (owner key, kind, name, generic arity, qualified parameter types)
MemberSignature = tuple[str, str, str, int, tuple[str, ...]]


class LayoutMode(str, Enum):
    """Output layout strategies."""

    FLAT = "flat"
    HIERARCHICAL = "hierarchical"


class FlatScope(str, Enum):
    """Granularity of a flat-mode output unit."""

    ASSEMBLY = "assembly"
    NAMESPACE = "namespace"


def parameter_token(ref: TypeReference, qualified: bool = False) -> str:
    """Slug-friendly spelling of a parameter type.

    Generic argument lists are wrapped in underscores so that
    ``Foo(List<Int32>, String)`` and ``Foo(List<Int32, String>)`` stay apart;
    arrays, nullability and by-ref become words.
    """
    text = ref.name
    if qualified and not ref.is_generic_parameter:
        text = ref.full_name
    if ref.generic_arguments:
        args = " ".join(parameter_token(a, qualified) for a in ref.generic_arguments)
        text += f"_{args}_"
    if ref.nullable:
        text += " nullable"
    if ref.array_rank:
        text += " array" if ref.array_rank == 1 else f" array{ref.array_rank}"
    if ref.by_ref:
        text = f"ref {text}"
    return text


def member_slug(member: MemberDoc, qualified: bool = False) -> str:
    """Name, generic arity and parameter types of a member as one phrase."""
    name = member.name
    if member.generic_parameters:
        name += f"`{len(member.generic_parameters)}"
    params = " ".join(parameter_token(p.type, qualified) for p in member.parameters)
    return f"{name} {params}" if params else name


def member_signature(member: MemberDoc) -> MemberSignature:
    """Identity of a member among its owner's overloads."""
    return (
        member.owner_key,
        member.kind.value,
        member.name,
        len(member.generic_parameters),
        tuple(parameter_token(p.type, qualified=True) for p in member.parameters),
    )


@dataclass(frozen=True)
class TypeLocation:
    """Where a type is rendered: its unit path and an optional fragment."""

    path: str
    anchor: str | None = None

    @property
    def href(self) -> str:
        """Path plus fragment, if any."""
        return f"{self.path}#{self.anchor}" if self.anchor else self.path


@dataclass
class LayoutUnit:
    """One output unit: a document holding one or more types."""

    path: str
    title: str
    group: str  # navigation group: namespace, or assembly in flat-assembly mode
    type_keys: list[str] = field(default_factory=list)
    namespaces: list[str] = field(default_factory=list)


@dataclass
class Layout:
    """Deterministic mapping of every type onto an output location."""

    mode: LayoutMode
    units: list[LayoutUnit] = field(default_factory=list)
    locations: dict[str, TypeLocation] = field(default_factory=dict)
    member_anchors: dict[MemberSignature, str] = field(default_factory=dict)

    def location(self, key: str) -> TypeLocation | None:
        """Location of a type, or None if the type is not laid out."""
        return self.locations.get(key)

    def path_for(self, key: str) -> str:
        """Unit path of a type; KeyError for unknown keys."""
        return self.locations[key].path

    def anchor_for(self, key: str) -> str | None:
        """Fragment of a type inside its unit (None for a unit's primary type)."""
        return self.locations[key].anchor

    def member_anchor(self, member: MemberDoc) -> str:
        """Anchor of a member heading, unique across overloads within a unit."""
        anchor = self.member_anchors.get(member_signature(member))
        if anchor is not None:
            return anchor
        return header_slug(self.anchor_for(member.owner_key) or "", member_slug(member))
