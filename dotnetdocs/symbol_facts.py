"""Input records supplied by the metadata/XML-comment provider, one set per assembly."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from dotnetdocs.doc_comment import DocComment
from dotnetdocs.type_reference import TypeReference


class TypeKind(str, Enum):
    """Closed set of documented type kinds."""

    CLASS = "class"
    INTERFACE = "interface"
    STRUCT = "struct"
    ENUM = "enum"
    DELEGATE = "delegate"


class MemberKind(str, Enum):
    """Kinds of members a type can declare."""

    CONSTRUCTOR = "constructor"
    FIELD = "field"
    PROPERTY = "property"
    METHOD = "method"
    EVENT = "event"
    OPERATOR = "operator"


class Accessibility(str, Enum):
    """Declared accessibility, using C# keywords as values."""

    PUBLIC = "public"
    PROTECTED = "protected"
    INTERNAL = "internal"
    PROTECTED_INTERNAL = "protected internal"
    PRIVATE_PROTECTED = "private protected"
    PRIVATE = "private"


@dataclass(frozen=True)
class UnreadableDocumentation:
    """A structured documentation block that could not be read."""

    detail: str


# Documentation as supplied: already parsed, raw XML, unreadable, or absent.
RawDocumentation = DocComment | str | UnreadableDocumentation | None


@dataclass
class ParameterFacts:
    """A parameter of a method, constructor, operator or delegate."""

    name: str
    type: TypeReference
    is_optional: bool = False
    default_value: str | None = None


@dataclass
class TypeFacts:
    """A type declared by an assembly."""

    kind: TypeKind
    name: str
    namespace: str = ""
    accessibility: Accessibility = Accessibility.PUBLIC
    generic_parameters: list[str] = field(default_factory=list)
    base_type: TypeReference | None = None
    interfaces: list[TypeReference] = field(default_factory=list)
    modifiers: list[str] = field(default_factory=list)  # abstract/sealed/static
    documentation: RawDocumentation = None
    declaring_type_index: int | None = None  # index into AssemblyFacts.types
    is_forwarder: bool = False  # type-forward or partial stub
    parameters: list[ParameterFacts] = field(default_factory=list)  # delegates
    return_type: TypeReference | None = None  # delegates
    symbol: Any = None  # opaque provider handle


@dataclass
class MemberFacts:
    """A member declared by one of the assembly's types."""

    kind: MemberKind
    name: str
    owner_index: int  # index into AssemblyFacts.types
    return_type: TypeReference | None = None
    parameters: list[ParameterFacts] = field(default_factory=list)
    accessibility: Accessibility = Accessibility.PUBLIC
    modifiers: list[str] = field(default_factory=list)  # static/virtual/...
    generic_parameters: list[str] = field(default_factory=list)
    constant_value: str | None = None  # enum members and const fields
    documentation: RawDocumentation = None
    declaring_type: TypeReference | None = None  # base type of an inherited member
    is_extension: bool = False  # first parameter carries "this"
    symbol: Any = None


@dataclass
class AssemblyFacts:
    """Everything the provider extracted from one compiled assembly."""

    name: str
    version: str = ""
    types: list[TypeFacts] = field(default_factory=list)
    members: list[MemberFacts] = field(default_factory=list)
