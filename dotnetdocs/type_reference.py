"""Structured, resolvable descriptors of the types a declaration mentions."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from enum import Enum

from dotnetdocs.type_key import split_arity, type_key

ARRAY_SUFFIX_RE = re.compile(r"\[(,*)\]$")


class ReferenceOrigin(str, Enum):
    """Where a reference points once it has been checked against the model."""

    INTERNAL = "internal"
    EXTERNAL = "external"


@dataclass(frozen=True)
class TypeReference:
    """A pointer to a type, possibly generic, array, nullable or by-ref."""

    name: str
    namespace: str = ""
    containing_types: tuple[str, ...] = ()  # outermost first, "Outer`1" style
    generic_arguments: tuple[TypeReference, ...] = ()
    array_rank: int = 0
    nullable: bool = False
    by_ref: bool = False
    is_generic_parameter: bool = False
    origin: ReferenceOrigin | None = field(default=None, compare=False)

    @property
    def arity(self) -> int:
        """Number of generic arguments."""
        return len(self.generic_arguments)

    @property
    def lookup_key(self) -> str:
        """The type key this reference matches in the model's type index."""
        return type_key(self.namespace, self.containing_types, self.name, self.arity)

    @property
    def full_name(self) -> str:
        """Dotted name without arity markers, e.g. ``Acme.Outer.Inner``."""
        parts = [split_arity(c)[0] for c in self.containing_types]
        parts.append(self.name)
        dotted = ".".join(parts)
        return f"{self.namespace}.{dotted}" if self.namespace else dotted

    @property
    def is_nested(self) -> bool:
        """True when the referenced type is declared inside another type."""
        return bool(self.containing_types)

    def with_origin(self, origin: ReferenceOrigin) -> TypeReference:
        """Return a copy tagged with its origin; equality is unaffected."""
        return replace(self, origin=origin)

    def element_type(self) -> TypeReference:
        """Strip array, nullable and by-ref wrappers."""
        return replace(self, array_rank=0, nullable=False, by_ref=False)

    @classmethod
    def generic_parameter(cls, name: str) -> TypeReference:
        """Reference to a generic parameter such as ``T``."""
        return cls(name=name, is_generic_parameter=True)

    @classmethod
    def parse(cls, uid: str) -> TypeReference:
        """Parse a documentation-id style uid.

        Accepts ``T:Acme.Widgets.Cache`1``, ``Acme.Outer+Inner`` and trailing
        array markers (``System.String[]``). Generic arity becomes
        placeholder generic parameters.
        """
        text = uid.strip()
        prefix, sep, rest = text.partition(":")
        if sep and len(prefix) == 1:
            text = rest

        rank = 0
        m = ARRAY_SUFFIX_RE.search(text)
        if m:
            rank = len(m.group(1)) + 1
            text = text[: m.start()]

        segments = text.split("+")
        namespace, _, outer = segments[0].rpartition(".")
        nested = [outer, *segments[1:]]
        name, arity = split_arity(nested[-1])
        if arity == 1:
            args = (cls.generic_parameter("T"),)
        else:
            args = tuple(cls.generic_parameter(f"T{i + 1}") for i in range(arity))
        return cls(
            name=name,
            namespace=namespace,
            containing_types=tuple(nested[:-1]),
            generic_arguments=args,
            array_rank=rank,
        )
