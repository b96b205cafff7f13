"""Outcomes of resolving a type reference: internal anchor, external URL or text."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class GenericSyntax(Enum):
    """How generic argument lists are written in a given output."""

    ANGLE = ("<", ">")
    ESCAPED = ("&lt;", "&gt;")  # MDX prose, where a bare "<" opens a JSX tag
    BRACES = ("{", "}")

    @property
    def open(self) -> str:
        return self.value[0]

    @property
    def close(self) -> str:
        return self.value[1]


@dataclass(frozen=True, kw_only=True)
class Resolution:
    """Common display data carried by every resolution outcome.

    ``arguments`` holds the independently resolved generic arguments; array
    rank, nullability and by-ref only affect how the name is displayed.
    """

    display_name: str
    arguments: tuple[Resolution, ...] = ()
    array_rank: int = 0
    nullable: bool = False
    by_ref: bool = False

    @property
    def href(self) -> str | None:
        """Link target, or None when the reference renders as plain text."""
        return None

    @property
    def kind(self) -> str:
        """Short tag used by structured outputs."""
        return "unresolved"

    def format_display(self, syntax: GenericSyntax = GenericSyntax.ANGLE) -> str:
        """Render the display name with arguments and annotations."""
        text = self.display_name
        if self.arguments:
            args = ", ".join(a.format_display(syntax) for a in self.arguments)
            text += f"{syntax.open}{args}{syntax.close}"
        if self.nullable:
            text += "?"
        if self.array_rank:
            text += "[" + "," * (self.array_rank - 1) + "]"
        if self.by_ref:
            text = f"ref {text}"
        return text


@dataclass(frozen=True, kw_only=True)
class InternalAnchor(Resolution):
    """A type documented in this run; ``path`` is its unit, ``anchor`` a fragment."""

    path: str
    anchor: str | None = None

    @property
    def href(self) -> str:
        return f"{self.path}#{self.anchor}" if self.anchor else self.path

    @property
    def kind(self) -> str:
        return "internal"


@dataclass(frozen=True, kw_only=True)
class ExternalUrl(Resolution):
    """A type documented elsewhere, reachable by URL."""

    url: str

    @property
    def href(self) -> str:
        return self.url

    @property
    def kind(self) -> str:
        return "external"


@dataclass(frozen=True, kw_only=True)
class Unresolved(Resolution):
    """A type with no known target; rendered as plain text, never an error."""
