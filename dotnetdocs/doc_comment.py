"""Data models for parsed XML documentation comments."""

from dataclasses import dataclass, field

from dotnetdocs.type_reference import TypeReference


@dataclass
class ParamDoc:
    """Description of a parameter or generic type parameter."""

    name: str
    description: str


@dataclass
class ExceptionDoc:
    """An exception a member may raise, with the triggering condition."""

    type: TypeReference
    condition: str


@dataclass
class CodeExample:
    """One code block from an ``<example>`` section."""

    code: str
    language: str | None = None


@dataclass
class SeeAlso:
    """A see-also entry: either a type reference or a raw URL."""

    reference: TypeReference | None = None
    url: str | None = None
    text: str = ""


@dataclass
class DocComment:
    """All documentation sections attached to a type or member.

    Prose fields may contain ``<xref:UID>`` tokens for inline references; they
    are resolved at render time.
    """

    summary: str = ""
    remarks: list[str] = field(default_factory=list)  # paragraphs
    parameters: list[ParamDoc] = field(default_factory=list)
    type_parameters: list[ParamDoc] = field(default_factory=list)
    returns: str = ""
    value: str = ""
    exceptions: list[ExceptionDoc] = field(default_factory=list)
    examples: list[CodeExample] = field(default_factory=list)
    see_also: list[SeeAlso] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "DocComment":
        """Return a comment with every section empty."""
        return cls()

    @property
    def is_empty(self) -> bool:
        """True when no section carries content."""
        return self == DocComment()

    def param(self, name: str) -> str:
        """Return the description for a parameter, or an empty string."""
        for p in self.parameters:
            if p.name == name:
                return p.description
        return ""

    def type_param(self, name: str) -> str:
        """Return the description for a generic type parameter."""
        for p in self.type_parameters:
            if p.name == name:
                return p.description
        return ""
