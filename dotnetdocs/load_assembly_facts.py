"""Logic for loading per-assembly symbol facts files (YAML or JSON)."""

import logging
from collections.abc import Callable
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

import yaml

from dotnetdocs.doc_comment import (
    CodeExample,
    DocComment,
    ExceptionDoc,
    ParamDoc,
    SeeAlso,
)
from dotnetdocs.errors import InvalidFactsError
from dotnetdocs.strip_yaml_mime_header import strip_yaml_mime_header, yaml_mime_kind
from dotnetdocs.symbol_facts import (
    Accessibility,
    AssemblyFacts,
    MemberFacts,
    MemberKind,
    ParameterFacts,
    RawDocumentation,
    TypeFacts,
    TypeKind,
    UnreadableDocumentation,
)
from dotnetdocs.type_reference import TypeReference

logger = logging.getLogger(__name__)

FACTS_MIME = "AssemblyFacts"
FACTS_SUFFIXES = (".yml", ".yaml", ".json")

E = TypeVar("E", bound=Enum)


class _Reader:
    """Converts one parsed document, reporting errors against its assembly."""

    def __init__(self, assembly: str) -> None:
        self.assembly = assembly

    def fail(self, detail: str) -> InvalidFactsError:
        return InvalidFactsError(self.assembly, detail)

    def enum(self, cls: type[E], value: Any, where: str) -> E:
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(str(m.value) for m in cls)
            msg = f"{where}: {value!r} is not one of {allowed}"
            raise self.fail(msg) from None

    def mapping(self, data: Any, where: str) -> dict[str, Any]:
        if not isinstance(data, dict):
            msg = f"{where} must be a mapping"
            raise self.fail(msg)
        return data

    def items(
        self, data: dict[str, Any], key: str, convert: Callable[[Any, str], Any]
    ) -> list[Any]:
        values = data.get(key) or []
        if not isinstance(values, list):
            msg = f"'{key}' must be a list"
            raise self.fail(msg)
        return [convert(v, f"{key}[{i}]") for i, v in enumerate(values)]

    def ref(self, data: Any, where: str) -> TypeReference | None:
        """A type reference mapping: name, namespace, generic_arguments, ..."""
        if data is None:
            return None
        data = self.mapping(data, where)
        if not data.get("name"):
            msg = f"{where}: type reference needs a name"
            raise self.fail(msg)
        args = tuple(
            self.ref(a, f"{where}.generic_arguments[{i}]")
            for i, a in enumerate(data.get("generic_arguments") or [])
        )
        return TypeReference(
            name=str(data["name"]),
            namespace=str(data.get("namespace") or ""),
            containing_types=tuple(str(c) for c in data.get("containing_types") or []),
            generic_arguments=args,
            array_rank=self.rank(data.get("array_rank"), where),
            nullable=bool(data.get("nullable", False)),
            by_ref=bool(data.get("by_ref", False)),
            is_generic_parameter=bool(data.get("generic_parameter", False)),
        )

    def rank(self, value: Any, where: str) -> int:
        try:
            rank = int(value or 0)
        except (TypeError, ValueError):
            rank = -1
        if rank < 0 or isinstance(value, bool):
            msg = f"{where}: array_rank must be a non-negative integer"
            raise self.fail(msg) from None
        return rank

    def required_ref(self, data: Any, where: str) -> TypeReference:
        ref = self.ref(data, where)
        if ref is None:
            msg = f"{where}: missing type"
            raise self.fail(msg)
        return ref

    def param_doc(self, data: Any, where: str) -> ParamDoc:
        data = self.mapping(data, where)
        return ParamDoc(str(data.get("name", "")), str(data.get("description", "")))

    def exception(self, data: Any, where: str) -> ExceptionDoc:
        data = self.mapping(data, where)
        if data.get("cref"):
            exc_type = TypeReference.parse(str(data["cref"]))
        else:
            exc_type = self.required_ref(data.get("type"), where)
        return ExceptionDoc(exc_type, str(data.get("condition", "")))

    def example(self, data: Any, where: str) -> CodeExample:
        if isinstance(data, str):
            return CodeExample(code=data)
        data = self.mapping(data, where)
        code = str(data.get("code", ""))
        return CodeExample(code=code, language=data.get("language"))

    def see_also(self, data: Any, where: str) -> SeeAlso:
        data = self.mapping(data, where)
        reference = self.ref(data.get("reference"), where)
        if reference is None and data.get("cref"):
            reference = TypeReference.parse(str(data["cref"]))
        return SeeAlso(
            reference=reference, url=data.get("url"), text=str(data.get("text", ""))
        )

    def documentation(self, data: Any, where: str) -> RawDocumentation:
        """Structured sections, or ``{xml: ...}``/a bare string for raw XML.

        A block that cannot be read comes back as UnreadableDocumentation so
        the builder can degrade it without losing the type or member.
        """
        if data is None or isinstance(data, str):
            return data
        try:
            return self.doc_comment(data, where)
        except InvalidFactsError as e:
            logger.debug("Unreadable documentation at %s: %s", where, e.detail)
            return UnreadableDocumentation(e.detail)

    def doc_comment(self, data: Any, where: str) -> DocComment | str:
        data = self.mapping(data, where)
        if "xml" in data:
            return str(data["xml"] or "")
        remarks = data.get("remarks") or []
        if isinstance(remarks, str):
            remarks = [remarks]
        if not isinstance(remarks, list):
            msg = f"{where}.remarks must be text or a list"
            raise self.fail(msg)
        return DocComment(
            summary=str(data.get("summary", "")),
            remarks=[str(r) for r in remarks],
            parameters=self.items(data, "parameters", self.param_doc),
            type_parameters=self.items(data, "type_parameters", self.param_doc),
            returns=str(data.get("returns", "")),
            value=str(data.get("value", "")),
            exceptions=self.items(data, "exceptions", self.exception),
            examples=self.items(data, "examples", self.example),
            see_also=self.items(data, "see_also", self.see_also),
        )

    def parameter(self, data: Any, where: str) -> ParameterFacts:
        data = self.mapping(data, where)
        default = data.get("default_value")
        return ParameterFacts(
            name=str(data.get("name", "")),
            type=self.required_ref(data.get("type"), where),
            is_optional=bool(data.get("is_optional", False)),
            default_value=None if default is None else str(default),
        )

    def type_facts(self, data: Any, where: str) -> TypeFacts:
        data = self.mapping(data, where)
        if not data.get("name"):
            msg = f"{where}: type needs a name"
            raise self.fail(msg)
        declaring = data.get("declaring_type_index")
        if declaring is not None and (
            not isinstance(declaring, int) or isinstance(declaring, bool)
        ):
            msg = f"{where}: declaring_type_index must be an integer"
            raise self.fail(msg)
        return TypeFacts(
            kind=self.enum(TypeKind, data.get("kind", "class"), f"{where}.kind"),
            name=str(data["name"]),
            namespace=str(data.get("namespace") or ""),
            accessibility=self.enum(
                Accessibility,
                data.get("accessibility", "public"),
                f"{where}.accessibility",
            ),
            generic_parameters=[str(g) for g in data.get("generic_parameters") or []],
            base_type=self.ref(data.get("base_type"), f"{where}.base_type"),
            interfaces=self.items(data, "interfaces", self.required_ref),
            modifiers=[str(m) for m in data.get("modifiers") or []],
            documentation=self.documentation(
                data.get("documentation"), f"{where}.documentation"
            ),
            declaring_type_index=declaring,
            is_forwarder=bool(data.get("is_forwarder", False)),
            parameters=self.items(data, "parameters", self.parameter),
            return_type=self.ref(data.get("return_type"), f"{where}.return_type"),
            symbol=data.get("symbol"),
        )

    def member_facts(self, data: Any, where: str) -> MemberFacts:
        data = self.mapping(data, where)
        owner = data.get("owner_index")
        if not isinstance(owner, int) or isinstance(owner, bool):
            msg = f"{where}: owner_index must be an integer"
            raise self.fail(msg)
        constant = data.get("constant_value")
        return MemberFacts(
            kind=self.enum(MemberKind, data.get("kind"), f"{where}.kind"),
            name=str(data.get("name", "")),
            owner_index=owner,
            return_type=self.ref(data.get("return_type"), f"{where}.return_type"),
            parameters=self.items(data, "parameters", self.parameter),
            accessibility=self.enum(
                Accessibility,
                data.get("accessibility", "public"),
                f"{where}.accessibility",
            ),
            modifiers=[str(m) for m in data.get("modifiers") or []],
            generic_parameters=[str(g) for g in data.get("generic_parameters") or []],
            constant_value=None if constant is None else str(constant),
            documentation=self.documentation(
                data.get("documentation"), f"{where}.documentation"
            ),
            declaring_type=self.ref(
                data.get("declaring_type"), f"{where}.declaring_type"
            ),
            is_extension=bool(data.get("is_extension", False)),
            symbol=data.get("symbol"),
        )


def assembly_facts_from_dict(doc: dict[str, Any], fallback_name: str) -> AssemblyFacts:
    """Convert a parsed facts document into AssemblyFacts."""
    name = str(doc.get("name") or fallback_name)
    reader = _Reader(name)
    return AssemblyFacts(
        name=name,
        version=str(doc.get("version") or ""),
        types=reader.items(doc, "types", reader.type_facts),
        members=reader.items(doc, "members", reader.member_facts),
    )


def load_assembly_facts(path: Path) -> AssemblyFacts:
    """Load and parse one facts file; JSON is read as the YAML subset it is."""
    text = path.read_text(encoding="utf-8")
    kind = yaml_mime_kind(text)
    if kind is not None and kind != FACTS_MIME:
        msg = f"unexpected YamlMime '{kind}'"
        raise InvalidFactsError(path.stem, msg)
    try:
        doc = yaml.safe_load(strip_yaml_mime_header(text))
    except yaml.YAMLError as e:
        msg = f"cannot parse {path.name}: {e}"
        raise InvalidFactsError(path.stem, msg) from e
    if not isinstance(doc, dict):
        msg = f"{path.name} does not hold a facts mapping"
        raise InvalidFactsError(path.stem, msg)
    return assembly_facts_from_dict(doc, path.stem)


def load_facts_dir(path: Path) -> list[AssemblyFacts]:
    """Load every facts file in a directory, in file name order.

    A single file path is accepted too.
    """
    if path.is_file():
        return [load_assembly_facts(path)]
    files = sorted(
        p for p in path.iterdir() if p.is_file() and p.suffix.lower() in FACTS_SUFFIXES
    )
    logger.info("Loading %d facts files from %s", len(files), path)
    return [load_assembly_facts(p) for p in files]
