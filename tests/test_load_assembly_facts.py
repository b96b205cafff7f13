"""Tests for loading per-assembly facts files."""

import json
from pathlib import Path

import pytest

from dotnetdocs.build_model import build_model
from dotnetdocs.doc_comment import DocComment
from dotnetdocs.errors import InvalidFactsError
from dotnetdocs.load_assembly_facts import (
    assembly_facts_from_dict,
    load_assembly_facts,
    load_facts_dir,
)
from dotnetdocs.merge_warning import WarningKind
from dotnetdocs.strip_yaml_mime_header import strip_yaml_mime_header, yaml_mime_kind
from dotnetdocs.symbol_facts import (
    Accessibility,
    MemberKind,
    TypeKind,
    UnreadableDocumentation,
)
from dotnetdocs.type_reference import TypeReference

CORE_YAML = """### YamlMime:AssemblyFacts
name: Acme.Core
version: 1.2.0
types:
  - kind: class
    name: Cache
    namespace: Acme.Widgets
    generic_parameters: [T]
    modifiers: [sealed]
    base_type: {name: CacheBase, namespace: Acme.Widgets}
    interfaces:
      - {name: IDisposable, namespace: System}
    documentation:
      xml: <summary>A typed cache.</summary>
  - kind: struct
    name: Entry
    namespace: Acme.Widgets
    declaring_type_index: 0
members:
  - kind: method
    name: Get
    owner_index: 0
    return_type: {name: T, generic_parameter: true}
    parameters:
      - name: key
        type: {name: String, namespace: System}
      - name: retries
        type: {name: Int32, namespace: System}
        is_optional: true
        default_value: 3
    documentation:
      summary: Gets a value.
      parameters:
        - {name: key, description: The key.}
      exceptions:
        - {cref: "T:System.ArgumentNullException", condition: key is null.}
      see_also:
        - {url: "https://example.com", text: Guide}
  - kind: field
    name: Secret
    owner_index: 0
    accessibility: private
    constant_value: 42
"""


def test_load_yaml_with_mime_header(tmp_path: Path) -> None:
    """Verify a YAML facts file with a MIME header loads completely."""
    path = tmp_path / "Acme.Core.yml"
    path.write_text(CORE_YAML, encoding="utf-8")
    facts = load_assembly_facts(path)
    assert facts.name == "Acme.Core"
    assert facts.version == "1.2.0"

    cache, entry = facts.types
    assert cache.kind is TypeKind.CLASS
    assert cache.generic_parameters == ["T"]
    assert cache.base_type == TypeReference("CacheBase", "Acme.Widgets")
    assert cache.documentation == "<summary>A typed cache.</summary>"
    assert entry.declaring_type_index == 0

    get, secret = facts.members
    assert get.kind is MemberKind.METHOD
    assert get.return_type.is_generic_parameter
    assert get.parameters[1].is_optional
    assert get.parameters[1].default_value == "3"
    assert isinstance(get.documentation, DocComment)
    assert get.documentation.param("key") == "The key."
    exc = get.documentation.exceptions[0]
    assert exc.type == TypeReference("ArgumentNullException", "System")
    assert get.documentation.see_also[0].url == "https://example.com"
    assert secret.accessibility is Accessibility.PRIVATE
    assert secret.constant_value == "42"


def test_load_json(tmp_path: Path) -> None:
    """Verify JSON facts files load through the same path."""
    path = tmp_path / "Acme.Extensions.json"
    path.write_text(
        json.dumps(
            {
                "name": "Acme.Extensions",
                "types": [
                    {"kind": "interface", "name": "IWarmable", "namespace": "Acme"}
                ],
            }
        ),
        encoding="utf-8",
    )
    facts = load_assembly_facts(path)
    assert facts.name == "Acme.Extensions"
    assert facts.types[0].kind is TypeKind.INTERFACE
    assert facts.members == []


def test_name_falls_back_to_file_stem() -> None:
    """Verify a document without a name takes the fallback."""
    facts = assembly_facts_from_dict({"types": []}, "Fallback")
    assert facts.name == "Fallback"


def test_wrong_mime_kind_raises(tmp_path: Path) -> None:
    """Verify files declaring another MIME kind are rejected."""
    path = tmp_path / "toc.yml"
    path.write_text("### YamlMime:TableOfContent\n- name: x\n", encoding="utf-8")
    with pytest.raises(InvalidFactsError):
        load_assembly_facts(path)


@pytest.mark.parametrize(
    "doc",
    [
        {"types": [{"kind": "module", "name": "A"}]},
        {"types": [{"kind": "class"}]},
        {"types": [{"name": "A"}], "members": [{"kind": "method", "name": "M"}]},
        {"types": [{"name": "A", "declaring_type_index": "0"}]},
        {"types": "not a list"},
        {"types": [{"name": "A", "base_type": {"namespace": "System"}}]},
        {"types": [{"name": "A", "base_type": {"name": "B", "array_rank": "many"}}]},
        {"types": [{"name": "A", "base_type": {"name": "B", "array_rank": -1}}]},
    ],
)
def test_invalid_documents_raise(doc: dict) -> None:
    """Verify structural problems raise InvalidFactsError naming the assembly."""
    with pytest.raises(InvalidFactsError) as exc:
        assembly_facts_from_dict({"name": "Broken", **doc}, "fallback")
    assert exc.value.assembly == "Broken"


def test_non_mapping_file_raises(tmp_path: Path) -> None:
    """Verify a facts file that is not a mapping is rejected."""
    path = tmp_path / "bad.yml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(InvalidFactsError):
        load_assembly_facts(path)


def test_load_facts_dir_sorted(tmp_path: Path) -> None:
    """Verify directory loading picks facts files in name order."""
    (tmp_path / "b.yml").write_text("name: B\n", encoding="utf-8")
    (tmp_path / "a.json").write_text('{"name": "A"}', encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")
    facts = load_facts_dir(tmp_path)
    assert [f.name for f in facts] == ["A", "B"]
    assert [f.name for f in load_facts_dir(tmp_path / "b.yml")] == ["B"]


def test_strip_yaml_mime_header() -> None:
    """Verify the MIME header line is removed and its kind reported."""
    text = "### YamlMime:AssemblyFacts\nname: A\n"
    assert strip_yaml_mime_header(text) == "name: A"
    assert yaml_mime_kind(text) == "AssemblyFacts"
    assert yaml_mime_kind("name: A\n") is None
    assert strip_yaml_mime_header("name: A\n") == "name: A\n"


@pytest.mark.parametrize(
    "documentation",
    [
        {"summary": "x", "exceptions": [{"condition": "c"}]},
        {"see_also": [{"reference": {"namespace": "Acme"}}]},
        {"parameters": "x"},
        {"remarks": 7},
        42,
    ],
)
def test_unreadable_documentation_degrades(documentation: object) -> None:
    """Verify a broken doc block keeps its type and becomes a warning."""
    facts = assembly_facts_from_dict(
        {
            "name": "Docs",
            "types": [
                {"name": "Bad", "namespace": "Acme", "documentation": documentation},
                {"name": "Good", "namespace": "Acme", "documentation": {}},
            ],
        },
        "fallback",
    )
    assert isinstance(facts.types[0].documentation, UnreadableDocumentation)

    model, warnings = build_model([facts])
    assert model.type("Acme.Bad").documentation.is_empty
    assert model.type("Acme.Good") is not None
    assert [w.kind for w in warnings] == [WarningKind.MALFORMED_DOCUMENTATION]
    assert warnings[0].key == "Acme.Bad"


def test_member_origin_fields() -> None:
    """Verify declaring types and extension flags are read from members."""
    facts = assembly_facts_from_dict(
        {
            "types": [{"name": "Circle", "namespace": "Acme"}],
            "members": [
                {
                    "kind": "method",
                    "name": "Describe",
                    "owner_index": 0,
                    "declaring_type": {"name": "Shape", "namespace": "Acme"},
                },
                {
                    "kind": "method",
                    "name": "Grow",
                    "owner_index": 0,
                    "is_extension": True,
                    "parameters": [{"name": "c", "type": {"name": "Circle"}}],
                },
            ],
        },
        "Shapes",
    )
    describe, grow = facts.members
    assert describe.declaring_type == TypeReference("Shape", "Acme")
    assert not describe.is_extension
    assert grow.is_extension
    assert grow.declaring_type is None
