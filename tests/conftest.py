"""Shared fixtures: a two-assembly sample library."""

import pytest

from dotnetdocs.build_model import build_model
from dotnetdocs.compute_layout import compute_layout
from dotnetdocs.cross_reference_resolver import CrossReferenceResolver
from dotnetdocs.doc_model import DocModel
from dotnetdocs.layout import Layout, LayoutMode
from dotnetdocs.symbol_facts import (
    AssemblyFacts,
    MemberFacts,
    MemberKind,
    ParameterFacts,
    TypeFacts,
    TypeKind,
)
from dotnetdocs.type_reference import TypeReference

STRING = TypeReference("String", "System")
INT = TypeReference("Int32", "System")
BOOL = TypeReference("Boolean", "System")
T = TypeReference.generic_parameter("T")

GET_DOC = """<member name="M:Acme.Widgets.Cache`1.Get(System.String,System.Boolean)">
  <summary>Gets the cached value for <paramref name="key"/>.</summary>
  <param name="key">The lookup key.</param>
  <param name="refresh">Whether to bypass the cache.</param>
  <returns>The cached value.</returns>
  <exception cref="T:System.ArgumentNullException">Thrown when key is null.</exception>
  <seealso cref="T:Acme.Widgets.CacheBase"/>
</member>"""


class OpaqueSymbol:
    """Stands in for a provider's symbol handle."""


@pytest.fixture
def core_facts() -> AssemblyFacts:
    """Acme.Core: generic and non-generic Cache, a nested type, an enum."""
    return AssemblyFacts(
        name="Acme.Core",
        version="1.0.0",
        types=[
            TypeFacts(
                kind=TypeKind.CLASS,
                name="Cache",
                namespace="Acme.Widgets",
                base_type=TypeReference("Object", "System"),
                documentation=(
                    "<summary>A non-generic cache. See "
                    '<see cref="T:Acme.Widgets.Cache`1"/>.</summary>'
                ),
            ),
            TypeFacts(
                kind=TypeKind.CLASS,
                name="Cache",
                namespace="Acme.Widgets",
                generic_parameters=["T"],
                base_type=TypeReference("CacheBase", "Acme.Widgets"),
                interfaces=[TypeReference("IDisposable", "System")],
                modifiers=["sealed"],
                documentation=(
                    "<summary>A typed cache.</summary>"
                    '<typeparam name="T">The cached value type.</typeparam>'
                ),
                symbol=OpaqueSymbol(),
            ),
            TypeFacts(
                kind=TypeKind.CLASS,
                name="CacheBase",
                namespace="Acme.Widgets",
                modifiers=["abstract"],
            ),
            TypeFacts(
                kind=TypeKind.STRUCT,
                name="Entry",
                namespace="Acme.Widgets",
                declaring_type_index=1,
            ),
            TypeFacts(kind=TypeKind.ENUM, name="Color", namespace="Acme.Widgets"),
            TypeFacts(kind=TypeKind.CLASS, name="Program", modifiers=["static"]),
        ],
        members=[
            MemberFacts(
                kind=MemberKind.CONSTRUCTOR,
                name=".ctor",
                owner_index=1,
                parameters=[ParameterFacts("capacity", INT)],
            ),
            MemberFacts(
                kind=MemberKind.METHOD,
                name="Get",
                owner_index=1,
                return_type=T,
                parameters=[
                    ParameterFacts("key", STRING),
                    ParameterFacts("refresh", BOOL),
                ],
                documentation=GET_DOC,
                symbol=OpaqueSymbol(),
            ),
            MemberFacts(
                kind=MemberKind.METHOD,
                name="Get",
                owner_index=1,
                return_type=T,
                parameters=[ParameterFacts("index", INT)],
            ),
            MemberFacts(
                kind=MemberKind.PROPERTY,
                name="Count",
                owner_index=1,
                return_type=INT,
            ),
            MemberFacts(
                kind=MemberKind.FIELD,
                name="Red",
                owner_index=4,
                constant_value="0",
            ),
            MemberFacts(
                kind=MemberKind.FIELD,
                name="Green",
                owner_index=4,
                constant_value="1",
            ),
            MemberFacts(
                kind=MemberKind.METHOD,
                name="Main",
                owner_index=5,
                modifiers=["static"],
            ),
        ],
    )


@pytest.fixture
def ext_facts() -> AssemblyFacts:
    """Acme.Extensions: contributes to Acme.Widgets and adds Acme.Hosting."""
    return AssemblyFacts(
        name="Acme.Extensions",
        version="1.0.0",
        types=[
            TypeFacts(
                kind=TypeKind.CLASS,
                name="CacheExtensions",
                namespace="Acme.Widgets",
                modifiers=["static"],
            ),
            TypeFacts(
                kind=TypeKind.CLASS,
                name="Host",
                namespace="Acme.Hosting",
                base_type=TypeReference("Cache", "Acme.Widgets"),
            ),
        ],
        members=[
            MemberFacts(
                kind=MemberKind.METHOD,
                name="Warm",
                owner_index=0,
                modifiers=["static"],
                parameters=[
                    ParameterFacts(
                        "cache",
                        TypeReference("Cache", "Acme.Widgets", generic_arguments=(T,)),
                    )
                ],
            ),
        ],
    )


@pytest.fixture
def model(core_facts: AssemblyFacts, ext_facts: AssemblyFacts) -> DocModel:
    """Merged model of both sample assemblies."""
    built, _ = build_model([core_facts, ext_facts])
    return built


@pytest.fixture
def layout(model: DocModel) -> Layout:
    """Hierarchical Markdown layout of the sample model."""
    return compute_layout(model, LayoutMode.HIERARCHICAL, extension=".md")


@pytest.fixture
def resolver(model: DocModel, layout: Layout) -> CrossReferenceResolver:
    """Resolver with the default framework URL templates."""
    return CrossReferenceResolver(model, layout)


@pytest.fixture
def get_doc() -> str:
    """XML comment of Cache<T>.Get(string, bool)."""
    return GET_DOC


@pytest.fixture
def shapes_facts() -> AssemblyFacts:
    """Acme.Shapes: an inherited member and extension methods on three targets."""
    shape = TypeReference("Shape", "Acme")
    circle = TypeReference("Circle", "Acme")

    def extension(name: str, owner: int, target: TypeReference) -> MemberFacts:
        return MemberFacts(
            kind=MemberKind.METHOD,
            name=name,
            owner_index=owner,
            modifiers=["static"],
            parameters=[ParameterFacts("target", target)],
            is_extension=True,
        )

    return AssemblyFacts(
        name="Acme.Shapes",
        types=[
            TypeFacts(kind=TypeKind.CLASS, name="Shape", namespace="Acme"),
            TypeFacts(
                kind=TypeKind.CLASS, name="Circle", namespace="Acme", base_type=shape
            ),
            TypeFacts(
                kind=TypeKind.CLASS,
                name="ShapeExtensions",
                namespace="Acme.Fluent",
                modifiers=["static"],
            ),
            TypeFacts(
                kind=TypeKind.CLASS,
                name="GeometryExtensions",
                namespace="Acme",
                modifiers=["static"],
            ),
            TypeFacts(
                kind=TypeKind.CLASS,
                name="StringExtensions",
                namespace="Acme",
                modifiers=["static"],
            ),
        ],
        members=[
            MemberFacts(kind=MemberKind.METHOD, name="Describe", owner_index=0),
            MemberFacts(
                kind=MemberKind.METHOD,
                name="Describe",
                owner_index=1,
                declaring_type=shape,
            ),
            MemberFacts(
                kind=MemberKind.METHOD,
                name="Area",
                owner_index=1,
                declaring_type=circle,
            ),
            extension("Scale", 2, shape),
            extension("Grow", 3, circle),
            MemberFacts(
                kind=MemberKind.METHOD, name="Unit", owner_index=3, modifiers=["static"]
            ),
            extension("Shout", 4, STRING),
        ],
    )
