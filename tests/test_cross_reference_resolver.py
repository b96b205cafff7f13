"""Tests for resolving type references to links."""

from dotnetdocs.cross_reference_resolver import CrossReferenceResolver, learn_uid
from dotnetdocs.doc_comment import SeeAlso
from dotnetdocs.doc_model import DocModel
from dotnetdocs.layout import Layout
from dotnetdocs.resolution import (
    ExternalUrl,
    GenericSyntax,
    InternalAnchor,
    Unresolved,
)
from dotnetdocs.rewrite_xrefs import rewrite_xrefs
from dotnetdocs.type_reference import ReferenceOrigin, TypeReference

INT = TypeReference("Int32", "System")


def test_framework_type_links_to_learn(resolver: CrossReferenceResolver) -> None:
    """Verify System types resolve to learn.microsoft.com."""
    res = resolver.resolve(TypeReference("String", "System"))
    assert isinstance(res, ExternalUrl)
    assert res.href == "https://learn.microsoft.com/dotnet/api/system.string"
    assert res.kind == "external"


def test_generic_framework_type(resolver: CrossReferenceResolver) -> None:
    """Verify generic arity shows up in the learn uid and arguments resolve too."""
    ref = TypeReference("List", "System.Collections.Generic", generic_arguments=(INT,))
    res = resolver.resolve(ref)
    assert res.href == (
        "https://learn.microsoft.com/dotnet/api/system.collections.generic.list-1"
    )
    assert res.format_display() == "List<Int32>"
    assert isinstance(res.arguments[0], ExternalUrl)
    assert learn_uid(TypeReference("Outer", "Acme", containing_types=("A`1",))) == (
        "acme.a-1.outer"
    )


def test_internal_type_links_to_layout(resolver: CrossReferenceResolver) -> None:
    """Verify documented types resolve to their unit path."""
    res = resolver.resolve(TypeReference("CacheBase", "Acme.Widgets"))
    assert isinstance(res, InternalAnchor)
    assert res.href == "Acme/Widgets/CacheBase.md"


def test_internal_generic_with_argument(resolver: CrossReferenceResolver) -> None:
    """Verify Cache<List<int>> links to Cache<T> with an external argument."""
    inner = TypeReference(
        "List", "System.Collections.Generic", generic_arguments=(INT,)
    )
    ref = TypeReference("Cache", "Acme.Widgets", generic_arguments=(inner,))
    res = resolver.resolve(ref)
    assert isinstance(res, InternalAnchor)
    assert res.path == "Acme/Widgets/Cache-1.md"
    assert isinstance(res.arguments[0], ExternalUrl)
    assert res.format_display() == "Cache<List<Int32>>"
    assert res.format_display(GenericSyntax.ESCAPED) == (
        "Cache&lt;List&lt;Int32&gt;&gt;"
    )


def test_nested_type_resolves_to_anchor(resolver: CrossReferenceResolver) -> None:
    """Verify nested types resolve to a fragment in the outer unit."""
    ref = TypeReference("Entry", "Acme.Widgets", containing_types=("Cache`1",))
    res = resolver.resolve(ref)
    assert res.href == "Acme/Widgets/Cache-1.md#acme-widgets-cache-1_entry"
    assert res.display_name == "Cache.Entry"


def test_generic_parameter_is_unresolved(resolver: CrossReferenceResolver) -> None:
    """Verify generic parameters never become links."""
    res = resolver.resolve(TypeReference.generic_parameter("T"))
    assert isinstance(res, Unresolved)
    assert res.href is None
    assert res.display_name == "T"


def test_unknown_type_is_plain_text(resolver: CrossReferenceResolver) -> None:
    """Verify unknown third-party types fall back to text."""
    res = resolver.resolve(TypeReference("Widget", "ThirdParty", array_rank=1))
    assert isinstance(res, Unresolved)
    assert res.format_display() == "Widget[]"


def test_resolution_is_memoized(resolver: CrossReferenceResolver) -> None:
    """Verify equal references return the identical object."""
    a = resolver.resolve(TypeReference("String", "System"))
    b = resolver.resolve(
        TypeReference("String", "System").with_origin(ReferenceOrigin.EXTERNAL)
    )
    assert a is b


def test_longest_prefix_template_wins(model: DocModel, layout: Layout) -> None:
    """Verify the most specific namespace prefix picks the URL template."""
    resolver = CrossReferenceResolver(
        model,
        layout,
        {
            "System": "https://docs.example/{uid}",
            "System.Text": "https://text.example/{name}",
            "Vendor": "https://vendor.example/{full_name}",
        },
    )
    text = resolver.resolve(TypeReference("StringBuilder", "System.Text"))
    assert text.href == "https://text.example/StringBuilder"
    other = resolver.resolve(TypeReference("TextWriter", "System.IO"))
    assert other.href == "https://docs.example/system.io.textwriter"
    # "System" must not match "SystemX".
    assert resolver.resolve(TypeReference("Thing", "SystemX")).href is None
    assert resolver.resolve(TypeReference("Widget", "Vendor.Ui")).href == (
        "https://vendor.example/Vendor.Ui.Widget"
    )


def test_see_also_entries(resolver: CrossReferenceResolver) -> None:
    """Verify see-also references, labels and raw URLs."""
    plain = resolver.resolve_see_also(
        SeeAlso(reference=TypeReference("CacheBase", "Acme.Widgets"))
    )
    assert plain.href == "Acme/Widgets/CacheBase.md"
    labelled = resolver.resolve_see_also(
        SeeAlso(reference=TypeReference("String", "System"), text="strings")
    )
    assert labelled.format_display() == "strings"
    url = resolver.resolve_see_also(SeeAlso(url="https://example.com", text="Site"))
    assert isinstance(url, ExternalUrl)
    assert url.href == "https://example.com"
    assert url.display_name == "Site"


def test_origin_of(resolver: CrossReferenceResolver) -> None:
    """Verify internal/external classification."""
    assert resolver.origin_of(TypeReference("Cache", "Acme.Widgets")) is (
        ReferenceOrigin.INTERNAL
    )
    assert resolver.origin_of(TypeReference("String", "System")) is (
        ReferenceOrigin.EXTERNAL
    )
    assert resolver.origin_of(TypeReference.generic_parameter("T")) is None


def test_rewrite_xrefs(resolver: CrossReferenceResolver) -> None:
    """Verify inline xref tokens become links or code spans."""
    text = (
        "See <xref:Acme.Widgets.Cache`1>, <xref:Nope.Missing> and "
        "[Get](xref:Acme.Widgets.Cache`1)."
    )
    out = rewrite_xrefs(text, resolver.resolve_uid, lambda r: r.href)
    assert out == (
        "See [Cache<T>](Acme/Widgets/Cache-1.md), `Missing` and "
        "[Get](Acme/Widgets/Cache-1.md)."
    )
    escaped = rewrite_xrefs(
        "<xref:Acme.Widgets.Cache`1>",
        resolver.resolve_uid,
        lambda r: r.href,
        GenericSyntax.ESCAPED,
    )
    assert escaped == "[Cache&lt;T&gt;](Acme/Widgets/Cache-1.md)"
