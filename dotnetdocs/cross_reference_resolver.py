"""Resolve type references to internal anchors, external URLs or plain text."""

import logging
import threading
from dataclasses import replace

from dotnetdocs.doc_comment import SeeAlso
from dotnetdocs.doc_model import DocModel
from dotnetdocs.layout import Layout
from dotnetdocs.resolution import (
    ExternalUrl,
    InternalAnchor,
    Resolution,
    Unresolved,
)
from dotnetdocs.type_key import split_arity
from dotnetdocs.type_reference import ReferenceOrigin, TypeReference

logger = logging.getLogger(__name__)

LEARN_URL = "https://learn.microsoft.com/dotnet/api/{uid}"
FRAMEWORK_PREFIXES = ("System", "Microsoft", "Windows")
DEFAULT_EXTERNAL_TEMPLATES = {prefix: LEARN_URL for prefix in FRAMEWORK_PREFIXES}


def learn_uid(ref: TypeReference) -> str:
    """Lower-cased learn.microsoft.com id: ``system.collections.generic.list-1``."""
    return ref.lookup_key.lower().replace("`", "-").replace("+", ".")


class CrossReferenceResolver:
    """Maps TypeReferences to Resolutions against one model and layout.

    Results are memoized on the reference's structural value, so equal
    references always yield the identical Resolution object within a run.
    """

    def __init__(
        self,
        model: DocModel,
        layout: Layout,
        external_templates: dict[str, str] | None = None,
    ) -> None:
        self.model = model
        self.layout = layout
        templates = (
            DEFAULT_EXTERNAL_TEMPLATES
            if external_templates is None
            else external_templates
        )
        # Longest prefix first so "System.Text" beats "System".
        self._templates = sorted(
            templates.items(), key=lambda kv: (-len(kv[0]), kv[0])
        )
        self._cache: dict[TypeReference, Resolution] = {}
        self._lock = threading.Lock()

    def resolve(self, ref: TypeReference) -> Resolution:
        """Resolve a reference, recursing into its generic arguments."""
        with self._lock:
            cached = self._cache.get(ref)
        if cached is not None:
            return cached

        result = self._resolve(ref)
        with self._lock:
            # setdefault keeps the first stored object if another thread won.
            return self._cache.setdefault(ref, result)

    def resolve_uid(self, uid: str) -> Resolution:
        """Resolve an inline ``cref``/xref uid such as ``T:Acme.Cache`1``."""
        return self.resolve(TypeReference.parse(uid))

    def resolve_see_also(self, entry: SeeAlso) -> Resolution:
        """Resolve a see-also entry; raw URLs become ExternalUrl targets."""
        if entry.reference is not None:
            res = self.resolve(entry.reference)
            if entry.text:
                return replace(res, display_name=entry.text, arguments=())
            return res
        if entry.url:
            return ExternalUrl(url=entry.url, display_name=entry.text or entry.url)
        return Unresolved(display_name=entry.text)

    def origin_of(self, ref: TypeReference) -> ReferenceOrigin | None:
        """INTERNAL/EXTERNAL classification; None for generic parameters."""
        if ref.is_generic_parameter:
            return None
        if ref.lookup_key in self.model.types:
            return ReferenceOrigin.INTERNAL
        return ReferenceOrigin.EXTERNAL

    def _resolve(self, ref: TypeReference) -> Resolution:
        annotations = {
            "array_rank": ref.array_rank,
            "nullable": ref.nullable,
            "by_ref": ref.by_ref,
        }
        if ref.is_generic_parameter:
            return Unresolved(display_name=ref.name, **annotations)

        args = tuple(self.resolve(a) for a in ref.generic_arguments)
        outer = [split_arity(c)[0] for c in ref.containing_types]
        display = ".".join([*outer, ref.name])

        location = self.layout.location(ref.lookup_key)
        if location is not None:
            return InternalAnchor(
                path=location.path,
                anchor=location.anchor,
                display_name=display,
                arguments=args,
                **annotations,
            )

        url = self._external_url(ref)
        if url is not None:
            return ExternalUrl(
                url=url, display_name=display, arguments=args, **annotations
            )

        logger.debug("No target for %s", ref.lookup_key)
        return Unresolved(display_name=display, arguments=args, **annotations)

    def _external_url(self, ref: TypeReference) -> str | None:
        for prefix, template in self._templates:
            if not _in_namespace(ref.namespace, prefix):
                continue
            return template.format(
                name=ref.name,
                arity=ref.arity,
                namespace=ref.namespace,
                full_name=ref.full_name,
                uid=learn_uid(ref),
            )
        return None


def _in_namespace(namespace: str, prefix: str) -> bool:
    if not prefix:
        return True
    return namespace == prefix or namespace.startswith(f"{prefix}.")

