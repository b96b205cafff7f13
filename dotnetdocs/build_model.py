"""Merge per-assembly symbol facts into one documentation graph."""

import logging
from collections.abc import Collection, Sequence
from dataclasses import replace

from dotnetdocs.doc_comment import DocComment
from dotnetdocs.doc_model import (
    AssemblyDoc,
    DocModel,
    MemberDoc,
    NamespaceDoc,
    ParameterDoc,
    TypeDoc,
)
from dotnetdocs.errors import InvalidFactsError, MalformedDocumentationError
from dotnetdocs.merge_warning import (
    MergeOutcome,
    MergeRecord,
    MergeWarning,
    WarningKind,
)
from dotnetdocs.parse_doc_comment import parse_doc_comment
from dotnetdocs.symbol_facts import (
    Accessibility,
    AssemblyFacts,
    MemberKind,
    ParameterFacts,
    RawDocumentation,
    UnreadableDocumentation,
)
from dotnetdocs.type_key import type_key
from dotnetdocs.type_reference import ReferenceOrigin, TypeReference

logger = logging.getLogger(__name__)

CTOR_NAMES = {".ctor", "#ctor", ".cctor"}


def build_model(
    assemblies: Sequence[AssemblyFacts],
    *,
    included: Collection[Accessibility] | None = None,
    relocate_extensions: bool = True,
) -> tuple[DocModel, list[MergeWarning]]:
    """Build the merged model from assemblies, in the order supplied.

    Raises InvalidFactsError before anything is merged when any assembly's facts
    are inconsistent. Everything else degrades to a recorded warning.

    When ``included`` is given, types and members with any other accessibility
    are left out, along with everything nested inside an excluded type.

    With ``relocate_extensions``, extension methods move onto the documented
    type they extend; a static class left empty by the move is dropped.
    """
    for facts in assemblies:
        _validate(facts)

    model = DocModel()
    warnings: list[MergeWarning] = []
    for facts in assemblies:
        _merge_assembly(model, facts, warnings, included)
    if relocate_extensions:
        _relocate_extension_methods(model)
    _link_types(model)

    logger.info(
        "Merged %d assemblies into %d namespaces and %d types (%d warnings)",
        len(model.assemblies),
        len(model.namespaces),
        len(model.types),
        len(warnings),
    )
    return model, warnings


def _validate(facts: AssemblyFacts) -> None:
    count = len(facts.types)
    for i, t in enumerate(facts.types):
        idx = t.declaring_type_index
        if idx is None:
            continue
        if not 0 <= idx < count or idx == i:
            msg = f"type '{t.name}' has invalid declaring type index {idx}"
            raise InvalidFactsError(facts.name, msg)
        # Walk up the declaring chain to reject cycles.
        seen = {i}
        while idx is not None:
            if idx in seen:
                msg = f"type '{t.name}' is nested inside itself"
                raise InvalidFactsError(facts.name, msg)
            seen.add(idx)
            idx = facts.types[idx].declaring_type_index
    for m in facts.members:
        if not 0 <= m.owner_index < count:
            msg = f"member '{m.name}' references missing owner index {m.owner_index}"
            raise InvalidFactsError(facts.name, msg)


def _excluded_types(
    facts: AssemblyFacts, included: Collection[Accessibility] | None
) -> set[int]:
    """Indices of types filtered out by accessibility, directly or via nesting."""
    if included is None:
        return set()
    excluded: set[int] = set()
    for i in range(len(facts.types)):
        idx: int | None = i
        while idx is not None:
            if facts.types[idx].accessibility not in included:
                excluded.add(i)
                break
            idx = facts.types[idx].declaring_type_index
    return excluded


def _type_keys(facts: AssemblyFacts) -> list[tuple[str, tuple[str, ...]]]:
    """Compute (key, containing_types) for every type index."""
    cache: dict[int, tuple[str, tuple[str, ...]]] = {}

    def key_for(i: int) -> tuple[str, tuple[str, ...]]:
        if i in cache:
            return cache[i]
        t = facts.types[i]
        arity = len(t.generic_parameters)
        if t.declaring_type_index is None:
            result = (type_key(t.namespace, (), t.name, arity), ())
        else:
            outer_key, outer_containing = key_for(t.declaring_type_index)
            outer = facts.types[t.declaring_type_index]
            outer_token = outer.name
            if outer.generic_parameters:
                outer_token += f"`{len(outer.generic_parameters)}"
            containing = (*outer_containing, outer_token)
            result = (type_key(t.namespace, containing, t.name, arity), containing)
        cache[i] = result
        return result

    return [key_for(i) for i in range(len(facts.types))]


def _merge_assembly(
    model: DocModel,
    facts: AssemblyFacts,
    warnings: list[MergeWarning],
    included: Collection[Accessibility] | None,
) -> None:
    asm = AssemblyDoc(name=facts.name, version=facts.version)
    model.assemblies.append(asm)

    excluded = _excluded_types(facts, included)
    accepted: list[TypeDoc | None] = []
    keys = _type_keys(facts)
    for i, ((key, containing), tf) in enumerate(zip(keys, facts.types, strict=True)):
        if i in excluded:
            accepted.append(None)
            continue
        incoming = TypeDoc(
            key=key,
            kind=tf.kind,
            name=tf.name,
            namespace=tf.namespace,
            assembly=facts.name,
            containing_types=containing,
            accessibility=tf.accessibility,
            generic_parameters=list(tf.generic_parameters),
            base_type=tf.base_type,
            interfaces=list(tf.interfaces),
            modifiers=list(tf.modifiers),
            documentation=_documentation(tf.documentation, key, facts.name, warnings),
            parameters=_parameters(tf.parameters),
            return_type=tf.return_type,
            is_forwarder=tf.is_forwarder,
            symbol=tf.symbol,
        )
        outcome = _merge_type(model, incoming, warnings)
        accepted.append(None if outcome is MergeOutcome.KEPT else incoming)

        ns = model.namespaces.get(tf.namespace)
        if ns is None:
            ns = NamespaceDoc(name=tf.namespace)
            model.namespaces[tf.namespace] = ns
        if facts.name not in ns.assemblies:
            ns.assemblies.append(facts.name)
        if tf.namespace not in asm.namespace_names:
            asm.namespace_names.append(tf.namespace)
        if outcome is MergeOutcome.ADDED:
            ns.type_keys.append(key)

    for mf in facts.members:
        owner = accepted[mf.owner_index]
        if owner is None:
            logger.debug("Skipping member %s of forwarded or excluded type", mf.name)
            continue
        if included is not None and mf.accessibility not in included:
            continue
        name = mf.name
        if mf.kind is MemberKind.CONSTRUCTOR and name in CTOR_NAMES:
            name = owner.name
        label = f"{owner.key}.{name}"
        declaring = mf.declaring_type
        inherited = declaring is not None and declaring.lookup_key != owner.key
        owner.add_member(
            MemberDoc(
                kind=mf.kind,
                name=name,
                owner_key=owner.key,
                return_type=mf.return_type,
                parameters=_parameters(mf.parameters),
                accessibility=mf.accessibility,
                modifiers=list(mf.modifiers),
                generic_parameters=list(mf.generic_parameters),
                constant_value=mf.constant_value,
                documentation=_documentation(
                    mf.documentation, label, facts.name, warnings
                ),
                declaring_type=declaring if inherited else None,
                is_inherited=inherited,
                is_extension_method=mf.is_extension and bool(mf.parameters),
                symbol=mf.symbol,
            )
        )


def _merge_type(
    model: DocModel,
    incoming: TypeDoc,
    warnings: list[MergeWarning],
) -> MergeOutcome:
    """Apply the duplicate-key policy and record the outcome."""
    existing = model.types.get(incoming.key)
    previous = existing.assembly if existing else None

    if existing is None:
        outcome = MergeOutcome.ADDED
    elif incoming.is_forwarder:
        outcome = MergeOutcome.KEPT
    elif existing.is_forwarder:
        outcome = MergeOutcome.REPLACED
    else:
        outcome = MergeOutcome.REPLACED_WITH_WARNING
        if existing.assembly == incoming.assembly:
            message = (
                f"Type '{incoming.key}' is defined more than once in "
                f"'{incoming.assembly}'; keeping the later definition"
            )
        else:
            message = (
                f"Type '{incoming.key}' is defined in both '{existing.assembly}' "
                f"and '{incoming.assembly}'; keeping the definition from "
                f"'{incoming.assembly}'"
            )
        warnings.append(
            MergeWarning(
                kind=WarningKind.MERGE_CONFLICT,
                key=incoming.key,
                message=message,
                assemblies=(existing.assembly, incoming.assembly),
            )
        )
        logger.warning("%s", message)

    sources = list(existing.source_assemblies) if existing else []
    if incoming.assembly not in sources:
        sources.append(incoming.assembly)
    if outcome is MergeOutcome.KEPT:
        existing.source_assemblies = sources
    else:
        incoming.source_assemblies = sources
        model.types[incoming.key] = incoming
    model.merge_log.append(
        MergeRecord(
            key=incoming.key,
            outcome=outcome,
            incoming_assembly=incoming.assembly,
            previous_assembly=previous,
        )
    )
    return outcome


def _documentation(
    raw: RawDocumentation,
    label: str,
    assembly: str,
    warnings: list[MergeWarning],
) -> DocComment:
    if raw is None:
        return DocComment.empty()
    if isinstance(raw, DocComment):
        return raw
    if isinstance(raw, UnreadableDocumentation):
        detail = raw.detail
    else:
        try:
            return parse_doc_comment(raw)
        except MalformedDocumentationError as e:
            detail = str(e)
    warnings.append(
        MergeWarning(
            kind=WarningKind.MALFORMED_DOCUMENTATION,
            key=label,
            message=detail,
            assemblies=(assembly,),
        )
    )
    logger.warning("Malformed documentation on %s (%s): %s", label, assembly, detail)
    return DocComment.empty()


def _parameters(params: list[ParameterFacts]) -> list[ParameterDoc]:
    return [
        ParameterDoc(
            name=p.name,
            type=p.type,
            is_optional=p.is_optional,
            default_value=p.default_value,
        )
        for p in params
    ]


def _link_types(model: DocModel) -> None:
    """Mark inheritance edges internal/external and index derived and nested types."""

    def mark(ref: TypeReference) -> TypeReference:
        args = tuple(mark(a) for a in ref.generic_arguments)
        if ref.is_generic_parameter:
            return ref
        origin = (
            ReferenceOrigin.INTERNAL
            if ref.lookup_key in model.types
            else ReferenceOrigin.EXTERNAL
        )
        return replace(ref, generic_arguments=args, origin=origin)

    model.derived_types.clear()
    for t in model.types.values():
        t.nested_type_keys.clear()

    for t in model.iter_types():
        if t.base_type is not None:
            t.base_type = mark(t.base_type)
            if t.base_type.origin is ReferenceOrigin.INTERNAL:
                model.derived_types.setdefault(t.base_type.lookup_key, []).append(
                    t.key
                )
        t.interfaces = [mark(i) for i in t.interfaces]
        for m in t.members:
            if m.declaring_type is not None:
                m.declaring_type = mark(m.declaring_type)
        container = t.containing_key
        if container and container in model.types:
            model.types[container].nested_type_keys.append(t.key)

    for keys in model.derived_types.values():
        keys.sort()


def _relocate_extension_methods(model: DocModel) -> None:
    """Move extension methods onto the documented type they extend."""
    moves: list[tuple[TypeDoc, MemberDoc, TypeDoc]] = []
    for m in model.iter_members():
        if not m.is_extension_method:
            continue
        target_ref = m.parameters[0].type
        if target_ref.is_generic_parameter or target_ref.array_rank:
            continue
        source = model.owner_of(m)
        target = model.types.get(target_ref.lookup_key)
        if target is not None and target is not source:
            moves.append((source, m, target))

    emptied: set[str] = set()
    for source, m, target in moves:
        kind_members = source.members_by_kind[m.kind]
        kind_members[:] = [x for x in kind_members if x is not m]
        if not kind_members:
            del source.members_by_kind[m.kind]
        m.declaring_type = source.reference()
        target.add_member(m)
        logger.debug(
            "Moved extension method %s from %s to %s", m.name, source.key, target.key
        )
        if not source.members_by_kind:
            emptied.add(source.key)

    for key in sorted(emptied):
        if model.types[key].members_by_kind:
            continue
        if any(t.containing_key == key for t in model.types.values()):
            continue
        logger.info("Dropping %s: every member moved to the type it extends", key)
        model.remove_type(key)
