"""Records of recoverable conditions met while merging assemblies."""

from dataclasses import dataclass
from enum import Enum


class WarningKind(str, Enum):
    """Recoverable condition categories."""

    MERGE_CONFLICT = "merge_conflict"
    MALFORMED_DOCUMENTATION = "malformed_documentation"


class MergeOutcome(str, Enum):
    """Result of merging one incoming type definition into the model."""

    ADDED = "added"
    KEPT = "kept"
    REPLACED = "replaced"
    REPLACED_WITH_WARNING = "replaced_with_warning"


@dataclass(frozen=True)
class MergeWarning:
    """A recoverable condition recorded during the build."""

    kind: WarningKind
    key: str
    message: str
    assemblies: tuple[str, ...] = ()


@dataclass(frozen=True)
class MergeRecord:
    """Audit entry for one type definition considered by the merge."""

    key: str
    outcome: MergeOutcome
    incoming_assembly: str
    previous_assembly: str | None = None
