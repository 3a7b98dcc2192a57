"""Schemas for the application."""

from .git import (
    ChangeRecord,
    ChangeSet,
    ChangeStatus,
    CommitRange,
    CommitSpecifier,
    EmptyRange,
    ResolvedRange,
    SingleRef,
    SpecifierError,
)
from .plan import (
    Destination,
    DirRule,
    MappedPath,
    MappingError,
    MatchKind,
    MatchResult,
    SyncPlan,
    SyncRules,
)

__all__ = [
    "ChangeRecord",
    "ChangeSet",
    "ChangeStatus",
    "CommitRange",
    "CommitSpecifier",
    "Destination",
    "DirRule",
    "EmptyRange",
    "MappedPath",
    "MappingError",
    "MatchKind",
    "MatchResult",
    "ResolvedRange",
    "SingleRef",
    "SpecifierError",
    "SyncPlan",
    "SyncRules",
]
