"""Git change records and commit specifiers."""

from enum import Enum
from typing import FrozenSet, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ChangeStatus(str, Enum):
    """Enum for file change statuses reported by a name-status diff."""

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED_NO_CONTENT_CHANGE = "renamed_no_content_change"
    RENAMED_WITH_CONTENT_CHANGE = "renamed_with_content_change"


class ChangeRecord(BaseModel):
    """One line of name-status output."""

    status: ChangeStatus
    path: str
    old_path: Optional[str] = None  # For renamed files
    code: str  # raw status token, e.g. 'M', 'R087'

    @property
    def relevant_path(self) -> Optional[str]:
        """Path whose content has to be pushed, or None when there is nothing to push."""
        if self.status in (
            ChangeStatus.DELETED,
            ChangeStatus.RENAMED_NO_CONTENT_CHANGE,
        ):
            return None
        return self.path


class SingleRef(BaseModel):
    """A single commit; its changes are the diff against its parent."""

    kind: Literal["single"] = "single"
    ref: str


class CommitRange(BaseModel):
    """Two commits separated by ``..``, still to be ancestry-ordered."""

    kind: Literal["range"] = "range"
    from_ref: str
    to_ref: str


class EmptyRange(BaseModel):
    """The bare ``..`` specifier; contributes no changes."""

    kind: Literal["empty"] = "empty"


CommitSpecifier = Union[SingleRef, CommitRange, EmptyRange]


class ResolvedRange(BaseModel):
    """An ancestry-ordered pair of references."""

    model_config = ConfigDict(frozen=True)

    older: str
    newer: str


class SpecifierError(BaseModel):
    """A specifier that contributed nothing because its query failed."""

    specifier: str
    kind: str
    message: str
    stderr: str = ""


class ChangeSet(BaseModel):
    """Union of the relevant paths across every requested specifier."""

    paths: FrozenSet[str] = Field(default_factory=frozenset)
    errors: List[SpecifierError] = Field(default_factory=list)
