"""Rule, match and plan models."""

from enum import Enum
from re import Pattern
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .git import SpecifierError


class DirRule(BaseModel):
    """Maps local paths matching ``source_pattern`` under ``destination_root``."""

    model_config = ConfigDict(frozen=True)

    source_pattern: Pattern
    destination_root: str


class SyncRules(BaseModel):
    """Ordered ignore patterns and directory rules, as written in the config."""

    dir_rules: List[DirRule] = Field(default_factory=list)
    ignored: List[Pattern] = Field(default_factory=list)


class MatchKind(str, Enum):
    IGNORED = "ignored"
    MAPPED = "mapped"
    UNMAPPED = "unmapped"


class MatchResult(BaseModel):
    path: str
    kind: MatchKind
    rule: Optional[DirRule] = None
    pattern: Optional[str] = None  # the ignore pattern or rule pattern that matched


class MappedPath(BaseModel):
    """A local path and where it lands on the remote host."""

    model_config = ConfigDict(frozen=True)

    source: str
    destination: str


class MappingError(BaseModel):
    """A path whose winning rule could not be stripped off it."""

    path: str
    pattern: str
    message: str


class SyncPlan(BaseModel):
    """Categorized, destination-resolved changes ready for confirmation."""

    model_config = ConfigDict(frozen=True)

    ignored: List[str] = Field(default_factory=list)
    mapped: List[MappedPath] = Field(default_factory=list)
    unmapped: List[str] = Field(default_factory=list)
    failed: List[MappingError] = Field(default_factory=list)
    errors: List[SpecifierError] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.mapped

    def pairs(self) -> List[Tuple[str, str]]:
        """Mapped entries as (source, destination) tuples."""
        return [(entry.source, entry.destination) for entry in self.mapped]


class Destination(BaseModel):
    """Remote host that receives the mapped files."""

    username: str
    host: str
    port: int = 22

    def __str__(self) -> str:
        return f"{self.username}@{self.host}"
