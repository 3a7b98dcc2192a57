"""Load the ordered ignore and directory-mapping rules from a JSON file."""

import json
import re
from pathlib import Path
from typing import List, Tuple, Union

import structlog
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..exceptions import ConfigInvalid, ConfigNotExist
from ..schemas import DirRule, SyncRules

logger = structlog.get_logger(__name__)


def _compile(pattern: str) -> re.Pattern:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ValueError(f"invalid regex {pattern!r}: {e}") from e


class RulesConfig(BaseModel):
    """Raw rules file contents.

    ``dir_map`` is a list of ``[pattern, remote_dir]`` pairs rather than an
    object so the order written by the operator is the order rules are tried.
    """

    dir_map: List[Tuple[str, str]] = Field(default_factory=list)
    ignored: List[str] = Field(default_factory=list)

    @field_validator("dir_map")
    @classmethod
    def _check_dir_map(cls, value: List[Tuple[str, str]]) -> List[Tuple[str, str]]:
        for pattern, _ in value:
            _compile(pattern)
        return value

    @field_validator("ignored")
    @classmethod
    def _check_ignored(cls, value: List[str]) -> List[str]:
        for pattern in value:
            _compile(pattern)
        return value

    def to_rules(self) -> SyncRules:
        return SyncRules(
            dir_rules=[
                DirRule(source_pattern=_compile(pattern), destination_root=root)
                for pattern, root in self.dir_map
            ],
            ignored=[_compile(pattern) for pattern in self.ignored],
        )


def parse_rules(contents: str, source: str = "<config>") -> SyncRules:
    """Parse rules from JSON text, raising ConfigInvalid on any problem."""
    try:
        raw = json.loads(contents)
    except json.JSONDecodeError as e:
        raise ConfigInvalid(f"Config file {source} is not valid JSON: {e}") from e

    try:
        config = RulesConfig.model_validate(raw)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigInvalid(f"Config file {source} is invalid: {details}") from e

    rules = config.to_rules()
    logger.debug(
        "Loaded rules",
        source=source,
        dir_rules=len(rules.dir_rules),
        ignored=len(rules.ignored),
    )
    return rules


def load_rules(path: Union[str, Path]) -> SyncRules:
    """Read and validate the rules file at ``path``."""
    path = Path(path)
    if not path.exists():
        raise ConfigNotExist(str(path))
    return parse_rules(path.read_text(encoding="utf-8"), source=str(path))
