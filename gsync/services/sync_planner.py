"""Builds the sync plan from commit specifiers and rules."""

from typing import Iterable, List, Optional, Sequence

import structlog

from ..exceptions import PathStripMismatch
from ..schemas import (
    ChangeSet,
    MappedPath,
    MappingError,
    MatchKind,
    SyncPlan,
)
from .change_set import ChangeSetExtractor
from .path_mapper import map_destination
from .rule_matcher import RuleMatcher

logger = structlog.get_logger(__name__)


class SyncPlanner:
    """Coordinates change extraction, rule matching and destination mapping."""

    def __init__(self, extractor: ChangeSetExtractor, matcher: RuleMatcher):
        self.extractor = extractor
        self.matcher = matcher

    def plan_paths(
        self, paths: Iterable[str], change_set: Optional[ChangeSet] = None
    ) -> SyncPlan:
        """Partition ``paths`` into ignored, mapped and unmapped entries."""
        ignored: List[str] = []
        mapped: List[MappedPath] = []
        unmapped: List[str] = []
        failed: List[MappingError] = []

        for path in paths:
            result = self.matcher.classify(path)
            if result.kind == MatchKind.IGNORED:
                ignored.append(path)
            elif result.kind == MatchKind.MAPPED:
                try:
                    mapped.append(map_destination(path, result.rule))
                except PathStripMismatch as e:
                    logger.error(
                        "Failed to map path", path=path, pattern=e.pattern
                    )
                    failed.append(
                        MappingError(path=path, pattern=e.pattern, message=str(e))
                    )
            else:
                unmapped.append(path)

        return SyncPlan(
            ignored=sorted(ignored),
            mapped=sorted(mapped, key=lambda entry: (entry.source, entry.destination)),
            unmapped=sorted(unmapped),
            failed=sorted(failed, key=lambda entry: entry.path),
            errors=list(change_set.errors) if change_set else [],
        )

    def build_plan(self, specifiers: Sequence[str]) -> SyncPlan:
        change_set = self.extractor.collect(specifiers)
        return self.plan_paths(change_set.paths, change_set)

    async def build_plan_async(self, specifiers: Sequence[str]) -> SyncPlan:
        change_set = await self.extractor.collect_async(specifiers)
        return self.plan_paths(change_set.paths, change_set)
