"""First-match-wins classification of changed paths."""

from re import Pattern
from typing import Sequence

from ..schemas import DirRule, MatchKind, MatchResult, SyncRules


class RuleMatcher:
    """Classifies a path as ignored, mapped or unmapped.

    Ignore patterns are tried before directory rules and each list is tried in
    the order given; the first hit decides, even if a later entry is more
    specific. Patterns match anywhere in the path (``re.search``).
    """

    def __init__(self, ignored: Sequence[Pattern], dir_rules: Sequence[DirRule]):
        # Kept as given: no sorting or deduplication
        self.ignored = list(ignored)
        self.dir_rules = list(dir_rules)

    @classmethod
    def from_rules(cls, rules: SyncRules) -> "RuleMatcher":
        return cls(rules.ignored, rules.dir_rules)

    def classify(self, path: str) -> MatchResult:
        for pattern in self.ignored:
            if pattern.search(path):
                return MatchResult(
                    path=path, kind=MatchKind.IGNORED, pattern=pattern.pattern
                )

        for rule in self.dir_rules:
            if rule.source_pattern.search(path):
                return MatchResult(
                    path=path,
                    kind=MatchKind.MAPPED,
                    rule=rule,
                    pattern=rule.source_pattern.pattern,
                )

        return MatchResult(path=path, kind=MatchKind.UNMAPPED)
