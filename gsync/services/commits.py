"""Commit specifier parsing and ancestry ordering."""

import structlog

from ..exceptions import BackendError, InvalidSpecifierFormat
from ..protocols.git_backend_protocol import GitBackendProtocol
from ..schemas import (
    CommitRange,
    CommitSpecifier,
    EmptyRange,
    ResolvedRange,
    SingleRef,
)

logger = structlog.get_logger(__name__)

RANGE_SEPARATOR = ".."
OPTION_PREFIX = "-"


def parse_specifier(raw: str) -> CommitSpecifier:
    """Parse ``raw`` into a single ref, a two-ended range or the empty range.

    Raises:
        InvalidSpecifierFormat: ``raw`` contains the separator more than once,
            only one side of a range is given, or a ref looks like an option.
    """
    segments = raw.split(RANGE_SEPARATOR)
    if any(segment.startswith(OPTION_PREFIX) for segment in segments):
        raise InvalidSpecifierFormat(raw)
    if len(segments) == 1:
        return SingleRef(ref=raw)
    if len(segments) == 2:
        start, end = segments
        if not start and not end:
            return EmptyRange()
        if start and end:
            return CommitRange(from_ref=start, to_ref=end)
    raise InvalidSpecifierFormat(raw)


class AncestryResolver:
    """Orders the two ends of a commit range as (older, newer)."""

    def __init__(self, backend: GitBackendProtocol):
        self.backend = backend

    def resolve(self, first: str, second: str) -> ResolvedRange:
        try:
            if self.backend.is_ancestor(first, second):
                return ResolvedRange(older=first, newer=second)
        except BackendError as e:
            logger.error(
                "Failed to determine ancestry, keeping the given order",
                first=first,
                second=second,
                error=str(e),
            )
            return ResolvedRange(older=first, newer=second)
        # Not validated further: unrelated commits also end up swapped
        return ResolvedRange(older=second, newer=first)
