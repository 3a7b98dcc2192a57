from pathlib import PurePosixPath

from ..exceptions import PathStripMismatch
from ..schemas import DirRule, MappedPath


def map_destination(path: str, rule: DirRule) -> MappedPath:
    """Rewrite ``path`` under the rule's destination root.

    The rule's pattern text, taken literally, is stripped from the front of the
    path component by component and the remainder is joined onto the
    destination root.

    Raises:
        PathStripMismatch: the pattern text is not a leading part of ``path``,
            e.g. because it matched through alternation or a character class.
    """
    literal = rule.source_pattern.pattern
    try:
        remainder = PurePosixPath(path).relative_to(PurePosixPath(literal))
    except ValueError as e:
        raise PathStripMismatch(path, literal) from e

    destination = PurePosixPath(rule.destination_root) / remainder
    return MappedPath(source=path, destination=str(destination))
