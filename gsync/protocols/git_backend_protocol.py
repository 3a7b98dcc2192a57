"""Git backend protocol interface."""

from pathlib import Path
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class GitBackendProtocol(Protocol):
    """Read-only queries the change-set engine needs from version control.

    Every method returns raw name-status text (``<status>\\t<path>`` or
    ``<status>\\t<old_path>\\t<new_path>`` per line) so the parsing logic can
    be exercised against canned output.
    """

    @property
    def repo_root(self) -> Path:
        """Working-tree root every query runs against."""
        ...

    def is_ancestor(self, ancestor: str, descendant: str) -> bool:
        """Return True if ``ancestor`` is an ancestor of ``descendant``."""
        ...

    def diff_name_status(self, ref: str, other: Optional[str] = None) -> str:
        """Changes introduced by ``ref``, or between ``ref`` and ``other``."""
        ...

    def working_tree_status(self) -> str:
        """Uncommitted changes in the working tree."""
        ...
