"""Shared fixtures: a git backend that answers from canned name-status text."""

from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

import pytest
import structlog

from gsync.exceptions import GsyncError


class CannedGitBackend:
    """GitBackendProtocol implementation backed by dictionaries."""

    def __init__(
        self,
        diffs: Optional[Dict[Tuple[str, ...], str]] = None,
        ancestors: Iterable[Tuple[str, str]] = (),
        working_tree: str = "",
        failures: Optional[Dict[Tuple[str, ...], GsyncError]] = None,
        repo_root: str = "/repo",
    ):
        self.diffs = diffs or {}
        self.ancestors = set(ancestors)
        self.working_tree = working_tree
        self.failures = failures or {}
        self._repo_root = Path(repo_root)
        self.calls = []

    @property
    def repo_root(self) -> Path:
        return self._repo_root

    def is_ancestor(self, ancestor: str, descendant: str) -> bool:
        self.calls.append(("is_ancestor", ancestor, descendant))
        key = ("is_ancestor", ancestor, descendant)
        if key in self.failures:
            raise self.failures[key]
        return (ancestor, descendant) in self.ancestors

    def diff_name_status(self, ref: str, other: Optional[str] = None) -> str:
        key = (ref,) if other is None else (ref, other)
        self.calls.append(("diff",) + key)
        if key in self.failures:
            raise self.failures[key]
        return self.diffs.get(key, "")

    def working_tree_status(self) -> str:
        self.calls.append(("working_tree",))
        if ("working_tree",) in self.failures:
            raise self.failures[("working_tree",)]
        return self.working_tree


@pytest.fixture
def canned_backend():
    """Factory for CannedGitBackend instances."""
    return CannedGitBackend


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop logging configuration bound to streams a test has closed."""
    yield
    structlog.reset_defaults()
