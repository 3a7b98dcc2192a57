"""Extract the paths worth pushing from git name-status output."""

import asyncio
import re
from typing import Iterable, List, Optional, Sequence, Set, Tuple

import structlog

from ..exceptions import (
    BackendError,
    BackendQueryFailed,
    GsyncError,
    MalformedDiffOutput,
)
from ..protocols.git_backend_protocol import GitBackendProtocol
from ..schemas import (
    ChangeRecord,
    ChangeSet,
    ChangeStatus,
    CommitRange,
    EmptyRange,
    SingleRef,
    SpecifierError,
)
from .commits import AncestryResolver, parse_specifier

logger = structlog.get_logger(__name__)

# Similarity score git reports for a rename that kept the content intact
PURE_RENAME = "R100"

WORKING_TREE = ""

# git's C-style quoting (core.quotePath) for paths with unusual bytes
_C_ESCAPES = {
    b"a": b"\a",
    b"b": b"\b",
    b"t": b"\t",
    b"n": b"\n",
    b"v": b"\v",
    b"f": b"\f",
    b"r": b"\r",
    b'"': b'"',
    b"\\": b"\\",
}
_C_ESCAPE_RE = re.compile(rb"\\(?:([0-7]{3})|(.))", re.DOTALL)


def _c_escape(match: "re.Match[bytes]") -> bytes:
    octal, char = match.groups()
    if octal is not None:
        return bytes([int(octal, 8)])
    if char not in _C_ESCAPES:
        raise ValueError(f"unknown escape \\{char.decode('ascii', 'replace')}")
    return _C_ESCAPES[char]


def unquote_path(token: str) -> str:
    """Undo git's quoting of a path token; plain tokens come back unchanged.

    Raises:
        ValueError: the quoted text holds a bad escape or is not UTF-8.
    """
    if len(token) < 2 or not (token.startswith('"') and token.endswith('"')):
        return token
    raw = _C_ESCAPE_RE.sub(_c_escape, token[1:-1].encode("utf-8"))
    return raw.decode("utf-8")


def parse_name_status_line(line: str) -> ChangeRecord:
    """Parse one ``<status>\\t<path>[\\t<new_path>]`` line.

    Raises:
        MalformedDiffOutput: the line lacks the tokens its status requires.
    """
    line = line.rstrip("\r\n")
    # git separates fields with tabs; paths may contain spaces
    if "\t" in line:
        tokens = line.split("\t")
        tokens[0] = tokens[0].strip()
    else:
        tokens = line.split()
    if len(tokens) < 2 or not all(tokens):
        raise MalformedDiffOutput(line, "missing path")

    code = tokens[0]
    try:
        paths = [unquote_path(token) for token in tokens[1:]]
    except ValueError as e:
        raise MalformedDiffOutput(line, f"bad quoted path: {e}") from e

    if code == "D":
        return ChangeRecord(status=ChangeStatus.DELETED, path=paths[0], code=code)

    if code.startswith("R"):
        if len(paths) < 2:
            raise MalformedDiffOutput(line, "rename without new path")
        status = (
            ChangeStatus.RENAMED_NO_CONTENT_CHANGE
            if code == PURE_RENAME
            else ChangeStatus.RENAMED_WITH_CONTENT_CHANGE
        )
        return ChangeRecord(
            status=status, path=paths[1], old_path=paths[0], code=code
        )

    status = ChangeStatus.ADDED if code == "A" else ChangeStatus.MODIFIED
    return ChangeRecord(status=status, path=paths[0], code=code)


def parse_name_status(output: str) -> List[ChangeRecord]:
    """Parse every non-blank line of name-status output."""
    return [
        parse_name_status_line(line) for line in output.splitlines() if line.strip()
    ]


def relevant_paths(records: Iterable[ChangeRecord]) -> Set[str]:
    """Paths with content to push; deletions and pure renames drop out."""
    paths = set()
    for record in records:
        path = record.relevant_path
        if path is not None:
            paths.add(path)
    return paths


class ChangeSetExtractor:
    """Turns commit specifiers into the set of paths whose content changed."""

    def __init__(
        self,
        backend: GitBackendProtocol,
        resolver: Optional[AncestryResolver] = None,
    ):
        self.backend = backend
        self.resolver = resolver or AncestryResolver(backend)

    def query(self, raw: str) -> str:
        """Return the backend's name-status output for one specifier."""
        if raw == WORKING_TREE:
            return self.backend.working_tree_status()

        spec = parse_specifier(raw)
        if isinstance(spec, EmptyRange):
            return ""
        if isinstance(spec, SingleRef):
            return self.backend.diff_name_status(spec.ref)
        if isinstance(spec, CommitRange):
            resolved = self.resolver.resolve(spec.from_ref, spec.to_ref)
            return self.backend.diff_name_status(resolved.older, resolved.newer)
        raise TypeError(f"Unknown commit specifier: {spec!r}")

    def changes_for(self, raw: str) -> Set[str]:
        """Relevant paths for one specifier; errors propagate."""
        return relevant_paths(parse_name_status(self.query(raw)))

    def _safe_changes_for(self, raw: str) -> Tuple[Set[str], Optional[SpecifierError]]:
        try:
            return self.changes_for(raw), None
        except GsyncError as e:
            return set(), self._report(raw, e)

    @staticmethod
    def _report(raw: str, error: GsyncError) -> SpecifierError:
        label = raw or "<working tree>"
        stderr = error.stderr if isinstance(error, BackendQueryFailed) else ""
        if isinstance(error, (BackendError, MalformedDiffOutput)):
            logger.error("Failed to find changes", specifier=label, error=str(error))
        else:
            logger.warning("Skipping specifier", specifier=label, error=str(error))
        return SpecifierError(
            specifier=label,
            kind=type(error).__name__,
            message=str(error),
            stderr=stderr,
        )

    @staticmethod
    def _targets(specifiers: Sequence[str]) -> List[str]:
        # No specifiers at all means the dirty working tree
        return list(specifiers) if specifiers else [WORKING_TREE]

    @staticmethod
    def _merge(
        results: Iterable[Tuple[Set[str], Optional[SpecifierError]]],
    ) -> ChangeSet:
        paths: Set[str] = set()
        errors: List[SpecifierError] = []
        for found, error in results:
            paths |= found
            if error is not None:
                errors.append(error)
        return ChangeSet(paths=frozenset(paths), errors=errors)

    def collect(self, specifiers: Sequence[str]) -> ChangeSet:
        """Union of every specifier's paths, queried one after another."""
        return self._merge(
            self._safe_changes_for(raw) for raw in self._targets(specifiers)
        )

    async def collect_async(self, specifiers: Sequence[str]) -> ChangeSet:
        """Union of every specifier's paths, queried concurrently."""
        results = await asyncio.gather(
            *(
                asyncio.to_thread(self._safe_changes_for, raw)
                for raw in self._targets(specifiers)
            )
        )
        return self._merge(results)
