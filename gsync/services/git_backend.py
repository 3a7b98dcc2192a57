from pathlib import Path
from typing import Optional, Union

import structlog
from git import Repo
from git.exc import (
    GitCommandError,
    GitCommandNotFound,
    InvalidGitRepositoryError,
    NoSuchPathError,
)

from ..exceptions import (
    BackendQueryFailed,
    BackendUnavailable,
    MalformedDiffOutput,
    SourceNotExist,
    SourceNotGitRepo,
)

logger = structlog.get_logger(__name__)

# Everything after this marker is a revision, never an option
END_OF_OPTIONS = "--end-of-options"


def find_repo_root(source: Union[str, Path]) -> Path:
    """Return the working-tree root of the repository containing ``source``."""
    source = Path(source)
    if not source.exists():
        raise SourceNotExist(f"Source {source} does not exist")
    try:
        repo = Repo(source, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError) as e:
        raise SourceNotGitRepo(f"{source} is not a git repository") from e
    if repo.working_tree_dir is None:
        raise SourceNotGitRepo(f"{source} is a bare repository")
    return Path(repo.working_tree_dir)


def _stderr_text(error: GitCommandError) -> str:
    stderr = error.stderr
    if isinstance(stderr, bytes):
        stderr = stderr.decode("utf-8", errors="replace")
    # GitPython wraps stderr as "\n  stderr: '...'"
    text = (stderr or "").strip()
    if text.startswith("stderr:"):
        text = text[len("stderr:") :].strip().strip("'")
    return text


class GitBackend:
    """Runs git queries against one repository through GitPython."""

    def __init__(self, repo_root: Union[str, Path]):
        self._repo_root = Path(repo_root)
        try:
            self.repo = Repo(self._repo_root)
        except NoSuchPathError as e:
            raise SourceNotExist(f"Source {self._repo_root} does not exist") from e
        except InvalidGitRepositoryError as e:
            raise SourceNotGitRepo(
                f"{self._repo_root} is not a git repository"
            ) from e

    @property
    def repo_root(self) -> Path:
        return self._repo_root

    def _run(self, command: str, *args, **kwargs) -> str:
        """Run ``git <command>`` and return its output decoded as strict UTF-8."""
        label = f"git {command.replace('_', '-')} {' '.join(args)}".strip()
        logger.debug("Running git command", command=label)
        try:
            output = getattr(self.repo.git, command)(
                *args, stdout_as_string=False, **kwargs
            )
        except GitCommandNotFound as e:
            raise BackendUnavailable(f"Could not launch git for {label}: {e}") from e
        except GitCommandError as e:
            raise BackendQueryFailed(label, e.status, _stderr_text(e)) from e

        try:
            return output.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedDiffOutput(
                output.decode("utf-8", errors="replace"), "not valid UTF-8"
            ) from e

    def is_ancestor(self, ancestor: str, descendant: str) -> bool:
        try:
            self._run(
                "merge_base", END_OF_OPTIONS, ancestor, descendant, is_ancestor=True
            )
        except BackendQueryFailed as e:
            # merge-base --is-ancestor answers "no" with exit status 1
            if e.status == 1:
                return False
            raise
        return True

    def diff_name_status(self, ref: str, other: Optional[str] = None) -> str:
        if other is None:
            # show compares against the first parent and copes with root commits
            return self._run(
                "show",
                END_OF_OPTIONS,
                ref,
                name_status=True,
                pretty="tformat:",
                find_renames=True,
                diff_merges="first-parent",
            )
        return self._run(
            "diff", END_OF_OPTIONS, ref, other, name_status=True, find_renames=True
        )

    def working_tree_status(self) -> str:
        if self.repo.head.is_valid():
            tracked = self._run("diff", "HEAD", name_status=True, find_renames=True)
        else:
            # No commit yet: everything staged shows up as added
            tracked = self._run("diff", cached=True, name_status=True)
        untracked = self._run("ls_files", others=True, exclude_standard=True)
        lines = [line for line in tracked.splitlines() if line.strip()]
        lines.extend(f"A\t{path}" for path in untracked.splitlines() if path)
        return "\n".join(lines)
