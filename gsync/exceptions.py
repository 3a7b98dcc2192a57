"""Exceptions for gsync."""

from typing import Optional


class GsyncError(Exception):
    """Base class for every error raised by gsync."""


class InvalidSpecifierFormat(GsyncError):
    """Raised when a commit specifier splits into more than two segments."""

    def __init__(self, specifier: str):
        self.specifier = specifier
        super().__init__(f"Commit format is invalid, {specifier}")


class BackendError(GsyncError):
    """A version-control query could not produce output."""


class BackendUnavailable(BackendError):
    """Raised when the git executable cannot be launched."""


class BackendQueryFailed(BackendError):
    """Raised when a git command exits with a non-zero status."""

    def __init__(
        self, command: str, status: Optional[int] = None, stderr: str = ""
    ):
        self.command = command
        self.status = status
        self.stderr = stderr
        message = f"{command} failed with exit status {status}"
        if stderr:
            message = f"{message}: {stderr}"
        super().__init__(message)


class MalformedDiffOutput(GsyncError):
    """Raised when a name-status line does not have the expected shape."""

    def __init__(self, line: str, reason: str = "unexpected line shape"):
        self.line = line
        super().__init__(f"Malformed diff output ({reason}): {line!r}")


class ConfigError(GsyncError):
    """Configuration could not be loaded."""


class ConfigNotExist(ConfigError):
    """Raised when the rules file is missing."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Config file {path} does not exist")


class ConfigInvalid(ConfigError):
    """Raised for unparsable configuration or an invalid pattern."""


class PathStripMismatch(GsyncError):
    """Raised when a rule's literal pattern is not a prefix of the matched path."""

    def __init__(self, path: str, pattern: str):
        self.path = path
        self.pattern = pattern
        super().__init__(
            f"Rule pattern {pattern!r} matched {path!r} but is not a path prefix of it"
        )


class SourceNotExist(GsyncError):
    """Raised when the source folder does not exist."""


class SourceNotGitRepo(GsyncError):
    """Raised when the source folder is not inside a git working tree."""


class DestinationInvalid(GsyncError):
    """Raised when a destination string cannot be parsed."""


class TransferError(GsyncError):
    """Raised when a file cannot be copied to the remote host."""


class InvalidSelection(GsyncError):
    """Raised when the operator's confirmation answer cannot be understood."""
