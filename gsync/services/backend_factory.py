"""Factory for creating GitBackend instances."""

from pathlib import Path
from typing import Union

from ..config.settings import Settings
from ..protocols.git_backend_protocol import GitBackendProtocol
from .git_backend import GitBackend, find_repo_root


def create_git_backend(
    source: Union[str, Path], search_parent_directories: bool = True
) -> GitBackendProtocol:
    """
    Create a GitBackend for the repository that contains ``source``.

    Args:
        source: Any path inside the repository's working tree
        search_parent_directories: Resolve the working-tree root from ``source``
            instead of requiring ``source`` to be the root itself

    Returns:
        GitBackendProtocol implementation
    """
    repo_root = find_repo_root(source) if search_parent_directories else source
    return GitBackend(repo_root)


def create_git_backend_from_settings(settings: Settings) -> GitBackendProtocol:
    """
    Create a GitBackend using application settings.

    Args:
        settings: Application settings

    Returns:
        GitBackendProtocol implementation
    """
    return create_git_backend(settings.GSYNC_SOURCE)
