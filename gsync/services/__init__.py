"""Services for the application."""

from .backend_factory import create_git_backend, create_git_backend_from_settings
from .change_set import ChangeSetExtractor, parse_name_status
from .commits import AncestryResolver, parse_specifier
from .git_backend import GitBackend, find_repo_root
from .path_mapper import map_destination
from .rule_matcher import RuleMatcher
from .selection import parse_selection
from .sync_planner import SyncPlanner
from .transfer import SshTransfer, parse_destination

__all__ = [
    "AncestryResolver",
    "ChangeSetExtractor",
    "GitBackend",
    "RuleMatcher",
    "SshTransfer",
    "SyncPlanner",
    "create_git_backend",
    "create_git_backend_from_settings",
    "find_repo_root",
    "map_destination",
    "parse_destination",
    "parse_name_status",
    "parse_selection",
    "parse_specifier",
]
