from fastapi import Depends

from gsync.config.rules import load_rules
from gsync.config.settings import Settings, get_settings
from gsync.protocols.git_backend_protocol import GitBackendProtocol
from gsync.schemas import SyncRules
from gsync.services import (
    ChangeSetExtractor,
    RuleMatcher,
    SyncPlanner,
    create_git_backend_from_settings,
)


def get_git_backend(settings: Settings = Depends(get_settings)) -> GitBackendProtocol:
    return create_git_backend_from_settings(settings)


def get_sync_rules(settings: Settings = Depends(get_settings)) -> SyncRules:
    return load_rules(settings.GSYNC_CONFIG_PATH)


def get_change_set_extractor(
    backend: GitBackendProtocol = Depends(get_git_backend),
) -> ChangeSetExtractor:
    return ChangeSetExtractor(backend)


def get_rule_matcher(rules: SyncRules = Depends(get_sync_rules)) -> RuleMatcher:
    return RuleMatcher.from_rules(rules)


# The planner depends on the rules being valid before any backend query runs
def get_sync_planner(
    matcher: RuleMatcher = Depends(get_rule_matcher),
    extractor: ChangeSetExtractor = Depends(get_change_set_extractor),
) -> SyncPlanner:
    return SyncPlanner(extractor=extractor, matcher=matcher)
