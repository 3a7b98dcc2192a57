"""Configuration loading."""

from .rules import RulesConfig, load_rules, parse_rules
from .settings import Settings, get_settings

__all__ = ["RulesConfig", "Settings", "get_settings", "load_rules", "parse_rules"]
