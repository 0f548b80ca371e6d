"""
Mod changelog toolkit.

Loads per-mod changelogs, works out which versions a user has not seen yet
and drives the choice of what to display next.
"""

from .config import ChangelogSettings, ChangelogSettingsManager
from .config_tree import ConfigTree, DictConfigTree
from .data_models import (
    Change,
    ChangeEntry,
    ChangelogLoadResult,
    LoadNotification,
    ModChangelog,
    NotificationKind,
)
from .homepage import VALID_HOSTS, validate_homepage
from .loader import ChangelogLoader, ChangelogLoadError, load_changelog
from .seen_store import InMemorySeenVersionStore, JsonSeenVersionStore, SeenVersionStore
from .selector import DisplaySelector, DisplayState
from .version import Version, VersionParseError

__all__ = [
    "Change",
    "ChangeEntry",
    "ChangelogLoadError",
    "ChangelogLoadResult",
    "ChangelogLoader",
    "ChangelogSettings",
    "ChangelogSettingsManager",
    "ConfigTree",
    "DictConfigTree",
    "DisplaySelector",
    "DisplayState",
    "InMemorySeenVersionStore",
    "JsonSeenVersionStore",
    "LoadNotification",
    "ModChangelog",
    "NotificationKind",
    "SeenVersionStore",
    "VALID_HOSTS",
    "Version",
    "VersionParseError",
    "load_changelog",
    "validate_homepage",
]
