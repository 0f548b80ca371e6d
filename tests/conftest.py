"""
Pytest configuration and shared fixtures.
"""

import pytest

from src.mod_changelog.data_models import Change, ChangeEntry, ModChangelog
from src.mod_changelog.seen_store import InMemorySeenVersionStore
from src.mod_changelog.version import Version


def make_changelog(mod_name: str, *versions: str, **metadata) -> ModChangelog:
    """Build a changelog with one change line per version."""
    entries = tuple(
        ChangeEntry(Version.parse(v), (Change(f"{mod_name} change in {v}"),))
        for v in versions
    )
    return ModChangelog(mod_name=mod_name, entries=entries, **metadata)


def seen(**mods: list[str]) -> InMemorySeenVersionStore:
    """Build a seen store from mod name -> version strings."""
    return InMemorySeenVersionStore(
        {name: [Version.parse(v) for v in versions] for name, versions in mods.items()}
    )


@pytest.fixture
def sample_changelog_data():
    """Sample changelog document as read from JSON."""
    return {
        "KERBALCHANGELOG": {
            "modName": "Kerbal Engineer",
            "showChangelog": True,
            "author": "cybutek",
            "license": "GPL-3.0",
            "website": "github.com/jrbudda/KerbalEngineer",
            "VERSION": [
                {
                    "version": "1.1.7",
                    "versionName": "Hotfix",
                    "change": ["Fixed delta-v readout"],
                },
                {
                    "version": "1.1.8",
                    "versionDate": "2020-06-01",
                    "change": "Recompiled for 1.10",
                    "CHANGE": [
                        {
                            "change": "Reworked build engineer",
                            "subchange": ["Faster stage math", "New window"],
                        }
                    ],
                },
            ],
        }
    }


@pytest.fixture
def three_mods():
    """A(no unseen), B(1 unseen), C(1 unseen)."""
    changelogs = [
        make_changelog("A", "1.0.0"),
        make_changelog("B", "1.0.0", "1.1.0"),
        make_changelog("C", "2.0.0"),
    ]
    store = seen(A=["1.0.0"], B=["1.0.0"])
    return changelogs, store


@pytest.fixture
def changelog_factory():
    """Factory fixture for changelogs."""
    return make_changelog


@pytest.fixture
def seen_factory():
    """Factory fixture for in-memory seen stores."""
    return seen
