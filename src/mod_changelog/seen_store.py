"""
Records of which versions of each mod the user has already acknowledged.
"""

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Protocol

from ..shared_utilities import get_logger
from .version import Version, VersionParseError


class SeenVersionStore(Protocol):
    """Read access to acknowledged versions, keyed by mod name."""

    def seen_versions(self, mod_name: str) -> frozenset[Version]: ...


class InMemorySeenVersionStore:
    """Seen versions held in a dict; used by hosts that persist elsewhere."""

    def __init__(self, seen: Mapping[str, Iterable[Version]] | None = None):
        self._seen: dict[str, set[Version]] = {
            name: set(versions) for name, versions in (seen or {}).items()
        }

    def seen_versions(self, mod_name: str) -> frozenset[Version]:
        return frozenset(self._seen.get(mod_name, ()))

    def mark_seen(self, mod_name: str, versions: Iterable[Version]) -> None:
        self._seen.setdefault(mod_name, set()).update(versions)


class JsonSeenVersionStore:
    """
    Seen versions persisted as ``{"modName": ["1.0.0", ...]}``.

    A missing or corrupt file is treated as "nothing seen yet". Entries that
    do not parse as versions are dropped with a warning.
    """

    def __init__(self, path: str | Path):
        """Initialize store and load the file if it exists.

        Args:
            path: Location of the JSON file
        """
        self.logger = get_logger(__name__)
        self.path = Path(path)
        self._seen: dict[str, set[Version]] = {}
        self.load()

    def load(self) -> None:
        """(Re)load seen versions from disk."""
        self._seen = {}
        if not self.path.exists():
            return

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            self.logger.warning(
                f"Ignoring unreadable seen-versions file {self.path}: {e}"
            )
            return

        if not isinstance(data, dict):
            self.logger.warning(f"Ignoring malformed seen-versions file {self.path}")
            return

        for mod_name, versions in data.items():
            if not isinstance(versions, list):
                continue
            parsed = set()
            for text in versions:
                try:
                    parsed.add(Version.parse(str(text)))
                except VersionParseError:
                    self.logger.warning(
                        f"Dropping unparseable seen version {text!r} for {mod_name}"
                    )
            self._seen[mod_name] = parsed

    def save(self) -> None:
        """Write seen versions to disk, newest first per mod."""
        data = {
            mod_name: [str(v) for v in sorted(versions, reverse=True)]
            for mod_name, versions in sorted(self._seen.items())
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def seen_versions(self, mod_name: str) -> frozenset[Version]:
        return frozenset(self._seen.get(mod_name, ()))

    def mark_seen(self, mod_name: str, versions: Iterable[Version]) -> None:
        """Add versions to a mod's seen set (in memory; call save() to persist)."""
        self._seen.setdefault(mod_name, set()).update(versions)
