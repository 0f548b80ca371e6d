"""
Data models for mod changelogs.
"""

from collections.abc import Collection
from dataclasses import dataclass, field
from enum import Enum

from .homepage import homepage_url as to_homepage_url
from .version import Version


@dataclass(frozen=True)
class Change:
    """One change line, optionally with indented sub-points."""

    text: str
    subchanges: tuple[str, ...] = ()

    def lines(self) -> list[str]:
        return [f" * {self.text}"] + [f"    - {sub}" for sub in self.subchanges]


@dataclass(frozen=True)
class ChangeEntry:
    """All changes shipped in one version of a mod."""

    version: Version
    changes: tuple[Change, ...] = ()
    version_name: str | None = None
    version_date: str | None = None

    @property
    def change_lines(self) -> list[str]:
        lines: list[str] = []
        for change in self.changes:
            lines.extend(change.lines())
        return lines

    def heading(self) -> str:
        heading = str(self.version)
        if self.version_name:
            heading += f" {self.version_name}"
        if self.version_date:
            heading += f" ({self.version_date})"
        return heading

    def __str__(self) -> str:
        return "\n".join([self.heading()] + self.change_lines)


@dataclass(frozen=True)
class ModChangelog:
    """The complete changelog of one mod plus its metadata."""

    mod_name: str
    entries: tuple[ChangeEntry, ...] = ()
    show_changelog: bool = True
    author: str | None = None
    license: str | None = None
    homepage: str | None = None
    homepage_validated: bool = False

    def __post_init__(self):
        if not self.mod_name:
            raise ValueError("mod_name must not be empty")
        object.__setattr__(self, "entries", tuple(self.entries))

    def sorted_entries(self) -> list[ChangeEntry]:
        """Entries newest first; equal versions keep their input order."""
        return sorted(self.entries, key=lambda e: e.version, reverse=True)

    @property
    def highest_version(self) -> Version | None:
        """Newest version in the changelog, or None when there are no entries."""
        if not self.entries:
            return None
        return max(entry.version for entry in self.entries)

    @property
    def versions(self) -> frozenset[Version]:
        return frozenset(entry.version for entry in self.entries)

    @property
    def homepage_url(self) -> str | None:
        if not self.homepage_validated or not self.homepage:
            return None
        return to_homepage_url(self.homepage)

    def unseen_entries(self, seen: Collection[Version]) -> list[ChangeEntry]:
        return [e for e in self.sorted_entries() if e.version not in seen]

    def has_unseen(self, seen: Collection[Version]) -> bool:
        """True if any entry's version is not among the seen versions."""
        return any(entry.version not in seen for entry in self.entries)

    def body(self, seen: Collection[Version] | None = None) -> str:
        """
        Text of the changelog, newest version first.

        Args:
            seen: When given, entries whose version is in it are left out

        Returns:
            The entries joined by newlines
        """
        if seen is None:
            entries = self.sorted_entries()
        else:
            entries = self.unseen_entries(seen)
        return "\n".join(str(entry) for entry in entries)


class NotificationKind(Enum):
    """Things the loader reports back to its caller instead of acting on."""

    MISSING_MOD_NAME = "missing_mod_name"
    MISSING_SHOW_FLAG = "missing_show_flag"
    INVALID_VERSION = "invalid_version"


@dataclass(frozen=True)
class LoadNotification:
    """A diagnostic or write-back request produced while building a changelog."""

    kind: NotificationKind
    message: str
    field: str | None = None
    value: str | bool | None = None

    @property
    def needs_persist(self) -> bool:
        """True when the caller should write ``field = value`` back to the source."""
        return self.kind is NotificationKind.MISSING_SHOW_FLAG


@dataclass
class ChangelogLoadResult:
    """A constructed changelog together with the notifications raised on the way."""

    changelog: ModChangelog
    notifications: list[LoadNotification] = field(default_factory=list)

    @property
    def needs_persist(self) -> list[LoadNotification]:
        return [n for n in self.notifications if n.needs_persist]
