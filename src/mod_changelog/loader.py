"""
Construction of mod changelogs from config trees, and discovery of
changelog documents on disk.
"""

import json
from pathlib import Path

from ..shared_utilities import get_logger, trace_function, trace_operation
from .config_tree import ConfigTree, DictConfigTree
from .data_models import (
    Change,
    ChangeEntry,
    ChangelogLoadResult,
    LoadNotification,
    ModChangelog,
    NotificationKind,
)
from .homepage import validate_homepage
from .version import Version, VersionParseError

CHANGELOG_TAG = "KERBALCHANGELOG"
VERSION_TAG = "VERSION"
CHANGE_TAG = "CHANGE"

# Written back when a document lacks "showChangelog"; matches the in-memory default.
SHOW_CHANGELOG_DEFAULT = True


class ChangelogLoadError(Exception):
    """Raised when a changelog document cannot be read."""

    pass


def load_change_entry(block: ConfigTree) -> ChangeEntry:
    """
    Build one ChangeEntry from a VERSION block.

    Raises:
        VersionParseError: If the block has no parseable ``version`` field
    """
    version = Version.parse(block.get_field("version") or "")

    changes = [Change(text) for text in block.get_values("change")]
    for change_block in block.get_child_blocks(CHANGE_TAG):
        text = change_block.get_field("change")
        if text is None:
            continue
        changes.append(Change(text, tuple(change_block.get_values("subchange"))))

    return ChangeEntry(
        version=version,
        changes=tuple(changes),
        version_name=block.get_field("versionName") or None,
        version_date=block.get_field("versionDate") or None,
    )


def load_changelog(tree: ConfigTree, fallback_name: str) -> ChangelogLoadResult:
    """
    Build a ModChangelog from a changelog block.

    Missing optional fields fall back to defaults; each fallback that the
    caller may want to log or persist is returned as a notification.

    Args:
        tree: The changelog block
        fallback_name: Mod name to use when the block has no ``modName``

    Returns:
        ChangelogLoadResult holding the changelog and its notifications
    """
    notifications: list[LoadNotification] = []

    mod_name = tree.get_field("modName")
    if not mod_name:
        mod_name = fallback_name
        notifications.append(
            LoadNotification(
                kind=NotificationKind.MISSING_MOD_NAME,
                message=f"Missing mod name, using '{fallback_name}'",
                field="modName",
                value=fallback_name,
            )
        )

    show_changelog = tree.get_bool("showChangelog")
    if show_changelog is None:
        show_changelog = SHOW_CHANGELOG_DEFAULT
        notifications.append(
            LoadNotification(
                kind=NotificationKind.MISSING_SHOW_FLAG,
                message="Missing showChangelog field, assuming it is shown",
                field="showChangelog",
                value=SHOW_CHANGELOG_DEFAULT,
            )
        )

    homepage = tree.get_field("website")
    if homepage is None:
        homepage = tree.get_field("homepage")

    entries = []
    for block in tree.get_child_blocks(VERSION_TAG):
        try:
            entries.append(load_change_entry(block))
        except VersionParseError as e:
            notifications.append(
                LoadNotification(
                    kind=NotificationKind.INVALID_VERSION,
                    message=f"Skipping version block: {e}",
                    field="version",
                    value=block.get_field("version"),
                )
            )

    changelog = ModChangelog(
        mod_name=mod_name,
        entries=tuple(entries),
        show_changelog=show_changelog,
        author=tree.get_field("author"),
        license=tree.get_field("license"),
        homepage=homepage,
        homepage_validated=validate_homepage(homepage),
    )
    return ChangelogLoadResult(changelog=changelog, notifications=notifications)


class ChangelogLoader:
    """
    Finds changelog documents under a directory and builds their changelogs.

    Documents are JSON files holding one or more ``KERBALCHANGELOG`` blocks.
    The directory a document lives in, relative to the root, is the fallback
    mod name. Missing show flags are written back to the document.
    """

    def __init__(self, root_dir: str | Path, persist_defaults: bool = True):
        """Initialize loader.

        Args:
            root_dir: Directory searched recursively for ``*.json`` documents
            persist_defaults: Write defaulted fields back to their documents
        """
        self.logger = get_logger(__name__)
        self.root_dir = Path(root_dir)
        self.persist_defaults = persist_defaults

    def _fallback_name(self, document: Path) -> str:
        try:
            relative = document.parent.relative_to(self.root_dir).as_posix()
        except ValueError:
            return document.parent.name or document.stem
        return relative if relative != "." else document.stem

    def _read_document(self, document: Path) -> dict:
        try:
            with open(document, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            # ValueError covers both bad JSON and bad UTF-8
            raise ChangelogLoadError(f"Failed to read {document}: {e}") from e

        if not isinstance(data, dict):
            raise ChangelogLoadError(f"Expected an object at the top of {document}")
        return data

    def _changelog_blocks(self, data: dict) -> list[DictConfigTree]:
        blocks = DictConfigTree(data).get_child_blocks(CHANGELOG_TAG)
        if not blocks and ("modName" in data or VERSION_TAG in data):
            # A bare document is a single changelog block.
            blocks = [DictConfigTree(data)]
        return blocks

    def _write_back(
        self,
        document: Path,
        data: dict,
        pending: list[tuple[DictConfigTree, ChangelogLoadResult]],
    ) -> None:
        for block, result in pending:
            for notification in result.needs_persist:
                # Blocks wrap the same dicts that were read from the document.
                block.data[notification.field] = notification.value

        try:
            with open(document, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            self.logger.error(f"Unable to write default fields to {document}: {e}")

    def _report(self, document: Path, result: ChangelogLoadResult) -> None:
        log = self.logger.bind(mod=result.changelog.mod_name, document=str(document))
        for notification in result.notifications:
            if notification.kind is NotificationKind.MISSING_SHOW_FLAG:
                log.info(notification.message)
            else:
                log.warning(notification.message)

    def load_document(self, document: str | Path) -> list[ModChangelog]:
        """Load every changelog block in one document.

        Raises:
            ChangelogLoadError: If the document cannot be read
        """
        document = Path(document)
        with trace_operation("load_changelog_document", {"document": str(document)}):
            data = self._read_document(document)
            fallback = self._fallback_name(document)

            changelogs = []
            pending = []
            for block in self._changelog_blocks(data):
                result = load_changelog(block, fallback)
                self._report(document, result)
                if result.needs_persist:
                    pending.append((block, result))
                changelogs.append(result.changelog)

            if pending and self.persist_defaults:
                self._write_back(document, data, pending)
        return changelogs

    @trace_function("load_changelogs")
    def load_all(self) -> list[ModChangelog]:
        """Load all changelogs under the root directory, skipping unreadable ones."""
        if not self.root_dir.is_dir():
            self.logger.warning(f"Changelog directory not found: {self.root_dir}")
            return []

        changelogs: list[ModChangelog] = []
        for document in sorted(self.root_dir.rglob("*.json")):
            try:
                changelogs.extend(self.load_document(document))
            except ChangelogLoadError as e:
                self.logger.warning(str(e))
                continue

        self.logger.info(f"Loaded {len(changelogs)} changelogs from {self.root_dir}")
        return changelogs

    def load_visible(self) -> list[ModChangelog]:
        """Changelogs whose ``showChangelog`` flag is set."""
        return [cl for cl in self.load_all() if cl.show_changelog]
