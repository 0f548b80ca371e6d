"""
Navigation state for a changelog display session.

A session starts in one of the view states depending on how many mods have
unseen changes, and then moves between views through explicit actions until
it is closed.
"""

from collections.abc import Sequence
from enum import Enum

from ..shared_utilities import get_logger, trace_function
from .config import ChangelogSettings
from .data_models import ChangeEntry, ModChangelog
from .seen_store import SeenVersionStore
from .version import Version


class DisplayState(Enum):
    """What the presentation layer is currently showing."""

    HIDDEN = "hidden"
    LIST_SELECTION = "list_selection"
    COMBINED_UNSEEN_VIEW = "combined_unseen_view"
    SINGLE_MOD_VIEW = "single_mod_view"


class DisplaySelector:
    """
    Decides which changelog is shown and in which view.

    The seen-version store is queried every time eligibility is evaluated,
    so changes the host makes to it show up without rebuilding the selector.
    An empty collection puts the selector straight into ``HIDDEN``.
    """

    def __init__(
        self,
        changelogs: Sequence[ModChangelog],
        seen_store: SeenVersionStore,
        default_to_list_mode: bool = False,
        force_single_view_for_one_new: bool = True,
    ):
        """Initialize selector and pick the starting view.

        Args:
            changelogs: Changelogs for this session, fixed from here on
            seen_store: Source of acknowledged versions per mod
            default_to_list_mode: Start in the listing when there is a choice
            force_single_view_for_one_new: With exactly one mod to show,
                open it directly even if the listing is the default
        """
        self.logger = get_logger(__name__)
        self.changelogs: tuple[ModChangelog, ...] = tuple(changelogs)
        self.seen_store = seen_store
        self.default_to_list_mode = default_to_list_mode
        self.force_single_view_for_one_new = force_single_view_for_one_new

        self.current_index = 0
        self.show_old_changes = False
        self.num_new = 0
        self._state = DisplayState.HIDDEN

        self._start()

    @classmethod
    @trace_function("display_selector_start")
    def from_settings(
        cls,
        changelogs: Sequence[ModChangelog],
        seen_store: SeenVersionStore,
        settings: ChangelogSettings,
    ) -> "DisplaySelector":
        return cls(
            changelogs,
            seen_store,
            default_to_list_mode=settings.default_changelog_selection,
            force_single_view_for_one_new=settings.force_single_view_for_one_new,
        )

    def _start(self) -> None:
        if not self.changelogs:
            self.logger.warning("No changelogs to display")
            return

        self.num_new = sum(1 for cl in self.changelogs if self.has_unseen(cl))
        # Nothing new: fall back to the full history
        self.show_old_changes = self.num_new < 1

        if self.num_new == 1 and self.force_single_view_for_one_new:
            self._state = DisplayState.SINGLE_MOD_VIEW
        elif self.default_to_list_mode:
            self._state = DisplayState.LIST_SELECTION
        elif self.num_new > 1:
            self._state = DisplayState.COMBINED_UNSEEN_VIEW
        else:
            self._state = DisplayState.SINGLE_MOD_VIEW

        self.refresh()
        self.logger.debug(
            f"Displaying {len(self.changelogs)} changelogs",
            num_new=self.num_new,
            state=self._state.value,
        )

    @property
    def state(self) -> DisplayState:
        return self._state

    @property
    def hidden(self) -> bool:
        return self._state is DisplayState.HIDDEN

    @property
    def list_mode(self) -> bool:
        return self._state is DisplayState.LIST_SELECTION

    @property
    def current(self) -> ModChangelog | None:
        """The changelog under the cursor, or None once hidden."""
        if self.hidden:
            return None
        return self.changelogs[self.current_index]

    @property
    def navigation_enabled(self) -> bool:
        """Whether previous/next have anywhere to go."""
        if self.show_old_changes:
            return len(self.changelogs) > 1
        return self.num_new > 1

    def seen_versions(self, changelog: ModChangelog) -> frozenset[Version]:
        return self.seen_store.seen_versions(changelog.mod_name)

    def has_unseen(self, changelog: ModChangelog) -> bool:
        return changelog.has_unseen(self.seen_versions(changelog))

    def can_show(self, changelog: ModChangelog) -> bool:
        return self.show_old_changes or self.has_unseen(changelog)

    def listing(self) -> list[tuple[int, ModChangelog]]:
        """Changelogs offered in the listing, with their collection index."""
        return [(i, cl) for i, cl in enumerate(self.changelogs) if self.can_show(cl)]

    def combined(self) -> list[ModChangelog]:
        """Changelogs with unseen entries, in collection order."""
        return [cl for cl in self.changelogs if self.has_unseen(cl)]

    def body(self, changelog: ModChangelog) -> str:
        """Body text honoring the current old-changes filter."""
        seen = None if self.show_old_changes else self.seen_versions(changelog)
        return changelog.body(seen)

    def displayed_entries(self) -> list[tuple[ModChangelog, list[ChangeEntry]]]:
        """Changelog entries the current view puts on screen.

        The listing only shows titles, so it contributes nothing.
        """
        if self._state is DisplayState.COMBINED_UNSEEN_VIEW:
            return [
                (cl, cl.unseen_entries(self.seen_versions(cl)))
                for cl in self.combined()
            ]
        if self._state is DisplayState.SINGLE_MOD_VIEW:
            current = self.changelogs[self.current_index]
            if self.show_old_changes:
                return [(current, current.sorted_entries())]
            return [(current, current.unseen_entries(self.seen_versions(current)))]
        return []

    def current_body(self) -> str | None:
        current = self.current
        return self.body(current) if current is not None else None

    def refresh(self) -> None:
        """Move the cursor off a changelog that is no longer eligible."""
        if self.hidden:
            return
        if not self.can_show(self.changelogs[self.current_index]):
            self._find_valid_index(forwards=True)

    def _find_valid_index(self, forwards: bool = True) -> None:
        count = len(self.changelogs)
        # At most one full loop
        tried = 0
        while True:
            if forwards:
                self.current_index = (self.current_index + 1) % count
            else:
                self.current_index = (self.current_index + count - 1) % count
            tried += 1
            if tried >= count or self.can_show(self.changelogs[self.current_index]):
                break

    def next(self) -> ModChangelog | None:
        """Advance to the next eligible changelog in the single view."""
        if self._state is DisplayState.SINGLE_MOD_VIEW:
            self._find_valid_index(forwards=True)
        return self.current

    def previous(self) -> ModChangelog | None:
        """Go back to the previous eligible changelog in the single view."""
        if self._state is DisplayState.SINGLE_MOD_VIEW:
            self._find_valid_index(forwards=False)
        return self.current

    def open_list(self) -> bool:
        """Switch from a view to the listing; needs more than one changelog."""
        if self._state not in (
            DisplayState.SINGLE_MOD_VIEW,
            DisplayState.COMBINED_UNSEEN_VIEW,
        ):
            return False
        if len(self.changelogs) < 2:
            return False
        self._state = DisplayState.LIST_SELECTION
        return True

    def close_list(self) -> bool:
        """Leave the listing without picking anything."""
        if not self.list_mode:
            return False
        if not self.show_old_changes and self.num_new > 1:
            self._state = DisplayState.COMBINED_UNSEEN_VIEW
        else:
            self._state = DisplayState.SINGLE_MOD_VIEW
        self.refresh()
        return True

    def pick(self, index: int) -> bool:
        """Open the changelog at ``index`` from the listing.

        Returns:
            False if not in the listing or the index is not offered in it
        """
        if not self.list_mode:
            return False
        if not 0 <= index < len(self.changelogs):
            return False
        if not self.can_show(self.changelogs[index]):
            return False

        self.current_index = index
        self._state = DisplayState.SINGLE_MOD_VIEW
        self.logger.debug(f"Picked {self.changelogs[index].mod_name} from listing")
        return True

    def set_show_old_changes(self, value: bool) -> bool:
        """Include or exclude already seen changes.

        Hiding old changes is refused when nothing is new, since every
        changelog would become ineligible. The view state is unchanged.
        """
        if self.hidden:
            return False
        if not value and self.num_new == 0:
            return False
        self.show_old_changes = value
        self.refresh()
        return True

    def toggle_show_old_changes(self) -> bool:
        return self.set_show_old_changes(not self.show_old_changes)

    def close(self) -> None:
        """End the session; no further transitions happen."""
        if not self.hidden:
            self.logger.debug("Changelog display closed")
        self._state = DisplayState.HIDDEN
