"""Tests for changelog text rendering."""

import pytest

from src.mod_changelog.data_models import ModChangelog
from src.mod_changelog.output_formatter import ChangelogFormatter
from src.mod_changelog.selector import DisplaySelector


@pytest.fixture
def formatter():
    return ChangelogFormatter(width=10)


class TestChangelogFormatter:
    """Test ChangelogFormatter."""

    def test_header_full(self, formatter):
        """Test a header with every optional field."""
        changelog = ModChangelog(
            mod_name="Mod",
            author="Jeb",
            license="MIT",
            homepage="github.com/jeb/mod",
            homepage_validated=True,
        )

        assert formatter.header(changelog) == (
            "Mod\n"
            "Created by: Jeb\n"
            "Licensed under the MIT license\n"
            "Homepage: https://github.com/jeb/mod"
        )

    def test_header_minimal(self, formatter):
        """Test a header with only the name."""
        assert formatter.header(ModChangelog(mod_name="Mod")) == "Mod"

    def test_title(self, formatter, changelog_factory):
        """Test titles with and without versions."""
        assert formatter.title(changelog_factory("Mod", "1.0", "1.2")) == "Mod 1.2.0"
        assert formatter.title(ModChangelog(mod_name="Empty")) == "Empty"

    def test_combined_view(self, formatter, three_mods):
        """Test that the combined view lists only unseen changes."""
        changelogs, store = three_mods
        selector = DisplaySelector(changelogs, store)

        text = formatter.format_view(selector)

        assert text.startswith("2 mods have new changes")
        assert "B change in 1.1.0" in text
        assert "B change in 1.0.0" not in text
        assert "C change in 2.0.0" in text
        assert "A change" not in text

    def test_listing_view(self, formatter, three_mods):
        """Test listing lines with index, name and highest version."""
        changelogs, store = three_mods
        selector = DisplaySelector(changelogs, store, default_to_list_mode=True)

        text = formatter.format_view(selector)

        assert "[1] B 1.1.0" in text
        assert "[2] C 2.0.0" in text
        assert "[0]" not in text

    def test_single_view(self, formatter, three_mods):
        """Test the single-changelog view."""
        changelogs, store = three_mods
        selector = DisplaySelector(changelogs, store, default_to_list_mode=True)
        selector.pick(2)

        text = formatter.format_view(selector)

        assert text.splitlines()[0] == "C 2.0.0"
        assert "C change in 2.0.0" in text

    def test_single_view_without_entries(self, formatter, seen_factory):
        """Test a changelog that has no versions."""
        selector = DisplaySelector([ModChangelog(mod_name="Empty")], seen_factory())

        assert "(no changes recorded)" in formatter.format_view(selector)

    def test_hidden_view(self, formatter, three_mods):
        """Test that a closed session renders nothing."""
        changelogs, store = three_mods
        selector = DisplaySelector(changelogs, store)
        selector.close()

        assert formatter.format_view(selector) == ""
