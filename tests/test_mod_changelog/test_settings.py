"""Tests for changelog viewer settings."""

import json
from dataclasses import fields

import pytest

from src.mod_changelog.config import (
    ENV_PREFIX,
    ChangelogSettings,
    ChangelogSettingsManager,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove settings overrides from the environment."""
    for f in fields(ChangelogSettings):
        monkeypatch.delenv(ENV_PREFIX + f.name.upper(), raising=False)


class TestChangelogSettings:
    """Test ChangelogSettings dataclass."""

    def test_defaults(self):
        """Test default preferences."""
        settings = ChangelogSettings()

        assert settings.default_changelog_selection is False
        assert settings.force_single_view_for_one_new is True
        assert settings.changelog_dir is None
        assert settings.seen_versions_file is None


class TestChangelogSettingsManager:
    """Test ChangelogSettingsManager."""

    def test_missing_file_gives_defaults(self, tmp_path):
        """Test that a missing settings file is not an error."""
        manager = ChangelogSettingsManager(str(tmp_path / "missing.json"))

        assert manager.settings == ChangelogSettings()

    def test_load_from_file(self, tmp_path):
        """Test reading known keys and ignoring unknown ones."""
        path = tmp_path / "settings.json"
        path.write_text(
            json.dumps(
                {
                    "default_changelog_selection": True,
                    "changelog_dir": "GameData",
                    "skin": "KSP",
                }
            )
        )

        settings = ChangelogSettingsManager(str(path)).settings

        assert settings.default_changelog_selection is True
        assert settings.changelog_dir == "GameData"

    def test_corrupt_file_gives_defaults(self, tmp_path):
        """Test that a corrupt settings file falls back to defaults."""
        path = tmp_path / "settings.json"
        path.write_text("not json")

        assert ChangelogSettingsManager(str(path)).settings == ChangelogSettings()

    def test_env_overrides(self, tmp_path, monkeypatch):
        """Test KCL_* environment overrides."""
        monkeypatch.setenv("KCL_DEFAULT_CHANGELOG_SELECTION", "yes")
        monkeypatch.setenv("KCL_FORCE_SINGLE_VIEW_FOR_ONE_NEW", "false")
        monkeypatch.setenv("KCL_SEEN_VERSIONS_FILE", "/tmp/seen.json")

        settings = ChangelogSettingsManager(str(tmp_path / "none.json")).settings

        assert settings.default_changelog_selection is True
        assert settings.force_single_view_for_one_new is False
        assert settings.seen_versions_file == "/tmp/seen.json"

    def test_save(self, tmp_path):
        """Test persisting settings."""
        path = tmp_path / "settings.json"
        manager = ChangelogSettingsManager(str(path))
        manager.settings.default_changelog_selection = True

        manager.save()

        assert json.loads(path.read_text())["default_changelog_selection"] is True
        assert ChangelogSettingsManager(str(path)).settings.default_changelog_selection

    def test_file_booleans_are_coerced(self, tmp_path):
        """Test that text booleans in the settings file are parsed, not kept."""
        path = tmp_path / "settings.json"
        path.write_text(
            json.dumps(
                {
                    "default_changelog_selection": "false",
                    "force_single_view_for_one_new": "no",
                }
            )
        )

        settings = ChangelogSettingsManager(str(path)).settings

        assert settings.default_changelog_selection is False
        assert settings.force_single_view_for_one_new is False

    def test_invalid_boolean_keeps_default(self, tmp_path):
        """Test that a value that is not a boolean is ignored."""
        path = tmp_path / "settings.json"
        path.write_text(
            json.dumps({"default_changelog_selection": "maybe", "changelog_dir": 5})
        )

        settings = ChangelogSettingsManager(str(path)).settings

        assert settings.default_changelog_selection is False
        assert settings.changelog_dir is None
