"""
Configuration for the changelog viewer.
"""

import json
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from ..shared_utilities import get_logger

ENV_PREFIX = "KCL_"
_TRUE_VALUES = ("true", "yes", "1", "on")
_FALSE_VALUES = ("false", "no", "0", "off")


@dataclass
class ChangelogSettings:
    """User preferences that shape a display session."""

    default_changelog_selection: bool = False
    force_single_view_for_one_new: bool = True
    changelog_dir: str | None = None
    seen_versions_file: str | None = None


_BOOL_FIELDS = frozenset(f.name for f in fields(ChangelogSettings) if f.type is bool)


def _to_bool(value) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_VALUES:
            return True
        if text in _FALSE_VALUES:
            return False
    return None


class ChangelogSettingsManager:
    """Loads and saves ChangelogSettings, with environment overrides."""

    def __init__(self, config_file: str | None = None):
        """Initialize settings manager.

        Args:
            config_file: Path to the settings file, defaults to
                ``kerbal_changelog.json`` in the working directory
        """
        self.logger = get_logger(__name__)
        self.config_file = Path(config_file or "kerbal_changelog.json")
        self.settings = self._load_settings()

    def _load_settings(self) -> ChangelogSettings:
        settings = ChangelogSettings()
        known = {f.name for f in fields(ChangelogSettings)}

        if self.config_file.exists():
            try:
                with open(self.config_file, encoding="utf-8") as f:
                    data = json.load(f)
                if not isinstance(data, dict):
                    raise ValueError("settings file must hold an object")
                for key, value in data.items():
                    if key in known:
                        self._set(settings, key, value)
                    else:
                        self.logger.debug(f"Ignoring unknown setting: {key}")
            except (OSError, ValueError) as e:
                self.logger.warning(f"Failed to load settings, using defaults: {e}")
                settings = ChangelogSettings()

        self._apply_env_overrides(settings)
        return settings

    def _set(self, settings: ChangelogSettings, name: str, value) -> None:
        """Assign one setting, coercing booleans; bad values keep the current one."""
        if name in _BOOL_FIELDS:
            coerced = _to_bool(value)
            if coerced is None:
                self.logger.warning(
                    f"Ignoring non-boolean value for {name}: {value!r}"
                )
                return
            setattr(settings, name, coerced)
        elif value is None or isinstance(value, str):
            setattr(settings, name, value or None)
        else:
            self.logger.warning(f"Ignoring non-text value for {name}: {value!r}")

    def _apply_env_overrides(self, settings: ChangelogSettings) -> None:
        for f in fields(ChangelogSettings):
            raw = os.getenv(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            self._set(settings, f.name, raw)

    def save(self) -> None:
        """Write current settings to the settings file."""
        with open(self.config_file, "w", encoding="utf-8") as f:
            json.dump(asdict(self.settings), f, indent=2)
        self.logger.debug(f"Settings saved to {self.config_file}")
