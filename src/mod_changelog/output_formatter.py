"""
Plain-text rendering of changelog views for the console.
"""

from .data_models import ModChangelog
from .selector import DisplaySelector, DisplayState


class ChangelogFormatter:
    """Turns selector state into text blocks."""

    def __init__(self, width: int = 60):
        self.width = width

    def header(self, changelog: ModChangelog) -> str:
        lines = [changelog.mod_name]
        if changelog.author:
            lines.append(f"Created by: {changelog.author}")
        if changelog.license:
            lines.append(f"Licensed under the {changelog.license} license")
        if changelog.homepage_url:
            lines.append(f"Homepage: {changelog.homepage_url}")
        return "\n".join(lines)

    def title(self, changelog: ModChangelog) -> str:
        highest = changelog.highest_version
        if highest is None:
            return changelog.mod_name
        return f"{changelog.mod_name} {highest}"

    def format_single(self, selector: DisplaySelector) -> str:
        changelog = selector.current
        if changelog is None:
            return ""
        lines = [
            self.title(changelog),
            "=" * self.width,
            self.header(changelog),
            "-" * self.width,
            selector.body(changelog) or "(no changes recorded)",
        ]
        return "\n".join(lines)

    def format_combined(self, selector: DisplaySelector) -> str:
        lines = [f"{selector.num_new} mods have new changes", "=" * self.width]
        for changelog in selector.combined():
            lines.append("")
            lines.append(self.header(changelog))
            lines.append("-" * self.width)
            lines.append(changelog.body(selector.seen_versions(changelog)))
        return "\n".join(lines)

    def format_listing(self, selector: DisplaySelector) -> str:
        lines = ["Changelogs", "=" * self.width]
        for index, changelog in selector.listing():
            lines.append(f"  [{index}] {self.title(changelog)}")
        return "\n".join(lines)

    def format_view(self, selector: DisplaySelector) -> str:
        """Render whatever the selector's state calls for."""
        if selector.state is DisplayState.LIST_SELECTION:
            return self.format_listing(selector)
        if selector.state is DisplayState.COMBINED_UNSEEN_VIEW:
            return self.format_combined(selector)
        if selector.state is DisplayState.SINGLE_MOD_VIEW:
            return self.format_single(selector)
        return ""
