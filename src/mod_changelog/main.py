"""
Main CLI entry point for the changelog viewer.
"""

import click
from dotenv import load_dotenv

from ..shared_utilities import configure_logging, get_logger
from .config import ChangelogSettingsManager
from .loader import ChangelogLoader
from .output_formatter import ChangelogFormatter
from .seen_store import JsonSeenVersionStore
from .selector import DisplaySelector, DisplayState
from .version import Version

# Load environment variables from .env file
load_dotenv()

DEFAULT_SEEN_FILE = "seen_versions.json"

COMMAND_HELP = (
    "n: next  p: previous  l: listing  c: close listing  o: toggle old changes  "
    "s: toggle start in listing  <number>: pick  q: quit"
)


def record_displayed(
    selector: DisplaySelector, displayed: dict[str, set[Version]]
) -> None:
    """Add the versions on screen in the current view to ``displayed``."""
    for changelog, entries in selector.displayed_entries():
        displayed.setdefault(changelog.mod_name, set()).update(
            entry.version for entry in entries
        )


def run_command(
    selector: DisplaySelector,
    settings_manager: ChangelogSettingsManager,
    command: str,
) -> bool:
    """Apply one interactive command to the selector.

    Returns:
        False when the command was not understood or not allowed right now
    """
    command = command.strip().lower()
    if command == "q":
        selector.close()
        return True
    if command in ("n", "p"):
        if selector.state is not DisplayState.SINGLE_MOD_VIEW:
            return False
        if not selector.navigation_enabled:
            return False
        if command == "n":
            selector.next()
        else:
            selector.previous()
        return True
    if command == "l":
        return selector.open_list()
    if command == "c":
        return selector.close_list()
    if command == "o":
        # The combined view always shows unseen changes only
        if selector.state is DisplayState.COMBINED_UNSEEN_VIEW:
            return False
        return selector.toggle_show_old_changes()
    if command == "s":
        if not selector.list_mode:
            return False
        settings = settings_manager.settings
        settings.default_changelog_selection = not settings.default_changelog_selection
        settings_manager.save()
        return True
    if command.isdigit():
        return selector.pick(int(command))
    return False


@click.command()
@click.option(
    "--changelog-dir",
    type=click.Path(file_okay=False),
    help="Directory searched for changelog documents",
)
@click.option(
    "--seen-file",
    type=click.Path(dir_okay=False),
    help=f"Seen versions file (default: {DEFAULT_SEEN_FILE})",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    help="Settings file (default: kerbal_changelog.json)",
)
@click.option(
    "--list/--no-list",
    "list_mode",
    default=None,
    help="Start in the listing (overrides the saved preference)",
)
@click.option(
    "--all",
    "show_all",
    is_flag=True,
    help="Include changes that were already seen",
)
@click.option(
    "-i",
    "--interactive",
    is_flag=True,
    help="Navigate the changelogs interactively",
)
@click.option(
    "--mark-seen",
    is_flag=True,
    help="Record the versions whose changes were displayed as seen afterwards",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level (default: LOG_LEVEL env var or INFO)",
)
def main(
    changelog_dir: str | None,
    seen_file: str | None,
    config_file: str | None,
    list_mode: bool | None,
    show_all: bool,
    interactive: bool,
    mark_seen: bool,
    log_level: str | None,
) -> None:
    """
    Show what changed in installed mods since they were last looked at.

    Examples:

        # Show new changes
        kerbal-changelog --changelog-dir GameData

        # Browse every changelog, including old changes
        kerbal-changelog --changelog-dir GameData --all -i

        # Acknowledge everything currently installed
        kerbal-changelog --changelog-dir GameData --mark-seen
    """
    configure_logging(level=log_level.upper() if log_level else None)
    logger = get_logger(__name__)

    try:
        settings_manager = ChangelogSettingsManager(config_file)
        settings = settings_manager.settings
        if list_mode is not None:
            settings.default_changelog_selection = list_mode

        root = changelog_dir or settings.changelog_dir
        if not root:
            click.echo("Error: no changelog directory given.", err=True)
            raise click.Abort()

        changelogs = ChangelogLoader(root).load_visible()
        seen_store = JsonSeenVersionStore(
            seen_file or settings.seen_versions_file or DEFAULT_SEEN_FILE
        )
        selector = DisplaySelector.from_settings(changelogs, seen_store, settings)
        formatter = ChangelogFormatter()

        if selector.hidden:
            click.echo("No changelogs found.")
            return

        if show_all:
            selector.set_show_old_changes(True)

        displayed: dict[str, set[Version]] = {}
        if interactive:
            while not selector.hidden:
                click.echo(formatter.format_view(selector))
                record_displayed(selector, displayed)
                click.echo("")
                command = click.prompt(COMMAND_HELP, default="q", show_default=False)
                if not run_command(selector, settings_manager, command):
                    click.echo(f"Cannot do '{command}' here.", err=True)
        else:
            click.echo(formatter.format_view(selector))
            record_displayed(selector, displayed)
            selector.close()

        if mark_seen:
            for mod_name, versions in displayed.items():
                seen_store.mark_seen(mod_name, versions)
            seen_store.save()
            click.echo(f"Marked {len(displayed)} changelogs as seen.")

    except click.Abort:
        raise
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        click.echo(f"Error: {e}", err=True)
        raise click.Abort() from e


if __name__ == "__main__":
    main()
