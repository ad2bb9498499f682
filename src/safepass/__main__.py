# SafePass - Main Entry Point
#
# Interactive command loop: show / create / delete / search / exit.
# A failed operation is reported and the loop carries on; exiting always
# scrubs the clipboard first.

import argparse
import sys
from typing import List, Optional

import click

from . import __description__, __version__
from .config import APP_NAME, Settings, load_settings
from .core import EventSeverity, EventType, configure_event_logger, log_vault_event
from .terminal import ClipboardSink, MessageRenderer, Prompter
from .vault import KeyStore, RecordStore, StorageError, VaultError, VaultService

CHOICES = ["Show services", "Create service", "Delete services", "Search services", "Exit"]
EXIT_CHOICE = len(CHOICES) - 1


def display_intro(settings: Settings, keys: KeyStore) -> None:
    """Print the banner with key status and database location."""
    key_found = click.style("Yes", fg="green") if keys.exists() else click.style("No", fg="red")
    click.echo()
    click.secho(f"{APP_NAME.upper()} - {__description__}", bold=True)
    click.echo(f"Version: {__version__}")
    click.echo(f"Security key found: {key_found}")
    click.echo(f"Database: {settings.db_path}")
    click.echo()


def run_loop(service: VaultService, prompter, renderer) -> int:
    """Run the menu until the user exits. Returns the process exit status."""
    actions = [service.reveal, service.create, service.delete, service.search]

    while True:
        try:
            index = prompter.select(CHOICES, "Option")
        except click.Abort:
            index = EXIT_CHOICE

        if index == EXIT_CHOICE:
            break

        try:
            actions[index]()
        except click.Abort:
            renderer.display("info", "Operation cancelled")
        except VaultError as e:
            renderer.display("error", str(e))
            log_vault_event(
                EventType.OPERATION_FAILED,
                EventSeverity.ERROR,
                f"{CHOICES[index]} failed",
                details={"error": type(e).__name__, "reason": str(e)},
            )

    try:
        service.scrub_clipboard()
    except VaultError as e:
        renderer.display("error", str(e))

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for SafePass.
    """
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description=f"SafePass - {__description__}",
    )

    parser.add_argument(
        "--db",
        dest="db_path",
        help="Path to the services database (default: ~/safepass.db3)"
    )

    parser.add_argument(
        "--key-file",
        help="Path to the security key (default: ~/safepass.key)"
    )

    parser.add_argument(
        "--env-file",
        help="Read SAFEPASS_* settings from this .env file"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"SafePass v{__version__}"
    )

    args = parser.parse_args(argv)
    settings = load_settings(args.env_file, key_file=args.key_file, db_path=args.db_path)

    configure_event_logger(settings.log_dir)
    log_vault_event(
        EventType.SYSTEM_START,
        EventSeverity.INFO,
        "SafePass starting",
        details={"version": __version__, "db_path": str(settings.db_path)}
    )

    renderer = MessageRenderer()
    try:
        records = RecordStore(settings.db_path)
    except StorageError as e:
        renderer.display("error", str(e))
        return 1

    keys = KeyStore(settings.key_file)
    prompter = Prompter()
    service = VaultService(records, keys, prompter, renderer, ClipboardSink())

    display_intro(settings, keys)
    status = run_loop(service, prompter, renderer)

    log_vault_event(EventType.SYSTEM_STOP, EventSeverity.INFO, "SafePass stopped")
    return status


if __name__ == "__main__":
    sys.exit(main())
