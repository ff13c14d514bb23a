#!/usr/bin/env python3
"""CLI entry point for the Sentiary localization sync."""

import argparse
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .core.auth import SentiaryAuth
from .core.cache import CacheMarker
from .core.client import SentiaryClient
from .core.languages import OutputLayout, resolve_languages
from .core.worker import SyncWorker
from .errors import ConfigurationError, SyncError
from .models.config import DEFAULT_CONFIG_FILENAME, SyncConfig
from .models.project import format_timestamp, load_project_info, save_project_info

console = Console()


def _load_config(args: argparse.Namespace) -> SyncConfig | None:
    """Load the YAML config named on the command line."""
    config_path = Path(args.config)

    if not config_path.exists():
        console.print(f"[red]Config not found: {escape(str(config_path))}")
        return None

    try:
        return SyncConfig.load(config_path)
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {escape(str(e))}")
        return None


def _make_auth(config: SyncConfig) -> SentiaryAuth:
    """Build credentials from the config file with environment fallbacks."""
    return SentiaryAuth(
        project_id=config.project_id,
        base_url=config.base_url,
        request_timeout_millis=config.request_timeout_millis,
    )


def cmd_verify_auth(args: argparse.Namespace) -> int:
    """Verify API authentication."""
    config = _load_config(args)
    if config is None:
        return 1

    console.print("Verifying Sentiary API credentials...", style="blue")

    try:
        with SentiaryClient(_make_auth(config)) as client:
            if client.verify_connection():
                console.print("[green]Authentication successful!")
                return 0
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {escape(str(e))}")
    except SyncError as e:
        console.print(f"[red]Authentication failed: {escape(str(e))}")

    return 1


def cmd_sync(args: argparse.Namespace) -> int:
    """Download localizations and build language overrides."""
    config = _load_config(args)
    if config is None:
        return 1

    if args.verbose:
        config.settings.verbose = True

    if args.force_update:
        console.print("[yellow](FORCE - ignoring the cache)")

    try:
        with SentiaryClient(_make_auth(config)) as client:
            result = SyncWorker(client, config, force_update=args.force_update, console=console).sync()
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {escape(str(e))}")
        return 1
    except SyncError as e:
        console.print(f"[red]Sync failed: {escape(str(e))}")
        return 1

    if not result.did_work:
        return 0

    console.print(
        f"\n[bold]Summary:[/bold] {len(result.fetched)} downloaded, "
        f"{len(result.derived)} created from fallbacks"
        + (", cache updated" if result.cache_updated else "")
    )
    console.print("[green]Localizations updated")
    return 0


def cmd_info(args: argparse.Namespace) -> int:
    """Show project info from Sentiary."""
    config = _load_config(args)
    if config is None:
        return 1

    try:
        with SentiaryClient(_make_auth(config)) as client:
            info = client.get_project_info()
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {escape(str(e))}")
        return 1
    except SyncError as e:
        console.print(f"[red]Failed to fetch project info: {escape(str(e))}")
        return 1

    console.print(f"\n[bold]Project:[/bold] {escape(info.name)} ({escape(info.id)})")
    console.print(f"[bold]Terms Last Modified:[/bold] {format_timestamp(info.terms_last_modified)}")

    table = Table(title="\nLanguages")
    table.add_column("Language")
    table.add_column("Status")
    for language in info.languages:
        if language in config.disabled_languages:
            status = "[yellow]Disabled"
        elif language == config.default_language:
            status = "[green]Default"
        else:
            status = "Enabled"
        table.add_row(language, status)
    console.print(table)

    if args.save:
        save_project_info(config.settings.project_info_file, info)
        console.print(f"[green]Saved project info to {escape(str(config.settings.project_info_file))}")

    return 0


def cmd_status(args: argparse.Namespace) -> int:
    """Show cache and output file status without contacting Sentiary."""
    config = _load_config(args)
    if config is None:
        return 1

    marker = CacheMarker(config.caching)
    status = marker.get_status_summary()

    console.print(f"\n[bold]Cache File:[/bold] {escape(status['cache_file'])}")
    console.print(f"[bold]Caching Enabled:[/bold] {'Yes' if status['enabled'] else 'No'}")
    console.print(f"[bold]Last Modified:[/bold] {status['last_modified'] or 'Never'}")

    info = load_project_info(config.settings.project_info_file)
    if info is None:
        console.print("\n[dim]No saved project info. Run 'info --save' first.[/dim]")
        return 0

    languages = resolve_languages(info.languages, config.language_overrides, config.disabled_languages)
    layout = OutputLayout(languages, config.outputs.values(), config.default_language)

    table = Table(title="\nOutput Files")
    table.add_column("Output")
    table.add_column("Language")
    table.add_column("Path")
    table.add_column("Exists")

    for target in layout.targets:
        for language in sorted(languages.expected):
            path = layout.output_file_for(language, target)
            exists = "[green]Yes" if path.is_file() else "[red]No"
            table.add_row(target.name, language, escape(str(path)), exists)

    console.print(table)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="sentiary-sync",
        description="Download localization files from Sentiary",
    )
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_FILENAME,
        help=f"Path to the YAML config (default: {DEFAULT_CONFIG_FILENAME})",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # verify-auth command
    subparsers.add_parser("verify-auth", help="Verify API authentication")

    # sync command
    sync_parser = subparsers.add_parser("sync", help="Download and export localization files")
    sync_parser.add_argument(
        "--force-update",
        action="store_true",
        help="Forces the download of the localization files, ignoring the cache.",
    )
    sync_parser.add_argument("--verbose", action="store_true", help="Show cache decisions")

    # info command
    info_parser = subparsers.add_parser("info", help="Show project info from Sentiary")
    info_parser.add_argument("--save", action="store_true", help="Save project info as JSON")

    # status command
    subparsers.add_parser("status", help="Show cache and output file status")

    args = parser.parse_args(argv)

    if args.command == "verify-auth":
        return cmd_verify_auth(args)
    elif args.command == "sync":
        return cmd_sync(args)
    elif args.command == "info":
        return cmd_info(args)
    elif args.command == "status":
        return cmd_status(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
