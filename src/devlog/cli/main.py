"""
devlog CLI entry point.

Commands:
  devlog enable                 — turn diagnostic logging on
  devlog disable                — turn diagnostic logging off
  devlog status                 — show the switch and storage paths
  devlog show                   — print stored messages
  devlog clear                  — delete stored messages
  devlog write <message>        — append a message through the logger
  devlog db info                — database path, schema version, row count
  devlog version                — show version
"""

from __future__ import annotations

import json
import logging
import sys

import click
from rich.console import Console

from devlog import __version__
from devlog.cli._db import db_group
from devlog.core.constants import ExitCode, Severity

console = Console()
err_console = Console(stderr=True)

_SEVERITY_CHOICES = {
    "error": Severity.ERROR,
    "warning": Severity.WARNING,
    "info": Severity.INFO,
    "debug": Severity.DEBUG,
}


def configure_logging(level: str) -> None:
    """Send stdlib logging to stderr at *level*. No-op if the host already configured logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "--version", "-V", message="devlog %(version)s")
@click.option(
    "--log-level",
    envvar="DEVLOG_LOG_LEVEL",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Level for devlog's own stderr logging.",
)
def cli(log_level: str) -> None:
    """devlog — on-device diagnostic log."""
    configure_logging(log_level)


# ---------------------------------------------------------------------------
# enable / disable / status
# ---------------------------------------------------------------------------


def _set_enabled(value: bool) -> None:
    from devlog.core.config import DevLoggerSettings, save_settings
    from devlog.core.exceptions import ConfigError

    try:
        path = save_settings(DevLoggerSettings(enabled=value))
    except ConfigError as exc:
        err_console.print(f"[red]Settings error:[/red] {exc}")
        sys.exit(ExitCode.CONFIG_ERROR)
    state = "[green]enabled[/green]" if value else "[yellow]disabled[/yellow]"
    console.print(f"Diagnostic logging {state} ({path})")


@cli.command()
def enable() -> None:
    """Turn diagnostic logging on."""
    _set_enabled(True)


@cli.command()
def disable() -> None:
    """Turn diagnostic logging off. Stored messages are kept."""
    _set_enabled(False)


@cli.command()
@click.option("--json", "as_json", is_flag=True, default=False)
def status(as_json: bool) -> None:
    """Show whether logging is enabled and where data is stored."""
    from devlog.core.config import default_db_path, is_logging_enabled, settings_file_path
    from devlog.core.exceptions import ConfigError

    settings_path = settings_file_path()
    try:
        enabled = is_logging_enabled(settings_path)
    except ConfigError as exc:
        err_console.print(f"[red]Settings error:[/red] {exc}")
        sys.exit(ExitCode.CONFIG_ERROR)

    data = {
        "enabled": enabled,
        "settings_path": str(settings_path),
        "db_path": str(default_db_path()),
    }
    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    state = "[green]enabled[/green]" if enabled else "[yellow]disabled[/yellow]"
    console.print(f"[bold]Diagnostic logging[/bold]: {state}")
    console.print(f"Settings: {data['settings_path']}")
    console.print(f"Database: {data['db_path']}")


# ---------------------------------------------------------------------------
# show / clear / write
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--json", "as_json", is_flag=True, default=False, help="Raw rows as JSON")
def show(as_json: bool) -> None:
    """Print stored messages, oldest first."""
    from devlog.core.exceptions import StoreError
    from devlog.core.logger import DevLogger

    log = DevLogger()
    try:
        if as_json:
            rows = [{**row.to_dict(), "severity_name": row.severity_name} for row in log.rows()]
            click.echo(json.dumps(rows, indent=2))
            return
        lines = log.messages
    except StoreError as exc:
        err_console.print(f"[red]Storage error:[/red] {exc}")
        sys.exit(ExitCode.STORAGE_ERROR)

    if not lines:
        console.print("[dim]No messages recorded.[/dim]")
        return
    for line in lines:
        # plain echo: messages may contain rich markup characters
        click.echo(line)


@cli.command()
@click.option("--yes", "-y", is_flag=True, default=False, help="Do not ask for confirmation")
def clear(yes: bool) -> None:
    """Delete all stored messages."""
    from devlog.core.config import default_db_path
    from devlog.core.exceptions import StoreError
    from devlog.core.store.database import LogStore

    if not yes and not click.confirm("Delete all stored messages?", default=False):
        console.print("Aborted.")
        return

    try:
        with LogStore(default_db_path()) as store:
            removed = store.count()
            store.clear()
    except StoreError as exc:
        err_console.print(f"[red]Storage error:[/red] {exc}")
        sys.exit(ExitCode.STORAGE_ERROR)
    console.print(f"[green]Cleared {removed} message(s).[/green]")


@cli.command()
@click.argument("message")
@click.option(
    "--severity",
    "-s",
    type=click.Choice(list(_SEVERITY_CHOICES), case_sensitive=False),
    default="info",
    show_default=True,
)
@click.option("--event-id", "-e", type=int, default=0, show_default=True)
def write(message: str, severity: str, event_id: int) -> None:
    """Append MESSAGE to the log (no-op while disabled)."""
    from devlog.core.exceptions import StoreError
    from devlog.core.logger import DevLogger
    from devlog.core.store.database import LogStore

    log = DevLogger()
    if not log.enabled:
        console.print("[yellow]Diagnostic logging is disabled; message not recorded.[/yellow]")
        return
    # LogStore rather than the facade, which would drop a failed write silently
    try:
        with LogStore(log.db_path) as store:
            store.append(_SEVERITY_CHOICES[severity.lower()], event_id, message)
    except StoreError as exc:
        err_console.print(f"[red]Storage error:[/red] {exc}")
        sys.exit(ExitCode.STORAGE_ERROR)


# ---------------------------------------------------------------------------
# db / version
# ---------------------------------------------------------------------------


cli.add_command(db_group, "db")


@cli.command()
def version() -> None:
    """Show version."""
    console.print(f"devlog {__version__}")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
