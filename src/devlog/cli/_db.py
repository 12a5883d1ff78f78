"""Database inspection CLI commands."""

from __future__ import annotations

import json
import sqlite3
import sys

import click
from rich.console import Console

from devlog.core.constants import TABLE_NAME, ExitCode

console = Console()


@click.group()
def db_group() -> None:
    """Log database inspection."""


@db_group.command("info")
@click.option("--json", "as_json", is_flag=True, default=False)
def db_info(as_json: bool) -> None:
    """Show database path, schema version, and row count."""
    from devlog.core.config import default_db_path

    db_path = default_db_path()

    if not db_path.exists():
        if as_json:
            click.echo(json.dumps({"exists": False, "path": str(db_path)}))
        else:
            console.print(f"Database does not exist yet: {db_path}")
            console.print("It is created on the first message written while logging is enabled.")
        return

    from devlog.core.store.migrations import LATEST_SCHEMA_VERSION, get_user_version, table_exists

    # Raw connection, no LogStore: an outdated schema is reported, not dropped
    try:
        conn = sqlite3.connect(str(db_path))
    except sqlite3.Error as exc:
        console.print(f"[red]Cannot open database:[/red] {exc}")
        sys.exit(ExitCode.STORAGE_ERROR)
    try:
        version = get_user_version(conn)
        rows = -1  # table missing
        if table_exists(conn):
            row = conn.execute(f"SELECT count(*) FROM {TABLE_NAME}").fetchone()  # noqa: S608
            rows = row[0] if row else 0
    except sqlite3.Error as exc:
        console.print(f"[red]Cannot read database:[/red] {exc}")
        sys.exit(ExitCode.STORAGE_ERROR)
    finally:
        conn.close()

    size_kb = db_path.stat().st_size / 1024

    if as_json:
        click.echo(
            json.dumps(
                {
                    "exists": True,
                    "path": str(db_path),
                    "schema_version": version,
                    "latest_version": LATEST_SCHEMA_VERSION,
                    "size_kb": round(size_kb, 1),
                    "messages": rows,
                },
                indent=2,
            )
        )
        return

    console.print(f"[bold]Database[/bold]: {db_path}")
    console.print(f"Schema version: {version} (latest: {LATEST_SCHEMA_VERSION})")
    if version != LATEST_SCHEMA_VERSION:
        console.print(
            "[yellow]Stored messages will be dropped the next time the store is opened.[/yellow]"
        )
    console.print(f"Size: {size_kb:.1f} KB")
    status = f"{rows}" if rows >= 0 else "[red]missing[/red]"
    console.print(f"Messages: {status}")
