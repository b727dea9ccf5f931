#!/usr/bin/env python3
"""
Schema migration runner.

Applies the SQL files in migrations/ to the Postgres database behind
Supabase, in filename order, recording each applied file and its checksum.

Usage:
    python run_migrations.py                    # Apply pending migrations
    python run_migrations.py --status           # Show migration status
    python run_migrations.py --dry-run          # Show what would run
    python run_migrations.py --force 001        # Re-apply one migration

Configuration:
    SUPABASE_DB_URL=postgresql://postgres.[project-ref]:[password]@[host]:6543/postgres
"""

import argparse
import hashlib
import sys
from pathlib import Path
from typing import NamedTuple

import psycopg2
from psycopg2 import sql
from rich.console import Console
from rich.table import Table

from shared.config import get_settings

console = Console()

MIGRATIONS_DIR = Path(__file__).parent / "migrations"
MIGRATIONS_TABLE = "_migrations"


class Migration(NamedTuple):
    name: str
    path: Path
    checksum: str


def file_checksum(content: str) -> str:
    """Short content hash used to detect edits to applied migrations."""
    return hashlib.sha256(content.encode()).hexdigest()[:16]


def discover_migrations(directory: Path = MIGRATIONS_DIR) -> list[Migration]:
    """All migration files in apply order."""
    if not directory.exists():
        return []
    return [
        Migration(path.name, path, file_checksum(path.read_text()))
        for path in sorted(directory.glob("*.sql"))
    ]


def pending_migrations(
    available: list[Migration], applied: dict[str, dict]
) -> list[Migration]:
    """Migrations not yet applied. Warns about applied files that changed."""
    pending = []
    for migration in available:
        if migration.name not in applied:
            pending.append(migration)
        elif applied[migration.name]["checksum"] != migration.checksum:
            console.print(
                f"[yellow]Warning:[/yellow] {migration.name} has changed since it was applied"
            )
    return pending


def get_db_connection():
    """Connect to the database or exit with instructions."""
    settings = get_settings()

    if not settings.supabase_db_url:
        console.print("[red]Error:[/red] SUPABASE_DB_URL is not set.")
        console.print("Find it in Supabase Dashboard → Settings → Database → Connection string → URI")
        sys.exit(1)

    try:
        return psycopg2.connect(settings.supabase_db_url)
    except psycopg2.Error as e:
        console.print(f"[red]Database connection failed:[/red] {e}")
        sys.exit(1)


def ensure_migrations_table(conn) -> None:
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL(
                """
                CREATE TABLE IF NOT EXISTS {} (
                    id SERIAL PRIMARY KEY,
                    name VARCHAR(255) NOT NULL UNIQUE,
                    checksum VARCHAR(64) NOT NULL,
                    applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
                );
                """
            ).format(sql.Identifier(MIGRATIONS_TABLE))
        )
    conn.commit()


def get_applied_migrations(conn) -> dict[str, dict]:
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL("SELECT name, checksum, applied_at FROM {} ORDER BY name").format(
                sql.Identifier(MIGRATIONS_TABLE)
            )
        )
        return {
            name: {"checksum": checksum, "applied_at": applied_at}
            for name, checksum, applied_at in cur.fetchall()
        }


def apply_migration(conn, migration: Migration, dry_run: bool = False) -> None:
    """Run one migration and record it, in a single transaction."""
    if dry_run:
        console.print(f"[cyan]Would run:[/cyan] {migration.name}")
        return

    console.print(f"[blue]Running:[/blue] {migration.name}...")
    try:
        with conn.cursor() as cur:
            cur.execute(migration.path.read_text())
            cur.execute(
                sql.SQL("INSERT INTO {} (name, checksum) VALUES (%s, %s)").format(
                    sql.Identifier(MIGRATIONS_TABLE)
                ),
                (migration.name, migration.checksum),
            )
        conn.commit()
    except psycopg2.Error as e:
        conn.rollback()
        console.print(f"[red]✗[/red] {migration.name} failed: {e}")
        raise

    console.print(f"[green]✓[/green] {migration.name} applied")


def show_status(conn) -> None:
    applied = get_applied_migrations(conn)
    pending = pending_migrations(discover_migrations(), applied)

    if not applied and not pending:
        console.print("[dim]No migrations found.[/dim]")
        return

    table = Table(title="Migration Status")
    table.add_column("Migration", style="cyan")
    table.add_column("Status")
    table.add_column("Applied At")
    table.add_column("Checksum")

    for name, info in applied.items():
        applied_at = info["applied_at"].strftime("%Y-%m-%d %H:%M:%S") if info["applied_at"] else ""
        table.add_row(name, "[green]Applied[/green]", applied_at, info["checksum"])
    for migration in pending:
        table.add_row(migration.name, "[yellow]Pending[/yellow]", "", migration.checksum)

    console.print(table)


def force_migration(conn, prefix: str) -> None:
    """Forget and re-apply the single migration whose name starts with ``prefix``."""
    matches = [m for m in discover_migrations() if m.name.startswith(prefix)]

    if len(matches) != 1:
        if matches:
            console.print(f"[red]Error:[/red] Multiple migrations match '{prefix}':")
            for m in matches:
                console.print(f"  - {m.name}")
        else:
            console.print(f"[red]Error:[/red] No migration found matching '{prefix}'")
        sys.exit(1)

    migration = matches[0]
    console.print(f"[yellow]Warning:[/yellow] Force re-running migration: {migration.name}")
    if input("Continue? [y/N] ").lower() != "y":
        console.print("Aborted.")
        return

    with conn.cursor() as cur:
        cur.execute(
            sql.SQL("DELETE FROM {} WHERE name = %s").format(sql.Identifier(MIGRATIONS_TABLE)),
            (migration.name,),
        )
    conn.commit()

    apply_migration(conn, migration)


def main():
    parser = argparse.ArgumentParser(description="Apply database migrations")
    parser.add_argument("--status", action="store_true", help="Show migration status")
    parser.add_argument("--dry-run", action="store_true", help="Show what would run")
    parser.add_argument("--force", metavar="PREFIX", help="Re-apply one migration (e.g. '001')")
    args = parser.parse_args()

    console.print("[bold]Splitwise Database Migrations[/bold]\n")

    conn = get_db_connection()
    ensure_migrations_table(conn)

    try:
        if args.status:
            show_status(conn)
        elif args.force:
            force_migration(conn, args.force)
        else:
            pending = pending_migrations(discover_migrations(), get_applied_migrations(conn))
            if not pending:
                console.print("[green]All migrations are up to date![/green]")
                return

            console.print(f"Found {len(pending)} pending migration(s):")
            for migration in pending:
                apply_migration(conn, migration, dry_run=args.dry_run)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
