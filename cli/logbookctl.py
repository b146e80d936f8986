#!/usr/bin/env python3
"""
Logbook Command Line Interface
Serves the log page, migrates logs between backends and reports statistics.
"""
import argparse
import sys
from zoneinfo import ZoneInfo

from logbook.config import StorageSettings
from logbook.errors import LogbookError
from logbook.middleware_logging import configure_logging
from logbook.migration import migrate_urls
from logbook.store import LogStore


def migrate_command(source: str, dest: str) -> int:
    """Copy every log from one database into another."""
    print(f"📦 Migrating logs from {source} to {dest}")
    try:
        count = migrate_urls(source, dest)
    except LogbookError as e:
        print(f"❌ Migration failed: {e}", file=sys.stderr)
        return 1
    print(f"✅ Migrated {count} logs")
    return 0


def stats_command(database_url: str, timezone_name: str) -> int:
    """Print entry count and the oldest/newest log times."""
    try:
        tz = ZoneInfo(timezone_name)
        store = LogStore(database_url)
    except (LogbookError, ValueError, KeyError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    try:
        count = store.count()
        oldest, newest = store.time_range()
    except LogbookError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    finally:
        store.dispose()

    print("📊 Logbook Statistics")
    print(f"• Total logs stored: {count}")
    if oldest is not None:
        print(f"• Oldest log: {oldest.astimezone(tz).strftime('%Y-%m-%d %H:%M')}")
        print(f"• Newest log: {newest.astimezone(tz).strftime('%Y-%m-%d %H:%M')}")
    return 0


def main(argv=None) -> int:
    # Same environment and .env lookup as the server
    defaults = StorageSettings()

    parser = argparse.ArgumentParser(description="Logbook CLI - personal log service")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service")
    serve_parser.add_argument("--host", default=None, help="Bind address (default: HOST)")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port (default: PORT)")

    # Migrate command
    migrate_parser = subparsers.add_parser("migrate", help="Copy logs between databases")
    migrate_parser.add_argument("--source", required=True,
                                help="Source database URL or SQLite path")
    migrate_parser.add_argument("--dest", required=True,
                                help="Destination database URL or SQLite path")

    # Stats command
    stats_parser = subparsers.add_parser("stats", help="Show stored log statistics")
    stats_parser.add_argument("--database-url", default=defaults.DATABASE_URL,
                              help="Database URL or SQLite path (default: DATABASE_URL)")
    stats_parser.add_argument("--timezone", default=defaults.DISPLAY_TIMEZONE,
                              help="Display timezone (default: DISPLAY_TIMEZONE)")

    args = parser.parse_args(argv)
    configure_logging()

    if args.command == "serve":
        from logbook.main import run
        run(host=args.host, port=args.port)
        return 0
    elif args.command == "migrate":
        return migrate_command(args.source, args.dest)
    elif args.command == "stats":
        return stats_command(args.database_url, args.timezone)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
