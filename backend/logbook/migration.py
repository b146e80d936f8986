"""
One-shot copy of every log from one store into another.

Used when switching storage backends (e.g. a SQLite file to PostgreSQL).
Entries are read oldest first so the destination assigns its identifiers in
chronological order. The first failed insert stops the run; entries already
copied stay in the destination. Not safe against concurrent writers to the
source.
"""
import logging

from logbook.errors import StorageUnavailable
from logbook.store import LogStore

logger = logging.getLogger("logbook.migration")


def migrate(source: LogStore, dest: LogStore) -> int:
    """Copy all entries from ``source`` into ``dest``; return how many were copied."""
    entries = source.fetch_all_ascending()
    logger.info("Fetched %d logs from %s.", len(entries), source.engine.url.render_as_string(hide_password=True))

    dest.ensure_schema()
    inserted = 0
    try:
        for entry in entries:
            dest.insert(entry)
            inserted += 1
    except StorageUnavailable:
        logger.error("Migration stopped after %d of %d logs.", inserted, len(entries))
        raise

    logger.info("Inserted %d logs into %s.", inserted, dest.engine.url.render_as_string(hide_password=True))
    return inserted


def migrate_urls(source_url: str, dest_url: str) -> int:
    """Open both stores from their URLs, migrate, and release the connections."""
    source = LogStore(source_url)
    try:
        dest = LogStore(dest_url)
        try:
            return migrate(source, dest)
        finally:
            dest.dispose()
    finally:
        source.dispose()
