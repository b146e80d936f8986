import logging
from contextlib import contextmanager
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from logbook.database import Base, create_db_engine, create_session_factory, normalize_database_url
from logbook.errors import StorageUnavailable
from logbook.models import LogRecord
from logbook.schemas import LogEntry

logger = logging.getLogger("logbook.store")


class LogStore:
    """
    Append-only store of log entries.

    Works against any SQLAlchemy backend; SQLite and PostgreSQL are the two
    in use. Every public call opens its own session and is atomic on its own.
    Any database failure surfaces as StorageUnavailable.
    """

    def __init__(self, database_url: str):
        self.database_url = normalize_database_url(database_url)
        try:
            self.engine = create_db_engine(self.database_url)
        except (SQLAlchemyError, ImportError) as e:
            raise StorageUnavailable(f"cannot open database: {e}") from e
        self.SessionLocal = create_session_factory(self.engine)

    @contextmanager
    def _session(self, action: str):
        db: Session = self.SessionLocal()
        try:
            yield db
        except SQLAlchemyError as e:
            logger.error("Storage failure during %s: %s", action, e)
            raise StorageUnavailable(f"{action} failed: {e}") from e
        finally:
            db.close()

    def ensure_schema(self) -> None:
        """Create the logs table if it does not exist yet."""
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            logger.error("Storage failure during schema creation: %s", e)
            raise StorageUnavailable(f"schema creation failed: {e}") from e

    def insert(self, entry: LogEntry) -> None:
        with self._session("insert") as db:
            db.add(LogRecord(timestamp=entry.timestamp, content=entry.content))
            db.commit()

    def fetch_all_descending(self) -> List[LogEntry]:
        """All entries, most recent first."""
        with self._session("fetch") as db:
            rows = db.query(LogRecord).order_by(
                LogRecord.timestamp.desc(), LogRecord.id.desc()
            ).all()
            return [LogEntry.model_validate(row) for row in rows]

    def fetch_all_ascending(self) -> List[LogEntry]:
        """All entries, oldest first, so re-insertion keeps chronological ids."""
        with self._session("fetch") as db:
            rows = db.query(LogRecord).order_by(
                LogRecord.timestamp.asc(), LogRecord.id.asc()
            ).all()
            return [LogEntry.model_validate(row) for row in rows]

    def count(self) -> int:
        with self._session("count") as db:
            return db.query(func.count(LogRecord.id)).scalar() or 0

    def time_range(self) -> Tuple[Optional[datetime], Optional[datetime]]:
        """Oldest and newest timestamps, or (None, None) for an empty store."""
        with self._session("fetch") as db:
            oldest, newest = db.query(
                func.min(LogRecord.timestamp), func.max(LogRecord.timestamp)
            ).one()
            return oldest, newest

    def dispose(self) -> None:
        self.engine.dispose()
