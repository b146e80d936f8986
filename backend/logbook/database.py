from datetime import timezone

from sqlalchemy import create_engine, DateTime
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.types import TypeDecorator

Base = declarative_base()


def normalize_database_url(url: str) -> str:
    """
    Turn a configured storage location into a SQLAlchemy URL.

    A bare filesystem path selects a SQLite file. The ``postgres://`` scheme
    used by most hosting providers is rewritten to ``postgresql://``.
    """
    url = url.strip()
    if "://" not in url:
        return f"sqlite:///{url}"
    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    return url


def create_db_engine(url: str) -> Engine:
    url = normalize_database_url(url)
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False  # required for SQLite on uvicorn
    return create_engine(url, connect_args=connect_args, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware datetime column normalized to UTC.

    PostgreSQL keeps the offset natively (TIMESTAMPTZ). SQLite has no
    timezone support, so values are written as naive UTC and tagged with
    UTC again on the way out. Naive inputs are taken to be UTC already.
    """
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        value = value.astimezone(timezone.utc)
        if dialect.name == "sqlite":
            return value.replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
