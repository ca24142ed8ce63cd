"""Database engine and session factory. SQLite compatible with connection pooling."""
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from pharmacy.core.config import settings


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores REFERENCES clauses unless this is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, **kwargs) -> Engine:
    """Create an engine for ``url``; SQLite engines get foreign-key enforcement."""
    if url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        eng = create_engine(url, connect_args=connect_args, **kwargs)
        event.listen(eng, "connect", _enable_sqlite_foreign_keys)
        return eng

    # PostgreSQL/MySQL: QueuePool with sensible defaults
    kwargs.setdefault("pool_size", 5)
    kwargs.setdefault("max_overflow", 10)
    kwargs.setdefault("pool_timeout", 30)
    kwargs.setdefault("pool_recycle", 3600)
    kwargs.setdefault("pool_pre_ping", True)
    return create_engine(url, **kwargs)


if settings.DATABASE_URL.startswith("sqlite"):
    # NullPool keeps SQLite file connections thread-safe
    from sqlalchemy.pool import NullPool
    engine = build_engine(settings.DATABASE_URL, poolclass=NullPool)
else:
    engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
