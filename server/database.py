# server/database.py

from pathlib import Path
from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from core.config import get_settings
from models import Base


def _enable_sqlite_foreign_keys(engine):
    # SQLite ignores FOREIGN KEY clauses (and ON DELETE) unless asked per connection.
    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def _create_engine(database_url: str):
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return create_engine(database_url, pool_pre_ping=True)

    # In-memory databases live on a single connection shared by all threads.
    if url.database in (None, "", ":memory:"):
        return _enable_sqlite_foreign_keys(create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        ))

    Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return _enable_sqlite_foreign_keys(create_engine(
        database_url,
        connect_args={"check_same_thread": False}
    ))


engine = _create_engine(get_settings().database_url)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)


def init_db():
    Base.metadata.create_all(bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_db_engine():
    return engine
