"""Database connection and session management for energyplanner.

The default store is an in-memory SQLite database shared across the process
(nothing survives a restart). Point `DATABASE_URL` at a SQLite file or another
SQLAlchemy URL to keep data around.
"""

import os
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from sqlalchemy.pool import StaticPool
from dotenv import load_dotenv

load_dotenv()

# Database URL - in-memory SQLite by default
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///:memory:")


def _is_sqlite_url(database_url: str) -> bool:
    return "sqlite" in (database_url or "")


def _is_in_memory_sqlite_url(database_url: str) -> bool:
    return _is_sqlite_url(database_url) and (
        database_url.rstrip("/").endswith(":memory:") or database_url.rstrip("/") in ("sqlite:", "sqlite:/", "sqlite://")
    )


def get_engine_kwargs(database_url: str) -> dict:
    """Return deterministic create_engine kwargs for a DB URL.

    This is separated to allow deterministic unit testing without connecting.
    """
    engine_kwargs: dict = {
        "echo": os.getenv("DEBUG", "False").lower() == "true",
        "pool_pre_ping": True,
    }

    if _is_sqlite_url(database_url):
        # SQLite-specific setting required for FastAPI concurrency in a single process.
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if _is_in_memory_sqlite_url(database_url):
            # Every connection must see the same in-memory database.
            engine_kwargs["poolclass"] = StaticPool
        return engine_kwargs

    engine_kwargs["pool_size"] = int(os.getenv("DB_POOL_SIZE", "5"))
    engine_kwargs["max_overflow"] = int(os.getenv("DB_MAX_OVERFLOW", "5"))
    engine_kwargs["pool_timeout"] = int(os.getenv("DB_POOL_TIMEOUT_SEC", "30"))
    return engine_kwargs


def build_engine(database_url: str) -> Engine:
    return create_engine(database_url, **get_engine_kwargs(database_url))


# Create engine (module-level singleton)
engine = build_engine(DATABASE_URL)


@event.listens_for(engine, "connect")
def set_sqlite_pragmas(dbapi_conn, connection_record):
    """Enable foreign keys on SQLite connections."""
    if _is_sqlite_url(DATABASE_URL):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for declarative models
Base = declarative_base()


def get_db() -> Session:
    """Get database session (dependency for FastAPI)."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Initialize database schema."""
    # Import models so their tables are registered on Base.metadata
    from energyplanner.database import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
