# fintrack/db/session.py
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from fintrack.core.config import settings

DATABASE_URL = settings.DATABASE_URL
_is_sqlite = DATABASE_URL.startswith("sqlite")

# create engine and session factory
engine = create_engine(
    DATABASE_URL,
    pool_pre_ping=True,
    future=True,
    connect_args={"check_same_thread": False} if _is_sqlite else {},
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)

if _is_sqlite:
    # sqlite ships with FK enforcement off
    @event.listens_for(engine, "connect")
    def _enable_sqlite_fks(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def get_db():
    """
    FastAPI dependency that yields a SQLAlchemy Session.
    Usage:
        db = Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create any missing tables (development / test helper; production uses alembic)."""
    from fintrack.db import models  # noqa: F401  registers the mappers on Base
    from fintrack.db.base import Base

    Base.metadata.create_all(bind=engine)
