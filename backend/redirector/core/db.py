# backend/redirector/core/db.py
from __future__ import annotations

from sqlalchemy import Engine
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import DeclarativeBase, sessionmaker


class Base(DeclarativeBase):
    pass


# Bound to the bootstrapped engine at startup (see bind_engine)
SessionLocal = sessionmaker(autoflush=False, autocommit=False)

# PostgreSQL SQLSTATE duplicate_table
DUPLICATE_TABLE_SQLSTATE = "42P07"


def bind_engine(engine: Engine) -> None:
    SessionLocal.configure(bind=engine)


def get_db():
    """FastAPI dependency: yields sync SQLAlchemy Session and closes it after request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def is_already_exists(exc: Exception) -> bool:
    """True if the backend rejected a CREATE because the table is already there."""
    if not isinstance(exc, DBAPIError):
        return False
    orig = exc.orig
    # psycopg 3 exposes .sqlstate, psycopg2 .pgcode
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code == DUPLICATE_TABLE_SQLSTATE:
        return True
    return "already exists" in str(orig).lower()


# Ensure model modules are imported so SQLAlchemy knows every table
import redirector.models  # noqa: F401,E402
