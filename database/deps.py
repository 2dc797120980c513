"""FastAPI dependencies exposing session factories and request-scoped sessions.

Routes take `get_db_write` / `get_db_read`; the recommendation engine takes
the write factory itself because its parallel fetch opens one session per
worker thread. Tests override the two factory providers to point everything
at a scratch database.
"""

from fastapi import Depends
from sqlalchemy.orm import sessionmaker

from .database import ReadSessionLocal, WriteSessionLocal


def get_write_session_factory() -> sessionmaker:
    """Return the factory for write-capable sessions."""
    return WriteSessionLocal


def get_read_session_factory() -> sessionmaker:
    """Return the factory for read-only sessions (replica when configured)."""
    return ReadSessionLocal


def get_db_write(factory: sessionmaker = Depends(get_write_session_factory)):
    """Yield a write-capable DB session for the request scope."""
    db = factory()
    try:
        yield db
    finally:
        db.close()


def get_db_read(factory: sessionmaker = Depends(get_read_session_factory)):
    """Yield a read-only DB session for the request scope."""
    db = factory()
    try:
        yield db
    finally:
        db.close()
