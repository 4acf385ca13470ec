"""Context manager for database sessions used outside the request cycle."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from sqlalchemy.orm import Session

from app.db import SessionLocal


@contextmanager
def db_session(factory: Optional[Callable[[], Session]] = None) -> Iterator[Session]:
    """Yield a session, rolling back on error and always closing it."""
    db = (factory or SessionLocal)()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
