"""Shared test setup: test environment, SQLite database and clean app state."""

import os

os.environ["ENV"] = "test"
os.environ.setdefault("TEST_DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402

from app.core.app_state import state  # noqa: E402
from app.db import Base, SessionLocal, engine  # noqa: E402
import app.models  # noqa: E402,F401

pytest_plugins = ["tests.fixtures.chatbot_fixtures"]


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db():
    """Database session; every table is emptied after the test."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        for table in reversed(Base.metadata.sorted_tables):
            session.execute(table.delete())
        session.commit()
        session.close()


@pytest.fixture(autouse=True)
def clear_chats():
    yield
    state.chats.clear()
