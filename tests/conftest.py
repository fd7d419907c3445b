# tests/conftest.py
"""
Global test bootstrap
- Points the app at a private in-memory SQLite database BEFORE it is imported
- Rebuilds the schema for every test
- Exposes a TestClient and a seeded fixture set (see tests/utils/factory.py)
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DISCONNECT_POLL_INTERVAL"] = "0.01"

import pytest
from fastapi.testclient import TestClient

from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.main import app
from tests.utils.factory import seed


@pytest.fixture(autouse=True)
def database():
    """Fresh tables for every test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client():
    # Unhandled errors become 500 responses instead of being re-raised in the test
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture()
def seeded(db_session):
    seed(db_session)
    # Reads in tests should see what the API committed, not this session's cache
    db_session.expire_all()
    return db_session
