"""
Pytest fixtures for the test suite.

Data-layer tests use an in-memory SQLite engine and a session that rolls back
after each test, so tests do not affect each other.
"""
from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker


TEST_DB_URL = "sqlite:///:memory:"


@pytest.fixture
def engine():
    """Create a fresh in-memory SQLite engine for each test."""
    return create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        echo=False,
    )


@pytest.fixture
def tables(engine):
    """Create all ORM tables on the test engine."""
    from app.db.base import Base
    import app.models.security  # noqa: F401  (register tables)

    Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture
def connection(tables):
    """One connection + outer transaction per test, rolled back at the end."""
    connection = tables.connect()
    transaction = connection.begin()
    yield connection
    transaction.rollback()
    connection.close()


@pytest.fixture
def session_factory(connection):
    """sessionmaker bound to the test connection (used by SqlUserLookup)."""
    return sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        class_=Session,
    )


@pytest.fixture
def db_session(session_factory):
    """
    Provide a Session bound to the test DB; roll back after each test.

    The outer transaction is rolled back so the next test gets a clean state.
    """
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def seeded_session(db_session):
    """db_session with the demo users u1, u2 (User), a1, a2 (Admin), s1 (SuperAdmin)."""
    from app.db.init_db import _seed

    _seed(db_session)
    return db_session
