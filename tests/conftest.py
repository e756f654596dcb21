"""
Shared test fixtures.

Sets up an isolated SQLite database so tests never touch the real
one, and pins "today" for the API.
"""

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from solar_ledger.api.dependencies import get_clock
from solar_ledger.main import app
from solar_ledger.models.base import Base, get_db
from solar_ledger.services.catalogue import Catalogue

from tests.factories import CARDS, CATEGORIES


# SQLite keeps the suite free of any database infrastructure.
TEST_DATABASE_URL = "sqlite:///./test.db"

TODAY = date(2024, 6, 15)

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop them after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Provide a database session for direct store testing."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client(db_session):
    """
    Test client bound to the test session, with today pinned to
    TODAY.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: (lambda: TODAY)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def catalogue():
    return Catalogue(categories=CATEGORIES, cards=CARDS)
