"""Shared test fixtures."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ADMIN_API_KEY", "test-admin-key")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from app.database import Base, get_db as database_get_db
from app.dependencies import get_db as dependencies_get_db, get_view_cache
from app.main import app
from app.services.category_store import CategoryStore
from app.services.view_cache import ViewCache

ADMIN_HEADERS = {"X-API-Key": "test-admin-key"}


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test using in-memory SQLite."""
    # Use StaticPool to ensure all connections use the same in-memory database
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    Base.metadata.create_all(bind=engine)

    # Create session
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def view_cache():
    """A fresh view cache per test."""
    return ViewCache(enabled=True)


@pytest.fixture(scope="function")
def client(db_session, view_cache):
    """Create a test client with database and cache overrides."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[database_get_db] = override_get_db
    app.dependency_overrides[dependencies_get_db] = override_get_db
    app.dependency_overrides[get_view_cache] = lambda: view_cache
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return dict(ADMIN_HEADERS)


@pytest.fixture
def store(db_session):
    """Category store over the test session."""
    return CategoryStore(db_session)


@pytest.fixture
def electronics_tree(store):
    """Electronics > Laptops > Gaming Laptops, plus a second root Phones."""
    electronics = store.create("Electronics")
    laptops = store.create("Laptops", electronics.id)
    gaming = store.create("Gaming Laptops", laptops.id)
    phones = store.create("Phones")
    return {
        "electronics": electronics,
        "laptops": laptops,
        "gaming": gaming,
        "phones": phones,
    }
