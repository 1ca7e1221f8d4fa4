"""
Pytest configuration and shared fixtures for backend tests.

This module provides test fixtures for:
- In-memory catalog, repositories and service
- Database sessions (in-memory SQLite for fast tests)
- FastAPI test client
- Mock mail service
"""

import os

# Must be set before the app (and its cached settings) is imported
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("USE_DB_REPOS", "false")
os.environ.setdefault("AUTH_ENABLED", "false")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from typing import Generator
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from app.application.services.city_info_service import CityInfoService
from app.core.dependencies import get_in_memory_store, get_mail_service
from app.domain.entities.city import City
from app.domain.entities.point_of_interest import PointOfInterest
from app.infrastructure.persistence import models
from app.infrastructure.persistence.db import Base
from app.infrastructure.persistence.repositories.in_memory_city_info_repository import (
    InMemoryCityInfoRepository,
)
from app.infrastructure.persistence.repositories.in_memory_city_store import InMemoryCityStore
from app.main import app


# ==============================================================================
# TEST DATA FACTORIES
# ==============================================================================

def sample_cities():
    """Antwerp (id 1) owns point 10; Paris (id 2) owns points 20 and 21."""
    return [
        City(
            id=1,
            name="Antwerp",
            description="The one with the cathedral that was never really finished.",
            points_of_interest=[
                PointOfInterest(id=10, name="Cathedral",
                                description="A Gothic style cathedral."),
            ],
        ),
        City(
            id=2,
            name="Paris",
            description="The one with that big tower.",
            points_of_interest=[
                PointOfInterest(id=20, name="Eiffel Tower", description="Iron lattice tower."),
                PointOfInterest(id=21, name="The Louvre", description="The world's largest museum."),
            ],
        ),
        City(id=3, name="New York City", description="The one with that big park."),
    ]


# ==============================================================================
# IN-MEMORY FIXTURES
# ==============================================================================

@pytest.fixture
def city_store() -> InMemoryCityStore:
    store = InMemoryCityStore()
    for city in sample_cities():
        store.add_city(city)
    return store


@pytest.fixture
def repository(city_store) -> InMemoryCityInfoRepository:
    return InMemoryCityInfoRepository(city_store)


@pytest.fixture
def mail_service() -> MagicMock:
    return MagicMock()


@pytest.fixture
def service(repository, mail_service) -> CityInfoService:
    return CityInfoService(repository=repository, mail_service=mail_service)


@pytest.fixture
def new_service(city_store, mail_service):
    """Build services over fresh units of work, like separate requests."""
    def factory() -> CityInfoService:
        return CityInfoService(InMemoryCityInfoRepository(city_store), mail_service)
    return factory


# ==============================================================================
# DATABASE FIXTURES
# ==============================================================================

@pytest.fixture(scope="function")
def test_db_engine():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Enable foreign key support for SQLite
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_session_factory(test_db_engine):
    """Session factory bound to the seeded test database."""
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=test_db_engine,
    )

    session = TestingSessionLocal()
    for city in sample_cities():
        session.add(models.City(
            id=city.id,
            name=city.name,
            description=city.description,
            points_of_interest=[
                models.PointOfInterest(id=p.id, name=p.name, description=p.description)
                for p in city.points_of_interest
            ],
        ))
    session.commit()
    session.close()

    return TestingSessionLocal


@pytest.fixture(scope="function")
def test_db_session(test_session_factory) -> Generator[Session, None, None]:
    """Create a database session for testing."""
    session = test_session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


# ==============================================================================
# API FIXTURES
# ==============================================================================

@pytest.fixture(scope="function")
def client(city_store, mail_service) -> Generator[TestClient, None, None]:
    """Create a FastAPI test client over the sample in-memory catalog."""
    app.dependency_overrides[get_in_memory_store] = lambda: city_store
    app.dependency_overrides[get_mail_service] = lambda: mail_service

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reset_environment():
    """Reset environment variables after each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


# ==============================================================================
# MARKERS
# ==============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: Mark test as an integration test"
    )
