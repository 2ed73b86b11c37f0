"""
Shared fixtures: an in-memory SQLite database per test and a TestClient
wired to it through the get_db dependency.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import avotrace.models  # noqa: F401
from avotrace.core.database import Base, get_db
from avotrace.main import app
from avotrace.repositories import InMemoryTraceabilityRepository
from avotrace.services.lot_lifecycle import LotLifecycleService


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(engine):
    testing_session = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = testing_session()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def farm(client):
    response = client.post(
        "/api/farms",
        json={"name": "Ferme Atlas", "location": "Larache", "code": "FA-001"},
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def repository():
    return InMemoryTraceabilityRepository()


@pytest.fixture
def service(repository):
    return LotLifecycleService(repository, default_operator="System User", max_attempts=3)


@pytest.fixture
def memory_farm(repository):
    farm = repository.create_farm({"name": "Ferme Atlas", "location": "Larache", "code": "FA-001", "active": True})
    repository.commit()
    return farm
