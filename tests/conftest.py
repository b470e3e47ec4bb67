"""
Shared fixtures: an in-memory database seeded with the shop defaults, one
barber, one client, a 30 minute service and an API client wired to it.
"""

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from barberflow.auth import get_current_user
from barberflow.data import seed_defaults
from barberflow.db import get_session
from barberflow.main import app
from barberflow.models import Client, Service, StaffMember

# 2025-10-04 is a Saturday
SATURDAY = date(2025, 10, 4)
SUNDAY = date(2025, 10, 5)
MONDAY = date(2025, 10, 6)
TUESDAY = date(2025, 10, 7)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        seed_defaults(session)
        yield session


@pytest.fixture
def barber(session) -> StaffMember:
    staff = StaffMember(
        name="Barber Two",
        email="barber@barberflow.com",
        work_start_time="09:00",
        work_end_time="19:00",
        lunch_start_time="12:00",
        lunch_end_time="13:00",
    )
    session.add(staff)
    session.commit()
    session.refresh(staff)
    return staff


@pytest.fixture
def client_record(session) -> Client:
    client = Client(name="Manuel Neuer", email="client@barberflow.com", phone="(11) 91234-5678")
    session.add(client)
    session.commit()
    session.refresh(client)
    return client


@pytest.fixture
def haircut(session) -> Service:
    service = Service(name="Buzz cut", price=50, duration=30)
    session.add(service)
    session.commit()
    session.refresh(service)
    return service


@pytest.fixture
def current_user():
    """The user the API believes is logged in; tests change the role in place."""
    return {"id": 1, "email": "admin@barberflow.com", "role": "admin"}


@pytest.fixture
def api(session, current_user):
    def _get_session():
        yield session

    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[get_current_user] = lambda: current_user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_api(session):
    """API client with the real token check in place."""

    def _get_session():
        yield session

    app.dependency_overrides[get_session] = _get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def unseeded_api(engine, current_user):
    """API client over an empty database, as with SEED_DEFAULTS off."""
    session = Session(engine)

    def _get_session():
        yield session

    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[get_current_user] = lambda: current_user
    yield TestClient(app)
    app.dependency_overrides.clear()
    session.close()
