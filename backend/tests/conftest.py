"""Shared fixtures: in-memory SQLite database, seeded parties, API client."""

import os

# Settings require a database URL at import time; tests never touch this engine.
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import UTC, datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pawfund.api.v1.routes.deps import get_db
from pawfund.db.base import Base
from pawfund.db.models import Pet, Shelter, Status, User
from pawfund.db.unit_of_work import UnitOfWork
from pawfund.main import app
from pawfund.services.donation_service import DonationService
from pawfund.services.pet_status_service import PetStatusService


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # SQLite ignores REFERENCES unless enabled per connection.
    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def uow(session):
    return UnitOfWork(session)


@pytest.fixture
def donation_service(uow):
    return DonationService(uow)


@pytest.fixture
def pet_status_service(uow):
    return PetStatusService(uow)


@pytest.fixture
def parties(session):
    """Two donors and two shelters, all with zero running totals."""
    d1 = User(id=1, username="d1", email="d1@example.com", total_donation=Decimal("0"))
    d2 = User(id=2, username="d2", email="d2@example.com", total_donation=Decimal("0"))
    s1 = Shelter(id=1, name="Shelter One", donation_amount=Decimal("0"))
    s2 = Shelter(id=2, name="Shelter Two", donation_amount=Decimal("0"))
    session.add_all([d1, d2, s1, s2])
    session.commit()
    return {"d1": d1, "d2": d2, "s1": s1, "s2": s2}


@pytest.fixture
def pet_and_statuses(session, parties):
    """Pet 7 in shelter 1 plus statuses 3 and 4, none linked yet."""
    pet = Pet(id=7, shelter_id=1, name="Milo", type="Dog", breed="Beagle")
    s3 = Status(id=3, date=datetime(2024, 1, 1, tzinfo=UTC), disease="None", vaccine="C3")
    s4 = Status(id=4, date=datetime(2024, 1, 1, tzinfo=UTC), disease="Ear mites", vaccine="Rabies")
    session.add_all([pet, s3, s4])
    session.commit()
    return {"pet": pet, "s3": s3, "s4": s4}


@pytest.fixture
def client(session_factory):
    """FastAPI test client with get_db bound to the test database."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
