import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

import src.models  # noqa: F401
from src.database import Base, build_engine, build_session_factory, get_db
from src.main import app
from src.models import Seat
from src.bookings.dependencies import get_clock
from src.transports.schemas import TransportCreate, ClassDefinition
from src.transports.service import TransportService

# A Monday morning
NOW = datetime(2026, 10, 19, 8, 0)
NEXT_MONDAY = NOW.date() + timedelta(days=7)
NEXT_TUESDAY = NOW.date() + timedelta(days=8)


class FrozenClock:
    """Callable clock whose time only moves when a test moves it"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'bookings.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def clock():
    return FrozenClock(NOW)


@pytest.fixture
def client(session_factory, clock):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def create_transport(db):
    """Transport factory; defaults to one Economy class of ten 500.00 seats, Mondays at 09:00"""

    def _factory(
        classes=None,
        available_days=None,
        departure_time: str = "09:00",
        seats=None,
        **overrides
    ):
        data = dict(
            type="train",
            name="Coastal Express",
            source="Chennai",
            destination="Bengaluru",
            departure_time=departure_time,
            arrival_time="13:00",
            distance_in_km=Decimal("350"),
            available_days=available_days or ["Monday"],
            classes=classes or [ClassDefinition(name="Economy", price=Decimal("500"), default_seats=10)],
            seats=seats,
        )
        data.update(overrides)
        return TransportService.create_transport(db, TransportCreate(**data))

    return _factory


@pytest.fixture
def seat_flags(session_factory):
    """Read seat booked flags through a fresh session"""

    def _read(transport_id: str) -> dict:
        session = session_factory()
        try:
            seats = session.query(Seat).filter(Seat.transport_id == transport_id).all()
            return {seat.seat_number: seat.is_booked for seat in seats}
        finally:
            session.close()

    return _read
