import os

# Must be set before the app modules create their engine
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("DB_LOG_SLOW_QUERIES", "false")

from datetime import date  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.database import Base, SessionLocal, engine  # noqa: E402
from app.domain.planning.schemas import PhaseRequest, WorkConfig  # noqa: E402
from app.main import app  # noqa: E402

MONDAY = date(2025, 3, 3)


@pytest.fixture
def config():
    return WorkConfig(
        workday_start=9,
        workday_end=18,
        lunch_start=12.5,
        lunch_end=13.5,
        meeting_window_start=10,
        meeting_window_end=17,
        standard_hours_per_day=8,
        min_buffer_between_phases=1,
    )


@pytest.fixture
def make_phase():
    def _make(**overrides):
        values = {
            "phase_name": "Shoot",
            "employees": ["Anna", "Bram"],
            "start_date": MONDAY,
            "duration_days": 2,
        }
        values.update(overrides)
        return PhaseRequest(**values)

    return _make


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    with TestClient(app) as test_client:
        yield test_client
