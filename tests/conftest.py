import os
from datetime import timedelta

# Configure before the app (and its engine) is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ADMIN_PASSWORD"] = "correct-horse-battery"
os.environ["BUSINESS_TIMEZONE"] = "America/New_York"
os.environ["EXCLUDE_WEEKENDS"] = "true"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"
os.environ.pop("REDIS_URL", None)
os.environ.pop("REDIS_HOST", None)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from consultdesk.database import Base, SessionLocal, engine  # noqa: E402
from consultdesk.domain.admin.router import admin_login_rate_limit  # noqa: E402
from consultdesk.domain.bookings.router import booking_rate_limit  # noqa: E402
from consultdesk.domain.contact.router import contact_rate_limit  # noqa: E402
from consultdesk.domain.scheduling import current_local_time  # noqa: E402
from consultdesk.main import app  # noqa: E402

ADMIN_PASSWORD = os.environ["ADMIN_PASSWORD"]


@pytest.fixture(autouse=True)
def _tables():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    for limiter in (booking_rate_limit, contact_rate_limit, admin_login_rate_limit):
        app.dependency_overrides[limiter] = lambda: None
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(client):
    resp = client.post("/api/admin/login", json={"password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


def _weekday_from(day, step):
    while day.weekday() >= 5:
        day += timedelta(days=step)
    return day


@pytest.fixture
def business_day():
    """A weekday a few days out, so every slot on it is in the future"""
    return _weekday_from(current_local_time().date() + timedelta(days=3), 1)


@pytest.fixture
def past_business_day():
    return _weekday_from(current_local_time().date() - timedelta(days=2), -1)


@pytest.fixture
def weekend_day():
    day = current_local_time().date() + timedelta(days=3)
    while day.weekday() != 5:
        day += timedelta(days=1)
    return day
