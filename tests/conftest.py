"""
Pytest configuration and fixtures.

Each test gets a fresh app bound to an in-memory SQLite database and a
frozen clock set to 2025-03-10 09:00 UTC.
"""
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from config import TestConfig
from wellness import create_app, db
from wellness.models import DailyStats, UserProfile

FROZEN_NOW = datetime(2025, 3, 10, 9, 0, 0, tzinfo=timezone.utc)


class FrozenClock:
    def __init__(self, now):
        self.current = now

    def __call__(self):
        return self.current

    def advance(self, **kwargs):
        self.current = self.current + timedelta(**kwargs)


@pytest.fixture
def clock():
    return FrozenClock(FROZEN_NOW)


@pytest.fixture
def app(clock):
    app = create_app(TestConfig)
    app.config["CLOCK"] = clock
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def register(client, email=None, password="secret123"):
    resp = client.post(
        "/api/auth/register",
        json={
            "email": email or f"user_{uuid4().hex[:8]}@example.com",
            "password": password,
            "firstName": "Test",
            "lastName": "User",
        },
    )
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()


@pytest.fixture
def account(client):
    return register(client)


@pytest.fixture
def user_id(account):
    return account["user"]["id"]


@pytest.fixture
def auth_headers(account):
    return {"Authorization": f"Bearer {account['token']}"}


@pytest.fixture
def log_activity(client, auth_headers):
    def _log(**body):
        resp = client.post("/api/activities", json=body, headers=auth_headers)
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()

    return _log


@pytest.fixture
def daily_row(app):
    """Fetch the (user, day) rollup as a dict, or None."""

    def _row(user_id, day):
        with app.app_context():
            row = DailyStats.query.filter_by(user_id=user_id, stat_date=day).first()
            return row.to_dict() if row else None

    return _row


@pytest.fixture
def profile_of(app):
    def _profile(user_id):
        with app.app_context():
            return UserProfile.query.filter_by(user_id=user_id).first().to_dict()

    return _profile
