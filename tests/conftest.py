"""
Pytest configuration and fixtures.
"""
import pytest

import settings
from app import app as flask_app
from tests.helpers import TEST_SECRET, FakeGateway


@pytest.fixture(autouse=True)
def test_settings(tmp_path, monkeypatch):
    """Point storage at a temp file and pin the gateway configuration."""
    monkeypatch.setattr(settings, "BOOKINGS_FILE", str(tmp_path / "bookings.json"))
    monkeypatch.setattr(settings, "CF_CLIENT_SECRET", TEST_SECRET)
    monkeypatch.setattr(settings, "CF_CLIENT_ID", "cf_test_client")
    monkeypatch.setattr(settings, "CF_ENV", "SANDBOX")
    monkeypatch.setattr(settings, "CF_API_VERSION", "2025-01-01")
    monkeypatch.setattr(settings, "CF_TIMEOUT_SECONDS", 15)
    monkeypatch.setattr(settings, "ORDER_CURRENCY", "INR")
    monkeypatch.setattr(settings, "ORDER_ID_PREFIX", "LEAZO")
    monkeypatch.setattr(settings, "FRONTEND_ORIGIN", "https://leazo.example")
    monkeypatch.setattr(settings, "BACKEND_ORIGIN", "https://api.leazo.example")
    monkeypatch.setattr(settings, "RETURN_URL", "")
    monkeypatch.setattr(settings, "WEBHOOK_URL", "")
    return settings


@pytest.fixture
def fake_gateway(monkeypatch):
    fake = FakeGateway()
    monkeypatch.setattr("gateway.requests.post", fake)
    return fake


@pytest.fixture
def client():
    flask_app.config.update(TESTING=True)
    with flask_app.test_client() as test_client:
        yield test_client


@pytest.fixture
def booking_request():
    return {
        "plan": "hourly",
        "hours": 3,
        "games": [],
        "addController": False,
        "city": "Neemuch",
        "coupon": "",
        "paymentMethod": "cod",
        "bookingDate": "2026-10-20",
        "name": "Asha Verma",
        "phone": "9876543210",
        "address": "12 Station Road",
        "email": "asha@example.com",
    }
