"""Pytest configuration and fixtures for reservation save tests."""
import pytest
from unittest.mock import MagicMock

from domain.models import (
    AccessoryRequest,
    CanonicalReservationSpec,
    RecurrencePattern,
    WebServiceUserSession,
)
from services.reservation_save_controller import ReservationSaveController


@pytest.fixture(scope="function")
def session():
    """Provide a session for a user in New York."""
    return WebServiceUserSession(user_id=42, timezone="America/New_York")


@pytest.fixture(scope="function")
def utc_session():
    """Provide a session for a user in UTC."""
    return WebServiceUserSession(user_id=7, timezone="UTC")


@pytest.fixture(scope="function")
def valid_request():
    """Provide a minimal valid single-occurrence request."""
    return {
        "resourceId": 5,
        "startDateTime": "2024-01-01 09:00",
        "endDateTime": "2024-01-01 10:00",
        "repeatType": "None",
    }


@pytest.fixture(scope="function")
def make_spec():
    """Factory fixture for canonical specs that pass every rule by default."""
    def _make(recurrence=None, **overrides):
        data = {
            "resource_id": 5,
            "user_id": 42,
            "start_date": "2024-01-01",
            "start_time": "09:00",
            "end_date": "2024-01-01",
            "end_time": "10:00",
            "recurrence": recurrence or RecurrencePattern(),
            "accessories": [AccessoryRequest(id=1, quantity=2)],
        }
        data.update(overrides)
        return CanonicalReservationSpec(**data)
    return _make


@pytest.fixture(scope="function")
def handler():
    """Reservation handler that saves successfully."""
    mock = MagicMock()
    mock.build_reservation.return_value = {"entity": "reservation"}
    mock.handle_reservation.return_value = ("ref-123", [])
    return mock


@pytest.fixture(scope="function")
def controller(handler):
    """Create a save controller wired to the mock handler."""
    return ReservationSaveController(handler)
