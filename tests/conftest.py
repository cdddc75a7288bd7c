"""Shared test fixtures."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from mcs_booking.domain.booking.exceptions import StorageError
from mcs_booking.domain.booking.models import (
    BOOKING_CONFIRMED,
    Booking,
    ContactDetails,
    Location,
    Service,
)
from mcs_booking.domain.booking.router import get_booking_service, get_notifier
from mcs_booking.domain.booking.service import BookingService
from mcs_booking.main import app
from mcs_booking.services.notification_service import BookingNotifier

UTC = timezone.utc

ROOM_CLEAN = Service(id="room_clean", name="Room cleaning", duration_minutes=60)
KITCHEN_CLEAN = Service(id="kitchen_clean", name="Kitchen cleaning", duration_minutes=60)


class InMemoryBookingRepository:
    """Store fake keeping bookings in a list."""

    def __init__(self, bookings=None):
        self.bookings = list(bookings or [])
        self.save_calls = 0
        self.fail_on_save = False

    def load(self):
        return list(self.bookings)

    def save(self, bookings):
        if self.fail_on_save:
            raise StorageError("disk full")
        self.save_calls += 1
        self.bookings = list(bookings)


class RecordingNotifier(BookingNotifier):
    """Notifier that records bookings instead of sending SMS."""

    def __init__(self):
        super().__init__(sms_sender=None)
        self.notified = []

    async def notify(self, booking):
        self.notified.append(booking)
        return False


def make_booking(
    start="2024-06-01T09:00:00",
    minutes=60,
    status=BOOKING_CONFIRMED,
    service=ROOM_CLEAN,
    booking_id="bk_existing",
    **contact,
) -> Booking:
    start_dt = datetime.fromisoformat(start).replace(tzinfo=UTC)
    return Booking(
        id=booking_id,
        service_id=service.id,
        service_name=service.name,
        contact=ContactDetails(name=contact.pop("name", "Existing Client"), **contact),
        location=Location(building="Block A", flat="12"),
        start=start_dt,
        end=start_dt + timedelta(minutes=minutes),
        created_at=datetime(2024, 5, 1, tzinfo=UTC),
        status=status,
    )


@pytest.fixture
def repo():
    return InMemoryBookingRepository()


@pytest.fixture
def booking_service(repo):
    return BookingService(
        repo=repo,
        services=[ROOM_CLEAN, KITCHEN_CLEAN],
        capacity=2,
        zone=UTC,
    )


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def client(booking_service, notifier):
    """FastAPI test client wired to the in-memory store."""
    app.dependency_overrides[get_booking_service] = lambda: booking_service
    app.dependency_overrides[get_notifier] = lambda: notifier
    yield TestClient(app)
    app.dependency_overrides.clear()
