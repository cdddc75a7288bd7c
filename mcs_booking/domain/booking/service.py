"""Booking service - Business logic for availability, admission and listing"""

import logging
import secrets
import string
from datetime import timedelta, tzinfo
from threading import Lock
from typing import Optional

from .availability_service import AvailabilityService, count_overlapping
from .exceptions import (
    InvalidDateError,
    InvalidServiceError,
    InvalidTimeError,
    MissingFieldError,
    SlotFullError,
)
from .models import BOOKING_CONFIRMED, Booking, ContactDetails, Location, Service, TimeRange
from .repository import BookingRepository
from .schemas import BookingCreate
from .time_calculator import format_instant, parse_date, parse_instant, utc_now

logger = logging.getLogger(__name__)

# Serializes load -> capacity check -> append -> save across every request in the process
admission_lock = Lock()

BOOKING_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_booking_id() -> str:
    return "bk_" + "".join(secrets.choice(BOOKING_ID_ALPHABET) for _ in range(8))


class BookingService:
    """Service layer for booking business logic"""

    def __init__(
        self,
        repo: BookingRepository,
        services: list[Service],
        capacity: int,
        open_hour: int = 9,
        close_hour: int = 18,
        zone: Optional[tzinfo] = None,
    ):
        if not services:
            raise ValueError("Service catalog must not be empty")
        self.repo = repo
        self.services = list(services)
        self.zone = zone
        self.availability = AvailabilityService(
            capacity=capacity, open_hour=open_hour, close_hour=close_hour, zone=zone
        )

    @property
    def capacity(self) -> int:
        return self.availability.capacity

    def list_services(self) -> list[Service]:
        return list(self.services)

    def find_service(self, service_id: Optional[str]) -> Optional[Service]:
        return next((s for s in self.services if s.id == service_id), None)

    def get_availability(
        self, date: Optional[str], service_id: Optional[str]
    ) -> tuple[str, Service, list[TimeRange]]:
        """
        Get open slots for a date.

        Unknown or missing service ids fall back to the first catalog entry.

        Returns:
            (date, resolved service, available slots)
        """
        if not date:
            raise MissingFieldError("date", "Missing 'date' (YYYY-MM-DD)")
        try:
            day = parse_date(date)
        except ValueError:
            raise InvalidDateError() from None

        service = self.find_service(service_id) or self.services[0]
        bookings = self.repo.load()
        try:
            slots = self.availability.available_slots(day, service, bookings)
        except OverflowError:
            # Opening hours fall outside the representable UTC range
            raise InvalidDateError() from None
        return date.strip(), service, slots

    def create_booking(self, data: BookingCreate) -> Booking:
        """Validate a booking request, re-check capacity and persist it"""
        if not data.serviceId:
            raise MissingFieldError("serviceId")
        if not data.name:
            raise MissingFieldError("name")
        if not data.start:
            raise MissingFieldError("start", "Missing start (ISO datetime)")

        service = self.find_service(data.serviceId)
        if not service:
            raise InvalidServiceError()

        try:
            start = parse_instant(data.start, self.zone)
            end = start + timedelta(minutes=service.duration_minutes)
        except (ValueError, OverflowError):
            raise InvalidTimeError() from None
        requested = TimeRange(start=start, end=end)

        with admission_lock:
            bookings = self.repo.load()

            overlapping = count_overlapping(requested, bookings)
            if overlapping >= self.capacity:
                logger.warning(
                    f"Slot full for {service.id} at {format_instant(start)} "
                    f"({overlapping}/{self.capacity})"
                )
                raise SlotFullError()

            booking = Booking(
                id=generate_booking_id(),
                service_id=service.id,
                service_name=service.name,
                contact=ContactDetails(
                    name=data.name,
                    email=data.email or "",
                    phone=data.phone or "",
                    notes=data.notes or "",
                ),
                location=Location(
                    building=data.building or "",
                    flat=data.flat or "",
                    room=data.room or "",
                ),
                start=start,
                end=end,
                status=BOOKING_CONFIRMED,
                created_at=utc_now(),
            )
            bookings.append(booking)
            self.repo.save(bookings)

        logger.info(f"✅ Booking {booking.id} confirmed: {service.id} at {format_instant(start)}")
        return booking

    def list_bookings(self, date: Optional[str] = None) -> list[Booking]:
        """All bookings ascending by start, optionally limited to a YYYY-MM-DD (UTC) prefix"""
        bookings = sorted(self.repo.load(), key=lambda b: b.start)
        date = (date or "").strip()
        if date:
            bookings = [b for b in bookings if format_instant(b.start).startswith(date)]
        return bookings
