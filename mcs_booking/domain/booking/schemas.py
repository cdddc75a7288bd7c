"""Booking domain schemas - Pydantic models for validation and the JSON wire/storage shape"""

from datetime import tzinfo
from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import clean_text
from .models import BOOKING_CONFIRMED, Booking, ContactDetails, Location, Service, TimeRange
from .time_calculator import format_instant, parse_instant


class BookingCreate(BaseModel):
    """
    Schema for a booking request.

    Every field is optional at the schema level so that missing values are
    reported by the admission logic with a specific message instead of a
    generic validation error.
    """

    serviceId: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None
    building: Optional[str] = None
    flat: Optional[str] = None
    room: Optional[str] = None
    start: Optional[str] = None

    @field_validator("*")
    @classmethod
    def strip_whitespace(cls, v):
        return clean_text(v)


class ServiceResponse(BaseModel):
    id: str
    name: str
    durationMinutes: int

    @classmethod
    def from_service(cls, service: Service) -> "ServiceResponse":
        return cls(id=service.id, name=service.name, durationMinutes=service.duration_minutes)


class ServicesResponse(BaseModel):
    services: list[ServiceResponse]


class SlotResponse(BaseModel):
    start: str
    end: str

    @classmethod
    def from_range(cls, time_range: TimeRange) -> "SlotResponse":
        return cls(start=format_instant(time_range.start), end=format_instant(time_range.end))


class AvailabilityResponse(BaseModel):
    date: str
    serviceId: str
    slots: list[SlotResponse]


class BookingRecord(BaseModel):
    """A booking as stored in bookings.json and returned by the API"""

    id: str
    serviceId: str
    serviceName: str = ""
    name: str
    email: str = ""
    phone: str = ""
    notes: str = ""
    building: str = ""
    flat: str = ""
    room: str = ""
    start: str
    end: str
    status: str = BOOKING_CONFIRMED
    createdAt: str

    @classmethod
    def from_booking(cls, booking: Booking) -> "BookingRecord":
        return cls(
            id=booking.id,
            serviceId=booking.service_id,
            serviceName=booking.service_name,
            name=booking.contact.name,
            email=booking.contact.email,
            phone=booking.contact.phone,
            notes=booking.contact.notes,
            building=booking.location.building,
            flat=booking.location.flat,
            room=booking.location.room,
            start=format_instant(booking.start),
            end=format_instant(booking.end),
            status=booking.status,
            createdAt=format_instant(booking.created_at),
        )

    def to_booking(self, zone: Optional[tzinfo] = None) -> Booking:
        """
        Raises:
            ValueError: If a stored instant cannot be parsed
        """
        return Booking(
            id=self.id,
            service_id=self.serviceId,
            service_name=self.serviceName,
            contact=ContactDetails(
                name=self.name, email=self.email, phone=self.phone, notes=self.notes
            ),
            location=Location(building=self.building, flat=self.flat, room=self.room),
            start=parse_instant(self.start, zone),
            end=parse_instant(self.end, zone),
            status=self.status,
            created_at=parse_instant(self.createdAt, zone),
        )


class BookingCreatedResponse(BaseModel):
    ok: bool = True
    booking: BookingRecord


class BookingListResponse(BaseModel):
    bookings: list[BookingRecord]
