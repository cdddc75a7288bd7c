"""Booking router - FastAPI endpoints for services, availability and bookings"""

import logging
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Body, Depends, Query

from ... import config
from ...services.notification_service import BookingNotifier
from ...services.twilio_service import get_sms_sender
from .models import Service
from .repository import JsonFileBookingRepository
from .schemas import (
    AvailabilityResponse,
    BookingCreate,
    BookingCreatedResponse,
    BookingListResponse,
    BookingRecord,
    ServiceResponse,
    ServicesResponse,
    SlotResponse,
)
from .service import BookingService
from .time_calculator import get_zone

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Bookings"])


@lru_cache
def get_booking_service() -> BookingService:
    """Dependency injection for BookingService (one per process)"""
    zone = get_zone(config.TIMEZONE)
    repo = JsonFileBookingRepository(config.BOOKINGS_FILE, zone=zone)
    repo.ensure_store()
    return BookingService(
        repo=repo,
        services=[Service.from_config(entry) for entry in config.SERVICES],
        capacity=config.CAPACITY_PER_SLOT,
        open_hour=config.OPEN_HOUR,
        close_hour=config.CLOSE_HOUR,
        zone=zone,
    )


@lru_cache
def get_notifier() -> BookingNotifier:
    """Dependency injection for BookingNotifier"""
    return BookingNotifier(
        sms_sender=get_sms_sender(),
        business_name=config.BUSINESS_NAME,
        zone=get_zone(config.TIMEZONE),
    )


@router.get("/services", response_model=ServicesResponse)
async def get_services(service: BookingService = Depends(get_booking_service)):
    """Static service catalog"""
    return ServicesResponse(
        services=[ServiceResponse.from_service(s) for s in service.list_services()]
    )


@router.get("/availability", response_model=AvailabilityResponse)
async def get_availability(
    date: Optional[str] = Query(None),
    serviceId: Optional[str] = Query(None),
    service: BookingService = Depends(get_booking_service),
):
    """Open slots for a date (YYYY-MM-DD) sized to the selected service"""
    day, resolved, slots = service.get_availability(date, serviceId)
    return AvailabilityResponse(
        date=day,
        serviceId=resolved.id,
        slots=[SlotResponse.from_range(slot) for slot in slots],
    )


@router.post("/bookings", response_model=BookingCreatedResponse)
async def create_booking(
    background_tasks: BackgroundTasks,
    data: Optional[BookingCreate] = Body(None),
    service: BookingService = Depends(get_booking_service),
    notifier: BookingNotifier = Depends(get_notifier),
):
    """Admit a booking; the SMS confirmation is sent after the response"""
    booking = service.create_booking(data or BookingCreate())

    # Fire-and-forget SMS confirmation
    background_tasks.add_task(notifier.notify, booking)

    return BookingCreatedResponse(ok=True, booking=BookingRecord.from_booking(booking))


@router.get("/bookings", response_model=BookingListResponse)
async def list_bookings(
    date: Optional[str] = Query(None),
    service: BookingService = Depends(get_booking_service),
):
    """Staff view: bookings ascending by start, optionally for one date"""
    bookings = service.list_bookings(date)
    return BookingListResponse(bookings=[BookingRecord.from_booking(b) for b in bookings])
