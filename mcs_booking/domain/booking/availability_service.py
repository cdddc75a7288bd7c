"""Availability engine - which slots of a day are still under capacity"""

import logging
from datetime import date, tzinfo
from typing import Iterable, Optional

from .models import Booking, OperatingHours, Service, TimeRange, overlaps
from .time_calculator import generate_slots

logger = logging.getLogger(__name__)


def count_overlapping(time_range: TimeRange, bookings: Iterable[Booking]) -> int:
    """Count non-cancelled bookings whose interval overlaps ``time_range``."""
    return sum(
        1
        for booking in bookings
        if booking.counts_toward_capacity and overlaps(time_range, booking.time_range)
    )


class AvailabilityService:
    """
    Combines generated slots with stored bookings.

    Capacity is one pool shared by every service: a kitchen clean and a room
    clean in the same hour compete for the same cleaners.
    """

    def __init__(
        self,
        capacity: int,
        open_hour: int = 9,
        close_hour: int = 18,
        zone: Optional[tzinfo] = None,
    ):
        self.capacity = capacity
        self.open_hour = open_hour
        self.close_hour = close_hour
        self.zone = zone

    def slots_for(self, day: date, service: Service) -> list[TimeRange]:
        """All candidate slots for the day, sized to the service duration"""
        hours = OperatingHours(
            open_hour=self.open_hour,
            close_hour=self.close_hour,
            slot_minutes=service.duration_minutes,
        )
        return generate_slots(day, hours, self.zone)

    def has_capacity(self, time_range: TimeRange, bookings: Iterable[Booking]) -> bool:
        return count_overlapping(time_range, bookings) < self.capacity

    def available_slots(
        self, day: date, service: Service, bookings: list[Booking]
    ) -> list[TimeRange]:
        """
        Get the slots of ``day`` that can still take a booking.

        Args:
            day: Calendar date in the business's local zone
            service: Service whose duration sets the slot length
            bookings: Every stored booking (cancelled ones are ignored)

        Returns:
            Ordered list of free slots
        """
        candidates = self.slots_for(day, service)
        available = [slot for slot in candidates if self.has_capacity(slot, bookings)]

        logger.debug(
            f"Availability {day} {service.id}: {len(available)}/{len(candidates)} slots open"
        )
        return available
