"""Booking domain models - plain dataclasses, no I/O"""

from dataclasses import dataclass, field
from datetime import datetime

BOOKING_CONFIRMED = "confirmed"
BOOKING_CANCELLED = "cancelled"


@dataclass(frozen=True)
class Service:
    """A bookable cleaning service from the static catalog"""

    id: str
    name: str
    duration_minutes: int

    @classmethod
    def from_config(cls, entry: dict) -> "Service":
        return cls(id=entry["id"], name=entry["name"], duration_minutes=int(entry["durationMinutes"]))


@dataclass(frozen=True)
class TimeRange:
    """
    Half-open time interval [start, end).

    Invariant: start must be before end.
    """

    start: datetime
    end: datetime

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"Start time {self.start} must be before end time {self.end}")

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return int((self.end - self.start).total_seconds() // 60)

    def overlaps(self, other: "TimeRange") -> bool:
        """Touching intervals do not overlap."""
        return self.start < other.end and other.start < self.end


def overlaps(a: TimeRange, b: TimeRange) -> bool:
    """Overlap predicate shared by availability and admission checks."""
    return a.overlaps(b)


@dataclass(frozen=True)
class OperatingHours:
    """Daily bookable window and slot length, in local wall-clock hours"""

    open_hour: int = 9
    close_hour: int = 18
    slot_minutes: int = 60

    def __post_init__(self):
        if not 0 <= self.open_hour < self.close_hour <= 24:
            raise ValueError(
                f"Invalid operating hours: open={self.open_hour}, close={self.close_hour}"
            )
        if self.slot_minutes <= 0:
            raise ValueError(f"Slot length must be positive, got {self.slot_minutes}")


@dataclass
class ContactDetails:
    name: str
    email: str = ""
    phone: str = ""
    notes: str = ""


@dataclass
class Location:
    building: str = ""
    flat: str = ""
    room: str = ""


@dataclass
class Booking:
    """A stored appointment. end is always start + service duration."""

    id: str
    service_id: str
    service_name: str
    contact: ContactDetails
    start: datetime
    end: datetime
    created_at: datetime
    location: Location = field(default_factory=Location)
    status: str = BOOKING_CONFIRMED

    @property
    def time_range(self) -> TimeRange:
        return TimeRange(start=self.start, end=self.end)

    @property
    def counts_toward_capacity(self) -> bool:
        # Anything not explicitly cancelled occupies capacity
        return self.status != BOOKING_CANCELLED
