"""
Booking confirmation notifications
Runs after the booking response has been sent; failures are logged and never surfaced
"""

import logging
from datetime import tzinfo
from typing import Optional, Protocol

from ..domain.booking.models import Booking
from ..shared.validators import is_sms_phone

logger = logging.getLogger(__name__)


class SMSSender(Protocol):
    async def send_sms(self, to_phone: str, message_body: str) -> tuple[bool, Optional[str]]: ...


class BookingNotifier:
    """Sends an SMS confirmation for an admitted booking when possible"""

    def __init__(
        self,
        sms_sender: Optional[SMSSender],
        business_name: str = "MCS Cleaning",
        zone: Optional[tzinfo] = None,
    ):
        self.sms_sender = sms_sender
        self.business_name = business_name
        self.zone = zone

    @property
    def enabled(self) -> bool:
        return self.sms_sender is not None

    def build_message(self, booking: Booking) -> str:
        """
        Example:
            MCS Cleaning: Room cleaning booked for 01/06/2024, 10:00 in Block A Flat 12. Ref bk_x1y2z3w4.
        """
        when = booking.start.astimezone(self.zone).strftime("%d/%m/%Y, %H:%M")
        where = booking.location.building
        if booking.location.flat:
            where += f" Flat {booking.location.flat}"
        if booking.location.room:
            where += f" Room {booking.location.room}"
        return (
            f"{self.business_name}: {booking.service_name} booked for {when} "
            f"in {where}. Ref {booking.id}."
        )

    async def notify(self, booking: Booking) -> bool:
        """
        Attempt an SMS confirmation.

        Returns:
            True if Twilio accepted the message
        """
        phone = booking.contact.phone
        if not self.enabled:
            logger.debug(f"SMS disabled, skipping confirmation for {booking.id}")
            return False
        if not is_sms_phone(phone):
            logger.debug(f"⚠️ No SMS-capable phone for booking {booking.id}: {phone!r}")
            return False

        try:
            success, error = await self.sms_sender.send_sms(
                to_phone=phone, message_body=self.build_message(booking)
            )
        except Exception as e:
            logger.warning(f"SMS failed for booking {booking.id}: {e}")
            return False

        if success:
            logger.info(f"SMS sent to {phone} for booking {booking.id}")
        else:
            logger.warning(f"SMS failed for booking {booking.id}: {error}")
        return success
