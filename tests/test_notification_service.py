"""
Tests for SMS confirmations.
"""

import asyncio
from datetime import timezone
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from mcs_booking.services.notification_service import BookingNotifier
from mcs_booking.services.twilio_service import TwilioSMSSender, get_sms_sender
from mcs_booking.shared.validators import is_sms_phone

from .conftest import make_booking

UTC = timezone.utc


def _sender(result=(True, None)):
    sender = MagicMock()
    sender.send_sms = AsyncMock(return_value=result)
    return sender


class TestPhoneValidation:
    @pytest.mark.parametrize("phone", ["+447700900123", "447700900123", "+15551234567", "1234567"])
    def test_accepts_international_numbers(self, phone):
        assert is_sms_phone(phone)

    @pytest.mark.parametrize("phone", ["", None, "07700 900123", "+0123456789", "123", "abc1234567"])
    def test_rejects_other_numbers(self, phone):
        assert not is_sms_phone(phone)


class TestBookingNotifier:
    """Tests for BookingNotifier."""

    def test_message_format(self):
        notifier = BookingNotifier(sms_sender=None, business_name="MCS Cleaning", zone=UTC)
        booking = make_booking("2024-06-01T09:00:00", booking_id="bk_abc12345")

        assert notifier.build_message(booking) == (
            "MCS Cleaning: Room cleaning booked for 01/06/2024, 09:00 in Block A Flat 12. "
            "Ref bk_abc12345."
        )

    def test_message_includes_room(self):
        notifier = BookingNotifier(sms_sender=None, zone=UTC)
        booking = make_booking()
        booking.location.room = "3"

        assert "in Block A Flat 12 Room 3." in notifier.build_message(booking)

    def test_sends_sms_for_valid_phone(self):
        sender = _sender()
        notifier = BookingNotifier(sms_sender=sender, zone=UTC)
        booking = make_booking(phone="+447700900123")

        assert asyncio.run(notifier.notify(booking)) is True
        sender.send_sms.assert_awaited_once()
        assert sender.send_sms.await_args.kwargs["to_phone"] == "+447700900123"

    def test_skips_when_disabled(self):
        notifier = BookingNotifier(sms_sender=None)
        assert asyncio.run(notifier.notify(make_booking(phone="+447700900123"))) is False

    def test_skips_invalid_phone(self):
        sender = _sender()
        notifier = BookingNotifier(sms_sender=sender)

        assert asyncio.run(notifier.notify(make_booking(phone="07700 900123"))) is False
        sender.send_sms.assert_not_awaited()

    def test_sender_failure_is_swallowed(self):
        sender = MagicMock()
        sender.send_sms = AsyncMock(side_effect=RuntimeError("boom"))
        notifier = BookingNotifier(sms_sender=sender)

        assert asyncio.run(notifier.notify(make_booking(phone="+447700900123"))) is False

    def test_rejected_message_returns_false(self):
        notifier = BookingNotifier(sms_sender=_sender(result=(False, "[21211] Invalid 'To'")))
        assert asyncio.run(notifier.notify(make_booking(phone="+447700900123"))) is False


def _mock_client(response=None, error=None):
    client = MagicMock()
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    client.post = AsyncMock(return_value=response, side_effect=error)
    return client


class TestTwilioSMSSender:
    """Tests for TwilioSMSSender against a mocked httpx client."""

    def test_successful_send(self):
        response = httpx.Response(201, json={"sid": "SM123"})
        client = _mock_client(response=response)
        sender = TwilioSMSSender("AC123", "token", from_number="+15550001111")

        with patch("mcs_booking.services.twilio_service.httpx.AsyncClient", return_value=client):
            result = asyncio.run(sender.send_sms("+447700900123", "hello"))

        assert result == (True, None)
        args, kwargs = client.post.await_args
        assert args[0] == "https://api.twilio.com/2010-04-01/Accounts/AC123/Messages.json"
        assert kwargs["auth"] == ("AC123", "token")
        assert kwargs["data"] == {"To": "+447700900123", "Body": "hello", "From": "+15550001111"}

    def test_api_error(self):
        response = httpx.Response(400, json={"code": 21211, "message": "Invalid 'To' Phone Number"})
        client = _mock_client(response=response)
        sender = TwilioSMSSender("AC123", "token")

        with patch("mcs_booking.services.twilio_service.httpx.AsyncClient", return_value=client):
            success, error = asyncio.run(sender.send_sms("+447700900123", "hello"))

        assert success is False
        assert error == "[21211] Invalid 'To' Phone Number"

    def test_network_error(self):
        client = _mock_client(error=httpx.ConnectError("connection refused"))
        sender = TwilioSMSSender("AC123", "token")

        with patch("mcs_booking.services.twilio_service.httpx.AsyncClient", return_value=client):
            success, error = asyncio.run(sender.send_sms("+447700900123", "hello"))

        assert success is False
        assert "connection refused" in error


class TestGetSMSSender:
    def test_disabled_without_credentials(self, monkeypatch):
        monkeypatch.setattr("mcs_booking.config.TWILIO_ACCOUNT_SID", None)
        monkeypatch.setattr("mcs_booking.config.TWILIO_AUTH_TOKEN", None)
        assert get_sms_sender() is None

    def test_enabled_with_credentials(self, monkeypatch):
        monkeypatch.setattr("mcs_booking.config.TWILIO_ACCOUNT_SID", "AC123")
        monkeypatch.setattr("mcs_booking.config.TWILIO_AUTH_TOKEN", "token")
        monkeypatch.setattr("mcs_booking.config.TWILIO_FROM", "+15550001111")

        sender = get_sms_sender()

        assert isinstance(sender, TwilioSMSSender)
        assert sender.from_number == "+15550001111"
