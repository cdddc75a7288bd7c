"""Shared validation utilities"""

import re
from typing import Optional

# E.164-ish: optional "+", no leading zero, 7 to 15 digits
SMS_PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{6,14}$")


def clean_text(value: Optional[str]) -> Optional[str]:
    """Strip surrounding whitespace from a free-text field"""
    if isinstance(value, str):
        return value.strip()
    return value


def is_sms_phone(phone: Optional[str]) -> bool:
    """
    Check whether a phone number can receive an SMS confirmation.

    Args:
        phone: Phone number as entered by the client

    Returns:
        True if the number is in international format (e.g. +447700900123)
    """
    if not phone:
        return False
    return SMS_PHONE_PATTERN.match(phone) is not None
