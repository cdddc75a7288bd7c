"""
Twilio SMS Service
Sends SMS messages through the Twilio REST API
"""

import logging
from typing import Optional

import httpx

from .. import config

logger = logging.getLogger(__name__)

TWILIO_API_BASE = "https://api.twilio.com/2010-04-01"


class TwilioSMSSender:
    """Thin async client for the Twilio Messages endpoint"""

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        from_number: Optional[str] = None,
        timeout: float = 10.0,
    ):
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number
        self.timeout = timeout

    @property
    def messages_url(self) -> str:
        return f"{TWILIO_API_BASE}/Accounts/{self.account_sid}/Messages.json"

    async def send_sms(self, to_phone: str, message_body: str) -> tuple[bool, Optional[str]]:
        """
        Send SMS via Twilio

        Args:
            to_phone: Recipient phone number
            message_body: SMS message content

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        data = {"To": to_phone, "Body": message_body}
        if self.from_number:
            data["From"] = self.from_number

        try:
            logger.info(f"🚀 Sending SMS to Twilio API for {to_phone}")
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.messages_url,
                    auth=(self.account_sid, self.auth_token),
                    data=data,
                    timeout=self.timeout,
                )

            logger.info(f"📡 Twilio API response status: {response.status_code}")

            if response.status_code in [200, 201]:
                message_sid = response.json().get("sid")
                logger.info(f"✅ SMS sent successfully to {to_phone} (SID: {message_sid})")
                return True, None

            try:
                error_data = response.json()
            except ValueError:
                error_data = {"message": response.text}
            error_message = error_data.get("message", "Unknown error")
            error_code = error_data.get("code")

            logger.error(f"❌ Twilio API error [{error_code}]: {error_message}")
            return False, f"[{error_code}] {error_message}" if error_code else error_message

        except httpx.HTTPError as e:
            logger.error(f"Twilio API error: {str(e)}")
            return False, str(e)


def get_sms_sender() -> Optional[TwilioSMSSender]:
    """Build a sender from the environment, or None when Twilio is not configured"""
    if not (config.TWILIO_ACCOUNT_SID and config.TWILIO_AUTH_TOKEN):
        logger.info("Twilio SMS disabled (missing env vars).")
        return None

    logger.info("Twilio SMS enabled.")
    return TwilioSMSSender(
        account_sid=config.TWILIO_ACCOUNT_SID,
        auth_token=config.TWILIO_AUTH_TOKEN,
        from_number=config.TWILIO_FROM,
    )
