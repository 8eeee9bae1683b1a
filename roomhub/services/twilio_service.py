"""
Twilio SMS Service
Sends SMS notifications through the Twilio REST API
"""

import logging

import httpx
from fastapi import HTTPException

from ..config import TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN, TWILIO_PHONE_NUMBER

logger = logging.getLogger(__name__)

TWILIO_API_BASE = "https://api.twilio.com/2010-04-01"


async def send_sms(to: str, message: str) -> None:
    """
    Send SMS via Twilio

    Args:
        to: Recipient phone number
        message: SMS message content

    Raises:
        HTTPException(500): Twilio is not configured or rejected the message
    """
    if not TWILIO_ACCOUNT_SID or not TWILIO_AUTH_TOKEN or not TWILIO_PHONE_NUMBER:
        logger.error("❌ Twilio credentials are not configured")
        raise HTTPException(status_code=500, detail="Failed to send SMS to the user")

    try:
        logger.info(f"🚀 Sending SMS to Twilio API for {to}")
        async with httpx.AsyncClient() as client:
            response = await client.post(
                f"{TWILIO_API_BASE}/Accounts/{TWILIO_ACCOUNT_SID}/Messages.json",
                auth=(TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN),
                data={"To": to, "From": TWILIO_PHONE_NUMBER, "Body": message},
                timeout=10.0,
            )
    except httpx.HTTPError as e:
        logger.error(f"❌ Failed to send SMS to {to}: {e}")
        raise HTTPException(status_code=500, detail="Failed to send SMS to the user") from e

    if response.status_code not in (200, 201):
        logger.error(f"❌ Twilio API error {response.status_code} for {to}: {response.text}")
        raise HTTPException(status_code=500, detail="Failed to send SMS to the user")

    logger.info(f"✅ SMS sent to {to} (sid={response.json().get('sid')})")
