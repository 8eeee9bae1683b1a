"""
Firebase Cloud Messaging Service
Sends push notifications to registered devices
"""

import asyncio
import logging
from typing import Optional

import firebase_admin
from firebase_admin import credentials, messaging

from ..config import FIREBASE_CLIENT_EMAIL, FIREBASE_PRIVATE_KEY, FIREBASE_PROJECT_ID

logger = logging.getLogger(__name__)


def get_firebase_app() -> firebase_admin.App:
    """Initialize Firebase Admin SDK (only once)"""
    try:
        return firebase_admin.get_app()
    except ValueError:
        if not FIREBASE_PROJECT_ID or not FIREBASE_CLIENT_EMAIL or not FIREBASE_PRIVATE_KEY:
            logger.error("❌ Missing Firebase credentials")
            raise RuntimeError("Firebase credentials are not configured properly")

        cred = credentials.Certificate(
            {
                "type": "service_account",
                "project_id": FIREBASE_PROJECT_ID,
                "client_email": FIREBASE_CLIENT_EMAIL,
                "private_key": FIREBASE_PRIVATE_KEY,
                "token_uri": "https://oauth2.googleapis.com/token",
            }
        )
        logger.info("Firebase Admin initialized with service account")
        return firebase_admin.initialize_app(cred, {"projectId": FIREBASE_PROJECT_ID})


async def send_notification_to_token(
    token: str, title: str, body: str, data: Optional[dict[str, str]] = None
) -> bool:
    """
    Send a push notification to a single device token.

    Delivery errors are logged and reported as False, never raised.
    """
    try:
        message = messaging.Message(
            token=token,
            notification=messaging.Notification(title=title, body=body),
            data=data or {},
        )
        # firebase-admin is synchronous; keep the event loop free
        await asyncio.to_thread(messaging.send, message, app=get_firebase_app())
        logger.info("📲 Notification sent to token")
        return True
    except Exception as e:
        logger.error(f"❌ Error sending push notification: {e}")
        return False
