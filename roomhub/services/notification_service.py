"""
Notification Service
Preference-gated fan-out of lifecycle events over email, push and SMS.
Channel selection lives here so every module reuses the same rules.
"""

import logging
from typing import Any, Awaitable, Callable, Optional, Union

from fastapi import Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..domain.account_settings.service import AccountSettingService, module_key
from ..domain.users.repository import UserRepository
from ..email_service import send_generic_email
from ..models import NotificationModule, User
from .fcm_service import send_notification_to_token
from .twilio_service import send_sms

logger = logging.getLogger(__name__)

EmailSender = Callable[[str, str, str, Optional[dict[str, Any]]], Awaitable[Any]]
SmsSender = Callable[[str, str], Awaitable[Any]]
PushSender = Callable[[str, str, str], Awaitable[Any]]


class NotificationService:
    """Dispatches notifications according to each recipient's stored preferences"""

    def __init__(
        self,
        db: Session,
        email_sender: EmailSender = send_generic_email,
        sms_sender: SmsSender = send_sms,
        push_sender: PushSender = send_notification_to_token,
    ):
        self.db = db
        self.settings = AccountSettingService(db)
        self.users = UserRepository()
        self.email_sender = email_sender
        self.sms_sender = sms_sender
        self.push_sender = push_sender

    async def send_email(
        self, to: str, subject: str, template: str, context: Optional[dict[str, Any]] = None
    ):
        return await self.email_sender(to, subject, template, context)

    async def send_sms(self, to: str, message: str):
        return await self.sms_sender(to, message)

    async def send_push(self, device_token: str, title: str, body: str):
        return await self.push_sender(device_token, title, body)

    async def notify_user_by_preference(
        self,
        user: User,
        module: Union[NotificationModule, str],
        title: str,
        message: str,
        email_template: Optional[str] = None,
        email_context: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Send one message per channel that is both enabled for the module and
        addressable for the user. Order is email, push, SMS.

        Does nothing when the user has no id, no settings or no entry for the module.
        """
        if not user or not user.id:
            return

        setting = self.settings.find_by_user(user.id)
        preferences = self.settings.get_module_preferences(setting, module)
        if preferences is None:
            logger.debug(f"ℹ️ No {module_key(module)} preferences for user {user.id}")
            return

        if preferences.email and user.email and email_template:
            logger.info(f"📧 Sending '{title}' email to {user.email}")
            await self.send_email(user.email, title, email_template, email_context)

        if preferences.push and user.fcm_token:
            logger.info(f"📲 Sending '{title}' push to user {user.id}")
            await self.send_push(user.fcm_token, title, message)

        if preferences.sms and user.phone:
            logger.info(f"📱 Sending '{title}' SMS to {user.phone}")
            await self.send_sms(user.phone, message)

    async def notify_admins(
        self,
        module: Union[NotificationModule, str],
        title: str,
        message: str,
        email_template: Optional[str] = None,
        email_context: Optional[dict[str, Any]] = None,
    ) -> None:
        """Notify every admin in turn, each through their own preferences"""
        admins = self.users.get_admins(self.db)
        logger.info(f"👥 Notifying {len(admins)} admin(s): {title}")

        for admin in admins:
            await self.notify_user_by_preference(
                admin, module, title, message, email_template, email_context
            )


def get_notification_service(db: Session = Depends(get_db)) -> NotificationService:
    """Dependency injection for NotificationService"""
    return NotificationService(db)
