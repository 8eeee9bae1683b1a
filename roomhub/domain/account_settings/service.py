"""Account settings service - Notification preferences and display settings per user"""

import logging
from typing import Optional, Union

from sqlalchemy.orm import Session

from ...models import AccountSetting, NotificationModule, User
from .repository import AccountSettingRepository
from .schemas import AccountSettingCreate, AccountSettingUpdate, ChannelPreferences

logger = logging.getLogger(__name__)


def serialize_preferences(
    preferences: dict[NotificationModule, ChannelPreferences],
) -> dict[str, dict]:
    return {NotificationModule(module).value: prefs.model_dump() for module, prefs in preferences.items()}


def module_key(module: Union[NotificationModule, str]) -> str:
    """Storage key for a module; unknown names are looked up as given"""
    return module.value if isinstance(module, NotificationModule) else str(module)


def default_preferences(user: User) -> dict[str, dict]:
    """Every channel on for bookings; SMS only when a phone number is known"""
    return serialize_preferences(
        {
            NotificationModule.BOOKING: ChannelPreferences(
                email=True, push=True, sms=bool(user.phone)
            )
        }
    )


class AccountSettingService:
    """Service layer for the preference store"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AccountSettingRepository()

    def create(self, data: AccountSettingCreate, user_id: str) -> AccountSetting:
        return self.repo.create(
            self.db,
            user_id,
            language=data.language,
            mode=data.mode,
            notification_preferences=serialize_preferences(data.notificationPreferences or {}),
        )

    def create_defaults(self, user: User) -> AccountSetting:
        """Create the settings row that every new user starts with"""
        logger.info(f"⚙️ Creating default account settings for user {user.id}")
        return self.repo.create(
            self.db,
            user.id,
            language="fr",
            mode="light",
            notification_preferences=default_preferences(user),
        )

    def find_by_user(self, user_id: str) -> Optional[AccountSetting]:
        return self.repo.get_by_user(self.db, user_id)

    def update_by_user(self, user_id: str, data: AccountSettingUpdate) -> Optional[AccountSetting]:
        """
        Flat top-level merge.

        A supplied notificationPreferences replaces the stored mapping as a
        whole; modules missing from it are dropped, not kept.
        """
        setting = self.find_by_user(user_id)
        if not setting:
            return None

        supplied = data.model_dump(exclude_unset=True)
        updates = {}
        if supplied.get("language") is not None:
            updates["language"] = data.language
        if supplied.get("mode") is not None:
            updates["mode"] = data.mode
        if supplied.get("notificationPreferences") is not None:
            updates["notification_preferences"] = serialize_preferences(
                data.notificationPreferences
            )

        return self.repo.update(self.db, setting, **updates)

    @staticmethod
    def get_module_preferences(
        setting: Optional[AccountSetting], module: Union[NotificationModule, str]
    ) -> Optional[ChannelPreferences]:
        """Look up the channel preferences stored for a module, if any"""
        if not setting or not setting.notification_preferences:
            return None
        raw = setting.notification_preferences.get(module_key(module))
        if raw is None:
            return None
        return ChannelPreferences(**raw)
