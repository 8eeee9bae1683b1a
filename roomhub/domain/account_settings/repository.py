"""Account settings repository - Database operations for per-user settings"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import AccountSetting


class AccountSettingRepository:
    """Repository for account setting database operations"""

    @staticmethod
    def create(db: Session, user_id: str, **setting_data) -> AccountSetting:
        setting = AccountSetting(user_id=user_id, **setting_data)
        db.add(setting)
        db.commit()
        db.refresh(setting)
        return setting

    @staticmethod
    def get_by_user(db: Session, user_id: str) -> Optional[AccountSetting]:
        return db.query(AccountSetting).filter(AccountSetting.user_id == user_id).first()

    @staticmethod
    def update(db: Session, setting: AccountSetting, **updates) -> AccountSetting:
        """Write every given field, including explicit replacements of JSON columns"""
        for key, value in updates.items():
            if hasattr(setting, key):
                setattr(setting, key, value)

        db.commit()
        db.refresh(setting)
        return setting
