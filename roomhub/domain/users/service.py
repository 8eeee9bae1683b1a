"""User service - Business logic for the user directory"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import User
from ...security_utils import hash_password
from ..account_settings.service import AccountSettingService
from .repository import UserRepository
from .schemas import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    """Service layer for user business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()
        self.settings = AccountSettingService(db)

    def create_user(self, data: UserCreate) -> User:
        """
        Create a user and its default account settings.

        The plaintext password is hashed here, before anything is stored.
        """
        logger.info(f"🆕 Creating user: {data.email}")

        user_data = {
            "username": data.username,
            "email": data.email,
            "role": data.role,
            "phone": data.phone,
            "sex": data.sex,
            "provider": data.provider,
            "password": hash_password(data.password) if data.password else None,
        }

        try:
            user = self.repo.create(self.db, **user_data)
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"⚠️ Email {data.email} is already registered")
            raise HTTPException(status_code=409, detail="This email is already registered") from e

        self.settings.create_defaults(user)
        logger.info(f"✅ New user created: {user.email}")
        return user

    def find_all(self) -> list[User]:
        return self.repo.get_all(self.db)

    def find_by_id(self, user_id: str) -> Optional[User]:
        return self.repo.get_by_id(self.db, user_id)

    def find_by_email(self, email: str) -> Optional[User]:
        return self.repo.get_by_email(self.db, email.strip().lower())

    def find_by_reset_token(self, token: str) -> Optional[User]:
        return self.repo.get_by_reset_token(self.db, token)

    def find_admins(self) -> list[User]:
        return self.repo.get_admins(self.db)

    def find_or_create_sso_user(self, email: str, username: str, provider: str) -> User:
        """Return the user registered under this email, creating it on first SSO login"""
        user = self.find_by_email(email)
        if user:
            return user

        logger.info(f"🔑 First {provider} login for {email}, creating account")
        return self.create_user(
            UserCreate(
                username=(username or email.split("@")[0]).ljust(3, "_"),
                email=email,
                role="user",
                provider=provider,
            )
        )

    def update_user(self, user_id: str, data: UserUpdate) -> Optional[User]:
        """Partial update; a supplied password is hashed before it is stored"""
        user = self.find_by_id(user_id)
        if not user:
            return None

        updates = {
            "username": data.username,
            "email": data.email,
            "role": data.role,
            "phone": data.phone,
            "sex": data.sex,
        }
        if data.password:
            updates["password"] = hash_password(data.password)

        try:
            return self.repo.update(self.db, user, **updates)
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(status_code=409, detail="This email is already registered") from e

    def update_fcm_token(self, user_id: str, token: str) -> Optional[User]:
        user = self.find_by_id(user_id)
        if not user:
            return None
        return self.repo.update(self.db, user, fcm_token=token)

    def set_reset_token(self, user: User, token: str, expires_at: datetime) -> User:
        return self.repo.update(
            self.db, user, reset_password_token=token, reset_password_expires=expires_at
        )

    def reset_password(self, user: User, new_password: str) -> User:
        return self.repo.clear_reset_token(self.db, user, hash_password(new_password))

    def delete_user(self, user_id: str) -> Optional[User]:
        user = self.find_by_id(user_id)
        if not user:
            return None
        self.repo.delete(self.db, user)
        logger.info(f"🗑️ User {user_id} deleted")
        return user
