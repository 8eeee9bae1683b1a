"""Auth service - Credential checks, token issuance and password reset"""

import logging
from datetime import timedelta
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import RESET_TOKEN_EXPIRES_MINUTES
from ...email_service import send_reset_password_email
from ...models import User
from ...security_utils import create_access_token, generate_secure_token, verify_password
from ...shared.validators import utc_now
from ..users.schemas import UserCreate
from ..users.service import UserService
from .schemas import SsoProfile

logger = logging.getLogger(__name__)


class AuthService:
    """Service layer for authentication"""

    def __init__(self, db: Session, reset_email_sender=send_reset_password_email):
        self.db = db
        self.users = UserService(db)
        self.reset_email_sender = reset_email_sender

    def validate_user(self, email: str, password: str) -> Optional[User]:
        """The user when the password matches its stored hash, else None"""
        if not password:
            raise HTTPException(status_code=401, detail="Password cannot be empty")

        user = self.users.find_by_email(email)
        if user and verify_password(password, user.password):
            return user
        return None

    def login(self, user: User) -> dict:
        claims = {
            "sub": user.id,
            "email": user.email,
            "username": user.username,
            "role": user.role,
        }
        logger.info(f"🔐 Issued access token for {user.email}")
        return {"access_token": create_access_token(claims)}

    def authenticate(self, email: str, password: str) -> dict:
        user = self.validate_user(email, password)
        if not user:
            logger.warning(f"⚠️ Failed login attempt for {email}")
            raise HTTPException(status_code=401, detail="Invalid credentials")
        return self.login(user)

    def register(self, data: UserCreate) -> User:
        """Self-registration never grants elevated roles"""
        data.role = "user"
        return self.users.create_user(data)

    async def generate_reset_token(self, email: str) -> None:
        """Store a one-hour reset token on the user and email them the link"""
        user = self.users.find_by_email(email)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")

        token = generate_secure_token()
        expires_at = utc_now() + timedelta(minutes=RESET_TOKEN_EXPIRES_MINUTES)
        self.users.set_reset_token(user, token, expires_at)

        logger.info(f"🔑 Password reset requested for {user.email}")
        await self.reset_email_sender(user.email, token)

    def reset_password(self, token: str, new_password: str) -> None:
        user = self.users.find_by_reset_token(token)
        if (
            not user
            or not user.reset_password_expires
            or user.reset_password_expires < utc_now()
        ):
            raise HTTPException(status_code=401, detail="Invalid or expired token")

        self.users.reset_password(user, new_password)
        logger.info(f"✅ Password reset for {user.email}")

    def validate_sso_user(self, profile: SsoProfile, provider: str) -> User:
        return self.users.find_or_create_sso_user(profile.email, profile.displayName, provider)
