"""User domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...shared.validators import validate_email

UserRole = Literal["admin", "user"]
Sex = Literal["male", "female"]
Provider = Literal["google", "facebook", "apple"]


class UserCreate(BaseModel):
    """Schema for creating a user (registration or admin creation)"""

    username: str = Field(min_length=3)
    email: str
    role: UserRole = "user"
    phone: Optional[str] = None
    sex: Optional[Sex] = None
    provider: Optional[Provider] = None
    password: Optional[str] = Field(default=None, min_length=6)
    confirmPassword: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v: str) -> str:
        return validate_email(v)

    @model_validator(mode="after")
    def check_passwords(self):
        # SSO accounts have no local credential
        if self.provider:
            return self
        if not self.password:
            raise ValueError("Password is required")
        if self.password != self.confirmPassword:
            raise ValueError("Passwords do not match")
        return self


class UserUpdate(BaseModel):
    """Schema for updating an existing user"""

    username: Optional[str] = Field(default=None, min_length=3)
    email: Optional[str] = None
    role: Optional[UserRole] = None
    phone: Optional[str] = None
    sex: Optional[Sex] = None
    password: Optional[str] = Field(default=None, min_length=6)
    confirmPassword: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v: Optional[str]) -> Optional[str]:
        return validate_email(v)

    @model_validator(mode="after")
    def check_passwords(self):
        if self.password and self.password != self.confirmPassword:
            raise ValueError("Passwords do not match")
        return self


class FcmTokenUpdate(BaseModel):
    token: str = Field(min_length=1)


class UserResponse(BaseModel):
    """Public view of a user; credentials and reset tokens are never exposed"""

    id: str
    username: str
    email: str
    role: str
    phone: Optional[str] = None
    sex: Optional[str] = None
    provider: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    message: str
