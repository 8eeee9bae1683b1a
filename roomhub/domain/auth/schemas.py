"""Auth domain schemas - Pydantic models for validation"""

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_email


class LoginRequest(BaseModel):
    email: str
    # Emptiness is reported as a credential error (401), not a validation error
    password: str = ""

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v: str) -> str:
        return validate_email(v)


class TokenResponse(BaseModel):
    access_token: str


class PasswordResetRequest(BaseModel):
    email: str

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v: str) -> str:
        return validate_email(v)


class ResetPasswordConfirm(BaseModel):
    token: str = Field(min_length=1)
    newPassword: str = Field(min_length=6)


class SsoProfile(BaseModel):
    """Identity returned by an OAuth provider"""

    email: str
    displayName: str = ""
