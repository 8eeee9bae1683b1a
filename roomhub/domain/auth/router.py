"""Auth router - Local login, registration, password reset and OAuth"""

import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from ...config import FRONTEND_URL
from ...database import get_db
from ..users.schemas import MessageResponse, UserCreate, UserResponse
from . import oauth
from .schemas import LoginRequest, PasswordResetRequest, ResetPasswordConfirm, TokenResponse
from .service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    """Dependency injection for AuthService"""
    return AuthService(db)


def redirect_with_token(token: str) -> RedirectResponse:
    return RedirectResponse(url=f"{FRONTEND_URL}?token={token}", status_code=302)


@router.post("/login", response_model=TokenResponse)
async def login(data: LoginRequest, service: AuthService = Depends(get_auth_service)):
    return service.authenticate(data.email, data.password)


@router.post("/register", response_model=UserResponse, status_code=201)
async def register(data: UserCreate, service: AuthService = Depends(get_auth_service)):
    return UserResponse.model_validate(service.register(data))


@router.post("/request-password-reset", response_model=MessageResponse)
async def request_password_reset(
    data: PasswordResetRequest, service: AuthService = Depends(get_auth_service)
):
    await service.generate_reset_token(data.email)
    return MessageResponse(message="Password reset email sent")


@router.post("/reset-password-confirm", response_model=MessageResponse)
async def reset_password_confirm(
    data: ResetPasswordConfirm, service: AuthService = Depends(get_auth_service)
):
    service.reset_password(data.token, data.newPassword)
    return MessageResponse(message="Password has been reset")


# ============================================================================
# OAUTH
# ============================================================================


@router.get("/google")
async def google_login():
    return RedirectResponse(url=oauth.google_authorization_url(), status_code=302)


@router.get("/google/callback")
async def google_callback(code: str, service: AuthService = Depends(get_auth_service)):
    profile = await oauth.exchange_google_code(code)
    user = service.validate_sso_user(profile, "google")
    return redirect_with_token(service.login(user)["access_token"])


@router.get("/facebook")
async def facebook_login():
    return RedirectResponse(url=oauth.facebook_authorization_url(), status_code=302)


@router.get("/facebook/redirect")
async def facebook_callback(code: str, service: AuthService = Depends(get_auth_service)):
    profile = await oauth.exchange_facebook_code(code)
    user = service.validate_sso_user(profile, "facebook")
    return redirect_with_token(service.login(user)["access_token"])


@router.get("/apple")
async def apple_login():
    return RedirectResponse(url=oauth.apple_authorization_url(), status_code=302)


@router.get("/apple/callback")
async def apple_callback_get(code: str, service: AuthService = Depends(get_auth_service)):
    profile = await oauth.exchange_apple_code(code)
    user = service.validate_sso_user(profile, "apple")
    return redirect_with_token(service.login(user)["access_token"])


@router.post("/apple/callback")
async def apple_callback_post(
    code: str = Form(...),
    user: Optional[str] = Form(None),
    service: AuthService = Depends(get_auth_service),
):
    """Apple posts the form (response_mode=form_post); `user` is JSON on first consent only"""
    display_name = ""
    if user:
        try:
            name = json.loads(user).get("name") or {}
            display_name = " ".join(p for p in [name.get("firstName"), name.get("lastName")] if p)
        except (ValueError, AttributeError):
            logger.warning("⚠️ Could not parse Apple user payload")

    profile = await oauth.exchange_apple_code(code, display_name)
    account = service.validate_sso_user(profile, "apple")
    return redirect_with_token(service.login(account)["access_token"])
