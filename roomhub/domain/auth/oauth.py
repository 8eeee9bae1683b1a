"""
OAuth Providers
Consent-page URLs and code exchange for Google, Facebook and Sign in with Apple.
Each exchange resolves to an SsoProfile.
"""

import logging
import time
from urllib.parse import urlencode

import httpx
from fastapi import HTTPException
from jose import jwt as jose_jwt

from ...config import (
    APPLE_CALLBACK_URL,
    APPLE_CLIENT_ID,
    APPLE_KEY_ID,
    APPLE_PRIVATE_KEY,
    APPLE_TEAM_ID,
    FACEBOOK_CALLBACK_URL,
    FACEBOOK_CLIENT_ID,
    FACEBOOK_CLIENT_SECRET,
    GOOGLE_CALLBACK_URL,
    GOOGLE_CLIENT_ID,
    GOOGLE_CLIENT_SECRET,
)
from .schemas import SsoProfile

logger = logging.getLogger(__name__)

# Google OAuth URLs
GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"  # noqa: S105 - OAuth endpoint URL
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"

# Facebook Graph API
FACEBOOK_AUTH_URL = "https://www.facebook.com/v18.0/dialog/oauth"
FACEBOOK_TOKEN_URL = "https://graph.facebook.com/v18.0/oauth/access_token"  # noqa: S105
FACEBOOK_ME_URL = "https://graph.facebook.com/me"

# Sign in with Apple
APPLE_AUTH_URL = "https://appleid.apple.com/auth/authorize"
APPLE_TOKEN_URL = "https://appleid.apple.com/auth/token"  # noqa: S105
APPLE_AUDIENCE = "https://appleid.apple.com"


def _require(provider: str, *values) -> None:
    if not all(values):
        logger.error(f"❌ {provider} OAuth is not configured")
        raise HTTPException(status_code=500, detail=f"{provider} login not configured")


# ============================================================================
# GOOGLE
# ============================================================================


def google_authorization_url(state: str = "") -> str:
    _require("Google", GOOGLE_CLIENT_ID, GOOGLE_CLIENT_SECRET)
    params = {
        "client_id": GOOGLE_CLIENT_ID,
        "redirect_uri": GOOGLE_CALLBACK_URL,
        "response_type": "code",
        "scope": "email profile",
    }
    if state:
        params["state"] = state
    return f"{GOOGLE_AUTH_URL}?{urlencode(params)}"


async def exchange_google_code(code: str) -> SsoProfile:
    _require("Google", GOOGLE_CLIENT_ID, GOOGLE_CLIENT_SECRET)

    async with httpx.AsyncClient() as client:
        token_response = await client.post(
            GOOGLE_TOKEN_URL,
            data={
                "code": code,
                "client_id": GOOGLE_CLIENT_ID,
                "client_secret": GOOGLE_CLIENT_SECRET,
                "redirect_uri": GOOGLE_CALLBACK_URL,
                "grant_type": "authorization_code",
            },
        )

        if token_response.status_code != 200:
            logger.error(f"Google token exchange failed: {token_response.text}")
            raise HTTPException(status_code=401, detail="Failed to exchange authorization code")

        access_token = token_response.json().get("access_token")

        user_info_response = await client.get(
            GOOGLE_USERINFO_URL,
            headers={"Authorization": f"Bearer {access_token}"},
        )

        if user_info_response.status_code != 200:
            logger.error(f"Failed to get Google user info: {user_info_response.text}")
            raise HTTPException(status_code=401, detail="Failed to get user info")

    user_info = user_info_response.json()
    if not user_info.get("email"):
        raise HTTPException(status_code=401, detail="Google account has no email")

    return SsoProfile(email=user_info["email"], displayName=user_info.get("name") or "")


# ============================================================================
# FACEBOOK
# ============================================================================


def facebook_authorization_url() -> str:
    _require("Facebook", FACEBOOK_CLIENT_ID, FACEBOOK_CLIENT_SECRET)
    params = {
        "client_id": FACEBOOK_CLIENT_ID,
        "redirect_uri": FACEBOOK_CALLBACK_URL,
        "response_type": "code",
        "scope": "email",
    }
    return f"{FACEBOOK_AUTH_URL}?{urlencode(params)}"


async def exchange_facebook_code(code: str) -> SsoProfile:
    _require("Facebook", FACEBOOK_CLIENT_ID, FACEBOOK_CLIENT_SECRET)

    async with httpx.AsyncClient() as client:
        token_response = await client.get(
            FACEBOOK_TOKEN_URL,
            params={
                "client_id": FACEBOOK_CLIENT_ID,
                "client_secret": FACEBOOK_CLIENT_SECRET,
                "redirect_uri": FACEBOOK_CALLBACK_URL,
                "code": code,
            },
        )

        if token_response.status_code != 200:
            logger.error(f"Facebook token exchange failed: {token_response.text}")
            raise HTTPException(status_code=401, detail="Failed to exchange authorization code")

        access_token = token_response.json().get("access_token")

        me_response = await client.get(
            FACEBOOK_ME_URL,
            params={"fields": "id,name,email", "access_token": access_token},
        )

        if me_response.status_code != 200:
            logger.error(f"Failed to get Facebook profile: {me_response.text}")
            raise HTTPException(status_code=401, detail="Failed to get user info")

    profile = me_response.json()
    if not profile.get("email"):
        raise HTTPException(status_code=401, detail="Facebook account has no email")

    return SsoProfile(email=profile["email"], displayName=profile.get("name") or "")


# ============================================================================
# APPLE
# ============================================================================


def apple_authorization_url() -> str:
    _require("Apple", APPLE_CLIENT_ID)
    params = {
        "client_id": APPLE_CLIENT_ID,
        "redirect_uri": APPLE_CALLBACK_URL,
        "response_type": "code",
        "response_mode": "form_post",
        "scope": "name email",
    }
    return f"{APPLE_AUTH_URL}?{urlencode(params)}"


def build_apple_client_secret() -> str:
    """Apple expects an ES256 JWT signed with the team's key as client secret"""
    _require("Apple", APPLE_CLIENT_ID, APPLE_TEAM_ID, APPLE_KEY_ID, APPLE_PRIVATE_KEY)
    now = int(time.time())
    claims = {
        "iss": APPLE_TEAM_ID,
        "iat": now,
        "exp": now + 300,
        "aud": APPLE_AUDIENCE,
        "sub": APPLE_CLIENT_ID,
    }
    return jose_jwt.encode(claims, APPLE_PRIVATE_KEY, algorithm="ES256", headers={"kid": APPLE_KEY_ID})


async def exchange_apple_code(code: str, display_name: str = "") -> SsoProfile:
    """
    Apple only sends the user's name on the very first consent, so the caller
    passes it along when present.
    """
    client_secret = build_apple_client_secret()

    async with httpx.AsyncClient() as client:
        token_response = await client.post(
            APPLE_TOKEN_URL,
            data={
                "client_id": APPLE_CLIENT_ID,
                "client_secret": client_secret,
                "code": code,
                "grant_type": "authorization_code",
                "redirect_uri": APPLE_CALLBACK_URL,
            },
        )

    if token_response.status_code != 200:
        logger.error(f"Apple token exchange failed: {token_response.text}")
        raise HTTPException(status_code=401, detail="Failed to exchange authorization code")

    id_token = token_response.json().get("id_token")
    if not id_token:
        raise HTTPException(status_code=401, detail="Apple did not return an identity token")

    # Received directly from Apple over TLS in exchange for our signed secret
    claims = jose_jwt.get_unverified_claims(id_token)
    email = claims.get("email")
    if not email:
        raise HTTPException(status_code=401, detail="Apple account has no email")

    return SsoProfile(email=email, displayName=display_name)
