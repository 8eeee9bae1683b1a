import logging

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .database import get_db
from .models import User
from .security_utils import InvalidTokenError, decode_access_token

logger = logging.getLogger(__name__)

security = HTTPBearer()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Get current user from the bearer access token"""

    if not credentials:
        logger.error("❌ No credentials provided")
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Please provide a valid Bearer token in the Authorization header.",
        )

    token = credentials.credentials

    try:
        claims = decode_access_token(token)
    except InvalidTokenError as e:
        raise HTTPException(
            status_code=401,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    user_id = claims.get("sub")
    if not user_id:
        logger.error(f"❌ Token missing subject claim. Available claims: {list(claims.keys())}")
        raise HTTPException(status_code=401, detail="Invalid token claims")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        logger.warning(f"⚠️ Token subject {user_id} no longer exists")
        raise HTTPException(status_code=401, detail="Authentication failed")

    logger.debug(f"✅ User authenticated: {user.email}")
    return user


def require_roles(*roles: str):
    """Build a dependency that only lets the given roles through"""

    async def dependency(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            logger.warning(f"🚫 Access denied: {user.email} ({user.role}) needs one of {roles}")
            raise HTTPException(status_code=403, detail="Forbidden resource")
        return user

    return dependency


require_admin = require_roles("admin")
