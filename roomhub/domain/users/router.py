"""User router - FastAPI endpoints for the user directory"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_admin
from ...database import get_db
from ...models import User
from .schemas import FcmTokenUpdate, MessageResponse, UserCreate, UserResponse, UserUpdate
from .service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    """Dependency injection for UserService"""
    return UserService(db)


# ============================================================================
# SELF-SERVICE
# ============================================================================


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get the authenticated user's profile"""
    return UserResponse.model_validate(current_user)


@router.put("/me", response_model=UserResponse)
async def update_me(
    data: UserUpdate,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Update the authenticated user's profile"""
    if data.role is not None and current_user.role != "admin":
        logger.warning(f"🚫 User {current_user.id} tried to change their own role")
        data.role = None

    user = service.update_user(current_user.id, data)
    if not user:
        raise HTTPException(status_code=404, detail=f"User with id {current_user.id} not found")
    return UserResponse.model_validate(user)


@router.patch("/fcm-token", response_model=MessageResponse)
async def update_fcm_token(
    data: FcmTokenUpdate,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Register the push-notification device token of the authenticated user"""
    service.update_fcm_token(current_user.id, data.token)
    return MessageResponse(message="FCM token updated")


# ============================================================================
# ADMINISTRATION
# ============================================================================


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(
    data: UserCreate,
    _admin: User = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    """Create a user on behalf of someone else"""
    return UserResponse.model_validate(service.create_user(data))


@router.get("", response_model=list[UserResponse])
async def find_all_users(
    _admin: User = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    return [UserResponse.model_validate(u) for u in service.find_all()]


@router.get("/{user_id}", response_model=UserResponse)
async def find_user(
    user_id: str,
    _admin: User = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    user = service.find_by_id(user_id)
    if not user:
        raise HTTPException(status_code=404, detail=f"User with id {user_id} not found")
    return UserResponse.model_validate(user)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    data: UserUpdate,
    _admin: User = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    user = service.update_user(user_id, data)
    if not user:
        raise HTTPException(status_code=404, detail=f"User with id {user_id} not found")
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", response_model=UserResponse)
async def delete_user(
    user_id: str,
    _admin: User = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    user = service.find_by_id(user_id)
    if not user:
        raise HTTPException(status_code=404, detail=f"User with id {user_id} not found")

    response = UserResponse.model_validate(user)
    service.delete_user(user_id)
    return response
