"""Account settings router - FastAPI endpoints for the current user's settings"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import AccountSetting, User
from .schemas import AccountSettingResponse, AccountSettingUpdate
from .service import AccountSettingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/account-settings", tags=["Account Settings"])


def get_account_setting_service(db: Session = Depends(get_db)) -> AccountSettingService:
    """Dependency injection for AccountSettingService"""
    return AccountSettingService(db)


def to_response(setting: AccountSetting) -> AccountSettingResponse:
    return AccountSettingResponse(
        id=setting.id,
        user=setting.user_id,
        language=setting.language,
        mode=setting.mode,
        notificationPreferences=setting.notification_preferences or {},
        created_at=setting.created_at,
        updated_at=setting.updated_at,
    )


@router.get("/my", response_model=AccountSettingResponse)
async def find_my_account_settings(
    current_user: User = Depends(get_current_user),
    service: AccountSettingService = Depends(get_account_setting_service),
):
    """Get the account settings of the authenticated user"""
    setting = service.find_by_user(current_user.id)
    if not setting:
        raise HTTPException(status_code=404, detail="Account settings not found")
    return to_response(setting)


@router.patch("/my", response_model=AccountSettingResponse)
async def update_my_account_settings(
    data: AccountSettingUpdate,
    current_user: User = Depends(get_current_user),
    service: AccountSettingService = Depends(get_account_setting_service),
):
    """Update the account settings of the authenticated user"""
    setting = service.update_by_user(current_user.id, data)
    if not setting:
        raise HTTPException(status_code=404, detail="Account settings not found")
    logger.info(f"⚙️ Account settings updated for user {current_user.id}")
    return to_response(setting)
