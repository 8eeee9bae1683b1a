"""Account settings schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel

from ...models import NotificationModule

Language = Literal["fr", "en"]
Mode = Literal["dark", "light"]


class ChannelPreferences(BaseModel):
    """Which channels a module may use to reach the user"""

    email: bool = False
    push: bool = False
    sms: bool = False


class AccountSettingCreate(BaseModel):
    language: Language
    mode: Mode
    notificationPreferences: Optional[dict[NotificationModule, ChannelPreferences]] = None


class AccountSettingUpdate(BaseModel):
    """Partial update - only supplied top-level fields are written"""

    language: Optional[Language] = None
    mode: Optional[Mode] = None
    notificationPreferences: Optional[dict[NotificationModule, ChannelPreferences]] = None


class AccountSettingResponse(BaseModel):
    id: str
    user: str
    language: str
    mode: str
    notificationPreferences: dict[str, ChannelPreferences]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
