"""Room domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_time_of_day

RoomType = Literal["meeting", "open-space", "studio", "relaxation", "kitchen"]


class DailySchedule(BaseModel):
    """Opening hours for one weekday; both None means closed"""

    open: Optional[str] = None
    close: Optional[str] = None

    @field_validator("open", "close")
    @classmethod
    def validate_time(cls, v: Optional[str]) -> Optional[str]:
        return validate_time_of_day(v)


class AvailabilitySchedule(BaseModel):
    monday: DailySchedule
    tuesday: DailySchedule
    wednesday: DailySchedule
    thursday: DailySchedule
    friday: DailySchedule
    saturday: DailySchedule
    sunday: DailySchedule


class RoomCreate(BaseModel):
    """Schema for creating a room"""

    name: str = Field(min_length=1)
    type: RoomType
    description: Optional[str] = None
    amenities: Optional[list[str]] = None
    capacity: Optional[int] = Field(default=None, ge=1)
    images: Optional[list[str]] = None
    isActive: Optional[bool] = None
    pricePerHour: Optional[float] = Field(default=None, ge=0)
    pricePerDay: Optional[float] = Field(default=None, ge=0)
    availabilitySchedule: Optional[AvailabilitySchedule] = None
    isReservable: Optional[bool] = None
    showInHomepage: Optional[bool] = None


class RoomUpdate(BaseModel):
    """Schema for updating a room - every field optional"""

    name: Optional[str] = Field(default=None, min_length=1)
    type: Optional[RoomType] = None
    description: Optional[str] = None
    amenities: Optional[list[str]] = None
    capacity: Optional[int] = Field(default=None, ge=1)
    images: Optional[list[str]] = None
    isActive: Optional[bool] = None
    pricePerHour: Optional[float] = Field(default=None, ge=0)
    pricePerDay: Optional[float] = Field(default=None, ge=0)
    availabilitySchedule: Optional[AvailabilitySchedule] = None
    isReservable: Optional[bool] = None
    showInHomepage: Optional[bool] = None


class RoomResponse(BaseModel):
    id: str
    name: str
    type: str
    description: Optional[str] = None
    amenities: list[str] = []
    capacity: int
    images: list[str] = []
    isActive: bool
    pricePerHour: float
    pricePerDay: float
    availabilitySchedule: dict
    isReservable: bool
    showInHomepage: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# camelCase request field -> model column
FIELD_MAP = {
    "name": "name",
    "type": "type",
    "description": "description",
    "amenities": "amenities",
    "capacity": "capacity",
    "images": "images",
    "isActive": "is_active",
    "pricePerHour": "price_per_hour",
    "pricePerDay": "price_per_day",
    "availabilitySchedule": "availability_schedule",
    "isReservable": "is_reservable",
    "showInHomepage": "show_in_homepage",
}
