"""Booking domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel, field_validator

from ...shared.validators import to_naive_utc

BookingStatus = Literal["pending", "approved", "canceled", "refused"]


class BookingCreate(BaseModel):
    """Schema for creating a booking; `user` is only honoured for admins"""

    room: str
    startDate: datetime
    endDate: datetime
    user: Optional[str] = None

    @field_validator("startDate", "endDate")
    @classmethod
    def normalize_dates(cls, v: datetime) -> datetime:
        return to_naive_utc(v)


class BookingUpdate(BaseModel):
    room: Optional[str] = None
    startDate: Optional[datetime] = None
    endDate: Optional[datetime] = None
    user: Optional[str] = None

    @field_validator("startDate", "endDate")
    @classmethod
    def normalize_dates(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v) if v else v


class StatusUpdate(BaseModel):
    status: BookingStatus


class BookingUser(BaseModel):
    id: str
    username: str
    email: str
    role: str
    phone: Optional[str] = None


class BookingRoom(BaseModel):
    id: str
    name: str
    type: str
    capacity: int
    isActive: bool
    isReservable: bool


class BookingResponse(BaseModel):
    """`user` and `room` are ids, or nested objects when the booking is populated"""

    id: str
    user: Union[BookingUser, str]
    room: Union[BookingRoom, str]
    startDate: datetime
    endDate: datetime
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PeakHour(BaseModel):
    hour: int
    count: int
