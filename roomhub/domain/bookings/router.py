"""Booking router - FastAPI endpoints for bookings, analytics and export"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_admin
from ...database import get_db
from ...models import Booking, User
from ...services.notification_service import NotificationService, get_notification_service
from ...shared.validators import to_naive_utc
from ..rooms.router import to_response as room_to_response
from ..rooms.schemas import RoomResponse
from .schemas import (
    BookingCreate,
    BookingResponse,
    BookingRoom,
    BookingUpdate,
    BookingUser,
    PeakHour,
    StatusUpdate,
)
from .service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookings", tags=["Bookings"])


def get_booking_service(
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notification_service),
) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db, notifier)


def to_response(booking: Booking, populated: bool = False) -> BookingResponse:
    user = booking.user_id
    room = booking.room_id

    if populated and booking.user:
        user = BookingUser(
            id=booking.user.id,
            username=booking.user.username,
            email=booking.user.email,
            role=booking.user.role,
            phone=booking.user.phone,
        )
    if populated and booking.room:
        room = BookingRoom(
            id=booking.room.id,
            name=booking.room.name,
            type=booking.room.type,
            capacity=booking.room.capacity,
            isActive=booking.room.is_active,
            isReservable=booking.room.is_reservable,
        )

    return BookingResponse(
        id=booking.id,
        user=user,
        room=room,
        startDate=booking.start_date,
        endDate=booking.end_date,
        status=booking.status,
        created_at=booking.created_at,
        updated_at=booking.updated_at,
    )


def get_owned_booking(service: BookingService, booking_id: str, current_user: User) -> Booking:
    """Someone else's booking looks exactly like a missing one to non-admins"""
    booking = service.find_by_id(booking_id)
    if not booking or (current_user.role != "admin" and booking.user_id != current_user.id):
        raise HTTPException(status_code=404, detail=f"Booking with id {booking_id} not found")
    return booking


@router.post("", response_model=BookingResponse, status_code=201)
async def create_booking(
    data: BookingCreate,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    booking = await service.create(data, current_user.id, current_user.role == "admin")
    return to_response(booking, populated=True)


@router.get("", response_model=list[BookingResponse])
async def find_bookings(
    user: Optional[str] = Query(None),
    room: Optional[str] = Query(None),
    startDate: Optional[datetime] = Query(None),
    endDate: Optional[datetime] = Query(None),
    _admin: User = Depends(require_admin),
    service: BookingService = Depends(get_booking_service),
):
    """List bookings; the date range only applies when both bounds are given"""
    bookings = service.find_by_filters(
        user,
        room,
        to_naive_utc(startDate) if startDate else None,
        to_naive_utc(endDate) if endDate else None,
    )
    return [to_response(b) for b in bookings]


@router.get("/my", response_model=list[BookingResponse])
async def find_my_bookings(
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return [to_response(b) for b in service.find_by_filters(user=current_user.id)]


@router.get("/export/csv")
async def export_bookings_csv(
    _admin: User = Depends(require_admin),
    service: BookingService = Depends(get_booking_service),
):
    return service.export_csv()


# ============================================================================
# ANALYTICS
# ============================================================================


@router.get("/analytics/peak-hours", response_model=list[PeakHour])
async def get_peak_hours(
    _admin: User = Depends(require_admin),
    service: BookingService = Depends(get_booking_service),
):
    return service.get_peak_hours()


@router.get("/analytics/idle-rooms", response_model=list[RoomResponse])
async def get_idle_rooms(
    days: int = Query(30, ge=1),
    _admin: User = Depends(require_admin),
    service: BookingService = Depends(get_booking_service),
):
    return [room_to_response(r) for r in service.get_idle_rooms(days)]


# ============================================================================
# SINGLE BOOKING
# ============================================================================


@router.get("/{booking_id}", response_model=BookingResponse)
async def find_booking(
    booking_id: str,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return to_response(get_owned_booking(service, booking_id, current_user))


@router.put("/{booking_id}", response_model=BookingResponse)
async def update_booking(
    booking_id: str,
    data: BookingUpdate,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    get_owned_booking(service, booking_id, current_user)
    return to_response(service.update(booking_id, data))


@router.delete("/{booking_id}", response_model=BookingResponse)
async def delete_booking(
    booking_id: str,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    booking = get_owned_booking(service, booking_id, current_user)
    response = to_response(booking)
    service.delete(booking_id)
    return response


@router.patch("/{booking_id}/status", response_model=BookingResponse)
async def update_booking_status(
    booking_id: str,
    data: StatusUpdate,
    _admin: User = Depends(require_admin),
    service: BookingService = Depends(get_booking_service),
):
    booking = await service.update_status(booking_id, data.status)
    if not booking:
        raise HTTPException(status_code=404, detail=f"Booking with id {booking_id} not found")
    return to_response(booking, populated=True)
