"""Room router - FastAPI endpoints for the room catalog"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ...auth import require_admin
from ...database import get_db
from ...models import Room, User
from .schemas import RoomCreate, RoomResponse, RoomUpdate
from .service import RoomService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rooms", tags=["Rooms"])


def get_room_service(db: Session = Depends(get_db)) -> RoomService:
    """Dependency injection for RoomService"""
    return RoomService(db)


def to_response(room: Room) -> RoomResponse:
    return RoomResponse(
        id=room.id,
        name=room.name,
        type=room.type,
        description=room.description,
        amenities=room.amenities or [],
        capacity=room.capacity,
        images=room.images or [],
        isActive=room.is_active,
        pricePerHour=room.price_per_hour,
        pricePerDay=room.price_per_day,
        availabilitySchedule=room.availability_schedule or {},
        isReservable=room.is_reservable,
        showInHomepage=room.show_in_homepage,
        created_at=room.created_at,
        updated_at=room.updated_at,
    )


# ============================================================================
# PUBLIC CATALOG (no authentication)
# ============================================================================


@router.get("/public", response_model=list[RoomResponse])
async def get_public_rooms(service: RoomService = Depends(get_room_service)):
    """Rooms that are active and open for reservation"""
    return [to_response(r) for r in service.find_public()]


@router.get("/public/{room_id}", response_model=RoomResponse)
async def get_public_room(room_id: str, service: RoomService = Depends(get_room_service)):
    room = service.find_public_by_id(room_id)
    if not room:
        raise HTTPException(status_code=404, detail=f"Room with id {room_id} not found or not public")
    return to_response(room)


# ============================================================================
# ADMINISTRATION
# ============================================================================


@router.post("", response_model=RoomResponse, status_code=201)
async def create_room(
    data: RoomCreate,
    _admin: User = Depends(require_admin),
    service: RoomService = Depends(get_room_service),
):
    return to_response(service.create_room(data))


@router.get("", response_model=list[RoomResponse])
async def find_all_rooms(
    _admin: User = Depends(require_admin),
    service: RoomService = Depends(get_room_service),
):
    return [to_response(r) for r in service.find_all()]


@router.get("/{room_id}", response_model=RoomResponse)
async def find_room(
    room_id: str,
    _admin: User = Depends(require_admin),
    service: RoomService = Depends(get_room_service),
):
    return to_response(service.find_by_id(room_id))


@router.patch("/{room_id}", response_model=RoomResponse)
async def update_room(
    room_id: str,
    data: RoomUpdate,
    _admin: User = Depends(require_admin),
    service: RoomService = Depends(get_room_service),
):
    return to_response(service.update_room(room_id, data))


@router.delete("/{room_id}")
async def delete_room(
    room_id: str,
    _admin: User = Depends(require_admin),
    service: RoomService = Depends(get_room_service),
):
    service.delete_room(room_id)
    return {"message": "Room deleted"}
