"""Room service - Business logic for the room catalog"""

import logging
from typing import Optional, Union

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import Room
from .repository import RoomRepository
from .schemas import FIELD_MAP, RoomCreate, RoomUpdate

logger = logging.getLogger(__name__)


def to_columns(data: Union[RoomCreate, RoomUpdate]) -> dict:
    """Translate supplied request fields into model columns"""
    # Only top-level nulls are dropped; closed days keep their null hours
    return {
        FIELD_MAP[key]: value
        for key, value in data.model_dump(exclude_unset=True).items()
        if value is not None
    }


class RoomService:
    """Service layer for room business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = RoomRepository()

    def create_room(self, data: RoomCreate) -> Room:
        logger.info(f"🏢 Creating room: {data.name}")
        try:
            return self.repo.create(self.db, **to_columns(data))
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(status_code=409, detail="A room with this name already exists") from e

    def find_all(self) -> list[Room]:
        return self.repo.get_all(self.db)

    def find_by_id(self, room_id: str) -> Room:
        room = self.repo.get_by_id(self.db, room_id)
        if not room:
            raise HTTPException(status_code=404, detail="Room not found")
        return room

    def update_room(self, room_id: str, data: RoomUpdate) -> Room:
        room = self.find_by_id(room_id)
        try:
            return self.repo.update(self.db, room, **to_columns(data))
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(status_code=409, detail="A room with this name already exists") from e

    def delete_room(self, room_id: str) -> None:
        room = self.find_by_id(room_id)
        self.repo.delete(self.db, room)
        logger.info(f"🗑️ Room {room_id} deleted")

    def find_public(self) -> list[Room]:
        """Rooms visible without authentication: active and reservable"""
        return self.repo.get_public(self.db)

    def find_public_by_id(self, room_id: str) -> Optional[Room]:
        """None when the room is missing or not public, even if it exists"""
        return self.repo.get_public_by_id(self.db, room_id)
