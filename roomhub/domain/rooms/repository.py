"""Room repository - Database operations for the room catalog"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Room


class RoomRepository:
    """Repository for room database operations"""

    @staticmethod
    def get_all(db: Session) -> list[Room]:
        return db.query(Room).order_by(Room.name.asc()).all()

    @staticmethod
    def get_by_id(db: Session, room_id: str) -> Optional[Room]:
        return db.query(Room).filter(Room.id == room_id).first()

    @staticmethod
    def get_public(db: Session) -> list[Room]:
        """Rooms that are both active and reservable"""
        return (
            db.query(Room)
            .filter(Room.is_active.is_(True), Room.is_reservable.is_(True))
            .order_by(Room.name.asc())
            .all()
        )

    @staticmethod
    def get_public_by_id(db: Session, room_id: str) -> Optional[Room]:
        return (
            db.query(Room)
            .filter(Room.id == room_id, Room.is_active.is_(True), Room.is_reservable.is_(True))
            .first()
        )

    @staticmethod
    def create(db: Session, **room_data) -> Room:
        room = Room(**room_data)
        db.add(room)
        db.commit()
        db.refresh(room)
        return room

    @staticmethod
    def update(db: Session, room: Room, **updates) -> Room:
        for key, value in updates.items():
            if value is not None and hasattr(room, key):
                setattr(room, key, value)

        db.commit()
        db.refresh(room)
        return room

    @staticmethod
    def delete(db: Session, room: Room) -> None:
        db.delete(room)
        db.commit()
