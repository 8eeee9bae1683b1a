"""Booking repository - Database operations for bookings"""

from datetime import datetime
from typing import Optional

from sqlalchemy import extract, func
from sqlalchemy.orm import Session, joinedload

from ...models import Booking


class BookingRepository:
    """Repository for booking database operations"""

    @staticmethod
    def get_all(db: Session) -> list[Booking]:
        return db.query(Booking).order_by(Booking.start_date.asc()).all()

    @staticmethod
    def get_by_id(db: Session, booking_id: str, populate: bool = False) -> Optional[Booking]:
        query = db.query(Booking)
        if populate:
            query = query.options(joinedload(Booking.user), joinedload(Booking.room))
        return query.filter(Booking.id == booking_id).first()

    @staticmethod
    def search(
        db: Session,
        user_id: Optional[str] = None,
        room_id: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> list[Booking]:
        """
        Equality filters on user and room. The date range applies only when
        both bounds are given, and keeps bookings lying entirely inside it.
        """
        query = db.query(Booking)

        if user_id:
            query = query.filter(Booking.user_id == user_id)
        if room_id:
            query = query.filter(Booking.room_id == room_id)
        if start_date and end_date:
            query = query.filter(Booking.start_date >= start_date, Booking.end_date <= end_date)

        return query.order_by(Booking.start_date.asc()).all()

    @staticmethod
    def create(db: Session, **booking_data) -> Booking:
        booking = Booking(**booking_data)
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    @staticmethod
    def update(db: Session, booking: Booking, **updates) -> Booking:
        for key, value in updates.items():
            if value is not None and hasattr(booking, key):
                setattr(booking, key, value)

        db.commit()
        db.refresh(booking)
        return booking

    @staticmethod
    def delete(db: Session, booking: Booking) -> None:
        db.delete(booking)
        db.commit()

    @staticmethod
    def count_by_start_hour(db: Session) -> list[tuple[int, int]]:
        """(hour, count) pairs, busiest hour first"""
        hour = extract("hour", Booking.start_date)
        count = func.count(Booking.id)
        rows = db.query(hour, count).group_by(hour).order_by(count.desc(), hour.asc()).all()
        return [(int(h), int(c)) for h, c in rows]

    @staticmethod
    def get_room_ids_booked_since(db: Session, since: datetime) -> set[str]:
        rows = db.query(Booking.room_id).filter(Booking.start_date >= since).distinct().all()
        return {room_id for (room_id,) in rows}
