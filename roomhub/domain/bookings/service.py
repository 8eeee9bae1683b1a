"""Booking service - Business logic for the booking lifecycle and analytics"""

import csv
import logging
from datetime import datetime, timedelta
from io import StringIO
from typing import Optional

from fastapi import HTTPException
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from ...models import Booking, NotificationModule, Room
from ...services.notification_service import NotificationService
from ...shared.validators import utc_now
from ..rooms.repository import RoomRepository
from ..users.repository import UserRepository
from .repository import BookingRepository
from .schemas import BookingCreate, BookingUpdate

logger = logging.getLogger(__name__)

CSV_FIELDS = ["_id", "user", "room", "startDate", "endDate", "status"]


class BookingService:
    """Service layer for booking business logic"""

    def __init__(self, db: Session, notifier: NotificationService):
        self.db = db
        self.notifier = notifier
        self.repo = BookingRepository()
        self.rooms = RoomRepository()
        self.users = UserRepository()

    async def create(self, data: BookingCreate, requester_id: str, is_admin: bool) -> Booking:
        """
        Persist a pending booking and notify the booker and the admins.

        Admins may book on behalf of another user through `data.user`;
        everyone else always books for themselves.
        """
        user_id = data.user if is_admin and data.user else requester_id

        if not self.rooms.get_by_id(self.db, data.room):
            raise HTTPException(status_code=404, detail="Room not found")
        user = self.users.get_by_id(self.db, user_id)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")

        booking = self.repo.create(
            self.db,
            user_id=user_id,
            room_id=data.room,
            start_date=data.startDate,
            end_date=data.endDate,
        )
        logger.info(f"📅 Booking {booking.id} created for user {user_id} in room {data.room}")

        populated = self.repo.get_by_id(self.db, booking.id, populate=True)

        await self.notifier.notify_user_by_preference(
            user,
            NotificationModule.BOOKING,
            "Booking Created",
            "Your booking has been successfully created.",
            "booking-created",
            {"booking": populated},
        )
        await self.notifier.notify_admins(
            NotificationModule.BOOKING,
            "New Booking Created",
            "A new booking has been made.",
            "admin-booking-created",
            {"booking": populated},
        )

        return populated

    def find_all(self) -> list[Booking]:
        return self.repo.get_all(self.db)

    def find_by_filters(
        self,
        user: Optional[str] = None,
        room: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> list[Booking]:
        return self.repo.search(self.db, user, room, start_date, end_date)

    def find_by_id(self, booking_id: str) -> Optional[Booking]:
        return self.repo.get_by_id(self.db, booking_id)

    def update(self, booking_id: str, data: BookingUpdate) -> Optional[Booking]:
        booking = self.repo.get_by_id(self.db, booking_id)
        if not booking:
            return None

        if data.room and not self.rooms.get_by_id(self.db, data.room):
            raise HTTPException(status_code=404, detail="Room not found")
        if data.user and not self.users.get_by_id(self.db, data.user):
            raise HTTPException(status_code=404, detail="User not found")

        return self.repo.update(
            self.db,
            booking,
            user_id=data.user,
            room_id=data.room,
            start_date=data.startDate,
            end_date=data.endDate,
        )

    async def update_status(self, booking_id: str, status: str) -> Optional[Booking]:
        """
        Set any status (no transition rules), then notify the booker.
        Cancellations also go to the admins. Returns None for an unknown id.
        """
        booking = self.repo.get_by_id(self.db, booking_id)
        if not booking:
            return None

        self.repo.update(self.db, booking, status=status)
        populated = self.repo.get_by_id(self.db, booking_id, populate=True)
        logger.info(f"🔄 Booking {booking_id} status set to {status}")

        if populated.user:
            await self.notifier.notify_user_by_preference(
                populated.user,
                NotificationModule.BOOKING,
                f"Booking {status}",
                f"Your booking status has been changed to {status}.",
                f"booking-{status}",
                {"booking": populated},
            )

        if status == "canceled":
            await self.notifier.notify_admins(
                NotificationModule.BOOKING,
                "Booking Canceled",
                "A booking was canceled.",
                "admin-booking-canceled",
                {"booking": populated},
            )

        return populated

    def delete(self, booking_id: str) -> Optional[Booking]:
        booking = self.repo.get_by_id(self.db, booking_id)
        if not booking:
            return None
        self.repo.delete(self.db, booking)
        logger.info(f"🗑️ Booking {booking_id} deleted")
        return booking

    # Analytics

    def get_peak_hours(self) -> list[dict]:
        """Bookings per start hour, busiest first"""
        return [{"hour": hour, "count": count} for hour, count in self.repo.count_by_start_hour(self.db)]

    def get_idle_rooms(self, since_days: int = 30) -> list[Room]:
        """Public rooms without any booking starting in the last `since_days` days"""
        since = utc_now() - timedelta(days=since_days)
        booked = self.repo.get_room_ids_booked_since(self.db, since)
        return [room for room in self.rooms.get_public(self.db) if room.id not in booked]

    # Export

    def export_csv(self) -> StreamingResponse:
        """Export every booking as CSV"""
        bookings = self.repo.get_all(self.db)

        output = StringIO()
        writer = csv.writer(output)
        writer.writerow(CSV_FIELDS)

        for booking in bookings:
            writer.writerow(
                [
                    booking.id,
                    booking.user_id,
                    booking.room_id,
                    booking.start_date.isoformat() if booking.start_date else "",
                    booking.end_date.isoformat() if booking.end_date else "",
                    booking.status,
                ]
            )

        output.seek(0)
        logger.info(f"✅ CSV export successful ({len(bookings)} bookings)")

        return StreamingResponse(
            iter([output.getvalue()]),
            media_type="text/csv",
            headers={
                "Content-Disposition": "attachment; filename=bookings.csv",
                "Cache-Control": "no-cache",
            },
        )
