import enum
import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


def generate_id():
    """Generate an opaque string identifier"""
    return str(uuid.uuid4())


USER_ROLES = ("admin", "user")
SEXES = ("male", "female")
SSO_PROVIDERS = ("google", "facebook", "apple")

ROOM_TYPES = ("meeting", "open-space", "studio", "relaxation", "kitchen")
WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

BOOKING_STATUSES = ("pending", "approved", "canceled", "refused")

LANGUAGES = {"fr": "French", "en": "English"}
MODES = {"dark": "Dark", "light": "Light"}


class NotificationModule(str, enum.Enum):
    """Feature areas that carry their own channel preferences"""

    BOOKING = "booking"


def default_availability_schedule():
    """Weekdays 08:00-18:00, closed on weekends"""
    schedule = {day: {"open": "08:00", "close": "18:00"} for day in WEEKDAYS[:5]}
    schedule.update({day: {"open": None, "close": None} for day in WEEKDAYS[5:]})
    return schedule


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    username = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=True)  # bcrypt hash; null for SSO-only accounts
    role = Column(String(20), default="user", nullable=False)  # admin, user
    phone = Column(String(50), nullable=True)
    sex = Column(String(10), nullable=True)
    provider = Column(String(20), nullable=True)  # google, facebook, apple
    fcm_token = Column(String(500), nullable=True)  # Push device token
    # Password reset pair - always set and cleared together
    reset_password_token = Column(String(255), nullable=True, index=True)
    reset_password_expires = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    bookings = relationship("Booking", back_populates="user", cascade="all, delete-orphan")
    account_setting = relationship(
        "AccountSetting", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )


class Room(Base):
    __tablename__ = "rooms"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), unique=True, nullable=False)
    type = Column(String(20), nullable=False)  # meeting, open-space, studio, relaxation, kitchen
    description = Column(Text, nullable=True)
    amenities = Column(JSON, default=list, nullable=False)  # e.g. ["TV", "Whiteboard", "AC"]
    capacity = Column(Integer, default=1, nullable=False)
    images = Column(JSON, default=list, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    price_per_hour = Column(Float, default=0, nullable=False)
    price_per_day = Column(Float, default=0, nullable=False)
    availability_schedule = Column(JSON, default=default_availability_schedule, nullable=False)
    is_reservable = Column(Boolean, default=False, nullable=False)
    show_in_homepage = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    bookings = relationship("Booking", back_populates="room", cascade="all, delete-orphan")

    @property
    def is_public(self) -> bool:
        return bool(self.is_active and self.is_reservable)


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    room_id = Column(String(36), ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False, index=True)
    # Naive UTC timestamps
    start_date = Column(DateTime, nullable=False, index=True)
    end_date = Column(DateTime, nullable=False)
    status = Column(String(20), default="pending", nullable=False)  # pending, approved, canceled, refused
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="bookings")
    room = relationship("Room", back_populates="bookings")


class AccountSetting(Base):
    __tablename__ = "account_settings"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    language = Column(String(5), default="fr", nullable=False)  # fr, en
    mode = Column(String(10), default="light", nullable=False)  # dark, light
    # {"booking": {"email": true, "push": true, "sms": false}}
    notification_preferences = Column(JSON, default=dict, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="account_setting")
