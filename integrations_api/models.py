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
    """Generate a UUID string primary key"""
    return str(uuid.uuid4())


class BookingStatus(str, enum.Enum):
    ACCEPTED = "ACCEPTED"
    PENDING = "PENDING"
    CANCELLED = "CANCELLED"
    REJECTED = "REJECTED"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    credentials = relationship("Credential", back_populates="user")
    api_keys = relationship("ApiKey", back_populates="user")
    webhooks = relationship("Webhook", back_populates="user")
    bookings = relationship("Booking", back_populates="user")


class Credential(Base):
    """Stored third-party integration grant (e.g. a Zoom OAuth token set)"""

    __tablename__ = "credentials"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    type = Column(String(100), nullable=False)  # zoom_video, google_calendar, ...
    app_id = Column(String(100), nullable=True, index=True)  # e.g. "zapier"
    key = Column(JSON, nullable=False, default=dict)  # access_token, refresh_token, expiry

    user = relationship("User", back_populates="credentials")


class ApiKey(Base):
    __tablename__ = "api_keys"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    app_id = Column(String(100), nullable=True, index=True)
    note = Column(String(255), nullable=True)
    hashed_key = Column(String(255), unique=True, nullable=False)
    expires_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="api_keys")


class Webhook(Base):
    __tablename__ = "webhooks"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    app_id = Column(String(100), nullable=True, index=True)
    subscriber_url = Column(String(500), nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="webhooks")


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    title = Column(String(255), nullable=False)
    start_time = Column(DateTime, nullable=True)
    end_time = Column(DateTime, nullable=True)
    paid = Column(Boolean, default=False, nullable=False)
    status = Column(String(20), default=BookingStatus.ACCEPTED.value, nullable=False)
    rejection_reason = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="bookings")
    payments = relationship("Payment", back_populates="booking")
    references = relationship("BookingReference", back_populates="booking")


class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id"), nullable=True, index=True)
    amount = Column(Float, nullable=False, default=0)
    currency = Column(String(3), default="usd")
    success = Column(Boolean, default=False, nullable=False)
    external_id = Column(String(255), nullable=True)

    booking = relationship("Booking", back_populates="payments")


class BookingReference(Base):
    """External calendar/meeting record tied to a booking"""

    __tablename__ = "booking_references"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id"), nullable=True, index=True)
    type = Column(String(100), nullable=False)
    uid = Column(String(255), nullable=False)

    booking = relationship("Booking", back_populates="references")
