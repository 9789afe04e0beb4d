from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Time,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from railbook.db.base import Base


def _utcnow():
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    full_name = Column(String(255), nullable=True)
    hashed_password = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    bookings = relationship("Booking", back_populates="user")


class Train(Base):
    __tablename__ = "trains"
    id = Column(Integer, primary_key=True)
    train_number = Column(String(32), nullable=False, unique=True, index=True)
    train_name = Column(String(255), nullable=False)
    from_station = Column(String(128), nullable=False, index=True)
    to_station = Column(String(128), nullable=False, index=True)
    departure_time = Column(Time, nullable=False)
    arrival_time = Column(Time, nullable=False)
    available_seats = Column(Integer, nullable=False, default=0)
    price_per_seat = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    bookings = relationship("Booking", back_populates="train")


class Booking(Base):
    __tablename__ = "bookings"
    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    train_id = Column(Integer, ForeignKey("trains.id", ondelete="CASCADE"), nullable=False, index=True)
    passenger_name = Column(String(100), nullable=False)
    passenger_age = Column(Integer, nullable=False)
    passenger_email = Column(String(255), nullable=False)
    seat_number = Column(String(4), nullable=False)
    journey_date = Column(Date, nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)
    # not unique: references are timestamp + random, collisions are not guarded here
    booking_reference = Column(String(64), nullable=False, index=True)
    booking_status = Column(String(50), nullable=False, default="confirmed")
    # set client side so bookings made within the same second still order correctly
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    user = relationship("User", back_populates="bookings")
    train = relationship("Train", back_populates="bookings")

    __table_args__ = (Index("ix_bookings_user_created", "user_id", "created_at"),)
