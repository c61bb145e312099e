"""
Trip, stop and sharing models.
"""
from sqlalchemy import Column, String, Date, Boolean, Enum as SQLEnum, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from app.db.base import Base, BaseModel, TimestampMixin
from app.db.types import UTCDateTime
import enum


class ShareRole(str, enum.Enum):
    """Access granted to a user a trip is shared with."""
    VIEWER = "viewer"
    EDITOR = "editor"


class Trip(BaseModel):
    """Trip owned by a single user."""
    __tablename__ = "trips"

    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    is_public = Column(Boolean, default=False, nullable=False)

    # Relationships
    owner = relationship("User", back_populates="trips")
    stops = relationship(
        "TripStop", back_populates="trip", cascade="all, delete-orphan",
        order_by="TripStop.order_index",
    )
    activities = relationship("TripActivity", back_populates="trip", cascade="all, delete-orphan")
    budgets = relationship("Budget", back_populates="trip", cascade="all, delete-orphan")
    shares = relationship("SharedTrip", back_populates="trip", cascade="all, delete-orphan")


class TripStop(BaseModel):
    """Destination within a trip. order_index is a display hint, not unique."""
    __tablename__ = "trip_stops"

    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    city = Column(String(120), nullable=False)
    country = Column(String(120), nullable=False)
    arrival_date = Column(UTCDateTime, nullable=False)
    departure_date = Column(UTCDateTime, nullable=False)
    order_index = Column(Integer, nullable=False, default=0)
    notes = Column(Text, nullable=True)

    # Relationships
    trip = relationship("Trip", back_populates="stops")
    activities = relationship("TripActivity", back_populates="stop", cascade="all, delete")


class SharedTrip(TimestampMixin, Base):
    """Grant giving a non-owner access to a trip."""
    __tablename__ = "shared_trips"

    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True)
    role = Column(
        SQLEnum(ShareRole, values_callable=lambda roles: [r.value for r in roles]),
        default=ShareRole.VIEWER,
        nullable=False,
    )

    # Relationships
    trip = relationship("Trip", back_populates="shares")
    user = relationship("User", back_populates="shared_trips")
