"""
Activity catalog and scheduled trip activities.
"""
from sqlalchemy import Column, String, Numeric, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from app.db.base import BaseModel
from app.db.types import UTCDateTime


class Activity(BaseModel):
    """Reusable activity template shared by all users."""
    __tablename__ = "activities"

    name = Column(String(200), nullable=False, index=True)
    category = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)
    default_cost = Column(Numeric(10, 2), nullable=True)


class TripActivity(BaseModel):
    """Activity scheduled on a trip, optionally at a specific stop."""
    __tablename__ = "trip_activities"

    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    stop_id = Column(Integer, ForeignKey("trip_stops.id", ondelete="CASCADE"), nullable=True, index=True)
    activity_id = Column(Integer, ForeignKey("activities.id", ondelete="SET NULL"), nullable=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    scheduled_date = Column(UTCDateTime, nullable=True)
    cost = Column(Numeric(10, 2), nullable=True)
    duration_minutes = Column(Integer, nullable=True)
    order_index = Column(Integer, nullable=False, default=0)
    notes = Column(Text, nullable=True)

    # Relationships
    trip = relationship("Trip", back_populates="activities")
    stop = relationship("TripStop", back_populates="activities")
    activity = relationship("Activity")
