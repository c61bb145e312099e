"""
Trip service: ownership-scoped trip CRUD.

Lookups filter on id and the access clause in one query; a trip the caller
may not see is indistinguishable from a missing one.
"""
import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from app.core.exceptions import ValidationError
from app.models.trip import Trip
from app.schemas.trip import TripCreate, TripUpdate
from app.services.access import (
    can_read_clause,
    can_write_clause,
    member_clause,
    owner_clause,
    shared_with,
)

logger = logging.getLogger(__name__)

# Columns that may not be cleared with an explicit null
_NON_NULLABLE = {"title", "is_public"}


def list_trips(owner_id: int, db: Session) -> List[Trip]:
    """Trips owned by the user, newest first."""
    return db.query(Trip).filter(owner_clause(owner_id)).order_by(
        Trip.created_at.desc(), Trip.id.desc()
    ).all()


def list_shared_trips(user_id: int, db: Session) -> List[Trip]:
    """Trips other users have shared with the user."""
    return db.query(Trip).filter(shared_with(user_id)).order_by(
        Trip.created_at.desc(), Trip.id.desc()
    ).all()


def get_trip(trip_id: int, owner_id: int, db: Session) -> Optional[Trip]:
    """Trip owned by the user, or None."""
    return db.query(Trip).filter(Trip.id == trip_id, owner_clause(owner_id)).first()


def get_readable_trip(trip_id: int, user_id: Optional[int], db: Session) -> Optional[Trip]:
    """Trip the user (or an anonymous caller) may read, or None."""
    return db.query(Trip).filter(Trip.id == trip_id, can_read_clause(user_id)).first()


def get_member_trip(trip_id: int, user_id: Optional[int], db: Session) -> Optional[Trip]:
    """Trip the user owns or has been granted, or None. Public trips do not count."""
    return db.query(Trip).filter(Trip.id == trip_id, member_clause(user_id)).first()


def get_writable_trip(trip_id: int, user_id: Optional[int], db: Session) -> Optional[Trip]:
    """Trip whose child records the user may change, or None."""
    return db.query(Trip).filter(Trip.id == trip_id, can_write_clause(user_id)).first()


def create_trip(trip_data: TripCreate, owner_id: int, db: Session) -> Trip:
    """Create a trip owned by the user."""
    trip = Trip(owner_id=owner_id, **trip_data.model_dump())
    db.add(trip)
    db.commit()
    db.refresh(trip)

    logger.info("User %s created trip %s", owner_id, trip.id)
    return trip


def update_trip(trip_id: int, owner_id: int, updates: TripUpdate, db: Session) -> Optional[Trip]:
    """Apply a partial update to an owned trip. Returns None if not owned."""
    trip = get_trip(trip_id, owner_id, db)
    if trip is None:
        return None

    changes = {
        field: value
        for field, value in updates.model_dump(exclude_unset=True).items()
        if not (value is None and field in _NON_NULLABLE)
    }
    start_date = changes.get("start_date", trip.start_date)
    end_date = changes.get("end_date", trip.end_date)
    if start_date and end_date and start_date > end_date:
        raise ValidationError("End date must be on or after start date", field="endDate")

    for field, value in changes.items():
        setattr(trip, field, value)
    db.commit()
    db.refresh(trip)
    return trip


def delete_trip(trip_id: int, owner_id: int, db: Session) -> bool:
    """Delete an owned trip and everything under it."""
    trip = get_trip(trip_id, owner_id, db)
    if trip is None:
        return False

    db.delete(trip)
    db.commit()

    logger.info("User %s deleted trip %s", owner_id, trip_id)
    return True
