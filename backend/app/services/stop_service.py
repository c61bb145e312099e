"""
Stop service: trip stops, authorized through the parent trip.
"""
import logging
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from app.core.exceptions import ValidationError
from app.core.utils import to_utc
from app.models.trip import Trip, TripStop
from app.schemas.stop import StopCreate, StopUpdate
from app.services.access import can_read_clause, can_write_clause
from app.services.trip_service import get_writable_trip

logger = logging.getLogger(__name__)

_NON_NULLABLE = {"city", "country", "arrival_date", "departure_date", "order_index"}


def next_order_index(model, trip_id: int, db: Session, stop_id: Optional[int] = None) -> int:
    """
    Order index placing a new child record after its existing siblings.
    Siblings are the records of the trip, or of the stop when one is given.
    """
    query = db.query(func.max(model.order_index)).filter(model.trip_id == trip_id)
    if stop_id is not None:
        query = query.filter(model.stop_id == stop_id)
    current = query.scalar()
    return 0 if current is None else current + 1


def list_stops(trip_id: int, user_id: Optional[int], db: Session) -> List[TripStop]:
    """
    Stops of a trip in display order.
    Empty when the trip does not exist or the caller may not read it.
    """
    return db.query(TripStop).join(Trip, TripStop.trip_id == Trip.id).filter(
        TripStop.trip_id == trip_id,
        can_read_clause(user_id),
    ).order_by(TripStop.order_index, TripStop.arrival_date, TripStop.id).all()


def get_writable_stop(stop_id: int, user_id: Optional[int], db: Session) -> Optional[TripStop]:
    return db.query(TripStop).join(Trip, TripStop.trip_id == Trip.id).filter(
        TripStop.id == stop_id,
        can_write_clause(user_id),
    ).first()


def create_stop(trip_id: int, user_id: int, stop_data: StopCreate, db: Session) -> Optional[TripStop]:
    """Add a stop to a writable trip. Returns None if the trip is not writable."""
    trip = get_writable_trip(trip_id, user_id, db)
    if trip is None:
        return None

    fields = stop_data.model_dump()
    if fields.get("order_index") is None:
        fields["order_index"] = next_order_index(TripStop, trip.id, db)

    stop = TripStop(trip_id=trip.id, **fields)
    db.add(stop)
    db.commit()
    db.refresh(stop)

    logger.info("User %s added stop %s to trip %s", user_id, stop.id, trip.id)
    return stop


def update_stop(stop_id: int, user_id: int, updates: StopUpdate, db: Session) -> Optional[TripStop]:
    """Apply a partial update to a stop. Returns None if not writable."""
    stop = get_writable_stop(stop_id, user_id, db)
    if stop is None:
        return None

    changes = {
        field: value
        for field, value in updates.model_dump(exclude_unset=True).items()
        if not (value is None and field in _NON_NULLABLE)
    }
    arrival = to_utc(changes.get("arrival_date", stop.arrival_date))
    departure = to_utc(changes.get("departure_date", stop.departure_date))
    if arrival > departure:
        raise ValidationError("Departure date must be on or after arrival date", field="departureDate")

    for field, value in changes.items():
        setattr(stop, field, value)
    db.commit()
    db.refresh(stop)
    return stop


def update_stop_order(stop_id: int, user_id: int, order_index: int, db: Session) -> Optional[TripStop]:
    """Move a stop to a new position. Siblings are left untouched."""
    stop = get_writable_stop(stop_id, user_id, db)
    if stop is None:
        return None

    stop.order_index = order_index
    db.commit()
    db.refresh(stop)
    return stop


def delete_stop(stop_id: int, user_id: int, db: Session) -> bool:
    """Delete a stop and the activities scheduled at it."""
    stop = get_writable_stop(stop_id, user_id, db)
    if stop is None:
        return False

    db.delete(stop)
    db.commit()

    logger.info("User %s deleted stop %s", user_id, stop_id)
    return True
