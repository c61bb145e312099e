"""
Activity service: the global activity catalog and activities scheduled on trips.
"""
import logging
from decimal import Decimal
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.exceptions import ValidationError
from app.models.activity import Activity, TripActivity
from app.models.trip import Trip, TripStop
from app.schemas.activity import ActivityCreate, TripActivityCreate
from app.services.access import can_read_clause, can_write_clause
from app.services.stop_service import get_writable_stop, next_order_index
from app.services.trip_service import get_writable_trip

logger = logging.getLogger(__name__)

DEFAULT_CATALOG = [
    ("Eiffel Tower Visit", "Sightseeing", "Visit the iconic iron lattice tower", "30.00"),
    ("Louvre Museum", "Culture", "World's largest art museum", "25.00"),
    ("Colosseum Tour", "History", "Ancient Roman amphitheatre", "40.00"),
    ("Sushi Making Class", "Food", "Learn to make authentic sushi", "80.00"),
    ("Grand Canal Gondola", "Experience", "Romantic ride in Venice", "100.00"),
    ("Statue of Liberty Ferry", "Sightseeing", "Visit the symbol of freedom", "20.00"),
    ("Mount Fuji Day Trip", "Nature", "Full day tour to Japan's highest peak", "120.00"),
    ("Wine Tasting in Tuscany", "Food & Drink", "Visit local vineyards", "90.00"),
    ("Northern Lights Tour", "Nature", "Hunt for the aurora borealis", "150.00"),
    ("Safari in Kruger Park", "Adventure", "African wildlife experience", "250.00"),
]


# === Catalog ===

def list_activities(db: Session) -> List[Activity]:
    return db.query(Activity).order_by(Activity.name).all()


def search_activities(query: str, db: Session) -> List[Activity]:
    """Case-insensitive substring match on activity name."""
    query = (query or "").strip()
    if not query:
        return list_activities(db)
    return db.query(Activity).filter(
        func.lower(Activity.name).contains(query.lower(), autoescape=True)
    ).order_by(Activity.name).all()


def seed_activities(db: Session) -> int:
    """
    Insert the default catalog if the catalog is empty.
    All rows go in one transaction. Returns the number of rows inserted.
    """
    if db.query(Activity.id).first() is not None:
        return 0

    try:
        db.add_all([
            Activity(name=name, category=category, description=description, default_cost=Decimal(cost))
            for name, category, description, cost in DEFAULT_CATALOG
        ])
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Seeding the activity catalog failed; no rows were inserted")
        raise

    logger.info("Seeded %d catalog activities", len(DEFAULT_CATALOG))
    return len(DEFAULT_CATALOG)


def create_activity(activity_data: ActivityCreate, db: Session) -> Activity:
    """Add an entry to the catalog."""
    activity = Activity(**activity_data.model_dump())
    db.add(activity)
    db.commit()
    db.refresh(activity)

    logger.info("Added catalog activity %s (%s)", activity.id, activity.name)
    return activity


# === Trip activities ===

def list_trip_activities(trip_id: int, user_id: Optional[int], db: Session) -> List[TripActivity]:
    """Activities of a readable trip, in schedule order. Empty otherwise."""
    return db.query(TripActivity).join(Trip, TripActivity.trip_id == Trip.id).filter(
        TripActivity.trip_id == trip_id,
        can_read_clause(user_id),
    ).order_by(TripActivity.scheduled_date, TripActivity.order_index, TripActivity.id).all()


def list_stop_activities(stop_id: int, user_id: Optional[int], db: Session) -> List[TripActivity]:
    """Activities at a stop whose trip is readable. Empty otherwise."""
    return db.query(TripActivity).join(Trip, TripActivity.trip_id == Trip.id).filter(
        TripActivity.stop_id == stop_id,
        can_read_clause(user_id),
    ).order_by(TripActivity.scheduled_date, TripActivity.order_index, TripActivity.id).all()


def create_trip_activity(
    trip_id: int,
    user_id: int,
    activity_data: TripActivityCreate,
    db: Session
) -> Optional[TripActivity]:
    """
    Schedule an activity on a writable trip. Returns None if not writable.

    The stop, when given, must belong to the same trip. A catalog activity
    supplies the default cost and description for fields left empty.
    """
    trip = get_writable_trip(trip_id, user_id, db)
    if trip is None:
        return None

    fields = activity_data.model_dump()

    if fields["stop_id"] is not None:
        stop = db.query(TripStop).filter(
            TripStop.id == fields["stop_id"],
            TripStop.trip_id == trip.id,
        ).first()
        if stop is None:
            raise ValidationError("Stop does not belong to this trip", field="stopId")

    if fields["activity_id"] is not None:
        catalog_entry = db.get(Activity, fields["activity_id"])
        if catalog_entry is None:
            raise ValidationError("Activity not found", field="activityId")
        if fields["cost"] is None:
            fields["cost"] = catalog_entry.default_cost
        if fields["description"] is None:
            fields["description"] = catalog_entry.description

    if fields["order_index"] is None:
        fields["order_index"] = next_order_index(TripActivity, trip.id, db, stop_id=fields["stop_id"])

    trip_activity = TripActivity(trip_id=trip.id, **fields)
    db.add(trip_activity)
    db.commit()
    db.refresh(trip_activity)

    logger.info("User %s scheduled activity %s on trip %s", user_id, trip_activity.id, trip.id)
    return trip_activity


def create_stop_activity(
    stop_id: int,
    user_id: int,
    activity_data: TripActivityCreate,
    db: Session
) -> Optional[TripActivity]:
    """Schedule an activity at a stop. Returns None if the stop's trip is not writable."""
    stop = get_writable_stop(stop_id, user_id, db)
    if stop is None:
        return None
    return create_trip_activity(
        stop.trip_id,
        user_id,
        activity_data.model_copy(update={"stop_id": stop.id}),
        db,
    )


def get_writable_trip_activity(activity_id: int, user_id: Optional[int], db: Session) -> Optional[TripActivity]:
    return db.query(TripActivity).join(Trip, TripActivity.trip_id == Trip.id).filter(
        TripActivity.id == activity_id,
        can_write_clause(user_id),
    ).first()


def delete_trip_activity(activity_id: int, user_id: int, db: Session) -> bool:
    trip_activity = get_writable_trip_activity(activity_id, user_id, db)
    if trip_activity is None:
        return False

    db.delete(trip_activity)
    db.commit()

    logger.info("User %s deleted trip activity %s", user_id, activity_id)
    return True
