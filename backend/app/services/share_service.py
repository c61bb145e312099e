"""
Share service: grants giving other users viewer or editor access to a trip.
Only the trip owner manages grants.
"""
import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from app.core.exceptions import NotFound, ValidationError
from app.models.trip import SharedTrip, ShareRole, Trip
from app.services.trip_service import get_trip
from app.services.user_service import get_user_by_email

logger = logging.getLogger(__name__)


def list_shares(trip_id: int, owner_id: int, db: Session) -> Optional[List[SharedTrip]]:
    """Grants on an owned trip, or None if the trip is not owned."""
    trip = get_trip(trip_id, owner_id, db)
    if trip is None:
        return None
    return db.query(SharedTrip).filter(SharedTrip.trip_id == trip.id).order_by(
        SharedTrip.created_at
    ).all()


def grant_share(trip_id: int, owner_id: int, email: str, role: ShareRole, db: Session) -> Optional[SharedTrip]:
    """
    Share an owned trip with the user registered under email.
    An existing grant has its role replaced. Returns None if the trip is not owned.
    """
    trip = get_trip(trip_id, owner_id, db)
    if trip is None:
        return None

    user = get_user_by_email(email, db)
    if user is None:
        raise NotFound("User not found")
    if user.id == trip.owner_id:
        raise ValidationError("A trip cannot be shared with its owner", field="email")

    grant = db.get(SharedTrip, (trip.id, user.id))
    if grant is None:
        grant = SharedTrip(trip_id=trip.id, user_id=user.id, role=role)
        db.add(grant)
    else:
        grant.role = role
    db.commit()
    db.refresh(grant)

    logger.info("Trip %s shared with user %s as %s", trip.id, user.id, role.value)
    return grant


def revoke_share(trip_id: int, owner_id: int, user_id: int, db: Session) -> bool:
    """Remove a grant on an owned trip."""
    grant = db.query(SharedTrip).join(Trip, SharedTrip.trip_id == Trip.id).filter(
        SharedTrip.trip_id == trip_id,
        SharedTrip.user_id == user_id,
        Trip.owner_id == owner_id,
    ).first()
    if grant is None:
        return False

    db.delete(grant)
    db.commit()
    return True
