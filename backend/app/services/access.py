"""
Trip authorization predicates.

Every trip-scoped query combines the row lookup with one of these clauses in a
single WHERE, so an unauthorized caller never learns more than "no row".

    owner          owner_id = :user
    member         owner, or any SharedTrip grant for :user
    can_read       member, or is_public (anonymous callers: is_public only)
    can_write      owner, or an editor grant for :user
"""
import enum
from typing import Optional
from sqlalchemy import false, or_, select
from sqlalchemy.orm import Session
from app.models.trip import Trip, SharedTrip, ShareRole


class AccessRole(str, enum.Enum):
    """Effective access a requester has on a trip."""
    OWNER = "owner"
    EDITOR = "editor"
    VIEWER = "viewer"
    PUBLIC = "public"


def shared_with(user_id: int, role: Optional[ShareRole] = None):
    """Clause matching trips shared with the user (optionally with a given role)."""
    grants = select(SharedTrip.trip_id).where(SharedTrip.user_id == user_id)
    if role is not None:
        grants = grants.where(SharedTrip.role == role)
    return Trip.id.in_(grants)


def owner_clause(user_id: int):
    return Trip.owner_id == user_id


def member_clause(user_id: Optional[int]):
    if user_id is None:
        return false()
    return or_(Trip.owner_id == user_id, shared_with(user_id))


def can_read_clause(user_id: Optional[int]):
    if user_id is None:
        return Trip.is_public.is_(True)
    return or_(Trip.owner_id == user_id, Trip.is_public.is_(True), shared_with(user_id))


def can_write_clause(user_id: Optional[int]):
    if user_id is None:
        return false()
    return or_(Trip.owner_id == user_id, shared_with(user_id, ShareRole.EDITOR))


def resolve_role(db: Session, trip: Trip, user_id: Optional[int]) -> Optional[AccessRole]:
    """Effective role of the user on an already loaded trip, or None if they cannot read it."""
    if user_id is not None:
        if trip.owner_id == user_id:
            return AccessRole.OWNER
        grant = db.get(SharedTrip, (trip.id, user_id))
        if grant is not None:
            return AccessRole.EDITOR if grant.role == ShareRole.EDITOR else AccessRole.VIEWER
    if trip.is_public:
        return AccessRole.PUBLIC
    return None
