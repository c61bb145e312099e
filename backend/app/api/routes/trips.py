"""
Trip management and sharing routes.

Trip-level lookups answer 404 both for missing trips and for trips the caller
may not see, so other users' trips cannot be discovered.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional
from app.api.dependencies import AuthContext, get_current_auth, get_optional_auth
from app.core.exceptions import NotFound
from app.core.utils import format_message
from app.db.session import get_db
from app.models.trip import SharedTrip, Trip
from app.schemas.trip import (
    ShareCreate, ShareResponse, TripCreate, TripDetailResponse, TripResponse, TripUpdate
)
from app.services import share_service, trip_service
from app.services.access import resolve_role

router = APIRouter(prefix="/trips", tags=["trips"])

TRIP_NOT_FOUND = "Trip not found"


def _detail(trip: Trip, user_id: Optional[int], db: Session) -> TripDetailResponse:
    role = resolve_role(db, trip, user_id)
    return TripDetailResponse(
        **TripResponse.model_validate(trip).model_dump(),
        access_role=role.value,
    )


def _share_response(grant: SharedTrip) -> ShareResponse:
    return ShareResponse(
        trip_id=grant.trip_id,
        user_id=grant.user_id,
        role=grant.role,
        user_name=grant.user.name,
        user_email=grant.user.email,
        created_at=grant.created_at,
    )


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    auth: AuthContext = Depends(get_current_auth),
    db: Session = Depends(get_db)
):
    """Create a new trip owned by the current user."""
    return trip_service.create_trip(trip_data, auth.user_id, db)


@router.get("", response_model=List[TripResponse])
async def list_trips(
    auth: AuthContext = Depends(get_current_auth),
    db: Session = Depends(get_db)
):
    """List trips owned by the current user."""
    return trip_service.list_trips(auth.user_id, db)


@router.get("/shared", response_model=List[TripResponse])
async def list_shared_trips(
    auth: AuthContext = Depends(get_current_auth),
    db: Session = Depends(get_db)
):
    """List trips other users have shared with the current user."""
    return trip_service.list_shared_trips(auth.user_id, db)


@router.get("/{trip_id}", response_model=TripDetailResponse)
async def get_trip(
    trip_id: int,
    auth: Optional[AuthContext] = Depends(get_optional_auth),
    db: Session = Depends(get_db)
):
    """Get a trip. Public trips are readable without signing in."""
    user_id = auth.user_id if auth else None
    trip = trip_service.get_readable_trip(trip_id, user_id, db)
    if trip is None:
        raise NotFound(TRIP_NOT_FOUND)
    return _detail(trip, user_id, db)


@router.patch("/{trip_id}", response_model=TripDetailResponse)
async def update_trip(
    trip_id: int,
    updates: TripUpdate,
    auth: AuthContext = Depends(get_current_auth),
    db: Session = Depends(get_db)
):
    """Update an owned trip, including its public flag."""
    trip = trip_service.update_trip(trip_id, auth.user_id, updates, db)
    if trip is None:
        raise NotFound(TRIP_NOT_FOUND)
    return _detail(trip, auth.user_id, db)


@router.delete("/{trip_id}")
async def delete_trip(
    trip_id: int,
    auth: AuthContext = Depends(get_current_auth),
    db: Session = Depends(get_db)
):
    """Delete an owned trip with its stops, activities, budgets and grants."""
    if not trip_service.delete_trip(trip_id, auth.user_id, db):
        raise NotFound(TRIP_NOT_FOUND)
    return format_message("Trip deleted successfully")


@router.get("/{trip_id}/shares", response_model=List[ShareResponse])
async def list_shares(
    trip_id: int,
    auth: AuthContext = Depends(get_current_auth),
    db: Session = Depends(get_db)
):
    """List the users an owned trip is shared with."""
    grants = share_service.list_shares(trip_id, auth.user_id, db)
    if grants is None:
        raise NotFound(TRIP_NOT_FOUND)
    return [_share_response(grant) for grant in grants]


@router.post("/{trip_id}/shares", response_model=ShareResponse, status_code=status.HTTP_201_CREATED)
async def share_trip(
    trip_id: int,
    share: ShareCreate,
    auth: AuthContext = Depends(get_current_auth),
    db: Session = Depends(get_db)
):
    """Share an owned trip with another user as viewer or editor."""
    grant = share_service.grant_share(trip_id, auth.user_id, share.email, share.role, db)
    if grant is None:
        raise NotFound(TRIP_NOT_FOUND)
    return _share_response(grant)


@router.delete("/{trip_id}/shares/{user_id}")
async def unshare_trip(
    trip_id: int,
    user_id: int,
    auth: AuthContext = Depends(get_current_auth),
    db: Session = Depends(get_db)
):
    """Revoke a user's access to an owned trip."""
    if trip_service.get_trip(trip_id, auth.user_id, db) is None:
        raise NotFound(TRIP_NOT_FOUND)
    if not share_service.revoke_share(trip_id, auth.user_id, user_id, db):
        raise NotFound("Share not found")
    return format_message("Share removed successfully")
