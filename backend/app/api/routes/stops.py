"""
Trip stop routes.

Listing is silent (empty) for trips the caller cannot read. Mutations answer
404 when the trip or stop does not exist and 403 when it exists but the
caller may not change it.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional
from app.api.dependencies import AuthContext, get_current_auth, get_optional_auth, raise_access_error
from app.core.utils import format_message
from app.db.session import get_db
from app.models.trip import Trip, TripStop
from app.schemas.stop import StopCreate, StopOrderUpdate, StopResponse, StopUpdate
from app.services import stop_service

router = APIRouter(tags=["stops"])


@router.get("/trips/{trip_id}/stops", response_model=List[StopResponse])
async def list_stops(
    trip_id: int,
    auth: Optional[AuthContext] = Depends(get_optional_auth),
    db: Session = Depends(get_db)
):
    """List stops of a trip in display order."""
    return stop_service.list_stops(trip_id, auth.user_id if auth else None, db)


@router.post("/trips/{trip_id}/stops", response_model=StopResponse, status_code=status.HTTP_201_CREATED)
async def create_stop(
    trip_id: int,
    stop_data: StopCreate,
    auth: AuthContext = Depends(get_current_auth),
    db: Session = Depends(get_db)
):
    """Add a stop to a trip."""
    stop = stop_service.create_stop(trip_id, auth.user_id, stop_data, db)
    if stop is None:
        raise_access_error(Trip, trip_id, "Trip", db)
    return stop


@router.patch("/stops/{stop_id}", response_model=StopResponse)
async def update_stop(
    stop_id: int,
    updates: StopUpdate,
    auth: AuthContext = Depends(get_current_auth),
    db: Session = Depends(get_db)
):
    """Update a stop."""
    stop = stop_service.update_stop(stop_id, auth.user_id, updates, db)
    if stop is None:
        raise_access_error(TripStop, stop_id, "Stop", db)
    return stop


@router.patch("/stops/{stop_id}/order", response_model=StopResponse)
async def update_stop_order(
    stop_id: int,
    order: StopOrderUpdate,
    auth: AuthContext = Depends(get_current_auth),
    db: Session = Depends(get_db)
):
    """Move a stop to a new position in the itinerary."""
    stop = stop_service.update_stop_order(stop_id, auth.user_id, order.order_index, db)
    if stop is None:
        raise_access_error(TripStop, stop_id, "Stop", db)
    return stop


@router.delete("/stops/{stop_id}")
async def delete_stop(
    stop_id: int,
    auth: AuthContext = Depends(get_current_auth),
    db: Session = Depends(get_db)
):
    """Delete a stop and its activities."""
    if not stop_service.delete_stop(stop_id, auth.user_id, db):
        raise_access_error(TripStop, stop_id, "Stop", db)
    return format_message("Stop deleted successfully")
