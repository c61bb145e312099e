"""
Activity catalog and trip activity routes.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from app.api.dependencies import AuthContext, get_current_auth, get_optional_auth, raise_access_error
from app.core.utils import format_message
from app.db.session import get_db
from app.models.activity import TripActivity
from app.models.trip import Trip, TripStop
from app.schemas.activity import ActivityCreate, ActivityResponse, TripActivityCreate, TripActivityResponse
from app.services import activity_service

router = APIRouter(tags=["activities"])


@router.get("/activities", response_model=List[ActivityResponse])
async def list_activities(db: Session = Depends(get_db)):
    """List the activity catalog."""
    return activity_service.list_activities(db)


@router.get("/activities/search", response_model=List[ActivityResponse])
async def search_activities(
    q: str = Query("", max_length=200),
    db: Session = Depends(get_db)
):
    """Search the catalog by name."""
    return activity_service.search_activities(q, db)


@router.post("/activities", response_model=ActivityResponse, status_code=status.HTTP_201_CREATED)
async def create_activity(
    activity_data: ActivityCreate,
    auth: AuthContext = Depends(get_current_auth),
    db: Session = Depends(get_db)
):
    """Add an entry to the activity catalog."""
    return activity_service.create_activity(activity_data, db)


@router.get("/trips/{trip_id}/activities", response_model=List[TripActivityResponse])
async def list_trip_activities(
    trip_id: int,
    auth: Optional[AuthContext] = Depends(get_optional_auth),
    db: Session = Depends(get_db)
):
    """List activities scheduled on a trip."""
    return activity_service.list_trip_activities(trip_id, auth.user_id if auth else None, db)


@router.post(
    "/trips/{trip_id}/activities",
    response_model=TripActivityResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_trip_activity(
    trip_id: int,
    activity_data: TripActivityCreate,
    auth: AuthContext = Depends(get_current_auth),
    db: Session = Depends(get_db)
):
    """Schedule an activity on a trip."""
    trip_activity = activity_service.create_trip_activity(trip_id, auth.user_id, activity_data, db)
    if trip_activity is None:
        raise_access_error(Trip, trip_id, "Trip", db)
    return trip_activity


@router.get("/trip-stops/{stop_id}/activities", response_model=List[TripActivityResponse])
async def list_stop_activities(
    stop_id: int,
    auth: Optional[AuthContext] = Depends(get_optional_auth),
    db: Session = Depends(get_db)
):
    """List activities scheduled at a stop."""
    return activity_service.list_stop_activities(stop_id, auth.user_id if auth else None, db)


@router.post(
    "/trip-stops/{stop_id}/activities",
    response_model=TripActivityResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_stop_activity(
    stop_id: int,
    activity_data: TripActivityCreate,
    auth: AuthContext = Depends(get_current_auth),
    db: Session = Depends(get_db)
):
    """Schedule an activity at a stop."""
    trip_activity = activity_service.create_stop_activity(stop_id, auth.user_id, activity_data, db)
    if trip_activity is None:
        raise_access_error(TripStop, stop_id, "Stop", db)
    return trip_activity


@router.delete("/trip-activities/{activity_id}")
@router.delete("/activities/{activity_id}")
async def delete_trip_activity(
    activity_id: int,
    auth: AuthContext = Depends(get_current_auth),
    db: Session = Depends(get_db)
):
    """Remove a scheduled activity from its trip."""
    if not activity_service.delete_trip_activity(activity_id, auth.user_id, db):
        raise_access_error(TripActivity, activity_id, "Activity", db)
    return format_message("Activity deleted successfully")
