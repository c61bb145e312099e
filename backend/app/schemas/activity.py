"""
Pydantic schemas for catalog activities and trip activities.
"""
from pydantic import Field
from typing import Optional
from datetime import datetime
from decimal import Decimal
from app.schemas.base import CamelModel


class ActivityBase(CamelModel):
    """Catalog activity."""
    name: str = Field(min_length=1, max_length=200)
    category: Optional[str] = None
    description: Optional[str] = None
    default_cost: Optional[Decimal] = Field(default=None, ge=0)


class ActivityCreate(ActivityBase):
    """Schema for adding an entry to the catalog."""


class ActivityResponse(ActivityBase):
    id: int


class TripActivityBase(CamelModel):
    """Base trip activity schema."""
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    scheduled_date: Optional[datetime] = None
    cost: Optional[Decimal] = Field(default=None, ge=0)
    duration_minutes: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None


class TripActivityCreate(TripActivityBase):
    """
    Schema for trip activity creation.

    stop_id is taken from the URL for /trip-stops/{id}/activities; on
    /trips/{id}/activities it may be given in the body and must belong to
    that trip. When activity_id is given and cost is omitted, the catalog
    default cost is used.
    """
    stop_id: Optional[int] = None
    activity_id: Optional[int] = None
    order_index: Optional[int] = Field(default=None, ge=0)


class TripActivityResponse(TripActivityBase):
    """Schema for trip activity response."""
    id: int
    trip_id: int
    stop_id: Optional[int] = None
    activity_id: Optional[int] = None
    order_index: int
    created_at: datetime
