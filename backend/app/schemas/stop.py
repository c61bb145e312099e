"""
Pydantic schemas for TripStop entity.
"""
from pydantic import Field, field_validator, model_validator
from typing import Optional
from datetime import datetime
from app.core.utils import to_utc
from app.schemas.base import CamelModel


class StopBase(CamelModel):
    """Base stop schema."""
    city: str = Field(min_length=1, max_length=120)
    country: str = Field(min_length=1, max_length=120)
    arrival_date: datetime
    departure_date: datetime
    notes: Optional[str] = None

    @field_validator("arrival_date", "departure_date")
    @classmethod
    def normalize_to_utc(cls, v: datetime) -> datetime:
        return to_utc(v)


class StopCreate(StopBase):
    """Schema for stop creation. order_index defaults to the end of the trip."""
    order_index: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def check_dates(self):
        if self.arrival_date > self.departure_date:
            raise ValueError("Departure date must be on or after arrival date")
        return self


class StopUpdate(CamelModel):
    """Schema for partial stop update."""
    city: Optional[str] = Field(default=None, min_length=1, max_length=120)
    country: Optional[str] = Field(default=None, min_length=1, max_length=120)
    arrival_date: Optional[datetime] = None
    departure_date: Optional[datetime] = None
    notes: Optional[str] = None
    order_index: Optional[int] = Field(default=None, ge=0)

    @field_validator("arrival_date", "departure_date")
    @classmethod
    def normalize_to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_utc(v)


class StopOrderUpdate(CamelModel):
    """Schema for reordering a stop."""
    order_index: int = Field(ge=0)


class StopResponse(StopBase):
    """Schema for stop response."""
    id: int
    trip_id: int
    order_index: int
    created_at: datetime
