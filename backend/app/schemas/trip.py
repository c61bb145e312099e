"""
Pydantic schemas for Trip and SharedTrip entities.
"""
from pydantic import EmailStr, Field, model_validator
from typing import Optional
from datetime import date, datetime
from app.models.trip import ShareRole
from app.schemas.base import CamelModel


class TripBase(CamelModel):
    """Base trip schema."""
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_public: bool = False

    @model_validator(mode="after")
    def check_dates(self):
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("End date must be on or after start date")
        return self


class TripCreate(TripBase):
    """Schema for trip creation."""
    pass


class TripUpdate(CamelModel):
    """Schema for partial trip update."""
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_public: Optional[bool] = None

    @model_validator(mode="after")
    def check_dates(self):
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("End date must be on or after start date")
        return self


class TripResponse(TripBase):
    """Schema for trip response."""
    id: int
    owner_id: int
    created_at: datetime
    updated_at: datetime


class TripDetailResponse(TripResponse):
    """Trip plus the caller's access role (owner, editor, viewer or public)."""
    access_role: str


class ShareCreate(CamelModel):
    """Grant access to a trip by email."""
    email: EmailStr
    role: ShareRole = ShareRole.VIEWER


class ShareResponse(CamelModel):
    """Schema for a share grant."""
    trip_id: int
    user_id: int
    role: ShareRole
    user_name: str
    user_email: str
    created_at: datetime
