"""Models package - Import all models for SQLAlchemy registration."""
from app.models.user import User
from app.models.trip import Trip, TripStop, SharedTrip, ShareRole
from app.models.activity import Activity, TripActivity
from app.models.budget import Budget

__all__ = [
    "User",
    "Trip",
    "TripStop",
    "SharedTrip",
    "ShareRole",
    "Activity",
    "TripActivity",
    "Budget",
]
