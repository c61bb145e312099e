"""
Utility functions for the application.
"""
from typing import Any, Dict, Optional
from datetime import datetime, timezone


def to_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalize a datetime to an aware UTC datetime. Naive values are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_message(message: str) -> Dict[str, Any]:
    """Format a plain message response."""
    return {"message": message}


def format_error(message: str, field: Optional[str] = None) -> Dict[str, Any]:
    """Format error response."""
    response = {"message": message}
    if field:
        response["field"] = field
    return response
