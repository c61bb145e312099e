"""
Custom column types.
"""
from datetime import timezone
from sqlalchemy import DateTime
from sqlalchemy.types import TypeDecorator
from app.core.utils import to_utc


class UTCDateTime(TypeDecorator):
    """
    Timestamp stored as naive UTC and always returned as an aware UTC datetime,
    so values round-trip identically on backends without timezone support.
    """
    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return to_utc(value).replace(tzinfo=None)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return value.replace(tzinfo=timezone.utc)
