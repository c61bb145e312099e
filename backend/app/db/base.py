"""
Declarative base and common model columns.
"""
from sqlalchemy import Column, Integer
from sqlalchemy.orm import declarative_base
from app.core.utils import utcnow
from app.db.types import UTCDateTime

Base = declarative_base()


class TimestampMixin:
    """created_at / updated_at columns."""
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime, default=utcnow, onupdate=utcnow, nullable=False)


class BaseModel(TimestampMixin, Base):
    """Abstract base with integer primary key and timestamps."""
    __abstract__ = True

    id = Column(Integer, primary_key=True, index=True)
