"""
User model for authentication and profile data.
"""
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from app.db.base import BaseModel
from app.db.types import UTCDateTime


class User(BaseModel):
    """Registered user. Email is the login identifier."""
    __tablename__ = "users"

    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    profile_image_url = Column(String(500), nullable=True)
    reset_token = Column(String(128), nullable=True, index=True)
    reset_token_expiry = Column(UTCDateTime, nullable=True)

    # Relationships
    trips = relationship("Trip", back_populates="owner", cascade="all, delete-orphan")
    shared_trips = relationship("SharedTrip", back_populates="user", cascade="all, delete-orphan")
