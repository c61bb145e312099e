"""
Budget line items attached to a trip.
"""
from sqlalchemy import Column, String, Numeric, ForeignKey, Integer
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class Budget(BaseModel):
    """Category/amount line item for a trip."""
    __tablename__ = "budgets"

    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    category = Column(String(100), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="USD")

    # Relationships
    trip = relationship("Trip", back_populates="budgets")
