"""
Pydantic schemas for Budget entity.
"""
from pydantic import Field, field_validator
from typing import Dict, List
from datetime import datetime
from decimal import Decimal
from app.schemas.base import CamelModel


class BudgetBase(CamelModel):
    """Base budget schema."""
    category: str = Field(min_length=1, max_length=100)
    amount: Decimal = Field(ge=0)
    currency: str = "USD"

    @field_validator("currency")
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        v = v.strip().upper()
        if len(v) != 3 or not v.isalpha():
            raise ValueError("Currency must be a 3-letter code")
        return v


class BudgetCreate(BudgetBase):
    """Schema for budget creation."""
    pass


class BudgetResponse(BudgetBase):
    """Schema for budget response."""
    id: int
    trip_id: int
    created_at: datetime


class BudgetCategoryItem(CamelModel):
    """Total budgeted for one category in one currency."""
    category: str
    currency: str
    amount: Decimal
    item_count: int


class BudgetSummary(CamelModel):
    """Budget totals for a trip, with the planned activity spend."""
    trip_id: int
    totals: Dict[str, Decimal] = {}  # currency -> total budgeted
    categories: List[BudgetCategoryItem] = []
    planned_activity_cost: Decimal = Decimal(0)
    activity_count: int = 0
