"""
Budget routes.

Budgets are private to the trip's owner and the users it is shared with;
a public trip does not expose them.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from app.api.dependencies import AuthContext, get_current_auth, raise_access_error
from app.core.exceptions import NotFound
from app.core.utils import format_message
from app.db.session import get_db
from app.models.budget import Budget
from app.models.trip import Trip
from app.schemas.budget import BudgetCreate, BudgetResponse, BudgetSummary
from app.services import budget_service

router = APIRouter(tags=["budget"])


@router.get("/trips/{trip_id}/budgets", response_model=List[BudgetResponse])
async def list_budgets(
    trip_id: int,
    auth: AuthContext = Depends(get_current_auth),
    db: Session = Depends(get_db)
):
    """List budget items of a trip."""
    return budget_service.list_budgets(trip_id, auth.user_id, db)


@router.post("/trips/{trip_id}/budgets", response_model=BudgetResponse, status_code=status.HTTP_201_CREATED)
async def create_budget(
    trip_id: int,
    budget_data: BudgetCreate,
    auth: AuthContext = Depends(get_current_auth),
    db: Session = Depends(get_db)
):
    """Add a budget item to a trip."""
    budget = budget_service.create_budget(trip_id, auth.user_id, budget_data, db)
    if budget is None:
        raise_access_error(Trip, trip_id, "Trip", db)
    return budget


@router.get("/trips/{trip_id}/budgets/summary", response_model=BudgetSummary)
async def get_budget_summary(
    trip_id: int,
    auth: AuthContext = Depends(get_current_auth),
    db: Session = Depends(get_db)
):
    """Budget totals per currency and category with planned activity spend."""
    summary = budget_service.get_budget_summary(trip_id, auth.user_id, db)
    if summary is None:
        raise NotFound("Trip not found")
    return summary


@router.delete("/budgets/{budget_id}")
async def delete_budget(
    budget_id: int,
    auth: AuthContext = Depends(get_current_auth),
    db: Session = Depends(get_db)
):
    """Delete a budget item."""
    if not budget_service.delete_budget(budget_id, auth.user_id, db):
        raise_access_error(Budget, budget_id, "Budget", db)
    return format_message("Budget deleted successfully")
