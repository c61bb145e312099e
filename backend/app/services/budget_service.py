"""
Budget service: per-trip budget line items and totals.
"""
import logging
from decimal import Decimal
from typing import Dict, List, Optional, Tuple
from sqlalchemy.orm import Session
from app.models.activity import TripActivity
from app.models.budget import Budget
from app.models.trip import Trip
from app.schemas.budget import BudgetCategoryItem, BudgetCreate, BudgetSummary
from app.services.access import can_write_clause, member_clause
from app.services.trip_service import get_member_trip, get_writable_trip

logger = logging.getLogger(__name__)


def list_budgets(trip_id: int, user_id: int, db: Session) -> List[Budget]:
    """Budget items of a trip the user owns or was granted. Empty otherwise."""
    return db.query(Budget).join(Trip, Budget.trip_id == Trip.id).filter(
        Budget.trip_id == trip_id,
        member_clause(user_id),
    ).order_by(Budget.category, Budget.id).all()


def create_budget(trip_id: int, user_id: int, budget_data: BudgetCreate, db: Session) -> Optional[Budget]:
    """Add a budget item to a writable trip. Returns None if not writable."""
    trip = get_writable_trip(trip_id, user_id, db)
    if trip is None:
        return None

    budget = Budget(trip_id=trip.id, **budget_data.model_dump())
    db.add(budget)
    db.commit()
    db.refresh(budget)
    return budget


def delete_budget(budget_id: int, user_id: int, db: Session) -> bool:
    budget = db.query(Budget).join(Trip, Budget.trip_id == Trip.id).filter(
        Budget.id == budget_id,
        can_write_clause(user_id),
    ).first()
    if budget is None:
        return False

    db.delete(budget)
    db.commit()
    return True


def get_budget_summary(trip_id: int, user_id: int, db: Session) -> Optional[BudgetSummary]:
    """Totals per currency and per category, plus the planned activity spend."""
    trip = get_member_trip(trip_id, user_id, db)
    if trip is None:
        return None

    budgets = db.query(Budget).filter(Budget.trip_id == trip.id).all()

    totals: Dict[str, Decimal] = {}
    by_category: Dict[Tuple[str, str], List[Decimal]] = {}
    for budget in budgets:
        amount = Decimal(budget.amount)
        totals[budget.currency] = totals.get(budget.currency, Decimal(0)) + amount
        by_category.setdefault((budget.category, budget.currency), []).append(amount)

    categories = [
        BudgetCategoryItem(
            category=category,
            currency=currency,
            amount=sum(amounts, Decimal(0)),
            item_count=len(amounts),
        )
        for (category, currency), amounts in by_category.items()
    ]
    # Largest first
    categories.sort(key=lambda item: item.amount, reverse=True)

    activity_costs = [
        Decimal(cost) for (cost,) in db.query(TripActivity.cost).filter(TripActivity.trip_id == trip.id)
        if cost is not None
    ]

    return BudgetSummary(
        trip_id=trip.id,
        totals=totals,
        categories=categories,
        planned_activity_cost=sum(activity_costs, Decimal(0)),
        activity_count=db.query(TripActivity).filter(TripActivity.trip_id == trip.id).count(),
    )
