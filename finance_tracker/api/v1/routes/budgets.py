# finance_tracker/api/v1/routes/budgets.py
from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging
import uuid

from finance_tracker.core.database import get_async_session
from finance_tracker.api.deps import get_current_user
from finance_tracker.crud.budget import delete_budget, get_budget_by_id, upsert_budget
from finance_tracker.models.user import User
from finance_tracker.schemas.budget import BudgetCreate, BudgetView
from finance_tracker.utils.budgeting import (
    evaluate_budget_for_month,
    get_budget_views_for_user,
    get_current_budget_view,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/budgets", tags=["budgets"])

@router.get("", response_model=List[BudgetView])
async def read_budgets(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await get_budget_views_for_user(user.id, db)

@router.get("/current", response_model=Optional[BudgetView])
async def read_current_budget(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """This month's budget, or null when none is set"""
    return await get_current_budget_view(user.id, db)

@router.get("/{year}/{month}", response_model=Optional[BudgetView])
async def read_budget_for_month(
    year: int = Path(..., ge=2000, le=2100),
    month: int = Path(..., ge=1, le=12),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """The budget for a given month, or null when none is set"""
    return await evaluate_budget_for_month(user.id, month, year, db)

@router.post("", response_model=BudgetView)
async def save_budget(
    budget_in: BudgetCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Create the budget for a month, or replace its amount if one exists"""
    budget = await upsert_budget(user.id, budget_in, db)
    logger.info(f"Budget saved for user {user.id}: {budget.amount} for {budget.month}/{budget.year}")
    return await evaluate_budget_for_month(user.id, budget.month, budget.year, db)

@router.delete("/{budget_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_budget_endpoint(
    budget_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    budget = await get_budget_by_id(budget_id, user.id, db)
    if not budget:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Budget not found")
    await delete_budget(budget, db)
    return None
