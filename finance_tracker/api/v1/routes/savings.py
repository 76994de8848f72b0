# finance_tracker/api/v1/routes/savings.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import uuid

from finance_tracker.core.config import settings
from finance_tracker.core.database import get_async_session
from finance_tracker.api.deps import get_current_user
from finance_tracker.crud.savings import (
    create_goal_for_user,
    delete_goal,
    get_goal_by_id,
    get_goals_for_user,
    update_goal,
)
from finance_tracker.models.user import User
from finance_tracker.schemas.savings import (
    SavingsGoalCreate,
    SavingsGoalRead,
    SavingsGoalUpdate,
    SavingsSummary,
    SavingsTransactionCreate,
    SavingsTransactionRead,
)
from finance_tracker.utils.savings import (
    SavingsRejection,
    apply_transaction,
    get_goal_transactions,
    get_recent_transactions,
    goal_view,
    summarize_savings,
)

router = APIRouter(prefix="/savings", tags=["savings"])

REJECTION_STATUS = {
    SavingsRejection.goal_not_found: status.HTTP_404_NOT_FOUND,
    SavingsRejection.invalid_amount: status.HTTP_400_BAD_REQUEST,
    SavingsRejection.insufficient_balance: status.HTTP_400_BAD_REQUEST,
}

@router.get("/summary", response_model=SavingsSummary)
async def read_savings_summary(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await summarize_savings(user.id, db)

@router.get("/goals", response_model=List[SavingsGoalRead])
async def read_goals(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return [goal_view(g) for g in await get_goals_for_user(user.id, db)]

@router.post("/goals", response_model=SavingsGoalRead, status_code=status.HTTP_201_CREATED)
async def create_goal(
    goal_in: SavingsGoalCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return goal_view(await create_goal_for_user(user.id, goal_in, db))

@router.get("/goals/{goal_id}", response_model=SavingsGoalRead)
async def read_goal(
    goal_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    goal = await get_goal_by_id(goal_id, user.id, db)
    if not goal:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Savings goal not found")
    return goal_view(goal)

@router.patch("/goals/{goal_id}", response_model=SavingsGoalRead)
async def update_goal_endpoint(
    goal_id: uuid.UUID,
    goal_in: SavingsGoalUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    goal = await get_goal_by_id(goal_id, user.id, db)
    if not goal:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Savings goal not found")
    return goal_view(await update_goal(goal, goal_in, db))

@router.delete("/goals/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_goal_endpoint(
    goal_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    goal = await get_goal_by_id(goal_id, user.id, db)
    if not goal:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Savings goal not found")
    await delete_goal(goal, db)
    return None

@router.post(
    "/goals/{goal_id}/transactions",
    response_model=SavingsTransactionRead,
    status_code=status.HTTP_201_CREATED,
)
async def add_transaction(
    goal_id: uuid.UUID,
    tx_in: SavingsTransactionCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """
    Deposit into or withdraw from a goal.

    - **404**: goal_not_found
    - **400**: invalid_amount or insufficient_balance
    """
    result = await apply_transaction(goal_id, user.id, tx_in.amount, tx_in.type, db, note=tx_in.note)
    if isinstance(result, SavingsRejection):
        raise HTTPException(REJECTION_STATUS[result], detail=result.value)
    return result

@router.get("/goals/{goal_id}/transactions", response_model=List[SavingsTransactionRead])
async def read_goal_transactions(
    goal_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    transactions = await get_goal_transactions(goal_id, user.id, db)
    if transactions is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Savings goal not found")
    return transactions

@router.get("/transactions/recent", response_model=List[SavingsTransactionRead])
async def read_recent_transactions(
    limit: Optional[int] = Query(None, ge=1, le=100),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """The caller's latest ledger rows across all goals, newest first"""
    return await get_recent_transactions(user.id, db, limit=limit or settings.RECENT_TRANSACTIONS_LIMIT)
