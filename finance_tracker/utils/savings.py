# finance_tracker/utils/savings.py
import enum
import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Union
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from finance_tracker.crud.savings import (
    append_transaction,
    get_goal_by_id,
    get_goals_for_user,
    get_recent_transactions_for_user,
    get_transactions_for_goal,
    mark_goal_completed,
    update_goal_balance,
)
from finance_tracker.models.savings import SavingsGoal, SavingsTransaction, SavingsTransactionType
from finance_tracker.schemas.savings import SavingsGoalRead, SavingsSummary
from finance_tracker.utils.budgeting import ZERO, percentage_of

logger = logging.getLogger(__name__)


class SavingsRejection(str, enum.Enum):
    """Why a ledger request was refused. Nothing is written when one is returned."""
    invalid_amount = "invalid_amount"
    goal_not_found = "goal_not_found"
    insufficient_balance = "insufficient_balance"


def goal_view(goal: SavingsGoal) -> SavingsGoalRead:
    target = Decimal(goal.target_amount)
    current = Decimal(goal.current_amount)
    return SavingsGoalRead(
        id=goal.id,
        name=goal.name,
        description=goal.description,
        target_amount=target,
        current_amount=current,
        remaining_amount=max(target - current, ZERO),
        percentage_complete=float(percentage_of(current, target)),
        icon=goal.icon,
        color=goal.color,
        target_date=goal.target_date,
        is_completed=goal.is_completed,
        completed_at=goal.completed_at,
        created_at=goal.created_at,
    )


async def apply_transaction(
    goal_id: uuid.UUID,
    user_id: uuid.UUID,
    amount: Decimal,
    tx_type: SavingsTransactionType,
    db: AsyncSession,
    note: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Union[SavingsTransaction, SavingsRejection]:
    """
    Deposit into or withdraw from a savings goal.

    The balance moves through a single conditional UPDATE, so a withdrawal
    that would take the balance below zero matches no row and is rejected,
    even when another request changed the balance in between. The first
    deposit that brings the balance to the target marks the goal completed;
    later withdrawals leave the flag and completed_at alone.

    Returns the recorded ledger row (with the goal name snapshot), or a
    SavingsRejection.
    """
    if amount is None or amount <= 0:
        return SavingsRejection.invalid_amount

    goal = await get_goal_by_id(goal_id, user_id, db)
    if goal is None:
        return SavingsRejection.goal_not_found

    tx_type = SavingsTransactionType(tx_type)
    now = now or datetime.utcnow()
    delta = amount if tx_type == SavingsTransactionType.deposit else -amount

    if not await update_goal_balance(goal_id, user_id, delta, db):
        logger.warning(
            f"Rejected {tx_type.value} of {amount} on goal {goal_id}: insufficient balance"
        )
        return SavingsRejection.insufficient_balance

    completed_now = False
    if tx_type == SavingsTransactionType.deposit:
        completed_now = await mark_goal_completed(goal_id, now, db)

    tx = await append_transaction(
        SavingsTransaction(
            savings_goal_id=goal_id,
            user_id=user_id,
            goal_name=goal.name,
            amount=amount,
            type=tx_type,
            note=note,
            created_at=now,
        ),
        db,
    )
    await db.commit()
    await db.refresh(goal)
    await db.refresh(tx)

    if completed_now:
        logger.info(f"Savings goal {goal_id} reached its target of {goal.target_amount}")
    return tx


async def summarize_savings(user_id: uuid.UUID, db: AsyncSession) -> SavingsSummary:
    goals = await get_goals_for_user(user_id, db)
    total_saved = sum((Decimal(g.current_amount) for g in goals), ZERO)
    total_target = sum((Decimal(g.target_amount) for g in goals), ZERO)
    completed = sum(1 for g in goals if g.is_completed)

    return SavingsSummary(
        total_saved=total_saved,
        total_target=total_target,
        active_goals=len(goals) - completed,
        completed_goals=completed,
        overall_progress=float(percentage_of(total_saved, total_target)),
    )


async def get_recent_transactions(user_id: uuid.UUID, db: AsyncSession, limit: int = 20) -> List[SavingsTransaction]:
    return await get_recent_transactions_for_user(user_id, db, limit=limit)


async def get_goal_transactions(
    goal_id: uuid.UUID,
    user_id: uuid.UUID,
    db: AsyncSession,
) -> Optional[List[SavingsTransaction]]:
    """The goal's ledger, newest first; None when the goal is not the caller's."""
    if await get_goal_by_id(goal_id, user_id, db) is None:
        return None
    return await get_transactions_for_goal(goal_id, user_id, db)
