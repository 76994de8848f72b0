# finance_tracker/crud/savings.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import desc, func, update
from finance_tracker.models.savings import SavingsGoal, SavingsTransaction
from typing import List, Optional
from datetime import datetime
from decimal import Decimal
import uuid
from finance_tracker.schemas.savings import SavingsGoalCreate, SavingsGoalUpdate

# ────────────────────────────────────────────────────────────────────────────────
# GOALS
# ────────────────────────────────────────────────────────────────────────────────
async def get_goals_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[SavingsGoal]:
    result = await db.execute(
        select(SavingsGoal)
        .where(SavingsGoal.user_id == user_id)
        .order_by(SavingsGoal.created_at)
    )
    return list(result.scalars().all())

async def get_goal_by_id(goal_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[SavingsGoal]:
    result = await db.execute(
        select(SavingsGoal).where(SavingsGoal.id == goal_id, SavingsGoal.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def create_goal_for_user(user_id: uuid.UUID, goal_in: SavingsGoalCreate, db: AsyncSession) -> SavingsGoal:
    data = goal_in.model_dump(exclude_none=True)
    new_goal = SavingsGoal(
        **data,
        user_id=user_id,
        current_amount=Decimal("0"),
        is_completed=False,
    )
    db.add(new_goal)
    await db.commit()
    await db.refresh(new_goal)
    return new_goal

async def update_goal(goal: SavingsGoal, goal_in: SavingsGoalUpdate, db: AsyncSession) -> SavingsGoal:
    """Edit the descriptive fields and target. Balance and completion are ledger-owned."""
    changes = goal_in.model_dump(exclude_unset=True)
    for field in ("name", "target_amount", "icon", "color"):
        if changes.get(field, ...) is None:
            changes.pop(field)
    for field, value in changes.items():
        setattr(goal, field, value)
    db.add(goal)
    await db.commit()
    await db.refresh(goal)
    return goal

async def delete_goal(goal: SavingsGoal, db: AsyncSession) -> None:
    # Ledger rows are kept; they carry the goal name snapshot
    await db.delete(goal)
    await db.commit()

# ────────────────────────────────────────────────────────────────────────────────
# BALANCE (no commit: the caller commits balance + ledger row together)
# ────────────────────────────────────────────────────────────────────────────────
async def update_goal_balance(
    goal_id: uuid.UUID,
    user_id: uuid.UUID,
    delta: Decimal,
    db: AsyncSession,
) -> bool:
    """Add ``delta`` to the goal balance in one conditional UPDATE.

    The row only changes when the resulting balance stays >= 0, so two
    racing withdrawals cannot both pass a stale balance check. The sum is
    rounded to cents in SQL: SQLite does NUMERIC arithmetic in binary float.
    Returns whether the row was updated.
    """
    new_balance = func.round(SavingsGoal.current_amount + delta, 2)
    result = await db.execute(
        update(SavingsGoal)
        .where(
            SavingsGoal.id == goal_id,
            SavingsGoal.user_id == user_id,
            new_balance >= 0,
        )
        .values(
            current_amount=new_balance,
            updated_at=datetime.utcnow(),
        )
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1

async def mark_goal_completed(goal_id: uuid.UUID, completed_at: datetime, db: AsyncSession) -> bool:
    """Flag the goal completed if it has reached its target and is not completed yet.

    completed_at is therefore written at most once per goal.
    """
    result = await db.execute(
        update(SavingsGoal)
        .where(
            SavingsGoal.id == goal_id,
            SavingsGoal.is_completed.is_(False),
            SavingsGoal.current_amount >= SavingsGoal.target_amount,
        )
        .values(is_completed=True, completed_at=completed_at)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1

# ────────────────────────────────────────────────────────────────────────────────
# LEDGER
# ────────────────────────────────────────────────────────────────────────────────
async def append_transaction(tx: SavingsTransaction, db: AsyncSession) -> SavingsTransaction:
    db.add(tx)
    await db.flush()
    return tx

async def get_transactions_for_goal(goal_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> List[SavingsTransaction]:
    result = await db.execute(
        select(SavingsTransaction)
        .where(
            SavingsTransaction.savings_goal_id == goal_id,
            SavingsTransaction.user_id == user_id,
        )
        .order_by(desc(SavingsTransaction.created_at))
    )
    return list(result.scalars().all())

async def get_recent_transactions_for_user(user_id: uuid.UUID, db: AsyncSession, limit: int = 20) -> List[SavingsTransaction]:
    """Get the most recent ledger rows across all of a user's goals"""
    result = await db.execute(
        select(SavingsTransaction)
        .where(SavingsTransaction.user_id == user_id)
        .order_by(desc(SavingsTransaction.created_at))
        .limit(limit)
    )
    return list(result.scalars().all())
