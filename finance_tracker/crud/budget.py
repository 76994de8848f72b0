# finance_tracker/crud/budget.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import desc
from finance_tracker.models.budget import Budget
from typing import List, Optional
import uuid
from finance_tracker.schemas.budget import BudgetCreate

async def get_budgets_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[Budget]:
    result = await db.execute(
        select(Budget)
        .where(Budget.user_id == user_id)
        .order_by(desc(Budget.year), desc(Budget.month))
    )
    return list(result.scalars().all())

async def get_budget_by_id(budget_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Budget]:
    result = await db.execute(
        select(Budget).where(Budget.id == budget_id, Budget.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def get_budget_for_month(user_id: uuid.UUID, month: int, year: int, db: AsyncSession) -> Optional[Budget]:
    result = await db.execute(
        select(Budget).where(
            Budget.user_id == user_id,
            Budget.month == month,
            Budget.year == year,
        )
    )
    return result.scalar_one_or_none()

async def upsert_budget(user_id: uuid.UUID, budget_in: BudgetCreate, db: AsyncSession) -> Budget:
    """Create the budget for (user, month, year), or replace the amount of the existing one."""
    budget = await get_budget_for_month(user_id, budget_in.month, budget_in.year, db)
    if budget is None:
        budget = Budget(**budget_in.model_dump(), user_id=user_id)
    else:
        budget.amount = budget_in.amount
    db.add(budget)
    await db.commit()
    await db.refresh(budget)
    return budget

async def delete_budget(budget: Budget, db: AsyncSession) -> None:
    await db.delete(budget)
    await db.commit()
