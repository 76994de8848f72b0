# finance_tracker/crud/expense.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import desc, func
from finance_tracker.models.expense import Expense
from finance_tracker.models.category import UNKNOWN_CATEGORY_NAME
from finance_tracker.crud.category import get_category_by_id
from typing import List, Optional
from datetime import date
from decimal import Decimal
import uuid
from finance_tracker.schemas.expense import ExpenseCreate, ExpenseUpdate


def _user_filters(
    user_id: uuid.UUID,
    start_date: Optional[date],
    end_date: Optional[date],
    category_id: Optional[uuid.UUID],
) -> list:
    # Date range is half-open: start inclusive, end exclusive
    filters = [Expense.user_id == user_id]
    if start_date is not None:
        filters.append(Expense.date >= start_date)
    if end_date is not None:
        filters.append(Expense.date < end_date)
    if category_id is not None:
        filters.append(Expense.category_id == category_id)
    return filters

async def get_expenses_for_user(
    user_id: uuid.UUID,
    db: AsyncSession,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    category_id: Optional[uuid.UUID] = None,
    page: Optional[int] = None,
    page_size: Optional[int] = None,
) -> List[Expense]:
    """A user's expenses, newest first. Without page/page_size every match is returned."""
    query = (
        select(Expense)
        .where(*_user_filters(user_id, start_date, end_date, category_id))
        .order_by(desc(Expense.date), desc(Expense.created_at))
    )
    if page is not None and page_size is not None:
        query = query.offset((page - 1) * page_size).limit(page_size)
    result = await db.execute(query)
    return list(result.scalars().all())

async def count_expenses_for_user(
    user_id: uuid.UUID,
    db: AsyncSession,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    category_id: Optional[uuid.UUID] = None,
) -> int:
    result = await db.execute(
        select(func.count())
        .select_from(Expense)
        .where(*_user_filters(user_id, start_date, end_date, category_id))
    )
    return result.scalar_one() or 0

async def get_expenses_for_all_users(start_date: date, end_date: date, db: AsyncSession) -> List[Expense]:
    result = await db.execute(
        select(Expense).where(Expense.date >= start_date, Expense.date < end_date)
    )
    return list(result.scalars().all())

async def count_all_expenses(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(Expense))
    return result.scalar_one() or 0

async def get_system_expense_total(db: AsyncSession) -> Decimal:
    # Summed in Python to keep exact Decimal arithmetic on every backend
    result = await db.execute(select(Expense.amount))
    return sum((row[0] for row in result.all()), Decimal("0"))

async def get_expense_by_id(expense_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Expense]:
    result = await db.execute(
        select(Expense).where(Expense.id == expense_id, Expense.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def _category_name_snapshot(category_id: uuid.UUID, db: AsyncSession) -> str:
    category = await get_category_by_id(category_id, db)
    return category.name if category else UNKNOWN_CATEGORY_NAME

async def create_expense_for_user(user_id: uuid.UUID, ex_in: ExpenseCreate, db: AsyncSession) -> Expense:
    new_ex = Expense(
        **ex_in.model_dump(),
        user_id=user_id,
        category_name=await _category_name_snapshot(ex_in.category_id, db),
    )
    db.add(new_ex)
    await db.commit()
    await db.refresh(new_ex)
    return new_ex

async def update_expense(expense: Expense, ex_in: ExpenseUpdate, db: AsyncSession) -> Expense:
    changes = ex_in.model_dump(exclude_unset=True)
    # Required columns cannot be cleared; notes can
    for field in ("amount", "category_id", "date"):
        if changes.get(field, ...) is None:
            changes.pop(field)
    if "category_id" in changes:
        changes["category_name"] = await _category_name_snapshot(changes["category_id"], db)
    for field, value in changes.items():
        setattr(expense, field, value)
    db.add(expense)
    await db.commit()
    await db.refresh(expense)
    return expense

async def delete_expense(expense: Expense, db: AsyncSession) -> None:
    await db.delete(expense)
    await db.commit()
