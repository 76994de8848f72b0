# finance_tracker/api/v1/routes/expenses.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from datetime import date
import math
import uuid

from finance_tracker.core.database import get_async_session
from finance_tracker.api.deps import get_current_user
from finance_tracker.crud.expense import (
    count_expenses_for_user,
    create_expense_for_user,
    delete_expense,
    get_expense_by_id,
    get_expenses_for_user,
    update_expense,
)
from finance_tracker.models.user import User
from finance_tracker.schemas.common import PaginatedResponse
from finance_tracker.schemas.expense import ExpenseCreate, ExpenseRead, ExpenseUpdate

router = APIRouter(prefix="/expenses", tags=["expenses"])

@router.get("", response_model=PaginatedResponse[ExpenseRead])
async def read_expenses(
    start_date: Optional[date] = Query(None, description="Inclusive"),
    end_date: Optional[date] = Query(None, description="Exclusive"),
    category_id: Optional[uuid.UUID] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    expenses = await get_expenses_for_user(
        user.id, db, start_date, end_date, category_id, page=page, page_size=page_size
    )
    total_count = await count_expenses_for_user(user.id, db, start_date, end_date, category_id)
    total_pages = math.ceil(total_count / page_size)

    return PaginatedResponse[ExpenseRead](
        items=[ExpenseRead.model_validate(e) for e in expenses],
        total_count=total_count,
        page=page,
        page_size=page_size,
        total_pages=total_pages,
        has_next_page=page < total_pages,
        has_previous_page=page > 1,
    )

@router.post("", response_model=ExpenseRead, status_code=status.HTTP_201_CREATED)
async def create_expense(
    ex_in: ExpenseCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    return await create_expense_for_user(user.id, ex_in, db)

@router.get("/{expense_id}", response_model=ExpenseRead)
async def read_expense(
    expense_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    expense = await get_expense_by_id(expense_id, user.id, db)
    if not expense:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Expense not found")
    return expense

@router.patch("/{expense_id}", response_model=ExpenseRead)
async def update_expense_endpoint(
    expense_id: uuid.UUID,
    ex_in: ExpenseUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    expense = await get_expense_by_id(expense_id, user.id, db)
    if not expense:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Expense not found")
    return await update_expense(expense, ex_in, db)

@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense_endpoint(
    expense_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    expense = await get_expense_by_id(expense_id, user.id, db)
    if not expense:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Expense not found")
    await delete_expense(expense, db)
    return None
