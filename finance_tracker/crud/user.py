# finance_tracker/crud/user.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import delete, func
from finance_tracker.models.user import User
from finance_tracker.models.expense import Expense
from finance_tracker.models.budget import Budget
from finance_tracker.models.savings import SavingsGoal, SavingsTransaction
from typing import Optional, List
import uuid
from finance_tracker.schemas.user import UserCreate, UserUpdate

async def count_users(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(User))
    return result.scalar_one() or 0

async def count_active_users(db: AsyncSession) -> int:
    result = await db.execute(
        select(func.count()).select_from(User).where(User.is_active.is_(True))
    )
    return result.scalar_one() or 0

async def get_users(db: AsyncSession, limit: Optional[int] = None) -> List[User]:
    query = select(User).order_by(User.created_at)
    if limit is not None:
        query = query.limit(limit)
    result = await db.execute(query)
    return list(result.scalars().all())

async def get_user_by_id(user_id: uuid.UUID, db: AsyncSession) -> Optional[User]:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()

async def get_user_by_username(username: str, db: AsyncSession) -> Optional[User]:
    result = await db.execute(select(User).where(func.lower(User.username) == func.lower(username)))
    return result.scalar_one_or_none()

async def get_user_by_email(email: str, db: AsyncSession) -> Optional[User]:
    result = await db.execute(select(User).where(func.lower(User.email) == func.lower(email)))
    return result.scalar_one_or_none()

async def create_user(user_in: UserCreate, db: AsyncSession) -> Optional[User]:
    """Create a user. Returns None when the username or email is taken."""
    if await get_user_by_username(user_in.username, db) is not None:
        return None
    if await get_user_by_email(user_in.email, db) is not None:
        return None
    user = User(**user_in.model_dump(), is_active=True)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user

async def update_user(user: User, user_in: UserUpdate, db: AsyncSession) -> Optional[User]:
    """Apply a partial profile update. Returns None when the new email belongs to someone else."""
    changes = user_in.model_dump(exclude_unset=True, exclude_none=True)
    if "email" in changes:
        existing = await get_user_by_email(changes["email"], db)
        if existing is not None and existing.id != user.id:
            return None
    for field, value in changes.items():
        setattr(user, field, value)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user

async def toggle_user_active(user: User, db: AsyncSession) -> User:
    user.is_active = not user.is_active
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user

async def delete_user(user: User, db: AsyncSession) -> None:
    """Delete a user together with everything they own."""
    for model in (SavingsTransaction, SavingsGoal, Budget, Expense):
        await db.execute(delete(model).where(model.user_id == user.id))
    await db.delete(user)
    await db.commit()
