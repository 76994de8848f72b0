# finance_tracker/api/v1/routes/users.py
import logging
import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from finance_tracker.core.database import get_async_session
from finance_tracker.api.deps import get_current_admin, get_current_user
from finance_tracker.crud.user import (
    create_user,
    delete_user,
    get_user_by_id,
    get_users,
    toggle_user_active,
    update_user,
)
from finance_tracker.models.user import User
from finance_tracker.schemas.user import UserCreate, UserRead, UserSummary, UserUpdate
from finance_tracker.utils.dashboard import get_user_summaries

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["User Management"])

async def _get_user_or_404(user_id: uuid.UUID, db: AsyncSession) -> User:
    user = await get_user_by_id(user_id, db)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user

# 1) GET /users/me
@router.get("/me", response_model=UserRead)
async def read_own_profile(user: User = Depends(get_current_user)):
    """Get current user's profile"""
    return user

# 2) GET /users (admin)
@router.get("", response_model=List[UserRead])
async def read_users(
    db: AsyncSession = Depends(get_async_session),
    admin: User = Depends(get_current_admin),
):
    return await get_users(db)

# 3) GET /users/summaries (admin)
@router.get("/summaries", response_model=List[UserSummary])
async def read_user_summaries(
    db: AsyncSession = Depends(get_async_session),
    admin: User = Depends(get_current_admin),
):
    """Every user with their lifetime expense total and count"""
    return await get_user_summaries(db)

# 4) POST /users (admin)
@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user_endpoint(
    user_in: UserCreate,
    db: AsyncSession = Depends(get_async_session),
    admin: User = Depends(get_current_admin),
):
    user = await create_user(user_in, db)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username or email already registered",
        )
    logger.info(f"User {user.username} created by admin {admin.id}")
    return user

# 5) PATCH /users/{user_id} (admin)
@router.patch("/{user_id}", response_model=UserRead)
async def update_user_endpoint(
    user_id: uuid.UUID,
    user_in: UserUpdate,
    db: AsyncSession = Depends(get_async_session),
    admin: User = Depends(get_current_admin),
):
    user = await _get_user_or_404(user_id, db)
    updated = await update_user(user, user_in, db)
    if not updated:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")
    return updated

# 6) POST /users/{user_id}/toggle-active (admin)
@router.post("/{user_id}/toggle-active", response_model=UserRead)
async def toggle_active_endpoint(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    admin: User = Depends(get_current_admin),
):
    user = await _get_user_or_404(user_id, db)
    return await toggle_user_active(user, db)

# 7) DELETE /users/{user_id} (admin)
@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user_endpoint(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    admin: User = Depends(get_current_admin),
):
    user = await _get_user_or_404(user_id, db)
    await delete_user(user, db)
    logger.info(f"User {user_id} deleted by admin {admin.id}")
    return None
