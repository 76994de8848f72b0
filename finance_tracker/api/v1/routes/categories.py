# finance_tracker/api/v1/routes/categories.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from finance_tracker.core.database import get_async_session
from finance_tracker.api.deps import get_current_admin, get_current_user
from finance_tracker.crud.category import (
    create_category,
    delete_category,
    get_categories,
    get_category_by_id,
    update_category,
)
from finance_tracker.models.user import User
from finance_tracker.schemas.category import CategoryCreate, CategoryRead, CategoryUpdate

router = APIRouter(prefix="/categories", tags=["categories"])

@router.get("", response_model=List[CategoryRead])
async def read_categories(
    include_inactive: bool = False,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """Active categories; admins may ask for inactive ones too"""
    return await get_categories(db, active_only=not (include_inactive and user.is_admin))

@router.get("/{category_id}", response_model=CategoryRead)
async def read_category(
    category_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    category = await get_category_by_id(category_id, db)
    if not category:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Category not found")
    return category

@router.post("", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
async def create_category_endpoint(
    cat_in: CategoryCreate,
    db: AsyncSession = Depends(get_async_session),
    admin: User = Depends(get_current_admin),
):
    category = await create_category(cat_in, db)
    if not category:
        raise HTTPException(status.HTTP_409_CONFLICT, detail="Category name already exists")
    return category

@router.patch("/{category_id}", response_model=CategoryRead)
async def update_category_endpoint(
    category_id: uuid.UUID,
    cat_in: CategoryUpdate,
    db: AsyncSession = Depends(get_async_session),
    admin: User = Depends(get_current_admin),
):
    category = await get_category_by_id(category_id, db)
    if not category:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Category not found")
    updated = await update_category(category, cat_in, db)
    if not updated:
        raise HTTPException(status.HTTP_409_CONFLICT, detail="Category name already exists")
    return updated

@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category_endpoint(
    category_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    admin: User = Depends(get_current_admin),
):
    category = await get_category_by_id(category_id, db)
    if not category:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Category not found")
    if not await delete_category(category, db):
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail="Default categories cannot be deleted")
    return None
