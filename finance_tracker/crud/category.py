# finance_tracker/crud/category.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import func
from finance_tracker.models.category import Category
from typing import List, Optional
import uuid
import logging
from finance_tracker.schemas.category import CategoryCreate, CategoryUpdate

logger = logging.getLogger(__name__)

async def get_categories(db: AsyncSession, active_only: bool = False) -> List[Category]:
    query = select(Category).order_by(Category.name)
    if active_only:
        query = query.where(Category.is_active.is_(True))
    result = await db.execute(query)
    return list(result.scalars().all())

async def get_category_by_id(category_id: uuid.UUID, db: AsyncSession) -> Optional[Category]:
    result = await db.execute(select(Category).where(Category.id == category_id))
    return result.scalar_one_or_none()

async def get_category_by_name(name: str, db: AsyncSession) -> Optional[Category]:
    """Case-insensitive lookup of a category by name."""
    result = await db.execute(
        select(Category).where(func.lower(Category.name) == func.lower(name))
    )
    return result.scalar_one_or_none()

async def create_category(cat_in: CategoryCreate, db: AsyncSession) -> Optional[Category]:
    """Create a custom category. Returns None when the name is already taken."""
    if await get_category_by_name(cat_in.name, db) is not None:
        return None
    new_cat = Category(**cat_in.model_dump(), is_default=False, is_active=True)
    db.add(new_cat)
    await db.commit()
    await db.refresh(new_cat)
    return new_cat

async def update_category(category: Category, cat_in: CategoryUpdate, db: AsyncSession) -> Optional[Category]:
    """Apply a partial update. Returns None when the new name belongs to another category."""
    changes = cat_in.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in changes:
        existing = await get_category_by_name(changes["name"], db)
        if existing is not None and existing.id != category.id:
            return None
    for field, value in changes.items():
        setattr(category, field, value)
    db.add(category)
    await db.commit()
    await db.refresh(category)
    return category

async def delete_category(category: Category, db: AsyncSession) -> bool:
    """Hard-delete a custom category. Default categories are kept."""
    if category.is_default:
        return False
    await db.delete(category)
    await db.commit()
    return True


# Shared categories created on first startup
DEFAULT_CATEGORIES: List[dict] = [
    {"name": "Food", "icon": "utensils", "color": "#FF6B6B", "description": "Food and dining expenses"},
    {"name": "Transport", "icon": "car", "color": "#4ECDC4", "description": "Transportation and travel expenses"},
    {"name": "Bills", "icon": "file-text", "color": "#45B7D1", "description": "Utility bills and subscriptions"},
    {"name": "Shopping", "icon": "shopping-bag", "color": "#96CEB4", "description": "Shopping and retail purchases"},
    {"name": "Investment", "icon": "trending-up", "color": "#FFEAA7", "description": "Investments and savings"},
    {"name": "Entertainment", "icon": "film", "color": "#DDA0DD", "description": "Entertainment and leisure activities"},
    {"name": "Healthcare", "icon": "heart", "color": "#FF9FF3", "description": "Medical and healthcare expenses"},
    {"name": "Education", "icon": "book", "color": "#54A0FF", "description": "Education and learning expenses"},
    {"name": "Others", "icon": "more-horizontal", "color": "#A0A0A0", "description": "Other miscellaneous expenses"},
]

async def seed_default_categories(db: AsyncSession) -> List[Category]:
    """Create the default categories that are missing (matched case-insensitively).

    Returns the list of categories that were created (empty if none were needed).
    """
    result = await db.execute(select(Category.name))
    existing_names_lower = {row[0].lower() for row in result.all()}

    categories_to_create = [
        Category(**cat, is_default=True, is_active=True)
        for cat in DEFAULT_CATEGORIES
        if cat["name"].lower() not in existing_names_lower
    ]

    if categories_to_create:
        db.add_all(categories_to_create)
        await db.commit()
        for c in categories_to_create:
            await db.refresh(c)
        logger.info(f"Seeded {len(categories_to_create)} default categories")

    return categories_to_create
