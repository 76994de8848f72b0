# finance_tracker/models/category.py
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Uuid
from finance_tracker.core.database import Base

# Used when an expense points at a category that no longer exists
UNKNOWN_CATEGORY_NAME = "Unknown"
UNKNOWN_CATEGORY_COLOR = "#A0A0A0"
UNKNOWN_CATEGORY_ICON = "more-horizontal"

class Category(Base):
    __tablename__ = "categories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    # Unique case-insensitively; enforced in crud.category
    name = Column(String(length=50), unique=True, nullable=False)
    icon = Column(String(length=50), nullable=False)
    color = Column(String(length=7), nullable=False)
    description = Column(String(length=200), nullable=True)
    is_default = Column(Boolean(), default=False)  # True for built-in categories (Food, Bills, etc.)
    is_active = Column(Boolean(), default=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Category name={self.name} default={self.is_default}>"
