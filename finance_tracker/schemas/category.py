# finance_tracker/schemas/category.py
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
import uuid

HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"

class CategoryBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    icon: str = Field(..., min_length=1, max_length=50)
    color: str = Field(..., pattern=HEX_COLOR, description="Hex color, e.g. #FF6B6B")
    description: Optional[str] = Field(None, max_length=200)

class CategoryCreate(CategoryBase):
    pass

class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    icon: Optional[str] = Field(None, min_length=1, max_length=50)
    color: Optional[str] = Field(None, pattern=HEX_COLOR)
    description: Optional[str] = Field(None, max_length=200)
    is_active: Optional[bool] = None

class CategoryRead(CategoryBase):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    is_default: bool
    is_active: bool
