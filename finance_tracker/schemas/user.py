# finance_tracker/schemas/user.py
from typing import Optional, Literal
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from datetime import datetime
import uuid

from finance_tracker.schemas.common import Money

class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    username: str
    email: str
    first_name: str
    last_name: str
    role: str
    is_active: bool
    avatar_url: Optional[str] = None
    currency: str
    created_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

class UserCreate(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    role: Literal["Admin", "User"] = "User"
    currency: str = "₹"

class UserUpdate(BaseModel):
    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(None, min_length=1, max_length=50)
    avatar_url: Optional[str] = None
    currency: Optional[str] = None

class UserSummary(BaseModel):
    id: uuid.UUID
    username: str
    full_name: str
    email: str
    role: str
    is_active: bool
    total_expenses: Money
    expense_count: int
    created_at: Optional[datetime] = None
