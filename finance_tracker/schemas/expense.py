# finance_tracker/schemas/expense.py
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from decimal import Decimal
import datetime as dt
import uuid

from finance_tracker.schemas.common import Money

class ExpenseCreate(BaseModel):
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    category_id: uuid.UUID
    date: dt.date
    notes: Optional[str] = Field(None, max_length=500)

class ExpenseUpdate(BaseModel):
    amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    category_id: Optional[uuid.UUID] = None
    date: Optional[dt.date] = None
    notes: Optional[str] = Field(None, max_length=500)

class ExpenseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    amount: Money
    category_id: uuid.UUID
    category_name: str
    date: dt.date
    notes: Optional[str] = None
    created_at: Optional[dt.datetime] = None
