# finance_tracker/schemas/budget.py
from typing import Literal
from pydantic import BaseModel, Field
from decimal import Decimal
import uuid

from finance_tracker.schemas.common import Money

BudgetStatus = Literal["Good", "Warning", "Danger"]

class BudgetCreate(BaseModel):
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=2000, le=2100)

class BudgetView(BaseModel):
    """A stored budget plus the spending figures derived at read time."""
    id: uuid.UUID
    amount: Money
    month: int
    year: int
    spent: Money
    remaining: Money
    percentage_used: float
    status: BudgetStatus
