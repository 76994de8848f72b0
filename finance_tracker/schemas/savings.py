# finance_tracker/schemas/savings.py
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from datetime import date, datetime
from decimal import Decimal
import uuid

from finance_tracker.models.savings import SavingsTransactionType
from finance_tracker.schemas.common import Money

class SavingsGoalCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    target_amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    icon: Optional[str] = Field(None, max_length=50)
    color: Optional[str] = Field(None, max_length=20)
    target_date: Optional[date] = None

class SavingsGoalUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    target_amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    icon: Optional[str] = Field(None, max_length=50)
    color: Optional[str] = Field(None, max_length=20)
    target_date: Optional[date] = None

class SavingsGoalRead(BaseModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    target_amount: Money
    current_amount: Money
    remaining_amount: Money
    percentage_complete: float
    icon: str
    color: str
    target_date: Optional[date] = None
    is_completed: bool
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

class SavingsTransactionCreate(BaseModel):
    # Positivity is checked by the ledger so it can answer with a rejection
    amount: Decimal = Field(..., max_digits=12, decimal_places=2)
    type: SavingsTransactionType = SavingsTransactionType.deposit
    note: Optional[str] = Field(None, max_length=500)

class SavingsTransactionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    savings_goal_id: uuid.UUID
    goal_name: str
    amount: Money
    type: SavingsTransactionType
    note: Optional[str] = None
    created_at: Optional[datetime] = None

class SavingsSummary(BaseModel):
    total_saved: Money
    total_target: Money
    active_goals: int
    completed_goals: int
    overall_progress: float
