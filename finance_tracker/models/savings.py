# finance_tracker/models/savings.py
import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, ForeignKey, Numeric, Boolean, Date, DateTime, Enum, Uuid
from finance_tracker.core.database import Base

class SavingsTransactionType(str, enum.Enum):
    deposit = "deposit"
    withdraw = "withdraw"

class SavingsGoal(Base):
    __tablename__ = "savings_goals"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(length=100), nullable=False)
    description = Column(String(length=500), nullable=True)
    target_amount = Column(Numeric(12, 2), nullable=False)
    # Maintained by utils.savings through conditional updates, never set directly
    current_amount = Column(Numeric(12, 2), nullable=False, default=0)
    icon = Column(String(length=50), nullable=False, default="piggy-bank")
    color = Column(String(length=20), nullable=False, default="#84934A")
    target_date = Column(Date, nullable=True)
    is_completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<SavingsGoal name={self.name} {self.current_amount}/{self.target_amount}>"

class SavingsTransaction(Base):
    """Append-only ledger row. There is no update or delete path."""
    __tablename__ = "savings_transactions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    # No FK: the ledger outlives a deleted goal
    savings_goal_id = Column(Uuid, nullable=False, index=True)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # Snapshot of the goal name at write time
    goal_name = Column(String(length=100), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    type = Column(Enum(SavingsTransactionType), nullable=False)
    note = Column(String(length=500), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    def __repr__(self):
        return f"<SavingsTransaction {self.type} amount={self.amount} goal_id={self.savings_goal_id}>"
