# finance_tracker/models/expense.py
import uuid
from datetime import datetime
from sqlalchemy import Column, String, ForeignKey, Numeric, Date, DateTime, Uuid
from finance_tracker.core.database import Base

class Expense(Base):
    __tablename__ = "expenses"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    # No FK: the category may be deleted, the expense keeps its snapshot
    category_id = Column(Uuid, nullable=False, index=True)
    # Snapshot of the category name, refreshed only when the expense itself is edited
    category_name = Column(String(length=50), nullable=False)
    date = Column(Date, nullable=False, index=True)
    notes = Column(String(length=500), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Expense amount={self.amount} date={self.date} user_id={self.user_id}>"
