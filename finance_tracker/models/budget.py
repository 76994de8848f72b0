# finance_tracker/models/budget.py
import uuid
from datetime import datetime
from sqlalchemy import Column, ForeignKey, Numeric, Integer, DateTime, UniqueConstraint, Uuid
from finance_tracker.core.database import Base

class Budget(Base):
    __tablename__ = "budgets"
    __table_args__ = (
        UniqueConstraint("user_id", "month", "year", name="uq_budgets_user_month_year"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    month = Column(Integer, nullable=False)  # 1-12
    year = Column(Integer, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Budget amount={self.amount} {self.month}/{self.year} user_id={self.user_id}>"
