# finance_tracker/schemas/dashboard.py
from typing import List, Optional
from pydantic import BaseModel
from datetime import date
import uuid

from finance_tracker.schemas.budget import BudgetView
from finance_tracker.schemas.common import Money
from finance_tracker.schemas.user import UserSummary

class CategorySpending(BaseModel):
    category_id: uuid.UUID
    category_name: str
    color: str
    icon: str
    amount: Money
    percentage: float

class DailySpending(BaseModel):
    date: date
    amount: Money

class MonthlySpending(BaseModel):
    month: int
    year: int
    month_name: str
    amount: Money

class DashboardSummary(BaseModel):
    total_spent_this_month: Money
    total_spent_last_month: Money
    percentage_change: float
    transaction_count: int
    average_per_day: Money
    current_budget: Optional[BudgetView] = None
    top_categories: List[CategorySpending]
    daily_spending: List[DailySpending]
    monthly_trend: List[MonthlySpending]
    motivational_message: str

class AdminDashboard(BaseModel):
    total_users: int
    active_users: int
    total_expenses: Money
    total_transactions: int
    recent_users: List[UserSummary]
    overall_category_spending: List[CategorySpending]
    system_monthly_trend: List[MonthlySpending]
