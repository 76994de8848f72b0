# finance_tracker/utils/dashboard.py
import logging
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from finance_tracker.core.config import settings
from finance_tracker.core.db_utils import with_db_retry
from finance_tracker.crud.budget import get_budget_for_month
from finance_tracker.crud.category import get_categories
from finance_tracker.crud.expense import (
    count_all_expenses,
    get_expenses_for_all_users,
    get_expenses_for_user,
    get_system_expense_total,
)
from finance_tracker.crud.user import count_active_users, count_users, get_users
from finance_tracker.models.category import (
    Category,
    UNKNOWN_CATEGORY_COLOR,
    UNKNOWN_CATEGORY_ICON,
    UNKNOWN_CATEGORY_NAME,
)
from finance_tracker.models.expense import Expense
from finance_tracker.models.user import User
from finance_tracker.schemas.dashboard import (
    AdminDashboard,
    CategorySpending,
    DailySpending,
    DashboardSummary,
    MonthlySpending,
)
from finance_tracker.schemas.user import UserSummary
from finance_tracker.utils.budgeting import (
    ZERO,
    effective_day_count,
    evaluate_budget,
    month_window,
    percentage_of,
    round_money,
    shift_month,
    total_amount,
    utc_today,
)
from finance_tracker.utils.messages import Chooser, select_motivational_message

logger = logging.getLogger(__name__)

TOP_CATEGORY_COUNT = 5
TREND_MONTHS = 6

# Fixed English labels; strftime("%b") follows the process locale
MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


# ────────────────────────────────────────────────────────────────────────────────
# BREAKDOWNS (pure)
# ────────────────────────────────────────────────────────────────────────────────
def category_breakdown(
    expenses: Iterable[Expense],
    categories: Dict[uuid.UUID, Category],
    limit: Optional[int] = None,
) -> List[CategorySpending]:
    """
    Spending per category, largest first.

    Percentages are taken against the total of *all* given expenses, so a
    truncated list does not add up to 100. Categories that no longer exist
    fall back to a neutral "Unknown" entry.
    """
    expenses = list(expenses)
    total = total_amount(expenses)
    per_category: Dict[uuid.UUID, Decimal] = defaultdict(lambda: ZERO)
    for expense in expenses:
        per_category[expense.category_id] += Decimal(expense.amount)

    rows = []
    for category_id, amount in per_category.items():
        category = categories.get(category_id)
        if category is None:
            logger.warning(f"Expenses reference missing category {category_id}; using defaults")
        rows.append(CategorySpending(
            category_id=category_id,
            category_name=category.name if category else UNKNOWN_CATEGORY_NAME,
            color=category.color if category else UNKNOWN_CATEGORY_COLOR,
            icon=category.icon if category else UNKNOWN_CATEGORY_ICON,
            amount=amount,
            percentage=float(percentage_of(amount, total)),
        ))

    rows.sort(key=lambda row: row.amount, reverse=True)
    return rows[:limit] if limit is not None else rows


def daily_breakdown(expenses: Iterable[Expense]) -> List[DailySpending]:
    per_day: Dict[date, Decimal] = defaultdict(lambda: ZERO)
    for expense in expenses:
        per_day[expense.date] += Decimal(expense.amount)
    return [DailySpending(date=day, amount=per_day[day]) for day in sorted(per_day)]


def monthly_trend(expenses: Iterable[Expense], month: int, year: int, months: int = TREND_MONTHS) -> List[MonthlySpending]:
    """Totals for the ``months`` months ending with (month, year), oldest first."""
    expenses = list(expenses)
    trend = []
    for offset in range(months - 1, -1, -1):
        trend_month, trend_year = shift_month(month, year, -offset)
        start, end = month_window(trend_month, trend_year)
        trend.append(MonthlySpending(
            month=trend_month,
            year=trend_year,
            month_name=MONTH_ABBREVIATIONS[trend_month - 1],
            amount=total_amount(e for e in expenses if start <= e.date < end),
        ))
    return trend


def user_summary(user: User, expenses: List[Expense]) -> UserSummary:
    return UserSummary(
        id=user.id,
        username=user.username,
        full_name=user.full_name,
        email=user.email,
        role=user.role,
        is_active=user.is_active,
        total_expenses=total_amount(expenses),
        expense_count=len(expenses),
        created_at=user.created_at,
    )


def trend_start(month: int, year: int) -> date:
    first_month, first_year = shift_month(month, year, -(TREND_MONTHS - 1))
    return date(first_year, first_month, 1)


# ────────────────────────────────────────────────────────────────────────────────
# USER DASHBOARD
# ────────────────────────────────────────────────────────────────────────────────
@with_db_retry()
async def build_dashboard(
    user_id: uuid.UUID,
    month: int,
    year: int,
    db: AsyncSession,
    rng: Optional[Chooser] = None,
    today: Optional[date] = None,
) -> DashboardSummary:
    """
    Returns the dashboard for one user and month:
    - Cards: this/last month totals, change %, transaction count, daily average
    - Charts: top 5 categories, daily spending, 6-month trend
    - Budget view for the month (None when no budget is set)
    - A motivational message
    """
    today = today or utc_today()
    start, end = month_window(month, year)
    prev_month, prev_year = shift_month(month, year, -1)
    prev_start, _ = month_window(prev_month, prev_year)

    # One fetch covers this month, last month and the trend window
    window = await get_expenses_for_user(user_id, db, start_date=trend_start(month, year), end_date=end)
    this_month = [e for e in window if start <= e.date < end]
    last_month = [e for e in window if prev_start <= e.date < start]

    total_this_month = total_amount(this_month)
    total_last_month = total_amount(last_month)

    percentage_change = ZERO
    if total_last_month > 0:
        percentage_change = round_money((total_this_month - total_last_month) / total_last_month * 100)

    day_count = effective_day_count(month, year, today)
    average_per_day = round_money(total_this_month / day_count) if day_count > 0 else ZERO

    categories = {c.id: c for c in await get_categories(db)}

    budget = await get_budget_for_month(user_id, month, year, db)
    budget_view = evaluate_budget(budget, this_month) if budget is not None else None

    return DashboardSummary(
        total_spent_this_month=total_this_month,
        total_spent_last_month=total_last_month,
        percentage_change=float(percentage_change),
        transaction_count=len(this_month),
        average_per_day=average_per_day,
        current_budget=budget_view,
        top_categories=category_breakdown(this_month, categories, limit=TOP_CATEGORY_COUNT),
        daily_spending=daily_breakdown(this_month),
        monthly_trend=monthly_trend(window, month, year),
        motivational_message=select_motivational_message(
            budget_view, total_this_month, total_last_month, rng=rng
        ),
    )


# ────────────────────────────────────────────────────────────────────────────────
# ADMIN DASHBOARD
# ────────────────────────────────────────────────────────────────────────────────
async def get_user_summaries(db: AsyncSession, limit: Optional[int] = None) -> List[UserSummary]:
    summaries = []
    for user in await get_users(db, limit=limit):
        expenses = await get_expenses_for_user(user.id, db)
        summaries.append(user_summary(user, expenses))
    return summaries


@with_db_retry()
async def build_admin_dashboard(db: AsyncSession, today: Optional[date] = None) -> AdminDashboard:
    """System-wide totals, the first users' summaries, this month's categories and the trend."""
    today = today or utc_today()
    start, end = month_window(today.month, today.year)

    window = await get_expenses_for_all_users(trend_start(today.month, today.year), end, db)
    this_month = [e for e in window if start <= e.date < end]
    categories = {c.id: c for c in await get_categories(db)}

    return AdminDashboard(
        total_users=await count_users(db),
        active_users=await count_active_users(db),
        total_expenses=await get_system_expense_total(db),
        total_transactions=await count_all_expenses(db),
        recent_users=await get_user_summaries(db, limit=settings.ADMIN_RECENT_USERS_LIMIT),
        overall_category_spending=category_breakdown(this_month, categories),
        system_monthly_trend=monthly_trend(window, today.month, today.year),
    )
