# finance_tracker/utils/budgeting.py
import calendar
import logging
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_EVEN
from typing import Iterable, List, Optional, Tuple
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from finance_tracker.crud.budget import get_budget_for_month, get_budgets_for_user
from finance_tracker.crud.expense import get_expenses_for_user
from finance_tracker.models.budget import Budget
from finance_tracker.models.expense import Expense
from finance_tracker.schemas.budget import BudgetView

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
CENT = Decimal("0.01")

# Upper bounds (inclusive) of each status tier, in percent of budget used
GOOD_THRESHOLD = Decimal("50")
WARNING_THRESHOLD = Decimal("80")


# ────────────────────────────────────────────────────────────────────────────────
# MONTH WINDOWS
# ────────────────────────────────────────────────────────────────────────────────
def shift_month(month: int, year: int, delta: int) -> Tuple[int, int]:
    """Move ``delta`` months forward (negative = backward) across year boundaries."""
    index = year * 12 + (month - 1) + delta
    return index % 12 + 1, index // 12


def month_window(month: int, year: int) -> Tuple[date, date]:
    """Half-open ``[first day, first day of next month)`` range."""
    next_month, next_year = shift_month(month, year, 1)
    return date(year, month, 1), date(next_year, next_month, 1)


def days_in_month(month: int, year: int) -> int:
    return calendar.monthrange(year, month)[1]


def effective_day_count(month: int, year: int, today: date) -> int:
    """Days elapsed so far for the running month, the full length otherwise."""
    if month == today.month and year == today.year:
        return today.day
    return days_in_month(month, year)


def utc_today() -> date:
    return datetime.utcnow().date()


# ────────────────────────────────────────────────────────────────────────────────
# NUMERIC HELPERS
# ────────────────────────────────────────────────────────────────────────────────
def round_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_EVEN)


def percentage_of(part: Decimal, whole: Decimal) -> Decimal:
    """part/whole×100 rounded to 2dp; 0 when whole is not positive."""
    if whole <= 0:
        return ZERO
    return round_money(part / whole * 100)


def total_amount(expenses: Iterable[Expense]) -> Decimal:
    return sum((Decimal(e.amount) for e in expenses), ZERO)


# ────────────────────────────────────────────────────────────────────────────────
# BUDGET STATUS
# ────────────────────────────────────────────────────────────────────────────────
def budget_status(percentage_used: Decimal) -> str:
    """Good up to 50%, Warning up to 80%, Danger above (boundaries in the lower tier)."""
    if percentage_used <= GOOD_THRESHOLD:
        return "Good"
    if percentage_used <= WARNING_THRESHOLD:
        return "Warning"
    return "Danger"


def evaluate_budget(budget: Budget, expenses: Iterable[Expense]) -> BudgetView:
    """
    Derive spent / remaining / percentage_used / status for a budget.

    Only expenses dated inside the budget's month count, so callers may pass
    a wider slice. The budget itself is never modified.
    """
    start, end = month_window(budget.month, budget.year)
    amount = Decimal(budget.amount)
    spent = total_amount(e for e in expenses if start <= e.date < end)
    percentage_used = percentage_of(spent, amount)

    return BudgetView(
        id=budget.id,
        amount=amount,
        month=budget.month,
        year=budget.year,
        spent=spent,
        remaining=amount - spent,
        percentage_used=float(percentage_used),
        status=budget_status(percentage_used),
    )


# ────────────────────────────────────────────────────────────────────────────────
# DATABASE ENTRY POINTS
# ────────────────────────────────────────────────────────────────────────────────
async def evaluate_budget_for_month(
    user_id: uuid.UUID,
    month: int,
    year: int,
    db: AsyncSession,
) -> Optional[BudgetView]:
    """The user's budget for the month with live spending, or None when none is set."""
    budget = await get_budget_for_month(user_id, month, year, db)
    if budget is None:
        return None
    start, end = month_window(month, year)
    expenses = await get_expenses_for_user(user_id, db, start_date=start, end_date=end)
    return evaluate_budget(budget, expenses)


async def get_current_budget_view(user_id: uuid.UUID, db: AsyncSession) -> Optional[BudgetView]:
    today = utc_today()
    return await evaluate_budget_for_month(user_id, today.month, today.year, db)


async def get_budget_views_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[BudgetView]:
    views = []
    for budget in await get_budgets_for_user(user_id, db):
        start, end = month_window(budget.month, budget.year)
        expenses = await get_expenses_for_user(user_id, db, start_date=start, end_date=end)
        views.append(evaluate_budget(budget, expenses))
    return views
