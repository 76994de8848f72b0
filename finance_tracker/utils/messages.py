# finance_tracker/utils/messages.py
import random
from decimal import Decimal, ROUND_HALF_EVEN
from typing import List, Optional, Protocol, Sequence

from finance_tracker.schemas.budget import BudgetView

# Picks a motivational message when the caller does not inject a generator
_default_rng = random.Random()

# Spending counts as "up" once it passes last month by this factor
SPENDING_UP_FACTOR = Decimal("1.2")

BUDGET_PRAISE = "🎉 Great job! You're well within your budget this month!"
BUDGET_CAUTION = "💪 Good progress! Keep an eye on your spending to stay on track."
BUDGET_WARNING = "⚠️ Heads up! You're approaching your budget limit."
BUDGET_EXCEEDED = "🚨 Budget exceeded! Consider reviewing your expenses."
SPENDING_UP = "📈 Spending is up this month. Try to identify areas to cut back."
GENERIC_TIP = "💰 Track your expenses daily for better financial health!"


class Chooser(Protocol):
    def choice(self, seq: Sequence[str]) -> str: ...


def spending_down_message(this_month: Decimal, last_month: Decimal) -> str:
    drop = ((last_month - this_month) / last_month * 100).quantize(Decimal("1"), rounding=ROUND_HALF_EVEN)
    return f"📉 You're spending {drop}% less than last month!"


def candidate_messages(
    budget: Optional[BudgetView],
    this_month: Decimal,
    last_month: Decimal,
) -> List[str]:
    """Every message that applies to the current budget and trend, never empty."""
    messages = []

    if budget is not None:
        used = budget.percentage_used
        if used < 50:
            messages.append(BUDGET_PRAISE)
        elif used < 80:
            messages.append(BUDGET_CAUTION)
        elif used < 100:
            messages.append(BUDGET_WARNING)
        else:
            messages.append(BUDGET_EXCEEDED)

    if last_month > 0:
        if this_month < last_month:
            messages.append(spending_down_message(this_month, last_month))
        elif this_month > last_month * SPENDING_UP_FACTOR:
            messages.append(SPENDING_UP)

    if not messages:
        messages.append(GENERIC_TIP)

    return messages


def select_motivational_message(
    budget: Optional[BudgetView],
    this_month: Decimal,
    last_month: Decimal,
    rng: Optional[Chooser] = None,
) -> str:
    """Pick uniformly among the applicable messages."""
    return (rng or _default_rng).choice(candidate_messages(budget, this_month, last_month))
