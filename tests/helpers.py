# tests/helpers.py
from decimal import Decimal

from finance_tracker.models.budget import Budget
from finance_tracker.models.category import Category
from finance_tracker.models.expense import Expense
from finance_tracker.models.savings import SavingsGoal
from finance_tracker.models.user import User


async def make_user(db, username="alice", role="User", is_active=True):
    user = User(
        username=username,
        email=f"{username}@example.com",
        first_name=username.title(),
        last_name="Tester",
        role=role,
        is_active=is_active,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def make_category(db, name="Food", icon="utensils", color="#FF6B6B", is_default=False):
    cat = Category(name=name, icon=icon, color=color, is_default=is_default, is_active=True)
    db.add(cat)
    await db.commit()
    await db.refresh(cat)
    return cat


async def make_expense(db, user, amount, on, category=None, category_id=None):
    expense = Expense(
        user_id=user.id,
        amount=Decimal(str(amount)),
        category_id=category.id if category is not None else category_id,
        category_name=category.name if category is not None else "Unknown",
        date=on,
    )
    db.add(expense)
    await db.commit()
    await db.refresh(expense)
    return expense


async def make_budget(db, user, amount, month, year):
    budget = Budget(user_id=user.id, amount=Decimal(str(amount)), month=month, year=year)
    db.add(budget)
    await db.commit()
    await db.refresh(budget)
    return budget


async def make_goal(db, user, target, name="Emergency fund"):
    goal = SavingsGoal(
        user_id=user.id,
        name=name,
        target_amount=Decimal(str(target)),
        current_amount=Decimal("0"),
        is_completed=False,
    )
    db.add(goal)
    await db.commit()
    await db.refresh(goal)
    return goal


class PinnedChoice:
    """Stands in for random.Random: always picks the given index and records the options."""

    def __init__(self, index=0):
        self.index = index
        self.seen = []

    def choice(self, seq):
        self.seen = list(seq)
        return seq[self.index]
