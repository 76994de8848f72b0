# tests/test_dashboard.py
import locale
import uuid
from datetime import date
from decimal import Decimal

from finance_tracker.utils.dashboard import build_admin_dashboard, build_dashboard, monthly_trend
from finance_tracker.utils.messages import GENERIC_TIP, SPENDING_UP
from helpers import PinnedChoice, make_budget, make_category, make_expense, make_user

TODAY = date(2024, 3, 10)


def test_dashboard_for_month(run_db):
    rng = PinnedChoice()

    async def scenario(db):
        user = await make_user(db)
        food = await make_category(db, "Food", "utensils", "#FF6B6B")
        transport = await make_category(db, "Transport", "car", "#4ECDC4")
        await make_expense(db, user, 300, date(2024, 3, 2), food)
        await make_expense(db, user, 200, date(2024, 3, 5), transport)
        await make_expense(db, user, 100, date(2024, 3, 5), category_id=uuid.uuid4())
        await make_expense(db, user, 400, date(2024, 2, 14), food)
        return await build_dashboard(user.id, 3, 2024, db, rng=rng, today=TODAY)

    summary = run_db(scenario)

    assert summary.total_spent_this_month == Decimal("600")
    assert summary.total_spent_last_month == Decimal("400")
    assert summary.percentage_change == 50.0
    assert summary.transaction_count == 3
    assert summary.average_per_day == Decimal("60.00")
    assert summary.current_budget is None

    assert [c.category_name for c in summary.top_categories] == ["Food", "Transport", "Unknown"]
    assert [c.percentage for c in summary.top_categories] == [50.0, 33.33, 16.67]
    unknown = summary.top_categories[2]
    assert unknown.color == "#A0A0A0"
    assert unknown.icon == "more-horizontal"

    assert [(s.date, s.amount) for s in summary.daily_spending] == [
        (date(2024, 3, 2), Decimal("300")),
        (date(2024, 3, 5), Decimal("300")),
    ]

    assert [(m.month, m.year) for m in summary.monthly_trend] == [
        (10, 2023), (11, 2023), (12, 2023), (1, 2024), (2, 2024), (3, 2024),
    ]
    assert summary.monthly_trend[0].month_name == "Oct"
    assert [m.amount for m in summary.monthly_trend] == [0, 0, 0, 0, 400, 600]

    assert rng.seen == [SPENDING_UP]
    assert summary.motivational_message == SPENDING_UP


def test_no_previous_month_means_zero_change(run_db):
    async def scenario(db):
        user = await make_user(db)
        food = await make_category(db)
        await make_expense(db, user, 250, date(2024, 3, 1), food)
        return await build_dashboard(user.id, 3, 2024, db, rng=PinnedChoice(), today=TODAY)

    summary = run_db(scenario)

    assert summary.total_spent_last_month == Decimal("0")
    assert summary.percentage_change == 0.0
    assert summary.motivational_message == GENERIC_TIP


def test_top_categories_keep_percentages_of_full_total(run_db):
    async def scenario(db):
        user = await make_user(db)
        for i, amount in enumerate([600, 500, 400, 300, 200, 100]):
            cat = await make_category(db, f"Cat{i}", "tag", "#123456")
            await make_expense(db, user, amount, date(2024, 3, 3), cat)
        return await build_dashboard(user.id, 3, 2024, db, rng=PinnedChoice(), today=TODAY)

    summary = run_db(scenario)

    assert len(summary.top_categories) == 5
    assert [c.amount for c in summary.top_categories] == [600, 500, 400, 300, 200]
    assert summary.top_categories[0].percentage == 28.57
    assert sum(c.percentage for c in summary.top_categories) < 100


def test_dashboard_includes_budget_view(run_db):
    async def scenario(db):
        user = await make_user(db)
        food = await make_category(db)
        await make_budget(db, user, 50000, 3, 2024)
        await make_expense(db, user, 30000, date(2024, 3, 4), food)
        return await build_dashboard(user.id, 3, 2024, db, rng=PinnedChoice(), today=TODAY)

    summary = run_db(scenario)

    budget = summary.current_budget
    assert budget.spent == Decimal("30000")
    assert budget.remaining == Decimal("20000")
    assert budget.percentage_used == 60.0
    assert budget.status == "Warning"


def test_past_month_averages_over_full_length(run_db):
    async def scenario(db):
        user = await make_user(db)
        food = await make_category(db)
        await make_expense(db, user, 290, date(2024, 2, 10), food)
        return await build_dashboard(user.id, 2, 2024, db, rng=PinnedChoice(), today=TODAY)

    summary = run_db(scenario)

    assert summary.average_per_day == Decimal("10.00")


def test_dashboard_is_scoped_to_the_user(run_db):
    async def scenario(db):
        alice = await make_user(db, "alice")
        bob = await make_user(db, "bob")
        food = await make_category(db)
        await make_expense(db, bob, 999, date(2024, 3, 3), food)
        return await build_dashboard(alice.id, 3, 2024, db, rng=PinnedChoice(), today=TODAY)

    summary = run_db(scenario)

    assert summary.total_spent_this_month == Decimal("0")
    assert summary.transaction_count == 0
    assert summary.top_categories == []
    assert summary.daily_spending == []


def test_admin_dashboard_on_empty_store(run_db):
    async def scenario(db):
        return await build_admin_dashboard(db, today=TODAY)

    admin = run_db(scenario)

    assert admin.total_users == 0
    assert admin.active_users == 0
    assert admin.total_expenses == Decimal("0")
    assert admin.total_transactions == 0
    assert admin.recent_users == []
    assert admin.overall_category_spending == []
    assert len(admin.system_monthly_trend) == 6
    assert all(m.amount == 0 for m in admin.system_monthly_trend)


def test_admin_dashboard_aggregates_all_users(run_db):
    async def scenario(db):
        alice = await make_user(db, "alice", role="Admin")
        bob = await make_user(db, "bob", is_active=False)
        food = await make_category(db, "Food")
        bills = await make_category(db, "Bills", "file-text", "#45B7D1")
        await make_expense(db, alice, 100, date(2024, 3, 1), food)
        await make_expense(db, bob, 300, date(2024, 3, 2), bills)
        await make_expense(db, bob, 50, date(2023, 1, 2), food)
        return await build_admin_dashboard(db, today=TODAY)

    admin = run_db(scenario)

    assert admin.total_users == 2
    assert admin.active_users == 1
    assert admin.total_expenses == Decimal("450")
    assert admin.total_transactions == 3

    summaries = {u.username: u for u in admin.recent_users}
    assert summaries["alice"].total_expenses == Decimal("100")
    assert summaries["alice"].full_name == "Alice Tester"
    assert summaries["bob"].expense_count == 2
    assert summaries["bob"].is_active is False

    assert [c.category_name for c in admin.overall_category_spending] == ["Bills", "Food"]
    assert admin.overall_category_spending[0].percentage == 75.0
    assert admin.system_monthly_trend[-1].amount == Decimal("400")


def test_trend_labels_do_not_follow_locale():
    try:
        locale.setlocale(locale.LC_TIME, "de_DE.UTF-8")
    except locale.Error:
        pass
    try:
        trend = monthly_trend([], 3, 2024)
    finally:
        locale.setlocale(locale.LC_TIME, "C")

    assert [m.month_name for m in trend] == ["Oct", "Nov", "Dec", "Jan", "Feb", "Mar"]
