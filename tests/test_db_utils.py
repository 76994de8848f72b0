# tests/test_db_utils.py
import asyncio
import uuid
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import text

from finance_tracker.core.db_utils import is_transient_error, with_db_retry
from finance_tracker.utils import dashboard
from helpers import PinnedChoice, make_expense, make_user


class OperationalError(Exception):
    pass


def test_is_transient_error_matches_connection_failures():
    assert is_transient_error(OperationalError("server closed the connection"))
    assert is_transient_error(ConnectionRefusedError())
    assert not is_transient_error(ValueError("bad input"))


def test_retries_transient_errors_then_succeeds():
    calls = []

    @with_db_retry(max_retries=3, retry_delay=0)
    async def flaky():
        calls.append(1)
        if len(calls) < 3:
            raise OperationalError("connection reset")
        return "ok"

    assert asyncio.run(flaky()) == "ok"
    assert len(calls) == 3


def test_gives_up_after_max_retries():
    calls = []

    @with_db_retry(max_retries=2, retry_delay=0)
    async def always_down():
        calls.append(1)
        raise OperationalError("connection refused")

    with pytest.raises(OperationalError):
        asyncio.run(always_down())
    assert len(calls) == 3


def test_other_errors_are_not_retried():
    calls = []

    @with_db_retry(retry_delay=0)
    async def broken():
        calls.append(1)
        raise ValueError("bad query")

    with pytest.raises(ValueError):
        asyncio.run(broken())
    assert len(calls) == 1


def test_session_is_rolled_back_before_retry(run_db):
    seen = []

    @with_db_retry(max_retries=2, retry_delay=0)
    async def count_users(db):
        seen.append(db.in_transaction())
        await db.execute(text("SELECT 1"))
        if len(seen) == 1:
            raise OperationalError("server closed the connection unexpectedly")
        return (await db.execute(text("SELECT count(*) FROM users"))).scalar_one()

    assert run_db(count_users) == 0
    assert seen == [False, False]


def test_dashboard_recovers_from_dropped_connection(run_db, monkeypatch):
    calls = []
    real_fetch = dashboard.get_expenses_for_user

    async def flaky_fetch(user_id, db, **kwargs):
        calls.append(db.in_transaction())
        if len(calls) == 1:
            await db.execute(text("SELECT 1"))
            raise OperationalError("connection reset by peer")
        return await real_fetch(user_id, db, **kwargs)

    monkeypatch.setattr(dashboard, "get_expenses_for_user", flaky_fetch)

    async def scenario(db):
        user = await make_user(db)
        await make_expense(db, user, 40, date(2024, 3, 2), category_id=uuid.uuid4())
        return await dashboard.build_dashboard(user.id, 3, 2024, db, rng=PinnedChoice(), today=date(2024, 3, 10))

    summary = run_db(scenario)

    # The retry starts from a rolled-back session
    assert len(calls) == 2
    assert calls[1] is False
    assert summary.total_spent_this_month == Decimal("40")
