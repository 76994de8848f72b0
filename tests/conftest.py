# tests/conftest.py
import os

# Settings are read at import time, so the environment has to be ready first.
# Tests always run on in-memory SQLite, whatever DATABASE_URL the shell has.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-finance-tracker")

import asyncio

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from finance_tracker.core.database import Base, build_engine_kwargs
from finance_tracker.models import budget, category, expense, savings, user  # noqa: F401

TEST_DATABASE_URL = "sqlite+aiosqlite://"


def run_with_db(fn):
    """Run ``await fn(session)`` against a fresh in-memory database and return its result."""
    async def main():
        engine = create_async_engine(TEST_DATABASE_URL, **build_engine_kwargs(TEST_DATABASE_URL))
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        session_maker = async_sessionmaker(engine, expire_on_commit=False)
        try:
            async with session_maker() as session:
                return await fn(session)
        finally:
            await engine.dispose()

    return asyncio.run(main())


@pytest.fixture
def run_db():
    return run_with_db

