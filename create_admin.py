#!/usr/bin/env python3
"""
Standalone script to create the first admin for the Finance Tracker API
and print an access token for them.
Usage: python create_admin.py
"""

import asyncio
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from finance_tracker.core.config import settings
from finance_tracker.core.database import Base, build_engine_kwargs
from finance_tracker.core.security import create_access_token
from finance_tracker.crud.user import create_user
from finance_tracker.models import budget, category, expense, savings, user  # noqa: F401
from finance_tracker.models.user import ROLE_ADMIN
from finance_tracker.schemas.user import UserCreate

async def create_admin():
    print("Creating admin...")

    # Get user input
    username = input("Enter admin username: ") or "admin"
    email = input("Enter admin email: ") or "admin@example.com"
    first_name = input("Enter first name: ") or "System"
    last_name = input("Enter last name: ") or "Administrator"

    # Create engine and session maker
    engine = create_async_engine(settings.DATABASE_URL, **build_engine_kwargs(settings.DATABASE_URL))
    async_session_maker = async_sessionmaker(engine, expire_on_commit=False)

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        async with async_session_maker() as session:
            admin = await create_user(
                UserCreate(
                    username=username,
                    email=email,
                    first_name=first_name,
                    last_name=last_name,
                    role=ROLE_ADMIN,
                ),
                session,
            )
            if admin is None:
                print(f"User {username} or email {email} already exists!")
                return

            print("✅ Admin created successfully!")
            print(f"📧 Email: {admin.email}")
            print(f"👤 Name: {admin.full_name}")
            print(f"🔑 ID: {admin.id}")
            print(f"🎫 Token: {create_access_token(admin.id)}")
    finally:
        await engine.dispose()

if __name__ == "__main__":
    asyncio.run(create_admin())
