# finance_tracker/api/v1/routes/dashboard.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from finance_tracker.core.database import get_async_session
from finance_tracker.api.deps import get_current_admin, get_current_user
from finance_tracker.models.user import User
from finance_tracker.schemas.dashboard import AdminDashboard, DashboardSummary
from finance_tracker.utils.budgeting import utc_today
from finance_tracker.utils.dashboard import build_admin_dashboard, build_dashboard

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

@router.get("", response_model=DashboardSummary)
async def get_dashboard(
    month: Optional[int] = Query(None, ge=1, le=12, description="Defaults to the current month"),
    year: Optional[int] = Query(None, ge=2000, le=2100, description="Defaults to the current year"),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    """
    Dashboard for the selected month:
    - Cards: this/last month totals, change %, transaction count, daily average
    - Charts: top categories, daily spending, 6-month trend
    - Current budget status and a motivational message
    """
    today = utc_today()
    return await build_dashboard(user.id, month or today.month, year or today.year, db)

@router.get("/admin", response_model=AdminDashboard)
async def get_admin_dashboard(
    db: AsyncSession = Depends(get_async_session),
    admin: User = Depends(get_current_admin),
):
    """System-wide statistics (admin only)"""
    return await build_admin_dashboard(db)
