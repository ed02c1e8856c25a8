"""
Wasla - Dashboard and reports router
Dashboard tiles, the monthly report and its printable HTML version.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from wasla.config import get_settings
from wasla.dependencies import get_db, get_current_user, require_role, MANAGERS
from wasla.models.tenant import Tenant
from wasla.models.user import User
from wasla.schemas.dashboard import DashboardStats, MonthlyReport
from wasla.services.report_renderer import render_monthly_report
from wasla.services.stats_service import dashboard_stats, monthly_report

settings = get_settings()

router = APIRouter(tags=["Dashboard"])


@router.get("/dashboard/stats", response_model=DashboardStats)
async def get_dashboard_stats(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """All dashboard tiles in one call."""
    return await dashboard_stats(db, user.tenant_id)


@router.get("/reports/monthly", response_model=MonthlyReport)
async def get_monthly_report(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*MANAGERS))
):
    return await monthly_report(db, user.tenant_id)


@router.get("/reports/monthly/print", response_class=HTMLResponse)
async def print_monthly_report(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*MANAGERS))
):
    """Printable HTML of the monthly report."""
    report = await monthly_report(db, user.tenant_id)
    tenant = await db.get(Tenant, user.tenant_id)
    return HTMLResponse(render_monthly_report(report, tenant.name, settings.CURRENCY))
