"""
Wasla - Tenants router
Trial status of the caller's network and platform administration of all
networks (super admin only).
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from wasla.dependencies import get_db, get_current_user, require_role
from wasla.models.user import User, UserRole
from wasla.schemas.auth import TenantResponse
from wasla.schemas.tenant import (
    TenantAdminResponse, TenantToggleRequest, SubscriptionUpdateRequest,
    ExtendTrialRequest, ActivateSubscriptionRequest,
    TrialStatusResponse, PlatformStats,
)
from wasla.services.tenant_service import (
    get_tenant_or_404, trial_status, list_tenants_with_owners,
    extend_trial, activate_subscription, platform_stats,
)

logger = logging.getLogger("tenants_router")

router = APIRouter(tags=["Tenants"])

super_admin = require_role(UserRole.SUPER_ADMIN)


@router.get("/tenant", response_model=TenantResponse)
async def get_my_tenant(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    return await get_tenant_or_404(db, user.tenant_id)


@router.get("/tenant/trial-status", response_model=TrialStatusResponse)
async def get_trial_status(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Drives the trial expiry banner."""
    return trial_status(await get_tenant_or_404(db, user.tenant_id))


# ================================================================
# PLATFORM ADMINISTRATION
# ================================================================

@router.get("/admin/stats", response_model=PlatformStats)
async def get_platform_stats(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(super_admin)
):
    return await platform_stats(db)


@router.get("/admin/tenants", response_model=List[TenantAdminResponse])
async def list_tenants(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(super_admin)
):
    """All networks, newest first, with owner and subscriber count."""
    return await list_tenants_with_owners(db)


@router.patch("/admin/tenants/{tenant_id}/active", response_model=TenantResponse)
async def toggle_tenant(
    tenant_id: int,
    data: TenantToggleRequest,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(super_admin)
):
    tenant = await get_tenant_or_404(db, tenant_id)
    tenant.is_active = data.is_active
    await db.commit()
    await db.refresh(tenant)
    logger.info(f"Tenant {tenant.slug} {'activated' if data.is_active else 'deactivated'} by {user.username}")
    return tenant


@router.patch("/admin/tenants/{tenant_id}/subscription", response_model=TenantResponse)
async def update_subscription(
    tenant_id: int,
    data: SubscriptionUpdateRequest,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(super_admin)
):
    tenant = await get_tenant_or_404(db, tenant_id)
    tenant.subscription_status = data.subscription_status
    tenant.subscription_ends_at = data.subscription_ends_at
    await db.commit()
    await db.refresh(tenant)
    logger.info(f"Subscription of {tenant.slug} set to {data.subscription_status.value}")
    return tenant


@router.post("/admin/tenants/{tenant_id}/extend-trial", response_model=TenantResponse)
async def extend_tenant_trial(
    tenant_id: int,
    data: ExtendTrialRequest,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(super_admin)
):
    return await extend_trial(db, await get_tenant_or_404(db, tenant_id), data.days)


@router.post("/admin/tenants/{tenant_id}/activate", response_model=TenantResponse)
async def activate_tenant_subscription(
    tenant_id: int,
    data: ActivateSubscriptionRequest,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(super_admin)
):
    return await activate_subscription(db, await get_tenant_or_404(db, tenant_id), data.months)
