"""
Wasla - Tenant service
Signup, trial tracking, platform subscription changes and first-start seeding.

Trial:
  - A new network starts on a TRIAL_DAYS trial.
  - The UI warns when TRIAL_ALERT_DAYS or fewer are left, urgently at 3.
  - The platform operator extends trials or activates paid months.
"""
import logging
import math
from datetime import datetime, timedelta, timezone

from dateutil.relativedelta import relativedelta
from fastapi import HTTPException, status
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from wasla.config import get_settings
from wasla.middleware.auth import hash_password
from wasla.models.subscriber import Subscriber
from wasla.models.tenant import Tenant, SubscriptionStatus
from wasla.models.user import User, UserRole
from wasla.schemas.auth import TenantCreate
from wasla.schemas.tenant import TenantAdminResponse, TrialStatusResponse, PlatformStats

logger = logging.getLogger("tenant_service")
settings = get_settings()

URGENT_DAYS = 3


def _as_utc(moment: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes
    if moment is not None and moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def subscription_days_left(tenant: Tenant, now: datetime | None = None) -> int | None:
    ends_at = _as_utc(tenant.subscription_ends_at)
    if ends_at is None:
        return None
    now = now or datetime.now(timezone.utc)
    return math.ceil((ends_at - now).total_seconds() / 86400)


def trial_status(tenant: Tenant, now: datetime | None = None) -> TrialStatusResponse:
    left = subscription_days_left(tenant, now)
    response = TrialStatusResponse(
        subscription_status=tenant.subscription_status,
        subscription_ends_at=tenant.subscription_ends_at,
        days_left=left,
    )
    if tenant.subscription_status != SubscriptionStatus.TRIAL or left is None:
        return response

    response.show_alert = left <= settings.TRIAL_ALERT_DAYS
    response.is_expired = left <= 0
    response.is_urgent = left <= URGENT_DAYS
    return response


async def register_tenant(db: AsyncSession, data: TenantCreate) -> Tenant:
    """Creates a network on trial together with its owner account."""
    existing = await db.execute(select(Tenant).where(Tenant.slug == data.slug))
    if existing.scalar_one_or_none():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"المعرّف '{data.slug}' مستخدم مسبقاً.",
        )

    tenant = Tenant(
        name=data.name,
        slug=data.slug,
        phone=data.phone,
        address=data.address,
        subscription_status=SubscriptionStatus.TRIAL,
        subscription_ends_at=datetime.now(timezone.utc) + timedelta(days=settings.TRIAL_DAYS),
        is_active=True,
    )
    db.add(tenant)
    await db.flush()

    db.add(User(
        tenant_id=tenant.id,
        name=data.owner_name,
        username=data.owner_username,
        hashed_password=hash_password(data.owner_password),
        role=UserRole.OWNER,
        permissions=["all"],
    ))
    await db.commit()
    await db.refresh(tenant)

    logger.info(f"Tenant registered: {tenant.slug} (trial until {tenant.subscription_ends_at})")
    return tenant


async def seed_default_tenant(db: AsyncSession) -> Tenant | None:
    """On an empty database creates the default network with its admin account."""
    count = await db.scalar(select(func.count(Tenant.id)))
    if count:
        return None

    tenant = Tenant(
        name=settings.DEFAULT_TENANT_NAME,
        slug=settings.DEFAULT_TENANT_SLUG,
        subscription_status=SubscriptionStatus.ACTIVE,
        is_active=True,
    )
    db.add(tenant)
    await db.flush()

    db.add(User(
        tenant_id=tenant.id,
        name="المدير",
        username=settings.DEFAULT_ADMIN_USERNAME,
        hashed_password=hash_password(settings.DEFAULT_ADMIN_PASSWORD),
        role=UserRole.SUPER_ADMIN,
        permissions=["all"],
    ))
    await db.commit()

    logger.info(
        f"Default admin created: username={settings.DEFAULT_ADMIN_USERNAME} "
        f"(tenant '{tenant.slug}'). Change the password after the first login."
    )
    return tenant


async def get_tenant_or_404(db: AsyncSession, tenant_id: int) -> Tenant:
    tenant = await db.get(Tenant, tenant_id)
    if not tenant:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="الشبكة غير موجودة.")
    return tenant


async def list_tenants_with_owners(db: AsyncSession) -> list[TenantAdminResponse]:
    result = await db.execute(select(Tenant).order_by(Tenant.created_at.desc(), Tenant.id.desc()))
    tenants = result.scalars().all()

    responses = []
    for t in tenants:
        owner = (await db.execute(
            select(User)
            .where(User.tenant_id == t.id, User.role.in_([UserRole.OWNER, UserRole.SUPER_ADMIN]))
            .order_by(User.id)
            .limit(1)
        )).scalar_one_or_none()
        subscribers_count = await db.scalar(
            select(func.count(Subscriber.id)).where(Subscriber.tenant_id == t.id)
        ) or 0

        response = TenantAdminResponse.model_validate(t)
        response.owner_name = owner.name if owner else None
        response.owner_username = owner.username if owner else None
        response.subscribers_count = subscribers_count
        responses.append(response)
    return responses


async def extend_trial(db: AsyncSession, tenant: Tenant, days: int) -> Tenant:
    tenant.subscription_status = SubscriptionStatus.TRIAL
    tenant.subscription_ends_at = datetime.now(timezone.utc) + timedelta(days=days)
    await db.commit()
    await db.refresh(tenant)
    logger.info(f"Trial of {tenant.slug} extended {days} days")
    return tenant


async def activate_subscription(db: AsyncSession, tenant: Tenant, months: int) -> Tenant:
    tenant.subscription_status = SubscriptionStatus.ACTIVE
    tenant.subscription_ends_at = datetime.now(timezone.utc) + relativedelta(months=months)
    tenant.is_active = True
    await db.commit()
    await db.refresh(tenant)
    logger.info(f"Subscription of {tenant.slug} activated for {months} months")
    return tenant


async def platform_stats(db: AsyncSession, now: datetime | None = None) -> PlatformStats:
    result = await db.execute(select(Tenant))
    tenants = result.scalars().all()

    expiring = 0
    for t in tenants:
        if t.subscription_status != SubscriptionStatus.TRIAL:
            continue
        left = subscription_days_left(t, now)
        if left is not None and 0 < left <= settings.TRIAL_ALERT_DAYS:
            expiring += 1

    return PlatformStats(
        total_tenants=len(tenants),
        active_tenants=sum(1 for t in tenants if t.is_active),
        trial_tenants=sum(1 for t in tenants if t.subscription_status == SubscriptionStatus.TRIAL),
        paid_tenants=sum(1 for t in tenants if t.subscription_status == SubscriptionStatus.ACTIVE),
        inactive_tenants=sum(1 for t in tenants if not t.is_active),
        expiring_trials=expiring,
        total_subscribers=await db.scalar(select(func.count(Subscriber.id))) or 0,
    )
