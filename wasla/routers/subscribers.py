"""
Wasla - Subscribers router
Full CRUD of the network's subscribers, plus stop/resume and renewal.
Every query is filtered by the caller's tenant_id.
"""
import logging
import math
from datetime import date, timedelta

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, or_, delete
from wasla.database import get_db
from wasla.dependencies import require_role, SUBSCRIBER_ROLES
from wasla.models.user import User
from wasla.models.subscriber import Subscriber
from wasla.models.package import Package
from wasla.models.payment import Payment, PaymentType
from wasla.models.router import Router
from wasla.schemas.subscriber import SubscriberCreate, SubscriberUpdate, SubscriberResponse, RenewRequest
from wasla.schemas.common import PaginatedResponse, update_values
from wasla.services.activity_service import log_activity
from wasla.services.subscriber_status import SubscriberStatus, status_clause

logger = logging.getLogger("subscribers_router")

router = APIRouter(prefix="/subscribers", tags=["Subscribers"])

NOT_FOUND = "المشترك غير موجود."


async def _get_subscriber(db: AsyncSession, subscriber_id: int, tenant_id: int) -> Subscriber:
    result = await db.execute(
        select(Subscriber).where(Subscriber.id == subscriber_id, Subscriber.tenant_id == tenant_id)
    )
    subscriber = result.scalar_one_or_none()
    if not subscriber:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return subscriber


async def _check_refs(db: AsyncSession, tenant_id: int, router_id: int | None, package_id: int | None):
    """Router and package must belong to the same network."""
    if router_id is not None:
        found = await db.get(Router, router_id)
        if not found or found.tenant_id != tenant_id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="الراوتر غير موجود.")
    if package_id is not None:
        found = await db.get(Package, package_id)
        if not found or found.tenant_id != tenant_id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="الباقة غير موجودة.")
        return found
    return None


@router.get("/", response_model=PaginatedResponse[SubscriberResponse])
async def list_subscribers(
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=10000),
    search: str | None = None,
    status_filter: SubscriberStatus | None = Query(None, alias="status"),
    router_id: int | None = None,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*SUBSCRIBER_ROLES)),
):
    """Lists the network's subscribers with search, status filter and pagination."""
    query = select(Subscriber).where(Subscriber.tenant_id == user.tenant_id)

    if search:
        term = f"%{search}%"
        query = query.where(or_(Subscriber.name.ilike(term), Subscriber.phone.ilike(term)))

    if status_filter:
        query = query.where(status_clause(status_filter))

    if router_id:
        query = query.where(Subscriber.router_id == router_id)

    total = await db.scalar(select(func.count()).select_from(query.subquery())) or 0

    query = query.order_by(Subscriber.created_at.desc(), Subscriber.id.desc())
    query = query.offset((page - 1) * per_page).limit(per_page)
    result = await db.execute(query)

    return PaginatedResponse[SubscriberResponse](
        items=[SubscriberResponse.model_validate(s) for s in result.scalars().all()],
        total=total,
        page=page,
        per_page=per_page,
        pages=math.ceil(total / per_page) if total else 0,
    )


@router.get("/{subscriber_id}", response_model=SubscriberResponse)
async def get_subscriber(
    subscriber_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*SUBSCRIBER_ROLES)),
):
    return SubscriberResponse.model_validate(await _get_subscriber(db, subscriber_id, user.tenant_id))


@router.post("/", response_model=SubscriberResponse, status_code=201)
async def create_subscriber(
    data: SubscriberCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*SUBSCRIBER_ROLES)),
):
    """Adds a subscriber. Package name/price/speed are copied from the package when given."""
    package = await _check_refs(db, user.tenant_id, data.router_id, data.package_id)

    values = data.model_dump()
    if package:
        values["package_name"] = values["package_name"] or package.name
        values["package_price"] = values["package_price"] or float(package.price)
        values["speed"] = values["speed"] or package.speed

    subscriber = Subscriber(tenant_id=user.tenant_id, **values)
    db.add(subscriber)
    await db.flush()

    await log_activity(db, user, "add", "subscriber", subscriber.id, subscriber.name)
    await db.commit()
    await db.refresh(subscriber)
    return SubscriberResponse.model_validate(subscriber)


@router.put("/{subscriber_id}", response_model=SubscriberResponse)
async def update_subscriber(
    subscriber_id: int,
    data: SubscriberUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*SUBSCRIBER_ROLES)),
):
    """
    Partial update. Choosing another package copies its name, price and
    speed unless those are sent too.
    """
    subscriber = await _get_subscriber(db, subscriber_id, user.tenant_id)

    update_data = update_values(
        data, "phone", "address", "speed", "package_id", "package_name", "router_id", "notes"
    )
    package = await _check_refs(db, user.tenant_id, update_data.get("router_id"), update_data.get("package_id"))
    if package and package.id != subscriber.package_id:
        update_data.setdefault("package_name", package.name)
        update_data.setdefault("package_price", package.price)
        update_data.setdefault("speed", package.speed)

    for field, value in update_data.items():
        setattr(subscriber, field, value)

    await log_activity(db, user, "edit", "subscriber", subscriber.id, subscriber.name,
                       data.model_dump(mode="json", exclude_unset=True))
    await db.commit()
    await db.refresh(subscriber)
    return SubscriberResponse.model_validate(subscriber)


@router.delete("/{subscriber_id}", status_code=204)
async def delete_subscriber(
    subscriber_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*SUBSCRIBER_ROLES)),
):
    """Deletes a subscriber together with its payments."""
    subscriber = await _get_subscriber(db, subscriber_id, user.tenant_id)
    name = subscriber.name

    await db.execute(delete(Payment).where(Payment.subscriber_id == subscriber.id))
    await db.delete(subscriber)
    await log_activity(db, user, "delete", "subscriber", subscriber_id, name)
    await db.commit()


@router.post("/{subscriber_id}/stop", response_model=SubscriberResponse)
async def stop_subscriber(
    subscriber_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*SUBSCRIBER_ROLES)),
):
    """Stops the service by hand. The subscriber shows as 'stopped' until resumed."""
    subscriber = await _get_subscriber(db, subscriber_id, user.tenant_id)
    subscriber.is_stopped = True

    await log_activity(db, user, "stop", "subscriber", subscriber.id, subscriber.name)
    await db.commit()
    await db.refresh(subscriber)
    return SubscriberResponse.model_validate(subscriber)


@router.post("/{subscriber_id}/resume", response_model=SubscriberResponse)
async def resume_subscriber(
    subscriber_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*SUBSCRIBER_ROLES)),
):
    subscriber = await _get_subscriber(db, subscriber_id, user.tenant_id)
    subscriber.is_stopped = False

    await log_activity(db, user, "resume", "subscriber", subscriber.id, subscriber.name)
    await db.commit()
    await db.refresh(subscriber)
    return SubscriberResponse.model_validate(subscriber)


@router.post("/{subscriber_id}/renew", response_model=SubscriberResponse)
async def renew_subscriber(
    subscriber_id: int,
    data: RenewRequest,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*SUBSCRIBER_ROLES)),
):
    """
    Extends the subscription.
    - Counts from the later of today and the current expire date.
    - Without `days`, uses the duration of the given (or assigned) package.
    - With record_payment, stores an 'extension' payment for `amount`
      (the package price when omitted).
    """
    subscriber = await _get_subscriber(db, subscriber_id, user.tenant_id)
    package = await _check_refs(db, user.tenant_id, None, data.package_id or subscriber.package_id)

    days = data.days or (package.duration_days if package else None)
    if not days:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="حدد عدد الأيام أو باقة للتمديد.",
        )

    base = max(date.today(), subscriber.expire_date)
    subscriber.expire_date = base + timedelta(days=days)
    if package and data.package_id:
        subscriber.package_id = package.id
        subscriber.package_name = package.name
        subscriber.package_price = package.price
        subscriber.speed = package.speed

    amount = data.amount
    if amount is None:
        amount = float(package.price) if package else float(subscriber.package_price or 0)

    if data.record_payment and amount > 0:
        db.add(Payment(
            tenant_id=user.tenant_id,
            subscriber_id=subscriber.id,
            amount=amount,
            payment_date=date.today(),
            payment_type=PaymentType.EXTENSION,
            notes=data.notes,
            created_by=user.id,
        ))

    await log_activity(db, user, "renew", "subscriber", subscriber.id, subscriber.name,
                       {"days": days, "expire_date": subscriber.expire_date.isoformat(), "amount": amount})
    await db.commit()
    await db.refresh(subscriber)

    logger.info(f"Subscriber {subscriber.id} renewed {days} days until {subscriber.expire_date}")
    return SubscriberResponse.model_validate(subscriber)
