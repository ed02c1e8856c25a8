"""
Wasla - Payments router
Ledger of subscriber payments. A payment lowers the subscriber's balance.
"""
from datetime import date
from decimal import Decimal
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List

from wasla.dependencies import get_db, require_role, SUBSCRIBER_ROLES
from wasla.models.payment import Payment
from wasla.models.subscriber import Subscriber
from wasla.models.user import User
from wasla.schemas.payment import PaymentCreate, PaymentResponse
from wasla.services.activity_service import log_activity

logger = logging.getLogger("payments_router")

router = APIRouter(prefix="/payments", tags=["Payments"])


async def _get_subscriber(db: AsyncSession, subscriber_id: int, tenant_id: int) -> Subscriber:
    subscriber = await db.get(Subscriber, subscriber_id)
    if not subscriber or subscriber.tenant_id != tenant_id:
        raise HTTPException(404, "المشترك غير موجود.")
    return subscriber


@router.get("/", response_model=List[PaymentResponse])
async def list_payments(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*SUBSCRIBER_ROLES))
):
    result = await db.execute(
        select(Payment)
        .where(Payment.tenant_id == user.tenant_id)
        .order_by(Payment.payment_date.desc(), Payment.id.desc())
    )
    return result.scalars().all()


@router.get("/subscriber/{subscriber_id}", response_model=List[PaymentResponse])
async def list_subscriber_payments(
    subscriber_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*SUBSCRIBER_ROLES))
):
    await _get_subscriber(db, subscriber_id, user.tenant_id)
    result = await db.execute(
        select(Payment)
        .where(Payment.tenant_id == user.tenant_id, Payment.subscriber_id == subscriber_id)
        .order_by(Payment.payment_date.desc(), Payment.id.desc())
    )
    return result.scalars().all()


@router.post("/", response_model=PaymentResponse, status_code=201)
async def create_payment(
    data: PaymentCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(require_role(*SUBSCRIBER_ROLES))
):
    """Records a payment and subtracts it from the subscriber's balance."""
    subscriber = await _get_subscriber(db, data.subscriber_id, user.tenant_id)

    values = data.model_dump()
    values["payment_date"] = values["payment_date"] or date.today()

    payment = Payment(tenant_id=user.tenant_id, created_by=user.id, **values)
    db.add(payment)
    subscriber.balance = (subscriber.balance or Decimal(0)) - Decimal(str(data.amount))
    await db.flush()

    await log_activity(db, user, "payment", "payment", payment.id, subscriber.name,
                       {"amount": data.amount, "subscriber_id": subscriber.id})
    await db.commit()
    await db.refresh(payment)

    logger.info(f"Payment {payment.id}: {data.amount} from subscriber {subscriber.id}")
    return payment
