"""
Wasla - Dashboard and report figures
Counts subscribers per status bucket and sums payments and card sales.
"""
from collections import OrderedDict
from datetime import date

from dateutil.relativedelta import relativedelta
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from wasla.models.payment import Payment, PaymentType
from wasla.models.router import Router, RouterStatus
from wasla.models.sale import Sale
from wasla.models.subscriber import Subscriber
from wasla.schemas.dashboard import DashboardStats, MonthlyReport, MonthPoint
from wasla.services.subscriber_status import SubscriberStatus, status_clause


def month_bounds(day: date) -> tuple[date, date]:
    """First day of the month of `day` and first day of the following month."""
    start = day.replace(day=1)
    return start, start + relativedelta(months=1)


async def _count(db: AsyncSession, model, *where) -> int:
    return await db.scalar(select(func.count(model.id)).where(*where)) or 0


async def _sum(db: AsyncSession, column, *where) -> float:
    return float(await db.scalar(select(func.coalesce(func.sum(column), 0)).where(*where)) or 0)


async def income_between(db: AsyncSession, tenant_id: int, start: date, end: date) -> tuple[float, float]:
    """(payments, card sales) collected in [start, end)."""
    payments = await _sum(
        db, Payment.amount,
        Payment.tenant_id == tenant_id, Payment.payment_date >= start, Payment.payment_date < end,
    )
    sales = await _sum(
        db, Sale.price,
        Sale.tenant_id == tenant_id, Sale.sale_date >= start, Sale.sale_date < end,
    )
    return payments, sales


async def dashboard_stats(db: AsyncSession, tenant_id: int, today: date | None = None) -> DashboardStats:
    today = today or date.today()
    own = Subscriber.tenant_id == tenant_id

    buckets = {}
    for bucket in SubscriberStatus:
        buckets[bucket] = await _count(db, Subscriber, own, status_clause(bucket, today))

    month_start, month_end = month_bounds(today)
    month_payments, month_sales = await income_between(db, tenant_id, month_start, month_end)

    return DashboardStats(
        total_subscribers=await _count(db, Subscriber, own),
        active_subscribers=buckets[SubscriberStatus.ACTIVE],
        expiring_subscribers=buckets[SubscriberStatus.EXPIRING],
        expired_subscribers=buckets[SubscriberStatus.EXPIRED],
        stopped_subscribers=buckets[SubscriberStatus.STOPPED],
        indebted_subscribers=buckets[SubscriberStatus.INDEBTED],
        total_routers=await _count(db, Router, Router.tenant_id == tenant_id),
        online_routers=await _count(
            db, Router, Router.tenant_id == tenant_id, Router.status == RouterStatus.ONLINE
        ),
        total_sales=int(await _sum(db, Sale.count, Sale.tenant_id == tenant_id)),
        total_revenue=(
            await _sum(db, Payment.amount, Payment.tenant_id == tenant_id)
            + await _sum(db, Sale.price, Sale.tenant_id == tenant_id)
        ),
        monthly_revenue=month_payments + month_sales,
    )


async def monthly_report(
    db: AsyncSession, tenant_id: int, today: date | None = None, months: int = 6
) -> MonthlyReport:
    """Figures for the current month plus a series over the last `months` months."""
    today = today or date.today()
    month_start, month_end = month_bounds(today)
    own = Subscriber.tenant_id == tenant_id

    payments_income, sales_income = await income_between(db, tenant_id, month_start, month_end)

    new_subscribers = await _count(
        db, Subscriber, own, Subscriber.start_date >= month_start, Subscriber.start_date < month_end
    )
    expired_this_month = await _count(
        db, Subscriber, own,
        status_clause(SubscriberStatus.EXPIRED, today),
        Subscriber.expire_date >= month_start,
    )

    last_months = []
    for back in range(months - 1, -1, -1):
        start, end = month_bounds(today - relativedelta(months=back))
        p_income, s_income = await income_between(db, tenant_id, start, end)
        in_month = (
            Payment.tenant_id == tenant_id,
            Payment.payment_date >= start,
            Payment.payment_date < end,
        )
        last_months.append(MonthPoint(
            month=start.strftime("%Y-%m"),
            income=p_income + s_income,
            subscriptions=await _count(db, Payment, *in_month, Payment.payment_type == PaymentType.SUBSCRIPTION),
            extensions=await _count(db, Payment, *in_month, Payment.payment_type == PaymentType.EXTENSION),
        ))

    r = await db.execute(
        select(Subscriber.speed, func.count(Subscriber.id))
        .where(own, Subscriber.speed.isnot(None))
        .group_by(Subscriber.speed)
        .order_by(Subscriber.speed)
    )
    speed_distribution = OrderedDict((str(speed), count) for speed, count in r.all())

    return MonthlyReport(
        month=month_start.strftime("%Y-%m"),
        total_income=payments_income + sales_income,
        payments_income=payments_income,
        sales_income=sales_income,
        new_subscribers=new_subscribers,
        expired_this_month=expired_this_month,
        last_months=last_months,
        speed_distribution=speed_distribution,
        stats=await dashboard_stats(db, tenant_id, today),
    )
