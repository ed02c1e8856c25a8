"""
Wasla - Subscriber status
The status of a subscriber is derived from its expire date, balance and
stopped flag; it is never stored.

Order of evaluation:
  stopped  → stopped by hand
  expired  → expire date already passed
  indebted → owes money (balance > 0)
  expiring → expires within EXPIRING_THRESHOLD_DAYS
  active   → everything else
"""
import enum
from datetime import date, timedelta
from decimal import Decimal

from sqlalchemy import and_, or_

from wasla.config import get_settings
from wasla.models.subscriber import Subscriber

settings = get_settings()


class SubscriberStatus(str, enum.Enum):
    ACTIVE = "active"
    EXPIRING = "expiring"
    EXPIRED = "expired"
    STOPPED = "stopped"
    INDEBTED = "indebted"


def days_left(expire_date: date | None, today: date | None = None) -> int:
    """Whole days from today until the expire date. Negative once expired."""
    if expire_date is None:
        return 0
    today = today or date.today()
    return (expire_date - today).days


def subscriber_status(
    expire_date: date | None,
    balance: Decimal | float | None = 0,
    is_stopped: bool = False,
    today: date | None = None,
    threshold: int | None = None,
) -> SubscriberStatus:
    if threshold is None:
        threshold = settings.EXPIRING_THRESHOLD_DAYS

    if is_stopped:
        return SubscriberStatus.STOPPED

    left = days_left(expire_date, today)
    if left < 0:
        return SubscriberStatus.EXPIRED
    if balance is not None and balance > 0:
        return SubscriberStatus.INDEBTED
    if left <= threshold:
        return SubscriberStatus.EXPIRING
    return SubscriberStatus.ACTIVE


def status_clause(status: SubscriberStatus, today: date | None = None, threshold: int | None = None):
    """Same rule as subscriber_status(), as a SQL predicate on Subscriber."""
    if threshold is None:
        threshold = settings.EXPIRING_THRESHOLD_DAYS
    today = today or date.today()
    limit = today + timedelta(days=threshold)

    running = Subscriber.is_stopped == False
    not_expired = Subscriber.expire_date >= today
    no_debt = or_(Subscriber.balance <= 0, Subscriber.balance.is_(None))

    if status == SubscriberStatus.STOPPED:
        return Subscriber.is_stopped == True
    if status == SubscriberStatus.EXPIRED:
        return and_(running, Subscriber.expire_date < today)
    if status == SubscriberStatus.INDEBTED:
        return and_(running, not_expired, Subscriber.balance > 0)
    if status == SubscriberStatus.EXPIRING:
        return and_(running, not_expired, no_debt, Subscriber.expire_date <= limit)
    return and_(running, no_debt, Subscriber.expire_date > limit)
