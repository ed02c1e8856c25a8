from datetime import date, timedelta
from decimal import Decimal

from sqlalchemy import select

from wasla.models.subscriber import Subscriber
from wasla.services.subscriber_status import (
    SubscriberStatus, days_left, subscriber_status, status_clause,
)

TODAY = date(2026, 3, 15)


def test_days_left_counts_whole_days():
    assert days_left(date(2026, 3, 20), TODAY) == 5
    assert days_left(TODAY, TODAY) == 0
    assert days_left(date(2026, 3, 14), TODAY) == -1
    assert days_left(None, TODAY) == 0


def test_status_buckets():
    assert subscriber_status(TODAY + timedelta(days=30), 0, False, TODAY) == SubscriberStatus.ACTIVE
    assert subscriber_status(TODAY + timedelta(days=3), 0, False, TODAY) == SubscriberStatus.EXPIRING
    assert subscriber_status(TODAY, 0, False, TODAY) == SubscriberStatus.EXPIRING
    assert subscriber_status(TODAY + timedelta(days=4), 0, False, TODAY) == SubscriberStatus.ACTIVE
    assert subscriber_status(TODAY - timedelta(days=1), 0, False, TODAY) == SubscriberStatus.EXPIRED


def test_stopped_wins_over_everything():
    assert subscriber_status(TODAY - timedelta(days=10), 50, True, TODAY) == SubscriberStatus.STOPPED


def test_debt_marks_running_subscribers_indebted():
    assert subscriber_status(TODAY + timedelta(days=30), Decimal("10"), False, TODAY) == SubscriberStatus.INDEBTED
    assert subscriber_status(TODAY + timedelta(days=1), 10, False, TODAY) == SubscriberStatus.INDEBTED
    # An expired subscriber is expired whatever the balance
    assert subscriber_status(TODAY - timedelta(days=1), 10, False, TODAY) == SubscriberStatus.EXPIRED
    # Credit (negative balance) is not debt
    assert subscriber_status(TODAY + timedelta(days=30), -20, False, TODAY) == SubscriberStatus.ACTIVE


def test_custom_threshold():
    assert subscriber_status(TODAY + timedelta(days=5), 0, False, TODAY, threshold=5) == SubscriberStatus.EXPIRING


async def test_sql_clause_matches_python_rule(db):
    cases = [
        (TODAY + timedelta(days=30), 0, False),
        (TODAY + timedelta(days=2), 0, False),
        (TODAY, 0, False),
        (TODAY - timedelta(days=1), 0, False),
        (TODAY - timedelta(days=1), 25, False),
        (TODAY + timedelta(days=10), 25, False),
        (TODAY + timedelta(days=10), -5, False),
        (TODAY + timedelta(days=10), 0, True),
    ]
    for i, (expire, balance, stopped) in enumerate(cases):
        db.add(Subscriber(
            tenant_id=1, name=f"sub-{i}", start_date=TODAY - timedelta(days=60),
            expire_date=expire, balance=balance, is_stopped=stopped,
        ))
    await db.commit()

    rows = (await db.execute(select(Subscriber))).scalars().all()
    expected = {s.id: subscriber_status(s.expire_date, s.balance, s.is_stopped, TODAY) for s in rows}

    seen = set()
    for bucket in SubscriberStatus:
        result = await db.execute(select(Subscriber.id).where(status_clause(bucket, TODAY)))
        ids = set(result.scalars().all())
        assert ids == {sid for sid, st in expected.items() if st == bucket}, bucket
        assert not ids & seen
        seen |= ids
    assert seen == set(expected)
