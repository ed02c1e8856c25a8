from datetime import date, timedelta

from wasla.models.payment import Payment, PaymentType
from wasla.models.router import Router, RouterStatus
from wasla.models.sale import Sale
from wasla.models.subscriber import Subscriber
from wasla.services.report_renderer import render_monthly_report
from wasla.services.stats_service import dashboard_stats, monthly_report, month_bounds

TODAY = date(2026, 3, 15)


async def _seed(db):
    def sub(name, expire, balance=0, stopped=False, speed=10, start=date(2025, 12, 1)):
        s = Subscriber(tenant_id=1, name=name, start_date=start, expire_date=expire,
                       balance=balance, is_stopped=stopped, speed=speed)
        db.add(s)
        return s

    paying = sub("active", TODAY + timedelta(days=20), speed=20)
    sub("active 2", TODAY + timedelta(days=60), speed=20, start=date(2026, 3, 2))
    sub("expiring", TODAY + timedelta(days=1))
    sub("expired", TODAY - timedelta(days=4))
    sub("expired long ago", date(2026, 1, 10))
    sub("stopped", TODAY + timedelta(days=20), stopped=True)
    sub("debtor", TODAY + timedelta(days=20), balance=15, speed=None)

    db.add_all([
        Router(tenant_id=1, name="R1", status=RouterStatus.ONLINE),
        Router(tenant_id=1, name="R2", status=RouterStatus.OFFLINE),
    ])
    await db.flush()

    db.add_all([
        Payment(tenant_id=1, subscriber_id=paying.id, amount=50, payment_date=date(2026, 3, 3)),
        Payment(tenant_id=1, subscriber_id=paying.id, amount=30, payment_date=date(2026, 3, 10),
                payment_type=PaymentType.EXTENSION),
        Payment(tenant_id=1, subscriber_id=paying.id, amount=40, payment_date=date(2026, 2, 5)),
        Sale(tenant_id=1, count=10, price=45, sale_date=date(2026, 3, 1)),
        Sale(tenant_id=1, count=100, price=400, sale_date=date(2025, 11, 20)),
    ])
    await db.commit()


def test_month_bounds():
    assert month_bounds(date(2026, 12, 31)) == (date(2026, 12, 1), date(2027, 1, 1))
    assert month_bounds(date(2026, 2, 1)) == (date(2026, 2, 1), date(2026, 3, 1))


async def test_dashboard_stats(db):
    await _seed(db)
    stats = await dashboard_stats(db, 1, TODAY)

    assert stats.total_subscribers == 7
    assert stats.active_subscribers == 2
    assert stats.expiring_subscribers == 1
    assert stats.expired_subscribers == 2
    assert stats.stopped_subscribers == 1
    assert stats.indebted_subscribers == 1
    assert stats.total_routers == 2
    assert stats.online_routers == 1
    assert stats.total_sales == 110
    assert stats.total_revenue == 50 + 30 + 40 + 45 + 400
    assert stats.monthly_revenue == 50 + 30 + 45


async def test_monthly_report(db):
    await _seed(db)
    report = await monthly_report(db, 1, TODAY)

    assert report.month == "2026-03"
    assert report.payments_income == 80
    assert report.sales_income == 45
    assert report.total_income == 125
    assert report.new_subscribers == 1
    assert report.expired_this_month == 1

    assert [p.month for p in report.last_months] == [
        "2025-10", "2025-11", "2025-12", "2026-01", "2026-02", "2026-03",
    ]
    march = report.last_months[-1]
    assert (march.income, march.subscriptions, march.extensions) == (125, 1, 1)
    assert report.last_months[1].income == 400
    assert report.last_months[4].income == 40

    assert report.speed_distribution == {"10": 4, "20": 2}
    assert report.stats.total_subscribers == 7


async def test_printable_report_renders(db):
    await _seed(db)
    report = await monthly_report(db, 1, TODAY)
    html = render_monthly_report(report, "شبكة <النور>", "₪")

    assert 'dir="rtl"' in html
    assert "2026-03" in html
    assert "125.00 ₪" in html
    assert "&lt;النور&gt;" in html


async def test_endpoints(client, admin_headers, make_subscriber):
    await make_subscriber()
    await client.post("/api/v1/sales/", headers=admin_headers, json={"count": 2, "price": 10})

    r = await client.get("/api/v1/dashboard/stats", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["total_subscribers"] == 1
    assert r.json()["monthly_revenue"] == 10

    r = await client.get("/api/v1/reports/monthly", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["sales_income"] == 10
    assert len(r.json()["last_months"]) == 6

    r = await client.get("/api/v1/reports/monthly/print", headers=admin_headers)
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert "وصلة" in r.text
