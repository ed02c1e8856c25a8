from datetime import date, timedelta

from wasla.models.user import UserRole
from conftest import add_user, login

TODAY = date.today()


async def test_create_and_get(client, admin_headers, make_subscriber):
    sub = await make_subscriber(name="سامي", expire_date=(TODAY + timedelta(days=30)).isoformat())
    assert sub["status"] == "active"
    assert sub["days_left"] == 30
    assert sub["tenant_id"] == 1

    r = await client.get(f"/api/v1/subscribers/{sub['id']}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["name"] == "سامي"


async def test_create_copies_package(client, admin_headers, make_subscriber):
    r = await client.post("/api/v1/packages/", headers=admin_headers,
                          json={"name": "Fiber 50", "speed": 50, "price": 80})
    assert r.status_code == 201
    package = r.json()

    sub = await make_subscriber(package_id=package["id"], speed=None)
    assert sub["package_name"] == "Fiber 50"
    assert sub["package_price"] == 80
    assert sub["speed"] == 50


async def test_list_search_and_status_filter(client, admin_headers, make_subscriber):
    await make_subscriber(name="Active One", phone="0590000001",
                          expire_date=(TODAY + timedelta(days=40)).isoformat())
    await make_subscriber(name="Expiring One", expire_date=(TODAY + timedelta(days=2)).isoformat())
    await make_subscriber(name="Expired One", expire_date=(TODAY - timedelta(days=5)).isoformat())
    await make_subscriber(name="Debtor", balance=30, expire_date=(TODAY + timedelta(days=40)).isoformat())

    r = await client.get("/api/v1/subscribers/", headers=admin_headers)
    body = r.json()
    assert body["total"] == 4
    assert body["pages"] == 1

    for status, name in [("active", "Active One"), ("expiring", "Expiring One"),
                         ("expired", "Expired One"), ("indebted", "Debtor")]:
        r = await client.get("/api/v1/subscribers/", params={"status": status}, headers=admin_headers)
        items = r.json()["items"]
        assert [s["name"] for s in items] == [name]
        assert items[0]["status"] == status

    r = await client.get("/api/v1/subscribers/", params={"search": "0590000001"}, headers=admin_headers)
    assert [s["name"] for s in r.json()["items"]] == ["Active One"]


async def test_pagination(client, admin_headers, make_subscriber):
    for i in range(5):
        await make_subscriber(name=f"sub {i}")

    r = await client.get("/api/v1/subscribers/", params={"per_page": 2, "page": 3}, headers=admin_headers)
    body = r.json()
    assert body["total"] == 5
    assert body["pages"] == 3
    assert len(body["items"]) == 1


async def test_update(client, admin_headers, make_subscriber):
    sub = await make_subscriber()
    r = await client.put(f"/api/v1/subscribers/{sub['id']}", headers=admin_headers,
                         json={"phone": "0599999999", "max_devices": 3})
    assert r.status_code == 200
    assert r.json()["phone"] == "0599999999"
    assert r.json()["max_devices"] == 3
    assert r.json()["name"] == sub["name"]


async def test_stop_and_resume(client, admin_headers, make_subscriber):
    sub = await make_subscriber(balance=10)

    r = await client.post(f"/api/v1/subscribers/{sub['id']}/stop", headers=admin_headers)
    assert r.json()["is_stopped"] is True
    assert r.json()["status"] == "stopped"

    r = await client.post(f"/api/v1/subscribers/{sub['id']}/resume", headers=admin_headers)
    assert r.json()["is_stopped"] is False
    assert r.json()["status"] == "indebted"


async def test_renew_with_days_extends_from_expire_date(client, admin_headers, make_subscriber):
    expire = TODAY + timedelta(days=10)
    sub = await make_subscriber(expire_date=expire.isoformat())

    r = await client.post(f"/api/v1/subscribers/{sub['id']}/renew", headers=admin_headers,
                          json={"days": 30, "amount": 50})
    assert r.status_code == 200
    assert r.json()["expire_date"] == (expire + timedelta(days=30)).isoformat()

    r = await client.get(f"/api/v1/payments/subscriber/{sub['id']}", headers=admin_headers)
    payments = r.json()
    assert len(payments) == 1
    assert payments[0]["payment_type"] == "extension"
    assert payments[0]["amount"] == 50


async def test_renew_expired_counts_from_today(client, admin_headers, make_subscriber):
    sub = await make_subscriber(expire_date=(TODAY - timedelta(days=20)).isoformat())

    r = await client.post(f"/api/v1/subscribers/{sub['id']}/renew", headers=admin_headers,
                          json={"days": 30, "record_payment": False})
    assert r.json()["expire_date"] == (TODAY + timedelta(days=30)).isoformat()
    assert r.json()["status"] == "active"

    r = await client.get(f"/api/v1/payments/subscriber/{sub['id']}", headers=admin_headers)
    assert r.json() == []


async def test_renew_with_package_uses_its_duration(client, admin_headers, make_subscriber):
    r = await client.post("/api/v1/packages/", headers=admin_headers,
                          json={"name": "Quarter", "speed": 16, "price": 120, "duration_days": 90})
    package = r.json()
    sub = await make_subscriber(expire_date=TODAY.isoformat())

    r = await client.post(f"/api/v1/subscribers/{sub['id']}/renew", headers=admin_headers,
                          json={"package_id": package["id"]})
    body = r.json()
    assert body["expire_date"] == (TODAY + timedelta(days=90)).isoformat()
    assert body["package_name"] == "Quarter"
    assert body["speed"] == 16


async def test_renew_needs_days_or_package(client, admin_headers, make_subscriber):
    sub = await make_subscriber()
    r = await client.post(f"/api/v1/subscribers/{sub['id']}/renew", headers=admin_headers, json={})
    assert r.status_code == 400


async def test_delete_removes_payments(client, admin_headers, make_subscriber):
    sub = await make_subscriber()
    await client.post("/api/v1/payments/", headers=admin_headers,
                      json={"subscriber_id": sub["id"], "amount": 20})

    r = await client.delete(f"/api/v1/subscribers/{sub['id']}", headers=admin_headers)
    assert r.status_code == 204

    r = await client.get(f"/api/v1/subscribers/{sub['id']}", headers=admin_headers)
    assert r.status_code == 404
    r = await client.get("/api/v1/payments/", headers=admin_headers)
    assert r.json() == []


async def test_missing_subscriber(client, admin_headers):
    r = await client.get("/api/v1/subscribers/999", headers=admin_headers)
    assert r.status_code == 404


async def test_sales_staff_cannot_reach_subscribers(client, db):
    await add_user(db, 1, "seller", UserRole.SALES)
    headers = await login(client, "seller", "secret123")

    r = await client.get("/api/v1/subscribers/", headers=headers)
    assert r.status_code == 403
    r = await client.get("/api/v1/sales/", headers=headers)
    assert r.status_code == 200


async def test_tenants_do_not_see_each_other(client, admin_headers, make_subscriber, other_tenant):
    sub = await make_subscriber()

    r = await client.get(f"/api/v1/subscribers/{sub['id']}", headers=other_tenant["headers"])
    assert r.status_code == 404
    r = await client.get("/api/v1/subscribers/", headers=other_tenant["headers"])
    assert r.json()["total"] == 0

    # Nor attach each other's routers
    r = await client.post("/api/v1/routers/", headers=admin_headers, json={"name": "R1"})
    r = await client.post("/api/v1/subscribers/", headers=other_tenant["headers"], json={
        "name": "x", "start_date": "2026-01-01", "expire_date": "2099-01-01", "router_id": r.json()["id"],
    })
    assert r.status_code == 404


async def test_update_refuses_null_on_required_fields(client, admin_headers, make_subscriber):
    sub = await make_subscriber(notes="old note")

    for field in ("expire_date", "name", "balance", "max_devices"):
        r = await client.put(f"/api/v1/subscribers/{sub['id']}", headers=admin_headers, json={field: None})
        assert r.status_code == 422, field

    # Optional fields can be cleared
    r = await client.put(f"/api/v1/subscribers/{sub['id']}", headers=admin_headers,
                         json={"phone": None, "notes": None})
    assert r.status_code == 200
    assert r.json()["phone"] is None
    assert r.json()["notes"] is None
    assert r.json()["expire_date"] == sub["expire_date"]


async def test_changing_package_copies_its_details(client, admin_headers, make_subscriber):
    basic = (await client.post("/api/v1/packages/", headers=admin_headers,
                               json={"name": "Basic", "speed": 8, "price": 40})).json()
    fiber = (await client.post("/api/v1/packages/", headers=admin_headers,
                               json={"name": "Fiber", "speed": 100, "price": 150})).json()
    sub = await make_subscriber(package_id=basic["id"], speed=None)

    r = await client.put(f"/api/v1/subscribers/{sub['id']}", headers=admin_headers,
                         json={"package_id": fiber["id"]})
    body = r.json()
    assert body["package_id"] == fiber["id"]
    assert body["package_name"] == "Fiber"
    assert body["package_price"] == 150
    assert body["speed"] == 100

    # Explicit values win over the package's
    r = await client.put(f"/api/v1/subscribers/{sub['id']}", headers=admin_headers,
                         json={"package_id": basic["id"], "package_price": 35})
    assert r.json()["package_name"] == "Basic"
    assert r.json()["package_price"] == 35
