from wasla.models.user import UserRole
from conftest import add_user, login


async def test_router_crud_and_subscriber_count(client, admin_headers, make_subscriber):
    r = await client.post("/api/v1/routers/", headers=admin_headers,
                          json={"name": "Tower A", "model": "MikroTik hAP", "ip": "10.0.0.1", "total_ports": 8})
    assert r.status_code == 201
    router = r.json()
    assert router["status"] == "online"
    assert router["subscriber_count"] == 0

    await make_subscriber(router_id=router["id"])
    await make_subscriber(router_id=router["id"])

    r = await client.get(f"/api/v1/routers/{router['id']}", headers=admin_headers)
    assert r.json()["subscriber_count"] == 2

    r = await client.put(f"/api/v1/routers/{router['id']}", headers=admin_headers, json={"status": "offline"})
    assert r.json()["status"] == "offline"

    r = await client.get("/api/v1/routers/", params={"status": "online"}, headers=admin_headers)
    assert r.json() == []
    r = await client.get("/api/v1/routers/", params={"status": "offline"}, headers=admin_headers)
    assert len(r.json()) == 1

    r = await client.get("/api/v1/subscribers/", params={"router_id": router["id"]}, headers=admin_headers)
    assert r.json()["total"] == 2


async def test_deleting_router_keeps_subscribers(client, admin_headers, make_subscriber):
    r = await client.post("/api/v1/routers/", headers=admin_headers, json={"name": "Tower B"})
    router = r.json()
    sub = await make_subscriber(router_id=router["id"])

    r = await client.delete(f"/api/v1/routers/{router['id']}", headers=admin_headers)
    assert r.status_code == 204

    r = await client.get(f"/api/v1/subscribers/{sub['id']}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["router_id"] is None


async def test_router_staff_only_see_routers(client, db):
    await add_user(db, 1, "tech", UserRole.ROUTERS)
    headers = await login(client, "tech", "secret123")

    assert (await client.get("/api/v1/routers/", headers=headers)).status_code == 200
    assert (await client.get("/api/v1/sales/", headers=headers)).status_code == 403


async def test_sales_crud_and_filters(client, admin_headers):
    r = await client.post("/api/v1/sales/", headers=admin_headers,
                          json={"sale_type": "wholesale", "count": 100, "price": 450, "sale_date": "2026-01-15"})
    assert r.status_code == 201
    wholesale = r.json()

    r = await client.post("/api/v1/sales/", headers=admin_headers,
                          json={"count": 5, "price": 25, "sale_date": "2026-02-03"})
    assert r.json()["sale_type"] == "retail"

    r = await client.get("/api/v1/sales/", headers=admin_headers)
    assert [s["sale_date"] for s in r.json()] == ["2026-02-03", "2026-01-15"]

    r = await client.get("/api/v1/sales/", params={"month": "2026-01"}, headers=admin_headers)
    assert [s["id"] for s in r.json()] == [wholesale["id"]]

    r = await client.get("/api/v1/sales/", params={"sale_type": "retail"}, headers=admin_headers)
    assert [s["count"] for s in r.json()] == [5]

    r = await client.get("/api/v1/sales/", params={"month": "2026-13"}, headers=admin_headers)
    assert r.status_code == 422

    r = await client.put(f"/api/v1/sales/{wholesale['id']}", headers=admin_headers, json={"count": 120})
    assert r.json()["count"] == 120
    assert r.json()["price"] == 450

    r = await client.delete(f"/api/v1/sales/{wholesale['id']}", headers=admin_headers)
    assert r.status_code == 204
    r = await client.get("/api/v1/sales/", headers=admin_headers)
    assert len(r.json()) == 1


async def test_packages_soft_delete(client, admin_headers):
    r = await client.post("/api/v1/packages/", headers=admin_headers,
                          json={"name": "Basic", "speed": 8, "price": 40})
    basic = r.json()
    await client.post("/api/v1/packages/", headers=admin_headers,
                      json={"name": "Slow", "speed": 4, "price": 25})

    r = await client.get("/api/v1/packages/", headers=admin_headers)
    assert [p["name"] for p in r.json()] == ["Slow", "Basic"]

    r = await client.patch(f"/api/v1/packages/{basic['id']}", headers=admin_headers, json={"price": 45})
    assert r.json()["price"] == 45

    r = await client.delete(f"/api/v1/packages/{basic['id']}", headers=admin_headers)
    assert r.status_code == 200

    r = await client.get("/api/v1/packages/", headers=admin_headers)
    assert [p["name"] for p in r.json()] == ["Slow"]
    r = await client.get("/api/v1/packages/", params={"include_inactive": True}, headers=admin_headers)
    assert len(r.json()) == 2


async def test_subscriber_clerks_manage_packages(client, db):
    await add_user(db, 1, "clerk", UserRole.SUBS)
    headers = await login(client, "clerk", "secret123")

    r = await client.post("/api/v1/packages/", headers=headers, json={"name": "X", "speed": 1, "price": 1})
    assert r.status_code == 201
    package = r.json()
    r = await client.patch(f"/api/v1/packages/{package['id']}", headers=headers, json={"price": 2})
    assert r.json()["price"] == 2
    r = await client.delete(f"/api/v1/packages/{package['id']}", headers=headers)
    assert r.status_code == 200


async def test_sales_staff_cannot_touch_packages(client, db):
    await add_user(db, 1, "seller", UserRole.SALES)
    headers = await login(client, "seller", "secret123")

    assert (await client.get("/api/v1/packages/", headers=headers)).status_code == 403
    r = await client.post("/api/v1/packages/", headers=headers, json={"name": "X", "speed": 1, "price": 1})
    assert r.status_code == 403


async def test_updates_refuse_null_on_required_fields(client, admin_headers):
    router = (await client.post("/api/v1/routers/", headers=admin_headers,
                                json={"name": "Tower C", "ip": "10.0.0.9"})).json()
    sale = (await client.post("/api/v1/sales/", headers=admin_headers,
                              json={"count": 3, "price": 15, "notes": "batch"})).json()
    package = (await client.post("/api/v1/packages/", headers=admin_headers,
                                 json={"name": "Mid", "speed": 16, "price": 60, "description": "x"})).json()

    r = await client.put(f"/api/v1/routers/{router['id']}", headers=admin_headers, json={"status": None})
    assert r.status_code == 422
    r = await client.put(f"/api/v1/sales/{sale['id']}", headers=admin_headers, json={"count": None})
    assert r.status_code == 422
    r = await client.patch(f"/api/v1/packages/{package['id']}", headers=admin_headers, json={"price": None})
    assert r.status_code == 422

    r = await client.put(f"/api/v1/routers/{router['id']}", headers=admin_headers, json={"ip": None})
    assert r.json()["ip"] is None
    r = await client.put(f"/api/v1/sales/{sale['id']}", headers=admin_headers, json={"notes": None})
    assert r.json()["notes"] is None
    assert r.json()["count"] == 3
    r = await client.patch(f"/api/v1/packages/{package['id']}", headers=admin_headers, json={"description": None})
    assert r.json()["description"] is None
