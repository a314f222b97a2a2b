from datetime import datetime, timedelta

import pytest


def _case(client, case_id):
    r = client.get(f"/api/cases/{case_id}")
    assert r.status_code == 200, r.text
    return r.json()


def test_create_case_scenario(client, create_seller, create_case):
    ana = create_seller(name="Ana", commission_rate=0.3)
    case_id = create_case(
        ana,
        items=[{"description": "Ring", "price": 100}, {"description": "Necklace", "price": 50}],
        total_gross=150,
        commission_value=45,
        estimated_profit=105,
    )

    cases = client.get("/api/cases").json()
    assert len(cases) == 1
    case = cases[0]
    assert case["id"] == case_id
    assert case["seller_name"] == "Ana"
    assert case["status"] == "InField"
    assert case["photo"] == "data:image/jpeg;base64,AAAA"
    assert (case["total_gross"], case["commission_value"], case["estimated_profit"]) == (150, 45, 105)

    delivery = datetime.fromisoformat(case["delivery_date"])
    returned = datetime.fromisoformat(case["return_date"])
    assert returned - delivery == timedelta(days=60)

    items = client.get(f"/api/cases/{case_id}/items").json()
    assert [(i["description"], i["price"]) for i in items] == [("Ring", 100), ("Necklace", 50)]
    assert all(i["case_id"] == case_id for i in items)


def test_supplied_totals_are_stored_verbatim(client, create_seller, create_case):
    seller_id = create_seller(commission_rate=0.3)
    case_id = create_case(
        seller_id,
        items=[{"description": "Ring", "price": 100}],
        total_gross=99.99,
        commission_value=12.34,
        estimated_profit=1.5,
    )

    case = _case(client, case_id)
    assert (case["total_gross"], case["commission_value"], case["estimated_profit"]) == (99.99, 12.34, 1.5)


def test_missing_totals_are_computed_from_items_and_rate(client, create_seller, create_case):
    seller_id = create_seller(commission_rate=0.35)
    case_id = create_case(
        seller_id,
        items=[
            {"description": "Ring", "price": 100},
            {"description": "Bracelet", "price": None},
            {"description": "Necklace", "price": 60},
        ],
    )

    case = _case(client, case_id)
    assert case["total_gross"] == pytest.approx(160)
    assert case["commission_value"] == pytest.approx(56)
    assert case["estimated_profit"] == pytest.approx(104)
    assert [i["price"] for i in case["items"]] == [100, None, 60]


def test_create_case_for_unknown_seller(client):
    r = client.post("/api/cases", json={"seller_id": 999, "items": []})
    assert r.status_code == 404
    assert client.get("/api/cases").json() == []


def test_cases_are_listed_newest_first(client, create_seller, create_case):
    seller_id = create_seller()
    first = create_case(seller_id)
    second = create_case(seller_id)

    assert [c["id"] for c in client.get("/api/cases").json()] == [second, first]


def test_read_missing_case(client):
    assert client.get("/api/cases/123").status_code == 404


def test_delete_case_removes_items(client, create_seller, create_case):
    seller_id = create_seller()
    case_id = create_case(seller_id, items=[{"description": "Ring", "price": 10}, {"description": "Chain", "price": 5}])

    r = client.delete(f"/api/cases/{case_id}")
    assert r.status_code == 200
    assert r.json() == {"success": True}
    assert client.get(f"/api/cases/{case_id}/items").json() == []
    assert client.get("/api/cases").json() == []

    assert client.delete(f"/api/cases/{case_id}").status_code == 404


def test_replace_case_overwrites_seller_totals_and_items(client, create_seller, create_case):
    ana = create_seller(name="Ana")
    maria = create_seller(name="Maria")
    case_id = create_case(ana, items=[{"description": "Ring", "price": 10}, {"description": "Chain", "price": 5}])

    r = client.put(
        f"/api/cases/{case_id}",
        json={
            "seller_id": maria,
            "items": [{"description": "Earrings", "price": 40}],
            "total_gross": 40,
            "commission_value": 12,
            "estimated_profit": 28,
        },
    )
    assert r.status_code == 200
    assert r.json() == {"success": True}

    case = _case(client, case_id)
    assert case["seller_id"] == maria
    assert case["seller_name"] == "Maria"
    assert case["status"] == "InField"
    assert (case["total_gross"], case["commission_value"], case["estimated_profit"]) == (40, 12, 28)
    assert [i["description"] for i in case["items"]] == ["Earrings"]


def test_replace_with_empty_items_keeps_case(client, create_seller, create_case):
    seller_id = create_seller()
    case_id = create_case(seller_id, items=[{"description": "Ring", "price": 10}])

    r = client.put(
        f"/api/cases/{case_id}",
        json={"seller_id": seller_id, "items": [], "total_gross": 0, "commission_value": 0, "estimated_profit": 0},
    )
    assert r.status_code == 200
    assert client.get(f"/api/cases/{case_id}/items").json() == []
    assert [c["id"] for c in client.get("/api/cases").json()] == [case_id]


def test_replace_missing_case(client, create_seller):
    seller_id = create_seller()
    r = client.put("/api/cases/77", json={"seller_id": seller_id, "items": [{"description": "Ring", "price": 1}]})
    assert r.status_code == 404


def test_status_change_allows_any_transition(client, create_seller, create_case):
    seller_id = create_seller()
    case_id = create_case(seller_id)

    assert client.patch(f"/api/cases/{case_id}/status", json={"status": "Finalized"}).json() == {"success": True}
    assert _case(client, case_id)["status"] == "Finalized"

    assert client.patch(f"/api/cases/{case_id}/status", json={"status": "InField"}).status_code == 200
    assert _case(client, case_id)["status"] == "InField"


def test_status_change_validation(client, create_seller, create_case):
    seller_id = create_seller()
    case_id = create_case(seller_id)

    assert client.patch(f"/api/cases/{case_id}/status", json={"status": "Lost"}).status_code == 422
    assert client.patch("/api/cases/999/status", json={"status": "Finalized"}).status_code == 404


def test_bulk_delete_by_status(client, create_seller, create_case):
    seller_id = create_seller()
    in_field = [create_case(seller_id, items=[{"description": "Ring", "price": 1}]) for _ in range(3)]
    finalized = create_case(seller_id)
    client.patch(f"/api/cases/{finalized}/status", json={"status": "Finalized"})

    r = client.delete("/api/cases/status/InField")
    assert r.status_code == 200
    assert r.json() == {"success": True, "changes": 3}

    remaining = client.get("/api/cases").json()
    assert [c["id"] for c in remaining] == [finalized]
    for case_id in in_field:
        assert client.get(f"/api/cases/{case_id}/items").json() == []

    assert client.delete("/api/cases/status/InField").json() == {"success": True, "changes": 0}
    assert client.delete("/api/cases/status/Unknown").status_code == 422


def test_full_reset_empties_every_table(client, create_seller, create_case):
    seller_id = create_seller()
    case_id = create_case(seller_id, items=[{"description": "Ring", "price": 1}])

    r = client.delete("/api/system/reset")
    assert r.status_code == 200
    assert r.json() == {"success": True}

    assert client.get("/api/sellers").json() == []
    assert client.get("/api/cases").json() == []
    assert client.get(f"/api/cases/{case_id}/items").json() == []


def test_whatsapp_link(client, create_seller, create_case):
    seller_id = create_seller(name="Ana", phone="+55 (11) 98888-7777")
    case_id = create_case(
        seller_id,
        items=[{"description": "Ring", "price": 100}, {"description": "Chain", "price": None}],
        total_gross=100,
        commission_value=30,
        estimated_profit=70,
    )

    r = client.get(f"/api/cases/{case_id}/whatsapp-link")
    assert r.status_code == 200
    body = r.json()
    assert body["phone"] == "5511988887777"
    assert body["url"].startswith("https://wa.me/5511988887777?text=")
    assert "Vendedora: Ana" in body["message"]
    assert "- Ring: R$ 100.00" in body["message"]
    assert "- Chain: sin precio" in body["message"]
    assert "Tu comisión: R$ 30.00" in body["message"]

    assert client.get("/api/cases/999/whatsapp-link").status_code == 404


def test_unknown_api_route(client):
    r = client.get("/api/does-not-exist")
    assert r.status_code == 404
    assert r.json() == {"detail": "API route not found"}

    assert client.delete("/api/sellers/1/extra").status_code == 404


@pytest.fixture
def break_item_insert(monkeypatch):
    """Devuelve una función que hace fallar la inserción de items (description NOT NULL)."""
    from app.crud import case_crud
    from app.db.models.case_model import CaseItem

    def _add_invalid_items(db, case_id, items):
        db.add(CaseItem(case_id=case_id, description=None, price=1))

    def _break():
        monkeypatch.setattr(case_crud, "_add_items", _add_invalid_items)
    return _break


def test_create_case_rolls_back_when_items_fail(client, create_seller, break_item_insert):
    seller_id = create_seller()
    break_item_insert()

    r = client.post("/api/cases", json={"seller_id": seller_id, "items": [{"description": "Ring", "price": 1}]})
    assert r.status_code == 500
    assert r.json() == {"detail": "Error creating case"}
    assert client.get("/api/cases").json() == []


def test_replace_case_rolls_back_when_items_fail(client, create_seller, create_case, break_item_insert):
    ana = create_seller(name="Ana")
    maria = create_seller(name="Maria")
    case_id = create_case(
        ana,
        items=[{"description": "Ring", "price": 10}, {"description": "Chain", "price": 5}],
        total_gross=15,
        commission_value=4.5,
        estimated_profit=10.5,
    )

    break_item_insert()

    r = client.put(
        f"/api/cases/{case_id}",
        json={"seller_id": maria, "items": [{"description": "Earrings", "price": 40}], "total_gross": 40},
    )
    assert r.status_code == 500
    assert r.json() == {"detail": "Error updating case"}

    case = _case(client, case_id)
    assert case["seller_id"] == ana
    assert (case["total_gross"], case["commission_value"], case["estimated_profit"]) == (15, 4.5, 10.5)
    assert [(i["description"], i["price"]) for i in case["items"]] == [("Ring", 10), ("Chain", 5)]


def test_reset_rolls_back_on_store_error(client, create_seller, create_case, monkeypatch):
    seller_id = create_seller()
    create_case(seller_id, items=[{"description": "Ring", "price": 1}])

    from sqlalchemy.exc import OperationalError
    from app.crud import case_crud

    async def _failing_reset(db):
        await db.execute(case_crud.delete(case_crud.CaseItem))
        raise OperationalError("DELETE FROM cases", {}, Exception("database is locked"))

    monkeypatch.setattr(case_crud, "reset_all", _failing_reset)

    r = client.delete("/api/system/reset")
    assert r.status_code == 500
    assert r.json() == {"detail": "Error resetting system"}

    cases = client.get("/api/cases").json()
    assert len(cases) == 1
    assert len(client.get(f"/api/cases/{cases[0]['id']}/items").json()) == 1
    assert len(client.get("/api/sellers").json()) == 1
