from __future__ import annotations

from decimal import Decimal

from backend.app import models


def test_sports_batch_upserts_by_discipline(client, db_session):
    payload = {
        "items": [
            {"year": 2025, "month": 6, "sport": "Padel Indoor", "courts_rented": 40, "total_income": "3000"},
            {"year": 2025, "month": 6, "sport": "futbol", "courts_rented": 25, "total_income": "2000"},
        ]
    }
    created = client.post("/sports/", json=payload)
    assert created.status_code == 201
    assert [item["sport"] for item in created.json()] == ["padel_indoor", "futbol"]

    payload["items"][0]["total_income"] = "3500"
    updated = client.post("/sports/", json={"items": payload["items"][:1]})
    assert updated.status_code == 201

    rows = db_session.query(models.SportStat).filter_by(year=2025, month=6).all()
    assert len(rows) == 2
    indoor = next(row for row in rows if row.sport == "padel_indoor")
    assert indoor.total_income == Decimal("3500")


def test_sports_rejects_unknown_discipline_and_bad_month(client):
    response = client.post(
        "/sports/",
        json={"items": [{"year": 2025, "month": 13, "sport": "tenis", "total_income": "10"}]},
    )

    assert response.status_code == 422


def test_sports_listing_and_existence(client):
    client.post(
        "/sports/",
        json={
            "items": [
                {"year": 2025, "month": 5, "sport": "futbol", "courts_rented": 3, "total_income": "300"},
                {"year": 2025, "month": 6, "sport": "futbol", "courts_rented": 4, "total_income": "400"},
            ]
        },
    )

    listing = client.get("/sports/").json()
    assert listing["total"] == 2
    assert [item["month"] for item in listing["items"]] == [6, 5]

    filtered = client.get("/sports/", params={"year": 2025, "month": 5}).json()
    assert filtered["total"] == 1

    assert client.get("/sports/exists", params={"year": 2025, "month": 6}).json()["exists"] is True
    assert client.get("/sports/exists", params={"year": 2024, "month": 6}).json()["exists"] is False


def test_sports_update_and_delete(client):
    created = client.post(
        "/sports/",
        json={"items": [{"year": 2025, "month": 6, "sport": "futbol", "courts_rented": 4, "total_income": "400"}]},
    ).json()[0]

    updated = client.put(f"/sports/{created['id']}", json={"courts_rented": 10})
    assert updated.status_code == 200
    assert updated.json()["courts_rented"] == 10
    assert Decimal(str(updated.json()["total_income"])) == Decimal("400")

    assert client.delete(f"/sports/{created['id']}").status_code == 204
    assert client.delete(f"/sports/{created['id']}").status_code == 404


def test_food_crud(client):
    payload = {
        "year": 2025,
        "month": 6,
        "total_income": "10000",
        "total_expense": "4000",
        "raw_materials_expense": "2000",
        "salaries_expense": "2000",
    }
    created = client.post("/food/", json=payload)
    assert created.status_code == 201
    stat_id = created.json()["id"]

    duplicate = client.post("/food/", json=payload)
    assert duplicate.status_code == 409

    period = client.get("/food/period", params={"year": 2025, "month": 6})
    assert period.status_code == 200
    assert period.json()["id"] == stat_id
    assert client.get("/food/period", params={"year": 2025, "month": 7}).status_code == 404
    assert client.get("/food/exists", params={"year": 2025, "month": 6}).json()["exists"] is True

    updated = client.put(f"/food/{stat_id}", json={"total_expense": "4500"})
    assert Decimal(str(updated.json()["total_expense"])) == Decimal("4500")

    assert client.delete(f"/food/{stat_id}").status_code == 204
    assert client.get("/food/").json()["total"] == 0


def test_food_rejects_negative_amounts(client):
    response = client.post(
        "/food/",
        json={"year": 2025, "month": 6, "total_income": "-1", "total_expense": "0"},
    )

    assert response.status_code == 422


def test_clothing_crud(client):
    created = client.post("/clothing/", json={"year": 2025, "month": 6, "total_income": "800"})
    assert created.status_code == 201
    stat_id = created.json()["id"]

    assert client.post("/clothing/", json={"year": 2025, "month": 6, "total_income": "1"}).status_code == 409

    updated = client.put(f"/clothing/{stat_id}", json={"total_income": "950"})
    assert Decimal(str(updated.json()["total_income"])) == Decimal("950")

    listing = client.get("/clothing/", params={"year": 2025, "month": 6}).json()
    assert listing["total"] == 1

    assert client.delete(f"/clothing/{stat_id}").status_code == 204
    assert client.put(f"/clothing/{stat_id}", json={"total_income": "1"}).status_code == 404


def test_tenant_lifecycle(client, db_session):
    created = client.post("/tenants/", json={"name": "Kiosco"})
    assert created.status_code == 201
    tenant_id = created.json()["id"]

    assert client.post("/tenants/", json={"name": "Kiosco"}).status_code == 409
    assert client.post("/tenants/", json={"name": "   "}).status_code == 400

    income = client.put(
        "/tenants/incomes",
        json={"tenant_id": tenant_id, "year": 2025, "month": 6, "total_income": "800"},
    )
    assert income.status_code == 200
    assert income.json()["tenant_name"] == "Kiosco"

    replaced = client.put(
        "/tenants/incomes",
        json={"tenant_id": tenant_id, "year": 2025, "month": 6, "total_income": "850"},
    )
    assert replaced.json()["id"] == income.json()["id"]

    client.put(
        "/tenants/incomes",
        json={"tenant_id": tenant_id, "year": 2025, "month": 5, "total_income": "700"},
    )
    incomes = client.get("/tenants/incomes").json()["items"]
    assert [(item["month"], Decimal(str(item["total_income"]))) for item in incomes] == [
        (6, Decimal("850")),
        (5, Decimal("700")),
    ]

    assert client.delete(f"/tenants/{tenant_id}").status_code == 204
    assert client.get("/tenants/").json()["items"] == []
    assert db_session.query(models.TenantMonthlyIncome).count() == 0


def test_tenant_income_requires_existing_tenant(client):
    response = client.put(
        "/tenants/incomes",
        json={"tenant_id": "not-a-uuid", "year": 2025, "month": 6, "total_income": "10"},
    )

    assert response.status_code == 404
    assert client.delete("/tenants/not-a-uuid").status_code == 404
    assert client.delete("/tenants/incomes/not-a-uuid").status_code == 404


def test_event_income_feeds_the_overview(client, fixed_today):
    event_id = client.post("/events/", json={"name": "Torneo de verano"}).json()["id"]
    response = client.put(
        "/events/incomes",
        json={"event_id": event_id, "year": 2025, "month": 6, "total_income": "2500"},
    )
    assert response.status_code == 200
    assert response.json()["event_name"] == "Torneo de verano"

    overview = client.get("/dashboard/overview").json()
    assert Decimal(str(overview["data"]["events"])) == Decimal("2500")

    summary = client.get("/sectors/events/summary").json()
    assert [member["member"] for member in summary["members"]] == ["Torneo de verano"]

    income_id = response.json()["id"]
    assert client.delete(f"/events/incomes/{income_id}").status_code == 204
    assert client.get("/events/incomes", params={"event_id": event_id}).json()["items"] == []
