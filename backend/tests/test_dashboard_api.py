from __future__ import annotations

from decimal import Decimal

from backend.app import models


def _seed_june(db_session):
    db_session.add_all(
        [
            models.SportStat(year=2025, month=6, sport="padel_indoor", courts_rented=40, total_income=Decimal("3000")),
            models.SportStat(year=2025, month=6, sport="futbol", courts_rented=25, total_income=Decimal("2000")),
            models.FoodStat(year=2025, month=6, total_income=Decimal("10000"), total_expense=Decimal("4000")),
            models.SportStat(year=2025, month=5, sport="padel_indoor", courts_rented=50, total_income=Decimal("4000")),
        ]
    )
    db_session.commit()


def test_dashboard_requires_a_session(anonymous_client):
    response = anonymous_client.get("/dashboard/overview")

    assert response.status_code == 401


def test_overview_defaults_to_current_month(client, db_session, fixed_today):
    _seed_june(db_session)

    response = client.get("/dashboard/overview")

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["failed_sectors"] == []
    data = payload["data"]
    assert data["period_key"] == "2025-06"
    assert data["name"] == "jun"
    assert Decimal(str(data["sports"])) == Decimal("5000")
    assert Decimal(str(data["food"])) == Decimal("6000")
    assert Decimal(str(data["total"])) == Decimal("11000")
    assert payload["previous"] is None


def test_overview_with_variance(client, db_session, fixed_today):
    _seed_june(db_session)

    response = client.get("/dashboard/overview", params={"year": 2025, "month": 6, "include_variance": True})

    payload = response.json()
    assert payload["previous"]["period_key"] == "2025-05"
    assert Decimal(str(payload["variances"]["sports"])) == Decimal("25.00")


def test_overview_for_unknown_month_is_zero(client, fixed_today):
    response = client.get("/dashboard/overview", params={"year": 2025, "month": 13})

    assert response.status_code == 200
    assert Decimal(str(response.json()["data"]["total"])) == Decimal("0")


def test_evolution_range(client, db_session, fixed_today):
    db_session.add(models.ClothingStat(year=2025, month=5, total_income=Decimal("750")))
    db_session.commit()

    response = client.get("/dashboard/evolution", params={"range": 2})

    assert response.status_code == 200
    payload = response.json()
    assert payload["range"] == 2
    items = payload["items"]
    assert [item["period_key"] for item in items] == ["2025-05", "2025-06"]
    assert [item["name"] for item in items] == ["may", "jun"]
    assert Decimal(str(items[0]["clothing"])) == Decimal("750")
    assert Decimal(str(items[1]["total"])) == Decimal("0")


def test_evolution_defaults_to_twelve_months(client, fixed_today):
    items = client.get("/dashboard/evolution").json()["items"]

    assert len(items) == 12
    assert items[0]["period_key"] == "2024-07"
    assert items[-1]["period_key"] == "2025-06"


def test_evolution_rejects_empty_range(client, fixed_today):
    response = client.get("/dashboard/evolution", params={"range": 0})

    assert response.status_code == 422


def test_summary_is_cached_until_a_write(client, db_session, fixed_today):
    _seed_june(db_session)

    first = client.get("/dashboard/summary", params={"range": 3})
    second = client.get("/dashboard/summary", params={"range": 3})

    assert first.json()["cached"] is False
    assert second.json()["cached"] is True
    assert second.json()["overview"] == first.json()["overview"]

    response = client.post(
        "/clothing/",
        json={"year": 2025, "month": 6, "total_income": "500"},
    )
    assert response.status_code == 201

    third = client.get("/dashboard/summary", params={"range": 3})
    assert third.json()["cached"] is False
    assert Decimal(str(third.json()["overview"]["data"]["clothing"])) == Decimal("500")


def test_summary_cache_is_keyed_by_parameters(client, fixed_today):
    client.get("/dashboard/summary", params={"range": 3})

    other_range = client.get("/dashboard/summary", params={"range": 6})
    refreshed = client.get("/dashboard/summary", params={"range": 3, "refresh": True})

    assert other_range.json()["cached"] is False
    assert refreshed.json()["cached"] is False


def test_refresh_endpoint_drops_the_cache(client, fixed_today):
    client.get("/dashboard/summary")

    response = client.post("/dashboard/refresh")

    assert response.status_code == 204
    assert client.get("/dashboard/summary").json()["cached"] is False


def test_month_report_lists_rows_per_sector(client, db_session):
    _seed_june(db_session)

    response = client.get("/dashboard/report", params={"year": 2025, "month": 6})

    assert response.status_code == 200
    payload = response.json()
    assert payload["month_name"] == "Junio"
    assert set(payload["sectors"]) == {"sports", "food", "clothing", "tenants", "events"}
    assert len(payload["sectors"]["sports"]) == 2
    assert payload["sectors"]["events"] == []
    assert Decimal(str(payload["summary"]["total"])) == Decimal("11000")


def test_month_report_csv_export(client, db_session):
    _seed_june(db_session)

    response = client.get("/dashboard/report.csv", params={"year": 2025, "month": 6})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "reporte-2025-06.csv" in response.headers["content-disposition"]
    lines = response.text.splitlines()
    assert lines[0].startswith("Reporte,2025-06,Junio")
    assert "sector,period,member,income,expense,net,units" in lines
    assert any(line.startswith("food,2025-06,,10000") for line in lines)


def test_variance_endpoint(client):
    response = client.get(
        "/dashboard/variance",
        params={"current": "-50", "previous": "-100", "allow_negative": True},
    )

    assert response.status_code == 200
    assert Decimal(str(response.json()["percentage"])) == Decimal("50.00")


def test_sector_summary_endpoint(client, db_session, fixed_today):
    _seed_june(db_session)

    response = client.get("/sectors/sports/summary")

    assert response.status_code == 200
    payload = response.json()
    assert payload["period_key"] == "2025-06"
    assert Decimal(str(payload["variation"])) == Decimal("25.00")
    assert [member["member"] for member in payload["members"]] == ["padel_indoor", "padel_outdoor", "futbol"]


def test_sector_evolution_endpoint(client, db_session, fixed_today):
    _seed_june(db_session)

    response = client.get("/sectors/food/evolution", params={"range": 2})

    items = response.json()["items"]
    assert [item["period_key"] for item in items] == ["2025-05", "2025-06"]
    assert Decimal(str(items[1]["net"])) == Decimal("6000")


def test_unknown_sector_is_not_found(client):
    assert client.get("/sectors/casino/summary").status_code == 404


def test_sector_summary_keeps_an_explicit_month_zero(client, db_session, fixed_today):
    _seed_june(db_session)

    response = client.get("/sectors/sports/summary", params={"year": 2025, "month": 0})

    assert response.status_code == 200
    payload = response.json()
    assert payload["period_key"] == "2025-00"
    assert Decimal(str(payload["net"])) == Decimal("0")
    assert all(Decimal(str(member["income"])) == Decimal("0") for member in payload["members"])


def test_year_evolution_endpoint(client, db_session, fixed_today):
    _seed_june(db_session)

    response = client.get("/dashboard/evolution/year", params={"year": 2025})

    assert response.status_code == 200
    payload = response.json()
    assert payload["year"] == 2025
    assert [item["period_key"] for item in payload["items"]][:2] == ["2025-01", "2025-02"]
    assert len(payload["items"]) == 12
    assert Decimal(str(payload["items"][4]["sports"])) == Decimal("4000")
    assert Decimal(str(payload["items"][5]["total"])) == Decimal("11000")
    assert Decimal(str(payload["items"][11]["total"])) == Decimal("0")


def test_year_evolution_defaults_to_current_year(client, fixed_today):
    payload = client.get("/dashboard/evolution/year").json()

    assert payload["year"] == 2025
    assert payload["items"][0]["period_key"] == "2025-01"


def test_sector_year_evolution_endpoint(client, db_session, fixed_today):
    _seed_june(db_session)

    response = client.get("/sectors/sports/evolution/year", params={"year": 2025})

    assert response.status_code == 200
    items = response.json()["items"]
    assert len(items) == 12
    assert Decimal(str(items[5]["members"]["futbol"])) == Decimal("2000")
    assert items[5]["units"] == 65
    assert client.get("/sectors/casino/evolution/year").status_code == 404
