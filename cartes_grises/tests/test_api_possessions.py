from __future__ import annotations

from cartes_grises.db import get_conn


def test_create_list_update_delete(client):
    res = client.post(
        "/api/possessions",
        json={"owner_id": 1, "vehicle_id": 10, "start_date": "2020-01-01"},
    )
    assert res.status_code == 201
    assert res.json().get("message") == "ok"

    items = client.get("/api/possessions").json()["items"]
    assert items == [{"owner_id": 1, "vehicle_id": 10, "start_date": "2020-01-01", "end_date": None}]

    ex = client.get("/api/possessions/exists", params={"owner_id": 1, "vehicle_id": 10})
    assert ex.status_code == 200 and ex.json() == {"exists": True}

    upd = client.put("/api/possessions/1/10", json={"start_date": "2020-01-01", "end_date": "2022-01-01"})
    assert upd.status_code == 200

    with get_conn() as conn:
        row = conn.execute(
            "SELECT date_fin_propriete FROM POSSEDER WHERE id_proprietaire=1 AND id_vehicule=10"
        ).fetchone()
        assert row["date_fin_propriete"] == "2022-01-01"

    rm = client.delete("/api/possessions/1/10")
    assert rm.status_code == 200
    ex2 = client.get("/api/possessions/exists", params={"owner_id": 1, "vehicle_id": 10})
    assert ex2.json() == {"exists": False}


def test_duplicate_create_returns_409(client):
    body = {"owner_id": 2, "vehicle_id": 11, "start_date": "2019-06-01", "end_date": None}
    assert client.post("/api/possessions", json=body).status_code == 201
    again = client.post("/api/possessions", json={**body, "start_date": "2021-01-01"})
    assert again.status_code == 409

    items = client.get("/api/possessions").json()["items"]
    assert len(items) == 1 and items[0]["start_date"] == "2019-06-01"


def test_update_and_delete_missing_return_404(client):
    assert client.put("/api/possessions/2/20", json={"start_date": "2020-01-01"}).status_code == 404
    assert client.delete("/api/possessions/2/20").status_code == 404


def test_unknown_vehicle_returns_500(client):
    res = client.post("/api/possessions", json={"owner_id": 1, "vehicle_id": 999, "start_date": "2020-01-01"})
    assert res.status_code == 500
    assert res.json()["detail"] == "database_error"


def test_invalid_date_rejected_by_validation(client):
    res = client.post("/api/possessions", json={"owner_id": 1, "vehicle_id": 10, "start_date": "01/01/2020"})
    assert res.status_code == 422
