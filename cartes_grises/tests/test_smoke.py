from cartes_grises import __version__


def test_health_and_version(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json().get("status") == "ok"

    v = client.get("/version")
    assert v.status_code == 200
    assert v.json() == {"app": "cartes-grises-api", "version": __version__}
