def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["data"]["status"] == "ok"


def test_db_ping(client):
    r = client.get("/db-ping")
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["db"] == "ok"
    assert data["value"] == 1


def test_unknown_route_uses_error_envelope(client):
    r = client.get("/api/does-not-exist")
    assert r.status_code == 404
    assert r.json()["success"] is False
