"""HTTP tests for the health endpoint."""


def test_health_reports_db_and_disabled_redis(client):
    resp = client.get("/api/v1/health")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "ok"
    assert body["db"] == "ok"
    assert body["redis"] == "disabled"


def test_unknown_route_is_problem_json(client):
    resp = client.get("/api/v1/nope")

    assert resp.status_code == 404
    assert resp.mimetype == "application/problem+json"
    assert resp.get_json()["code"] == "not_found"
