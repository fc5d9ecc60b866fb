"""Application wiring: index page, CORS, error envelope for framework and store errors."""

from contextlib import closing

from mithril_cars_api.app.core import db


def test_index_lists_endpoints(client):
    res = client.get("/")
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/html")
    assert "<h2>Mithril Cars API</h2>" in res.text
    assert "<b>/manufacturers/:id</b>" in res.text
    assert res.text.count("<li") == 10


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_cors_allows_any_origin(client):
    res = client.get("/cars", headers={"Origin": "http://example.com"})
    assert res.headers["access-control-allow-origin"] == "*"


def test_cors_preflight(client):
    res = client.options(
        "/cars/1",
        headers={"Origin": "http://example.com", "Access-Control-Request-Method": "DELETE"},
    )
    assert res.status_code == 200
    assert res.headers["access-control-allow-origin"] == "*"


def test_unknown_route_uses_error_envelope(client):
    res = client.get("/trucks")
    assert res.status_code == 404
    assert res.json() == {"error": {"text": "Not Found"}}


def test_method_not_allowed_uses_error_envelope(client):
    res = client.patch("/cars/1", json={})
    assert res.status_code == 405
    assert res.json() == {"error": {"text": "Method Not Allowed"}}


def test_store_error_passes_driver_message(client, db_path):
    with closing(db.get_connection(db_path)) as conn:
        conn.execute("DROP TABLE cars")
        conn.commit()

    res = client.get("/cars")
    assert res.status_code == 500
    assert res.json() == {"error": {"text": "no such table: cars"}}


def test_client_errors_carry_cors_headers(client):
    res = client.post("/cars", json={}, headers={"Origin": "http://example.com"})
    assert res.status_code == 400
    assert res.headers["access-control-allow-origin"] == "*"


def test_store_errors_carry_cors_headers(client, db_path):
    with closing(db.get_connection(db_path)) as conn:
        conn.execute("DROP TABLE cars")
        conn.commit()

    res = client.get("/cars", headers={"Origin": "http://example.com"})
    assert res.status_code == 500
    assert res.headers["access-control-allow-origin"] == "*"


def test_lifespan_opens_and_closes_pool(db_path):
    from fastapi.testclient import TestClient
    from sqlalchemy.pool import QueuePool

    from mithril_cars_api.app.main import create_app

    with TestClient(create_app()):
        assert isinstance(db.pool(), QueuePool)
        with db.connection() as conn:
            files = [row["file"] for row in conn.execute("PRAGMA database_list")]
        assert db_path in files
    assert db._pool is None
