"""Shared fixtures: a temporary SQLite file per test and an API client.

Invariants:
    - Every test gets its own database file under ``tmp_path``
    - ``client`` runs the application lifespan, so the schema exists and
      the connection pool is open while the test runs
"""

from contextlib import closing

import pytest
from fastapi.testclient import TestClient

from mithril_cars_api.app.core import db
from mithril_cars_api.app.core.config import settings
from mithril_cars_api.app.main import create_app


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    path = str(tmp_path / "cars.sqlite3")
    monkeypatch.setattr(settings, "database_url", path)
    return path


@pytest.fixture
def conn(db_path):
    """A plain connection to a freshly bootstrapped database."""
    db.init_db(db_path)
    with closing(db.get_connection(db_path)) as connection:
        yield connection


@pytest.fixture
def client(db_path):
    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def make_manufacturer(client):
    def _make(name="Acme"):
        res = client.post("/manufacturers", json={"name": name})
        assert res.status_code == 200, res.text
        return res.json()

    return _make


@pytest.fixture
def make_car(client):
    def _make(manufacturer_id, model_name="Rocket", model_year="1965"):
        res = client.post(
            "/cars",
            json={
                "manufacturer_id": manufacturer_id,
                "model_name": model_name,
                "model_year": model_year,
            },
        )
        assert res.status_code == 200, res.text
        return res.json()

    return _make
