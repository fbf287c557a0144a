"""
Application factory and system endpoint tests.
"""

import pytest

from medkit import create_app


def test_index(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.get_data(as_text=True) == "Server is running!"


def test_health_reports_kit_counts(client, dummy_kits):
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["status"] == "healthy"
    assert data["database"]["details"]["kits"] == {"available": 4, "sold": 0}


def test_cors_header(client):
    resp = client.get("/kits", headers={"Origin": "http://localhost:3000"})
    assert resp.headers["Access-Control-Allow-Origin"] == "*"


def test_unreachable_database_exits(tmp_path):
    uri = f"sqlite:///{tmp_path / 'missing' / 'medkit.sqlite3'}"
    with pytest.raises(SystemExit) as exc:
        create_app({"SQLALCHEMY_DATABASE_URI": uri})
    assert exc.value.code == 1
