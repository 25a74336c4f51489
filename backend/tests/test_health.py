import os, sys

from fastapi.testclient import TestClient

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
os.environ.setdefault("ALLOWED_ORIGINS", "http://localhost:5173")
from pinsheet.main import app

client = TestClient(app)


def test_root_healthz():
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_prefixed_healthz():
    resp = client.get("/api/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_api_root():
    resp = client.get("/api")
    assert resp.status_code == 200
    assert "/docs" in resp.json()["message"]
