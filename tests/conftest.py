import os

# Lowest allowed cost factor keeps the suite fast
os.environ.setdefault("BCRYPT_ROUNDS", "10")

import mongomock
import pytest
from fastapi.testclient import TestClient

from jobportal.core.config import get_settings
from jobportal.db import mongodb
from jobportal.main import app

PASSWORD = "correct-horse"


@pytest.fixture(autouse=True)
def mongo_db(monkeypatch):
    """Fresh in-memory database with the production indexes."""
    db = mongomock.MongoClient()["job_portal_test"]
    monkeypatch.setattr(mongodb, "_db", db)
    mongodb.init_mongo_indexes()
    return db


@pytest.fixture(autouse=True)
def upload_dir(monkeypatch, tmp_path):
    path = tmp_path / "uploads"
    monkeypatch.setattr(get_settings(), "upload_dir", str(path))
    return path


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def signed_in():
    """Factory: register an account and return a client holding its session."""

    def _signed_in(name, email, role):
        browser = TestClient(app)
        response = browser.post("/api/auth/register", json={
            "name": name, "email": email, "password": PASSWORD, "role": role
        })
        assert response.status_code == 201, response.text
        response = browser.post("/api/auth/login", json={"email": email, "password": PASSWORD})
        assert response.status_code == 200, response.text
        return browser

    return _signed_in


@pytest.fixture
def seeker(signed_in):
    return signed_in("Ana", "ana@x.com", "seeker")


@pytest.fixture
def employer(signed_in):
    return signed_in("Bo", "bo@x.com", "employer")


def pdf_bytes(size: int = 1024) -> bytes:
    header = b"%PDF-1.4\n"
    return header + b"0" * max(size - len(header), 0)


@pytest.fixture
def make_pdf():
    return pdf_bytes
