import os

import pytest
from fastapi.testclient import TestClient

# cheap hashes for tests; read when auth_hash is first imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "dev-secret-for-tests")

from noteful.storage.database import Database  # noqa: E402

PASSWORD = "examplePass"


@pytest.fixture()
def data_dir(tmp_path, monkeypatch):
    # isolate data dir per test
    monkeypatch.setenv("APP_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("JWT_SECRET", "dev-secret-for-tests")
    monkeypatch.setenv("JWT_EXP_MINUTES", "15")
    return tmp_path


@pytest.fixture()
def client(data_dir):
    from noteful.main import app
    return TestClient(app)


@pytest.fixture()
def db(data_dir):
    return Database.open(data_dir)


@pytest.fixture()
def login(client):
    """Register `username` and return (user_id, auth headers)."""

    def _login(username: str, password: str = PASSWORD):
        r = client.post("/users", json={"username": username, "password": password, "fullname": username})
        assert r.status_code == 201, r.text
        user_id = r.json()["id"]
        r = client.post("/auth/login", json={"username": username, "password": password})
        assert r.status_code == 200, r.text
        return user_id, {"Authorization": f"Bearer {r.json()['authToken']}"}

    return _login


@pytest.fixture()
def alice(login):
    return login("alice")


@pytest.fixture()
def bob(login):
    return login("bob")
