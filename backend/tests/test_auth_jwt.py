from noteful.utils.jwt_auth import create_access_token, decode_token


def test_login_returns_token_for_user(client, login):
    user_id, headers = login("userA")
    token = headers["Authorization"].split(" ", 1)[1]
    payload = decode_token(token)
    assert payload["sub"] == user_id
    assert payload["user"] == {"id": user_id, "username": "userA", "fullname": "userA"}
    assert "password" not in payload["user"]


def test_login_wrong_password(client, login):
    login("userA")
    r = client.post("/auth/login", json={"username": "userA", "password": "wrongwrongwrong"})
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid credentials"


def test_login_unknown_user_looks_like_wrong_password(client):
    r = client.post("/auth/login", json={"username": "ghost", "password": "examplePass"})
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid credentials"


def test_login_missing_fields(client):
    r = client.post("/auth/login", json={"username": "userA"})
    assert r.status_code == 400


def test_refresh_issues_token_for_same_user(client, login):
    user_id, headers = login("userA")
    r = client.post("/auth/refresh", headers=headers)
    assert r.status_code == 200
    assert decode_token(r.json()["authToken"])["sub"] == user_id


def test_refresh_rejects_token_of_unknown_user(client, data_dir):
    token = create_access_token(subject="00000000-0000-4000-8000-000000000000")
    r = client.post("/auth/refresh", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401


def test_expired_token_is_rejected(client, login, monkeypatch):
    login("userA")
    monkeypatch.setenv("JWT_EXP_MINUTES", "-1")
    r = client.post("/auth/login", json={"username": "userA", "password": "examplePass"})
    token = r.json()["authToken"]

    r = client.get("/notes", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid or expired token"


def test_protected_routes_require_token(client):
    for path in ("/notes", "/folders", "/tags"):
        r = client.get(path)
        assert r.status_code == 401
        assert r.json()["message"] == "Missing credentials"

    r = client.get("/notes", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401

    r = client.post("/auth/refresh")
    assert r.status_code == 401
