import pytest

from noteful.utils.auth_hash import verify_password

USERNAME = "exampleUser"
PASSWORD = "examplePass"
FULLNAME = "Example User"
LENGTH_MESSAGE = "password must be at least 8 characters and no more than 72 characters in length"


def test_register_returns_public_fields_only(client, db):
    r = client.post("/users", json={"username": USERNAME, "password": PASSWORD, "fullname": FULLNAME})
    assert r.status_code == 201
    body = r.json()
    assert set(body) == {"id", "username", "fullname"}
    assert body["username"] == USERNAME
    assert body["fullname"] == FULLNAME
    assert r.headers["location"] == f"/users/{body['id']}"

    rec = db.users.find_by_username(USERNAME)
    assert rec is not None
    assert rec.id == body["id"]
    assert rec.password != PASSWORD
    assert verify_password(PASSWORD, rec.password)


@pytest.mark.parametrize(
    "payload, message",
    [
        ({"password": PASSWORD, "fullname": FULLNAME}, "Username field is required"),
        ({"username": USERNAME, "fullname": FULLNAME}, "Password field is required"),
        ({"username": "", "password": PASSWORD}, "Username field is required"),
        ({"username": 5, "password": PASSWORD}, "Expect 5 to be of data type 'string'"),
        ({"username": USERNAME, "password": 5}, "Expect 5 to be of data type 'string'"),
        ({"username": USERNAME, "password": PASSWORD, "fullname": True}, "Expect true to be of data type 'string'"),
        ({"username": " notTrimmed", "password": PASSWORD}, "Should not be whitespace at beginning or end of  notTrimmed"),
        ({"username": USERNAME, "password": " notTrimmed"}, "Should not be whitespace at beginning or end of  notTrimmed"),
        ({"username": USERNAME, "password": "1234567"}, LENGTH_MESSAGE),
        ({"username": USERNAME, "password": "x" * 73}, LENGTH_MESSAGE),
    ],
)
def test_register_rejects_invalid_fields(client, db, payload, message):
    r = client.post("/users", json=payload)
    assert r.status_code == 422
    assert r.json()["message"] == message
    assert r.json()["reason"] == "ValidationError"
    assert db.users.count() == 0


def test_password_of_72_characters_is_accepted(client):
    r = client.post("/users", json={"username": USERNAME, "password": "y" * 72})
    assert r.status_code == 201


def test_duplicate_username_is_rejected(client, db):
    payload = {"username": USERNAME, "password": PASSWORD, "fullname": FULLNAME}
    assert client.post("/users", json=payload).status_code == 201

    r = client.post("/users", json=payload)
    assert r.status_code == 400
    assert r.json()["message"] == "The username already exists"
    assert db.users.count() == 1


def test_fullname_is_trimmed_and_defaults_to_empty(client):
    r = client.post("/users", json={"username": USERNAME, "password": PASSWORD, "fullname": " untrimmed "})
    assert r.status_code == 201
    assert r.json()["fullname"] == "untrimmed"

    r = client.post("/users", json={"username": "other", "password": PASSWORD})
    assert r.status_code == 201
    assert r.json()["fullname"] == ""


def test_registration_is_recorded_in_event_log(client, db):
    r = client.post("/users", json={"username": USERNAME, "password": PASSWORD})
    user_id = r.json()["id"]
    assert [e["event_type"] for e in db.events.read(user_id)] == ["USER_REGISTERED"]
