"""User registration: field validation, hashing and the unique-username write."""
from __future__ import annotations

import logging
from typing import Any

from noteful.errors import ConflictError, RegistrationError
from noteful.storage.database import Database
from noteful.storage.documents import DuplicateKeyError
from noteful.storage.event_log import Event
from noteful.storage.users_store import UserRecord
from noteful.utils.auth_hash import hash_password

log = logging.getLogger("noteful.users")

REQUIRED_FIELDS = ("username", "password")
STRING_FIELDS = ("username", "password", "fullname")
TRIMMED_FIELDS = ("username", "password")
# bcrypt only looks at the first 72 bytes
SIZED_FIELDS = {
    "username": (1, None),
    "password": (8, 72),
}


def _js_str(value: Any) -> str:
    # render values the way they appear in the JSON body
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return "null"
    return str(value)


def _size_message(field: str, low: int, high: int | None) -> str:
    if high is None:
        return f"{field} must be at least {low} characters in length"
    return f"{field} must be at least {low} characters and no more than {high} characters in length"


def validate_registration(body: dict[str, Any]) -> None:
    for field in REQUIRED_FIELDS:
        if field not in body or body[field] in ("", None):
            raise RegistrationError(f"{field.capitalize()} field is required", field)

    for field in STRING_FIELDS:
        if field in body and not isinstance(body[field], str):
            raise RegistrationError(f"Expect {_js_str(body[field])} to be of data type 'string'", field)

    for field in TRIMMED_FIELDS:
        if body[field].strip() != body[field]:
            raise RegistrationError(f"Should not be whitespace at beginning or end of {body[field]}", field)

    for field, (low, high) in SIZED_FIELDS.items():
        size = len(body[field])
        if size < low or (high is not None and size > high):
            raise RegistrationError(_size_message(field, low, high), field)


def register_user(db: Database, body: dict[str, Any]) -> UserRecord:
    validate_registration(body)
    fullname = (body.get("fullname") or "").strip()
    try:
        user = db.users.create(
            username=body["username"],
            password_hash=hash_password(body["password"]),
            fullname=fullname,
        )
    except DuplicateKeyError:
        raise ConflictError("The username already exists") from None

    db.events.emit(Event(event_type="USER_REGISTERED", user_id=user.id, target_id=user.id))
    log.info("user registered user_id=%s", user.id)
    return user
