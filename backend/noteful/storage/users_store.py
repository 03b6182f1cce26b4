from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Optional

from noteful.storage.documents import (
    DuplicateKeyError,
    _atomic_write_json,
    _safe_user_dir,
    _utc_now_iso,
    _write_lock,
)
from noteful.utils.ids import new_id


@dataclass(frozen=True)
class UserRecord:
    id: str
    username: str
    password: str
    fullname: str
    created_at: str

    def to_public(self) -> dict[str, Any]:
        """The only view of a user that leaves the API (never the hash)."""
        return {"id": self.id, "username": self.username, "fullname": self.fullname}


class UsersStore:
    def __init__(self, base_dir: Path):
        self.base_dir = base_dir

    def _user_path(self, user_id: str) -> Path:
        return _safe_user_dir(self.base_dir, user_id) / "user.json"

    def _all(self) -> Iterator[UserRecord]:
        users_dir = self.base_dir / "users"
        if not users_dir.exists():
            return
        for p in sorted(users_dir.glob("*/user.json")):
            yield self._load(p)

    @staticmethod
    def _load(p: Path) -> UserRecord:
        raw = json.loads(p.read_text(encoding="utf-8"))
        return UserRecord(
            id=raw["id"],
            username=raw["username"],
            password=raw["password"],
            fullname=raw.get("fullname", ""),
            created_at=raw["createdAt"],
        )

    def get(self, user_id: str) -> Optional[UserRecord]:
        try:
            p = self._user_path(user_id)
        except ValueError:
            return None
        if not p.exists():
            return None
        return self._load(p)

    def find_by_username(self, username: str) -> Optional[UserRecord]:
        for rec in self._all():
            if rec.username == username:
                return rec
        return None

    def count(self) -> int:
        return sum(1 for _ in self._all())

    def create(self, username: str, password_hash: str, fullname: str = "") -> UserRecord:
        rec = UserRecord(
            id=new_id(),
            username=username,
            password=password_hash,
            fullname=fullname,
            created_at=_utc_now_iso(),
        )
        with _write_lock:
            if self.find_by_username(username) is not None:
                raise DuplicateKeyError("username", username)
            _atomic_write_json(
                self._user_path(rec.id),
                {
                    "id": rec.id,
                    "username": rec.username,
                    "password": rec.password,
                    "fullname": rec.fullname,
                    "createdAt": rec.created_at,
                },
            )
        return rec
