"""Per-owner JSON document collections.

Every record lives in its own file under `users/<ownerId>/<collection>/<id>.json`,
so every read and write is implicitly scoped to the owner. Single-document
writes are atomic (temp file + rename); there is no cross-document transaction.
"""
from __future__ import annotations

import json
import logging
import os
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, ClassVar, Generic, Iterator, Optional, TypeVar

from noteful.utils.ids import is_valid_id, new_id

log = logging.getLogger("noteful.storage")

# uniqueness checks scan the collection before writing; one writer at a time
_write_lock = threading.RLock()


class DuplicateKeyError(Exception):
    def __init__(self, field: str, value: Any):
        super().__init__(f"Duplicate value for {field!r}")
        self.field = field
        self.value = value


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _safe_user_dir(base_dir: Path, user_id: str) -> Path:
    # avoid path traversal through the owner id
    if not user_id or any(ch in user_id for ch in ["/", "\\"]) or ".." in user_id:
        raise ValueError("Invalid user_id")
    return base_dir / "users" / user_id


def _atomic_write_json(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
        f.flush()
        os.fsync(f.fileno())
    tmp_path.replace(path)


def _read_json(path: Path) -> dict[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))


@dataclass(frozen=True)
class NamedRecord:
    id: str
    user_id: str
    name: str
    created_at: str
    updated_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "userId": self.user_id,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]):
        return cls(
            id=raw["id"],
            user_id=raw["userId"],
            name=raw["name"],
            created_at=raw["createdAt"],
            updated_at=raw["updatedAt"],
        )


@dataclass(frozen=True)
class Folder(NamedRecord):
    pass


@dataclass(frozen=True)
class Tag(NamedRecord):
    pass


@dataclass(frozen=True)
class Note:
    id: str
    user_id: str
    title: str
    content: str
    folder_id: Optional[str]
    tags: tuple[str, ...]
    created_at: str
    updated_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "folderId": self.folder_id,
            "tags": list(self.tags),
            "userId": self.user_id,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Note":
        return cls(
            id=raw["id"],
            user_id=raw["userId"],
            title=raw["title"],
            content=raw.get("content") or "",
            folder_id=raw.get("folderId"),
            tags=tuple(raw.get("tags") or ()),
            created_at=raw["createdAt"],
            updated_at=raw["updatedAt"],
        )


R = TypeVar("R")


class OwnedStore(Generic[R]):
    """A collection of records owned by users.

    Patches passed to `update` and `update_many` use the stored (camelCase)
    keys, e.g. `{"folderId": None}`.
    """

    collection: ClassVar[str]
    record_type: ClassVar[type]
    unique_field: ClassVar[Optional[str]] = None

    def __init__(self, base_dir: Path):
        self.base_dir = base_dir

    def _dir(self, owner_id: str) -> Path:
        return _safe_user_dir(self.base_dir, owner_id) / self.collection

    def _path(self, owner_id: str, doc_id: str) -> Path:
        if not is_valid_id(doc_id):
            raise ValueError("Invalid document id")
        return self._dir(owner_id) / f"{doc_id}.json"

    def _raw_docs(self, owner_id: str) -> Iterator[dict[str, Any]]:
        d = self._dir(owner_id)
        if not d.exists():
            return
        for p in sorted(d.glob("*.json")):
            try:
                yield _read_json(p)
            except (OSError, json.JSONDecodeError) as exc:
                log.warning("skipping unreadable document path=%s error=%s", p, exc)

    def _check_unique(self, owner_id: str, raw: dict[str, Any]) -> None:
        field = self.unique_field
        if field is None:
            return
        for other in self._raw_docs(owner_id):
            if other.get("id") != raw["id"] and other.get(field) == raw.get(field):
                raise DuplicateKeyError(field, raw.get(field))

    def find(self, owner_id: str, doc_id: str) -> Optional[R]:
        path = self._path(owner_id, doc_id)
        if not path.exists():
            return None
        return self.record_type.from_dict(_read_json(path))

    def count(self, owner_id: str, doc_id: str) -> int:
        return 1 if self._path(owner_id, doc_id).exists() else 0

    def list(self, owner_id: str, predicate: Optional[Callable[[R], bool]] = None) -> list[R]:
        out: list[R] = []
        for raw in self._raw_docs(owner_id):
            rec = self.record_type.from_dict(raw)
            if predicate is None or predicate(rec):
                out.append(rec)
        return out

    def ids(self, owner_id: str) -> set[str]:
        d = self._dir(owner_id)
        if not d.exists():
            return set()
        return {p.stem for p in d.glob("*.json")}

    def create(self, owner_id: str, fields: dict[str, Any]) -> R:
        now = _utc_now_iso()
        raw = dict(fields)
        raw.update({"id": new_id(), "userId": owner_id, "createdAt": now, "updatedAt": now})
        with _write_lock:
            self._check_unique(owner_id, raw)
            _atomic_write_json(self._path(owner_id, raw["id"]), raw)
        return self.record_type.from_dict(raw)

    def update(self, owner_id: str, doc_id: str, patch: dict[str, Any]) -> Optional[R]:
        path = self._path(owner_id, doc_id)
        with _write_lock:
            if not path.exists():
                return None
            raw = _read_json(path)
            raw.update(patch)
            raw["updatedAt"] = _utc_now_iso()
            self._check_unique(owner_id, raw)
            _atomic_write_json(path, raw)
        return self.record_type.from_dict(raw)

    def delete(self, owner_id: str, doc_id: str) -> bool:
        path = self._path(owner_id, doc_id)
        with _write_lock:
            try:
                path.unlink()
            except FileNotFoundError:
                return False
        return True

    def update_many(
        self,
        owner_id: str,
        predicate: Callable[[R], bool],
        patch_fn: Callable[[R], dict[str, Any]],
    ) -> int:
        changed = 0
        with _write_lock:
            for raw in list(self._raw_docs(owner_id)):
                rec = self.record_type.from_dict(raw)
                if not predicate(rec):
                    continue
                raw.update(patch_fn(rec))
                raw["updatedAt"] = _utc_now_iso()
                _atomic_write_json(self._path(owner_id, raw["id"]), raw)
                changed += 1
        return changed


class NotesStore(OwnedStore[Note]):
    collection = "notes"
    record_type = Note


class FoldersStore(OwnedStore[Folder]):
    collection = "folders"
    record_type = Folder
    unique_field = "name"


class TagsStore(OwnedStore[Tag]):
    collection = "tags"
    record_type = Tag
    unique_field = "name"
