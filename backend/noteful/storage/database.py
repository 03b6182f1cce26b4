from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from noteful import config
from noteful.storage.documents import FoldersStore, NotesStore, TagsStore
from noteful.storage.event_log import EventLog
from noteful.storage.users_store import UsersStore


@dataclass(frozen=True)
class Database:
    users: UsersStore
    notes: NotesStore
    folders: FoldersStore
    tags: TagsStore
    events: EventLog

    @classmethod
    def open(cls, base_dir: Path) -> "Database":
        return cls(
            users=UsersStore(base_dir),
            notes=NotesStore(base_dir),
            folders=FoldersStore(base_dir),
            tags=TagsStore(base_dir),
            events=EventLog(base_dir),
        )


def get_db() -> Database:
    """FastAPI dependency; resolves APP_DATA_DIR on every request."""
    return Database.open(config.data_dir())
