"""Note validation and write workflow.

Writes go through three stages, in order:

1. payload checks (title, id formats) that never touch the store;
2. ownership checks of the referenced folder and tags, started together and
   joined before anything is written;
3. the single-document create/update.

When both ownership checks fail the folder failure is the one reported.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import Iterable, Optional

from fastapi.concurrency import run_in_threadpool

from noteful.errors import AuthorizationError, NotFoundError, ValidationError
from noteful.models.notes import NoteIn
from noteful.storage.database import Database
from noteful.storage.documents import Note
from noteful.storage.event_log import Event
from noteful.utils.ids import is_valid_id

log = logging.getLogger("noteful.notes")

FOLDER_NOT_OWNED = "The specified Folder does not belong to the current user"
TAGS_NOT_OWNED = "One or more tag IDs do not belong to the current user"


def require_id(value: Optional[str], field: str = "id") -> str:
    if not is_valid_id(value):
        raise ValidationError(f"The `{field}` is not valid")
    return value


def validate_payload(payload: NoteIn) -> tuple[Optional[str], list[str]]:
    """Check the payload shape; return the normalized folder id and tag ids.

    An empty `folderId` means "no folder".
    """
    if not payload.title:
        raise ValidationError("Missing `title` in request body")
    if not isinstance(payload.title, str):
        raise ValidationError("The `title` must be a string")
    if payload.content is not None and not isinstance(payload.content, str):
        raise ValidationError("The `content` must be a string")
    folder_id = payload.folder_id or None
    if folder_id is not None and not is_valid_id(folder_id):
        raise ValidationError("The `folderId` is not valid")
    tags = payload.tags if payload.tags is not None else []
    if not isinstance(tags, list):
        raise ValidationError("The `tags` must be an array")
    if any(not is_valid_id(tag_id) for tag_id in tags):
        raise ValidationError("The tags `id` is not valid")
    return folder_id, list(tags)


async def _folder_owned(db: Database, user_id: str, folder_id: Optional[str]) -> bool:
    if folder_id is None:
        return True
    return await run_in_threadpool(db.folders.count, user_id, folder_id) > 0


async def _tags_owned(db: Database, user_id: str, tag_ids: Iterable[str]) -> bool:
    counts = await asyncio.gather(
        *(run_in_threadpool(db.tags.count, user_id, tag_id) for tag_id in dict.fromkeys(tag_ids))
    )
    return all(counts)


async def check_references(db: Database, user_id: str, folder_id: Optional[str], tag_ids: list[str]) -> None:
    folder_ok, tags_ok = await asyncio.gather(
        _folder_owned(db, user_id, folder_id),
        _tags_owned(db, user_id, tag_ids),
    )
    if not folder_ok:
        log.warning("rejected foreign folder user_id=%s folder_id=%s", user_id, folder_id)
        raise AuthorizationError(FOLDER_NOT_OWNED)
    if not tags_ok:
        log.warning("rejected foreign tags user_id=%s tags=%s", user_id, tag_ids)
        raise AuthorizationError(TAGS_NOT_OWNED)


async def create_note(db: Database, user_id: str, payload: NoteIn) -> Note:
    folder_id, tags = validate_payload(payload)
    await check_references(db, user_id, folder_id, tags)

    note = await run_in_threadpool(
        db.notes.create,
        user_id,
        {"title": payload.title, "content": payload.content or "", "folderId": folder_id, "tags": tags},
    )
    await run_in_threadpool(db.events.emit, Event(event_type="NOTE_CREATED", user_id=user_id, target_id=note.id))
    log.info("note created user_id=%s note_id=%s", user_id, note.id)
    return note


async def update_note(db: Database, user_id: str, note_id: str, payload: NoteIn) -> Note:
    require_id(note_id)
    folder_id, tags = validate_payload(payload)
    await check_references(db, user_id, folder_id, tags)

    # title is always part of the payload; the rest only when sent
    supplied = payload.model_fields_set
    patch: dict = {"title": payload.title}
    if "content" in supplied:
        patch["content"] = payload.content or ""
    if "folder_id" in supplied:
        patch["folderId"] = folder_id
    if "tags" in supplied:
        patch["tags"] = tags

    note = await run_in_threadpool(db.notes.update, user_id, note_id, patch)
    if note is None:
        raise NotFoundError()
    await run_in_threadpool(
        db.events.emit,
        Event(event_type="NOTE_UPDATED", user_id=user_id, target_id=note.id, meta={"fields": sorted(patch)}),
    )
    log.info("note updated user_id=%s note_id=%s", user_id, note.id)
    return note


async def delete_note(db: Database, user_id: str, note_id: str) -> None:
    require_id(note_id)
    existed = await run_in_threadpool(db.notes.delete, user_id, note_id)
    if not existed:
        raise NotFoundError()
    await run_in_threadpool(db.events.emit, Event(event_type="NOTE_DELETED", user_id=user_id, target_id=note_id))
    log.info("note deleted user_id=%s note_id=%s", user_id, note_id)


def _resolve_folder(note: Note, live_folders: set[str]) -> Note:
    # a folder deleted without its detach step reads as "no folder"
    if note.folder_id is not None and note.folder_id not in live_folders:
        return replace(note, folder_id=None)
    return note


def get_note(db: Database, user_id: str, note_id: str) -> Note:
    require_id(note_id)
    note = db.notes.find(user_id, note_id)
    if note is None:
        raise NotFoundError()
    return _resolve_folder(note, db.folders.ids(user_id))


def list_notes(
    db: Database,
    user_id: str,
    search_term: Optional[str] = None,
    folder_id: Optional[str] = None,
    tag_id: Optional[str] = None,
) -> list[Note]:
    if folder_id:
        require_id(folder_id, "folderId")
    if tag_id:
        require_id(tag_id, "tagId")

    live_folders = db.folders.ids(user_id)
    needle = search_term.lower() if search_term else None

    def _matches(note: Note) -> bool:
        if needle and needle not in note.title.lower() and needle not in note.content.lower():
            return False
        if folder_id and note.folder_id != folder_id:
            return False
        if tag_id and tag_id not in note.tags:
            return False
        return True

    notes = [_resolve_folder(n, live_folders) for n in db.notes.list(user_id)]
    notes = [n for n in notes if _matches(n)]
    notes.sort(key=lambda n: n.updated_at, reverse=True)
    return notes
