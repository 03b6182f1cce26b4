"""Folder deletion with note detach.

Two steps, not a transaction: the folder is removed first, then every note of
the same owner pointing at it gets `folderId` cleared. A failure between the
steps leaves dangling references, which note reads resolve to no folder.
"""
from __future__ import annotations

import logging

from noteful.errors import NotFoundError
from noteful.services.notes import require_id
from noteful.storage.database import Database
from noteful.storage.event_log import Event

log = logging.getLogger("noteful.folders")


def delete_folder(db: Database, user_id: str, folder_id: str) -> int:
    """Delete the folder and return how many notes were detached from it."""
    require_id(folder_id)
    if not db.folders.delete(user_id, folder_id):
        raise NotFoundError()

    detached = db.notes.update_many(
        user_id,
        lambda note: note.folder_id == folder_id,
        lambda note: {"folderId": None},
    )
    db.events.emit(Event(
        event_type="FOLDER_DELETED",
        user_id=user_id,
        target_id=folder_id,
        meta={"detached_notes": detached},
    ))
    log.info("folder deleted user_id=%s folder_id=%s detached_notes=%s", user_id, folder_id, detached)
    return detached
