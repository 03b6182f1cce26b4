from __future__ import annotations

import logging

from noteful.errors import NotFoundError
from noteful.services.notes import require_id
from noteful.storage.database import Database
from noteful.storage.event_log import Event

log = logging.getLogger("noteful.tags")


def delete_tag(db: Database, user_id: str, tag_id: str) -> int:
    """Delete the tag and pull its id out of every note of the owner."""
    require_id(tag_id)
    if not db.tags.delete(user_id, tag_id):
        raise NotFoundError()

    detached = db.notes.update_many(
        user_id,
        lambda note: tag_id in note.tags,
        lambda note: {"tags": [t for t in note.tags if t != tag_id]},
    )
    db.events.emit(Event(
        event_type="TAG_DELETED",
        user_id=user_id,
        target_id=tag_id,
        meta={"detached_notes": detached},
    ))
    log.info("tag deleted user_id=%s tag_id=%s detached_notes=%s", user_id, tag_id, detached)
    return detached
