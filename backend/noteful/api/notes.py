from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response

from noteful.models.notes import NoteIn, NoteOut
from noteful.services import notes as service
from noteful.storage.database import Database, get_db
from noteful.utils.jwt_auth import get_current_user

router = APIRouter(prefix="/notes", tags=["notes"])


@router.post("", response_model=NoteOut, status_code=201)
async def create_note(
    payload: NoteIn,
    request: Request,
    response: Response,
    user_id: str = Depends(get_current_user),
    db: Database = Depends(get_db),
) -> NoteOut:
    note = await service.create_note(db, user_id, payload)
    response.headers["Location"] = f"{request.url.path}/{note.id}"
    return NoteOut(**note.to_dict())


@router.get("", response_model=list[NoteOut])
def list_notes(
    search_term: Optional[str] = Query(default=None, alias="searchTerm"),
    folder_id: Optional[str] = Query(default=None, alias="folderId"),
    tag_id: Optional[str] = Query(default=None, alias="tagId"),
    user_id: str = Depends(get_current_user),
    db: Database = Depends(get_db),
) -> list[NoteOut]:
    notes = service.list_notes(db, user_id, search_term=search_term, folder_id=folder_id, tag_id=tag_id)
    return [NoteOut(**n.to_dict()) for n in notes]


@router.get("/{note_id}", response_model=NoteOut)
def get_note(note_id: str, user_id: str = Depends(get_current_user), db: Database = Depends(get_db)) -> NoteOut:
    note = service.get_note(db, user_id, note_id)
    return NoteOut(**note.to_dict())


@router.put("/{note_id}", response_model=NoteOut)
async def update_note(
    note_id: str,
    payload: NoteIn,
    user_id: str = Depends(get_current_user),
    db: Database = Depends(get_db),
) -> NoteOut:
    note = await service.update_note(db, user_id, note_id, payload)
    return NoteOut(**note.to_dict())


@router.delete("/{note_id}", status_code=204)
async def delete_note(note_id: str, user_id: str = Depends(get_current_user), db: Database = Depends(get_db)) -> None:
    await service.delete_note(db, user_id, note_id)
    return None
