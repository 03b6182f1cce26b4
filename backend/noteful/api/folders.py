from fastapi import APIRouter, Depends, Request, Response

from noteful.errors import ConflictError, NotFoundError, ValidationError
from noteful.models.folders import NamedIn, NamedOut
from noteful.services.folders import delete_folder as delete_folder_and_detach
from noteful.services.notes import require_id
from noteful.storage.database import Database, get_db
from noteful.storage.documents import DuplicateKeyError
from noteful.storage.event_log import Event
from noteful.utils.jwt_auth import get_current_user

router = APIRouter(prefix="/folders", tags=["folders"])

DUPLICATE_NAME = "Folder name already exists"


def _require_name(payload: NamedIn) -> str:
    if not payload.name:
        raise ValidationError("Missing `name` in request body")
    return payload.name


@router.get("", response_model=list[NamedOut])
def list_folders(user_id: str = Depends(get_current_user), db: Database = Depends(get_db)) -> list[NamedOut]:
    folders = sorted(db.folders.list(user_id), key=lambda f: f.name)
    return [NamedOut(**f.to_dict()) for f in folders]


@router.get("/{folder_id}", response_model=NamedOut)
def get_folder(folder_id: str, user_id: str = Depends(get_current_user), db: Database = Depends(get_db)) -> NamedOut:
    folder = db.folders.find(user_id, require_id(folder_id))
    if folder is None:
        raise NotFoundError()
    return NamedOut(**folder.to_dict())


@router.post("", response_model=NamedOut, status_code=201)
def create_folder(
    payload: NamedIn,
    request: Request,
    response: Response,
    user_id: str = Depends(get_current_user),
    db: Database = Depends(get_db),
) -> NamedOut:
    name = _require_name(payload)
    try:
        folder = db.folders.create(user_id, {"name": name})
    except DuplicateKeyError:
        raise ConflictError(DUPLICATE_NAME) from None

    db.events.emit(Event(event_type="FOLDER_CREATED", user_id=user_id, target_id=folder.id))
    response.headers["Location"] = f"{request.url.path}/{folder.id}"
    return NamedOut(**folder.to_dict())


@router.put("/{folder_id}", response_model=NamedOut)
def rename_folder(
    folder_id: str,
    payload: NamedIn,
    user_id: str = Depends(get_current_user),
    db: Database = Depends(get_db),
) -> NamedOut:
    require_id(folder_id)
    name = _require_name(payload)
    try:
        folder = db.folders.update(user_id, folder_id, {"name": name})
    except DuplicateKeyError:
        raise ConflictError(DUPLICATE_NAME) from None
    if folder is None:
        raise NotFoundError()

    db.events.emit(Event(event_type="FOLDER_RENAMED", user_id=user_id, target_id=folder.id, meta={"name": name}))
    return NamedOut(**folder.to_dict())


@router.delete("/{folder_id}", status_code=204)
def delete_folder(folder_id: str, user_id: str = Depends(get_current_user), db: Database = Depends(get_db)) -> None:
    delete_folder_and_detach(db, user_id, folder_id)
    return None
