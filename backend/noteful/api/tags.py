from fastapi import APIRouter, Depends, Request, Response

from noteful.errors import ConflictError, NotFoundError, ValidationError
from noteful.models.folders import NamedIn, NamedOut
from noteful.services.notes import require_id
from noteful.services.tags import delete_tag as delete_tag_and_detach
from noteful.storage.database import Database, get_db
from noteful.storage.documents import DuplicateKeyError
from noteful.storage.event_log import Event
from noteful.utils.jwt_auth import get_current_user

router = APIRouter(prefix="/tags", tags=["tags"])

DUPLICATE_NAME = "Tag name already exists"


@router.get("", response_model=list[NamedOut])
def list_tags(user_id: str = Depends(get_current_user), db: Database = Depends(get_db)) -> list[NamedOut]:
    tags = sorted(db.tags.list(user_id), key=lambda t: t.name)
    return [NamedOut(**t.to_dict()) for t in tags]


@router.get("/{tag_id}", response_model=NamedOut)
def get_tag(tag_id: str, user_id: str = Depends(get_current_user), db: Database = Depends(get_db)) -> NamedOut:
    tag = db.tags.find(user_id, require_id(tag_id))
    if tag is None:
        raise NotFoundError()
    return NamedOut(**tag.to_dict())


@router.post("", response_model=NamedOut, status_code=201)
def create_tag(
    payload: NamedIn,
    request: Request,
    response: Response,
    user_id: str = Depends(get_current_user),
    db: Database = Depends(get_db),
) -> NamedOut:
    if not payload.name:
        raise ValidationError("Missing `name` in request body")
    try:
        tag = db.tags.create(user_id, {"name": payload.name})
    except DuplicateKeyError:
        raise ConflictError(DUPLICATE_NAME) from None

    db.events.emit(Event(event_type="TAG_CREATED", user_id=user_id, target_id=tag.id))
    response.headers["Location"] = f"{request.url.path}/{tag.id}"
    return NamedOut(**tag.to_dict())


@router.put("/{tag_id}", response_model=NamedOut)
def rename_tag(
    tag_id: str,
    payload: NamedIn,
    user_id: str = Depends(get_current_user),
    db: Database = Depends(get_db),
) -> NamedOut:
    require_id(tag_id)
    if not payload.name:
        raise ValidationError("Missing `name` in request body")
    try:
        tag = db.tags.update(user_id, tag_id, {"name": payload.name})
    except DuplicateKeyError:
        raise ConflictError(DUPLICATE_NAME) from None
    if tag is None:
        raise NotFoundError()

    db.events.emit(Event(event_type="TAG_RENAMED", user_id=user_id, target_id=tag.id, meta={"name": payload.name}))
    return NamedOut(**tag.to_dict())


@router.delete("/{tag_id}", status_code=204)
def delete_tag(tag_id: str, user_id: str = Depends(get_current_user), db: Database = Depends(get_db)) -> None:
    delete_tag_and_detach(db, user_id, tag_id)
    return None
