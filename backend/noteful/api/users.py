from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response

from noteful.models.users import UserOut
from noteful.services.users import register_user
from noteful.storage.database import Database, get_db

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserOut, status_code=201)
def register(
    request: Request,
    response: Response,
    body: dict[str, Any] = Body(...),
    db: Database = Depends(get_db),
) -> UserOut:
    # raw body: field types are part of what registration validates
    user = register_user(db, body)
    response.headers["Location"] = f"{request.url.path}/{user.id}"
    return UserOut(**user.to_public())
