from __future__ import annotations

from fastapi import APIRouter, Depends

from noteful.errors import AuthenticationError, ValidationError
from noteful.models.auth import LoginRequest, TokenResponse
from noteful.storage.database import Database, get_db
from noteful.storage.users_store import UserRecord
from noteful.utils.auth_hash import verify_password
from noteful.utils.jwt_auth import create_access_token, get_current_user

router = APIRouter(prefix="/auth", tags=["auth"])


def _issue(user: UserRecord) -> TokenResponse:
    return TokenResponse(authToken=create_access_token(subject=user.id, claims={"user": user.to_public()}))


@router.post("/login", response_model=TokenResponse)
def login(req: LoginRequest, db: Database = Depends(get_db)) -> TokenResponse:
    if not req.username or not req.password:
        raise ValidationError("Missing `username` or `password` in request body")

    rec = db.users.find_by_username(req.username)
    # same answer for unknown user and wrong password
    if rec is None or not verify_password(req.password, rec.password):
        raise AuthenticationError("Invalid credentials")
    return _issue(rec)


@router.post("/refresh", response_model=TokenResponse)
def refresh(user_id: str = Depends(get_current_user), db: Database = Depends(get_db)) -> TokenResponse:
    rec = db.users.get(user_id)
    if rec is None:
        raise AuthenticationError("Invalid token")
    return _issue(rec)
