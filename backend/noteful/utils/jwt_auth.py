from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from noteful import config
from noteful.errors import AuthenticationError

bearer = HTTPBearer(auto_error=False)


def create_access_token(subject: str, claims: Optional[dict[str, Any]] = None) -> str:
    now = datetime.now(timezone.utc)
    exp = now + timedelta(minutes=config.jwt_exp_minutes())
    payload: dict[str, Any] = dict(claims or {})
    payload.update({"sub": subject, "iat": int(now.timestamp()), "exp": int(exp.timestamp())})
    return jwt.encode(payload, config.jwt_secret(), algorithm=config.jwt_algorithm())


def decode_token(token: str) -> dict:
    return jwt.decode(token, config.jwt_secret(), algorithms=[config.jwt_algorithm()])


def get_current_user(creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer)) -> str:
    """Resolve the caller's user id from `Authorization: Bearer <token>`."""
    if creds is None or creds.scheme.lower() != "bearer":
        raise AuthenticationError("Missing credentials")
    try:
        payload = decode_token(creds.credentials)
    except JWTError:
        raise AuthenticationError("Invalid or expired token")
    sub = payload.get("sub")
    if not sub:
        raise AuthenticationError("Invalid token")
    return str(sub)
