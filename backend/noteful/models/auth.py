from typing import Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: Optional[str] = Field(default=None, max_length=256)
    password: Optional[str] = Field(default=None, max_length=256)


class TokenResponse(BaseModel):
    authToken: str
