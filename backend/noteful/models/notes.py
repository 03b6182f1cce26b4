from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class NoteIn(BaseModel):
    """Create/update payload.

    Fields are left untyped and checked by the note service, so that a
    missing title or a malformed id is a 400 rather than a schema error.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: Any = None
    content: Any = None
    folder_id: Any = Field(default=None, alias="folderId")
    tags: Any = Field(default_factory=list)


class NoteOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    content: str
    folder_id: Optional[str] = Field(default=None, alias="folderId")
    tags: list[str]
    user_id: str = Field(alias="userId")
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")
