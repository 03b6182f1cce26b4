from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class NamedIn(BaseModel):
    # shared by folders and tags; emptiness checked in the router
    name: Optional[str] = None


class NamedOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    user_id: str = Field(alias="userId")
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")
