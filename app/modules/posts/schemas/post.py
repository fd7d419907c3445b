from typing import Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field

from app.core.timestamps import UTCDateTime

class PostBase(BaseModel):
    title: str
    content: str

class PostInput(PostBase):
    user_id: UUID

class Post(PostBase):
    """Post model returned to client"""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    user_id: str
    created_at: UTCDateTime = Field(alias="createdAt")
    updated_at: Optional[UTCDateTime] = Field(default=None, alias="updatedAt")
