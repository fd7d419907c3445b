from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from app.core.timestamps import UTCDateTime

class UserInput(BaseModel):
    name: str
    email: str

class User(UserInput):
    """User model returned to client"""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    created_at: UTCDateTime = Field(alias="createdAt")
    updated_at: Optional[UTCDateTime] = Field(default=None, alias="updatedAt")
