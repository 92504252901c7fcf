# postboard/schemas/post_schema.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional
import uuid
from datetime import datetime


class PostCreate(BaseModel):
    # lengths and emptiness are checked by the service, not here
    name: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None


class PostUpdate(PostCreate):
    pass


class PostRead(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: uuid.UUID
    name: str
    description: str
    image: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ErrorBody(BaseModel):
    message: str
    errors: Optional[dict] = None
