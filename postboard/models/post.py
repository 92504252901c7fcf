# postboard/models/post.py
from sqlmodel import SQLModel, Field, Column
from typing import Optional
import uuid
from datetime import datetime, timezone
from sqlalchemy import DateTime, Text

NAME_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000


def utcnow() -> datetime:
    # naive UTC, matching what the timestamp columns hand back
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Post(SQLModel, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(max_length=NAME_MAX_LENGTH, index=True, nullable=False)
    description: str = Field(max_length=DESCRIPTION_MAX_LENGTH, nullable=False)
    image: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))  # url or data: uri, stored as sent
    # plain timestamp columns; sqlmodel's default datetime type insists on tz-aware values
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime(timezone=False), nullable=False))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime(timezone=False), nullable=False))
