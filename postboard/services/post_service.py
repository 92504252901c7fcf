# postboard/services/post_service.py
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union
import uuid

import structlog
from sqlmodel.ext.asyncio.session import AsyncSession

from postboard.images import classify_image
from postboard.infrastructure.posts_repo import PostsRepository
from postboard.models.post import Post, utcnow
from postboard.schemas.post_schema import PostCreate, PostRead, PostUpdate
from postboard.validation import DEFAULT_MAX_IMAGE_LENGTH, validate_post_fields

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class NotFound:
    post_id: uuid.UUID


@dataclass(frozen=True)
class ValidationFailed:
    errors: Dict[str, str] = field(default_factory=dict)


def _image_or_none(image: Optional[str]) -> Optional[str]:
    # kept exactly as sent; only blank values collapse to "no image"
    return image if classify_image(image) else None


class PostService:
    """
    CRUD over posts. Expected outcomes (missing post, bad input) come back as
    `NotFound` / `ValidationFailed` values; only infrastructure failures raise.
    """

    def __init__(self, session: AsyncSession, max_image_length: int = DEFAULT_MAX_IMAGE_LENGTH):
        self.repo = PostsRepository(session)
        self.max_image_length = max_image_length

    def _validate(self, payload: PostCreate) -> Optional[ValidationFailed]:
        errors = validate_post_fields(payload.name, payload.description, payload.image, self.max_image_length)
        if errors:
            logger.info("post_validation_failed", fields=sorted(errors))
            return ValidationFailed(errors=errors)
        return None

    async def list_all(self) -> List[PostRead]:
        posts = await self.repo.list_newest_first()
        return [PostRead.model_validate(p) for p in posts]

    async def get_by_id(self, post_id: uuid.UUID) -> Union[PostRead, NotFound]:
        post = await self.repo.get_by_id(post_id)
        if not post:
            return NotFound(post_id)
        return PostRead.model_validate(post)

    async def create(self, payload: PostCreate) -> Union[PostRead, ValidationFailed]:
        failed = self._validate(payload)
        if failed:
            return failed

        now = utcnow()
        post = Post(
            name=payload.name,
            description=payload.description,
            image=_image_or_none(payload.image),
            created_at=now,
            updated_at=now,
        )
        created = await self.repo.save(post)
        image = classify_image(created.image)
        logger.info("post_created", post_id=str(created.id), image_kind=image.kind if image else None)
        return PostRead.model_validate(created)

    async def update(self, post_id: uuid.UUID, payload: PostUpdate) -> Union[PostRead, ValidationFailed, NotFound]:
        failed = self._validate(payload)
        if failed:
            return failed

        post = await self.repo.get_by_id(post_id)
        if not post:
            logger.info("post_update_missing", post_id=str(post_id))
            return NotFound(post_id)

        post.name = payload.name
        post.description = payload.description
        post.image = _image_or_none(payload.image)
        # never step backwards, even if the clock does
        post.updated_at = max(utcnow(), post.updated_at)
        saved = await self.repo.save(post)
        logger.info("post_updated", post_id=str(saved.id))
        return PostRead.model_validate(saved)

    async def delete(self, post_id: uuid.UUID) -> bool:
        post = await self.repo.get_by_id(post_id)
        if not post:
            logger.info("post_delete_missing", post_id=str(post_id))
            return False
        await self.repo.delete(post)
        logger.info("post_deleted", post_id=str(post_id))
        return True
