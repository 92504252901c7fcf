# postboard/infrastructure/posts_repo.py
from typing import Optional, List
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlmodel import select
from postboard.models.post import Post
import uuid


class PostsRepository:
    """
    Queries and writes for the post table over a per-request session.
    Rows are never held between calls; each method hits the database.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_newest_first(self) -> List[Post]:
        q = select(Post).order_by(Post.created_at.desc())
        res = await self.session.execute(q)
        return list(res.scalars().all())

    async def get_by_id(self, id: uuid.UUID) -> Optional[Post]:
        q = select(Post).where(Post.id == id)
        res = await self.session.execute(q)
        return res.scalar_one_or_none()

    async def save(self, post: Post) -> Post:
        """Insert or update, commit, and reload so server-side column values are visible."""
        self.session.add(post)
        await self.session.commit()
        await self.session.refresh(post)
        return post

    async def delete(self, post: Post) -> None:
        await self.session.delete(post)
        await self.session.commit()
