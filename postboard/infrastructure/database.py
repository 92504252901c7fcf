# postboard/infrastructure/database.py
from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy.ext.asyncio.engine import create_async_engine, AsyncEngine

from postboard.config import Settings

# registers the table on SQLModel.metadata
from postboard.models.post import Post  # noqa: F401

logger = structlog.get_logger(__name__)


def build_engine(settings: Settings) -> AsyncEngine:
    return create_async_engine(settings.database_url, echo=settings.sql_echo)


async def init_db(engine: AsyncEngine) -> None:
    try:
        async with engine.begin() as connection:
            await connection.run_sync(SQLModel.metadata.create_all)
    except Exception as e:
        logger.exception("db_init_failed", error=str(e))


@asynccontextmanager
async def get_session(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session
