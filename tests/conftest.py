import httpx
import pytest

from postboard.client.api_client import PostsApiClient
from postboard.config import Settings
from postboard.infrastructure.database import get_session, init_db
from postboard.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'posts.db'}",
        max_request_body_bytes=1024 * 1024,
        log_level="WARNING",
    )


@pytest.fixture
async def app(settings):
    app = create_app(settings)
    await init_db(app.state.engine)
    yield app
    await app.state.engine.dispose()


@pytest.fixture
async def client(app):
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture
async def session(app):
    async with get_session(app.state.engine) as s:
        yield s


@pytest.fixture
def api(app):
    return PostsApiClient(base_url="http://test", transport=httpx.ASGITransport(app=app))
