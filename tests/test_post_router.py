import asyncio
import uuid
from datetime import datetime

import httpx

from postboard.config import Settings
from postboard.exception_handlers import INTERNAL_ERROR_MESSAGE
from postboard.infrastructure.database import init_db
from postboard.main import create_app
from postboard.models.post import utcnow


async def test_post_lifecycle(client):
    r = await client.post("/posts", json={"name": "Hello", "description": "World"})
    assert r.status_code == 201
    created = r.json()
    uuid.UUID(created["id"])
    assert created["createdAt"] == created["updatedAt"]
    assert created["image"] is None
    assert r.headers["location"].endswith(f"/posts/{created['id']}")

    r = await client.get(f"/posts/{created['id']}")
    assert r.status_code == 200
    assert r.json() == created

    await asyncio.sleep(0.01)
    r = await client.put(f"/posts/{created['id']}", json={"name": "Hello2", "description": "World"})
    assert r.status_code == 200
    updated = r.json()
    assert updated["name"] == "Hello2"
    assert updated["createdAt"] == created["createdAt"]
    assert updated["updatedAt"] != created["updatedAt"]

    r = await client.delete(f"/posts/{created['id']}")
    assert r.status_code == 204
    assert r.content == b""

    r = await client.get(f"/posts/{created['id']}")
    assert r.status_code == 404
    assert r.json() == {"message": f"Post with ID {created['id']} not found"}


async def test_list_posts(client):
    r = await client.get("/posts")
    assert r.status_code == 200
    assert r.json() == []

    await client.post("/posts", json={"name": "one", "description": "d"})
    await asyncio.sleep(0.002)
    await client.post("/posts", json={"name": "two", "description": "d"})

    r = await client.get("/posts")
    assert [p["name"] for p in r.json()] == ["two", "one"]
    assert set(r.json()[0]) == {"id", "name", "description", "image", "createdAt", "updatedAt"}


async def test_create_validation_failure(client):
    r = await client.post("/posts", json={"name": "", "description": "x" * 1001})
    assert r.status_code == 400
    body = r.json()
    assert body["message"] == "Validation failed"
    assert body["errors"] == {
        "name": "Name is required",
        "description": "Description cannot exceed 1000 characters",
    }
    assert (await client.get("/posts")).json() == []


async def test_create_ignores_client_supplied_id_and_timestamps(client):
    mine = str(uuid.uuid4())
    r = await client.post(
        "/posts",
        json={"id": mine, "name": "a", "description": "b", "createdAt": "2000-01-01T00:00:00"},
    )
    assert r.status_code == 201
    assert r.json()["id"] != mine
    assert not r.json()["createdAt"].startswith("2000")


async def test_malformed_requests_are_bad_requests(client):
    r = await client.post("/posts", json={"name": 5, "description": "b"})
    assert r.status_code == 400
    assert "name" in r.json()["errors"]

    r = await client.post("/posts", content=b"{not json", headers={"content-type": "application/json"})
    assert r.status_code == 400

    r = await client.get("/posts/not-a-uuid")
    assert r.status_code == 400
    assert "post_id" in r.json()["errors"]


async def test_missing_post_is_404_for_every_verb(client):
    missing = uuid.uuid4()
    assert (await client.get(f"/posts/{missing}")).status_code == 404
    assert (await client.put(f"/posts/{missing}", json={"name": "a", "description": "b"})).status_code == 404
    assert (await client.delete(f"/posts/{missing}")).status_code == 404
    assert (await client.get("/posts")).json() == []


async def test_update_validation_beats_not_found(client):
    r = await client.put(f"/posts/{uuid.uuid4()}", json={"name": "", "description": "b"})
    assert r.status_code == 400


async def test_oversized_body_is_rejected(client):
    image = "data:image/png;base64," + "A" * (2 * 1024 * 1024)
    r = await client.post("/posts", json={"name": "big", "description": "d", "image": image})
    assert r.status_code == 413
    assert r.json() == {"message": "Request body too large"}
    assert (await client.get("/posts")).json() == []


async def test_request_id_is_echoed(client):
    r = await client.get("/posts", headers={"X-Request-ID": "abc-123"})
    assert r.headers["x-request-id"] == "abc-123"

    r = await client.get("/posts")
    assert r.headers["x-request-id"]


async def test_api_prefix(tmp_path):
    app = create_app(Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'p.db'}", api_prefix="/api"))
    await init_db(app.state.engine)
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as c:
        assert (await c.get("/api/posts")).status_code == 200
        assert (await c.get("/posts")).status_code == 404
    await app.state.engine.dispose()


async def test_database_failure_is_a_generic_500(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'dir' / 'p.db'}"
    app = create_app(Settings(database_url=url))
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as c:
        r = await c.get("/posts")
    assert r.status_code == 500
    assert r.json() == {"message": INTERNAL_ERROR_MESSAGE}
    await app.state.engine.dispose()


async def test_timestamps_are_iso_8601(client):
    r = await client.post("/posts", json={"name": "a", "description": "b"})
    assert r.status_code == 201
    created_at = datetime.fromisoformat(r.json()["createdAt"])
    updated_at = datetime.fromisoformat(r.json()["updatedAt"])
    assert created_at == updated_at
    assert abs((utcnow() - created_at).total_seconds()) < 60


async def test_data_uri_image_round_trips_unchanged(client):
    image = "data:image/svg+xml;charset=utf-8;base64,PHN2Zz4="
    r = await client.post("/posts", json={"name": "svg", "description": "d", "image": image})
    assert r.status_code == 201
    assert r.json()["image"] == image
    assert (await client.get(f"/posts/{r.json()['id']}")).json()["image"] == image


async def test_streamed_oversized_body_is_cut_off(client):
    async def chunks():
        for _ in range(5):
            yield b"A" * (256 * 1024)

    r = await client.post("/posts", content=chunks(), headers={"content-type": "application/json"})
    assert "content-length" not in r.request.headers
    assert r.status_code == 413
    assert r.json() == {"message": "Request body too large"}
    assert (await client.get("/posts")).json() == []


async def test_database_failure_keeps_request_id(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'dir' / 'p.db'}"
    app = create_app(Settings(database_url=url))
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as c:
        r = await c.get("/posts", headers={"X-Request-ID": "req-500"})
    assert r.status_code == 500
    assert r.headers["x-request-id"] == "req-500"
    await app.state.engine.dispose()


def test_unknown_log_level_falls_back_to_info(tmp_path):
    settings = Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'p.db'}", log_level="verbose")
    assert settings.log_level == "INFO"
    app = create_app(settings)
    assert app.state.settings.log_level == "INFO"
