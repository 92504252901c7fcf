# postboard/client/api_client.py
import uuid
from typing import Dict, List, Optional, Union

import httpx
import structlog

from postboard.images import classify_image
from postboard.schemas.post_schema import PostRead

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT = 60  # large embedded images take a while to upload


class PostsApiError(Exception):
    def __init__(self, status_code: int, message: str, errors: Optional[Dict[str, str]] = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.errors = errors or {}

    @property
    def not_found(self) -> bool:
        return self.status_code == 404


class PostsApiClient:
    """
    Async client for the posts API. Every non-2xx response raises `PostsApiError`.
    Pass `transport` to talk to an in-process app or a mock.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5000",
        timeout: int = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def _request(self, method: str, path: str, json: Optional[dict] = None) -> httpx.Response:
        logger.debug("api_request", method=method, path=path)
        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self.transport) as client:
            try:
                r = await client.request(method, path, json=json)
            except httpx.HTTPError as e:
                logger.warning("api_request_failed", method=method, path=path, error=str(e))
                raise PostsApiError(0, "Could not reach the server") from e

        logger.debug("api_response", method=method, path=path, status_code=r.status_code)
        if r.status_code >= 400:
            raise self._error_from(r)
        return r

    @staticmethod
    def _error_from(r: httpx.Response) -> PostsApiError:
        try:
            body = r.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        message = body.get("message") or r.reason_phrase or "Request failed"
        logger.warning("api_error_response", status_code=r.status_code, message=message)
        return PostsApiError(r.status_code, message, body.get("errors"))

    async def list_posts(self) -> List[PostRead]:
        r = await self._request("GET", "/posts")
        return [PostRead.model_validate(item) for item in r.json()]

    async def get_post(self, post_id: Union[str, uuid.UUID]) -> PostRead:
        r = await self._request("GET", f"/posts/{post_id}")
        return PostRead.model_validate(r.json())

    async def create_post(self, payload: dict) -> PostRead:
        image = classify_image(payload.get("image"))
        logger.info("api_create_post", name=payload.get("name"), image_kind=image.kind if image else None)
        r = await self._request("POST", "/posts", json=payload)
        return PostRead.model_validate(r.json())

    async def update_post(self, post_id: Union[str, uuid.UUID], payload: dict) -> PostRead:
        r = await self._request("PUT", f"/posts/{post_id}", json=payload)
        return PostRead.model_validate(r.json())

    async def delete_post(self, post_id: Union[str, uuid.UUID]) -> None:
        await self._request("DELETE", f"/posts/{post_id}")
