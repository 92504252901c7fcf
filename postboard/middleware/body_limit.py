# postboard/middleware/body_limit.py
from fastapi import HTTPException
from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send
import structlog

logger = structlog.get_logger("http")

TOO_LARGE_MESSAGE = "Request body too large"


class BodySizeLimitMiddleware:
    """
    Rejects request bodies above `max_body_size` bytes with 413.
    A declared Content-Length is checked up front; streamed bodies are counted
    as they arrive and cut off once they pass the limit.
    """

    def __init__(self, app: ASGIApp, max_body_size: int):
        self.app = app
        self.max_body_size = max_body_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        declared = Headers(scope=scope).get("content-length")
        if declared and declared.isdigit() and int(declared) > self.max_body_size:
            logger.warning("request_body_rejected", content_length=int(declared), limit=self.max_body_size)
            response = JSONResponse({"message": TOO_LARGE_MESSAGE}, status_code=413)
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_size:
                    logger.warning("request_body_rejected", received=received, limit=self.max_body_size)
                    # raised while the route reads its body, rendered by the HTTPException handler
                    raise HTTPException(status_code=413, detail=TOO_LARGE_MESSAGE)
            return message

        await self.app(scope, limited_receive, send)
