# main.py
import logging
from typing import Optional

import uvicorn
import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from postboard.config import Settings
from postboard.exception_handlers import install_exception_handlers
from postboard.infrastructure.database import build_engine, init_db
from postboard.middleware.body_limit import BodySizeLimitMiddleware
from postboard.middleware.logging import RequestIdMiddleware
from postboard.routers.post_router import router as post_router


def configure_structlog(level: str = "INFO"):
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        context_class=dict,
    )


logger = structlog.get_logger()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_structlog(settings.log_level)

    app = FastAPI(title="Postboard")
    app.state.settings = settings
    app.state.engine = build_engine(settings)

    app.add_middleware(BodySizeLimitMiddleware, max_body_size=settings.max_request_body_bytes)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIdMiddleware)

    install_exception_handlers(app)
    app.include_router(post_router, prefix=settings.api_prefix)

    @app.on_event("startup")
    async def on_startup():
        await init_db(app.state.engine)
        logger.info("app_startup", port=settings.port, api_prefix=settings.api_prefix)

    @app.on_event("shutdown")
    async def on_shutdown():
        await app.state.engine.dispose()
        logger.info("app_shutdown")

    return app


def run() -> None:
    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
