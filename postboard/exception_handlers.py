# postboard/exception_handlers.py
from typing import Dict

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


def _field_name(loc) -> str:
    # ("body", "name") -> "name", ("path", "post_id") -> "post_id", ("body", 7) -> "body"
    named = [part for part in loc[1:] if isinstance(part, str)]
    return named[-1] if named else str(loc[0])


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    body = exc.detail if isinstance(exc.detail, dict) else {"message": exc.detail}
    return JSONResponse(body, status_code=exc.status_code, headers=getattr(exc, "headers", None))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: Dict[str, str] = {}
    for err in exc.errors():
        errors.setdefault(_field_name(err.get("loc", ("body",))), err.get("msg", "Invalid value"))
    logger.info("request_validation_failed", fields=sorted(errors))
    return JSONResponse({"message": "Validation failed", "errors": errors}, status_code=400)


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("database_error", error=str(exc))
    return JSONResponse({"message": INTERNAL_ERROR_MESSAGE}, status_code=500)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", error=str(exc))
    return JSONResponse({"message": INTERNAL_ERROR_MESSAGE}, status_code=500)


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
